"""
Unit tests for the generic XML -> record deserializer.

Key schema conventions exercised:
- Identity in attributes, details in child elements
- Element text of attribute-carrying elements maps to innerText
- Namespace prefixes are ignored
- Undeclared elements are ignored, missing required fields are not
"""

from typing import List, Optional

import pytest
from pydantic import Field

from cisapi.exceptions import ParseError
from cisapi.models import CalendarYear, Schedule, ScheduleYear, Term
from cisapi.models.base import CatalogModel, inner_text
from cisapi.parsers.xml_parser import (
    element_to_data,
    field_kind,
    parse_document,
    parse_xml,
)


class Tag(CatalogModel):
    code: str
    name: str = inner_text()


class Widget(CatalogModel):
    """Small record exercising every field kind."""

    id: int
    label: str
    display_name: Optional[str] = None
    tags: List[Tag] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)
    owner: Optional[Tag] = None


# ============================================================================
# FIELD MAPPING
# ============================================================================

class TestElementToData:
    """Test suite for element_to_data()."""

    def test_attributes_children_and_inner_text(self):
        root = parse_xml(
            '<widget id="7"><label>Gear</label><displayName>Big gear</displayName>'
            '<tags><tag code="A">Alpha</tag><tag code="B">Beta</tag></tags>'
            '<notes><note>one</note><note>two</note></notes>'
            '<owner code="X">Xavier</owner></widget>'
        )

        data = element_to_data(root, Widget)

        assert data == {
            'id': '7',
            'label': 'Gear',
            'displayName': 'Big gear',
            'tags': [{'code': 'A', 'innerText': 'Alpha'}, {'code': 'B', 'innerText': 'Beta'}],
            'notes': ['one', 'two'],
            'owner': {'code': 'X', 'innerText': 'Xavier'},
        }

    def test_absent_fields_are_left_out(self):
        root = parse_xml('<widget id="7"><label>Gear</label></widget>')

        assert element_to_data(root, Widget) == {'id': '7', 'label': 'Gear'}

    def test_empty_elements_count_as_absent(self):
        root = parse_xml('<widget id="7"><label>Gear</label><displayName>   </displayName></widget>')

        assert 'displayName' not in element_to_data(root, Widget)

    def test_field_kind_unwraps_optional(self):
        assert field_kind(Optional[str]) == ('scalar', str)
        assert field_kind(List[Tag]) == ('list', Tag)
        assert field_kind(Optional[Tag]) == ('model', Tag)


# ============================================================================
# PARSE_DOCUMENT
# ============================================================================

class TestParseDocument:
    """Test suite for parse_document()."""

    def test_unknown_elements_are_ignored(self):
        widget = parse_document(
            '<widget id="7" color="red"><label>Gear</label>'
            '<introducedIn>2031</introducedIn><tags><tag code="A">Alpha</tag></tags></widget>',
            Widget
        )

        assert widget.id == 7
        assert widget.tags[0].name == "Alpha"
        assert widget.display_name is None

    def test_namespace_prefixes_are_ignored(self):
        widget = parse_document(
            '<ns2:widget xmlns:ns2="http://rest.cis.illinois.edu" id="1">'
            '<label>Gear</label><ns2:tags><tag code="A">Alpha</tag></ns2:tags></ns2:widget>',
            Widget
        )

        assert [tag.code for tag in widget.tags] == ["A"]

    def test_accepts_bytes_with_encoding_declaration(self):
        document = '<?xml version="1.0" encoding="UTF-8"?><widget id="1"><label>Zürich</label></widget>'

        widget = parse_document(document.encode('utf-8'), Widget)

        assert widget.label == "Zürich"

    def test_accepts_str_with_encoding_declaration(self):
        document = '<?xml version="1.0" encoding="UTF-8"?><widget id="1"><label>Gear</label></widget>'

        assert parse_document(document, Widget).label == "Gear"

    def test_missing_required_field_raises(self):
        with pytest.raises(ParseError) as exc_info:
            parse_document('<widget id="7"></widget>', Widget)

        assert exc_info.value.model == "Widget"
        assert "label" in str(exc_info.value)

    def test_non_numeric_year_raises(self):
        with pytest.raises(ParseError):
            parse_document(
                '<calendarYear id="2020" href="https://x/2020.xml">twenty-twenty</calendarYear>',
                CalendarYear
            )

    def test_missing_inner_text_raises(self):
        with pytest.raises(ParseError):
            parse_document('<term id="120208" href="https://x/fall.xml"/>', Term)

    def test_malformed_xml_raises(self):
        with pytest.raises(ParseError):
            parse_document('<schedule><label>Schedule of Classes</schedule>', Schedule)

    def test_empty_document_raises(self):
        with pytest.raises(ParseError):
            parse_document('', ScheduleYear)

    def test_entities_are_not_expanded(self):
        document = (
            '<!DOCTYPE widget [<!ENTITY ext SYSTEM "file:///etc/passwd">]>'
            '<widget id="1"><label>&ext;</label></widget>'
        )

        try:
            widget = parse_document(document, Widget)
        except ParseError:
            return
        assert "root:" not in (widget.label or "")
