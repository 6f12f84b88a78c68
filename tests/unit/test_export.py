"""
Unit tests for the JSON projection and CatalogExporter.
"""

import json
import re
from unittest.mock import Mock

import pytest

from cisapi.api.export import CatalogExporter, summarize, to_dict, to_json
from cisapi.models import Course, CourseSummary, Department, Schedule, Section
from cisapi.parsers.xml_parser import parse_document
from cisapi.services.catalog_service import CatalogService

from tests.conftest import load


@pytest.fixture
def course():
    return parse_document(load("schedule_2020_fall_CS_100.xml"), Course)


@pytest.fixture
def section():
    return parse_document(load("schedule_2020_fall_CS_100_30094.xml"), Section)


def walk_keys(data):
    """Every key at any depth of a JSON-like structure."""
    if isinstance(data, dict):
        for key, value in data.items():
            yield key
            yield from walk_keys(value)
    elif isinstance(data, list):
        for item in data:
            yield from walk_keys(item)


def walk_values(data):
    if isinstance(data, dict):
        for value in data.values():
            yield from walk_values(value)
    elif isinstance(data, list):
        for item in data:
            yield from walk_values(item)
    else:
        yield data


class TestProjection:
    """Test suite for to_dict() / to_json()."""

    def test_course_never_emits_href_or_nulls(self, course):
        data = json.loads(to_json(course))

        assert 'href' not in set(walk_keys(data))
        assert None not in set(walk_values(data))
        assert "" not in set(walk_values(data))

    def test_course_omits_navigation_fields(self, course):
        data = to_dict(course)

        for key in ('id', 'label', 'sections'):
            assert key not in data

    def test_course_includes_computed_fields(self, course):
        data = to_dict(course)

        assert data['year'] == "2020"
        assert data['semester'] == "fall"
        assert data['department'] == "CS"
        assert data['number'] == "100"
        assert data['title'] == "Freshman Orientation"

    def test_keys_are_camel_case(self, course):
        data = to_dict(course)

        assert data['creditHours'] == "1 hours."
        assert data['parents']['calendarYear'] == {'id': 2020, 'year': 2020}
        assert data['parents']['term'] == {'id': "120208", 'semester': "Fall 2020"}
        assert data['genEdCategories'][0]['genEdAttributes'] == [{'code': "1WCC", 'name': "Western"}]

    def test_absent_optional_fields_are_omitted(self, course):
        data = to_dict(course)

        assert 'sectionFeeAmount' not in data
        assert 'courseCoRequisite' not in data

    def test_department_projection(self):
        department = parse_document(load("schedule_2020_fall_CS.xml"), Department)

        data = to_dict(department)

        assert data['webSiteURL'] == "http://cs.illinois.edu/"
        assert data['courses'][2] == {'id': "125", 'name': "Intro to Computer Science"}
        assert 'subjectComment' not in data

    def test_section_projection(self, section):
        data = to_dict(section)

        assert 'href' not in set(walk_keys(data))
        assert data['meetings'][0]['daysOfTheWeek'] == "W"
        assert data['meetings'][0]['instructors'][0] == {
            'lastName': "Challen", 'firstName': "G", 'name': "Challen, G"
        }

    def test_meeting_without_instructors_omits_the_key(self):
        """An absent <instructors> list stays absent in the output."""
        document = re.sub(
            r"<instructors>.*?</instructors>", "",
            load("schedule_2020_fall_CS_100_30094.xml"), flags=re.S
        )

        data = to_dict(parse_document(document, Section))

        assert 'instructors' not in data['meetings'][0]
        assert data['meetings'][0]['daysOfTheWeek'] == "W"

    def test_list_of_records(self):
        schedule = parse_document(load("schedule.xml"), Schedule)

        data = to_dict(schedule.calendar_years[:2])

        assert data == [{'id': 2004, 'year': 2004}, {'id': 2005, 'year': 2005}]

    def test_to_json_is_pretty_printed(self, course):
        assert to_json(course).startswith('{\n  "')


class TestSummary:
    def test_summarize(self, course):
        summaries = summarize([course])

        assert summaries == [CourseSummary.from_course(course)]
        assert to_dict(summaries) == [{
            'year': "2020",
            'semester': "fall",
            'department': "CS",
            'number': "100",
            'title': "Freshman Orientation",
        }]


class TestCatalogExporter:
    """CatalogExporter with a mocked CatalogService."""

    @pytest.fixture
    def catalog(self, course, section):
        department = parse_document(load("schedule_2020_fall_CS.xml"), Department)
        catalog = Mock(spec=CatalogService)
        catalog.fetch_department.return_value = department
        catalog.courses.return_value = [course]
        catalog.sections.return_value = [section]
        return catalog

    def test_collect_courses_for_departments(self, catalog, course):
        exporter = CatalogExporter(catalog)

        courses = exporter.collect_courses(2020, "fall", departments=["CS"])

        catalog.fetch_department.assert_called_once_with(2020, "fall", "CS")
        catalog.fetch_semester.assert_not_called()
        assert courses == [course]

    def test_collect_courses_for_whole_semester(self, catalog, course):
        department = catalog.fetch_department.return_value
        catalog.departments.return_value = [department, department]
        exporter = CatalogExporter(catalog)

        courses = exporter.collect_courses(2020, "fall")

        catalog.fetch_semester.assert_called_once_with(2020, "fall")
        assert courses == [course, course]

    def test_export_full_records(self, catalog, course, tmp_path):
        exporter = CatalogExporter(catalog)

        path = exporter.export_courses([course], tmp_path / "out" / "2020_fall_CS.json")

        data = json.loads(path.read_text(encoding='utf-8'))
        assert data[0]['title'] == "Freshman Orientation"
        assert 'href' not in set(walk_keys(data))

    def test_export_summary(self, catalog, course, tmp_path):
        exporter = CatalogExporter(catalog)

        path = exporter.export_courses([course], tmp_path / "summary.json", summary=True)

        data = json.loads(path.read_text(encoding='utf-8'))
        assert data == [{
            'year': "2020",
            'semester': "fall",
            'department': "CS",
            'number': "100",
            'title': "Freshman Orientation",
        }]

    def test_export_with_sections(self, catalog, course, tmp_path):
        exporter = CatalogExporter(catalog)

        path = exporter.export_courses([course], tmp_path / "full.json", include_sections=True)

        data = json.loads(path.read_text(encoding='utf-8'))
        catalog.sections.assert_called_once_with(course)
        assert data[0]['sections'][0]['sectionNumber'] == "AL1"
