"""
Generic XML -> record deserializer for Course Explorer documents.

The record classes in cisapi.models are the mapping table: every declared
field names the XML attribute or child element it is read from, and its
annotation says whether the value is text, a nested record or a list.

Key schema conventions:
1. Identity lives in attributes (id, href); details live in child elements
2. Lists are wrapper elements (<terms>) holding repeated children (<term>)
3. Element text of attribute-carrying elements maps to INNER_TEXT
4. Namespace prefixes (ns2:) are irrelevant; only local names are matched
5. Anything a record does not declare is ignored
"""

import inspect
import logging
import sys
from typing import Any, Dict, Optional, Type, TypeVar, Union, get_args, get_origin

from lxml import etree
from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_camel
from pydantic.fields import FieldInfo

from cisapi.exceptions import ParseError
from cisapi.models.base import INNER_TEXT

if sys.version_info >= (3, 10):
    from types import UnionType
    _UNION_TYPES = (Union, UnionType)
else:
    _UNION_TYPES = (Union,)

logger = logging.getLogger(__name__)

M = TypeVar('M', bound=BaseModel)


def parse_document(document: Union[str, bytes], model: Type[M]) -> M:
    """
    Parse one explorer document into a record.

    Args:
        document: Raw XML body as returned by the transport
        model: Target record class (e.g. Course)

    Returns:
        Fully validated, immutable record

    Raises:
        ParseError: If the XML is malformed, a required field is missing or
            a value cannot be coerced to its declared type

    Example:
        >>> year = parse_document(xml, ScheduleYear)
        >>> [term.semester for term in year.terms]
        ['Spring 2020', 'Summer 2020', 'Fall 2020', 'Winter 2020']
    """
    root = parse_xml(document, model.__name__)
    data = element_to_data(root, model)

    try:
        record = model.model_validate(data)
    except ValidationError as e:
        raise ParseError(
            f"Document does not match {model.__name__}: {e}",
            model=model.__name__
        ) from e

    logger.debug(f"Parsed {model.__name__} from <{local_name(root)}>")
    return record


def parse_xml(document: Union[str, bytes], model_name: Optional[str] = None) -> etree._Element:
    """
    Parse raw XML into an lxml element.

    The explorer serves UTF-8. Strings are encoded before parsing since lxml
    rejects str input that carries an encoding declaration.

    Raises:
        ParseError: If the document is empty or not well-formed
    """
    if isinstance(document, str):
        document = document.encode('utf-8')

    if not document or not document.strip():
        raise ParseError("Empty document", model=model_name)

    parser = etree.XMLParser(
        encoding='utf-8',
        remove_comments=True,
        resolve_entities=False,
        no_network=True
    )
    try:
        return etree.fromstring(document, parser)
    except etree.XMLSyntaxError as e:
        raise ParseError(f"Malformed XML: {e}", model=model_name) from e


def element_to_data(elem: etree._Element, model: Type[BaseModel]) -> Dict[str, Any]:
    """
    Collect the values a record declares from one element.

    Lookup order per field: INNER_TEXT, attribute, first child element with
    the field's XML name. Absent values are left out so that pydantic
    applies defaults or reports the missing required field.

    Args:
        elem: Element holding the record
        model: Record class whose fields drive the lookup

    Returns:
        Dictionary keyed by XML name, ready for model_validate()
    """
    data: Dict[str, Any] = {}

    for name, field in model.model_fields.items():
        key = xml_name(name, field)

        if key == INNER_TEXT:
            value = clean_text(elem.text)
            if value is not None:
                data[key] = value
            continue

        if key in elem.attrib:
            data[key] = elem.attrib[key]
            continue

        child = find_child(elem, key)
        if child is None:
            continue

        kind, target = field_kind(field.annotation)

        if kind == 'list':
            items = [c for c in child if isinstance(c.tag, str)]
            if is_model(target):
                data[key] = [element_to_data(item, target) for item in items]
            else:
                data[key] = [text_content(item) for item in items]
        elif kind == 'model':
            data[key] = element_to_data(child, target)
        else:
            value = text_content(child)
            if value is not None:
                data[key] = value

    return data


def xml_name(name: str, field: FieldInfo) -> str:
    """XML name of a record field: explicit alias first, else camelCase."""
    if isinstance(field.validation_alias, str):
        return field.validation_alias
    if field.alias:
        return field.alias
    return to_camel(name)


def field_kind(annotation: Any):
    """
    Classify a field annotation.

    Returns:
        ('list', item_type), ('model', model_class) or ('scalar', annotation).
        Optional[...] is unwrapped first.
    """
    annotation = unwrap_optional(annotation)
    origin = get_origin(annotation)

    if origin is list:
        args = get_args(annotation)
        return 'list', (args[0] if args else str)
    if is_model(annotation):
        return 'model', annotation
    return 'scalar', annotation


def unwrap_optional(annotation: Any) -> Any:
    if get_origin(annotation) in _UNION_TYPES:
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def is_model(tp: Any) -> bool:
    return inspect.isclass(tp) and issubclass(tp, BaseModel)


def local_name(elem: etree._Element) -> str:
    """Tag without namespace: '{http://rest.cis.illinois.edu}term' -> 'term'."""
    return etree.QName(elem).localname


def find_child(elem: etree._Element, name: str) -> Optional[etree._Element]:
    for child in elem:
        if isinstance(child.tag, str) and local_name(child) == name:
            return child
    return None


def text_content(elem: etree._Element) -> Optional[str]:
    return clean_text(''.join(elem.itertext()))


def clean_text(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    text = text.strip()
    return text or None
