"""
Shared configuration for Course Explorer records.

Design:
- Immutable (frozen) once parsed
- Unknown elements and attributes ignored (the upstream schema grows over time)
- Python names are snake_case, XML/JSON names camelCase
- Element text of mixed elements maps to the INNER_TEXT pseudo-element
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# Pseudo-element name for the text of an element that also carries attributes,
# e.g. <term id="120208" href="...">Fall 2020</term>
INNER_TEXT = "innerText"


class CatalogModel(BaseModel):
    """Base class for every record parsed from an explorer document."""

    model_config = ConfigDict(
        frozen=True,
        extra='ignore',
        alias_generator=to_camel,
        populate_by_name=True,
    )


def inner_text(**kwargs):
    """Field whose value is the element's own text."""
    return Field(validation_alias=INNER_TEXT, **kwargs)


def write_only(*args, **kwargs):
    """Field read from documents but never serialized (navigation links)."""
    return Field(*args, exclude=True, **kwargs)
