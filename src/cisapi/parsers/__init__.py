"""
Parsing modules for Course Explorer documents.

- xml_parser: XML -> record deserialization driven by the record fields
- links: embedded link rewriting and canonical path templates
"""

from .xml_parser import parse_document, parse_xml, element_to_data
from .links import LinkResolver, catalog_path

__all__ = [
    'parse_document',
    'parse_xml',
    'element_to_data',
    'LinkResolver',
    'catalog_path',
]
