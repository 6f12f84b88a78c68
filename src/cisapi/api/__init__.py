"""
User-facing export interfaces for cisapi.

Projects parsed records into JSON and writes bulk course exports.
"""

from cisapi.api.export import to_dict, to_json, summarize, CatalogExporter

__all__ = [
    'to_dict',
    'to_json',
    'summarize',
    'CatalogExporter',
]
