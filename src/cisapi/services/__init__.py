"""
Service layer for cisapi.

- HttpTransport: GET requests against the explorer (requests.Session)
- CatalogService: fetch + parse each level and walk parent -> children
"""

from cisapi.services.transport import HttpTransport
from cisapi.services.catalog_service import CatalogService

__all__ = [
    'HttpTransport',
    'CatalogService',
]
