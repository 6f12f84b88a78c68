"""
Exception hierarchy for cisapi.

All errors propagate to the caller of the fetch that triggered them.
Nothing is retried and no partial records or lists are returned.
"""

from typing import Optional


class CisApiError(Exception):
    """Base class for all cisapi errors."""


class TransportError(CisApiError):
    """
    HTTP-level failure: non-2xx status, connection failure or timeout.

    Attributes:
        url: URL that was requested
        status_code: HTTP status code, None when no response was received
    """

    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ParseError(CisApiError):
    """
    Document does not satisfy the schema of the target record.

    Raised for malformed XML, missing required fields, values that cannot
    be coerced (e.g. a non-numeric year) and parent context mismatches.

    Attributes:
        model: Name of the record type being parsed
    """

    def __init__(self, message: str, model: Optional[str] = None):
        super().__init__(message)
        self.model = model


class LinkResolutionError(CisApiError):
    """
    Link cannot be turned into an absolute, fetchable URL.

    Attributes:
        link: The offending link as found in the document
    """

    def __init__(self, message: str, link: Optional[str] = None):
        super().__init__(message)
        self.link = link
