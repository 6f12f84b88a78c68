"""
cisapi: client for the University of Illinois Course Explorer XML API.

Main package exports for user-facing API.
"""

from cisapi.exceptions import CisApiError, TransportError, ParseError, LinkResolutionError
from cisapi.models import (
    Schedule,
    ScheduleYear,
    Semester,
    Department,
    Course,
    CourseSummary,
    Section,
)
from cisapi.parsers import parse_document, LinkResolver
from cisapi.services import HttpTransport, CatalogService
from cisapi.api import to_dict, to_json, CatalogExporter

__all__ = [
    'CisApiError',
    'TransportError',
    'ParseError',
    'LinkResolutionError',
    'Schedule',
    'ScheduleYear',
    'Semester',
    'Department',
    'Course',
    'CourseSummary',
    'Section',
    'parse_document',
    'LinkResolver',
    'HttpTransport',
    'CatalogService',
    'to_dict',
    'to_json',
    'CatalogExporter',
    'fetch_course',
]


def fetch_course(year, semester: str, department: str, number) -> Course:
    """
    Fetch one course with a default CatalogService.

    Convenience for one-off lookups; create a CatalogService to reuse one
    HTTP session across several fetches.

    Example:
        >>> from cisapi import fetch_course
        >>> fetch_course(2020, "fall", "CS", 100).title
        'Freshman Orientation'
    """
    with HttpTransport() as transport:
        return CatalogService(transport=transport).fetch_course(year, semester, department, number)
