"""
JSON projection of catalog records and bulk course export.

Projection rules:
- camelCase keys, matching the explorer schema
- Null optional fields are omitted, not emitted as null or ""
- Navigation-only fields (href, section links) are omitted
- Computed fields (year, semester, department, number, title) are included
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from pydantic import BaseModel

from cisapi.models import Course, CourseSummary
from cisapi.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)


def to_dict(record: Union[BaseModel, Sequence[BaseModel]]) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
    """
    Project a record (or a list of records) into plain JSON-ready data.

    Example:
        >>> to_dict(course)['department']
        'CS'
        >>> 'href' in to_dict(course)
        False
    """
    if isinstance(record, BaseModel):
        return record.model_dump(mode='json', by_alias=True, exclude_none=True)
    return [to_dict(item) for item in record]


def to_json(record: Union[BaseModel, Sequence[BaseModel]], indent: Optional[int] = 2) -> str:
    """Serialize a record (or a list of records) to a JSON string."""
    return json.dumps(to_dict(record), ensure_ascii=False, indent=indent)


def summarize(courses: Iterable[Course]) -> List[CourseSummary]:
    """Reduce courses to year, semester, department, number and title."""
    return [CourseSummary.from_course(course) for course in courses]


class CatalogExporter:
    """
    Collects courses of a semester and writes them as JSON.

    Usage:
        exporter = CatalogExporter(CatalogService())
        courses = exporter.collect_courses(2020, "fall", departments=["CS"])
        exporter.export_courses(courses, "2020_fall_CS.json")
        exporter.export_courses(courses, "2020_fall_CS_summary.json", summary=True)
    """

    def __init__(self, catalog_service: CatalogService):
        """
        Args:
            catalog_service: Service used for every fetch
        """
        self._catalog = catalog_service

    def collect_courses(
        self,
        year: Union[str, int],
        semester: str,
        departments: Optional[List[str]] = None
    ) -> List[Course]:
        """
        Fetch every course of a semester, department by department.

        Args:
            year: Calendar year (e.g., 2020)
            semester: Season name (e.g., 'fall')
            departments: Subject codes to restrict to (default: all subjects)

        Returns:
            Courses in department order, then course order

        Raises:
            TransportError, ParseError: On the first failing fetch
        """
        if departments:
            department_records = [
                self._catalog.fetch_department(year, semester, code)
                for code in departments
            ]
        else:
            listing = self._catalog.fetch_semester(year, semester)
            department_records = self._catalog.departments(listing)

        courses: List[Course] = []
        for department in department_records:
            courses.extend(self._catalog.courses(department))

        logger.info(
            f"Collected {len(courses)} courses from {len(department_records)} "
            f"department(s) for {semester} {year}"
        )
        return courses

    def course_with_sections(self, course: Course) -> Dict[str, Any]:
        """Course projection with its fetched sections inlined under 'sections'."""
        data = to_dict(course)
        data['sections'] = to_dict(self._catalog.sections(course))
        return data

    def export_courses(
        self,
        courses: Sequence[Course],
        path: Union[str, Path],
        summary: bool = False,
        include_sections: bool = False
    ) -> Path:
        """
        Write courses to a pretty-printed JSON array.

        Args:
            courses: Courses to write, in output order
            path: Output file; parent directories are created
            summary: Write CourseSummary projections instead of full records
            include_sections: Fetch and inline each course's sections
                (ignored when summary=True)

        Returns:
            Path of the written file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        if summary:
            payload = to_dict(summarize(courses))
        elif include_sections:
            payload = [self.course_with_sections(course) for course in courses]
        else:
            payload = to_dict(courses)

        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding='utf-8'
        )

        logger.info(f"Wrote {len(payload)} record(s) to {path}")
        return path
