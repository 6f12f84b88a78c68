"""
Term document: the subjects (departments) offering classes in one semester.
"""

from typing import List

from pydantic import Field

from cisapi.models.base import CatalogModel, inner_text, write_only
from cisapi.models.schedule import CalendarYear


class Subject(CatalogModel):
    """
    Subject entry of a semester listing.

    XML:
        <subject id="CS" href=".../schedule/2020/fall/CS.xml">Computer Science</subject>
    """

    id: str = Field(..., examples=["CS"])
    href: str = write_only(...)
    department: str = inner_text(examples=["Computer Science"])


class SemesterParents(CatalogModel):
    calendar_year: CalendarYear


class Semester(CatalogModel):
    """
    Subject listing for one semester (schedule/{year}/{semester}.xml).

    Example:
        >>> semester = parse_document(xml, Semester)
        >>> next(s for s in semester.subjects if s.id == 'CS').department
        'Computer Science'
    """

    id: str
    parents: SemesterParents
    label: str = Field(..., examples=["Fall 2020"])
    subjects: List[Subject] = Field(default_factory=list)
