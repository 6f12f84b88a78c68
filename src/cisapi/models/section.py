"""
Section document: enrollment status, dates and inline meetings.
"""

from typing import List, Optional

from pydantic import Field

from cisapi.models.base import CatalogModel, inner_text, write_only
from cisapi.models.department import CourseRef
from cisapi.models.schedule import CalendarYear, Term
from cisapi.models.semester import Subject


class Instructor(CatalogModel):
    """
    XML:
        <instructor lastName="Challen" firstName="G">Challen, G</instructor>
    """

    last_name: Optional[str] = None
    first_name: Optional[str] = None
    name: str = inner_text()


class Meeting(CatalogModel):
    """
    One recurring meeting of a section.

    `type` carries a code attribute in the source (<type code="LEC">Lecture</type>);
    only its text is kept.
    """

    id: str
    type: Optional[str] = Field(default=None, examples=["Lecture"])
    start: Optional[str] = Field(default=None, examples=["04:00 PM"])
    end: Optional[str] = None
    days_of_the_week: Optional[str] = Field(default=None, examples=["MWF"])
    instructors: Optional[List[Instructor]] = None
    room_number: Optional[str] = None
    building_name: Optional[str] = None
    meeting_date_range: Optional[str] = None


class SectionParents(CatalogModel):
    calendar_year: CalendarYear
    term: Term
    subject: Subject
    course: CourseRef


class Section(CatalogModel):
    """
    One section of a course, identified by its CRN.

    Attributes:
        id: Course Reference Number
        parents: Year, term, subject and course the section belongs to
        enrollment_status: e.g. 'Open', 'Closed', 'Open (Restricted)'
        meetings: Inline meetings in source order
    """

    id: str = Field(..., examples=["30094"])
    href: Optional[str] = write_only(default=None)
    parents: SectionParents

    section_number: Optional[str] = None
    status_code: Optional[str] = None
    section_text: Optional[str] = None
    section_notes: Optional[str] = None
    part_of_term: Optional[str] = None
    section_status_code: Optional[str] = None
    enrollment_status: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    section_capp_area: Optional[str] = None
    credit_hours: Optional[str] = None
    section_title: Optional[str] = None
    special_approval: Optional[str] = None
    section_dept_restriction: Optional[str] = None
    section_fee_amount: Optional[str] = None
    section_date_range: Optional[str] = None
    section_degree_attributes: Optional[str] = None
    section_co_request: Optional[str] = None

    meetings: List[Meeting] = Field(default_factory=list)
