"""
Department (subject) document: contact metadata and the list of courses.
"""

from typing import List, Optional

from pydantic import Field

from cisapi.models.base import CatalogModel, inner_text, write_only
from cisapi.models.schedule import CalendarYear, Term


class CourseRef(CatalogModel):
    """
    Course entry of a department listing.

    XML:
        <course id="125" href=".../schedule/2020/fall/CS/125.xml">Intro to Computer Science</course>
    """

    id: str = Field(..., description="Course number within the department", examples=["125"])
    href: str = write_only(...)
    name: str = inner_text(examples=["Intro to Computer Science"])


class DepartmentParents(CatalogModel):
    calendar_year: CalendarYear
    term: Term


class Department(CatalogModel):
    """
    Department offering courses in one semester.

    Only identity fields are required. Contact metadata is optional because
    the explorer omits elements it has no value for.

    Attributes:
        id: Subject code (e.g., 'CS')
        parents: Calendar year and term the listing belongs to
        label: Department display name
        courses: Course links in source order
    """

    id: str = Field(..., examples=["CS"])
    parents: DepartmentParents
    label: str = Field(..., examples=["Computer Science"])

    # === Contact Metadata ===
    college_code: Optional[str] = None
    department_code: Optional[int] = None
    unit_name: Optional[str] = None
    contact_name: Optional[str] = Field(default=None, examples=["Nancy Amato"])
    contact_title: Optional[str] = None
    address_line1: Optional[str] = None
    address_line2: Optional[str] = None
    phone_number: Optional[str] = None
    web_site_url: Optional[str] = Field(default=None, alias="webSiteURL")
    college_department_description: Optional[str] = None
    subject_comment: Optional[str] = None

    courses: List[CourseRef] = Field(default_factory=list)
