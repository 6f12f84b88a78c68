"""
Course document and its reduced summary projection.

Design:
- Navigation fields (id, href, label, section links) are read from the
  document but never serialized
- Derived identifiers (year, semester, department, number, title) are
  computed from the parents and the composite id "CS 100"
"""

from typing import List, Optional

from pydantic import BaseModel, Field, computed_field

from cisapi.models.base import CatalogModel, inner_text, write_only
from cisapi.models.schedule import CalendarYear, Term
from cisapi.models.semester import Subject


class GenEdAttribute(CatalogModel):
    code: str
    name: str = inner_text()


class Category(CatalogModel):
    """General education category the course satisfies."""

    id: str = Field(..., examples=["1CLL"])
    description: Optional[str] = None
    gen_ed_attributes: List[GenEdAttribute] = Field(default_factory=list)


class SectionRef(CatalogModel):
    """
    Section entry of a course document.

    Older documents link sections through the internal CIS host, e.g.
    http://cis.local/cisapi/schedule/2020/fall/CS/100/30094
    """

    id: str = Field(..., description="Course Reference Number", examples=["30094"])
    href: str = write_only(...)
    name: Optional[str] = inner_text(default=None)


class CourseParents(CatalogModel):
    calendar_year: CalendarYear
    term: Term
    subject: Subject


class Course(CatalogModel):
    """
    One course offered in a semester (schedule/{year}/{semester}/{dept}/{number}.xml).

    Example:
        >>> course = parse_document(xml, Course)
        >>> course.department, course.number, course.title
        ('CS', '100', 'Freshman Orientation')
        >>> course.credit_hours
        '1 hours.'
    """

    id: str = write_only(..., description="Composite id 'DEPT NUMBER'", examples=["CS 100"])
    href: Optional[str] = write_only(default=None)
    parents: CourseParents
    label: str = write_only(..., examples=["Freshman Orientation"])

    description: Optional[str] = None
    credit_hours: Optional[str] = Field(default=None, examples=["1 hours."])
    course_section_information: Optional[str] = None
    section_degree_attributes: Optional[str] = None
    class_schedule_information: Optional[str] = None
    section_registration_notes: Optional[str] = None
    section_capp_area: Optional[str] = None
    section_approval_code: Optional[str] = None
    gen_ed_categories: List[Category] = Field(default_factory=list)
    section_date_range: Optional[str] = None
    section_dept_restriction: Optional[str] = None
    section_fee_amount: Optional[str] = None
    course_co_requisite: Optional[str] = None
    section_description: Optional[str] = None

    sections: List[SectionRef] = write_only(default_factory=list)

    @computed_field
    @property
    def year(self) -> str:
        return str(self.parents.calendar_year.year)

    @computed_field
    @property
    def semester(self) -> str:
        """First word of the term label, lower-cased ('Fall 2020' -> 'fall')."""
        return self.parents.term.semester.split(" ")[0].lower()

    @computed_field
    @property
    def department(self) -> str:
        return self.id.partition(" ")[0]

    @computed_field
    @property
    def number(self) -> str:
        return self.id.partition(" ")[2]

    @computed_field
    @property
    def title(self) -> str:
        return self.label


class CourseSummary(BaseModel):
    """
    Reduced course projection used for bulk exports.

    Example:
        >>> CourseSummary.from_course(course)
        CourseSummary(year='2020', semester='fall', department='CS', number='100', title='Freshman Orientation')
    """

    year: str
    semester: str
    department: str
    number: str
    title: str

    model_config = {
        "frozen": True,
    }

    @classmethod
    def from_course(cls, course: Course) -> 'CourseSummary':
        return cls(
            year=course.year,
            semester=course.semester,
            department=course.department,
            number=course.number,
            title=course.title,
        )
