"""
Top two levels of the catalog: the list of years and a year's terms.

Documents:
- schedule.xml          -> Schedule (label + calendar years)
- schedule/{year}.xml   -> ScheduleYear (label + terms)
"""

from typing import List

from pydantic import Field

from cisapi.models.base import CatalogModel, inner_text, write_only


class CalendarYear(CatalogModel):
    """
    One entry of the schedule's year list.

    XML:
        <calendarYear id="2020" href=".../schedule/2020.xml">2020</calendarYear>
    """

    id: int = Field(..., description="Numeric year identifier", examples=[2020])
    href: str = write_only(..., description="Link to the year document")
    year: int = inner_text(description="Display year", examples=[2020])

    def __str__(self) -> str:
        return str(self.year)


class Schedule(CatalogModel):
    """Root document listing every calendar year with published schedules."""

    label: str = Field(..., examples=["Schedule of Classes"])
    calendar_years: List[CalendarYear] = Field(default_factory=list)


class Term(CatalogModel):
    """
    One term within a calendar year.

    Term ids are "1" + year + a one-digit season code, e.g. 120208 for
    Fall 2020.
    """

    id: str = Field(..., examples=["120208"])
    href: str = write_only(...)
    semester: str = inner_text(examples=["Fall 2020"])

    def __str__(self) -> str:
        return self.semester


class ScheduleYear(CatalogModel):
    """A calendar year document with its terms."""

    id: str
    label: str
    terms: List[Term] = Field(default_factory=list)
