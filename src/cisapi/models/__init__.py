"""
Pydantic records for Course Explorer documents.

One module per level of the catalog hierarchy:
schedule -> year -> semester -> department -> course -> section.
"""

from cisapi.models.base import CatalogModel, INNER_TEXT
from cisapi.models.schedule import CalendarYear, Schedule, Term, ScheduleYear
from cisapi.models.semester import Subject, SemesterParents, Semester
from cisapi.models.department import CourseRef, DepartmentParents, Department
from cisapi.models.course import (
    GenEdAttribute,
    Category,
    SectionRef,
    CourseParents,
    Course,
    CourseSummary,
)
from cisapi.models.section import Instructor, Meeting, SectionParents, Section

__all__ = [
    'CatalogModel',
    'INNER_TEXT',
    'CalendarYear',
    'Schedule',
    'Term',
    'ScheduleYear',
    'Subject',
    'SemesterParents',
    'Semester',
    'CourseRef',
    'DepartmentParents',
    'Department',
    'GenEdAttribute',
    'Category',
    'SectionRef',
    'CourseParents',
    'Course',
    'CourseSummary',
    'Instructor',
    'Meeting',
    'SectionParents',
    'Section',
]
