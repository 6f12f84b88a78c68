"""
Catalog Service

Walks the Course Explorer hierarchy:

    schedule -> year -> semester -> department -> course -> section

Every level can be fetched directly from identifiers (canonical path
templates) or from an href embedded in its parent document. Child
traversals fetch one document per link in the parent's list.

Design:
- Stateless: no caching, repeated calls reissue identical requests
- Fail-fast: the first failing child aborts the traversal, no partial lists
- Parent context of every fetched record is checked against the request
- Optional thread pool for child fetches; output order is source order
"""

from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Any, Callable, Dict, List, Optional, Sequence, Type, TypeVar, Union
import logging

from cisapi.config import get_app_config
from cisapi.exceptions import ParseError
from cisapi.models import (
    Course,
    Department,
    Schedule,
    ScheduleYear,
    Section,
    Semester,
)
from cisapi.parsers.links import LinkResolver, catalog_path
from cisapi.parsers.xml_parser import parse_document
from cisapi.services.transport import HttpTransport

logger = logging.getLogger(__name__)

M = TypeVar('M')
Identifier = Union[str, int]


class CatalogService:
    """
    Fetches and parses explorer documents level by level.

    Usage:
        service = CatalogService()

        # Direct fetch by identifiers
        department = service.fetch_department(2020, "fall", "CS")
        print(department.contact_name)

        # Walk down from a parent record
        for course in service.courses(department):
            print(course.department, course.number, course.title)

        # Or follow a link found in a document
        course = service.fetch_course(href=department.courses[0].href)

    Performance:
        - One GET per fetched record
        - max_workers > 1 fetches children concurrently
    """

    def __init__(
        self,
        transport: Optional[HttpTransport] = None,
        resolver: Optional[LinkResolver] = None,
        max_workers: Optional[int] = None
    ):
        """
        Initialize with injected collaborators.

        Args:
            transport: Object with get(url) -> str (default: HttpTransport())
            resolver: Link resolver (default: LinkResolver())
            max_workers: Concurrent child fetches (default: AppConfig.max_workers)
        """
        self.transport = transport if transport is not None else HttpTransport()
        self.resolver = resolver if resolver is not None else LinkResolver()
        self.max_workers = max_workers or get_app_config().max_workers

    # ========================================================================
    # Single-record fetches
    # ========================================================================

    def fetch_schedule(self) -> Schedule:
        """Fetch the root document listing every calendar year."""
        return self._fetch(catalog_path(), Schedule)

    def fetch_year(
        self,
        year: Optional[Identifier] = None,
        *,
        href: Optional[str] = None
    ) -> ScheduleYear:
        """
        Fetch a calendar year with its terms.

        Args:
            year: Calendar year (e.g., 2020)
            href: Link to the year document (mutually exclusive with year)
        """
        record = self._fetch(self._target(href, year=year), ScheduleYear)
        if href is None:
            self._check_context(record, {'year': year})
        return record

    def fetch_semester(
        self,
        year: Optional[Identifier] = None,
        semester: Optional[str] = None,
        *,
        href: Optional[str] = None
    ) -> Semester:
        """
        Fetch a semester's subject listing.

        Args:
            year: Calendar year (e.g., 2020)
            semester: Season name (e.g., 'fall'); case-insensitive
            href: Link to the semester document

        Example:
            >>> semester = service.fetch_semester(2020, "fall")
            >>> semester.parents.calendar_year.year
            2020
        """
        semester = _season(semester)
        record = self._fetch(self._target(href, year=year, semester=semester), Semester)
        if href is None:
            self._check_context(record, {'year': year, 'semester': semester})
        return record

    def fetch_department(
        self,
        year: Optional[Identifier] = None,
        semester: Optional[str] = None,
        department: Optional[str] = None,
        *,
        href: Optional[str] = None
    ) -> Department:
        """
        Fetch a department with its course list.

        Example:
            >>> department = service.fetch_department(2020, "fall", "CS")
            >>> department.contact_name
            'Nancy Amato'
        """
        semester = _season(semester)
        target = self._target(href, year=year, semester=semester, department=department)
        record = self._fetch(target, Department)
        if href is None:
            self._check_context(
                record, {'year': year, 'semester': semester, 'department': department}
            )
        return record

    def fetch_course(
        self,
        year: Optional[Identifier] = None,
        semester: Optional[str] = None,
        department: Optional[str] = None,
        number: Optional[Identifier] = None,
        *,
        href: Optional[str] = None
    ) -> Course:
        """
        Fetch one course with its section links.

        Example:
            >>> course = service.fetch_course(2020, "fall", "CS", 100)
            >>> course.title
            'Freshman Orientation'
        """
        semester = _season(semester)
        target = self._target(
            href, year=year, semester=semester, department=department, number=number
        )
        record = self._fetch(target, Course)
        if href is None:
            self._check_context(record, {
                'year': year,
                'semester': semester,
                'department': department,
                'number': number,
            })
        return record

    def fetch_section(
        self,
        year: Optional[Identifier] = None,
        semester: Optional[str] = None,
        department: Optional[str] = None,
        number: Optional[Identifier] = None,
        crn: Optional[Identifier] = None,
        *,
        href: Optional[str] = None
    ) -> Section:
        """
        Fetch one section with its meetings.

        Args:
            crn: Course Reference Number of the section
        """
        semester = _season(semester)
        target = self._target(
            href, year=year, semester=semester, department=department, number=number, crn=crn
        )
        record = self._fetch(target, Section)
        if href is None:
            self._check_context(record, {
                'year': year,
                'semester': semester,
                'department': department,
                'number': number,
                'crn': crn,
            })
        return record

    # ========================================================================
    # Child traversals
    # ========================================================================

    def years(self, schedule: Schedule) -> List[ScheduleYear]:
        """Fetch every calendar year listed in the schedule."""
        return self._fetch_children(
            schedule.calendar_years,
            ScheduleYear,
            lambda ref: {'year': ref.year}
        )

    def terms(self, schedule_year: ScheduleYear) -> List[Semester]:
        """Fetch the subject listing of every term in a year."""
        return self._fetch_children(
            schedule_year.terms,
            Semester,
            lambda ref: {'year': schedule_year.id, 'semester': _season(ref.semester)}
        )

    def departments(self, semester: Semester) -> List[Department]:
        """
        Fetch every department listed in a semester.

        Raises:
            TransportError, ParseError: On the first failing department
        """
        context = _context(semester)
        return self._fetch_children(
            semester.subjects,
            Department,
            lambda ref: {**context, 'department': ref.id}
        )

    def courses(self, department: Department) -> List[Course]:
        """
        Fetch every course listed in a department.

        Issues exactly one request per course link and returns the courses
        in the order the department lists them.
        """
        context = _context(department)
        return self._fetch_children(
            department.courses,
            Course,
            lambda ref: {**context, 'number': ref.id}
        )

    def sections(self, course: Course) -> List[Section]:
        """Fetch every section listed in a course."""
        context = _context(course)
        return self._fetch_children(
            course.sections,
            Section,
            lambda ref: {**context, 'crn': ref.id}
        )

    # ========================================================================
    # Internals
    # ========================================================================

    def _target(self, href: Optional[str], **identifiers: Optional[Identifier]) -> str:
        """Resolve either an href or a full set of identifiers to a URL."""
        given = {k: v for k, v in identifiers.items() if v is not None}

        if href is not None:
            if given:
                raise ValueError(
                    f"Provide either href or identifiers, not both "
                    f"(got href={href!r} and {given})"
                )
            return self.resolver.resolve(href)

        missing = [k for k, v in identifiers.items() if v is None]
        if missing:
            raise ValueError(
                f"Missing identifiers: {missing}. "
                f"Provide all of {list(identifiers)} or an href."
            )

        return self.resolver.resolve(catalog_path(*identifiers.values()))

    def _fetch(self, url: str, model: Type[M]) -> M:
        if not url.startswith(('http://', 'https://')):
            url = self.resolver.resolve(url)
        document = self.transport.get(url)
        return parse_document(document, model)

    def _fetch_children(
        self,
        refs: Sequence[Any],
        model: Type[M],
        expected: Callable[[Any], Dict[str, Any]]
    ) -> List[M]:
        """
        Fetch one record per link, in order, failing on the first error.
        """
        # Resolve everything up front so a bad link fails before any request
        targets = [(ref, self.resolver.resolve(ref.href)) for ref in refs]

        logger.info(
            f"Fetching {len(targets)} {model.__name__} record(s)"
            + (f" with {self.max_workers} workers" if self.max_workers > 1 else "")
        )

        def fetch_one(target) -> M:
            ref, url = target
            record = self._fetch(url, model)
            self._check_context(record, expected(ref))
            return record

        if self.max_workers <= 1 or len(targets) <= 1:
            return [fetch_one(target) for target in targets]

        executor = ThreadPoolExecutor(max_workers=self.max_workers)
        futures = [executor.submit(fetch_one, target) for target in targets]
        done, _ = wait(futures, return_when=FIRST_EXCEPTION)

        failed = next((f for f in futures if f in done and f.exception() is not None), None)
        if failed is not None:
            # Queued children are dropped; running ones finish in the background
            for future in futures:
                future.cancel()
            executor.shutdown(wait=False)
            logger.error(f"Aborting {model.__name__} fetch: {failed.exception()}")
            raise failed.exception()

        executor.shutdown()
        return [future.result() for future in futures]

    def _check_context(self, record: Any, expected: Dict[str, Any]) -> None:
        """
        Ensure a record belongs to the chain it was fetched through.

        Raises:
            ParseError: If any expected identifier differs from the record's
        """
        actual = _context(record)
        mismatched = {
            key: (value, actual.get(key))
            for key, value in expected.items()
            if value is not None and _norm(value) != _norm(actual.get(key))
        }
        if mismatched:
            details = ", ".join(
                f"{key}: expected {want!r}, got {got!r}"
                for key, (want, got) in mismatched.items()
            )
            raise ParseError(
                f"{type(record).__name__} does not belong to the requested chain ({details})",
                model=type(record).__name__
            )


def _season(semester: Optional[str]) -> Optional[str]:
    """'Fall 2020' or 'FALL' -> 'fall'."""
    if semester is None:
        return None
    return semester.strip().split(" ")[0].lower()


def _norm(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip().lower()


def _context(record: Any) -> Dict[str, str]:
    """
    Identifiers of the chain a record belongs to, including its own.

    Keys: year, semester, department, number, crn.
    """
    context: Dict[str, str] = {}

    if isinstance(record, ScheduleYear):
        context['year'] = record.id
        return context

    parents = record.parents
    context['year'] = str(parents.calendar_year.year)

    if isinstance(record, Semester):
        context['semester'] = _season(record.label)
        return context

    context['semester'] = _season(parents.term.semester)

    if isinstance(record, Department):
        context['department'] = record.id
    elif isinstance(record, Course):
        context['department'] = record.department
        context['number'] = record.number
    elif isinstance(record, Section):
        context['department'] = parents.subject.id
        context['number'] = parents.course.id
        context['crn'] = record.id

    return context
