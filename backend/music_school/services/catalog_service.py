"""Catalog Service — memoised catalog views over the records loaded at startup.

Invariants:
    - Records are fixed for the service lifetime (read-only dataset)
    - view() results are cached per (search, instructor, sort_key); safe because
      filter_and_sort_courses is pure and returns immutable values
"""

from collections.abc import Sequence
from functools import lru_cache
from typing import Any

from music_school.core.catalog import (
    FEATURED_REQUIRED_FIELDS,
    CatalogView,
    Course,
    filter_and_sort_courses,
    find_course,
    list_instructors,
    select_featured,
    valid_courses,
)
from music_school.core.domain_types import ALL_INSTRUCTORS, SortKey
from music_school.core.errors import ResourceNotFoundError


class CatalogService:
    """Read-only access to the course catalog."""

    def __init__(self, records: Sequence[Any], featured_limit: int = 6):
        self.records = tuple(records)
        self.courses = valid_courses(self.records)
        self._linkable = valid_courses(self.records, FEATURED_REQUIRED_FIELDS)
        self.featured_limit = featured_limit
        self._view = lru_cache(maxsize=256)(self._compute_view)

    def _compute_view(self, search: str, instructor: str, sort_key: SortKey) -> CatalogView:
        return filter_and_sort_courses(self.records, search, instructor, sort_key)

    def view(
        self,
        search: str = "",
        instructor: str = ALL_INSTRUCTORS,
        sort_key: SortKey | str = SortKey.TITLE,
    ) -> CatalogView:
        if not isinstance(sort_key, SortKey):
            sort_key = SortKey.parse(sort_key)
        return self._view(search, instructor, sort_key)

    def featured(self) -> tuple[Course, ...]:
        return select_featured(self.records, self.featured_limit)

    def instructors(self) -> list[str]:
        return list_instructors(self.courses)

    def get(self, slug: str) -> Course:
        return find_course(self.courses, slug)

    def get_by_id(self, course_id: int) -> Course:
        for course in self._linkable:
            if course.id == course_id:
                return course
        raise ResourceNotFoundError("Course", str(course_id))

    @property
    def total(self) -> int:
        return len(self.courses)
