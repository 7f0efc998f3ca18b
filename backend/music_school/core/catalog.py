"""Course Catalog — pure filter/sort pipeline over the static course dataset.

Invariants:
    - Pipeline order is fixed: validate → search → instructor filter → sort
    - Records missing id, title, slug or image, or holding them with the wrong type
      (non-int id, non-str title/slug/image), are dropped silently (never an error)
    - Input sequences are never mutated; output is a new tuple of frozen Course values
    - Sort is stable: ties keep their prior relative order
    - Identical inputs always yield an identical CatalogView

Design Decisions:
    - Collation key = accent-stripped casefolded text, then the raw text as tie-breaker:
      approximates locale-aware ordering without a process-wide locale setting
    - Featured selection has its own validity check (image not required), matching
      the featured widget which renders without images
"""

import logging
import unicodedata
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from music_school.core.domain_types import ALL_INSTRUCTORS, CourseId, SortKey
from music_school.core.errors import ResourceNotFoundError

logger = logging.getLogger(__name__)


CATALOG_REQUIRED_FIELDS: tuple[str, ...] = ("id", "title", "slug", "image")
FEATURED_REQUIRED_FIELDS: tuple[str, ...] = ("id", "title", "slug")
FEATURED_LIMIT: int = 6
REQUIRED_FIELD_TYPES: dict[str, type] = {"id": int, "title": str, "slug": str, "image": str}


@dataclass(frozen=True)
class Course:
    """One catalog entry. Immutable once loaded."""
    id: CourseId
    title: str
    slug: str
    description: str
    price: float
    instructor: str
    is_featured: bool
    image: str

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Course":
        return cls(
            id=CourseId(record["id"]),
            title=str(record["title"]),
            slug=str(record["slug"]),
            description=str(record.get("description") or ""),
            price=_coerce_price(record.get("price")),
            instructor=str(record.get("instructor") or ""),
            is_featured=record.get("isFeatured") is True,
            image=str(record.get("image") or ""),
        )

    def to_record(self) -> dict[str, Any]:
        """Dataset-shaped dict (camelCase isFeatured)."""
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "description": self.description,
            "price": self.price,
            "instructor": self.instructor,
            "isFeatured": self.is_featured,
            "image": self.image,
        }


@dataclass(frozen=True)
class CatalogView:
    """Filtered, ordered slice of the catalog."""
    courses: tuple[Course, ...]
    total: int
    filtered: bool

    @property
    def count(self) -> int:
        return len(self.courses)


def _coerce_price(raw: Any) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError):
        return 0.0


def _has_fields(record: Any, required: Sequence[str]) -> bool:
    if isinstance(record, Course):
        return all(getattr(record, name) for name in required)
    if not isinstance(record, Mapping):
        return False
    return all(_is_well_typed(name, record.get(name)) for name in required)


def _is_well_typed(name: str, value: Any) -> bool:
    if not value:
        return False
    expected = REQUIRED_FIELD_TYPES.get(name)
    if expected is None:
        return True
    # bool is an int subclass; a true flag is never a course id
    return isinstance(value, expected) and not isinstance(value, bool)


def _to_course(record: Any) -> Course:
    return record if isinstance(record, Course) else Course.from_record(record)


def valid_courses(
    records: Iterable[Any], required: Sequence[str] = CATALOG_REQUIRED_FIELDS,
) -> tuple[Course, ...]:
    """Step 1: keep well-formed records, converted to Course."""
    kept = []
    for record in records:
        if not _has_fields(record, required):
            logger.debug("Dropping malformed course record: %r", record)
            continue
        kept.append(_to_course(record))
    return tuple(kept)


def collation_key(text: str) -> tuple[str, str]:
    """Locale-style sort key: base letters first, exact text as tie-breaker."""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return base.casefold(), text


def _matches_search(course: Course, term: str) -> bool:
    return (
        term in course.title.lower()
        or term in course.description.lower()
        or term in course.instructor.lower()
    )


def _sort(courses: Sequence[Course], sort_key: SortKey) -> list[Course]:
    match sort_key:
        case SortKey.PRICE:
            return sorted(courses, key=lambda c: c.price)
        case SortKey.INSTRUCTOR:
            return sorted(courses, key=lambda c: collation_key(c.instructor))
        case _:
            return sorted(courses, key=lambda c: collation_key(c.title))


def filter_and_sort_courses(
    records: Iterable[Any],
    search: str = "",
    instructor: str = ALL_INSTRUCTORS,
    sort_key: SortKey | str = SortKey.TITLE,
) -> CatalogView:
    """Run the full catalog pipeline. Pure — never mutates records."""
    if not isinstance(sort_key, SortKey):
        sort_key = SortKey.parse(sort_key)

    courses: Sequence[Course] = valid_courses(records)
    total = len(courses)

    # blank check on the trimmed term; matching uses the term as typed
    searching = bool(search.strip())
    if searching:
        term = search.lower()
        courses = [c for c in courses if _matches_search(c, term)]

    if instructor != ALL_INSTRUCTORS:
        courses = [c for c in courses if c.instructor == instructor]

    return CatalogView(
        courses=tuple(_sort(courses, sort_key)),
        total=total,
        filtered=searching or instructor != ALL_INSTRUCTORS,
    )


def select_featured(records: Iterable[Any], limit: int = FEATURED_LIMIT) -> tuple[Course, ...]:
    """Featured widget: flagged courses in dataset order, capped at limit."""
    candidates = valid_courses(records, FEATURED_REQUIRED_FIELDS)
    return tuple(c for c in candidates if c.is_featured)[:limit]


def list_instructors(courses: Iterable[Course]) -> list[str]:
    """Unique instructor names, sorted, for the instructor filter."""
    return sorted({c.instructor for c in courses})


def find_course(courses: Iterable[Course], slug: str) -> Course:
    for course in courses:
        if course.slug == slug:
            return course
    raise ResourceNotFoundError("Course", slug)


def duplicate_keys(courses: Sequence[Course]) -> dict[str, list]:
    """Report ids and slugs that appear more than once. Uniqueness is assumed, not enforced."""
    seen_ids: set = set()
    seen_slugs: set = set()
    dup_ids: list = []
    dup_slugs: list = []
    for course in courses:
        if course.id in seen_ids:
            dup_ids.append(course.id)
        if course.slug in seen_slugs:
            dup_slugs.append(course.slug)
        seen_ids.add(course.id)
        seen_slugs.add(course.slug)
    return {"ids": dup_ids, "slugs": dup_slugs}
