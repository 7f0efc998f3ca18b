"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - CourseId wraps int, FormId wraps UUID — never use bare primitives in domain logic
    - All valid states encoded as Enums — no raw string matching
    - ALL_INSTRUCTORS is the single source of truth for the "no restriction" sentinel

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

CourseId = NewType("CourseId", int)
FormId = NewType("FormId", UUID)


# ─── Sentinels ───────────────────────────────────────────────────

ALL_INSTRUCTORS = "all"


# ─── Enums ───────────────────────────────────────────────────────

class FormField(str, Enum):
    """Contact form fields, in validation order."""
    NAME = "name"
    EMAIL = "email"
    SUBJECT = "subject"
    MESSAGE = "message"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class SortKey(str, Enum):
    """Catalog orderings. Title and instructor collate; price is numeric."""
    TITLE = "title"
    PRICE = "price"
    INSTRUCTOR = "instructor"

    @classmethod
    def parse(cls, raw: str) -> "SortKey":
        """Accept enum values plus the legacy 'name' alias for title."""
        if raw == "name":
            return cls.TITLE
        return cls(raw)


class SubmissionStatus(str, Enum):
    """Contact form lifecycle states."""
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


class CourseAction(str, Enum):
    """Course interactions reported to analytics."""
    VIEW = "view"
    CLICK = "click"
    ENROLL = "enroll"


class AnalyticsEvent(str, Enum):
    """Event names emitted to the analytics collaborator."""
    FORM_SUBMISSION = "form_submission"
    COURSE_INTERACTION = "course_interaction"
    COURSE_CLICK = "course_click"
    BUTTON_CLICK = "button_click"
    PAGE_VIEW = "page_view"
    SCROLL_DEPTH = "scroll_depth"
