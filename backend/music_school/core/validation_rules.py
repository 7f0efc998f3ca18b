"""Validation Rules — static constraint table for the contact form.

Invariants:
    - VALIDATION_RULES has exactly one entry per FormField
    - Rules are constants; nothing derives or mutates them at runtime
    - EMAIL_PATTERN is the single source of truth for email format
"""

import re
from dataclasses import dataclass
from types import MappingProxyType

from music_school.core.domain_types import FormField


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class ValidationRule:
    """Constraint set for a single field."""
    required: bool
    min_length: int | None = None
    max_length: int | None = None
    pattern: re.Pattern[str] | None = None


VALIDATION_RULES: MappingProxyType[FormField, ValidationRule] = MappingProxyType({
    FormField.NAME: ValidationRule(required=True, min_length=2, max_length=50),
    FormField.EMAIL: ValidationRule(required=True, pattern=EMAIL_PATTERN),
    FormField.SUBJECT: ValidationRule(required=True, min_length=5, max_length=100),
    FormField.MESSAGE: ValidationRule(required=True, min_length=10, max_length=1000),
})
