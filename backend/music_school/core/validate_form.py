"""Form Validation — pure field and record validation for the contact form.

Invariants:
    - validate_field returns at most ONE message; rule order is required → min → max → pattern
    - Length checks use the trimmed value; the pattern check uses the raw value
    - validate_form is total: any str input yields a FormValidation, never an exception
    - FormValidation.errors keys are always a subset of FormField values

Design Decisions:
    - Returns values instead of raising: the controller decides whether a failure
      blocks a transition, the API decides whether it becomes a 400
"""

from dataclasses import dataclass, field

from music_school.core.contact_form import ContactFormData, parse_field
from music_school.core.domain_types import FormField
from music_school.core.validation_rules import VALIDATION_RULES


INVALID_EMAIL_MESSAGE = "Please enter a valid email address"


@dataclass(frozen=True)
class FormValidation:
    """Outcome of a full-record validation pass."""
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def validate_field(name: FormField | str, value: str) -> str | None:
    """Validate one field value against its rule. Pure — first failing rule wins."""
    form_field = parse_field(name)
    rule = VALIDATION_RULES[form_field]
    trimmed = value.strip()

    if not trimmed:
        return f"{form_field.label} is required" if rule.required else None

    if rule.min_length is not None and len(trimmed) < rule.min_length:
        return f"{form_field.label} must be at least {rule.min_length} characters"

    if rule.max_length is not None and len(trimmed) > rule.max_length:
        return f"{form_field.label} must be less than {rule.max_length} characters"

    if rule.pattern is not None and not rule.pattern.fullmatch(value):
        return INVALID_EMAIL_MESSAGE

    return None


def validate_form(form: ContactFormData) -> FormValidation:
    """Run validate_field over every field in declaration order."""
    errors: dict[str, str] = {}
    for form_field in FormField:
        error = validate_field(form_field, form.get(form_field))
        if error:
            errors[form_field.value] = error
    return FormValidation(errors=errors)


def is_submittable(form: ContactFormData, errors: dict[str, str]) -> bool:
    """Submit gate: no outstanding errors and every field non-blank."""
    if errors:
        return False
    return all(form.get(f).strip() for f in FormField)
