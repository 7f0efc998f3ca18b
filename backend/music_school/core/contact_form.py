"""Contact Form Record — the four user-editable fields of the contact form.

Invariants:
    - Every field is a str; a fresh or reset record is all empty strings
    - Records are immutable; edits produce a new record
    - Field names accepted by with_field() are exactly FormField values
"""

from dataclasses import dataclass, replace, asdict

from music_school.core.domain_types import FormField
from music_school.core.errors import UnknownFieldError


@dataclass(frozen=True)
class ContactFormData:
    """User-entered contact form values."""

    name: str = ""
    email: str = ""
    subject: str = ""
    message: str = ""

    def get(self, field: FormField) -> str:
        return getattr(self, field.value)

    def with_field(self, field: FormField | str, value: str) -> "ContactFormData":
        """Return a copy with one field replaced."""
        return replace(self, **{parse_field(field).value: value})

    def as_dict(self) -> dict[str, str]:
        return asdict(self)

    @property
    def is_blank(self) -> bool:
        return all(not v.strip() for v in self.as_dict().values())


EMPTY_FORM = ContactFormData()


def parse_field(field: FormField | str) -> FormField:
    """Map a raw field name to FormField, raising UnknownFieldError otherwise."""
    if isinstance(field, FormField):
        return field
    try:
        return FormField(field)
    except ValueError:
        raise UnknownFieldError(str(field))
