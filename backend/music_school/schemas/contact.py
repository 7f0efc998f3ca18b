"""Contact Schemas — contact form requests and state snapshots.

Invariants:
    - Field values are accepted as raw strings; rule checks happen in core.validate_form
    - ContactFormState.errors keys are a subset of the four form fields
    - ContactFieldsUpdate rejects unknown keys (extra="forbid")

Design Decisions:
    - No min/max constraints here: field errors must come back as per-field messages
      in the form state, not as a request validation failure
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from music_school.core.contact_form import ContactFormData
from music_school.core.domain_types import SubmissionStatus
from music_school.core.submission_state import SubmissionState, SUCCESS_MESSAGE


class ContactFormFields(BaseModel):
    """Full contact record."""
    name: str = ""
    email: str = ""
    subject: str = ""
    message: str = ""

    def to_form(self) -> ContactFormData:
        return ContactFormData(**self.model_dump())


class ContactFieldsUpdate(BaseModel):
    """Partial edit: only the provided fields change."""
    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    email: str | None = None
    subject: str | None = None
    message: str | None = None

    def changes(self) -> dict[str, str]:
        return self.model_dump(exclude_none=True)


class ContactConfig(BaseModel):
    """Public settings the client needs to render the form."""
    form_name: str
    recaptcha_site_key: str


class CaptchaUpdate(BaseModel):
    token: str | None = Field(None, max_length=4096)


class ValidationResponse(BaseModel):
    valid: bool
    errors: dict[str, str]


class ContactFormState(BaseModel):
    """Snapshot of a contact form instance."""
    form_id: UUID
    status: SubmissionStatus
    fields: ContactFormFields
    errors: dict[str, str]
    captcha_present: bool
    submittable: bool
    notice: str | None = None

    @classmethod
    def from_state(
        cls, form_id: UUID, state: SubmissionState, submittable: bool,
    ) -> "ContactFormState":
        notice = None
        if state.status == SubmissionStatus.SUCCESS:
            notice = SUCCESS_MESSAGE
        elif state.status == SubmissionStatus.ERROR:
            notice = state.errors.get("message")
        return cls(
            form_id=form_id,
            status=state.status,
            fields=ContactFormFields(**state.form.as_dict()),
            errors=dict(state.errors),
            captcha_present=bool(state.captcha_token),
            submittable=submittable,
            notice=notice,
        )


class SubmitResponse(BaseModel):
    accepted: bool
    reason: str | None = None
    form: ContactFormState
