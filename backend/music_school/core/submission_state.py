"""Submission State Machine — pure transitions for the contact form lifecycle.

Invariants:
    - transition() is PURE: returns a new SubmissionState, never mutates the input
    - idle/error → submitting only when validate_form passes
    - A failed validation leaves status unchanged and replaces errors with field errors
    - submitting rejects further SubmitRequested events (at most one send in flight)
    - success clears form, errors and captcha token; SuccessExpired returns to idle
    - SendFailed sets errors["message"] only; other field errors are untouched
    - errors keys are always a subset of FormField values

Design Decisions:
    - Enum status + event dataclasses instead of boolean flags: every state the
      form can be in is one SubmissionStatus value
    - Shell (SubmissionController) performs the IO between SendRequested and
      SendSucceeded/SendFailed; core only decides what the next state is
"""

from dataclasses import dataclass, field, replace

from music_school.core.contact_form import ContactFormData, EMPTY_FORM, parse_field
from music_school.core.domain_types import FormField, SubmissionStatus
from music_school.core.validate_form import validate_form


SEND_FAILURE_FALLBACK = "An unexpected error occurred. Please try again."
SUCCESS_MESSAGE = "Thank you! Your message has been sent successfully."

_SUBMITTABLE_FROM = frozenset({SubmissionStatus.IDLE, SubmissionStatus.ERROR})


@dataclass(frozen=True)
class SubmissionState:
    """Snapshot of one contact form instance."""
    status: SubmissionStatus = SubmissionStatus.IDLE
    form: ContactFormData = EMPTY_FORM
    errors: dict[str, str] = field(default_factory=dict)
    captcha_token: str | None = None

    @property
    def is_submitting(self) -> bool:
        return self.status == SubmissionStatus.SUBMITTING


# ─── Events ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class FieldEdited:
    field: FormField | str
    value: str


@dataclass(frozen=True)
class CaptchaChanged:
    token: str | None


@dataclass(frozen=True)
class SubmitRequested:
    pass


@dataclass(frozen=True)
class SendSucceeded:
    pass


@dataclass(frozen=True)
class SendFailed:
    reason: str | None = None


@dataclass(frozen=True)
class SuccessExpired:
    pass


SubmissionEvent = (
    FieldEdited | CaptchaChanged | SubmitRequested
    | SendSucceeded | SendFailed | SuccessExpired
)


@dataclass(frozen=True)
class TransitionResult:
    """Next state plus whether the event was applied."""
    state: SubmissionState
    accepted: bool
    reason: str | None = None


# ─── Transition ──────────────────────────────────────────────────

def transition(state: SubmissionState, event: SubmissionEvent) -> TransitionResult:
    """Apply one event. Pure — returns the next state."""
    match event:
        case FieldEdited(field=name, value=value):
            return _edit_field(state, name, value)
        case CaptchaChanged(token=token):
            return TransitionResult(replace(state, captcha_token=token), True)
        case SubmitRequested():
            return _request_submit(state)
        case SendSucceeded():
            return _send_succeeded(state)
        case SendFailed(reason=reason):
            return _send_failed(state, reason)
        case SuccessExpired():
            return _success_expired(state)
    raise TypeError(f"Unknown submission event: {event!r}")


def _edit_field(state: SubmissionState, name: FormField | str, value: str) -> TransitionResult:
    form_field = parse_field(name)
    if state.is_submitting:
        return TransitionResult(state, False, "SUBMISSION_IN_PROGRESS")
    errors = {k: v for k, v in state.errors.items() if k != form_field.value}
    return TransitionResult(
        replace(state, form=state.form.with_field(form_field, value), errors=errors),
        True,
    )


def _request_submit(state: SubmissionState) -> TransitionResult:
    if state.is_submitting:
        return TransitionResult(state, False, "SUBMISSION_IN_PROGRESS")
    if state.status not in _SUBMITTABLE_FROM:
        return TransitionResult(state, False, "NOT_SUBMITTABLE")
    validation = validate_form(state.form)
    if not validation.is_valid:
        return TransitionResult(
            replace(state, errors=dict(validation.errors)), False, "VALIDATION_FAILED",
        )
    return TransitionResult(
        replace(state, status=SubmissionStatus.SUBMITTING, errors={}), True,
    )


def _send_succeeded(state: SubmissionState) -> TransitionResult:
    if not state.is_submitting:
        return TransitionResult(state, False, "NOT_SUBMITTING")
    return TransitionResult(
        SubmissionState(status=SubmissionStatus.SUCCESS), True,
    )


def _send_failed(state: SubmissionState, reason: str | None) -> TransitionResult:
    if not state.is_submitting:
        return TransitionResult(state, False, "NOT_SUBMITTING")
    errors = dict(state.errors)
    errors[FormField.MESSAGE.value] = reason or SEND_FAILURE_FALLBACK
    return TransitionResult(
        replace(state, status=SubmissionStatus.ERROR, errors=errors), True,
    )


def _success_expired(state: SubmissionState) -> TransitionResult:
    if state.status != SubmissionStatus.SUCCESS:
        return TransitionResult(state, False, "NOT_SUCCESS")
    return TransitionResult(replace(state, status=SubmissionStatus.IDLE), True)
