"""Contact Routes — stateless validation plus per-instance contact form lifecycle.

Invariants:
    - Every form mutation goes through its SubmissionController
    - Submit while a send is in flight → 409, sender not called
    - Validation failure on submit → 200 with accepted=False and inline field errors
    - Send failure → 200 with status=error; the form is kept for retry
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Header, Response, status

from music_school.api.dependencies import get_form_registry
from music_school.config import Settings, get_settings
from music_school.core.domain_types import FormId
from music_school.core.errors import ErrorContext, SubmissionInProgressError
from music_school.core.validate_form import is_submittable, validate_form
from music_school.schemas.contact import (
    CaptchaUpdate,
    ContactConfig,
    ContactFieldsUpdate,
    ContactFormFields,
    ContactFormState,
    SubmitResponse,
    ValidationResponse,
)
from music_school.services.form_registry import FormRegistry
from music_school.services.submission_controller import SubmissionController

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/contact", tags=["contact"])


def _snapshot(form_id: UUID, controller: SubmissionController) -> ContactFormState:
    state = controller.state
    return ContactFormState.from_state(
        form_id, state, is_submittable(state.form, state.errors),
    )


@router.get("/config", response_model=ContactConfig)
async def contact_config(settings: Settings = Depends(get_settings)):
    return ContactConfig(
        form_name=settings.contact_form_name,
        recaptcha_site_key=settings.recaptcha_site_key,
    )


@router.post("/validate", response_model=ValidationResponse)
async def validate_contact(body: ContactFormFields):
    """Validate a full record without creating a form instance."""
    result = validate_form(body.to_form())
    return ValidationResponse(valid=result.is_valid, errors=result.errors)


@router.post("/forms", response_model=ContactFormState, status_code=status.HTTP_201_CREATED)
async def create_form(forms: FormRegistry = Depends(get_form_registry)):
    form_id, controller = forms.create()
    return _snapshot(form_id, controller)


@router.get("/forms/{form_id}", response_model=ContactFormState)
async def get_form(form_id: UUID, forms: FormRegistry = Depends(get_form_registry)):
    return _snapshot(form_id, forms.get(FormId(form_id)))


@router.patch("/forms/{form_id}", response_model=ContactFormState)
async def edit_form(
    form_id: UUID,
    body: ContactFieldsUpdate,
    forms: FormRegistry = Depends(get_form_registry),
):
    """Apply field edits; each edited field's error is cleared."""
    controller = forms.get(FormId(form_id))
    for name, value in body.changes().items():
        controller.edit_field(name, value)
    return _snapshot(form_id, controller)


@router.put("/forms/{form_id}/captcha", response_model=ContactFormState)
async def set_captcha(
    form_id: UUID,
    body: CaptchaUpdate,
    forms: FormRegistry = Depends(get_form_registry),
):
    controller = forms.get(FormId(form_id))
    controller.set_captcha(body.token)
    return _snapshot(form_id, controller)


@router.post("/forms/{form_id}/submit", response_model=SubmitResponse)
async def submit_form(
    form_id: UUID,
    user_agent: str | None = Header(None),
    forms: FormRegistry = Depends(get_form_registry),
):
    controller = forms.get(FormId(form_id))
    result = await controller.submit(user_agent=user_agent)
    if result.reason == "SUBMISSION_IN_PROGRESS":
        raise SubmissionInProgressError(ErrorContext(form_id=str(form_id)))
    return SubmitResponse(
        accepted=result.accepted,
        reason=result.reason,
        form=_snapshot(form_id, controller),
    )


@router.delete("/forms/{form_id}", status_code=status.HTTP_204_NO_CONTENT)
async def discard_form(form_id: UUID, forms: FormRegistry = Depends(get_form_registry)):
    forms.get(FormId(form_id))
    forms.discard(FormId(form_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
