"""Submission Controller — orchestrates validation, message send, and analytics for one form.

Invariants:
    - All state changes go through core.submission_state.transition (no ad-hoc flags)
    - At most one send in flight: the submitting state is entered BEFORE the first await
    - Send failures of any kind end in the error state with the form preserved
    - Analytics events are scheduled, never awaited; their outcome never changes state
    - A success schedules SuccessExpired after reset_delay_seconds; closing cancels it

Design Decisions:
    - Sender and tracker injected per instance (no global tracking hook)
    - Unexpected sender exceptions are logged with traceback and shown as the generic fallback
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timezone

from music_school.core.boundary_protocols import MessageSender
from music_school.core.domain_types import FormField
from music_school.core.errors import (
    ErrorContext,
    MessageSendError,
    SubmissionInProgressError,
)
from music_school.core.message_payload import build_message_payload
from music_school.core.submission_state import (
    CaptchaChanged,
    FieldEdited,
    SendFailed,
    SendSucceeded,
    SubmissionEvent,
    SubmissionState,
    SubmitRequested,
    SuccessExpired,
    TransitionResult,
    transition,
)
from music_school.services.event_tracker import EventTracker

logger = logging.getLogger(__name__)

SEND_REJECTED_REASON = "Failed to send message"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SubmissionController:
    """Owns one contact form instance's state for the lifetime of a page."""

    def __init__(
        self,
        sender: MessageSender,
        tracker: EventTracker,
        *,
        form_id: str = "",
        form_name: str = "contact_form_secure",
        reset_delay_seconds: float = 5.0,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.sender = sender
        self.tracker = tracker
        self.form_id = form_id
        self.form_name = form_name
        self.reset_delay_seconds = reset_delay_seconds
        self.clock = clock
        self.state = SubmissionState()
        self._reset_task: asyncio.Task | None = None

    def apply(self, event: SubmissionEvent) -> TransitionResult:
        result = transition(self.state, event)
        self.state = result.state
        return result

    # ─── User input ──────────────────────────────────────────────

    def edit_field(self, field: FormField | str, value: str) -> SubmissionState:
        """Set one field and clear its error. Rejected while a send is in flight."""
        result = self.apply(FieldEdited(field, value))
        if not result.accepted:
            raise SubmissionInProgressError(ErrorContext(form_id=self.form_id))
        return self.state

    def set_captcha(self, token: str | None) -> SubmissionState:
        """Record the captcha token. Informational; never gates submission."""
        self.apply(CaptchaChanged(token))
        return self.state

    # ─── Submit ──────────────────────────────────────────────────

    async def submit(self, user_agent: str | None = None) -> TransitionResult:
        """Validate, send, and settle into success or error."""
        started = self.apply(SubmitRequested())
        if not started.accepted:
            logger.info(
                f"Submit rejected: {started.reason}",
                extra={"form_id": self.form_id, "status": self.state.status.value},
            )
            return started

        payload = build_message_payload(self.state.form, self.clock(), user_agent)
        outcome = await self._send(payload)
        result = self.apply(outcome)

        success = isinstance(outcome, SendSucceeded)
        self.tracker.track_form_submission(self.form_name, success)
        if success:
            self._schedule_reset()
        logger.info(
            "Contact form submission settled",
            extra={"form_id": self.form_id, "status": self.state.status.value},
        )
        return result

    async def _send(self, payload) -> SendSucceeded | SendFailed:
        try:
            send_result = await self.sender.send(payload)
        except MessageSendError as e:
            logger.warning(
                f"Message send failed: {e.message}",
                extra={"form_id": self.form_id, "error_code": e.code},
            )
            return SendFailed(e.context.user_message or e.message)
        except Exception as e:
            logger.error(
                f"Unexpected error submitting form: {e}",
                extra={"form_id": self.form_id},
                exc_info=True,
            )
            return SendFailed(None)

        if send_result.ok:
            return SendSucceeded()
        return SendFailed(send_result.reason or SEND_REJECTED_REASON)

    # ─── Success auto-reset ──────────────────────────────────────

    def _schedule_reset(self) -> None:
        self._cancel_reset()
        self._reset_task = asyncio.get_running_loop().create_task(
            self._expire_after(self.reset_delay_seconds),
        )

    async def _expire_after(self, delay: float) -> None:
        await asyncio.sleep(delay)
        self.apply(SuccessExpired())

    def _cancel_reset(self) -> None:
        if self._reset_task is not None and not self._reset_task.done():
            self._reset_task.cancel()
        self._reset_task = None

    async def wait_for_reset(self) -> None:
        """Await the pending success → idle transition, if any."""
        if self._reset_task is not None:
            await self._reset_task

    def close(self) -> None:
        self._cancel_reset()
