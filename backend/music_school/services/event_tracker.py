"""Event Tracker — fire-and-forget analytics helpers over an injected AnalyticsSink.

Invariants:
    - Helpers never await delivery; they schedule it and return immediately
    - Invalid helper input is logged and dropped, never raised
    - Scheduled tasks are referenced until done so they are not garbage-collected
    - Sink failures never reach the caller (sink.track is best-effort; task errors are logged)
"""

import asyncio
import logging
from typing import Any

from music_school.core.boundary_protocols import AnalyticsSink
from music_school.core.catalog import Course
from music_school.core.domain_types import AnalyticsEvent, CourseAction

logger = logging.getLogger(__name__)


class EventTracker:
    """Page/session-scoped analytics capability passed to components that emit events."""

    def __init__(self, sink: AnalyticsSink):
        self.sink = sink
        self._pending: set[asyncio.Task] = set()

    def emit(self, event_name: str, payload: dict[str, Any] | None = None) -> asyncio.Task:
        """Schedule delivery of one event and return the task."""
        task = asyncio.get_running_loop().create_task(
            self.sink.track(event_name, payload or {}),
        )
        self._pending.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Analytics task failed: {exc}", exc_info=exc)

    async def drain(self) -> None:
        """Wait for scheduled events (shutdown and tests)."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    @property
    def pending(self) -> int:
        return len(self._pending)

    # ─── Helpers ─────────────────────────────────────────────────

    def track_form_submission(self, form_name: str, success: bool) -> asyncio.Task | None:
        if not form_name or not isinstance(success, bool):
            logger.warning(f"Invalid form submission data: {form_name!r}, {success!r}")
            return None
        return self.emit(AnalyticsEvent.FORM_SUBMISSION.value, {
            "form_name": form_name,
            "success": success,
        })

    def track_course_interaction(
        self, course: Course, action: CourseAction, location: str = "courses_page",
    ) -> asyncio.Task | None:
        if not course.id:
            logger.warning(f"Invalid course interaction data: {course.id!r}, {action!r}")
            return None
        return self.emit(AnalyticsEvent.COURSE_INTERACTION.value, {
            "course_id": course.id,
            "course_title": course.title,
            "action": action.value,
            "location": location,
        })

    def track_course_click(
        self, course: Course, location: str = "featured_courses",
    ) -> asyncio.Task:
        return self.emit(AnalyticsEvent.COURSE_CLICK.value, {
            "course_id": course.id,
            "course_title": course.title,
            "location": location,
        })

    def track_button_click(self, button_name: str, location: str) -> asyncio.Task | None:
        if not button_name:
            logger.warning("Invalid button click data: empty button name")
            return None
        return self.emit(AnalyticsEvent.BUTTON_CLICK.value, {
            "button_name": button_name,
            "location": location,
        })

    def track_page_view(
        self,
        page: str,
        title: str,
        referrer: str | None = None,
        user_agent: str | None = None,
    ) -> asyncio.Task:
        return self.emit(AnalyticsEvent.PAGE_VIEW.value, {
            "page_path": page,
            "page_title": title,
            "referrer": referrer or "",
            "user_agent": user_agent or "",
        })

    def track_scroll_depth(self, depth: int) -> asyncio.Task | None:
        if not 0 <= depth <= 100:
            logger.warning(f"Invalid scroll depth: {depth!r}")
            return None
        return self.emit(AnalyticsEvent.SCROLL_DEPTH.value, {"depth": depth})
