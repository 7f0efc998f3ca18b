"""Form Registry — bounded in-memory map of live contact form instances.

Invariants:
    - One SubmissionController per FormId; ids are random UUIDs
    - Unknown or evicted ids raise ResourceNotFoundError (404)
    - Forms untouched for ttl_seconds are evicted on the next create()
    - At most max_forms live instances; create() evicts the least recently touched
    - Every removal (discard, eviction, shutdown) closes the controller

Design Decisions:
    - In-memory dict, not DB/Redis: single-process uvicorn, form state is page-scoped
      and lost on restart
    - OrderedDict kept in last-touched order: the oldest entry is always first
"""

import logging
import time
import uuid
from collections import OrderedDict
from collections.abc import Callable

from music_school.core.domain_types import FormId
from music_school.core.errors import ResourceNotFoundError
from music_school.services.submission_controller import SubmissionController

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 1800.0
DEFAULT_MAX_FORMS = 1000


class FormRegistry:
    """Creates, looks up and evicts contact form controllers."""

    def __init__(
        self,
        factory: Callable[[FormId], SubmissionController],
        *,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        max_forms: int = DEFAULT_MAX_FORMS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._factory = factory
        self.ttl_seconds = ttl_seconds
        self.max_forms = max(1, max_forms)
        self._clock = clock
        self._forms: OrderedDict[FormId, SubmissionController] = OrderedDict()
        self._touched: dict[FormId, float] = {}

    def create(self) -> tuple[FormId, SubmissionController]:
        self._evict_expired()
        while len(self._forms) >= self.max_forms:
            oldest = next(iter(self._forms))
            self._evict(oldest, "capacity")

        form_id = FormId(uuid.uuid4())
        controller = self._factory(form_id)
        self._forms[form_id] = controller
        self._touched[form_id] = self._clock()
        logger.info("Contact form created", extra={"form_id": str(form_id)})
        return form_id, controller

    def get(self, form_id: FormId) -> SubmissionController:
        controller = self._forms.get(form_id)
        if controller is None:
            raise ResourceNotFoundError("ContactForm", str(form_id))
        self._forms.move_to_end(form_id)
        self._touched[form_id] = self._clock()
        return controller

    def discard(self, form_id: FormId) -> None:
        controller = self._forms.pop(form_id, None)
        self._touched.pop(form_id, None)
        if controller is not None:
            controller.close()

    def close_all(self) -> None:
        for controller in self._forms.values():
            controller.close()
        self._forms.clear()
        self._touched.clear()

    def _evict_expired(self) -> None:
        cutoff = self._clock() - self.ttl_seconds
        while self._forms:
            oldest = next(iter(self._forms))
            if self._touched[oldest] > cutoff:
                break
            self._evict(oldest, "expired")

    def _evict(self, form_id: FormId, reason: str) -> None:
        logger.info(
            f"Contact form evicted ({reason})", extra={"form_id": str(form_id)},
        )
        self.discard(form_id)

    def __contains__(self, form_id: object) -> bool:
        return form_id in self._forms

    def __len__(self) -> int:
        return len(self._forms)
