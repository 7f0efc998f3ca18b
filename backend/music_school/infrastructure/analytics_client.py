"""Analytics Client — best-effort event delivery to the GA4 Measurement Protocol.

Invariants:
    - track() NEVER raises: every failure is logged and reported as False
    - At most max_attempts POSTs per event; delay before attempt n+1 is retry_delay_ms * n
    - Disabled client (non-production) only logs the event at debug level
    - Every event carries an ISO-8601 UTC timestamp

Design Decisions:
    - Linear backoff without jitter
    - client_id fixed per client instance (one analytics identity per app lifespan)
"""

import asyncio
import logging
import uuid
from datetime import datetime, timezone
from typing import Any

import httpx

from music_school.core.errors import AnalyticsDeliveryError

logger = logging.getLogger(__name__)


class AnalyticsClient:
    """Sends analytics events with bounded linear retry."""

    def __init__(
        self,
        *,
        endpoint: str,
        measurement_id: str = "",
        api_secret: str = "",
        enabled: bool = False,
        max_attempts: int = 3,
        retry_delay_ms: int = 1000,
        timeout_seconds: float = 5.0,
        client_id: str | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.endpoint = endpoint
        self.measurement_id = measurement_id
        self.api_secret = api_secret
        self.enabled = enabled
        self.max_attempts = max(1, max_attempts)
        self.retry_delay_ms = retry_delay_ms
        self.client_id = client_id or str(uuid.uuid4())
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout_seconds)

    async def track(self, event_name: str, payload: dict[str, Any] | None = None) -> bool:
        """Deliver one event. Returns True when the collector accepted it."""
        params = {
            **(payload or {}),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if not self.enabled:
            logger.debug(
                f"Analytics event (not sent): {params}",
                extra={"event_name": event_name},
            )
            return False

        for attempt in range(1, self.max_attempts + 1):
            try:
                await self._post(event_name, params)
                return True
            except AnalyticsDeliveryError as e:
                logger.warning(
                    f"Analytics error: {e.message}",
                    extra={"event_name": event_name, "attempt": attempt},
                )
            except Exception as e:
                logger.error(
                    f"Unexpected analytics error: {e}",
                    extra={"event_name": event_name, "attempt": attempt},
                    exc_info=True,
                )
            if attempt < self.max_attempts:
                await asyncio.sleep(self._backoff(attempt) / 1000)

        logger.error(
            f"Analytics event dropped after {self.max_attempts} attempts",
            extra={"event_name": event_name},
        )
        return False

    async def _post(self, event_name: str, params: dict[str, Any]) -> None:
        body = {
            "client_id": self.client_id,
            "events": [{"name": event_name, "params": params}],
        }
        try:
            response = await self.client.post(
                self.endpoint,
                params={
                    "measurement_id": self.measurement_id,
                    "api_secret": self.api_secret,
                },
                json=body,
            )
        except httpx.HTTPError as e:
            raise AnalyticsDeliveryError(event_name, str(e)) from e
        if response.status_code >= 400:
            raise AnalyticsDeliveryError(
                event_name, f"collector returned {response.status_code}",
            )

    def _backoff(self, attempt: int) -> int:
        """Linear backoff: retry_delay_ms, 2x, 3x, ..."""
        return self.retry_delay_ms * attempt

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
