"""EmailJS Client — message-send collaborator over the EmailJS REST API.

Invariants:
    - HTTP 200 is the only success indicator
    - Non-200 responses return SendResult(ok=False) with the service's reason text
    - Transport failures (timeout, connection) map to MessageSendError with a generic
      user-facing message; the transport detail stays in the log
    - No retry: a failed send surfaces to the user, who retries from the preserved form

Design Decisions:
    - httpx.AsyncClient injected or owned: tests pass an httpx.MockTransport client
"""

import logging

import httpx

from music_school.core.boundary_protocols import SendResult
from music_school.core.errors import ErrorContext, MessageSendError
from music_school.core.message_payload import MessagePayload

logger = logging.getLogger(__name__)

GENERIC_SEND_FAILURE = "Failed to send message"


class EmailJSSender:
    """Sends contact messages through an EmailJS template."""

    def __init__(
        self,
        *,
        api_url: str,
        service_id: str,
        template_id: str,
        public_key: str,
        private_key: str = "",
        timeout_seconds: float = 15.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_url = api_url
        self.service_id = service_id
        self.template_id = template_id
        self.public_key = public_key
        self.private_key = private_key
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout_seconds)

    @property
    def configured(self) -> bool:
        return bool(self.service_id and self.template_id and self.public_key)

    def _body(self, payload: MessagePayload) -> dict:
        body = {
            "service_id": self.service_id,
            "template_id": self.template_id,
            "user_id": self.public_key,
            "template_params": payload.as_template_params(),
        }
        if self.private_key:
            body["accessToken"] = self.private_key
        return body

    async def send(self, payload: MessagePayload) -> SendResult:
        """Post one message. Returns SendResult; raises MessageSendError on transport failure."""
        if not self.configured:
            logger.error("EmailJS credentials not configured")
            raise MessageSendError(
                "Message service is not configured",
                context=ErrorContext(user_message=GENERIC_SEND_FAILURE),
            )

        try:
            response = await self.client.post(self.api_url, json=self._body(payload))
        except httpx.TimeoutException as e:
            logger.warning(f"EmailJS timeout: {e}")
            raise MessageSendError(
                "Message service timed out",
                context=ErrorContext(user_message=GENERIC_SEND_FAILURE),
            ) from e
        except httpx.HTTPError as e:
            logger.warning(f"EmailJS transport error: {e}")
            raise MessageSendError(
                f"Message service unreachable: {e}",
                context=ErrorContext(user_message=GENERIC_SEND_FAILURE),
            ) from e

        if response.status_code == 200:
            logger.info(
                "Contact message sent",
                extra={"status_code": response.status_code},
            )
            return SendResult(ok=True, status_code=200)

        reason = response.text.strip() or GENERIC_SEND_FAILURE
        logger.warning(
            f"EmailJS rejected message: {reason}",
            extra={"status_code": response.status_code},
        )
        return SendResult(ok=False, status_code=response.status_code, reason=reason)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
