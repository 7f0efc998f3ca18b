"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - External collaborators (message send, analytics) accessed through Protocol types
    - Implementations provided by shell via dependency injection, scoped to the app lifespan

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - AnalyticsSink.track never raises: callers treat it as fire-and-forget
"""

from dataclasses import dataclass
from typing import Any, Protocol

from music_school.core.message_payload import MessagePayload


@dataclass(frozen=True)
class SendResult:
    """Outcome reported by the message-send collaborator."""
    ok: bool
    status_code: int | None = None
    reason: str | None = None


class MessageSender(Protocol):
    """Contract for delivering contact messages — implemented by shell."""
    async def send(self, payload: MessagePayload) -> SendResult: ...


class AnalyticsSink(Protocol):
    """Contract for best-effort event delivery — implemented by shell."""
    async def track(self, event_name: str, payload: dict[str, Any] | None = None) -> bool: ...
