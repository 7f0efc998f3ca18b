"""Message Payload — the structured record handed to the message-send collaborator."""

from dataclasses import dataclass, asdict
from datetime import datetime

from music_school.core.contact_form import ContactFormData


UNKNOWN_CLIENT = "Unknown"


@dataclass(frozen=True)
class MessagePayload:
    from_name: str
    from_email: str
    subject: str
    message: str
    timestamp: str
    user_agent: str

    def as_template_params(self) -> dict[str, str]:
        return asdict(self)


def build_message_payload(
    form: ContactFormData, sent_at: datetime, user_agent: str | None = None,
) -> MessagePayload:
    """Trimmed form values plus send time (ISO-8601) and client descriptor."""
    return MessagePayload(
        from_name=form.name.strip(),
        from_email=form.email.strip(),
        subject=form.subject.strip(),
        message=form.message.strip(),
        timestamp=sent_at.isoformat(),
        user_agent=user_agent or UNKNOWN_CLIENT,
    )
