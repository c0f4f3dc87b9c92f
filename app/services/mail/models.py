"""Mail delivery models."""

from enum import Enum

from pydantic import BaseModel, Field


class MailSendStatus(str, Enum):
    """Result status of a delivery attempt."""

    SENT = "sent"  # Accepted by the provider
    FAILED = "failed"  # Provider error, auth rejected, timeout
    SKIPPED = "skipped"  # No provider configured


class MailMessage(BaseModel):
    """Normalized outbound email handed to a mail sender."""

    from_address: str
    to: str
    reply_to: str | None = None
    subject: str
    text: str
    html: str | None = None
    headers: dict[str, str] = Field(default_factory=dict)


class MailSendOutcome(BaseModel):
    """Result of attempting delivery: Sent, Failed, or Skipped."""

    status: MailSendStatus
    provider: str
    message_id: str | None = None
    reason: str | None = None

    @classmethod
    def sent(cls, provider: str, message_id: str | None = None) -> "MailSendOutcome":
        return cls(status=MailSendStatus.SENT, provider=provider, message_id=message_id)

    @classmethod
    def failed(cls, provider: str, reason: str) -> "MailSendOutcome":
        return cls(status=MailSendStatus.FAILED, provider=provider, reason=reason)

    @classmethod
    def skipped(cls, provider: str, reason: str) -> "MailSendOutcome":
        return cls(status=MailSendStatus.SKIPPED, provider=provider, reason=reason)

    @property
    def delivered(self) -> bool:
        return self.status == MailSendStatus.SENT


class MailDeliveryError(Exception):
    """Raised by a sender when a provider rejects or cannot accept a message."""

    def __init__(self, message: str, *, provider: str = "unknown") -> None:
        super().__init__(message)
        self.provider = provider
