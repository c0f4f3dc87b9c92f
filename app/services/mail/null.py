"""Null sender - used when no mail provider is configured."""

from .base import BaseMailSender
from .models import MailMessage, MailSendOutcome


class NullMailSender(BaseMailSender):
    """
    Sender that never delivers.

    Submissions are still accepted and logged by the handler.
    """

    provider_name = "none"

    def __init__(self, reason: str = "no provider configured") -> None:
        self.reason = reason

    @property
    def is_configured(self) -> bool:
        return False

    async def send(self, message: MailMessage) -> MailSendOutcome:
        """Always skip delivery."""
        return MailSendOutcome.skipped(self.provider_name, self.reason)
