"""Abstract base class for outbound mail providers."""

from abc import ABC, abstractmethod

from .models import MailMessage, MailSendOutcome


class BaseMailSender(ABC):
    """Abstract base class for mail providers."""

    provider_name: str = "unknown"

    @property
    def is_configured(self) -> bool:
        """Whether the provider has the credentials it needs."""
        return True

    @property
    def default_from(self) -> str:
        """Address used as the sender identity when none is configured."""
        return ""

    @property
    def default_recipient(self) -> str | None:
        """Inbox that receives submissions when TO_EMAIL is not set."""
        return None

    @abstractmethod
    async def send(self, message: MailMessage) -> MailSendOutcome:
        """
        Deliver a single message.

        Provider errors are converted to a FAILED outcome, never raised.

        Args:
            message: The message to deliver

        Returns:
            MailSendOutcome describing what happened
        """
        pass

    async def verify(self) -> bool:
        """
        Probe connectivity and credentials.

        Default policy: a configured provider is assumed reachable.
        """
        return self.is_configured
