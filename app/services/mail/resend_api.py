"""Resend transactional email provider."""

import asyncio

import resend
from resend.exceptions import ResendError

from app.core.logging import get_logger

from .base import BaseMailSender
from .models import MailMessage, MailSendOutcome

logger = get_logger(__name__)


class ResendMailSender(BaseMailSender):
    """Mail delivery using the Resend API."""

    provider_name = "resend"

    def __init__(
        self,
        api_key: str,
        from_address: str = "onboarding@resend.dev",
        recipient: str = "",
    ) -> None:
        """
        Initialize Resend sender.

        Args:
            api_key: Resend API key
            from_address: Verified sender address (or Resend's onboarding address)
            recipient: Default inbox for submissions
        """
        self.api_key = api_key
        self.from_address = from_address
        self.recipient = recipient

    @property
    def is_configured(self) -> bool:
        # Requires an operator inbox (TO_EMAIL) as well as the key
        return bool(self.api_key and self.recipient)

    @property
    def default_from(self) -> str:
        return self.from_address

    @property
    def default_recipient(self) -> str | None:
        return self.recipient or None

    async def send(self, message: MailMessage) -> MailSendOutcome:
        """Send a message through the Resend API in a worker thread."""
        if not self.is_configured:
            return MailSendOutcome.skipped(self.provider_name, "no provider configured")

        params = self._build_params(message)
        try:
            response = await asyncio.to_thread(self._send_sync, params)
        except (ResendError, OSError) as e:
            logger.bind(error=str(e)).error("resend_send_failed")
            return MailSendOutcome.failed(self.provider_name, str(e) or type(e).__name__)

        message_id = response.get("id") if isinstance(response, dict) else None
        logger.bind(message_id=message_id).info("resend_sent")
        return MailSendOutcome.sent(self.provider_name, message_id)

    def _send_sync(self, params: dict) -> dict:
        resend.api_key = self.api_key
        return resend.Emails.send(params)

    def _build_params(self, message: MailMessage) -> dict:
        params: dict = {
            "from": message.from_address,
            "to": [message.to],
            "subject": message.subject,
            "text": message.text,
        }
        if message.html:
            params["html"] = message.html
        if message.reply_to:
            params["reply_to"] = message.reply_to
        if message.headers:
            params["headers"] = dict(message.headers)
        return params
