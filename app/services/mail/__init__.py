"""Outbound mail delivery with provider abstraction."""

from app.config import Settings
from app.core.logging import get_logger

from .base import BaseMailSender
from .gmail import GmailMailSender
from .models import MailDeliveryError, MailMessage, MailSendOutcome, MailSendStatus
from .null import NullMailSender
from .resend_api import ResendMailSender
from .smtp import SmtpMailSender

__all__ = [
    "BaseMailSender",
    "GmailMailSender",
    "MailDeliveryError",
    "MailMessage",
    "MailSendOutcome",
    "MailSendStatus",
    "NullMailSender",
    "ResendMailSender",
    "SmtpMailSender",
    "build_mail_sender",
]

logger = get_logger(__name__)

MAIL_PROVIDERS = ("auto", "smtp", "gmail", "resend", "none")


def _build_smtp(settings: Settings) -> SmtpMailSender:
    return SmtpMailSender(
        host=settings.smtp_host,
        username=settings.smtp_user,
        password=settings.smtp_password,
        port=settings.smtp_port,
        use_ssl=settings.smtp_secure,
        timeout_seconds=settings.mail_send_timeout_seconds,
    )


def _build_gmail(settings: Settings) -> GmailMailSender:
    return GmailMailSender(
        username=settings.gmail_user,
        app_password=settings.gmail_app_password,
        timeout_seconds=settings.mail_send_timeout_seconds,
    )


def _build_resend(settings: Settings) -> ResendMailSender:
    return ResendMailSender(
        api_key=settings.resend_api_key,
        from_address=settings.resend_from,
        recipient=settings.to_email,
    )


_BUILDERS = {
    "smtp": _build_smtp,
    "gmail": _build_gmail,
    "resend": _build_resend,
}


def build_mail_sender(settings: Settings) -> BaseMailSender:
    """
    Build the mail sender selected by MAIL_PROVIDER.

    "auto" picks the first provider with credentials (Resend, SMTP, Gmail).
    Falls back to NullMailSender when nothing usable is configured.
    """
    provider = settings.mail_provider.strip().lower()

    if provider not in MAIL_PROVIDERS:
        logger.bind(provider=provider).warning("unknown_mail_provider")
        return NullMailSender(reason=f"unknown provider: {provider}")

    if provider == "none":
        return NullMailSender()

    if provider == "auto":
        for name in ("resend", "smtp", "gmail"):
            sender = _BUILDERS[name](settings)
            if sender.is_configured:
                return sender
        return NullMailSender()

    sender = _BUILDERS[provider](settings)
    if not sender.is_configured:
        logger.bind(provider=provider).warning("mail_provider_credentials_missing")
        return NullMailSender()
    return sender
