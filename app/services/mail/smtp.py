"""SMTP relay mail provider."""

import asyncio
import smtplib
import ssl
from email.message import EmailMessage
from email.utils import make_msgid, parseaddr

from app.core.logging import get_logger

from .base import BaseMailSender
from .models import MailMessage, MailSendOutcome

logger = get_logger(__name__)


class SmtpMailSender(BaseMailSender):
    """Mail delivery over an authenticated SMTP relay."""

    provider_name = "smtp"

    def __init__(
        self,
        host: str,
        username: str,
        password: str,
        port: int = 587,
        use_ssl: bool = False,
        timeout_seconds: float = 15.0,
    ) -> None:
        """
        Initialize SMTP sender.

        Args:
            host: SMTP server hostname
            username: Login user, also the default sender and recipient
            password: Login password or app password
            port: Server port (587 for STARTTLS, 465 for implicit TLS)
            use_ssl: Use implicit TLS instead of STARTTLS
            timeout_seconds: Socket timeout for connect and each command
        """
        self.host = host
        self.username = username
        self.password = password
        self.port = port
        self.use_ssl = use_ssl
        self.timeout_seconds = timeout_seconds

    @property
    def is_configured(self) -> bool:
        return bool(self.host and self.username and self.password)

    @property
    def default_from(self) -> str:
        return self.username

    @property
    def default_recipient(self) -> str | None:
        return self.username or None

    async def send(self, message: MailMessage) -> MailSendOutcome:
        """Send a message through the relay in a worker thread."""
        if not self.is_configured:
            return MailSendOutcome.skipped(self.provider_name, "no provider configured")

        try:
            message_id = await asyncio.to_thread(self._send_sync, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.bind(host=self.host, error=str(e)).error(f"{self.provider_name}_send_failed")
            return MailSendOutcome.failed(self.provider_name, str(e) or type(e).__name__)

        logger.bind(host=self.host, message_id=message_id).info(f"{self.provider_name}_sent")
        return MailSendOutcome.sent(self.provider_name, message_id)

    async def verify(self) -> bool:
        """Connect and log in without sending anything."""
        if not self.is_configured:
            return False

        try:
            await asyncio.to_thread(self._verify_sync)
        except (smtplib.SMTPException, OSError) as e:
            logger.bind(host=self.host, error=str(e)).warning(
                f"{self.provider_name}_verify_failed"
            )
            return False
        return True

    def _connect(self) -> smtplib.SMTP:
        """Open an authenticated connection."""
        context = ssl.create_default_context()
        server: smtplib.SMTP
        if self.use_ssl:
            server = smtplib.SMTP_SSL(
                self.host, self.port, timeout=self.timeout_seconds, context=context
            )
        else:
            server = smtplib.SMTP(self.host, self.port, timeout=self.timeout_seconds)

        try:
            if not self.use_ssl:
                server.ehlo()
                if server.has_extn("starttls"):
                    server.starttls(context=context)
                    server.ehlo()
            server.login(self.username, self.password)
        except (smtplib.SMTPException, OSError):
            server.close()
            raise
        return server

    def _verify_sync(self) -> None:
        with self._connect() as server:
            server.noop()

    def _send_sync(self, message: MailMessage) -> str:
        mime = self._build_mime(message)
        with self._connect() as server:
            server.send_message(mime)
        return mime["Message-ID"]

    def _build_mime(self, message: MailMessage) -> EmailMessage:
        """Convert a MailMessage to a multipart/alternative MIME message."""
        mime = EmailMessage()
        mime["From"] = message.from_address
        mime["To"] = message.to
        if message.reply_to:
            mime["Reply-To"] = message.reply_to
        mime["Subject"] = message.subject

        _, sender = parseaddr(message.from_address)
        domain = sender.rsplit("@", 1)[-1] if "@" in sender else None
        mime["Message-ID"] = make_msgid(domain=domain)

        for name, value in message.headers.items():
            mime[name] = value

        mime.set_content(message.text)
        if message.html:
            mime.add_alternative(message.html, subtype="html")
        return mime
