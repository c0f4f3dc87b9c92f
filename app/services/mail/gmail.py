"""Gmail mail provider (SMTP with an app password)."""

from .smtp import SmtpMailSender

GMAIL_SMTP_HOST = "smtp.gmail.com"
GMAIL_SMTP_PORT = 465


class GmailMailSender(SmtpMailSender):
    """Send through a Gmail account over implicit TLS."""

    provider_name = "gmail"

    def __init__(self, username: str, app_password: str, timeout_seconds: float = 15.0) -> None:
        super().__init__(
            host=GMAIL_SMTP_HOST,
            username=username,
            password=app_password,
            port=GMAIL_SMTP_PORT,
            use_ssl=True,
            timeout_seconds=timeout_seconds,
        )
