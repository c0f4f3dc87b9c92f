"""Rendering of the notification email for a contact submission."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup, escape

from app.config import ContactConfig
from app.core.datetime_utils import format_display_timestamp, local_now

PREVIEW_LENGTH = 100


def nl2br(value: str) -> Markup:
    """Escape text and turn line breaks into <br> tags."""
    lines = str(value).replace("\r\n", "\n").split("\n")
    return Markup("<br>").join(escape(line) for line in lines)


# Initialize Jinja2 environment for email templates.
# Submitter fields are escaped in the HTML body, plain text is left as-is.
template_dir = Path(__file__).parent.parent.parent / "emails" / "templates"
jinja_env = Environment(
    loader=FileSystemLoader(template_dir),
    autoescape=select_autoescape(enabled_extensions=("html",), default_for_string=False),
    keep_trailing_newline=True,
)
jinja_env.filters["nl2br"] = nl2br


@dataclass
class RenderedEmail:
    """Subject and bodies ready to hand to a mail sender."""

    subject: str
    text: str
    html: str
    timestamp: str


def message_preview(message: str, length: int = PREVIEW_LENGTH) -> str:
    """Shorten a message for log lines."""
    if len(message) <= length:
        return message
    return message[:length] + "..."


def render_contact_email(
    name: str,
    email: str,
    message: str,
    config: ContactConfig,
    provider: str,
    sent_at: datetime | None = None,
    timezone: str = "",
) -> RenderedEmail:
    """
    Render the subject, plain-text and HTML bodies for a submission.

    Args:
        name: Submitter name
        email: Submitter email address
        message: Message body
        config: Site wording (subject prefix, footer)
        provider: Mail provider name shown in the body
        sent_at: Submission time (defaults to now in `timezone`)
        timezone: IANA timezone for the timestamp, empty for server local time

    Returns:
        RenderedEmail with subject, text, html and the formatted timestamp
    """
    timestamp = format_display_timestamp(sent_at or local_now(timezone))

    context = {
        "site_name": config.site_name,
        "footer_text": config.footer_text,
        "name": name,
        "email": email,
        "message": message,
        "timestamp": timestamp,
        "provider": provider,
    }

    # Header values must stay on one line
    subject_name = " ".join(name.split())

    return RenderedEmail(
        subject=f"{config.subject_prefix}: {subject_name}",
        text=jinja_env.get_template("contact.txt").render(**context),
        html=jinja_env.get_template("contact.html").render(**context),
        timestamp=timestamp,
    )
