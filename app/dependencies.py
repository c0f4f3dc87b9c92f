from functools import lru_cache
from typing import Annotated, Any

from fastapi import Depends, Request

from app.config import AppConfig, Settings, get_config, get_settings
from app.schemas.contact import ContactRequest
from app.services.contact import ContactSubmissionHandler
from app.services.mail import BaseMailSender, build_mail_sender

# Type aliases for dependency injection
AppSettings = Annotated[Settings, Depends(get_settings)]
Config = Annotated[AppConfig, Depends(get_config)]

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


@lru_cache
def get_mail_sender() -> BaseMailSender:
    """Build the configured mail sender once per process."""
    return build_mail_sender(get_settings())


MailSender = Annotated[BaseMailSender, Depends(get_mail_sender)]


async def get_contact_submission(request: Request) -> ContactRequest:
    """
    Read a submission from a JSON body or an HTML form post.

    Absent, non-string or unreadable fields come through as None so the
    form validator reports every rule on its own.
    """
    content_type = request.headers.get("content-type", "")
    data: Any
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        data = dict(form)
    else:
        try:
            data = await request.json()
        except ValueError:
            data = {}

    if not isinstance(data, dict):
        data = {}
    fields = {
        field: value
        for field in ContactRequest.model_fields
        if isinstance(value := data.get(field), str)
    }
    return ContactRequest(**fields)


Submission = Annotated[ContactRequest, Depends(get_contact_submission)]


def get_contact_handler(
    sender: MailSender,
    settings: AppSettings,
    config: Config,
) -> ContactSubmissionHandler:
    """Wire the submission handler with its collaborators."""
    return ContactSubmissionHandler(sender=sender, settings=settings, config=config.contact)


ContactHandler = Annotated[ContactSubmissionHandler, Depends(get_contact_handler)]
