"""
Contact submission pipeline: validate, render, deliver, respond.

Delivery problems never fail the request. A submission that passed
validation is always acknowledged with 200; `emailSent` tells the client
whether the notification actually went out, and the outcome is logged
for operators.
"""

import asyncio
from dataclasses import dataclass
from email.utils import formataddr
from typing import Any

from app.config import ContactConfig, Settings
from app.core.datetime_utils import iso_timestamp
from app.core.logging import get_logger
from app.schemas.contact import (
    ContactRequest,
    ContactResponse,
    ErrorResponse,
    ValidationFailedResponse,
)
from app.services.contact.content import message_preview, render_contact_email
from app.services.contact.validator import validate_contact_form
from app.services.mail import (
    BaseMailSender,
    MailDeliveryError,
    MailMessage,
    MailSendOutcome,
    MailSendStatus,
)

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


@dataclass
class HandlerResponse:
    """HTTP status and JSON body produced for one submission."""

    status_code: int
    body: dict[str, Any]


class ContactSubmissionHandler:
    """Orchestrates a single contact form submission."""

    def __init__(
        self,
        sender: BaseMailSender,
        settings: Settings,
        config: ContactConfig,
    ) -> None:
        self.sender = sender
        self.settings = settings
        self.config = config

    async def handle(self, submission: ContactRequest) -> HandlerResponse:
        """
        Process a submission end to end.

        Returns:
            400 with itemized errors for invalid input, 200 once accepted
            (sent or logged), 500 only for unexpected internal faults
        """
        try:
            return await self._process(submission)
        except Exception:
            logger.exception("contact_submission_internal_error")
            body = ErrorResponse(message=INTERNAL_ERROR_MESSAGE, timestamp=iso_timestamp())
            return HandlerResponse(
                status_code=500,
                body=body.model_dump(by_alias=True, exclude_none=True),
            )

    async def _process(self, submission: ContactRequest) -> HandlerResponse:
        errors = validate_contact_form(
            submission.name,
            submission.email,
            submission.message,
            max_message_length=self.settings.message_max_length,
        )
        if errors:
            logger.bind(errors=errors).info("contact_validation_failed")
            return HandlerResponse(
                status_code=400,
                body=ValidationFailedResponse(errors=errors).model_dump(by_alias=True),
            )

        # Validation guarantees all three fields are present
        name = str(submission.name)
        email = str(submission.email)
        message = str(submission.message)

        rendered = render_contact_email(
            name,
            email,
            message,
            config=self.config,
            provider=self.sender.provider_name,
            timezone=self.settings.display_timezone,
        )

        logger.bind(
            submitter=name,
            email=email,
            message_preview=message_preview(message),
            provider=self.sender.provider_name,
            provider_configured=self.sender.is_configured,
        ).info("contact_submission_received")

        mail = self.build_message(
            reply_to=email,
            subject=rendered.subject,
            text=rendered.text,
            html=rendered.html,
        )
        outcome = await self._deliver(mail)
        self._log_outcome(outcome, email)

        response = ContactResponse(
            message=self.config.sent_message if outcome.delivered else self.config.logged_message,
            timestamp=iso_timestamp(),
            email_sent=outcome.delivered,
            provider_used=self.sender.is_configured,
            note=None if outcome.delivered else self.config.logged_note,
        )
        return HandlerResponse(
            status_code=200,
            body=response.model_dump(by_alias=True, exclude_none=True),
        )

    def build_message(
        self,
        reply_to: str | None,
        subject: str,
        text: str,
        html: str | None,
    ) -> MailMessage:
        """Address a message from the service identity to the configured inbox."""
        from_address = self.settings.mail_from or self.sender.default_from
        if from_address and self.settings.mail_from_name:
            from_address = formataddr((self.settings.mail_from_name, from_address))

        # The provider's sender identity is never used as the recipient
        recipient = (
            self.settings.to_email or self.sender.default_recipient or self.settings.mail_from
        )

        return MailMessage(
            from_address=from_address,
            to=recipient,
            reply_to=reply_to,
            subject=subject,
            text=text,
            html=html,
            headers={
                "X-Contact-Form": "true",
                "X-Mail-Provider": self.sender.provider_name,
            },
        )

    async def _deliver(self, mail: MailMessage) -> MailSendOutcome:
        """Send with a timeout, converting delivery errors to a FAILED outcome."""
        provider = self.sender.provider_name
        if not mail.to:
            return MailSendOutcome.skipped(provider, "no recipient configured")
        try:
            return await asyncio.wait_for(
                self.sender.send(mail),
                timeout=self.settings.mail_send_timeout_seconds,
            )
        except TimeoutError:
            return MailSendOutcome.failed(provider, "timeout")
        except MailDeliveryError as e:
            return MailSendOutcome.failed(provider, str(e))

    def _log_outcome(self, outcome: MailSendOutcome, email: str) -> None:
        log = logger.bind(
            email=email,
            provider=outcome.provider,
            status=outcome.status.value,
            message_id=outcome.message_id,
            reason=outcome.reason,
        )
        if outcome.status == MailSendStatus.SENT:
            log.info("contact_email_sent")
        elif outcome.status == MailSendStatus.FAILED:
            log.warning("contact_email_failed")
        else:
            log.info("contact_email_skipped")
