"""Contact form validation, rendering and submission handling."""

from .content import RenderedEmail, render_contact_email
from .handler import ContactSubmissionHandler, HandlerResponse
from .validator import validate_contact_form

__all__ = [
    "ContactSubmissionHandler",
    "HandlerResponse",
    "RenderedEmail",
    "render_contact_email",
    "validate_contact_form",
]
