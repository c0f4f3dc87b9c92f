"""Contact form validation.

Rules are independent and every failure is reported, in this order:
name, email, message, then the upper length limits.
"""

import re

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
MESSAGE_MIN_LENGTH = 10
DEFAULT_MESSAGE_MAX_LENGTH = 5000

# local@domain.tld: one @, a dot after it, no whitespace anywhere
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

NAME_TOO_SHORT = f"Name must be at least {NAME_MIN_LENGTH} characters"
NAME_TOO_LONG = f"Name must be less than {NAME_MAX_LENGTH} characters"
INVALID_EMAIL = "Please provide a valid email address"
MESSAGE_TOO_SHORT = f"Message must be at least {MESSAGE_MIN_LENGTH} characters"


def message_too_long(max_length: int) -> str:
    return f"Message must be less than {max_length} characters"


def is_valid_email(email: str) -> bool:
    """Check the simple local@domain.tld shape."""
    return EMAIL_PATTERN.fullmatch(email) is not None


def validate_contact_form(
    name: str | None,
    email: str | None,
    message: str | None,
    max_message_length: int = DEFAULT_MESSAGE_MAX_LENGTH,
) -> list[str]:
    """
    Validate a contact form submission.

    Args:
        name: Submitter name
        email: Submitter email address
        message: Message body
        max_message_length: Upper bound on the raw message length

    Returns:
        Error messages in check order (empty list = valid)
    """
    errors: list[str] = []

    if not name or len(name.strip()) < NAME_MIN_LENGTH:
        errors.append(NAME_TOO_SHORT)

    if not email or not is_valid_email(email):
        errors.append(INVALID_EMAIL)

    if not message or len(message.strip()) < MESSAGE_MIN_LENGTH:
        errors.append(MESSAGE_TOO_SHORT)

    if name and len(name.strip()) > NAME_MAX_LENGTH:
        errors.append(NAME_TOO_LONG)

    if message and len(message) > max_message_length:
        errors.append(message_too_long(max_message_length))

    return errors
