"""
Pytest configuration and fixtures for Contact Relay tests.

Provides:
- Test settings with no real mail provider
- A recording fake mail sender
- Test client for API testing
"""

import asyncio
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import ContactConfig, Settings, get_settings
from app.dependencies import get_mail_sender
from app.main import app
from app.services.mail import (
    BaseMailSender,
    MailDeliveryError,
    MailMessage,
    MailSendOutcome,
)


# Override settings for testing
class TestSettings(Settings):
    environment: str = "test"
    debug: bool = True
    mail_provider: str = "none"
    mail_from: str = "relay@portfolio.dev"
    mail_from_name: str = "Portfolio Contact"
    to_email: str = "owner@portfolio.dev"
    mail_send_timeout_seconds: float = 0.2
    mail_verify_on_startup: bool = False
    smtp_host: str = ""
    smtp_user: str = ""
    smtp_password: str = ""
    gmail_user: str = ""
    gmail_app_password: str = ""
    resend_api_key: str = ""
    display_timezone: str = "UTC"


class FakeMailSender(BaseMailSender):
    """Mail sender test double that records messages.

    Args:
        mode: "sent", "failed", "raise" (MailDeliveryError), "timeout" or "crash"
    """

    provider_name = "fake"

    def __init__(self, mode: str = "sent", delay: float = 0.0) -> None:
        self.mode = mode
        self.delay = delay
        self.messages: list[MailMessage] = []

    @property
    def default_from(self) -> str:
        return "fake@portfolio.dev"

    async def send(self, message: MailMessage) -> MailSendOutcome:
        self.messages.append(message)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.mode == "timeout":
            await asyncio.sleep(10)
        if self.mode == "failed":
            return MailSendOutcome.failed(self.provider_name, "550 mailbox unavailable")
        if self.mode == "raise":
            raise MailDeliveryError("connection refused", provider=self.provider_name)
        if self.mode == "crash":
            raise RuntimeError("unexpected sender bug")
        return MailSendOutcome.sent(self.provider_name, f"<msg-{len(self.messages)}@fake>")


@pytest.fixture
def test_settings() -> TestSettings:
    return TestSettings()


@pytest.fixture
def contact_config() -> ContactConfig:
    return ContactConfig({})


@pytest.fixture
def make_mail_sender():
    """Factory for fake mail senders in a given mode."""

    def _create(mode: str = "sent", delay: float = 0.0) -> FakeMailSender:
        return FakeMailSender(mode=mode, delay=delay)

    return _create


@pytest.fixture
def mail_sender() -> FakeMailSender:
    """Fake sender injected into the API by the `client` fixture."""
    return FakeMailSender()


@pytest.fixture
def valid_payload() -> dict[str, str]:
    return {"name": "Al", "email": "a@b.com", "message": "Hello there!"}


@pytest_asyncio.fixture
async def client(
    test_settings: TestSettings, mail_sender: FakeMailSender
) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client with settings and mail sender overrides."""
    from app.core.rate_limit import limiter

    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_mail_sender] = lambda: mail_sender

    # Reset rate limiter storage before each test
    limiter.reset()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
