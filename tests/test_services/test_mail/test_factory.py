"""Tests for mail sender selection."""

from unittest.mock import patch

import pytest

from app.config import Settings
from app.services.mail import (
    GmailMailSender,
    NullMailSender,
    ResendMailSender,
    SmtpMailSender,
    build_mail_sender,
)

SMTP = {"smtp_host": "smtp.example.net", "smtp_user": "me@example.net", "smtp_password": "pw"}
GMAIL = {"gmail_user": "me@gmail.com", "gmail_app_password": "app-pw"}
RESEND = {"resend_api_key": "re_123", "to_email": "owner@portfolio.dev"}


def _settings(**overrides) -> Settings:
    base = {
        "mail_provider": "auto",
        "smtp_host": "",
        "smtp_user": "",
        "smtp_password": "",
        "gmail_user": "",
        "gmail_app_password": "",
        "resend_api_key": "",
    }
    base.update(overrides)
    return Settings(_env_file=None, **base)


class TestAutoSelection:
    """Tests for MAIL_PROVIDER=auto."""

    def test_nothing_configured_is_null(self):
        sender = build_mail_sender(_settings())

        assert isinstance(sender, NullMailSender)
        assert sender.is_configured is False

    def test_resend_preferred(self):
        sender = build_mail_sender(_settings(**RESEND, **SMTP, **GMAIL))

        assert isinstance(sender, ResendMailSender)

    def test_smtp_before_gmail(self):
        sender = build_mail_sender(_settings(**SMTP, **GMAIL))

        assert type(sender) is SmtpMailSender

    def test_gmail_last(self):
        sender = build_mail_sender(_settings(**GMAIL))

        assert isinstance(sender, GmailMailSender)
        assert sender.host == "smtp.gmail.com"
        assert sender.port == 465
        assert sender.use_ssl is True

    def test_resend_key_without_recipient_is_skipped(self):
        sender = build_mail_sender(_settings(resend_api_key="re_123", to_email="", mail_from=""))

        assert isinstance(sender, NullMailSender)

    def test_resend_key_without_recipient_falls_through_to_smtp(self):
        sender = build_mail_sender(_settings(resend_api_key="re_123", to_email="", **SMTP))

        assert type(sender) is SmtpMailSender

    def test_partial_smtp_credentials_ignored(self):
        sender = build_mail_sender(_settings(smtp_host="smtp.example.net", smtp_user="me"))

        assert isinstance(sender, NullMailSender)


class TestExplicitSelection:
    """Tests for an explicit MAIL_PROVIDER."""

    @pytest.mark.parametrize(
        ("provider", "expected"),
        [
            ("smtp", SmtpMailSender),
            ("gmail", GmailMailSender),
            ("resend", ResendMailSender),
        ],
    )
    def test_explicit_provider(self, provider, expected):
        sender = build_mail_sender(_settings(mail_provider=provider, **SMTP, **GMAIL, **RESEND))

        assert type(sender) is expected

    def test_explicit_provider_missing_credentials(self):
        sender = build_mail_sender(_settings(mail_provider="smtp", **RESEND))

        assert isinstance(sender, NullMailSender)

    def test_none_disables_mail(self):
        sender = build_mail_sender(_settings(mail_provider="none", **RESEND))

        assert isinstance(sender, NullMailSender)

    def test_unknown_provider(self):
        sender = build_mail_sender(_settings(mail_provider="carrier-pigeon", **RESEND))

        assert isinstance(sender, NullMailSender)
        assert "carrier-pigeon" in sender.reason

    def test_provider_name_is_case_insensitive(self):
        sender = build_mail_sender(_settings(mail_provider=" Resend ", **RESEND))

        assert isinstance(sender, ResendMailSender)

    def test_timeout_is_passed_to_smtp(self):
        sender = build_mail_sender(_settings(mail_send_timeout_seconds=7.5, **SMTP))

        assert sender.timeout_seconds == 7.5


class TestSenderDependency:
    """Tests for the per-process sender used by the API."""

    def test_sender_is_built_once(self):
        from app.dependencies import get_mail_sender

        get_mail_sender.cache_clear()
        with patch("app.dependencies.build_mail_sender", return_value=NullMailSender()) as build:
            first = get_mail_sender()
            second = get_mail_sender()
        get_mail_sender.cache_clear()

        assert first is second
        build.assert_called_once()
