from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    environment: str = Field(default="production")
    debug: bool = Field(default=False)
    log_json: bool = Field(default=False)  # One JSON object per log line
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)
    config_path: str = Field(default="config.yml")

    # CORS (comma-separated, supports exact origins and *.domain wildcards)
    allowed_origins: str = Field(
        default="https://*.github.io,http://localhost:5500,http://127.0.0.1:5500"
    )

    # Rate limiting
    rate_limit_max_requests: int = Field(default=30)
    rate_limit_window_minutes: int = Field(default=15)

    # Mail delivery
    mail_provider: str = Field(default="auto")  # auto, smtp, gmail, resend, none
    mail_from: str = Field(default="")
    mail_from_name: str = Field(default="Portfolio Contact")
    to_email: str = Field(default="")
    mail_send_timeout_seconds: float = Field(default=15.0)
    mail_verify_on_startup: bool = Field(default=True)

    # SMTP relay
    smtp_host: str = Field(default="")
    smtp_port: int = Field(default=587)
    smtp_user: str = Field(default="")
    smtp_password: str = Field(default="")
    smtp_secure: bool = Field(default=False)  # Implicit TLS (port 465)

    # Gmail (app password)
    gmail_user: str = Field(default="")
    gmail_app_password: str = Field(default="")

    # Resend
    resend_api_key: str = Field(default="")
    resend_from: str = Field(default="onboarding@resend.dev")

    # Contact form
    message_max_length: int = Field(default=5000)
    display_timezone: str = Field(default="")  # Empty = server local time

    @field_validator("display_timezone")
    @classmethod
    def validate_display_timezone(cls, v: str) -> str:
        v = v.strip()
        if not v:
            return v
        from app.core.datetime_utils import is_valid_timezone

        if not is_valid_timezone(v):
            raise ValueError(f"Unknown IANA timezone: {v}")
        return v

    @property
    def allowed_origin_list(self) -> list[str]:
        """Split ALLOWED_ORIGINS into a clean list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    @property
    def rate_limit(self) -> str:
        """Rate limit in slowapi/limits notation."""
        return f"{self.rate_limit_max_requests}/{self.rate_limit_window_minutes} minutes"

    @property
    def rate_limit_description(self) -> str:
        return (
            f"{self.rate_limit_max_requests} requests/"
            f"{self.rate_limit_window_minutes} minutes"
        )


class ContactConfig:
    """Contact form wording from config.yml."""

    def __init__(self, data: dict[str, Any]) -> None:
        self.site_name: str = data.get("site_name", "Portfolio")
        self.subject_prefix: str = data.get("subject_prefix", "Portfolio Contact")
        self.footer_text: str = data.get(
            "footer_text",
            "This message was sent from the portfolio website contact form.",
        )
        self.sent_message: str = data.get(
            "sent_message",
            "Message sent successfully! I'll get back to you soon.",
        )
        self.logged_message: str = data.get(
            "logged_message",
            "Message received! (Logged on server)",
        )
        self.logged_note: str = data.get(
            "logged_note",
            "Email delivery attempted but failed. Your message has been logged.",
        )


class AppConfig:
    """Combined application configuration from .env and config.yml."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self._load_yaml()

    def _load_yaml(self) -> None:
        config_path = Path(self.settings.config_path)
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        else:
            data = {}

        self.contact = ContactConfig(data.get("contact", {}))


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache
def get_config() -> AppConfig:
    """Get cached full config instance."""
    return AppConfig(get_settings())
