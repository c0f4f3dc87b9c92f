"""
Loguru setup for the relay.

Two kinds of lines reach the console:
- request lines from the HTTP middleware (`GET /api/health - 10.0.0.1`),
  printed without source location or fields
- events such as `contact_email_sent`, printed with their bound fields as
  `key=value` pairs
"""

import logging
import sys
from collections.abc import Callable
from typing import Any

from loguru import logger

from app.config import get_settings

HEALTH_PATH = "/api/health"
REQUEST_CHANNEL = "request"

# Bound keys that describe the record itself rather than the event
_RESERVED_EXTRA = frozenset({"name", "channel", "fields"})


class InterceptHandler(logging.Handler):
    """Intercept stdlib logging and redirect to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[assignment]
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def render_fields(extra: dict[str, Any]) -> str:
    """Render bound event fields as `key=value` pairs."""
    return " ".join(
        f"{key}={value}" for key, value in extra.items() if key not in _RESERVED_EXTRA
    )


def _make_format(colorize: bool) -> Callable[[dict[str, Any]], str]:
    """Build a loguru format function for request lines and events."""
    if colorize:
        head = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
        location = "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        body = "<level>{message}</level>"
    else:
        head = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | "
        location = "{name}:{function}:{line} | "
        body = "{message}"

    request_format = head + body + "\n"
    event_format = head + location + body + " {extra[fields]}\n{exception}"

    def _format(record: dict[str, Any]) -> str:
        if record["extra"].get("channel") == REQUEST_CHANNEL:
            return request_format
        record["extra"]["fields"] = render_fields(record["extra"])
        return event_format

    return _format


def _health_log_filter(record: dict[str, Any]) -> bool:
    """Hide health probe traffic unless logging at DEBUG."""
    is_health = record["extra"].get("path") == HEALTH_PATH or HEALTH_PATH in record["message"]
    if is_health:
        return bool(record["level"].no <= logging.DEBUG)
    return True


def setup_logging() -> None:
    """Configure loguru for the application."""
    settings = get_settings()

    logger.remove()

    if settings.log_json:
        logger.add(
            sys.stderr,
            level="DEBUG" if settings.debug else "INFO",
            serialize=True,
            filter=_health_log_filter,
        )
    elif settings.debug:
        logger.add(
            sys.stderr,
            level="DEBUG",
            format=_make_format(colorize=True),
            backtrace=True,
            diagnose=True,
        )
    else:
        logger.add(
            sys.stderr,
            level="INFO",
            format=_make_format(colorize=False),
            filter=_health_log_filter,
            backtrace=True,
            diagnose=False,
        )

    # Intercept stdlib logging (uvicorn, httpx)
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in ["uvicorn", "uvicorn.error", "uvicorn.access", "httpx"]:
        logging.getLogger(name).handlers = [InterceptHandler()]


def log_request(method: str, path: str, client: str) -> None:
    """Log one incoming request on the request channel."""
    logger.bind(channel=REQUEST_CHANNEL, path=path, client=client).info(
        f"{method} {path} - {client}"
    )


def get_logger(name: str) -> Any:
    """Get a logger bound to a name."""
    return logger.bind(name=name)
