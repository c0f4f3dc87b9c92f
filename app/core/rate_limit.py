"""Rate limiting configuration using SlowAPI."""

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from app.config import get_settings
from app.core.logging import get_logger

logger = get_logger(__name__)


def default_rate_limit() -> str:
    """Per-client quota applied to every non-exempt route."""
    return get_settings().rate_limit


# Create limiter with IP-based key function
limiter = Limiter(key_func=get_remote_address, default_limits=[default_rate_limit])


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """Custom handler for rate limit exceeded errors."""
    settings = get_settings()
    window = settings.rate_limit_window_minutes

    logger.bind(
        client=get_remote_address(request),
        path=request.url.path,
    ).warning("rate_limit_exceeded")

    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "message": f"Too many requests from this IP, please try again after {window} minutes",
        },
        headers={"Retry-After": str(window * 60)},
    )
