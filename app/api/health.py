from fastapi import APIRouter, Request

from app.core.datetime_utils import iso_timestamp
from app.core.rate_limit import limiter
from app.dependencies import AppSettings, MailSender
from app.schemas.contact import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
@limiter.exempt
async def health_check(
    request: Request,
    settings: AppSettings,
    sender: MailSender,
) -> HealthResponse:
    """
    Liveness probe with mail configuration status.

    Never touches the mail provider, so it stays up during provider outages.
    """
    return HealthResponse(
        message="Contact relay API is running",
        timestamp=iso_timestamp(),
        environment=settings.environment,
        mail_provider=sender.provider_name,
        mail_configured=sender.is_configured,
        mail_verified=getattr(request.app.state, "mail_verified", None),
        cors_enabled=bool(settings.allowed_origin_list),
        rate_limiting=settings.rate_limit_description,
        endpoints={
            "health": "GET /api/health",
            "contact": "POST /api/contact/send",
        },
    )
