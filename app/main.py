from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.router import AVAILABLE_ENDPOINTS, api_router
from app.config import get_settings
from app.core.cors import AllowListCORSMiddleware, OriginAllowList
from app.core.datetime_utils import iso_timestamp
from app.core.logging import get_logger, log_request, setup_logging
from app.core.rate_limit import limiter, rate_limit_exceeded_handler
from app.dependencies import MailSender, get_mail_sender
from app.schemas.contact import ErrorResponse, NotFoundResponse, WelcomeResponse

logger = get_logger(__name__)

settings = get_settings()

UNHANDLED_ERROR_MESSAGE = "Something went wrong on our end. Please try again later."


def _mask(value: str) -> str:
    return f"{value[:3]}..." if value else "not set"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    # Startup
    setup_logging()

    sender = get_mail_sender()
    logger.bind(
        environment=settings.environment,
        port=settings.port,
        provider=sender.provider_name,
        mail_user=_mask(settings.smtp_user or settings.gmail_user),
        to_email=settings.to_email or sender.default_recipient or "not set",
        allowed_origins=settings.allowed_origin_list,
        rate_limit=settings.rate_limit_description,
    ).info("contact_relay_starting")

    if not sender.is_configured:
        app.state.mail_verified = False
        logger.warning("mail_provider_not_configured_emails_will_be_logged_only")
    elif settings.mail_verify_on_startup:
        app.state.mail_verified = await sender.verify()
        if app.state.mail_verified:
            logger.bind(provider=sender.provider_name).info("mail_provider_verified")
        else:
            logger.bind(provider=sender.provider_name).warning("mail_provider_verification_failed")

    yield
    # Shutdown
    logger.info("contact_relay_stopped")


app = FastAPI(
    title="Contact Relay",
    description="Contact form submission and email relay API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
)

# Rate limiting (per client IP, applied before any route handler)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]
app.add_middleware(SlowAPIMiddleware)

# Configure CORS (outside the limiter so preflights are answered first)
app.add_middleware(
    AllowListCORSMiddleware,
    allow_list=OriginAllowList.from_entries(settings.allowed_origin_list),
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.middleware("http")
async def log_requests(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Log every request as `METHOD path - client`."""
    client = request.client.host if request.client else "unknown"
    log_request(request.method, request.url.path, client)
    return await call_next(request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors in the API's {success, message} shape."""
    if exc.status_code == 404:
        body = NotFoundResponse(available_endpoints=AVAILABLE_ENDPOINTS)  # type: ignore[arg-type]
        return JSONResponse(status_code=404, content=body.model_dump(by_alias=True))

    body = ErrorResponse(message=str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: generic 500, details only in the logs."""
    logger.bind(path=request.url.path).opt(exception=exc).error("unhandled_error")
    body = ErrorResponse(message=UNHANDLED_ERROR_MESSAGE, timestamp=iso_timestamp())
    return JSONResponse(status_code=500, content=body.model_dump(by_alias=True))


# Include API routes
app.include_router(api_router)


@app.get("/", response_model=WelcomeResponse)
async def welcome(sender: MailSender) -> WelcomeResponse:
    """API welcome message."""
    return WelcomeResponse(
        message="Welcome to the Contact Relay API",
        service="Contact form with email delivery",
        documentation="Visit /api/health for API status",
        mail_configured=sender.is_configured,
    )
