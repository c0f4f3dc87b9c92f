from app.schemas.contact import (
    ContactRequest,
    ContactResponse,
    EndpointInfo,
    ErrorResponse,
    HealthResponse,
    NotFoundResponse,
    ValidationFailedResponse,
    WelcomeResponse,
)

__all__ = [
    "ContactRequest",
    "ContactResponse",
    "ValidationFailedResponse",
    "ErrorResponse",
    "EndpointInfo",
    "NotFoundResponse",
    "HealthResponse",
    "WelcomeResponse",
]
