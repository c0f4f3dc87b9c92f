from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Response model serialized with camelCase keys for browser clients."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContactRequest(BaseModel):
    """Request body for a contact form submission.

    Fields are optional so missing values are reported by the form
    validator with readable messages instead of schema errors.
    """

    name: str | None = Field(default=None)
    email: str | None = Field(default=None)
    message: str | None = Field(default=None)


class ContactResponse(CamelModel):
    """Response after a submission was accepted (sent or logged)."""

    success: bool = True
    message: str
    timestamp: str
    email_sent: bool
    provider_used: bool
    note: str | None = None


class ValidationFailedResponse(CamelModel):
    """Response for a submission that failed validation."""

    success: bool = False
    message: str = "Validation failed"
    errors: list[str]


class ErrorResponse(CamelModel):
    """Generic failure response."""

    success: bool = False
    message: str
    timestamp: str | None = None


class EndpointInfo(BaseModel):
    method: str
    path: str
    description: str


class NotFoundResponse(CamelModel):
    """Response for unknown routes."""

    success: bool = False
    message: str = "Endpoint not found"
    available_endpoints: list[EndpointInfo]


class HealthResponse(CamelModel):
    """Liveness and configuration status."""

    success: bool = True
    message: str
    timestamp: str
    environment: str
    mail_provider: str
    mail_configured: bool
    mail_verified: bool | None = None
    cors_enabled: bool
    rate_limiting: str
    endpoints: dict[str, str]


class WelcomeResponse(CamelModel):
    message: str
    service: str
    documentation: str
    mail_configured: bool
