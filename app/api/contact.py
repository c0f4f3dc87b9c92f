from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.core.rate_limit import default_rate_limit, limiter
from app.dependencies import ContactHandler, Submission
from app.schemas.contact import ContactRequest, ContactResponse, ValidationFailedResponse

router = APIRouter()

_body_schema = {"schema": ContactRequest.model_json_schema()}


@router.post(
    "/contact/send",
    response_model=ContactResponse,
    responses={400: {"model": ValidationFailedResponse}},
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": _body_schema,
                "application/x-www-form-urlencoded": _body_schema,
            },
        },
    },
)
@limiter.limit(default_rate_limit)
async def send_contact_message(
    request: Request,
    body: Submission,
    handler: ContactHandler,
) -> JSONResponse:
    """
    Accept a contact form submission and relay it by email.

    Takes a JSON body or a plain HTML form post. Always acknowledges a
    valid submission, even if delivery fails.
    """
    result = await handler.handle(body)
    return JSONResponse(status_code=result.status_code, content=result.body)
