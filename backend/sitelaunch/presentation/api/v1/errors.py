"""Exception handlers: map domain exceptions onto the API's JSON error bodies.

Every error body carries ``success: false`` and an ``error`` message;
validation failures add ``details``, one entry per failing field.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from sitelaunch.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    FieldError,
    ValidationFailedError,
    WebhookAuthError,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred"


def error_body(message: str, details: list[FieldError] | None = None) -> dict:
    body: dict = {"success": False, "error": message}
    if details is not None:
        body["details"] = [d.to_dict() for d in details]
    return body


def client_ip(request: Request) -> str:
    """Best-effort caller address, honouring reverse-proxy headers."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    if request.client is not None:
        return request.client.host
    return "unknown"


async def _validation_failed(request: Request, exc: ValidationFailedError) -> JSONResponse:
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(exc.message, exc.errors),
    )


async def _request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed JSON bodies and wrongly typed parameters.
    details = [
        FieldError(
            field=".".join(str(p) for p in err.get("loc", ()) if p != "body") or "__root__",
            message=err.get("msg", "Invalid value"),
        )
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation failed", details),
    )


async def _duplicate(request: Request, exc: DuplicateEntityError) -> JSONResponse:
    logger.info("Conflict on %s: %s", request.url.path, exc)
    message = "Subdomain is already taken" if exc.field == "subdomain" else str(exc)
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=error_body(message))


async def _not_found(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    message = "Client not found" if exc.entity_type == "ClientRecord" else str(exc)
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=error_body(message))


async def _webhook_auth(request: Request, exc: WebhookAuthError) -> JSONResponse:
    logger.warning("Rejected webhook call to %s from %s", request.url.path, client_ip(request))
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED, content=error_body(exc.message)
    )


async def _catch_unexpected(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(INTERNAL_ERROR_MESSAGE),
        )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the domain exception handlers and the 500 safety net."""
    app.add_exception_handler(ValidationFailedError, _validation_failed)
    app.add_exception_handler(RequestValidationError, _request_validation)
    app.add_exception_handler(DuplicateEntityError, _duplicate)
    app.add_exception_handler(EntityNotFoundError, _not_found)
    app.add_exception_handler(WebhookAuthError, _webhook_auth)
    app.middleware("http")(_catch_unexpected)
