# users_api/api/v1/error_handlers.py
"""
FastAPI exception handlers that map application errors to HTTP responses.

- The service raises users_api.exceptions.base.* categories (NotFoundError, ConflictError, ...).
- Each category carries its own status (.http_status()) and body (.to_payload()); the handlers
  only log and serialize.
- Request validation failures (body, path) are answered with 400 and a field-level list.
- Anything else becomes a 500 that does not leak internals.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from users_api.exceptions.base import (
    AppError,
    BadRequestError,
    ConflictError,
    InternalError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("NotFoundError for %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    # Expected client-level scenario (duplicate email); constraint goes to the log for triage.
    logger.info(
        "ConflictError for %s %s: %s",
        request.method,
        request.url.path,
        exc.message,
        extra={"constraint": exc.fields.get("constraint")},
    )
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def bad_request_handler(request: Request, exc: BadRequestError) -> JSONResponse:
    logger.info("BadRequestError for %s %s: %s", request.method, request.url.path, str(exc))
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def internal_error_handler(request: Request, exc: InternalError) -> JSONResponse:
    logger.error("InternalError for %s %s: %s", request.method, request.url.path, str(exc))
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Fallback for AppError subclasses without a dedicated handler."""
    logger.warning("AppError for %s %s: %s", request.method, request.url.path, str(exc))
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    logger.info("Validation error for %s %s", request.method, request.url.path, extra={"errors": errors})
    payload = {"message": "Validation failed", "code": "bad_request", "errors": errors}
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=jsonable_encoder(payload))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled exception for %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error", "code": "internal_error"},
    )


# Most specific first; AppError and Exception are the fallbacks.
def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ConflictError, conflict_handler)
    app.add_exception_handler(BadRequestError, bad_request_handler)
    app.add_exception_handler(InternalError, internal_error_handler)
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
