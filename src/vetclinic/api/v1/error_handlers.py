"""
FastAPI exception handlers that turn every failure into the failure envelope.

    {"success": false, "message": "...", "data": null}

- AppError (and subclasses): status from `exc.http_status()`, body from `exc.to_payload()`.
- RequestValidationError: malformed bodies (non-object JSON, missing auth fields) -> 400.
- Starlette HTTPException: unknown routes, wrong methods -> same status, envelope body.
- Anything else: 500 with a generic message; the traceback goes to the logs only.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from vetclinic.exceptions.base import AppError, StorageError
from vetclinic.exceptions.integrity_classifier import ViolationKind
from vetclinic.exceptions.mapper import message_for
from vetclinic.schemas.envelope import failure

logger = logging.getLogger(__name__)

MALFORMED_BODY_MESSAGE = "The request body is missing or malformed."


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    status = exc.http_status()
    if isinstance(exc, StorageError) and exc.kind is ViolationKind.UNKNOWN:
        logger.warning("AppError for %s %s: %s", request.method, request.url.path, str(exc))
    else:
        logger.info(
            "AppError for %s %s: %s",
            request.method,
            request.url.path,
            str(exc),
            extra={"status_code": status, "error_code": exc.error_code},
        )
    return JSONResponse(status_code=status, content=exc.to_payload())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Field locations only, never the submitted values (may contain passwords).
    locations = [".".join(str(part) for part in err.get("loc", ())) for err in exc.errors()]
    logger.info(
        "Request validation failed for %s %s",
        request.method,
        request.url.path,
        extra={"locations": locations},
    )
    return JSONResponse(status_code=400, content=failure(MALFORMED_BODY_MESSAGE).model_dump())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed."
    return JSONResponse(
        status_code=exc.status_code,
        content=failure(message).model_dump(),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error for %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=failure(message_for(ViolationKind.UNKNOWN)).model_dump(),
    )


# Helper to register all handlers on an app (called from the app factory)
def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
