"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Domain exceptions carry an
error_code which selects the HTTP status; the body is always
{"error", "message", "details"}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from access_admin.core.config import get_settings
from access_admin.domain.exceptions import AccessAdminException

logger = logging.getLogger(__name__)

_ERROR_CODE_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "ACCESS_NOT_FOUND": 404,
    "VALIDATION_ERROR": 400,
    "PLATFORM_NOT_LICENSED": 400,
    "DUPLICATE_ASSIGNMENT": 409,
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "IDENTITY_SERVICE_ERROR": 502,
    "PERSISTENCE_ERROR": 500,
    "SERVICE_UNAVAILABLE": 503,
}


def status_for(exc: AccessAdminException) -> int:
    """HTTP status for a domain exception; unknown codes are client errors."""
    return _ERROR_CODE_STATUS.get(exc.error_code, 400)


def _access_admin_exception_handler(
    request: Request, exc: AccessAdminException
) -> JSONResponse:
    status = status_for(exc)
    content = exc.to_dict()
    if status >= 500:
        logger.error("%s: %s (%s)", exc.error_code, exc.message, exc.details)
        if not get_settings().debug:
            content["details"] = {}
    headers = {"WWW-Authenticate": "Bearer"} if status == 401 else None
    return JSONResponse(status_code=status, content=content, headers=headers)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": exc.errors(),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail, "details": {}},
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    detail: Any = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail, "details": {}},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""
    app.add_exception_handler(AccessAdminException, _access_admin_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
