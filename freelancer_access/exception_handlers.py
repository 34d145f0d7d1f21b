"""
Global Exception Handlers

Error Response Format:
{
    "error": {
        "status_code": 404,
        "message": "Template with id 'tpl_...' not found",
        "type": "Not Found",
        "details": {"resource_type": "Template", "resource_id": "tpl_..."},
        "path": "/api/v1/templates/tpl_..."
    }
}
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from freelancer_access.exceptions import AccessControlError

logger = logging.getLogger(__name__)


def get_error_type(status_code: int) -> str:
    """Get a human-readable error type based on status code."""
    error_types = {
        400: "Bad Request",
        401: "Unauthorized",
        403: "Forbidden",
        404: "Not Found",
        409: "Conflict",
        422: "Validation Error",
        500: "Internal Server Error",
    }
    return error_types.get(status_code, "Error")


def create_error_response(
    status_code: int,
    message: str,
    details: dict[str, Any] | None = None,
    path: str | None = None,
) -> JSONResponse:
    error_response: dict[str, Any] = {
        "error": {
            "status_code": status_code,
            "message": message,
            "type": get_error_type(status_code),
        }
    }

    if details:
        error_response["error"]["details"] = details

    if path:
        error_response["error"]["path"] = path

    return JSONResponse(status_code=status_code, content=error_response)


async def access_control_exception_handler(request: Request, exc: AccessControlError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{exc.__class__.__name__}: {exc.message}", extra={"path": request.url.path})
    else:
        logger.info(f"{exc.__class__.__name__}: {exc.message} ({request.url.path})")

    return create_error_response(
        status_code=exc.status_code,
        message=exc.message,
        details=exc.details,
        path=request.url.path,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return create_error_response(
        status_code=exc.status_code,
        message=str(exc.detail),
        path=request.url.path,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AccessControlError, access_control_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
