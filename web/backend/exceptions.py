#!/usr/bin/env python3
"""
Error handlers for the web application.

Service errors are raised as core.exceptions kinds; each kind carries its
status code, so handlers never inspect message text.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.exceptions import ServiceException, RateLimited, PersistenceError

logger = logging.getLogger(__name__)


async def service_exception_handler(
    request: Request,
    exc: ServiceException
) -> JSONResponse:
    """
    Handle service layer exceptions.

    Args:
        request: The FastAPI request.
        exc: The service exception.

    Returns:
        JSONResponse with error details.
    """
    status_code = exc.status_code
    if status_code >= 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=exc)
    else:
        logger.warning(f"{exc.__class__.__name__} in {request.url.path}: {exc}")

    content = {
        "success": False,
        "error": str(exc),
        "type": exc.__class__.__name__
    }
    headers = None

    if isinstance(exc, PersistenceError):
        content["partial"] = exc.partial
    if isinstance(exc, RateLimited):
        headers = {"Retry-After": str(exc.reset_seconds)}

    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies and parameters are a 400 in the usual error envelope."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": f"{location}: {first.get('msg', 'invalid request')}",
            "type": "ValidationError"
        }
    )


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "type": "HTTPException"
        }
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.
    """
    logger.error(f"Unexpected error in {request.url.path}: {exc}", exc_info=exc)

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "type": "InternalError"
        }
    )
