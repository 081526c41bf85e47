#!/usr/bin/env python3
"""
Error handlers for the web application.

Domain exceptions from core.exceptions are translated into HTTP responses
here so that routers can let them propagate.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

from core.exceptions import (
    AuthenticationError,
    NotFoundError,
    OracleError,
    ScreeningError,
    TrialExpiredError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def status_for(exc: ScreeningError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, AuthenticationError):
        return 401
    if isinstance(exc, TrialExpiredError):
        return 402
    if isinstance(exc, OracleError):
        return 502
    return 500


async def screening_exception_handler(
    request: Request,
    exc: ScreeningError
) -> JSONResponse:
    """
    Handle domain exceptions.

    Oracle failures carry ``retryable: true`` and the failed task name so
    the client can offer a retry.
    """
    status_code = status_for(exc)
    content = {
        "success": False,
        "error": str(exc),
        "type": exc.__class__.__name__,
    }

    if isinstance(exc, OracleError):
        logger.error(f"Oracle error in {request.url.path} ({exc.task}): {exc}")
        content["retryable"] = exc.retryable
        content["task"] = exc.task
    elif status_code >= 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"{exc.__class__.__name__} in {request.url.path}: {exc}")

    return JSONResponse(status_code=status_code, content=content)


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
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "type": "InternalError"
        }
    )
