"""
Custom exceptions and error handlers for the Image Region Service API.
Provides consistent error handling across all endpoints.
"""

import asyncio
import logging
import traceback
from functools import wraps
from typing import Dict, Optional

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

logger = logging.getLogger(__name__)


# Custom exception classes
class RegionServiceException(Exception):
    """Base exception for the Image Region Service."""

    def __init__(self, message: str, status_code: int = 500, details: Optional[Dict] = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ImageNotFoundException(RegionServiceException):
    """Exception raised when an image cannot be found or is not visible."""

    def __init__(self, image_id: int, status_code: int = 404):
        super().__init__(
            message=f"Image not found: {image_id}",
            status_code=status_code,
            details={"image_id": image_id},
        )


class InvalidRegionException(RegionServiceException):
    """Exception raised when neither a tile nor a region was requested."""

    def __init__(self, reason: str):
        super().__init__(
            message=f"Invalid region: {reason}",
            status_code=400,
            details={"reason": reason},
        )


class InvalidRequestParameterException(RegionServiceException):
    """Exception raised when a query parameter cannot be parsed."""

    def __init__(self, param: str, value: str, reason: str):
        super().__init__(
            message=f"Invalid parameter {param}: {value}",
            status_code=400,
            details={"param": param, "value": value, "reason": reason},
        )


class RenderingException(RegionServiceException):
    """Exception raised when the rendering engine fails to produce a region."""

    def __init__(self, image_id: int, reason: str, status_code: int = 404):
        super().__init__(
            message=f"Rendering failed for image {image_id}: {reason}",
            status_code=status_code,
            details={"image_id": image_id, "reason": reason},
        )


class ServiceUnavailableException(RegionServiceException):
    """Exception raised when no rendering client is configured."""

    def __init__(self, component: str):
        super().__init__(
            message=f"Service unavailable: {component} not configured",
            status_code=503,
            details={"component": component},
        )


# Exception handlers for FastAPI
async def region_exception_handler(request: Request, exc: RegionServiceException) -> JSONResponse:
    """
    Handler for custom Image Region Service exceptions.

    Args:
        request: FastAPI request
        exc: RegionServiceException instance

    Returns:
        JSON response with error details
    """
    if exc.status_code >= 500:
        logger.error(f"{exc.__class__.__name__}: {exc.message}", extra={"details": exc.details})
    else:
        logger.info(f"{exc.__class__.__name__}: {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "details": exc.details, "type": exc.__class__.__name__},
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handler for request validation errors.

    Args:
        request: FastAPI request
        exc: Validation exception

    Returns:
        JSON response with validation error details
    """
    errors = []
    for error in exc.errors():
        errors.append(
            {
                "field": ".".join(str(loc) for loc in error["loc"][1:]),
                "message": error["msg"],
                "type": error["type"],
            }
        )

    logger.warning(f"Validation error: {errors}")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"error": "Validation failed", "details": errors, "type": "ValidationError"},
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler for unexpected exceptions.

    Args:
        request: FastAPI request
        exc: Any exception

    Returns:
        JSON response with generic error message
    """
    logger.error(f"Unexpected error: {exc}", exc_info=True)

    debug_mode = getattr(request.app.state, "debug", False)

    if debug_mode:
        # Never enable in production: exposes stack traces
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "details": {
                    "exception": str(exc),
                    "type": exc.__class__.__name__,
                    "traceback": traceback.format_exc(),
                },
                "type": "InternalError",
            },
        )
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "details": {}, "type": "InternalError"},
    )


# Maps exception types to (status_code, error_message, log_level, detail_builder)
EXCEPTION_MAPPING = {
    ValidationError: (
        400,
        "Validation failed",
        "warning",
        lambda e: {"details": e.errors(include_url=False, include_context=False)},
    ),
    KeyError: (400, "Missing required field", "error", lambda e: {"field": str(e)}),
    ValueError: (400, "Invalid value", "error", lambda e: {"details": str(e)}),
    PermissionError: (403, "Permission denied", "error", lambda e: {"details": str(e)}),
    TimeoutError: (504, "Operation timed out", "error", lambda e: {"details": str(e)}),
}


def safe_endpoint(func):
    """
    Decorator to wrap endpoint functions with error handling.

    Custom exceptions pass through to their registered handler; common
    built-in exceptions are converted using EXCEPTION_MAPPING.
    """

    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            if asyncio.iscoroutinefunction(func):
                return await func(*args, **kwargs)
            return func(*args, **kwargs)

        except (RegionServiceException, HTTPException):
            raise

        except Exception as e:
            exception_type = type(e)

            if exception_type in EXCEPTION_MAPPING:
                status_code, error_msg, log_level, detail_builder = EXCEPTION_MAPPING[
                    exception_type
                ]

                log_message = f"{exception_type.__name__} in {func.__name__}: {e}"
                if log_level == "warning":
                    logger.warning(log_message)
                else:
                    logger.error(log_message)

                detail = {"error": error_msg}
                detail.update(detail_builder(e))
                raise HTTPException(status_code=status_code, detail=detail)

            logger.error(f"Unexpected error in {func.__name__}: {e}", exc_info=True)
            raise HTTPException(
                status_code=500, detail={"error": "Internal server error", "details": str(e)}
            )

    return wrapper


def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(RegionServiceException, region_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers registered")
