"""API utilities for FastAPI route handling."""

import functools
import logging
import uuid
from collections.abc import Callable
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.exceptions import (
    DatabaseException,
    JourneyLogException,
    ResourceNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)


def success_response(
    data: Any = None,
    *,
    status_code: int = status.HTTP_200_OK,
    **extra: Any,
) -> JSONResponse:
    """Wrap a payload in the ``{success: true, ...}`` envelope."""
    content: dict[str, Any] = {"success": True}
    content.update(extra)
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=status_code, content=content)


def error_response(status_code: int, message: str) -> JSONResponse:
    """Wrap an error message in the ``{success: false, message}`` envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
    )


def api_route(logger: logging.Logger):
    """
    Decorator for FastAPI endpoints that provides standardized error handling.

    Wraps async endpoint functions with try/except to:
    - Re-raise HTTPException instances as-is
    - Map custom exceptions to appropriate HTTP status codes
    - Log and convert other exceptions to 500 HTTPException

    The app-level handlers installed by ``install_exception_handlers`` render
    the resulting HTTPException as the error envelope.

    Usage:
        @router.get("/api/example")
        @api_route(logger)
        async def my_endpoint():
            # ... business logic ...
            return result
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except ValidationException as e:
                logger.warning("Validation error in %s: %s", func.__name__, e.message)
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=e.message,
                ) from e
            except ResourceNotFoundException as e:
                logger.info("Resource not found in %s: %s", func.__name__, e.message)
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail=e.message,
                ) from e
            except DatabaseException as e:
                logger.exception(
                    "Database error in %s: %s",
                    func.__name__,
                    e.message,
                )
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail=e.message,
                ) from e
            except JourneyLogException as e:
                logger.exception(
                    "Application error in %s: %s",
                    func.__name__,
                    e.message,
                )
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail=e.message,
                ) from e
            except Exception as e:
                logger.exception("Unexpected error in %s", func.__name__)
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail=str(e),
                ) from e

        return wrapper

    return decorator


def _format_request_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "Invalid request: " + ", ".join(parts) if parts else "Invalid request"


def install_exception_handlers(app: FastAPI) -> None:
    """Render every error raised by the app as the ``{success: false}`` envelope."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            logger.warning("404 Not Found: %s. Detail: %s", request.url, exc.detail)
        message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        return error_response(exc.status_code, message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ):
        message = _format_request_errors(exc)
        logger.warning("Rejected request %s %s: %s", request.method, request.url, message)
        return error_response(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        error_id = str(uuid.uuid4())
        logger.error(
            "Internal Server Error (ID: %s): Request %s %s failed. Exception: %s",
            error_id,
            request.method,
            request.url,
            str(exc),
            exc_info=True,
        )
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
