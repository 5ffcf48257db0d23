# app/core/errors.py
import logging
import traceback
from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.config import get_settings

logger = logging.getLogger(__name__)


def format_validation_errors(errors: Sequence[Any]) -> str:
    """
    Flatten pydantic/FastAPI validation errors into one message.

    Example:
        [{"loc": ("body", "email"), "msg": "value is not a valid email address"}]
        -> "email: value is not a valid email address"
    """
    parts: list[str] = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request"


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Malformed input is a 400 with a field-level message."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": format_validation_errors(exc.errors())},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last-resort handler for storage / filesystem failures.

    Always logs the full traceback. The response only carries details
    outside production.
    """
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)

    if get_settings().is_production:
        content: dict[str, Any] = {"detail": "Internal server error"}
    else:
        content = {
            "detail": str(exc) or "Internal server error",
            "error": type(exc).__name__,
            "trace": traceback.format_exception(type(exc), exc, exc.__traceback__),
        }

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
