"""Exception handlers that render every failure as one JSON body."""

import logging
from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from spitfire_posts.exceptions import PostValidationError, RequestError

logger = logging.getLogger(__name__)


def format_validation_errors(errors: Sequence[Any]) -> str:
    """Flatten pydantic/FastAPI validation errors into a single message.

    Examples:
        [{"loc": ("body", "title"), "msg": "Field required"}] -> "title: Field required"
        [{"loc": ("body", 1), "msg": "JSON decode error"}] -> "JSON decode error"
    """
    messages = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(p for p in loc if not p.isdigit())
        msg = error.get("msg", "invalid request body")
        messages.append(f"{field}: {msg}" if field else msg)
    return "; ".join(messages) or "invalid request body"


async def _request_error_handler(request: Request, exc: RequestError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "Request failed",
            extra={"path": request.url.path, "error": exc.message},
        )
    return exc.to_response()


async def _body_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = PostValidationError(format_validation_errors(exc.errors()))
    logger.debug(
        "Rejected request body",
        extra={"path": request.url.path, "error": error.message},
    )
    return error.to_response()


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        {"error": exc.detail},
        status_code=exc.status_code,
        headers=exc.headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the exception handlers on ``app``.

    Body decoding failures are reported as 400 rather than FastAPI's 422,
    and routing errors (404/405) use the same ``{"error": ...}`` shape.
    """
    app.add_exception_handler(RequestError, _request_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _body_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]
