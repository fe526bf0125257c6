"""FastAPI exception handlers producing a uniform error envelope.

Every error body has the shape ``{"error": code, "message": text, "detail": data}``.
Routes raising ``HTTPException`` may pass a dict detail carrying their own
``error``/``message``/``detail`` keys; anything else falls back to the code
registered for the status below.
"""

from __future__ import annotations

from http import HTTPStatus
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ...services.note_store import NoteNotFoundError

logger = logging.getLogger(__name__)

ERROR_CODES: Dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "validation_error",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "internal_error",
}


def error_body(status_code: int, detail: Any = None) -> Dict[str, Any]:
    """Build the envelope for ``status_code`` from an exception detail."""
    code = ERROR_CODES.get(status_code, "http_error")
    message = HTTPStatus(status_code).phrase
    extra: Optional[Any] = None
    if isinstance(detail, dict):
        code = detail.get("error", code)
        message = detail.get("message", message)
        extra = detail.get("detail")
    elif detail:
        message = str(detail)
    return {"error": code, "message": message, "detail": extra}


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Validation errors without the non-serializable ``ctx``/``input`` members."""
    return [
        {key: value for key, value in error.items() if key in {"type", "loc", "msg"}}
        for error in exc.errors()
    ]


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    body = error_body(
        status.HTTP_400_BAD_REQUEST,
        {"message": "Invalid request payload", "detail": {"errors": jsonable_errors(exc)}},
    )
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def note_not_found_handler(request: Request, exc: NoteNotFoundError) -> JSONResponse:
    body = error_body(
        status.HTTP_404_NOT_FOUND,
        {"error": "note_not_found", "message": str(exc), "detail": {"note_id": exc.note_id}},
    )
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=body)


async def internal_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(status.HTTP_500_INTERNAL_SERVER_ERROR),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach shared exception handlers to the FastAPI application."""
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(NoteNotFoundError, note_not_found_handler)
    app.add_exception_handler(Exception, internal_exception_handler)


__all__ = [
    "ERROR_CODES",
    "error_body",
    "register_error_handlers",
    "validation_exception_handler",
    "http_exception_handler",
    "note_not_found_handler",
    "internal_exception_handler",
]
