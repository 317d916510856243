"""
JSON error responses.

Routers and services raise `fastapi.HTTPException` as usual; the handlers
installed here give every error the same body shape:

    {"message": "...", "errors": {"field": "..."}}

`errors` is only present for request validation failures.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

import asyncpg
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INVALID_JSON = "invalid json"
VALIDATION_FAILED = "validation failed"


class ErrorResponse(BaseModel):
    message: str
    errors: dict[str, str] | None = None


def json_response(status_code: int, payload: Any, headers: dict[str, str] | None = None) -> JSONResponse:
    """
    Serialize any payload as JSON with the given status code.
    """
    return JSONResponse(status_code=status_code, content=jsonable_encoder(payload), headers=headers)


def error_response(
    status_code: int,
    message: str,
    errors: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(message=message, errors=errors)
    return json_response(status_code, body.model_dump(exclude_none=True), headers=headers)


def _is_body_level(error: dict[str, Any]) -> bool:
    # Unparseable JSON, a missing body, or a body that is not an object.
    if error.get("type") == "json_invalid":
        return True
    return tuple(error.get("loc") or ()) == ("body",)


def _error_message(error: dict[str, Any]) -> str:
    if error.get("type") == "value_error":
        ctx = error.get("ctx") or {}
        if "error" in ctx:
            return str(ctx["error"])
    return str(error.get("msg") or "invalid value")


def field_errors(errors: Sequence[dict[str, Any]]) -> dict[str, str]:
    """
    Map pydantic error entries to {field: message}, first message per field.
    """
    out: dict[str, str] = {}
    for error in errors:
        loc = [str(part) for part in (error.get("loc") or ()) if part not in ("body", "path", "query")]
        field = ".".join(loc) or "body"
        out.setdefault(field, _error_message(error))
    return out


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = list(exc.errors())
    if any(_is_body_level(e) for e in errors):
        return error_response(400, INVALID_JSON)
    return error_response(400, VALIDATION_FAILED, errors=field_errors(errors))


async def storage_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("storage_error method=%s path=%s", request.method, request.url.path, exc_info=exc)
    return error_response(500, str(exc) or exc.__class__.__name__)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    # Driver errors, constraint violations and lost connections.
    app.add_exception_handler(asyncpg.PostgresError, storage_exception_handler)
    app.add_exception_handler(asyncpg.InterfaceError, storage_exception_handler)
    app.add_exception_handler(OSError, storage_exception_handler)
