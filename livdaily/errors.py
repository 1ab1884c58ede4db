# -*- coding: utf-8 -*-
"""Error taxonomy, structured error bodies and the read-path degrade wrapper."""

from __future__ import annotations

import functools
import inspect
import logging
from typing import Any, Callable, Dict, Optional, TypeVar

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class ApiError(HTTPException):
    """HTTPException carrying a machine-readable code."""

    status_code_default = 500
    code_default = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(status_code=status_code or self.status_code_default, detail=message)
        self.code = code or self.code_default
        self.message = message
        self.details = details

    def to_body(self) -> Dict[str, Any]:
        return error_body(self.status_code, self.code, self.message, self.details)


class Unauthenticated(ApiError):
    status_code_default = 401
    code_default = "UNAUTHORIZED"

    def __init__(self, message: str = "Missing authorization token") -> None:
        super().__init__(message)


class ValidationError(ApiError):
    status_code_default = 400
    code_default = "VALIDATION_ERROR"


class NotFound(ApiError):
    status_code_default = 404
    code_default = "NOT_FOUND"


class GenerationError(ApiError):
    """The text-generation backend failed or returned non-conforming output."""

    status_code_default = 502
    code_default = "GENERATION_FAILED"


class PersistenceError(ApiError):
    status_code_default = 500
    code_default = "PERSISTENCE_FAILED"


def error_body(
    status: int, code: str, message: str, details: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    body: Dict[str, Any] = {"status": status, "code": code, "message": message}
    if details:
        body["details"] = details
    return body


def degrade_to_empty(fallback: Callable[..., Any]) -> Callable[[F], F]:
    """Wrap a read endpoint so internal failures become an empty result.

    `fallback` is called with the endpoint's keyword arguments and returns the
    empty value (``[]`` or a zero-valued report). Unauthenticated callers still
    get a 401.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except Unauthenticated:
                raise
            except Exception:
                logger.exception("Read endpoint %s failed; returning empty result", func.__name__)
                return fallback(**kwargs)

        # Resolved signature so FastAPI reads the endpoint parameters, not *args/**kwargs.
        wrapper.__signature__ = inspect.signature(func, eval_str=True)  # type: ignore[attr-defined]
        return wrapper  # type: ignore[return-value]

    return decorator


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def _api_error(request: Request, exc: ApiError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.code)
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def _request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            {"loc": [str(p) for p in err.get("loc", ())], "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content=error_body(400, "VALIDATION_ERROR", "Invalid request", {"errors": errors}),
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        code = {401: "UNAUTHORIZED", 403: "FORBIDDEN", 404: "NOT_FOUND", 405: "METHOD_NOT_ALLOWED"}.get(
            exc.status_code, "HTTP_ERROR"
        )
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.status_code, code, str(exc.detail)))

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=error_body(500, "INTERNAL_ERROR", "Internal server error"))
