"""
Error shaping for the API.

Routes turn resolver NotFound values into HTTP 404s with require_found();
register_error_handlers() makes every error response use the ErrorResponse
body: {"error": ..., "detail": ..., "status_code": ...}.
"""

import logging
from typing import TypeVar

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from utils.resolver import NotFound

logger = logging.getLogger("transparency_api")

T = TypeVar("T")


def require_found(result: T | NotFound) -> T:
    """Return *result* unchanged, or raise HTTP 404 if it is a NotFound."""
    if isinstance(result, NotFound):
        raise HTTPException(status_code=404, detail=result.message)
    return result


def _error_body(error: str, status_code: int, detail: str | None = None) -> dict:
    body = {"error": error, "status_code": status_code}
    if detail is not None:
        body["detail"] = detail
    return body


def register_error_handlers(app: FastAPI) -> None:
    """Install JSON error handlers on *app*."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail), exc.status_code),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return JSONResponse(
            status_code=400,
            content=_error_body("Bad request", 400, str(exc)),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Catch unhandled exceptions and return JSON instead of an HTML traceback."""
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=_error_body("Internal server error", 500, str(exc)),
        )
