from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shortlinks.core.errors import ApiError, ShortenerError, normalize_http_exception

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    error = normalize_http_exception(exc)
    return JSONResponse(
        status_code=exc.status_code,
        content=error.as_body(),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    error = ApiError(code="VALIDATION_ERROR", message="invalid input")
    return JSONResponse(status_code=422, content=error.as_body())


async def shortener_error_handler(request: Request, exc: ShortenerError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed", request.method, request.url.path, exc_info=exc)
    return await http_exception_handler(request, exc.to_http_exception())


def register_error_handlers(app: FastAPI) -> None:
    """Every JSON error leaves as {"error": {"code": ..., "message": ...}}."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ShortenerError, shortener_error_handler)
