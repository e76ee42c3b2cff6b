from __future__ import annotations
from dataclasses import dataclass
from typing import Any

from fastapi import HTTPException


class ShortenerError(Exception):
    """Base class for failures raised by the store, generator and link service."""

    status_code = 500
    public_message = "Request failed"

    def to_http_exception(self) -> HTTPException:
        # 5xx details stay in the logs
        message = str(self) if self.status_code < 500 and str(self) else self.public_message
        return HTTPException(status_code=self.status_code, detail=message)


class ValidationError(ShortenerError):
    status_code = 400
    public_message = "URL required"


class NotFoundError(ShortenerError):
    status_code = 404
    public_message = "Not Found"


class GenerationError(ShortenerError):
    public_message = "could not generate short code"


class StoreError(ShortenerError):
    public_message = "could not save url"


@dataclass(frozen=True)
class ApiError:
    code: str
    message: str

    def as_body(self) -> dict[str, Any]:
        return {"error": {"code": self.code, "message": self.message}}


STATUS_TO_ERROR_CODE: dict[int, str] = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    422: "VALIDATION_ERROR",
    500: "INTERNAL_SERVER_ERROR",
}


def normalize_http_exception(exc: HTTPException) -> ApiError:
    """
    Converts an HTTPException into (code, message): the code is inferred from
    the status, a str detail becomes the message.
    """
    detail: Any = exc.detail
    msg = detail if isinstance(detail, str) and detail else "Request failed"
    return ApiError(code=STATUS_TO_ERROR_CODE.get(exc.status_code, "ERROR"), message=msg)
