"""Errors that carry a specific meaning for API callers."""

from __future__ import annotations

import json
from typing import Any


class ApiError(Exception):
    """Base class of every error raised by this package."""


class NotFound(ApiError):
    """The item does not exist or otherwise cannot be found."""

    def __str__(self) -> str:
        return "Not Found"


class Unauthorized(ApiError):
    """The API token is invalid or may not view this resource."""

    def __str__(self) -> str:
        return "Unauthorized"


class UnexpectedStatus(ApiError):
    """The API answered with a status code that the call does not expect."""

    def __init__(self, status: int) -> None:
        self.status = status
        super().__init__(f"Unexpected status code: {status}")


class UnprocessableEntity(ApiError):
    """The item exists, a limit was reached, or the request cannot be processed."""

    def __init__(self, detail: Any) -> None:
        self.detail = detail
        rendered = json.dumps(detail, default=str)
        super().__init__(f"Unprocessable entity: {rendered}")


class TransportError(ApiError):
    """Sending the request or decoding its response failed."""