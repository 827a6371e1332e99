"""Typed failures for release operations.

Every failure reaches the caller as exactly one of these values inside
``Err``:

- TransportError: no response was obtained (connection, timeout)
- ApiError: the server answered with a non-success status
- DecodingError: a success response did not match the expected shape
- EncodingError: request parameters could not be serialized
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import assert_never

from releasekit.core.errors import ErrorCode
from releasekit.core.structured import as_obj_list, as_str_dict, get_str
from releasekit.http.transport import HttpResponse, TransportError

__all__ = [
    "ApiError",
    "DecodingError",
    "EncodingError",
    "TransportError",
    "ReleaseApiError",
    "exit_code_for",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ApiError:
    """Non-success status from the server.

    Attributes:
        status: HTTP status code
        message: Server-supplied message, when the error body was decodable
        documentation_url: Server-supplied documentation link, if any
        errors: Structured validation details (``errors`` array), if any
        body: Raw response body
    """

    status: int
    message: str | None = None
    documentation_url: str | None = None
    errors: tuple[object, ...] = ()
    body: bytes = b""

    def __str__(self) -> str:
        if self.message:
            return f"HTTP {self.status}: {self.message}"
        return f"HTTP {self.status}"

    @classmethod
    def from_response(cls, response: HttpResponse) -> ApiError:
        """Build an error from a failed response, reading its body best effort.

        An empty or malformed body yields an error carrying only the status.
        """
        fallback = cls(status=response.status, body=response.body)
        if not response.body:
            return fallback

        try:
            payload: object = json.loads(response.body.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("Undecodable error body for HTTP %d", response.status)
            return fallback

        data = as_str_dict(payload)
        if data is None:
            logger.warning("Error body for HTTP %d is not a JSON object", response.status)
            return fallback

        details = as_obj_list(data.get("errors")) or []
        return cls(
            status=response.status,
            message=get_str(data, "message"),
            documentation_url=get_str(data, "documentation_url"),
            errors=tuple(details),
            body=response.body,
        )


@dataclass(frozen=True, slots=True)
class DecodingError:
    """Success response whose body did not match the expected schema.

    Attributes:
        message: What was wrong, naming the offending key
        body: Raw response body, for diagnostics
    """

    message: str
    body: bytes = b""

    def __str__(self) -> str:
        return f"Invalid response: {self.message}"


@dataclass(frozen=True, slots=True)
class EncodingError:
    """Request parameters could not be serialized."""

    message: str

    def __str__(self) -> str:
        return f"Cannot encode request: {self.message}"


type ReleaseApiError = TransportError | ApiError | DecodingError | EncodingError


def exit_code_for(error: ReleaseApiError) -> ErrorCode:
    """Map an error to the CLI exit code for its category."""
    match error:
        case TransportError():
            return ErrorCode.NETWORK_ERROR
        case ApiError():
            return ErrorCode.API_ERROR
        case DecodingError():
            return ErrorCode.DECODE_ERROR
        case EncodingError():
            return ErrorCode.USER_ERROR
        case _:
            assert_never(error)
