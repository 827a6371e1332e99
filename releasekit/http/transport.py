"""HTTP transport abstraction.

This module provides:
- HttpRequest / HttpResponse: the request and response shapes the dispatcher
  exchanges with a transport
- Transport: Protocol for sending one request (injectable for tests)
- UrllibTransport: real implementation using urllib
- MockTransport: scripted implementation for testing

A transport performs exactly one HTTP exchange per ``send`` call. It does not
retry, cache or interpret status codes: any status the server returns is an
``Ok(HttpResponse)``. ``Err(TransportError)`` means no response was obtained.
"""

from __future__ import annotations

import http.client
import json
import logging
import ssl
import urllib.error
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from releasekit.core.result import Err, Ok, Result

__all__ = [
    "HttpRequest",
    "HttpResponse",
    "TransportError",
    "Transport",
    "UrllibTransport",
    "MockTransport",
]

logger = logging.getLogger(__name__)


def _empty_headers() -> dict[str, str]:
    return {}


@dataclass(frozen=True, slots=True)
class HttpRequest:
    """A fully built request, ready to send.

    Attributes:
        method: HTTP method name ("GET", "POST", "DELETE")
        url: Absolute URL including any query string
        headers: Request headers
        body: Encoded request body, or None
    """

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=_empty_headers)
    body: bytes | None = None

    def json(self) -> object:
        """Decode the request body as JSON, or None when there is no body."""
        if self.body is None:
            return None
        return json.loads(self.body.decode("utf-8"))


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """A response as received, whatever its status."""

    status: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=_empty_headers)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300


@dataclass(frozen=True, slots=True)
class TransportError:
    """The request could not be sent or no response was received.

    Attributes:
        url: The URL that failed
        message: Human-readable reason (connection refused, timeout, ...)
    """

    url: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} ({self.url})"


@runtime_checkable
class Transport(Protocol):
    """Protocol for performing one HTTP exchange."""

    def send(self, request: HttpRequest) -> Result[HttpResponse, TransportError]:
        """Send ``request`` and return the response.

        Args:
            request: The request to perform

        Returns:
            Ok with the response (any status), or Err with TransportError
        """
        ...


class UrllibTransport:
    """Transport using urllib with system certificates."""

    def __init__(self, timeout: float = 30.0) -> None:
        """Initialize transport.

        Args:
            timeout: Socket timeout in seconds
        """
        self.timeout = timeout
        self._ssl_context = ssl.create_default_context()

    def send(self, request: HttpRequest) -> Result[HttpResponse, TransportError]:
        url = request.url
        logger.debug("%s %s", request.method, url)
        try:
            req = urllib.request.Request(
                url,
                data=request.body,
                headers=dict(request.headers),
                method=request.method,
            )
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(
                    HttpResponse(
                        status=response.status,
                        body=response.read(),
                        headers=dict(response.headers.items()),
                    )
                )
        except urllib.error.HTTPError as e:
            # Non-2xx statuses still carry a response the caller must see.
            body = _read_error_body(e)
            headers = dict(e.headers.items()) if e.headers is not None else {}
            return Ok(HttpResponse(status=e.code, body=body, headers=headers))
        except urllib.error.URLError as e:
            return Err(TransportError(url=url, message=str(e.reason)))
        except http.client.HTTPException as e:
            return Err(TransportError(url=url, message=str(e)))
        except TimeoutError:
            return Err(TransportError(url=url, message="Request timed out"))
        except ValueError as e:
            return Err(TransportError(url=url, message=str(e)))
        except OSError as e:
            return Err(TransportError(url=url, message=str(e)))


def _read_error_body(error: urllib.error.HTTPError) -> bytes:
    if error.fp is None:
        return b""
    try:
        return error.read()
    except (http.client.HTTPException, OSError) as e:
        logger.debug("Could not read body of HTTP %d: %s", error.code, e)
        return b""


_NOT_FOUND_BODY = b'{"message": "Not Found (mock)"}'


class MockTransport:
    """Scripted transport for testing.

    Responses are registered per (method, url) and consumed in order; the
    last registered response for a key is repeated once the queue is down
    to it. Unregistered requests get a 404.

    Usage:
        transport = MockTransport()
        transport.set_json("GET", "https://api.github.com/repos/o/r/releases", [])
        result = transport.send(HttpRequest("GET", "https://api.github.com/repos/o/r/releases"))
        assert result.unwrap().body == b"[]"
    """

    def __init__(self) -> None:
        self._responses: dict[tuple[str, str], list[HttpResponse | TransportError]] = {}
        self.requests: list[HttpRequest] = []

    def set_response(self, method: str, url: str, response: HttpResponse | TransportError) -> None:
        """Queue a response (or a transport failure) for method/url."""
        self._responses.setdefault((method, url), []).append(response)

    def set_json(self, method: str, url: str, payload: object, status: int = 200) -> None:
        """Queue a JSON response for method/url."""
        body = json.dumps(payload).encode("utf-8")
        headers = {"Content-Type": "application/json"}
        self.set_response(method, url, HttpResponse(status=status, body=body, headers=headers))

    def set_error(self, method: str, url: str, message: str) -> None:
        """Queue a transport-level failure for method/url."""
        self.set_response(method, url, TransportError(url=url, message=message))

    def send(self, request: HttpRequest) -> Result[HttpResponse, TransportError]:
        self.requests.append(request)

        queue = self._responses.get((request.method, request.url))
        if not queue:
            return Ok(HttpResponse(status=404, body=_NOT_FOUND_BODY))

        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, TransportError):
            return Err(response)
        return Ok(response)

    @property
    def last_request(self) -> HttpRequest:
        return self.requests[-1]
