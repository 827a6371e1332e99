"""HTTP transport layer."""

from .transport import (
    HttpRequest,
    HttpResponse,
    MockTransport,
    Transport,
    TransportError,
    UrllibTransport,
)

__all__ = [
    "HttpRequest",
    "HttpResponse",
    "MockTransport",
    "Transport",
    "TransportError",
    "UrllibTransport",
]
