"""Turn a route into one HTTP exchange and a typed result.

Every operation goes through the same steps:

1. derive method, encoding, path and params from the route
2. build the request (query string or JSON body, headers from config)
3. send it through the injected transport, once
4. map transport failures and non-success statuses to typed errors
5. decode the body into the operation's result type

The only suspension point is ``transport.send``. Nothing here is shared
between dispatches, so concurrent calls are independent.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from enum import Enum
from urllib.parse import urlencode

from releasekit.core.result import Err, Ok, Result
from releasekit.http.transport import HttpRequest, HttpResponse, Transport

from .decoding import DEFAULT_DECODE_OPTIONS, DecodeOptions
from .errors import ApiError, DecodingError, EncodingError, ReleaseApiError
from .routes import Encoding, ReleaseRoute, route_encoding, route_method, route_params, route_path

__all__ = [
    "DispatchState",
    "Decoder",
    "build_request",
    "send",
    "load",
    "load_empty",
]

logger = logging.getLogger(__name__)

type Decoder[T] = Callable[[object, DecodeOptions], Result[T, DecodingError]]


class DispatchState(Enum):
    PENDING = "pending"
    AWAITING_RESPONSE = "awaiting-response"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def _transition(route: ReleaseRoute, state: DispatchState) -> None:
    logger.debug("%s -> %s", type(route).__name__, state.value)


def build_request(route: ReleaseRoute) -> Result[HttpRequest, EncodingError]:
    """Build the concrete request for ``route``.

    Returns:
        Ok with the request, or Err if the params cannot be serialized
    """
    config = route.config
    method = route_method(route)
    params = route_params(route)
    url = config.url_for(route_path(route))

    headers = {
        "Accept": config.accept,
        "User-Agent": config.user_agent,
        **config.authorization_headers(),
    }

    match route_encoding(route):
        case Encoding.URL:
            if params:
                url = f"{url}?{urlencode(params)}"
            return Ok(HttpRequest(method=method.value, url=url, headers=headers))
        case Encoding.JSON:
            try:
                body = json.dumps(params, allow_nan=False).encode("utf-8")
            except (TypeError, ValueError) as e:
                return Err(EncodingError(str(e)))
            headers["Content-Type"] = "application/json"
            return Ok(HttpRequest(method=method.value, url=url, headers=headers, body=body))


def send(route: ReleaseRoute, transport: Transport) -> Result[HttpResponse, ReleaseApiError]:
    """Perform the request for ``route`` and check its status.

    Returns:
        Ok with a 2xx response, or Err with the typed failure
    """
    _transition(route, DispatchState.PENDING)
    built = build_request(route)
    if isinstance(built, Err):
        _transition(route, DispatchState.FAILED)
        return built

    request = built.value
    logger.debug("%s %s", request.method, request.url)
    _transition(route, DispatchState.AWAITING_RESPONSE)
    sent = transport.send(request)
    if isinstance(sent, Err):
        logger.debug("transport failure: %s", sent.error)
        _transition(route, DispatchState.FAILED)
        return sent

    response = sent.value
    if not response.is_success:
        _transition(route, DispatchState.FAILED)
        return Err(ApiError.from_response(response))
    return Ok(response)


def load[T](
    route: ReleaseRoute,
    transport: Transport,
    decoder: Decoder[T],
    options: DecodeOptions = DEFAULT_DECODE_OPTIONS,
) -> Result[T, ReleaseApiError]:
    """Dispatch ``route`` and decode the response body with ``decoder``."""
    sent = send(route, transport)
    if isinstance(sent, Err):
        return sent

    body = sent.value.body
    try:
        payload: object = json.loads(body.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        _transition(route, DispatchState.FAILED)
        return Err(DecodingError(f"response is not JSON: {e}", body=body))

    decoded = decoder(payload, options)
    if isinstance(decoded, Err):
        _transition(route, DispatchState.FAILED)
        return Err(DecodingError(decoded.error.message, body=body))

    _transition(route, DispatchState.SUCCEEDED)
    return decoded


def load_empty(route: ReleaseRoute, transport: Transport) -> Result[None, ReleaseApiError]:
    """Dispatch ``route`` for an operation without a response payload."""
    sent = send(route, transport)
    if isinstance(sent, Err):
        return sent
    _transition(route, DispatchState.SUCCEEDED)
    return Ok(None)
