"""Tests for releasekit.api.dispatch."""

from __future__ import annotations

import json
import logging
from typing import Any

import pytest

from releasekit.api.decoding import DEFAULT_DECODE_OPTIONS
from releasekit.api.dispatch import build_request, load, load_empty, send
from releasekit.api.errors import ApiError, DecodingError, EncodingError
from releasekit.api.models import decode_release, decode_release_notes
from releasekit.api.routes import (
    DeleteRelease,
    GenerateNotes,
    GetReleaseByTag,
    ListReleases,
    PostRelease,
)
from releasekit.core.config import Configuration
from releasekit.core.result import Err, Ok
from releasekit.http.transport import HttpResponse, MockTransport, TransportError

BASE = "https://api.github.com/repos/octo/kit/releases"


class TestBuildRequest:
    """Tests for build_request()."""

    def test_query_encoding(self, config: Configuration) -> None:
        result = build_request(ListReleases(config, "octo", "kit", per_page=30))

        assert isinstance(result, Ok)
        request = result.value
        assert request.method == "GET"
        assert request.url == f"{BASE}?per_page=30"
        assert request.body is None

    def test_empty_params_no_query_string(self, config: Configuration) -> None:
        result = build_request(GetReleaseByTag(config, "octo", "kit", "v1.0"))

        assert isinstance(result, Ok)
        assert result.value.url == f"{BASE}/tags/v1.0"

    def test_delete_has_no_body(self, config: Configuration) -> None:
        result = build_request(DeleteRelease(config, "octo", "kit", 5))

        assert isinstance(result, Ok)
        assert result.value.method == "DELETE"
        assert result.value.url == f"{BASE}/5"
        assert result.value.body is None
        assert "Content-Type" not in result.value.headers

    def test_json_encoding(self, config: Configuration) -> None:
        route = GenerateNotes(config, "octo", "kit", "v2", "main", "v1")

        result = build_request(route)

        assert isinstance(result, Ok)
        request = result.value
        assert request.method == "POST"
        assert request.url == f"{BASE}/generate-notes"
        assert request.headers["Content-Type"] == "application/json"
        assert request.json() == {
            "tag_name": "v2",
            "target_commitish": "main",
            "previous_tag_name": "v1",
        }

    def test_headers(self, config: Configuration) -> None:
        request = build_request(ListReleases(config, "octo", "kit")).unwrap()

        assert request is not None
        assert request.headers["Accept"] == "application/vnd.github+json"
        assert request.headers["User-Agent"] == "releasekit-tests"
        assert request.headers["Authorization"] == "Bearer test-token"

    def test_anonymous_has_no_authorization(self) -> None:
        request = build_request(ListReleases(Configuration(), "octo", "kit")).unwrap()

        assert request is not None
        assert "Authorization" not in request.headers

    def test_custom_endpoint(self) -> None:
        config = Configuration(api_endpoint="https://ghe.example.com/api/v3/")
        request = build_request(ListReleases(config, "octo", "kit", per_page=2)).unwrap()

        assert request is not None
        assert request.url == "https://ghe.example.com/api/v3/repos/octo/kit/releases?per_page=2"

    def test_omitted_optionals_absent_from_body(self, config: Configuration) -> None:
        route = PostRelease(config, "octo", "kit", "v1.0", generate_release_notes=True)

        request = build_request(route).unwrap()

        assert request is not None
        assert request.body == (
            b'{"tag_name": "v1.0", "prerelease": false, "draft": false, '
            b'"generate_release_notes": true}'
        )
        assert b"null" not in request.body

    def test_unserializable_value(self, config: Configuration) -> None:
        route = PostRelease(config, "octo", "kit", "v1.0", name=object())  # type: ignore[arg-type]

        result = build_request(route)

        assert isinstance(result, Err)
        assert isinstance(result.error, EncodingError)

    def test_non_finite_float(self, config: Configuration) -> None:
        route = PostRelease(config, "octo", "kit", "v1.0", body=float("nan"))  # type: ignore[arg-type]

        result = build_request(route)

        assert isinstance(result, Err)
        assert isinstance(result.error, EncodingError)


class TestSend:
    """Tests for send()."""

    def test_exactly_one_request(self, config: Configuration, transport: MockTransport) -> None:
        transport.set_json("GET", f"{BASE}?per_page=30", [])

        send(ListReleases(config, "octo", "kit"), transport)

        assert len(transport.requests) == 1

    def test_transport_error_passed_through(
        self, config: Configuration, transport: MockTransport
    ) -> None:
        transport.set_error("GET", f"{BASE}/tags/v1", "Connection refused")

        result = send(GetReleaseByTag(config, "octo", "kit", "v1"), transport)

        assert result == Err(TransportError(url=f"{BASE}/tags/v1", message="Connection refused"))

    def test_non_success_is_api_error(
        self, config: Configuration, transport: MockTransport
    ) -> None:
        transport.set_json("GET", f"{BASE}/tags/v9", {"message": "Not Found"}, status=404)

        result = send(GetReleaseByTag(config, "octo", "kit", "v9"), transport)

        assert isinstance(result, Err)
        assert isinstance(result.error, ApiError)
        assert result.error.status == 404
        assert result.error.message == "Not Found"

    def test_no_retry_on_server_error(
        self, config: Configuration, transport: MockTransport
    ) -> None:
        transport.set_response("GET", f"{BASE}?per_page=30", HttpResponse(status=503))

        result = send(ListReleases(config, "octo", "kit"), transport)

        assert result == Err(ApiError(status=503))
        assert len(transport.requests) == 1

    def test_encoding_error_sends_nothing(
        self, config: Configuration, transport: MockTransport
    ) -> None:
        route = PostRelease(config, "octo", "kit", "v1", name=object())  # type: ignore[arg-type]

        result = send(route, transport)

        assert isinstance(result, Err)
        assert transport.requests == []

    def test_state_transitions_logged(
        self,
        config: Configuration,
        transport: MockTransport,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        transport.set_response("DELETE", f"{BASE}/3", HttpResponse(status=204))

        with caplog.at_level(logging.DEBUG, logger="releasekit.api.dispatch"):
            load_empty(DeleteRelease(config, "octo", "kit", 3), transport)

        messages = [r.getMessage() for r in caplog.records]
        assert messages == [
            "DeleteRelease -> pending",
            f"DELETE {BASE}/3",
            "DeleteRelease -> awaiting-response",
            "DeleteRelease -> succeeded",
        ]
        assert "test-token" not in caplog.text


class TestLoad:
    """Tests for load() and load_empty()."""

    def test_decodes_body(
        self, config: Configuration, transport: MockTransport, make_release: Any
    ) -> None:
        transport.set_json("GET", f"{BASE}/tags/v1.0.0", make_release())

        result = load(
            GetReleaseByTag(config, "octo", "kit", "v1.0.0"),
            transport,
            decode_release,
            DEFAULT_DECODE_OPTIONS,
        )

        assert isinstance(result, Ok)
        assert result.value.tag_name == "v1.0.0"

    def test_invalid_json_keeps_body(
        self, config: Configuration, transport: MockTransport
    ) -> None:
        url = f"{BASE}/generate-notes"
        transport.set_response("POST", url, HttpResponse(status=200, body=b"<html>"))

        result = load(
            GenerateNotes(config, "octo", "kit", "v2", "main", "v1"),
            transport,
            decode_release_notes,
        )

        assert isinstance(result, Err)
        assert isinstance(result.error, DecodingError)
        assert result.error.body == b"<html>"

    def test_schema_mismatch_keeps_body(
        self, config: Configuration, transport: MockTransport
    ) -> None:
        url = f"{BASE}/generate-notes"
        transport.set_json("POST", url, {"name": "only a name"})

        result = load(
            GenerateNotes(config, "octo", "kit", "v2", "main", "v1"),
            transport,
            decode_release_notes,
        )

        assert isinstance(result, Err)
        assert isinstance(result.error, DecodingError)
        assert result.error.message == "body: missing"
        assert json.loads(result.error.body) == {"name": "only a name"}

    def test_error_status_not_decoded_as_success(
        self, config: Configuration, transport: MockTransport, make_release: Any
    ) -> None:
        # A release-shaped body on a failure status is still a failure.
        transport.set_json("GET", f"{BASE}/tags/v1", make_release(), status=500)

        result = load(GetReleaseByTag(config, "octo", "kit", "v1"), transport, decode_release)

        assert isinstance(result, Err)
        assert isinstance(result.error, ApiError)

    def test_load_empty_ignores_body(
        self, config: Configuration, transport: MockTransport
    ) -> None:
        transport.set_response("DELETE", f"{BASE}/3", HttpResponse(status=204))

        assert load_empty(DeleteRelease(config, "octo", "kit", 3), transport) == Ok(None)
