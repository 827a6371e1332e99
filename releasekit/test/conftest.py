"""Shared fixtures: response payloads and a mock transport."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from releasekit.core.config import Configuration
from releasekit.http.transport import MockTransport

API = "https://api.github.com"

type ReleaseFactory = Callable[..., dict[str, Any]]


def _author() -> dict[str, Any]:
    return {
        "login": "octocat",
        "id": 1,
        "node_id": "MDQ6VXNlcjE=",
        "avatar_url": "https://github.com/images/error/octocat_happy.gif",
        "html_url": "https://github.com/octocat",
        "type": "User",
        "site_admin": False,
    }


def _release(release_id: int = 1, tag: str = "v1.0.0", **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "url": f"{API}/repos/octo/kit/releases/{release_id}",
        "html_url": f"https://github.com/octo/kit/releases/{tag}",
        "assets_url": f"{API}/repos/octo/kit/releases/{release_id}/assets",
        "upload_url": f"https://uploads.github.com/repos/octo/kit/releases/{release_id}/assets",
        "tarball_url": f"{API}/repos/octo/kit/tarball/{tag}",
        "zipball_url": f"{API}/repos/octo/kit/zipball/{tag}",
        "id": release_id,
        "node_id": f"MDc6UmVsZWFzZ{release_id}",
        "tag_name": tag,
        "target_commitish": "main",
        "name": f"Release {tag}",
        "body": "Description of the release",
        "draft": False,
        "prerelease": False,
        "created_at": "2013-02-27T19:35:32Z",
        "published_at": "2013-02-27T19:35:32Z",
        "author": _author(),
        "assets": [],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_release() -> ReleaseFactory:
    """Factory for release JSON objects as the API returns them."""
    return _release


@pytest.fixture
def config() -> Configuration:
    return Configuration(api_endpoint=API, token="test-token", user_agent="releasekit-tests")


@pytest.fixture
def transport() -> MockTransport:
    return MockTransport()
