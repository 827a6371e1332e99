"""Route descriptors for the releases endpoints.

Each operation is one immutable variant carrying exactly the arguments its
request needs. Method, parameter encoding, path and parameters are derived
by a total ``match`` over the variant, so the dispatcher has a single code
path for all of them.

| Variant          | Method | Encoding | Path                                          |
|------------------|--------|----------|-----------------------------------------------|
| ListReleases     | GET    | URL      | repos/{owner}/{repo}/releases                 |
| GetReleaseByTag  | GET    | URL      | repos/{owner}/{repo}/releases/tags/{tag}      |
| PostRelease      | POST   | JSON     | repos/{owner}/{repo}/releases                 |
| DeleteRelease    | DELETE | URL      | repos/{owner}/{repo}/releases/{release_id}    |
| GenerateNotes    | POST   | JSON     | repos/{owner}/{repo}/releases/generate-notes  |
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Final, assert_never
from urllib.parse import quote

from releasekit.core.config import Configuration

__all__ = [
    "HttpMethod",
    "Encoding",
    "Unset",
    "UNSET",
    "ListReleases",
    "GetReleaseByTag",
    "PostRelease",
    "DeleteRelease",
    "GenerateNotes",
    "ReleaseRoute",
    "route_method",
    "route_encoding",
    "route_path",
    "route_params",
    "DEFAULT_PER_PAGE",
]

DEFAULT_PER_PAGE = 30


class HttpMethod(StrEnum):
    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"


class Encoding(Enum):
    """Where a route's parameters go."""

    URL = "url"  # query string
    JSON = "json"  # request body


class Unset(Enum):
    """Marker for an optional argument the caller did not supply.

    Distinct from every real value, including the empty string, so an
    omitted field can be left out of the payload instead of sent as null.
    """

    TOKEN = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = Unset.TOKEN


@dataclass(frozen=True, slots=True)
class ListReleases:
    config: Configuration
    owner: str
    repository: str
    per_page: int = DEFAULT_PER_PAGE


@dataclass(frozen=True, slots=True)
class GetReleaseByTag:
    config: Configuration
    owner: str
    repository: str
    tag: str


@dataclass(frozen=True, slots=True)
class PostRelease:
    """Create a release.

    Attributes:
        tag_name: Tag to publish the release under
        target_commitish: Branch or SHA the tag is created from when it
            does not exist yet; server default is the default branch
        name: Release title
        body: Release description
        prerelease: Mark as a prerelease
        draft: Create an unpublished draft
        generate_release_notes: Let the server generate name and body;
            a supplied name wins and a supplied body is prepended
    """

    config: Configuration
    owner: str
    repository: str
    tag_name: str
    target_commitish: str | Unset = UNSET
    name: str | Unset = UNSET
    body: str | Unset = UNSET
    prerelease: bool = False
    draft: bool = False
    generate_release_notes: bool = False


@dataclass(frozen=True, slots=True)
class DeleteRelease:
    config: Configuration
    owner: str
    repository: str
    release_id: int


@dataclass(frozen=True, slots=True)
class GenerateNotes:
    """Ask the server to generate notes for a tag range.

    Attributes:
        tag_name: Tag for the release (existing or new)
        target_commitish: Tag target when ``tag_name`` does not exist yet
        previous_tag_name: Start of the range of changes considered
    """

    config: Configuration
    owner: str
    repository: str
    tag_name: str
    target_commitish: str
    previous_tag_name: str


type ReleaseRoute = ListReleases | GetReleaseByTag | PostRelease | DeleteRelease | GenerateNotes


def route_method(route: ReleaseRoute) -> HttpMethod:
    match route:
        case ListReleases() | GetReleaseByTag():
            return HttpMethod.GET
        case PostRelease() | GenerateNotes():
            return HttpMethod.POST
        case DeleteRelease():
            return HttpMethod.DELETE
        case _:
            assert_never(route)


def route_encoding(route: ReleaseRoute) -> Encoding:
    match route:
        case ListReleases() | GetReleaseByTag() | DeleteRelease():
            return Encoding.URL
        case PostRelease() | GenerateNotes():
            return Encoding.JSON
        case _:
            assert_never(route)


def _segment(value: str | int) -> str:
    """Percent-encode one path segment ('/' included)."""
    return quote(str(value), safe="")


def route_path(route: ReleaseRoute) -> str:
    """API path relative to the configured endpoint, without a leading slash."""
    base = f"repos/{_segment(route.owner)}/{_segment(route.repository)}/releases"
    match route:
        case ListReleases() | PostRelease():
            return base
        case GetReleaseByTag(tag=tag):
            return f"{base}/tags/{_segment(tag)}"
        case DeleteRelease(release_id=release_id):
            return f"{base}/{_segment(release_id)}"
        case GenerateNotes():
            return f"{base}/generate-notes"
        case _:
            assert_never(route)


def route_params(route: ReleaseRoute) -> dict[str, object]:
    """Parameters to encode as query string or JSON body.

    Optional create fields appear only when supplied.
    """
    match route:
        case ListReleases(per_page=per_page):
            return {"per_page": str(per_page)}
        case GetReleaseByTag() | DeleteRelease():
            return {}
        case PostRelease():
            params: dict[str, object] = {
                "tag_name": route.tag_name,
                "prerelease": route.prerelease,
                "draft": route.draft,
                "generate_release_notes": route.generate_release_notes,
            }
            if not isinstance(route.target_commitish, Unset):
                params["target_commitish"] = route.target_commitish
            if not isinstance(route.name, Unset):
                params["name"] = route.name
            if not isinstance(route.body, Unset):
                params["body"] = route.body
            return params
        case GenerateNotes():
            return {
                "tag_name": route.tag_name,
                "target_commitish": route.target_commitish,
                "previous_tag_name": route.previous_tag_name,
            }
        case _:
            assert_never(route)
