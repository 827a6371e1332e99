"""Release, ReleaseNotes and User values decoded from response bodies.

Decoded values are immutable snapshots. Changing the release on the server
does not change a ``Release`` already held by the caller.

JSON keys and attribute names are mapped field by field in the decoders
below; every attribute of every model has exactly one source key.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime

from releasekit.core.result import Err, Ok, Result
from releasekit.core.structured import as_obj_list, as_str_dict

from .decoding import (
    DEFAULT_DECODE_OPTIONS,
    DecodeOptions,
    FieldError,
    optional_str,
    optional_timestamp,
    require_bool,
    require_int,
    require_str,
    require_timestamp,
)
from .errors import DecodingError

__all__ = [
    "User",
    "Release",
    "ReleaseNotes",
    "decode_user",
    "decode_release",
    "decode_release_list",
    "decode_release_notes",
]


@dataclass(frozen=True, slots=True)
class User:
    """Account that authored a release.

    Only the identifying fields are kept; profile details belong to the
    users endpoints.
    """

    id: int
    login: str
    node_id: str | None = None
    avatar_url: str | None = None
    html_url: str | None = None
    type: str | None = None


@dataclass(frozen=True, slots=True)
class Release:
    """One published or draft release.

    Attributes:
        id: Numeric release identifier (used by delete)
        url: API location of the release
        html_url: Web page of the release
        assets_url: API location of the asset list
        tarball_url: Source tarball, when the server provides one
        zipball_url: Source zipball, when the server provides one
        node_id: Stable global node identifier
        tag_name: Tag the release points at
        target_commitish: Branch or SHA the tag was created from
        name: Display name
        body: Release description
        draft: True for unpublished drafts
        prerelease: True for prereleases
        created_at: Creation time (always present)
        published_at: Publication time, None until published
        author: Account that created the release
    """

    id: int
    url: str
    html_url: str
    assets_url: str
    tarball_url: str | None
    zipball_url: str | None
    node_id: str
    tag_name: str
    target_commitish: str
    name: str
    body: str
    draft: bool
    prerelease: bool
    created_at: datetime
    published_at: datetime | None
    author: User

    @property
    def is_published(self) -> bool:
        return self.published_at is not None


@dataclass(frozen=True, slots=True)
class ReleaseNotes:
    """Generated release name and body."""

    name: str
    body: str


def _user_from(data: Mapping[str, object]) -> User:
    return User(
        id=require_int(data, "id"),
        login=require_str(data, "login"),
        node_id=optional_str(data, "node_id"),
        avatar_url=optional_str(data, "avatar_url"),
        html_url=optional_str(data, "html_url"),
        type=optional_str(data, "type"),
    )


def _release_from(data: Mapping[str, object], options: DecodeOptions) -> Release:
    author = as_str_dict(data.get("author"))
    if author is None:
        raise FieldError("author", "missing" if "author" not in data else "expected object")
    try:
        user = _user_from(author)
    except FieldError as e:
        raise e.under("author") from None

    return Release(
        id=require_int(data, "id"),
        url=require_str(data, "url"),
        html_url=require_str(data, "html_url"),
        assets_url=require_str(data, "assets_url"),
        tarball_url=optional_str(data, "tarball_url"),
        zipball_url=optional_str(data, "zipball_url"),
        node_id=require_str(data, "node_id"),
        tag_name=require_str(data, "tag_name"),
        target_commitish=require_str(data, "target_commitish"),
        name=require_str(data, "name"),
        body=require_str(data, "body"),
        draft=require_bool(data, "draft"),
        prerelease=require_bool(data, "prerelease"),
        created_at=require_timestamp(data, "created_at", options),
        published_at=optional_timestamp(data, "published_at", options),
        author=user,
    )


def decode_user(payload: object) -> Result[User, DecodingError]:
    data = as_str_dict(payload)
    if data is None:
        return Err(DecodingError("expected a user object"))
    try:
        return Ok(_user_from(data))
    except FieldError as e:
        return Err(DecodingError(str(e)))


def decode_release(
    payload: object,
    options: DecodeOptions = DEFAULT_DECODE_OPTIONS,
) -> Result[Release, DecodingError]:
    """Decode one release object.

    Args:
        payload: Parsed JSON
        options: Date format and other decode settings

    Returns:
        Ok with the Release, or Err naming the first offending key
    """
    data = as_str_dict(payload)
    if data is None:
        return Err(DecodingError("expected a release object"))
    try:
        return Ok(_release_from(data, options))
    except FieldError as e:
        return Err(DecodingError(str(e)))


def decode_release_list(
    payload: object,
    options: DecodeOptions = DEFAULT_DECODE_OPTIONS,
) -> Result[list[Release], DecodingError]:
    """Decode an array of releases, keeping server order.

    A single bad element fails the whole list.
    """
    items = as_obj_list(payload)
    if items is None:
        return Err(DecodingError("expected an array of releases"))

    releases: list[Release] = []
    for index, item in enumerate(items):
        result = decode_release(item, options)
        if isinstance(result, Err):
            return Err(DecodingError(f"[{index}] {result.error.message}"))
        releases.append(result.value)
    return Ok(releases)


def decode_release_notes(
    payload: object,
    options: DecodeOptions = DEFAULT_DECODE_OPTIONS,
) -> Result[ReleaseNotes, DecodingError]:
    data = as_str_dict(payload)
    if data is None:
        return Err(DecodingError("expected a release notes object"))
    try:
        return Ok(ReleaseNotes(name=require_str(data, "name"), body=require_str(data, "body")))
    except FieldError as e:
        return Err(DecodingError(str(e)))
