"""Release operations.

One function per endpoint. Each builds the route, dispatches it through the
given transport and returns a ``Result``:

    transport = UrllibTransport()
    config = Configuration(token="...")
    result = list_releases(transport, config, "octo", "kit", per_page=10)
    if isinstance(result, Ok):
        for release in result.value:
            print(release.tag_name, release.published_at)
"""

from __future__ import annotations

from releasekit.core.config import Configuration
from releasekit.core.result import Result
from releasekit.http.transport import Transport

from .decoding import DEFAULT_DECODE_OPTIONS, DecodeOptions
from .dispatch import load, load_empty
from .errors import ReleaseApiError
from .models import (
    Release,
    ReleaseNotes,
    decode_release,
    decode_release_list,
    decode_release_notes,
)
from .routes import (
    DEFAULT_PER_PAGE,
    UNSET,
    DeleteRelease,
    GenerateNotes,
    GetReleaseByTag,
    ListReleases,
    PostRelease,
    Unset,
)

__all__ = [
    "list_releases",
    "release",
    "post_release",
    "delete_release",
    "generate_release_notes",
]


def list_releases(
    transport: Transport,
    config: Configuration,
    owner: str,
    repository: str,
    per_page: int = DEFAULT_PER_PAGE,
    options: DecodeOptions = DEFAULT_DECODE_OPTIONS,
) -> Result[list[Release], ReleaseApiError]:
    """Fetch one page of releases, newest first.

    Args:
        transport: Transport that performs the request
        config: Endpoint and credentials
        owner: User or organization owning the repository
        repository: Repository name
        per_page: Results per page; the server caps this at 100
        options: Decode settings

    Returns:
        Ok with the releases in server order, or Err with the failure
    """
    route = ListReleases(config, owner, repository, per_page)
    return load(route, transport, decode_release_list, options)


def release(
    transport: Transport,
    config: Configuration,
    owner: str,
    repository: str,
    tag: str,
    options: DecodeOptions = DEFAULT_DECODE_OPTIONS,
) -> Result[Release, ReleaseApiError]:
    """Fetch the published release for ``tag``."""
    route = GetReleaseByTag(config, owner, repository, tag)
    return load(route, transport, decode_release, options)


def post_release(
    transport: Transport,
    config: Configuration,
    owner: str,
    repository: str,
    tag_name: str,
    *,
    target_commitish: str | Unset = UNSET,
    name: str | Unset = UNSET,
    body: str | Unset = UNSET,
    prerelease: bool = False,
    draft: bool = False,
    generate_release_notes: bool = False,
    options: DecodeOptions = DEFAULT_DECODE_OPTIONS,
) -> Result[Release, ReleaseApiError]:
    """Create a release.

    Optional fields left as ``UNSET`` are not sent, so the server applies
    its own defaults (default branch, generated or empty name and body).

    Args:
        transport: Transport that performs the request
        config: Endpoint and credentials
        owner: User or organization owning the repository
        repository: Repository name
        tag_name: Tag to publish the release under
        target_commitish: Branch or SHA to create the tag from
        name: Release title
        body: Release description
        prerelease: Mark as a prerelease
        draft: Create an unpublished draft
        generate_release_notes: Let the server generate name and body
        options: Decode settings

    Returns:
        Ok with the created Release, or Err with the failure
    """
    route = PostRelease(
        config,
        owner,
        repository,
        tag_name,
        target_commitish=target_commitish,
        name=name,
        body=body,
        prerelease=prerelease,
        draft=draft,
        generate_release_notes=generate_release_notes,
    )
    return load(route, transport, decode_release, options)


def delete_release(
    transport: Transport,
    config: Configuration,
    owner: str,
    repository: str,
    release_id: int,
) -> Result[None, ReleaseApiError]:
    """Delete a release by numeric id.

    Deleting an already deleted release surfaces the server's 404 as an
    ``ApiError``.
    """
    route = DeleteRelease(config, owner, repository, release_id)
    return load_empty(route, transport)


def generate_release_notes(
    transport: Transport,
    config: Configuration,
    owner: str,
    repository: str,
    tag_name: str,
    target_commitish: str,
    previous_tag_name: str,
) -> Result[ReleaseNotes, ReleaseApiError]:
    """Generate a name and body for a release without creating it.

    Args:
        transport: Transport that performs the request
        config: Endpoint and credentials
        owner: User or organization owning the repository
        repository: Repository name
        tag_name: Tag for the release (existing or new)
        target_commitish: Tag target when ``tag_name`` does not exist yet
        previous_tag_name: Start of the range of changes to summarize

    Returns:
        Ok with the generated ReleaseNotes, or Err with the failure
    """
    route = GenerateNotes(config, owner, repository, tag_name, target_commitish, previous_tag_name)
    return load(route, transport, decode_release_notes)
