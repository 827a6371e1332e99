"""Releases API: routes, dispatch, models and operations."""

from .decoding import DEFAULT_DECODE_OPTIONS, RFC3339_FORMAT, DecodeOptions
from .errors import ApiError, DecodingError, EncodingError, ReleaseApiError, TransportError
from .models import Release, ReleaseNotes, User
from .releases import (
    delete_release,
    generate_release_notes,
    list_releases,
    post_release,
    release,
)
from .routes import (
    UNSET,
    DeleteRelease,
    GenerateNotes,
    GetReleaseByTag,
    ListReleases,
    PostRelease,
    ReleaseRoute,
    Unset,
)

__all__ = [
    # decoding
    "DEFAULT_DECODE_OPTIONS",
    "RFC3339_FORMAT",
    "DecodeOptions",
    # errors
    "ApiError",
    "DecodingError",
    "EncodingError",
    "ReleaseApiError",
    "TransportError",
    # models
    "Release",
    "ReleaseNotes",
    "User",
    # operations
    "delete_release",
    "generate_release_notes",
    "list_releases",
    "post_release",
    "release",
    # routes
    "UNSET",
    "DeleteRelease",
    "GenerateNotes",
    "GetReleaseByTag",
    "ListReleases",
    "PostRelease",
    "ReleaseRoute",
    "Unset",
]
