"""Decoding configuration and field readers for response payloads.

The server writes timestamps as ``2020-01-31T12:34:56Z``: second precision,
UTC designator or numeric offset. ``datetime.fromisoformat`` accepts a
superset of that (fractions, dates without time), so timestamps are parsed
with an explicit format carried by ``DecodeOptions`` and passed to every
decoder call.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime

__all__ = [
    "RFC3339_FORMAT",
    "DecodeOptions",
    "DEFAULT_DECODE_OPTIONS",
    "FieldError",
    "parse_timestamp",
    "require_str",
    "optional_str",
    "require_int",
    "require_bool",
    "require_timestamp",
    "optional_timestamp",
]

RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


@dataclass(frozen=True, slots=True)
class DecodeOptions:
    """Settings threaded through a decode call."""

    date_format: str = RFC3339_FORMAT


DEFAULT_DECODE_OPTIONS = DecodeOptions()


class FieldError(ValueError):
    """A payload field is missing or has the wrong type.

    Raised inside decoders only; the public decode functions convert it
    into a ``DecodingError`` value.
    """

    def __init__(self, key: str, problem: str) -> None:
        super().__init__(f"{key}: {problem}")
        self.key = key
        self.problem = problem

    def under(self, prefix: str) -> FieldError:
        """Return the same error with its key nested under ``prefix``."""
        return FieldError(f"{prefix}.{self.key}", self.problem)


def parse_timestamp(value: str, options: DecodeOptions = DEFAULT_DECODE_OPTIONS) -> datetime:
    """Parse a server timestamp into an aware datetime.

    Raises:
        ValueError: If ``value`` does not match ``options.date_format``.
    """
    parsed = datetime.strptime(value, options.date_format)
    if parsed.tzinfo is None:
        raise ValueError(f"timestamp without UTC offset: {value!r}")
    return parsed


def require_str(data: Mapping[str, object], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise FieldError(key, _problem(data, key, "string"))
    return value


def optional_str(data: Mapping[str, object], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise FieldError(key, _problem(data, key, "string"))
    return value


def require_int(data: Mapping[str, object], key: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise FieldError(key, _problem(data, key, "integer"))
    return value


def require_bool(data: Mapping[str, object], key: str) -> bool:
    value = data.get(key)
    if not isinstance(value, bool):
        raise FieldError(key, _problem(data, key, "boolean"))
    return value


def require_timestamp(data: Mapping[str, object], key: str, options: DecodeOptions) -> datetime:
    raw = require_str(data, key)
    try:
        return parse_timestamp(raw, options)
    except ValueError:
        raise FieldError(key, f"malformed timestamp {raw!r}") from None


def optional_timestamp(
    data: Mapping[str, object], key: str, options: DecodeOptions
) -> datetime | None:
    """Read a timestamp that may be absent or null (unpublished drafts)."""
    if data.get(key) is None:
        return None
    return require_timestamp(data, key, options)


def _problem(data: Mapping[str, object], key: str, expected: str) -> str:
    if key not in data:
        return "missing"
    return f"expected {expected}, got {type(data[key]).__name__}"
