"""API configuration: where requests go and how they authenticate.

Configuration is read-only for the rest of the library. Routes carry a
reference to it; the dispatcher asks it for the endpoint and the
authorization headers and never changes it.

Example config.toml:

    [api]
    endpoint = "https://github.example.com/api/v3"
    token = "ghp_..."
    user_agent = "release-bot/1.0"
    timeout = 10
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from releasekit import __version__

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_str, get_table

__all__ = [
    "Configuration",
    "ConfigError",
    "load_config",
    "config_from_env",
    "DEFAULT_API_ENDPOINT",
    "DEFAULT_ACCEPT",
    "DEFAULT_TIMEOUT",
    "TOKEN_ENV_VAR",
    "ENDPOINT_ENV_VAR",
]

DEFAULT_API_ENDPOINT = "https://api.github.com"
DEFAULT_ACCEPT = "application/vnd.github+json"
DEFAULT_USER_AGENT = f"releasekit/{__version__}"
DEFAULT_TIMEOUT = 30.0

TOKEN_ENV_VAR = "GITHUB_TOKEN"
ENDPOINT_ENV_VAR = "RELEASEKIT_API_ENDPOINT"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.message} ({self.path})"
        return self.message


@dataclass(frozen=True, slots=True)
class Configuration:
    """Endpoint and credentials shared by every route."""

    api_endpoint: str = DEFAULT_API_ENDPOINT
    token: str | None = field(default=None, repr=False)
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    accept: str = DEFAULT_ACCEPT

    def authorization_headers(self) -> dict[str, str]:
        """Headers contributed by the credentials (empty when anonymous)."""
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def url_for(self, path: str) -> str:
        """Join the endpoint and a relative API path with a single slash."""
        return f"{self.api_endpoint.rstrip('/')}/{path.lstrip('/')}"

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Configuration:
        """Create a Configuration from parsed TOML."""
        api: StrDict = get_table(data, "api") or {}
        timeout = get_float(api, "timeout")
        return cls(
            api_endpoint=get_str(api, "endpoint") or DEFAULT_API_ENDPOINT,
            token=get_str(api, "token"),
            user_agent=get_str(api, "user_agent") or DEFAULT_USER_AGENT,
            timeout=DEFAULT_TIMEOUT if timeout is None else timeout,
            accept=get_str(api, "accept") or DEFAULT_ACCEPT,
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError("Config file not found", path=path))
    except PermissionError:
        return Err(ConfigError("Permission denied reading config", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Configuration, ConfigError]:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file

    Returns:
        Ok(Configuration) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    api = result.value.get("api")
    if api is not None and as_str_dict(api) is None:
        return Err(ConfigError("[api] must be a table", path=path))

    config = Configuration.from_dict(result.value)
    if config.timeout <= 0:
        return Err(ConfigError(f"timeout must be positive, got {config.timeout}", path=path))
    return Ok(config)


def config_from_env(
    environ: Mapping[str, str],
    base: Configuration | None = None,
) -> Configuration:
    """Overlay token and endpoint from environment variables onto ``base``.

    Empty variables are ignored so an exported-but-blank token does not
    clear one read from a file.
    """
    config = base or Configuration()
    token = environ.get(TOKEN_ENV_VAR, "").strip()
    endpoint = environ.get(ENDPOINT_ENV_VAR, "").strip()
    if token:
        config = replace(config, token=token)
    if endpoint:
        config = replace(config, api_endpoint=endpoint)
    return config
