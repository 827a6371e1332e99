from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

import typer

from releasekit.core.config import Configuration, config_from_env, load_config
from releasekit.core.errors import ErrorCode
from releasekit.core.result import Err
from releasekit.http.transport import Transport, UrllibTransport
from releasekit.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIOptions:
    """Global options collected by the app callback."""

    config_path: Path | None = None
    token: str | None = None
    endpoint: str | None = None


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Configuration
    transport: Transport
    console: ConsoleProtocol


def resolve_config(options: CLIOptions) -> Configuration:
    """Config file, then environment, then command-line overrides."""
    config = Configuration()
    if options.config_path is not None:
        result = load_config(options.config_path)
        if isinstance(result, Err):
            typer.echo(f"error: {result.error}", err=True)
            raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))
        config = result.value

    config = config_from_env(os.environ, config)
    if options.token:
        config = replace(config, token=options.token)
    if options.endpoint:
        config = replace(config, api_endpoint=options.endpoint)
    return config


def build_context(options: CLIOptions | None) -> CLIContext:
    config = resolve_config(options or CLIOptions())
    return CLIContext(
        config=config,
        transport=UrllibTransport(timeout=config.timeout),
        console=RichConsole(),
    )
