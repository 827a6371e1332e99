from __future__ import annotations

import logging
from pathlib import Path

import typer

from releasekit import __version__
from releasekit.cli.commands.releases import create, delete, get, list_cmd, notes
from releasekit.cli.context import CLIOptions


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command("list")(list_cmd)
app.command()(get)
app.command()(create)
app.command()(delete)
app.command()(notes)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="TOML config file with an [api] table",
    ),
    token: str | None = typer.Option(None, "--token", help="API token (overrides GITHUB_TOKEN)"),
    endpoint: str | None = typer.Option(None, "--endpoint", help="API base URL"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests to stderr."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

    ctx.obj = CLIOptions(
        config_path=config.expanduser() if config is not None else None,
        token=token,
        endpoint=endpoint,
    )


def main() -> None:
    app()
