"""Release commands: list, get, create, delete, notes."""

from __future__ import annotations

from datetime import datetime

import typer

from releasekit.api.errors import ReleaseApiError, exit_code_for
from releasekit.api.models import Release
from releasekit.api.releases import (
    delete_release,
    generate_release_notes,
    list_releases,
    post_release,
    release,
)
from releasekit.api.routes import DEFAULT_PER_PAGE, UNSET, Unset
from releasekit.cli.context import build_context
from releasekit.core.result import Err
from releasekit.output.console import ConsoleProtocol


def _fail(console: ConsoleProtocol, error: ReleaseApiError) -> typer.Exit:
    console.error(str(error))
    return typer.Exit(code=int(exit_code_for(error)))


def _when(value: datetime | None) -> str:
    if value is None:
        return "-"
    return value.strftime("%Y-%m-%d %H:%M")


def _kind(rel: Release) -> str:
    if rel.draft:
        return "draft"
    if rel.prerelease:
        return "prerelease"
    return "release"


def _show(console: ConsoleProtocol, rel: Release) -> None:
    console.header(rel.name or rel.tag_name)
    console.print(f"id:        {rel.id}")
    console.print(f"tag:       {rel.tag_name} ({rel.target_commitish})")
    console.print(f"kind:      {_kind(rel)}")
    console.print(f"author:    {rel.author.login}")
    console.print(f"created:   {_when(rel.created_at)}")
    console.print(f"published: {_when(rel.published_at)}")
    console.print(f"url:       {rel.html_url}")
    if rel.body:
        console.print("")
        console.print(rel.body)


def _optional(value: str | None) -> str | Unset:
    return UNSET if value is None else value


def list_cmd(
    ctx: typer.Context,
    owner: str = typer.Argument(..., help="Repository owner"),
    repo: str = typer.Argument(..., help="Repository name"),
    per_page: int = typer.Option(DEFAULT_PER_PAGE, "--per-page", "-n", help="Results per page"),
) -> None:
    """List releases of a repository."""
    c = build_context(ctx.obj)
    result = list_releases(c.transport, c.config, owner, repo, per_page=per_page)
    if isinstance(result, Err):
        raise _fail(c.console, result.error)

    rows = [
        (str(r.id), r.tag_name, r.name, _kind(r), _when(r.published_at)) for r in result.value
    ]
    c.console.table(
        f"{owner}/{repo}",
        ("id", "tag", "name", "kind", "published"),
        rows,
    )


def get(
    ctx: typer.Context,
    owner: str = typer.Argument(..., help="Repository owner"),
    repo: str = typer.Argument(..., help="Repository name"),
    tag: str = typer.Argument(..., help="Release tag"),
) -> None:
    """Show the release published for a tag."""
    c = build_context(ctx.obj)
    result = release(c.transport, c.config, owner, repo, tag)
    if isinstance(result, Err):
        raise _fail(c.console, result.error)
    _show(c.console, result.value)


def create(
    ctx: typer.Context,
    owner: str = typer.Argument(..., help="Repository owner"),
    repo: str = typer.Argument(..., help="Repository name"),
    tag: str = typer.Argument(..., help="Tag to publish the release under"),
    target: str | None = typer.Option(None, "--target", help="Branch or SHA to tag"),
    name: str | None = typer.Option(None, "--name", help="Release title"),
    body: str | None = typer.Option(None, "--body", help="Release description"),
    prerelease: bool = typer.Option(False, "--prerelease", help="Mark as prerelease"),
    draft: bool = typer.Option(False, "--draft", help="Create an unpublished draft"),
    generate_notes: bool = typer.Option(
        False, "--generate-notes", help="Let GitHub generate name and body"
    ),
) -> None:
    """Create a release."""
    c = build_context(ctx.obj)
    result = post_release(
        c.transport,
        c.config,
        owner,
        repo,
        tag,
        target_commitish=_optional(target),
        name=_optional(name),
        body=_optional(body),
        prerelease=prerelease,
        draft=draft,
        generate_release_notes=generate_notes,
    )
    if isinstance(result, Err):
        raise _fail(c.console, result.error)
    c.console.success(f"created release {result.value.id} ({result.value.tag_name})")
    c.console.print(result.value.html_url)


def delete(
    ctx: typer.Context,
    owner: str = typer.Argument(..., help="Repository owner"),
    repo: str = typer.Argument(..., help="Repository name"),
    release_id: int = typer.Argument(..., help="Numeric release id"),
) -> None:
    """Delete a release by id."""
    c = build_context(ctx.obj)
    result = delete_release(c.transport, c.config, owner, repo, release_id)
    if isinstance(result, Err):
        raise _fail(c.console, result.error)
    c.console.success(f"deleted release {release_id}")


def notes(
    ctx: typer.Context,
    owner: str = typer.Argument(..., help="Repository owner"),
    repo: str = typer.Argument(..., help="Repository name"),
    tag: str = typer.Argument(..., help="Tag for the release"),
    target: str = typer.Option(..., "--target", help="Tag target if the tag is new"),
    previous: str = typer.Option(..., "--previous", help="Previous tag (range start)"),
) -> None:
    """Generate release notes without creating a release."""
    c = build_context(ctx.obj)
    result = generate_release_notes(c.transport, c.config, owner, repo, tag, target, previous)
    if isinstance(result, Err):
        raise _fail(c.console, result.error)
    c.console.header(result.value.name)
    c.console.print(result.value.body)
