"""Changelog command - render release notes for a commit range."""

from __future__ import annotations

import typer

from relkit.cli.commands._helpers import unwrap_or_exit
from relkit.cli.context import CLIContext, build_context
from relkit.core.errors import ErrorCode
from relkit.core.result import Ok
from relkit.release.changelog import ChangelogRenderer
from relkit.release.hosting import HostingInfo, resolve_hosting


def _hosting(ctx: CLIContext) -> HostingInfo:
    remote_url: str | None = None
    if not ctx.config.hosting.is_complete:
        url_result = ctx.git.remote_url(ctx.config.branches.remote)
        if isinstance(url_result, Ok):
            remote_url = url_result.value

    return unwrap_or_exit(resolve_hosting(ctx.config.hosting, remote_url), ctx, ErrorCode.ENV_ERROR)


def changelog(
    base: str | None = typer.Argument(None, help="Base ref (default: last tag on the branch)"),
    head: str | None = typer.Argument(None, help="Head ref (default: the active branch)"),
    categories: bool = typer.Option(
        True,
        "--categories/--oneline",
        help="Group items by category or print a flat list",
    ),
    all_categories: bool = typer.Option(
        False,
        "--all-categories",
        help="Also print empty categories",
    ),
) -> None:
    """Render the changelog between two refs as markdown."""
    ctx = build_context()

    if base is None:
        base = unwrap_or_exit(ctx.git.last_tag_on_branch(), ctx)
    if head is None:
        head = unwrap_or_exit(ctx.git.active_branch_name(), ctx)

    renderer = ChangelogRenderer(_hosting(ctx))
    commits = unwrap_or_exit(ctx.git.log_between(base, head), ctx)

    if categories:
        text = renderer.render_by_categories(commits, skip_empty=not all_categories)
    else:
        text = renderer.render_one_line(commits)

    # Plain echo: the markdown links must not be read as Rich markup.
    typer.echo(text)
