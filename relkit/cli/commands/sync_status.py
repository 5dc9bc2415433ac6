"""Sync-status command - compare a branch with its remote counterpart."""

from __future__ import annotations

import typer

from relkit.cli.commands._helpers import unwrap_or_exit
from relkit.cli.context import build_context
from relkit.git.sync import RemoteDiffStatus
from relkit.output.console import Style

_STATUS_STYLE = {
    RemoteDiffStatus.UP_TO_DATE: Style.SUCCESS,
    RemoteDiffStatus.NEEDS_PUSH: Style.INFO,
    RemoteDiffStatus.NEEDS_PULL: Style.WARNING,
    RemoteDiffStatus.DIVERGED: Style.ERROR,
}


def sync_status(
    branch: str | None = typer.Argument(None, help="Branch to compare (default: the active branch)"),
    fetch: bool = typer.Option(False, "--fetch", help="Update the remote before comparing"),
) -> None:
    """Show whether a branch is up to date, ahead, behind or diverged."""
    ctx = build_context()
    remote = ctx.config.branches.remote

    if fetch:
        unwrap_or_exit(ctx.git.remote_update(remote), ctx)
    if branch is None:
        branch = unwrap_or_exit(ctx.git.active_branch_name(), ctx)

    status = unwrap_or_exit(ctx.git.remote_diff_status(remote, branch), ctx)
    ctx.console.print(f"{branch} vs {remote}/{branch}: {status}", _STATUS_STYLE[status])
