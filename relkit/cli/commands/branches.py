"""Branches command - show the version branch ladder."""

from __future__ import annotations

import typer

from relkit.cli.commands._helpers import unwrap_or_exit
from relkit.cli.context import build_context
from relkit.git.branches import build_ladder
from relkit.output.console import Style


def branches(
    fetch: bool = typer.Option(False, "--fetch", help="Update the remote before listing"),
) -> None:
    """List version branches of the remote, oldest first, then mainline."""
    ctx = build_context()
    remote = ctx.config.branches.remote

    if fetch:
        unwrap_or_exit(ctx.git.remote_update(remote), ctx)

    versions = unwrap_or_exit(ctx.git.version_branches(remote), ctx)
    ladder = build_ladder(versions, ctx.config.branches.mainline)

    ctx.console.header(f"Branch ladder ({remote})")
    for name in ladder[:-1]:
        ctx.console.print(f"  {name}")
    ctx.console.print(f"  {ladder[-1]} (mainline)", Style.DIM)
