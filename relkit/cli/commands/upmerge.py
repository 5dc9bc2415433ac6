"""Upmerge command - merge a version branch into newer ones and push."""

from __future__ import annotations

from typing import NoReturn

import typer

from relkit.cli.commands._helpers import exit_with_code, unwrap_or_exit
from relkit.cli.context import CLIContext, build_context
from relkit.core.errors import ErrorCode
from relkit.core.result import Err, Ok
from relkit.git.errors import GitError
from relkit.services.upmerge import UpMergeService

REMEDIATION = (
    "Operation failed, please resolve this problem manually.",
    "In the case of a conflict. Run `git add` and `git commit` after you're done.",
    "And run this command again to finish.",
)


def _fail(ctx: CLIContext, error: GitError) -> NoReturn:
    lines = [*REMEDIATION, "", error.message]
    if error.detail:
        lines.extend(error.detail.splitlines())
    if error.hint:
        lines.append(f"hint: {error.hint}")
    ctx.console.error_block(lines)
    exit_with_code(int(ErrorCode.USER_ERROR))


def upmerge(
    branch: str | None = typer.Argument(
        None,
        help="Version branch to merge up (default: the active branch)",
    ),
    all_branches: bool = typer.Option(
        False,
        "--all",
        help="Cascade through every newer version branch up to mainline",
    ),
) -> None:
    """Merge a version branch into the next one(s) and push the result."""
    ctx = build_context()
    remote = ctx.config.branches.remote

    unwrap_or_exit(ctx.git.guard_working_tree_ready(), ctx)
    unwrap_or_exit(ctx.git.remote_update(remote), ctx)

    if branch is None:
        branch = unwrap_or_exit(ctx.git.active_branch_name(), ctx)
    else:
        unwrap_or_exit(ctx.git.checkout_remote_branch(remote, branch), ctx)

    scope = "all newer branches" if all_branches else "the next branch"
    ctx.console.header(f"Up-merging {branch} into {scope}")

    service = UpMergeService(
        git=ctx.git,
        console=ctx.console,
        remote=remote,
        mainline=ctx.config.branches.mainline,
    )
    result = service.merge_all(branch) if all_branches else service.merge_single(branch)

    match result:
        case Err(e):
            _fail(ctx, e)
        case Ok([]):
            ctx.console.success("Nothing to do here or not a version branch.")
            return
        case Ok(changed):
            pushed = ctx.git.push_to_remote(remote, changed)
            if isinstance(pushed, Err):
                _fail(ctx, pushed.error)
            ctx.console.success(f"Branch(es) were merged: {', '.join(changed)}")
