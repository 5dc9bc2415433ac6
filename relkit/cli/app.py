from __future__ import annotations

import os
from pathlib import Path

import typer

from relkit import __version__
from relkit.cli.commands.branches import branches
from relkit.cli.commands.changelog import changelog
from relkit.cli.commands.sync_status import sync_status
from relkit.cli.commands.upmerge import upmerge
from relkit.cli.context import REPO_ENV, VERBOSE_ENV
from relkit.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(upmerge)
app.command()(changelog)
app.command()(branches)
app.command("sync-status")(sync_status)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show version and exit.",
    ),
    repo: Path | None = typer.Option(
        None,
        "--repo",
        help="Repository root (default: current directory)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Echo git commands."),
) -> None:
    if repo is not None:
        try:
            root = repo.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --repo: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        if not root.is_dir():
            typer.echo(f"error: --repo '{root}' is not a directory", err=True)
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

        os.environ[REPO_ENV] = str(root)

    if verbose:
        os.environ[VERBOSE_ENV] = "1"


def main() -> None:
    app()
