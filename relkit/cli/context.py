from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from relkit.core.config import CONFIG_FILENAME, Config, load_config_or_default
from relkit.core.errors import ErrorCode
from relkit.core.result import Err
from relkit.git.repository import Git
from relkit.output.console import ConsoleProtocol, RichConsole

REPO_ENV = "RELKIT_REPO"
VERBOSE_ENV = "RELKIT_VERBOSE"


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: Config
    console: ConsoleProtocol
    git: Git


def repo_root() -> Path:
    env = os.environ.get(REPO_ENV)
    if env:
        return Path(env).expanduser().resolve()
    return Path.cwd().resolve()


def build_context() -> CLIContext:
    root = repo_root()
    console = RichConsole()
    git = Git(root, console=console, verbose=os.environ.get(VERBOSE_ENV) == "1")

    if not git.is_git_dir():
        typer.echo(
            f"error: relkit can only be executed from the root of a Git repository ({root})",
            err=True,
        )
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    config_result = load_config_or_default(root / CONFIG_FILENAME)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    return CLIContext(
        root=root,
        config=config_result.value,
        console=console,
        git=git,
    )
