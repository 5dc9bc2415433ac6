"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer

from relkit.core.errors import ErrorCode
from relkit.core.result import Err, Result
from relkit.output.console import ConsoleProtocol, Style

if TYPE_CHECKING:
    from relkit.cli.context import CLIContext


T = TypeVar("T")
E = TypeVar("E")


def print_error(error: object, console: ConsoleProtocol) -> None:
    """Print an error record's message, git output and hint.

    Expects error objects to have a 'message' attribute and optional 'detail'
    and 'hint' attributes.
    """
    message: str = getattr(error, "message", str(error))
    detail: str | None = getattr(error, "detail", None)
    hint: str | None = getattr(error, "hint", None)

    console.error(message)
    if detail:
        for line in detail.splitlines():
            console.print(line, Style.DIM)
    if hint:
        console.print(f"hint: {hint}", Style.DIM)


def unwrap_or_exit(
    result: Result[T, E],
    ctx: CLIContext,
    error_code: ErrorCode = ErrorCode.USER_ERROR,
) -> T:
    """Return the Ok value, or print the error and exit.

    Reduces the common pattern:
        match result:
            case Err(e):
                ctx.console.error(e.message)
                raise typer.Exit(code=int(ErrorCode.USER_ERROR))
            case Ok(value):
                ...
    """
    if isinstance(result, Err):
        print_error(result.error, ctx.console)
        raise typer.Exit(code=int(error_code))
    return result.value


def exit_with_code(code: int) -> NoReturn:
    raise typer.Exit(code=code)
