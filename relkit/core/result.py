"""Result type for explicit error handling.

Every fallible relkit operation returns ``Ok(value)`` or ``Err(error)`` instead
of raising. Callers branch with pattern matching:

    match git.active_branch_name():
        case Ok(branch):
            console.info(f"on {branch}")
        case Err(error):
            console.error(error.message)

An ``Ok`` holding an empty value is a legitimate outcome (for instance an
up-merge that had nothing to do); only ``Err`` signals a failure.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result.

    Attributes:
        value: The success value.
    """

    value: T

    def unwrap(self) -> T:
        """Return the contained value."""
        return self.value

    def unwrap_err(self) -> None:
        """Raise, since an Ok carries no error.

        Raises:
            ValueError: Always.
        """
        raise ValueError(f"called unwrap_err on Ok: {self.value}")

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        """Transform the contained value."""
        return Ok(f(self.value))

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed result.

    Attributes:
        error: The error value.
    """

    error: E

    def unwrap(self) -> None:
        """Raise, since an Err carries no value.

        Raises:
            ValueError: Always, mentioning the error.
        """
        raise ValueError(f"called unwrap on Err: {self.error}")

    def unwrap_err(self) -> E:
        """Return the contained error."""
        return self.error

    def map(self, f: Callable[[T], U]) -> Err[E]:
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Ok[T] | Err[E]
