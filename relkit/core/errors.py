"""Exit codes for relkit commands.

These values are used as process exit codes and should remain stable:
- 0: Success, including "nothing to do"
- 1: Operation failed (merge conflict, branch out of sync, push rejected)
- 2: Environment error (not a git repository, invalid relkit.toml)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
