from __future__ import annotations

from dataclasses import dataclass

from relkit.git.sync import RemoteDiffStatus

__all__ = [
    "CommandFailed",
    "DetachedHead",
    "GitError",
    "NoTagFound",
    "NotInSync",
    "WorkingTreeNotReady",
]


@dataclass(frozen=True, slots=True)
class NotInSync:
    """A branch is behind or has diverged from its remote counterpart."""

    remote: str
    branch: str
    status: RemoteDiffStatus

    @property
    def message(self) -> str:
        ref = f"{self.remote}/{self.branch}"
        if self.status is RemoteDiffStatus.DIVERGED:
            return f'Branch "{self.branch}" has diverged from "{ref}" (both contain unique commits).'
        return f'Branch "{self.branch}" is behind "{ref}", local commits are missing.'

    @property
    def hint(self) -> str | None:
        if self.status is RemoteDiffStatus.DIVERGED:
            return f"Reconcile {self.branch} with {self.remote}/{self.branch} before up-merging."
        return f"Run: git checkout {self.branch} && git pull --ff-only {self.remote} {self.branch}"

    @property
    def detail(self) -> str | None:
        return None


@dataclass(frozen=True, slots=True)
class DetachedHead:
    @property
    def message(self) -> str:
        return "You are currently in a detached HEAD state, unable to get active branch-name."

    @property
    def hint(self) -> str | None:
        return "Please run `git checkout` first."

    @property
    def detail(self) -> str | None:
        return None


@dataclass(frozen=True, slots=True)
class NoTagFound:
    """No tag is reachable from HEAD; detail carries git's own explanation."""

    detail: str

    @property
    def message(self) -> str:
        return "No tag is reachable from the current branch."

    @property
    def hint(self) -> str | None:
        return "Pass an explicit base ref."


@dataclass(frozen=True, slots=True)
class WorkingTreeNotReady:
    reason: str

    @property
    def message(self) -> str:
        return f"The working tree is not ready: {self.reason}."

    @property
    def hint(self) -> str | None:
        return "Commit or stash your changes first."

    @property
    def detail(self) -> str | None:
        return None


@dataclass(frozen=True, slots=True)
class CommandFailed:
    """A git invocation exited non-zero; stderr is kept verbatim."""

    command: tuple[str, ...]
    returncode: int
    stderr: str

    @property
    def message(self) -> str:
        return f"`{' '.join(self.command)}` failed (exit {self.returncode})"

    @property
    def hint(self) -> str | None:
        return None

    @property
    def detail(self) -> str | None:
        return self.stderr.strip() or None


GitError = NotInSync | DetachedHead | NoTagFound | WorkingTreeNotReady | CommandFailed
