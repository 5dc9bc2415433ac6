"""Local/remote divergence classification.

A branch tip is compared against its remote counterpart by counting the
commits unique to each side (``git rev-list --left-right --count``).
"""

from __future__ import annotations

from enum import Enum

__all__ = ["RemoteDiffStatus", "classify_divergence", "parse_left_right_count"]


class RemoteDiffStatus(Enum):
    """Outcome of comparing a local branch with the same branch on a remote."""

    UP_TO_DATE = "up-to-date"
    NEEDS_PUSH = "needs-push"
    NEEDS_PULL = "needs-pull"
    DIVERGED = "diverged"

    def __str__(self) -> str:
        return self.value

    @property
    def is_safe_merge_source(self) -> bool:
        """True when the local branch holds every remote commit."""
        return self in (RemoteDiffStatus.UP_TO_DATE, RemoteDiffStatus.NEEDS_PUSH)


def classify_divergence(ahead: int, behind: int) -> RemoteDiffStatus:
    """Map ahead/behind commit counts of the local branch to a status.

    Args:
        ahead: Commits only present locally.
        behind: Commits only present on the remote.
    """
    if ahead < 0 or behind < 0:
        raise ValueError(f"commit counts cannot be negative: ahead={ahead}, behind={behind}")

    if ahead and behind:
        return RemoteDiffStatus.DIVERGED
    if ahead:
        return RemoteDiffStatus.NEEDS_PUSH
    if behind:
        return RemoteDiffStatus.NEEDS_PULL
    return RemoteDiffStatus.UP_TO_DATE


def parse_left_right_count(output: str) -> tuple[int, int] | None:
    """Parse ``rev-list --left-right --count <remote>...<local>`` output.

    The left column counts remote-only commits, the right one local-only.

    Returns:
        (ahead, behind) from the local branch's point of view, or None when the
        output is not two integers.
    """
    parts = output.split()
    if len(parts) != 2:
        return None
    try:
        behind, ahead = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    return (ahead, behind)
