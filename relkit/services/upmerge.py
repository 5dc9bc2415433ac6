"""Up-merging release branches into newer ones.

Given the ladder ``1.0 < 1.1 < 2.0 < master``, an up-merge from ``1.1`` merges
it into ``2.0`` (single step) or cascades ``1.1 -> 2.0 -> master`` (all).

Nothing is pushed here. A failing step returns its error immediately and
leaves the working tree exactly as git left it (typically mid-conflict), with
earlier rungs merged locally only. The caller pushes the returned branches
once the whole run succeeded, so a partial cascade is never published.
Rerunning after the conflict is resolved recomputes the ladder and the sync
state from scratch.
"""

from __future__ import annotations

from relkit.core.result import Err, Ok, Result
from relkit.git.branches import build_ladder, next_rung
from relkit.git.errors import GitError
from relkit.git.repository import Git
from relkit.output.console import ConsoleProtocol

__all__ = ["UpMergeService"]


class UpMergeService:
    """Merge version branches forward through the ladder.

    Attributes:
        remote: Remote holding the authoritative version branches
        mainline: Branch that always sits at the top of the ladder
    """

    def __init__(
        self,
        *,
        git: Git,
        console: ConsoleProtocol,
        remote: str,
        mainline: str,
    ) -> None:
        self._git = git
        self._console = console
        self.remote = remote
        self.mainline = mainline

    def ladder(self) -> Result[list[str], GitError]:
        """Version branches of the remote, ascending, with mainline appended."""
        return self._git.version_branches(self.remote).map(
            lambda branches: build_ladder(branches, self.mainline)
        )

    def merge_single(self, branch: str) -> Result[list[str], GitError]:
        """Merge ``branch`` into the next rung only.

        Returns:
            Ok([next]) once merged, Ok([]) when ``branch`` is not a version
            branch, Err on the first failing step.
        """
        ladder = self.ladder()
        if isinstance(ladder, Err):
            return ladder

        # The mainline rung is a merge target, never a starting point.
        target = next_rung(ladder.value, branch)
        if target is None:
            return Ok([])

        synced = self._git.ensure_branch_in_sync(self.remote, branch)
        if isinstance(synced, Err):
            return synced

        merged = self._merge_into(target, branch)
        if isinstance(merged, Err):
            return merged

        restored = self._git.checkout(branch)
        if isinstance(restored, Err):
            return restored

        return Ok([target])

    def merge_all(self, branch: str) -> Result[list[str], GitError]:
        """Cascade ``branch`` through every newer rung up to mainline.

        Returns:
            Ok(changed) listing the merged-into branches in ladder order,
            Ok([]) when ``branch`` is not a version branch, Err on the first
            failing step (no partial list is returned).
        """
        ladder = self.ladder()
        if isinstance(ladder, Err):
            return ladder

        rungs = ladder.value
        if branch not in rungs[:-1]:
            return Ok([])

        synced = self._git.ensure_branch_in_sync(self.remote, branch)
        if isinstance(synced, Err):
            return synced

        changed: list[str] = []
        for i in range(rungs.index(branch) + 1, len(rungs)):
            merged = self._merge_into(rungs[i], rungs[i - 1])
            if isinstance(merged, Err):
                return merged
            changed.append(rungs[i])

        restored = self._git.checkout(branch)
        if isinstance(restored, Err):
            return restored

        return Ok(changed)

    def _merge_into(self, target: str, source: str) -> Result[None, GitError]:
        """Check out ``target`` from the remote, guard it, and merge ``source`` in."""
        self._console.info(f"Merging {source} into {target}")

        checked_out = self._git.checkout_remote_branch(self.remote, target)
        if isinstance(checked_out, Err):
            return checked_out

        synced = self._git.ensure_branch_in_sync(self.remote, target)
        if isinstance(synced, Err):
            return synced

        return self._git.merge(source)
