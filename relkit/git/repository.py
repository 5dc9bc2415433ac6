"""Git facade for branch ladder maintenance.

``Git`` issues every git command relkit needs through a ``CommandRunner``.
All operations that can fail return Result types; existence probes return
plain booleans.

Usage:
    git = Git(Path("/path/to/repo"))

    match git.remote_diff_status("upstream", "1.0"):
        case Ok(status):
            print(f"1.0 is {status}")
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.git.branches import parse_remote_refs, sort_version_branches
from relkit.git.errors import (
    CommandFailed,
    DetachedHead,
    GitError,
    NoTagFound,
    NotInSync,
    WorkingTreeNotReady,
)
from relkit.git.log import LOG_FORMAT, CommitLogEntry, parse_log
from relkit.git.sync import RemoteDiffStatus, classify_divergence, parse_left_right_count
from relkit.output.console import ConsoleProtocol, Style
from relkit.platform.process import CommandRunner, ProcessError, ProcessRunner

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

__all__ = ["Git"]


def _is_network_command(args: list[str]) -> bool:
    if not args:
        return False
    if args[0] in {"fetch", "pull", "push", "clone", "ls-remote"}:
        return True
    return args[:2] == ["remote", "update"]


class Git:
    """Git operations on a single working tree.

    Attributes:
        path: Repository root
    """

    def __init__(
        self,
        path: Path,
        runner: CommandRunner | None = None,
        *,
        console: ConsoleProtocol | None = None,
        verbose: bool = False,
    ) -> None:
        """Initialize the facade.

        Args:
            path: Repository root (containing .git)
            runner: Command runner; defaults to real processes in ``path``
            console: Where echoed commands go when ``verbose`` is set
            verbose: Echo every git command before running it
        """
        self.path = path
        self._runner: CommandRunner = runner if runner is not None else ProcessRunner(path)
        self._console = console
        self._verbose = verbose

    # ------------------------------------------------------------------
    # Repository state
    # ------------------------------------------------------------------

    def is_git_dir(self) -> bool:
        """True if ``path`` is the top level of a git working tree."""
        result = self._run(["rev-parse", "--show-toplevel"])
        match result:
            case Ok(stdout):
                top = stdout.strip()
                return bool(top) and Path(top).resolve() == self.path.resolve()
            case Err(_):
                return False

    def is_clean(self) -> bool:
        """True if tracked files have no changes.

        Returns False if status cannot be determined.
        """
        result = self._run(["status", "--porcelain", "--untracked-files=no"])
        match result:
            case Ok(stdout):
                return stdout.strip() == ""
            case Err(_):
                return False

    def guard_working_tree_ready(self) -> Result[None, GitError]:
        """Fail unless the tree is clean and no merge is half-way done."""
        if isinstance(self._run(["rev-parse", "-q", "--verify", "MERGE_HEAD"]), Ok):
            return Err(WorkingTreeNotReady("a merge is in progress"))
        if not self.is_clean():
            return Err(WorkingTreeNotReady("there are uncommitted changes"))
        return Ok(None)

    def active_branch_name(self) -> Result[str, GitError]:
        """Name of the checked-out branch; Err(DetachedHead) when detached."""
        result = self._must(["rev-parse", "--abbrev-ref", "HEAD"])
        if isinstance(result, Err):
            return result

        branch = result.value.strip()
        if branch == "HEAD":
            return Err(DetachedHead())
        return Ok(branch)

    def last_tag_on_branch(self) -> Result[str, GitError]:
        """Most recent tag reachable from HEAD."""
        result = self._run(["describe", "--tags", "--abbrev=0"])
        match result:
            case Ok(stdout):
                return Ok(stdout.strip())
            case Err(e):
                return Err(NoTagFound(detail=e.stderr.strip()))

    def remote_url(self, remote: str) -> Result[str, GitError]:
        return self._must(["remote", "get-url", remote]).map(str.strip)

    # ------------------------------------------------------------------
    # Branches
    # ------------------------------------------------------------------

    def version_branches(self, remote: str) -> Result[list[str], GitError]:
        """Version branches known for ``remote``, ascending.

        Reads the remote-tracking refs; run ``remote_update`` first for a
        fresh view. No mainline element is appended.
        """
        result = self._must(
            ["for-each-ref", "--format=%(refname:strip=3)", f"refs/remotes/{remote}"]
        )
        return result.map(lambda out: sort_version_branches(parse_remote_refs(out)))

    def branch_exists(self, branch: str) -> bool:
        result = self._run(["show-ref", "--verify", "--quiet", f"refs/heads/{branch}"])
        return isinstance(result, Ok)

    def remote_branch_exists(self, remote: str, branch: str) -> bool:
        result = self._run(["ls-remote", "--heads", remote, branch])
        match result:
            case Ok(stdout):
                suffix = f"refs/heads/{branch}"
                return any(line.split("\t")[-1].strip() == suffix for line in stdout.splitlines())
            case Err(_):
                return False

    def remote_diff_status(
        self,
        remote: str,
        branch: str,
        local_branch: str | None = None,
    ) -> Result[RemoteDiffStatus, GitError]:
        """Compare ``local_branch`` (default: ``branch``) with ``remote/branch``.

        Always recomputed from the current refs.
        """
        local = local_branch or branch
        args = ["rev-list", "--left-right", "--count", f"{remote}/{branch}...{local}"]
        result = self._must(args)
        if isinstance(result, Err):
            return result

        counts = parse_left_right_count(result.value)
        if counts is None:
            return Err(
                CommandFailed(
                    command=("git", *args),
                    returncode=0,
                    stderr=f"unexpected output: {result.value.strip()!r}",
                )
            )
        ahead, behind = counts
        return Ok(classify_divergence(ahead, behind))

    def ensure_branch_in_sync(self, remote: str, branch: str) -> Result[None, GitError]:
        """Fail unless the local branch is up to date with or ahead of the remote."""
        result = self.remote_diff_status(remote, branch)
        if isinstance(result, Err):
            return result

        status = result.value
        if not status.is_safe_merge_source:
            return Err(NotInSync(remote=remote, branch=branch, status=status))
        return Ok(None)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def remote_update(self, remote: str) -> Result[None, GitError]:
        return self._must(["remote", "update", remote]).map(lambda _: None)

    def checkout(self, branch: str) -> Result[None, GitError]:
        return self._must(["checkout", branch]).map(lambda _: None)

    def checkout_remote_branch(self, remote: str, branch: str) -> Result[None, GitError]:
        """Check out ``branch``, creating it from ``remote/branch`` when missing locally."""
        if self.branch_exists(branch):
            return self.checkout(branch)
        result = self._must(["checkout", "-b", branch, f"{remote}/{branch}"])
        return result.map(lambda _: None)

    def merge(self, source: str) -> Result[None, GitError]:
        """Merge ``source`` into the checked-out branch, always with a merge commit."""
        return self._must(["merge", "--no-ff", "--log", source]).map(lambda _: None)

    def push_to_remote(self, remote: str, branches: list[str]) -> Result[None, GitError]:
        """Push all ``branches`` in one atomic push."""
        return self._must(["push", "--atomic", remote, *branches]).map(lambda _: None)

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def log_between(self, base: str, head: str) -> Result[list[CommitLogEntry], GitError]:
        """Commits reachable from ``head`` but not ``base``, newest first."""
        result = self._must(["log", f"--format={LOG_FORMAT}", f"{base}..{head}"])
        return result.map(parse_log)

    # ------------------------------------------------------------------

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS if _is_network_command(args) else _GIT_TIMEOUT_SECONDS
        )
        if self._verbose and self._console is not None:
            self._console.print(f"$ git {' '.join(args)}", Style.DIM)
        return self._runner.run(["git", *args], timeout=timeout)

    def _must(self, args: list[str]) -> Result[str, GitError]:
        """Run a git command; a failure becomes CommandFailed."""
        result = self._run(args)
        match result:
            case Ok(stdout):
                return Ok(stdout)
            case Err(e):
                return Err(
                    CommandFailed(
                        command=e.command,
                        returncode=e.returncode,
                        stderr=e.stderr or e.stdout,
                    )
                )
