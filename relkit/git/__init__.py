"""Git operations for the release branch ladder.

- Git: facade over the git commands relkit issues
- branches: version branch recognition and ordering
- sync: local/remote divergence classification
- log: commit log parsing

Usage:
    from relkit.git import Git, build_ladder

    git = Git(repo_root)
    branches = git.version_branches("upstream").unwrap()
    ladder = build_ladder(branches, "master")
"""

from relkit.git.branches import (
    build_ladder,
    is_version_branch,
    next_rung,
    parse_version,
    sort_version_branches,
)
from relkit.git.errors import (
    CommandFailed,
    DetachedHead,
    GitError,
    NoTagFound,
    NotInSync,
    WorkingTreeNotReady,
)
from relkit.git.log import CommitLogEntry, parse_log
from relkit.git.repository import Git
from relkit.git.sync import RemoteDiffStatus, classify_divergence

__all__ = [
    # Facade
    "Git",
    # Branches
    "build_ladder",
    "is_version_branch",
    "next_rung",
    "parse_version",
    "sort_version_branches",
    # Sync
    "RemoteDiffStatus",
    "classify_divergence",
    # Log
    "CommitLogEntry",
    "parse_log",
    # Errors
    "CommandFailed",
    "DetachedHead",
    "GitError",
    "NoTagFound",
    "NotInSync",
    "WorkingTreeNotReady",
]
