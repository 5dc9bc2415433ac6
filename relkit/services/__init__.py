"""Services orchestrating git operations."""

from relkit.services.upmerge import UpMergeService

__all__ = ["UpMergeService"]
