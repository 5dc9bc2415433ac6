"""Commit log fetching format and parser."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["CommitLogEntry", "LOG_FORMAT", "parse_log"]

_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"

# sha, author, subject, body
LOG_FORMAT = "%H%x1f%an <%ae>%x1f%s%x1f%b%x1e"


@dataclass(frozen=True, slots=True)
class CommitLogEntry:
    """One commit as returned by ``git log``.

    Attributes:
        sha: Full commit hash
        author: "Name <email>"
        subject: First line of the commit message
        message: Commit message body without the subject line
    """

    sha: str
    author: str
    subject: str
    message: str = ""


def parse_log(output: str) -> list[CommitLogEntry]:
    """Parse ``git log --format=LOG_FORMAT`` output, preserving git's order."""
    entries: list[CommitLogEntry] = []
    for record in output.split(_RECORD_SEP):
        record = record.lstrip("\n")
        if not record.strip():
            continue

        fields = record.split(_FIELD_SEP, 3)
        if len(fields) != 4:
            continue

        sha, author, subject, body = fields
        entries.append(
            CommitLogEntry(
                sha=sha.strip(),
                author=author.strip(),
                subject=subject.strip(),
                message=body.rstrip("\n"),
            )
        )
    return entries
