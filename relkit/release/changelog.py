"""Changelog rendering from merge commit subjects.

Merged pull requests produce subjects like ``feature #93 Introduce a new API
for ValuesBag (sstok)``: a category word, the pull request number and a title
ending with the authors in parentheses. Anything else in the range is skipped.

The bucket of an item comes from the category word unless the commit body
carries a ``labels:`` line on its second line:

    This PR was merged into the 1.0 branch.
    labels: deprecation, removed-deprecation
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from relkit.git.log import CommitLogEntry
from relkit.release.hosting import HostingInfo

__all__ = [
    "ChangelogCategory",
    "ChangelogItem",
    "ChangelogRenderer",
    "PullRequestSubject",
    "categorize",
    "parse_labels",
    "parse_subject",
]

_MERGE_BOT_PREFIX = "merge pull request #"
_SUBJECT_RE = re.compile(r"^(?P<category>\w+) #(?P<number>\d+) (?P<title>.+?)$")
_AUTHOR_TOKEN_RE = re.compile(r"[\w-]+")
_LABELS_PREFIX = "labels: "


class ChangelogCategory(Enum):
    """Changelog sections, in rendering order."""

    SECURITY = "Security"
    ADDED = "Added"
    CHANGED = "Changed"
    DEPRECATED = "Deprecated"
    REMOVED = "Removed"
    FIXED = "Fixed"

    def __str__(self) -> str:
        return self.value


_WORD_TO_CATEGORY = {
    "feature": ChangelogCategory.ADDED,
    "refactor": ChangelogCategory.CHANGED,
    "bug": ChangelogCategory.FIXED,
}


@dataclass(frozen=True, slots=True)
class PullRequestSubject:
    """The parts of a ``<kind> #<number> <title>`` commit subject.

    Attributes:
        kind: Category word from the subject ("feature", "bug", ...)
        number: Issue / pull request number
        title: Title including the author suffix
    """

    kind: str
    number: int
    title: str


@dataclass(frozen=True, slots=True)
class ChangelogItem:
    """A changelog line, built per render.

    Attributes:
        category: Bucket the item is listed under
        number: Issue / pull request number
        title: Title with the author suffix turned into profile links
    """

    category: ChangelogCategory
    number: int
    title: str


def parse_subject(subject: str) -> PullRequestSubject | None:
    """Extract the subject parts, or None if it is not a changelog subject."""
    if subject.lower().startswith(_MERGE_BOT_PREFIX):
        return None

    m = _SUBJECT_RE.match(subject)
    if m is None:
        return None
    return PullRequestSubject(
        kind=m.group("category"),
        number=int(m.group("number")),
        title=m.group("title"),
    )


def parse_labels(message: str) -> list[str]:
    """Labels from the ``labels:`` marker on the second line of the body."""
    lines = message.lstrip().splitlines()
    if len(lines) < 2 or not lines[1].startswith(_LABELS_PREFIX):
        return []
    raw = lines[1][len(_LABELS_PREFIX) :]
    return [label for label in re.split(r"\s*,\s*", raw.strip()) if label]


def categorize(kind: str, message: str) -> ChangelogCategory:
    """Pick the changelog bucket for a subject's category word.

    Security is absolute. Otherwise the ``deprecation`` label, then the
    ``removed-deprecation`` label, then the category word decide.
    """
    if kind == "security":
        return ChangelogCategory.SECURITY

    labels = parse_labels(message)
    if "deprecation" in labels:
        return ChangelogCategory.DEPRECATED
    if "removed-deprecation" in labels:
        return ChangelogCategory.REMOVED

    return _WORD_TO_CATEGORY.get(kind, ChangelogCategory.CHANGED)


class ChangelogRenderer:
    """Render commit ranges as markdown changelogs.

    Args:
        hosting: Used to link issues and author profiles
    """

    def __init__(self, hosting: HostingInfo) -> None:
        self.hosting = hosting

    def render_one_line(self, commits: Iterable[CommitLogEntry]) -> str:
        """Flat list of every changelog item, in commit order."""
        lines = [self.format_line(item) for item in self.items(commits)]
        return "\n".join(lines).strip()

    def render_by_categories(
        self,
        commits: Iterable[CommitLogEntry],
        *,
        skip_empty: bool = True,
    ) -> str:
        """Items grouped under ``### <Category>`` headings.

        Empty sections are left out when ``skip_empty`` is set, otherwise they
        read ``- nothing``.
        """
        out = ""
        for category, items in self.classify(commits).items():
            if not items:
                if not skip_empty:
                    out += f"### {category}\n- nothing\n\n"
                continue

            out += f"### {category}\n"
            for item in items:
                out += self.format_line(item) + "\n"
            out += "\n"

        return out.strip()

    def classify(
        self, commits: Iterable[CommitLogEntry]
    ) -> dict[ChangelogCategory, list[ChangelogItem]]:
        buckets: dict[ChangelogCategory, list[ChangelogItem]] = {c: [] for c in ChangelogCategory}
        for item in self.items(commits):
            buckets[item.category].append(item)
        return buckets

    def items(self, commits: Iterable[CommitLogEntry]) -> list[ChangelogItem]:
        """Changelog items of ``commits`` in commit order; other commits are skipped."""
        items: list[ChangelogItem] = []
        for commit in commits:
            subject = parse_subject(commit.subject)
            if subject is None:
                continue
            items.append(
                ChangelogItem(
                    category=categorize(subject.kind, commit.message),
                    number=subject.number,
                    title=self.link_authors(subject.title),
                )
            )
        return items

    def link_authors(self, title: str) -> str:
        """Turn every login in the trailing ``(...)`` of ``title`` into a profile link."""
        pos = title.rfind("(")
        if pos != -1:
            authors = _AUTHOR_TOKEN_RE.sub(
                lambda m: f"[{m.group(0)}]({self.hosting.profile_url(m.group(0))})",
                title[pos:],
            )
            title = title[:pos] + authors
        return title.strip()

    def format_line(self, item: ChangelogItem) -> str:
        """``- <title> [#<n>](<repo>/issues/<n>)``."""
        url = self.hosting.repository_url
        return f"- {item.title} [#{item.number}]({url}/issues/{item.number})"
