"""Release notes: changelog classification and rendering."""

from relkit.release.changelog import (
    ChangelogCategory,
    ChangelogItem,
    ChangelogRenderer,
    PullRequestSubject,
    categorize,
    parse_labels,
    parse_subject,
)
from relkit.release.hosting import HostingError, HostingInfo, parse_remote_url, resolve_hosting

__all__ = [
    "ChangelogCategory",
    "ChangelogItem",
    "ChangelogRenderer",
    "HostingError",
    "HostingInfo",
    "PullRequestSubject",
    "categorize",
    "parse_labels",
    "parse_remote_url",
    "parse_subject",
    "resolve_hosting",
]
