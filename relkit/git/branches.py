"""Version branch recognition and ladder ordering.

A version branch is named after a release line: ``1.0``, ``v1.1``, ``2.0.3``.
Everything else (``master``, ``1.x``, ``x.1``, ``feature/foo``) is invisible to
ordering and merging.

    >>> sort_version_branches(["2.0", "x.1", "v1.1", "1.0"])
    ['1.0', 'v1.1', '2.0']
    >>> build_ladder(["1.0", "2.0"], "master")
    ['1.0', '2.0', 'master']
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

__all__ = [
    "build_ladder",
    "is_version_branch",
    "next_rung",
    "parse_remote_refs",
    "parse_version",
    "sort_version_branches",
]

_VERSION_RE = re.compile(r"^[vV]?(\d+(?:\.\d+){1,2})$")


def parse_version(name: str) -> tuple[int, ...] | None:
    """Return the numeric segments of a version branch name, or None."""
    m = _VERSION_RE.match(name)
    if m is None:
        return None
    return tuple(int(part) for part in m.group(1).split("."))


def is_version_branch(name: str) -> bool:
    return parse_version(name) is not None


def sort_version_branches(names: Iterable[str]) -> list[str]:
    """Keep version branches only, ascending by numeric segments.

    Names with an equal numeric version keep their input order.
    """
    keyed: list[tuple[tuple[int, ...], str]] = []
    for name in names:
        version = parse_version(name)
        if version is not None:
            keyed.append((version, name))
    keyed.sort(key=lambda item: item[0])
    return [name for _, name in keyed]


def build_ladder(branches: Sequence[str], mainline: str) -> list[str]:
    """Append the mainline branch as the terminal rung."""
    return [*branches, mainline]


def next_rung(ladder: Sequence[str], branch: str) -> str | None:
    """Return the rung directly above ``branch``, or None at the top or if absent."""
    try:
        idx = ladder.index(branch)
    except ValueError:
        return None
    if idx + 1 >= len(ladder):
        return None
    return ladder[idx + 1]


def parse_remote_refs(output: str) -> list[str]:
    """Parse ``for-each-ref --format=%(refname:strip=3) refs/remotes/<remote>``.

    Drops the ``HEAD`` symbolic ref and blank lines.
    """
    names: list[str] = []
    for line in output.splitlines():
        name = line.strip()
        if not name or name == "HEAD":
            continue
        names.append(name)
    return names
