"""Tests for git/log.py."""

from __future__ import annotations

from relkit.git.log import CommitLogEntry, parse_log


def _record(sha: str, subject: str, body: str = "") -> str:
    return f"{sha}\x1fSebastiaan Stok <s.stok@rollerscapes.net>\x1f{subject}\x1f{body}\x1e\n"


def test_parse_keeps_git_order() -> None:
    output = _record("aaa", "feature #2 Second (sstok)") + _record("bbb", "bug #1 First (sstok)")
    entries = parse_log(output)
    assert [e.sha for e in entries] == ["aaa", "bbb"]


def test_parse_full_entry() -> None:
    body = "This PR was merged into the 1.0 branch.\nlabels: deprecation\n\nabc commit 1\n"
    [entry] = parse_log(_record("d22220c", "refactor #52 Removed deprecated API (sstok)", body))

    assert entry == CommitLogEntry(
        sha="d22220c",
        author="Sebastiaan Stok <s.stok@rollerscapes.net>",
        subject="refactor #52 Removed deprecated API (sstok)",
        message="This PR was merged into the 1.0 branch.\nlabels: deprecation\n\nabc commit 1",
    )


def test_body_may_contain_blank_lines_and_pipes() -> None:
    body = "Discussion\n----------\n\n|Q |A |\n|---|---|\n"
    [entry] = parse_log(_record("abc", "minor #56 Clean up (sstok)", body))
    assert entry.message.startswith("Discussion")
    assert "|Q |A |" in entry.message


def test_empty_output() -> None:
    assert parse_log("") == []
    assert parse_log("\n") == []


def test_malformed_record_is_skipped() -> None:
    output = "not a record\x1e\n" + _record("abc", "bug #3 Fix (a)")
    assert [e.sha for e in parse_log(output)] == ["abc"]
