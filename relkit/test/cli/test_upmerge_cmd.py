from __future__ import annotations

from pathlib import Path

import pytest
import typer

from relkit.cli.context import CLIContext
from relkit.core.config import Config
from relkit.core.errors import ErrorCode
from relkit.git.repository import Git
from relkit.output.console import MockConsole
from relkit.test._fakes import REMOTE_REFS, FakeRunner, counts


def _runner() -> FakeRunner:
    runner = FakeRunner().fail("rev-parse", "-q", "--verify", "MERGE_HEAD")
    runner.ok("rev-parse", "--abbrev-ref", "HEAD", stdout="1.0\n")
    runner.ok(*REMOTE_REFS, "refs/remotes/upstream", stdout="HEAD\n1.0\n2.0\nmaster\n")
    for branch in ("1.0", "2.0", "master"):
        runner.ok(*counts("upstream", branch), stdout="0\t0\n")
    return runner


def _ctx(tmp_path: Path, runner: FakeRunner) -> CLIContext:
    return CLIContext(
        root=tmp_path,
        config=Config(),
        console=MockConsole(),
        git=Git(tmp_path, runner),
    )


def _patch(monkeypatch: pytest.MonkeyPatch, ctx: CLIContext) -> None:
    import relkit.cli.commands.upmerge as upmerge_cmd

    monkeypatch.setattr(upmerge_cmd, "build_context", lambda: ctx)


def _console(ctx: CLIContext) -> MockConsole:
    assert isinstance(ctx.console, MockConsole)
    return ctx.console


def test_upmerge_active_branch_pushes_next_rung(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    from relkit.cli.commands.upmerge import upmerge

    runner = _runner()
    ctx = _ctx(tmp_path, runner)
    _patch(monkeypatch, ctx)

    upmerge(branch=None, all_branches=False)

    assert runner.git_calls[2] == ["remote", "update", "upstream"]
    assert runner.calls_starting_with("push") == [["push", "--atomic", "upstream", "2.0"]]
    assert "OK Branch(es) were merged: 2.0" in _console(ctx).messages


def test_upmerge_all_pushes_every_changed_branch_at_once(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    from relkit.cli.commands.upmerge import upmerge

    runner = _runner()
    ctx = _ctx(tmp_path, runner)
    _patch(monkeypatch, ctx)

    upmerge(branch=None, all_branches=True)

    assert runner.calls_starting_with("push") == [
        ["push", "--atomic", "upstream", "2.0", "master"]
    ]
    assert "OK Branch(es) were merged: 2.0, master" in _console(ctx).messages


def test_upmerge_explicit_branch_is_checked_out_first(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    from relkit.cli.commands.upmerge import upmerge

    runner = _runner().fail("show-ref", "--verify", "--quiet", "refs/heads/1.0")
    ctx = _ctx(tmp_path, runner)
    _patch(monkeypatch, ctx)

    upmerge(branch="1.0", all_branches=False)

    assert ["checkout", "-b", "1.0", "upstream/1.0"] in runner.git_calls
    assert runner.calls_starting_with("rev-parse", "--abbrev-ref") == []


def test_upmerge_not_a_version_branch_is_success_without_push(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    from relkit.cli.commands.upmerge import upmerge

    runner = _runner().ok("rev-parse", "--abbrev-ref", "HEAD", stdout="feature-x\n")
    ctx = _ctx(tmp_path, runner)
    _patch(monkeypatch, ctx)

    upmerge(branch=None, all_branches=True)

    assert runner.calls_starting_with("push") == []
    assert "OK Nothing to do here or not a version branch." in _console(ctx).messages


def test_upmerge_conflict_prints_remediation(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    from relkit.cli.commands.upmerge import upmerge

    runner = _runner().fail(
        "merge", "--no-ff", "--log", "1.0", stderr="CONFLICT (content): Merge conflict in a.txt"
    )
    ctx = _ctx(tmp_path, runner)
    _patch(monkeypatch, ctx)

    with pytest.raises(typer.Exit) as exc:
        upmerge(branch=None, all_branches=True)

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
    messages = _console(ctx).messages
    start = messages.index("error: Operation failed, please resolve this problem manually.")
    assert messages[start + 1 : start + 3] == [
        "In the case of a conflict. Run `git add` and `git commit` after you're done.",
        "And run this command again to finish.",
    ]
    assert messages[-1] == "CONFLICT (content): Merge conflict in a.txt"
    assert runner.calls_starting_with("push") == []


def test_upmerge_rejected_push_fails(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    from relkit.cli.commands.upmerge import upmerge

    runner = _runner().fail(
        "push", "--atomic", "upstream", "2.0", stderr="! [rejected] 2.0 -> 2.0 (fetch first)"
    )
    ctx = _ctx(tmp_path, runner)
    _patch(monkeypatch, ctx)

    with pytest.raises(typer.Exit) as exc:
        upmerge(branch=None, all_branches=False)

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
    assert not _console(ctx).has_success()
    assert _console(ctx).find("[rejected]")


def test_upmerge_refuses_dirty_tree(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    from relkit.cli.commands.upmerge import upmerge

    runner = _runner().ok("status", "--porcelain", "--untracked-files=no", stdout=" M a.txt\n")
    ctx = _ctx(tmp_path, runner)
    _patch(monkeypatch, ctx)

    with pytest.raises(typer.Exit) as exc:
        upmerge(branch=None, all_branches=False)

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
    assert runner.calls_starting_with("remote", "update") == []
    assert "error: The working tree is not ready: there are uncommitted changes." in (
        _console(ctx).messages
    )


def test_upmerge_detached_head(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    from relkit.cli.commands.upmerge import upmerge

    runner = _runner().ok("rev-parse", "--abbrev-ref", "HEAD", stdout="HEAD\n")
    ctx = _ctx(tmp_path, runner)
    _patch(monkeypatch, ctx)

    with pytest.raises(typer.Exit):
        upmerge(branch=None, all_branches=False)

    assert _console(ctx).find("detached HEAD")
    assert runner.calls_starting_with("merge") == []
