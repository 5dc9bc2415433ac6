"""Tests for relkit.core.result module."""

import pytest

from relkit.core.result import Err, Ok, Result


class TestOk:
    """Tests for Ok type."""

    def test_ok_unwrap(self) -> None:
        assert Ok(42).unwrap() == 42

    def test_ok_unwrap_err_raises(self) -> None:
        with pytest.raises(ValueError, match="called unwrap_err on Ok"):
            Ok(42).unwrap_err()

    def test_ok_map(self) -> None:
        assert Ok(21).map(lambda x: x * 2) == Ok(42)

    def test_empty_ok_is_still_ok(self) -> None:
        """An empty success value is not a failure."""
        result: Result[list[str], str] = Ok([])
        assert isinstance(result, Ok)
        assert result.unwrap() == []

    def test_ok_repr(self) -> None:
        assert repr(Ok("master")) == "Ok('master')"

    def test_ok_frozen(self) -> None:
        result = Ok(42)
        with pytest.raises(AttributeError):
            result.value = 0  # type: ignore[misc]


class TestErr:
    """Tests for Err type."""

    def test_err_unwrap_raises(self) -> None:
        with pytest.raises(ValueError, match="called unwrap on Err: boom"):
            Err("boom").unwrap()

    def test_err_unwrap_err(self) -> None:
        assert Err("boom").unwrap_err() == "boom"

    def test_err_map_is_skipped(self) -> None:
        calls: list[int] = []
        result: Result[int, str] = Err("boom")
        assert result.map(calls.append) == Err("boom")
        assert calls == []

    def test_err_repr(self) -> None:
        assert repr(Err("detached")) == "Err('detached')"


class TestPatternMatching:
    def test_match(self) -> None:
        def describe(result: Result[str, str]) -> str:
            match result:
                case Ok(value):
                    return f"ok {value}"
                case Err(error):
                    return f"err {error}"

        assert describe(Ok("1.0")) == "ok 1.0"
        assert describe(Err("detached")) == "err detached"
