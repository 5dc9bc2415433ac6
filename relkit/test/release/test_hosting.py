"""Tests for release/hosting.py."""

from __future__ import annotations

import pytest

from relkit.core.config import HostingConfig
from relkit.core.result import Err, Ok
from relkit.release.hosting import HostingInfo, parse_remote_url, resolve_hosting

HUBKIT = HostingInfo(hostname="github.com", organization="park-manager", repository="hubkit")


class TestHostingInfo:
    def test_repository_url(self) -> None:
        assert HUBKIT.repository_url == "https://github.com/park-manager/hubkit"

    def test_profile_url_is_on_the_host(self) -> None:
        assert HUBKIT.profile_url("sstok") == "https://github.com/sstok"


class TestParseRemoteUrl:
    @pytest.mark.parametrize(
        "url",
        [
            "https://github.com/park-manager/hubkit.git",
            "https://github.com/park-manager/hubkit",
            "https://token@github.com/park-manager/hubkit.git",
            "ssh://git@github.com/park-manager/hubkit.git",
            "ssh://git@github.com:22/park-manager/hubkit.git",
            "git@github.com:park-manager/hubkit.git",
            "git@github.com:park-manager/hubkit\n",
        ],
    )
    def test_known_forms(self, url: str) -> None:
        assert parse_remote_url(url) == HUBKIT

    def test_self_hosted(self) -> None:
        assert parse_remote_url("git@git.example.org:team/tool.git") == HostingInfo(
            "git.example.org", "team", "tool"
        )

    @pytest.mark.parametrize("url", ["", "/srv/git/hubkit.git", "https://github.com/only-org"])
    def test_unrecognized(self, url: str) -> None:
        assert parse_remote_url(url) is None


class TestResolveHosting:
    def test_detected_from_remote(self) -> None:
        result = resolve_hosting(HostingConfig(), "git@github.com:park-manager/hubkit.git")
        assert result == Ok(HUBKIT)

    def test_configured_values_win(self) -> None:
        config = HostingConfig(hostname="gitea.local", organization="forks")
        result = resolve_hosting(config, "git@github.com:park-manager/hubkit.git")
        assert result == Ok(HostingInfo("gitea.local", "forks", "hubkit"))

    def test_complete_config_needs_no_remote(self) -> None:
        config = HostingConfig(hostname="github.com", organization="park-manager", repository="hubkit")
        assert config.is_complete
        assert resolve_hosting(config, None) == Ok(HUBKIT)

    def test_unresolvable(self) -> None:
        result = resolve_hosting(HostingConfig(), "/srv/git/hubkit.git")
        assert isinstance(result, Err)
        assert "[hosting]" in (result.error.hint or "")
