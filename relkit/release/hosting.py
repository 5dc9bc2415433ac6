"""Hosting platform coordinates used to build changelog links."""

from __future__ import annotations

import re
from dataclasses import dataclass

from relkit.core.config import HostingConfig
from relkit.core.result import Err, Ok, Result

__all__ = ["HostingError", "HostingInfo", "parse_remote_url", "resolve_hosting"]

_URL_RE = re.compile(
    r"^(?:https?|ssh|git)://(?:[^@/]+@)?(?P<host>[^/:]+)(?::\d+)?/"
    r"(?P<org>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?/?$"
)
_SCP_RE = re.compile(r"^(?:[^@/]+@)?(?P<host>[^:/]+):(?P<org>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?/?$")


@dataclass(frozen=True, slots=True)
class HostingError:
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class HostingInfo:
    """Where the repository is hosted.

    Attributes:
        hostname: e.g. "github.com"
        organization: Owner of the repository
        repository: Repository name
    """

    hostname: str
    organization: str
    repository: str

    @property
    def repository_url(self) -> str:
        return f"https://{self.hostname}/{self.organization}/{self.repository}"

    def profile_url(self, login: str) -> str:
        return f"https://{self.hostname}/{login}"


def parse_remote_url(url: str) -> HostingInfo | None:
    """Extract hosting coordinates from a git remote URL.

    Understands ``https://host/org/repo.git``, ``ssh://git@host/org/repo.git``
    and the scp-like ``git@host:org/repo.git``.
    """
    url = url.strip()
    m = _URL_RE.match(url) or _SCP_RE.match(url)
    if m is None:
        return None
    return HostingInfo(hostname=m.group("host"), organization=m.group("org"), repository=m.group("repo"))


def resolve_hosting(
    config: HostingConfig,
    remote_url: str | None,
) -> Result[HostingInfo, HostingError]:
    """Combine configured values with those detected from the remote URL.

    Configured values win; the remote URL fills the gaps.
    """
    detected = parse_remote_url(remote_url) if remote_url else None

    hostname = config.hostname or (detected.hostname if detected else None)
    organization = config.organization or (detected.organization if detected else None)
    repository = config.repository or (detected.repository if detected else None)

    if hostname and organization and repository:
        return Ok(HostingInfo(hostname=hostname, organization=organization, repository=repository))

    return Err(
        HostingError(
            message="Unable to determine the hosting organization and repository.",
            hint="Set hostname, organization and repository under [hosting] in relkit.toml",
        )
    )
