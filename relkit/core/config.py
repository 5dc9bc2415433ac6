"""Typed configuration loading and access.

relkit reads an optional ``relkit.toml`` from the repository root:

    [branches]
    remote = "upstream"
    mainline = "master"

    [hosting]
    hostname = "github.com"
    organization = "park-manager"
    repository = "hubkit"

Every key is optional. Hosting values left out are detected from the remote URL.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "BranchesConfig",
    "CONFIG_FILENAME",
    "Config",
    "ConfigError",
    "DEFAULT_MAINLINE",
    "DEFAULT_REMOTE",
    "HostingConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "relkit.toml"

DEFAULT_REMOTE = "upstream"
DEFAULT_MAINLINE = "master"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class BranchesConfig:
    """Which remote holds the ladder and what its mainline branch is called."""

    remote: str = DEFAULT_REMOTE
    mainline: str = DEFAULT_MAINLINE


@dataclass(frozen=True, slots=True)
class HostingConfig:
    """Hosting platform coordinates used to build changelog links."""

    hostname: str | None = None
    organization: str | None = None
    repository: str | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.hostname and self.organization and self.repository)


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    branches: BranchesConfig = field(default_factory=BranchesConfig)
    hosting: HostingConfig = field(default_factory=HostingConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        branches: StrDict = get_table(data, "branches") or {}
        hosting: StrDict = get_table(data, "hosting") or {}

        return cls(
            branches=BranchesConfig(
                remote=get_str(branches, "remote") or DEFAULT_REMOTE,
                mainline=get_str(branches, "mainline") or DEFAULT_MAINLINE,
            ),
            hosting=HostingConfig(
                hostname=get_str(hosting, "hostname"),
                organization=get_str(hosting, "organization"),
                repository=get_str(hosting, "repository"),
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to relkit.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config from file, or return defaults when the file does not exist.

    A file that exists but cannot be parsed is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
