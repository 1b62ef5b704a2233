"""Typed configuration.

Two records feed the install pipeline:

- ``LaunchConfig``: what to install and how to launch it (installation path,
  player name, version id, access token, heap bounds). Built per run by the
  CLI and passed explicitly into ``InstallService``.
- ``Settings``: where documents come from and how fetching behaves. Loaded
  from an optional ``config.toml`` in the user config directory.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_float, get_int, get_str, get_table

__all__ = [
    "LaunchConfig",
    "Settings",
    "SourcesConfig",
    "HttpConfig",
    "FetchConfig",
    "LaunchSettings",
    "ConfigError",
    "load_settings",
    "load_settings_or_default",
    "validate_launch_config",
    "VERSION_INDEX_URL",
    "RESOURCES_URL",
]

VERSION_INDEX_URL = "https://launchermeta.mojang.com/mc/game/version_manifest.json"
RESOURCES_URL = "https://resources.download.minecraft.net"

DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "mcl/0.1.0"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when settings cannot be loaded or a config value is invalid."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class LaunchConfig:
    """Per-run parameters for the install pipeline."""

    install_path: Path = Path("temp")
    username: str = "playername"
    version_id: str = "1.16.1"
    access_token: str = "youracctoken"
    initial_heap_mb: int = 512
    max_heap_mb: int = 2048


def validate_launch_config(config: LaunchConfig) -> Result[LaunchConfig, ConfigError]:
    """Reject values that can never produce a working install."""
    if not config.version_id.strip():
        return Err(ConfigError("version id must not be empty"))
    if config.initial_heap_mb <= 0 or config.max_heap_mb <= 0:
        return Err(ConfigError("heap sizes must be positive"))
    if config.initial_heap_mb > config.max_heap_mb:
        return Err(
            ConfigError(
                f"initial heap ({config.initial_heap_mb}m) exceeds maximum heap "
                f"({config.max_heap_mb}m)"
            )
        )
    return Ok(config)


@dataclass(frozen=True, slots=True)
class SourcesConfig:
    """Remote locations."""

    version_index: str = VERSION_INDEX_URL
    resources: str = RESOURCES_URL


@dataclass(frozen=True, slots=True)
class HttpConfig:
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT


@dataclass(frozen=True, slots=True)
class FetchConfig:
    """Download behaviour.

    ``workers == 1`` keeps fetching strictly sequential. ``verify_hashes``
    checks SHA-1 digests of existing and freshly downloaded files when the
    manifest declares one.
    """

    workers: int = 1
    verify_hashes: bool = False


@dataclass(frozen=True, slots=True)
class LaunchSettings:
    java: str = "java"


@dataclass(frozen=True, slots=True)
class Settings:
    """User settings container."""

    sources: SourcesConfig = field(default_factory=SourcesConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    launch: LaunchSettings = field(default_factory=LaunchSettings)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Settings:
        """Create Settings from parsed TOML. Missing keys keep their defaults."""
        sources: StrDict = get_table(data, "sources") or {}
        http: StrDict = get_table(data, "http") or {}
        fetch: StrDict = get_table(data, "fetch") or {}
        launch: StrDict = get_table(data, "launch") or {}

        timeout = get_float(http, "timeout")
        workers = get_int(fetch, "workers")
        verify = get_bool(fetch, "verify_hashes")

        return cls(
            sources=SourcesConfig(
                version_index=get_str(sources, "version_index") or VERSION_INDEX_URL,
                resources=(get_str(sources, "resources") or RESOURCES_URL).rstrip("/"),
            ),
            http=HttpConfig(
                timeout=DEFAULT_TIMEOUT if timeout is None else timeout,
                user_agent=get_str(http, "user_agent") or DEFAULT_USER_AGENT,
            ),
            fetch=FetchConfig(
                workers=1 if workers is None else workers,
                verify_hashes=False if verify is None else verify,
            ),
            launch=LaunchSettings(java=get_str(launch, "java") or "java"),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_settings(path: Path) -> Result[Settings, ConfigError]:
    """Load and validate settings from a TOML file.

    Args:
        path: Path to config.toml

    Returns:
        Ok(Settings) on success, Err(ConfigError) on failure
    """
    parsed = _parse_toml(path)
    if isinstance(parsed, Err):
        return parsed

    settings = Settings.from_dict(parsed.value)
    if settings.http.timeout <= 0:
        return Err(ConfigError("http.timeout must be positive", path=path))
    if settings.fetch.workers < 1:
        return Err(ConfigError("fetch.workers must be at least 1", path=path))
    return Ok(settings)


def load_settings_or_default(path: Path) -> Result[Settings, ConfigError]:
    """Like ``load_settings`` but a missing file yields default settings."""
    if not path.exists():
        return Ok(Settings())
    return load_settings(path)
