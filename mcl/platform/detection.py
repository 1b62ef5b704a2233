"""Platform detection and per-platform traits.

The installer recognizes exactly three platforms. Everything that differs
between them (classpath separator, launch script flavour, native library
classifier names) lives in ``PlatformTraits``; ``Platform.traits()`` is the
only place that maps a platform to those values, and it refuses
``Platform.UNKNOWN`` explicitly instead of falling back to a default.
"""

from __future__ import annotations

import sys as _sys
from dataclasses import dataclass
from enum import Enum, auto
from functools import lru_cache

from mcl.core.failures import UnsupportedPlatform
from mcl.core.result import Err, Ok, Result

__all__ = [
    "Platform",
    "PlatformTraits",
    "detect_platform",
    "platform_from_tag",
]


@dataclass(frozen=True, slots=True)
class PlatformTraits:
    """Platform-specific constants.

    Attributes:
        classpath_separator: Separator between classpath entries
        script_name: File name of the generated launch script
        script_header: First line of the launch script
        line_ending: Line terminator used in the launch script
        classifier_keys: Library classifier keys, most specific first
    """

    classpath_separator: str
    script_name: str
    script_header: str
    line_ending: str
    classifier_keys: tuple[str, ...]


_UNIX_SCRIPT = ("start.sh", "#!/bin/sh", "\n")

_TRAITS: dict[str, PlatformTraits] = {
    "linux": PlatformTraits(":", *_UNIX_SCRIPT, classifier_keys=("natives-linux", "linux")),
    "macos": PlatformTraits(":", *_UNIX_SCRIPT, classifier_keys=("natives-macos", "macos")),
    "windows": PlatformTraits(
        ";",
        "start.bat",
        "@echo off",
        "\r\n",
        classifier_keys=("natives-windows", "windows"),
    ),
}


class Platform(Enum):
    """Operating system platform."""

    LINUX = auto()
    MACOS = auto()
    WINDOWS = auto()
    UNKNOWN = auto()

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def is_unix(self) -> bool:
        return self in (Platform.LINUX, Platform.MACOS)

    def traits(self, operation: str = "platform") -> Result[PlatformTraits, UnsupportedPlatform]:
        """Get traits for this platform.

        Args:
            operation: What the caller is doing, used in the error message

        Returns:
            Ok with PlatformTraits, or Err(UnsupportedPlatform) for UNKNOWN
        """
        traits = _TRAITS.get(str(self))
        if traits is None:
            return Err(UnsupportedPlatform(platform=str(self), operation=operation))
        return Ok(traits)


def platform_from_tag(tag: str) -> Platform:
    """Map an OS tag ("linux", "darwin", "win32", ...) to a Platform."""
    system = tag.strip().lower()
    if system.startswith("linux"):
        return Platform.LINUX
    if system.startswith(("darwin", "macos")):
        return Platform.MACOS
    if system.startswith(("win32", "windows", "cygwin", "msys")):
        return Platform.WINDOWS
    return Platform.UNKNOWN


@lru_cache(maxsize=1)
def detect_platform() -> Platform:
    """Detect the current operating system (cached)."""
    # NOTE: sys.platform rather than platform.system(), which may query WMI on Windows.
    return platform_from_tag(_sys.platform)
