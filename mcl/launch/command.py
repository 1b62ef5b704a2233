"""Launch command composition and script generation.

The installer never starts the game itself; it writes a small script that
does:

- ``start.sh`` on linux/macos (``#!/bin/sh``, LF line endings, executable)
- ``start.bat`` on windows (``@echo off``, CRLF line endings)

Both contain a single runtime invocation with heap flags, the classpath, the
main class and a fixed, ordered set of named game arguments.
"""

from __future__ import annotations

import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path

from mcl.core.failures import FilesystemError, UnsupportedPlatform
from mcl.core.result import Err, Ok, Result
from mcl.install.layout import InstallLayout
from mcl.platform.detection import Platform
from mcl.platform.files import atomic_write_text

__all__ = [
    "LaunchParams",
    "LaunchCommand",
    "LaunchScript",
    "compose_command",
    "render_script",
    "write_script",
]


@dataclass(frozen=True, slots=True)
class LaunchParams:
    """Run-time parameters. Values are passed through unchecked."""

    username: str
    access_token: str
    initial_heap_mb: int
    max_heap_mb: int
    java: str = "java"


@dataclass(frozen=True, slots=True)
class LaunchCommand:
    argv: tuple[str, ...]

    def __str__(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True, slots=True)
class LaunchScript:
    """A rendered launch script.

    Attributes:
        name: File name (start.sh / start.bat)
        content: Full script text, line endings included
        executable: Whether the file needs the executable bit
    """

    name: str
    content: str
    executable: bool


def compose_command(
    *,
    classpath: str,
    main_class: str,
    layout: InstallLayout,
    asset_index_id: str,
    version_id: str,
    params: LaunchParams,
) -> LaunchCommand:
    """Assemble the runtime invocation in its fixed argument order."""
    return LaunchCommand(
        argv=(
            params.java,
            f"-Xms{params.initial_heap_mb}m",
            f"-Xmx{params.max_heap_mb}m",
            "-cp",
            classpath,
            main_class,
            "--username",
            params.username,
            "--gameDir",
            str(layout.root),
            "--assetIndex",
            asset_index_id,
            "--assetsDir",
            str(layout.assets_dir),
            "--accessToken",
            params.access_token,
            "--version",
            version_id,
        )
    )


_BATCH_SPECIAL = frozenset("&|<>^()")


def _quote_batch(arg: str) -> str:
    """Quote one argument for a batch file line.

    ``cmd`` treats the characters in ``_BATCH_SPECIAL`` as operators unless
    they are inside double quotes, and expands ``%name%`` even inside quotes.
    """
    if not arg:
        return '""'
    quoted = subprocess.list2cmdline([arg])
    if not quoted.startswith('"') and not _BATCH_SPECIAL.isdisjoint(arg):
        quoted = f'"{quoted}"'
    return quoted.replace("%", "%%")


def _quote(arg: str, platform: Platform) -> str:
    if platform == Platform.WINDOWS:
        return _quote_batch(arg)
    return shlex.quote(arg)


def render_script(
    command: LaunchCommand, platform: Platform
) -> Result[LaunchScript, UnsupportedPlatform]:
    """Render the command as a shell script or batch file.

    Args:
        command: Composed launch command
        platform: Platform the script is for

    Returns:
        Ok with the script, or Err(UnsupportedPlatform)
    """
    traits = platform.traits("create executable file")
    if isinstance(traits, Err):
        return traits

    t = traits.value
    line = " ".join(_quote(arg, platform) for arg in command.argv)
    content = t.line_ending.join([t.script_header, line]) + t.line_ending
    return Ok(LaunchScript(name=t.script_name, content=content, executable=platform.is_unix))


def write_script(script: LaunchScript, directory: Path) -> Result[Path, FilesystemError]:
    """Write the script into ``directory`` and return its path."""
    path = directory / script.name
    try:
        atomic_write_text(path, script.content)
        if script.executable:
            path.chmod(0o755)
    except OSError as e:
        return Err(FilesystemError(path=path, message=f"cannot write launch script: {e}"))
    return Ok(path)
