"""Classpath and launch script generation."""

from .classpath import build_classpath
from .command import (
    LaunchCommand,
    LaunchParams,
    LaunchScript,
    compose_command,
    render_script,
    write_script,
)

__all__ = [
    "build_classpath",
    "LaunchCommand",
    "LaunchParams",
    "LaunchScript",
    "compose_command",
    "render_script",
    "write_script",
]
