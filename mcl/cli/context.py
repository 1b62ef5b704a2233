from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from mcl.core.config import Settings, load_settings_or_default
from mcl.core.errors import ErrorCode
from mcl.core.result import Err
from mcl.output.console import ConsoleProtocol, RichConsole
from mcl.platform.detection import Platform, detect_platform
from mcl.platform.paths import default_settings_path


@dataclass(frozen=True, slots=True)
class CLIContext:
    platform: Platform
    settings: Settings
    console: ConsoleProtocol


def build_context(*, config: Path | None = None, verbose: bool = False) -> CLIContext:
    console = RichConsole(verbose=verbose)

    settings_path = config if config is not None else default_settings_path()
    if config is not None and not config.exists():
        console.error(f"config file not found: {config}")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    settings_result = load_settings_or_default(settings_path)
    if isinstance(settings_result, Err):
        console.error(settings_result.error.message)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(
        platform=detect_platform(),
        settings=settings_result.value,
        console=console,
    )
