from __future__ import annotations

from pathlib import Path

import typer

from mcl.cli.commands._helpers import exit_on_pipeline_error, exit_with_code
from mcl.cli.context import build_context
from mcl.core.config import LaunchConfig, validate_launch_config
from mcl.core.errors import ErrorCode
from mcl.core.result import Err, Ok
from mcl.manifest.resolver import Channel
from mcl.output.console import Style
from mcl.services.install import InstallService


def install(
    path: Path = typer.Option(
        Path("temp"), "--path", help="Folder where the game should be installed."
    ),
    username: str = typer.Option("playername", "--username", help="Your username."),
    version: str = typer.Option("1.16.1", "--version", help="Version id to install."),
    latest: bool = typer.Option(False, "--latest", help="Install the latest release."),
    snapshot: bool = typer.Option(False, "--snapshot", help="Install the latest snapshot."),
    token: str = typer.Option("youracctoken", "--token", help="Your access token."),
    init_memory: int = typer.Option(
        512, "--init-memory", help="Memory (in megabytes) for the JVM at start."
    ),
    max_memory: int = typer.Option(
        2048, "--max-memory", help="Maximum memory (in megabytes) for the JVM."
    ),
    output: Path | None = typer.Option(
        None, "--output", help="Directory for the launch script (default: current directory)."
    ),
    workers: int | None = typer.Option(
        None, "--workers", help="Parallel downloads (default from config, 1 = sequential)."
    ),
    verify: bool | None = typer.Option(
        None, "--verify/--no-verify", help="Check SHA-1 digests of downloaded files."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print every downloaded file."),
    config: Path | None = typer.Option(None, "--config", help="Settings file (TOML)."),
) -> None:
    """Install a release and write a start script for it."""
    ctx = build_context(config=config, verbose=verbose)

    if latest and snapshot:
        ctx.console.error("--latest and --snapshot are mutually exclusive")
        exit_with_code(int(ErrorCode.USER_ERROR))
    if workers is not None and workers < 1:
        ctx.console.error("--workers must be at least 1")
        exit_with_code(int(ErrorCode.USER_ERROR))

    launch = validate_launch_config(
        LaunchConfig(
            install_path=path,
            username=username,
            version_id=version,
            access_token=token,
            initial_heap_mb=init_memory,
            max_heap_mb=max_memory,
        )
    )
    if isinstance(launch, Err):
        ctx.console.error(launch.error.message)
        exit_with_code(int(ErrorCode.USER_ERROR))

    channel = Channel.RELEASE if latest else Channel.SNAPSHOT if snapshot else None
    service = InstallService(
        settings=ctx.settings,
        platform=ctx.platform,
        console=ctx.console,
    )
    result = service.install(
        launch.value,
        channel=channel,
        output_dir=output,
        workers=workers,
        verify=verify,
    )
    match result:
        case Ok(report):
            ctx.console.success(f"{report.version_id} installed in {report.layout.root}")
            ctx.console.print(f"launch script: {report.script_path}")
            ctx.console.print(f"exec time: {report.elapsed:.2f}s", Style.DIM)
        case Err(e):
            exit_on_pipeline_error(e, ctx)
