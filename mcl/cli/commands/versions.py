from __future__ import annotations

from pathlib import Path

import typer

from mcl.cli.commands._helpers import exit_on_pipeline_error
from mcl.cli.context import build_context
from mcl.core.result import Err
from mcl.net.http import RealHttpClient
from mcl.output.console import Style
from mcl.services.versions import load_index, select_versions


def versions(
    version_type: str | None = typer.Option(
        None, "--type", help="Only list this type (release, snapshot, old_beta, ...)."
    ),
    limit: int | None = typer.Option(None, "--limit", help="Maximum number of entries."),
    config: Path | None = typer.Option(None, "--config", help="Settings file (TOML)."),
) -> None:
    """List versions known to the version index."""
    ctx = build_context(config=config)
    http = RealHttpClient(
        timeout=ctx.settings.http.timeout,
        user_agent=ctx.settings.http.user_agent,
    )

    index = load_index(http, ctx.settings.sources.version_index)
    if isinstance(index, Err):
        exit_on_pipeline_error(index.error, ctx)

    listings = select_versions(index.value, version_type=version_type, limit=limit)
    if not listings:
        ctx.console.warning("no matching versions")
        return

    for item in listings:
        marker = ""
        if item.latest_release:
            marker = "  (latest release)"
        elif item.latest_snapshot:
            marker = "  (latest snapshot)"
        line = f"{item.ref.id:<24} {item.ref.type:<10} {item.ref.release_time}{marker}"
        ctx.console.print(line, Style.SUCCESS if marker else Style.DEFAULT)
