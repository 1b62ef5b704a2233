"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from mcl.core.failures import PipelineError
from mcl.output.errors import pipeline_error_exit_code, print_pipeline_error

if TYPE_CHECKING:
    from mcl.cli.context import CLIContext


def exit_on_pipeline_error(error: PipelineError, ctx: CLIContext) -> NoReturn:
    """Print a pipeline failure and exit with its mapped code."""
    print_pipeline_error(error, ctx.console)
    raise typer.Exit(code=pipeline_error_exit_code(error))


def exit_with_code(code: int) -> NoReturn:
    raise typer.Exit(code=code)
