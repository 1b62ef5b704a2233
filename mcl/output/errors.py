"""Error presentation: console formatting and exit code mapping."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mcl.core.errors import ErrorCode
from mcl.core.failures import (
    DocumentError,
    FetchError,
    FilesystemError,
    PipelineError,
    UnsupportedPlatform,
    VersionNotFound,
)
from mcl.output.console import Style

if TYPE_CHECKING:
    from mcl.output.console import ConsoleProtocol

__all__ = ["print_pipeline_error", "pipeline_error_exit_code"]


def print_pipeline_error(error: PipelineError, console: ConsoleProtocol) -> None:
    """Print a pipeline failure with a hint on how to recover."""
    console.error(str(error))
    match error.cause:
        case VersionNotFound():
            console.print("hint: run `mcl versions` to list known ids", Style.DIM)
        case UnsupportedPlatform():
            console.print("hint: supported platforms are linux, macos and windows", Style.DIM)
        case FetchError(retryable=True):
            console.print(
                "hint: re-run the same command to resume; finished files are kept",
                Style.DIM,
            )
        case FilesystemError(path=path):
            console.print(f"hint: check permissions and free space for {path}", Style.DIM)
        case DocumentError() | FetchError():
            pass


def pipeline_error_exit_code(error: PipelineError) -> int:
    match error.cause:
        case VersionNotFound():
            return int(ErrorCode.USER_ERROR)
        case UnsupportedPlatform():
            return int(ErrorCode.PLATFORM_ERROR)
        case FetchError():
            return int(ErrorCode.NETWORK_ERROR)
        case FilesystemError():
            return int(ErrorCode.IO_ERROR)
        case DocumentError():
            return int(ErrorCode.DOCUMENT_ERROR)
