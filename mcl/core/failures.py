"""Failure kinds of the install pipeline.

Every stage returns one of these as the ``Err`` side of a ``Result``.
``PipelineError`` wraps the first failure with the name of the stage that
produced it; the pipeline never continues past it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

__all__ = [
    "VersionNotFound",
    "UnsupportedPlatform",
    "FetchError",
    "FilesystemError",
    "DocumentError",
    "InstallFailure",
    "PipelineError",
]


@dataclass(frozen=True, slots=True)
class VersionNotFound:
    """The requested version id is absent from the version index."""

    version_id: str

    def __str__(self) -> str:
        return f"can't find version {self.version_id}"


@dataclass(frozen=True, slots=True)
class UnsupportedPlatform:
    """The running OS is not linux, macos or windows."""

    platform: str
    operation: str

    def __str__(self) -> str:
        return f"{self.operation}: unsupported OS ({self.platform})"


@dataclass(frozen=True, slots=True)
class FetchError:
    """Network failure, timeout, non-success response or digest mismatch.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for transport errors)
        message: Human-readable error message
        retryable: Whether re-running the pipeline may succeed
    """

    url: str
    status: int
    message: str
    retryable: bool = True

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@dataclass(frozen=True, slots=True)
class FilesystemError:
    """Directory creation or file write failed."""

    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.message}: {self.path}"


@dataclass(frozen=True, slots=True)
class DocumentError:
    """A remote document does not have the expected shape."""

    source: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} ({self.source})"


InstallFailure = (
    VersionNotFound | UnsupportedPlatform | FetchError | FilesystemError | DocumentError
)


@dataclass(frozen=True, slots=True)
class PipelineError:
    """First failure of a pipeline run, labelled with its stage."""

    stage: str
    cause: InstallFailure

    @property
    def retryable(self) -> bool:
        return isinstance(self.cause, FetchError) and self.cause.retryable

    def __str__(self) -> str:
        return f"{self.stage}: {self.cause}"
