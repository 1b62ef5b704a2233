"""Tests for exit codes and pipeline failure kinds."""

from pathlib import Path

from mcl.core.errors import ErrorCode
from mcl.core.failures import (
    DocumentError,
    FetchError,
    FilesystemError,
    PipelineError,
    UnsupportedPlatform,
    VersionNotFound,
)


class TestErrorCode:
    """Tests for ErrorCode enum."""

    def test_values_are_stable(self) -> None:
        assert ErrorCode.OK == 0
        assert ErrorCode.USER_ERROR == 1
        assert ErrorCode.PLATFORM_ERROR == 2
        assert ErrorCode.NETWORK_ERROR == 4
        assert ErrorCode.IO_ERROR == 5
        assert ErrorCode.DOCUMENT_ERROR == 6


class TestFailureMessages:
    """Tests for failure __str__ output."""

    def test_version_not_found(self) -> None:
        assert str(VersionNotFound("9.9.9")) == "can't find version 9.9.9"

    def test_unsupported_platform(self) -> None:
        error = UnsupportedPlatform(platform="unknown", operation="create executable file")
        assert str(error) == "create executable file: unsupported OS (unknown)"

    def test_fetch_error_with_status(self) -> None:
        error = FetchError(url="https://x/a", status=503, message="Service Unavailable")
        assert str(error) == "HTTP 503: Service Unavailable (https://x/a)"

    def test_fetch_error_transport(self) -> None:
        error = FetchError(url="https://x/a", status=0, message="Request timed out")
        assert str(error) == "Request timed out (https://x/a)"

    def test_filesystem_error(self) -> None:
        error = FilesystemError(path=Path("/ro/libraries"), message="cannot create directory")
        assert str(error) == f"cannot create directory: {Path('/ro/libraries')}"

    def test_document_error(self) -> None:
        error = DocumentError(source="index.json", message="missing or invalid 'versions'")
        assert str(error) == "missing or invalid 'versions' (index.json)"


class TestPipelineError:
    """Tests for the stage-labelled pipeline error."""

    def test_str_prefixes_stage(self) -> None:
        error = PipelineError(stage="version", cause=VersionNotFound("9.9.9"))
        assert str(error) == "version: can't find version 9.9.9"

    def test_retryable_only_for_retryable_fetch_errors(self) -> None:
        fetch = FetchError(url="u", status=0, message="reset")
        assert PipelineError("assets", fetch).retryable
        assert not PipelineError(
            "assets", FetchError(url="u", status=0, message="bad url", retryable=False)
        ).retryable
        assert not PipelineError("version", VersionNotFound("x")).retryable

    def test_equality_by_value(self) -> None:
        a = PipelineError("client", FetchError(url="u", status=404, message="nf"))
        b = PipelineError("client", FetchError(url="u", status=404, message="nf"))
        assert a == b
