"""Process exit codes.

Every failure kind of the install pipeline maps to one of these codes (see
``mcl.output.errors``). The numeric values are part of the CLI contract:
- 0: Success
- 1: User error (unknown version id, bad option values)
- 2: Platform error (running OS is not linux, macos or windows)
- 4: Network error (download failed or timed out, re-run to resume)
- 5: I/O error (cannot create directories or write files)
- 6: Document error (a remote document has an unexpected shape)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    PLATFORM_ERROR = 2
    NETWORK_ERROR = 4
    IO_ERROR = 5
    DOCUMENT_ERROR = 6
