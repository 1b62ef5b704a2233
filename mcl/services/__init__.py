"""Application services."""

from .install import InstallReport, InstallService, StageSummary
from .versions import VersionListing, load_index, select_versions

__all__ = [
    "InstallReport",
    "InstallService",
    "StageSummary",
    "VersionListing",
    "load_index",
    "select_versions",
]
