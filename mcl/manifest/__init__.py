"""Release documents: models and resolution."""

from .models import (
    Artifact,
    AssetIndex,
    AssetIndexRef,
    AssetRef,
    Download,
    LatestVersions,
    LibraryRef,
    VersionDetail,
    VersionIndex,
    VersionRef,
)
from .resolver import Channel, ManifestResolver, find_version, latest_version_id, read_asset_index

__all__ = [
    # models
    "Artifact",
    "AssetIndex",
    "AssetIndexRef",
    "AssetRef",
    "Download",
    "LatestVersions",
    "LibraryRef",
    "VersionDetail",
    "VersionIndex",
    "VersionRef",
    # resolver
    "Channel",
    "ManifestResolver",
    "find_version",
    "latest_version_id",
    "read_asset_index",
]
