"""Version listing for ``mcl versions``."""

from __future__ import annotations

from dataclasses import dataclass

from mcl.core.failures import PipelineError
from mcl.core.result import Result
from mcl.manifest.models import VersionIndex, VersionRef
from mcl.manifest.resolver import ManifestResolver
from mcl.net.http import HttpClient

__all__ = ["VersionListing", "load_index", "select_versions"]


@dataclass(frozen=True, slots=True)
class VersionListing:
    ref: VersionRef
    latest_release: bool
    latest_snapshot: bool


def load_index(http: HttpClient, url: str) -> Result[VersionIndex, PipelineError]:
    return ManifestResolver(http).fetch_index(url).map_err(
        lambda cause: PipelineError(stage="version index", cause=cause)
    )


def select_versions(
    index: VersionIndex,
    *,
    version_type: str | None = None,
    limit: int | None = None,
) -> list[VersionListing]:
    """Filter the index by type, keeping publication order.

    Args:
        index: Parsed version index
        version_type: Keep only this type (release, snapshot, ...)
        limit: Keep at most this many entries
    """
    refs = [r for r in index.versions if version_type is None or r.type == version_type]
    if limit is not None:
        refs = refs[: max(limit, 0)]
    return [
        VersionListing(
            ref=r,
            latest_release=r.id == index.latest.release,
            latest_snapshot=r.id == index.latest.snapshot,
        )
        for r in refs
    ]
