"""Version resolution: version index -> version reference -> version detail."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from pathlib import Path

from mcl.core.failures import DocumentError, FetchError, FilesystemError, VersionNotFound
from mcl.core.result import Err, Ok, Result
from mcl.core.structured import StrDict
from mcl.manifest.models import AssetIndex, VersionDetail, VersionIndex, VersionRef
from mcl.net.http import HttpClient, parse_json_object

__all__ = [
    "Channel",
    "ManifestResolver",
    "find_version",
    "latest_version_id",
    "read_asset_index",
]


class Channel(Enum):
    """Release channel for "latest" lookups."""

    RELEASE = "release"
    SNAPSHOT = "snapshot"

    def __str__(self) -> str:
        return self.value


def find_version(index: VersionIndex, version_id: str) -> Result[VersionRef, VersionNotFound]:
    """Find a version by exact, case-sensitive id. First match wins."""
    for ref in index.versions:
        if ref.id == version_id:
            return Ok(ref)
    return Err(VersionNotFound(version_id=version_id))


def latest_version_id(index: VersionIndex, channel: Channel) -> Result[str, VersionNotFound]:
    """Id of the latest release or snapshot announced by the index."""
    latest = index.latest.release if channel == Channel.RELEASE else index.latest.snapshot
    if not latest:
        return Err(VersionNotFound(version_id=f"latest {channel}"))
    return Ok(latest)


def read_asset_index(path: Path) -> Result[AssetIndex, DocumentError | FilesystemError]:
    """Parse an asset index document that is already on disk."""
    try:
        body = path.read_bytes()
    except OSError as e:
        return Err(FilesystemError(path=path, message=f"cannot read: {e}"))
    data = parse_json_object(str(path), body)
    if isinstance(data, Err):
        return data
    return AssetIndex.from_dict(data.value, str(path))


class ManifestResolver:
    """Fetches and parses release documents.

    No retries: a transport failure is returned as-is and ends the run.
    """

    def __init__(self, http: HttpClient) -> None:
        self._http = http

    def _fetch[M](
        self,
        url: str,
        parse: Callable[[Mapping[str, object], str], Result[M, DocumentError]],
    ) -> Result[M, FetchError | DocumentError]:
        data: Result[StrDict, FetchError | DocumentError] = self._http.get_json(url)
        if isinstance(data, Err):
            return data
        return parse(data.value, url)

    def fetch_index(self, url: str) -> Result[VersionIndex, FetchError | DocumentError]:
        return self._fetch(url, VersionIndex.from_dict)

    def fetch_detail(self, ref: VersionRef) -> Result[VersionDetail, FetchError | DocumentError]:
        """Fetch the detail document of a version.

        The returned detail's id must equal ``ref.id``; a mismatch means the
        index points at the wrong document and is reported as DocumentError.
        """
        detail = self._fetch(ref.url, VersionDetail.from_dict)
        if isinstance(detail, Err):
            return detail
        if detail.value.id != ref.id:
            return Err(
                DocumentError(
                    source=ref.url,
                    message=f"detail id {detail.value.id!r} does not match version {ref.id!r}",
                )
            )
        return detail
