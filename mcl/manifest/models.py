"""Typed views of the remote release documents.

Three documents are involved:

- the version index (``version_manifest.json``): every known release and
  where its details live;
- the version detail: main class, client download, libraries and the asset
  index reference of one release;
- the asset index: logical resource name -> content hash and size.

Each model has a ``from_dict`` parser that validates the parsed JSON and
returns ``Err(DocumentError)`` on a shape mismatch. Only the fields the
installer uses are kept; everything else in the documents is ignored.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from mcl.core.failures import DocumentError
from mcl.core.result import Err, Ok, Result
from mcl.core.structured import as_str_dict, get_int, get_list, get_str, get_table

__all__ = [
    "LatestVersions",
    "VersionRef",
    "VersionIndex",
    "Artifact",
    "Download",
    "LibraryRef",
    "AssetIndexRef",
    "VersionDetail",
    "AssetRef",
    "AssetIndex",
]

_SHA1 = re.compile(r"[0-9a-f]{40}")


def _missing(source: str, what: str) -> Err[DocumentError]:
    return Err(DocumentError(source=source, message=f"missing or invalid '{what}'"))


@dataclass(frozen=True, slots=True)
class LatestVersions:
    release: str = ""
    snapshot: str = ""


@dataclass(frozen=True, slots=True)
class VersionRef:
    """One entry of the version index."""

    id: str
    url: str
    type: str = ""
    time: str = ""
    release_time: str = ""

    @classmethod
    def from_dict(
        cls, data: Mapping[str, object], source: str
    ) -> Result[VersionRef, DocumentError]:
        version_id = get_str(data, "id")
        if version_id is None:
            return _missing(source, "versions[].id")
        url = get_str(data, "url")
        if url is None:
            return _missing(source, f"versions[{version_id}].url")
        return Ok(
            cls(
                id=version_id,
                url=url,
                type=get_str(data, "type") or "",
                time=get_str(data, "time") or "",
                release_time=get_str(data, "releaseTime") or "",
            )
        )


@dataclass(frozen=True, slots=True)
class VersionIndex:
    """The top-level list of releases, in publication order."""

    versions: tuple[VersionRef, ...]
    latest: LatestVersions = field(default_factory=LatestVersions)

    @classmethod
    def from_dict(
        cls, data: Mapping[str, object], source: str
    ) -> Result[VersionIndex, DocumentError]:
        entries = get_list(data, "versions")
        if entries is None:
            return _missing(source, "versions")

        versions: list[VersionRef] = []
        for entry in entries:
            table = as_str_dict(entry)
            if table is None:
                return _missing(source, "versions[]")
            ref = VersionRef.from_dict(table, source)
            if isinstance(ref, Err):
                return ref
            versions.append(ref.value)

        latest = get_table(data, "latest") or {}
        return Ok(
            cls(
                versions=tuple(versions),
                latest=LatestVersions(
                    release=get_str(latest, "release") or "",
                    snapshot=get_str(latest, "snapshot") or "",
                ),
            )
        )


@dataclass(frozen=True, slots=True)
class Artifact:
    """A downloadable library file.

    ``url`` may be empty, in which case there is nothing to download.
    ``path`` is relative to the ``libraries/`` directory.
    """

    path: str
    url: str
    sha1: str | None = None
    size: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Artifact:
        return cls(
            path=get_str(data, "path") or "",
            url=get_str(data, "url") or "",
            sha1=get_str(data, "sha1"),
            size=get_int(data, "size") or 0,
        )


@dataclass(frozen=True, slots=True)
class Download:
    """A download without a declared path (the client jar)."""

    url: str
    sha1: str | None = None
    size: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Download:
        return cls(
            url=get_str(data, "url") or "",
            sha1=get_str(data, "sha1"),
            size=get_int(data, "size") or 0,
        )


@dataclass(frozen=True, slots=True)
class LibraryRef:
    """One library of a release.

    Attributes:
        name: Maven-style coordinates, informational only
        artifact: The default artifact, if the library declares one
        classifiers: Platform variants keyed by classifier; None when the
            library has no ``classifiers`` block at all
    """

    name: str
    artifact: Artifact | None
    classifiers: dict[str, Artifact] | None = None

    @classmethod
    def from_dict(
        cls, data: Mapping[str, object], source: str
    ) -> Result[LibraryRef, DocumentError]:
        name = get_str(data, "name") or ""
        downloads = get_table(data, "downloads") or {}

        artifact_table = get_table(downloads, "artifact")
        artifact = Artifact.from_dict(artifact_table) if artifact_table is not None else None

        classifiers: dict[str, Artifact] | None = None
        if "classifiers" in downloads:
            raw = get_table(downloads, "classifiers")
            if raw is None:
                return _missing(source, f"libraries[{name}].downloads.classifiers")
            classifiers = {}
            for key, value in raw.items():
                table = as_str_dict(value)
                if table is None:
                    return _missing(source, f"libraries[{name}].downloads.classifiers.{key}")
                classifiers[key] = Artifact.from_dict(table)

        return Ok(cls(name=name, artifact=artifact, classifiers=classifiers))


@dataclass(frozen=True, slots=True)
class AssetIndexRef:
    id: str
    url: str
    sha1: str | None = None
    size: int = 0
    total_size: int = 0

    @classmethod
    def from_dict(
        cls, data: Mapping[str, object], source: str
    ) -> Result[AssetIndexRef, DocumentError]:
        index_id = get_str(data, "id")
        if index_id is None:
            return _missing(source, "assetIndex.id")
        url = get_str(data, "url")
        if url is None:
            return _missing(source, "assetIndex.url")
        return Ok(
            cls(
                id=index_id,
                url=url,
                sha1=get_str(data, "sha1"),
                size=get_int(data, "size") or 0,
                total_size=get_int(data, "totalSize") or 0,
            )
        )


@dataclass(frozen=True, slots=True)
class VersionDetail:
    """Everything needed to install and launch one release."""

    id: str
    main_class: str
    asset_index: AssetIndexRef
    client: Download
    libraries: tuple[LibraryRef, ...] = ()
    type: str = ""

    @classmethod
    def from_dict(
        cls, data: Mapping[str, object], source: str
    ) -> Result[VersionDetail, DocumentError]:
        version_id = get_str(data, "id")
        if version_id is None:
            return _missing(source, "id")
        main_class = get_str(data, "mainClass")
        if main_class is None:
            return _missing(source, "mainClass")

        index_table = get_table(data, "assetIndex")
        if index_table is None:
            return _missing(source, "assetIndex")
        asset_index = AssetIndexRef.from_dict(index_table, source)
        if isinstance(asset_index, Err):
            return asset_index

        downloads = get_table(data, "downloads") or {}
        client = Download.from_dict(get_table(downloads, "client") or {})

        libraries: list[LibraryRef] = []
        for entry in get_list(data, "libraries") or []:
            table = as_str_dict(entry)
            if table is None:
                return _missing(source, "libraries[]")
            lib = LibraryRef.from_dict(table, source)
            if isinstance(lib, Err):
                return lib
            libraries.append(lib.value)

        return Ok(
            cls(
                id=version_id,
                main_class=main_class,
                asset_index=asset_index.value,
                client=client,
                libraries=tuple(libraries),
                type=get_str(data, "type") or "",
            )
        )


@dataclass(frozen=True, slots=True)
class AssetRef:
    """A content-addressed resource. ``hash`` is a lowercase hex SHA-1."""

    hash: str
    size: int = 0

    @property
    def shard(self) -> str:
        """Two-character directory name the blob is stored under."""
        return self.hash[:2]


@dataclass(frozen=True, slots=True)
class AssetIndex:
    """Logical resource name -> content hash."""

    objects: dict[str, AssetRef]

    @classmethod
    def from_dict(
        cls, data: Mapping[str, object], source: str
    ) -> Result[AssetIndex, DocumentError]:
        raw = get_table(data, "objects")
        if raw is None:
            return _missing(source, "objects")

        objects: dict[str, AssetRef] = {}
        for name, value in raw.items():
            table = as_str_dict(value)
            digest = get_str(table, "hash") if table is not None else None
            if table is None or digest is None:
                return _missing(source, f"objects[{name}].hash")
            digest = digest.lower()
            if not _SHA1.fullmatch(digest):
                return Err(
                    DocumentError(
                        source=source, message=f"objects[{name}]: invalid hash {digest!r}"
                    )
                )
            objects[name] = AssetRef(hash=digest, size=get_int(table, "size") or 0)

        return Ok(cls(objects=objects))

    def unique_hashes(self) -> list[str]:
        """Distinct content hashes, sorted."""
        return sorted({ref.hash for ref in self.objects.values()})
