"""On-disk layout of an installation root.

    <root>/
        libraries/<library relative path...>
        versions/<version id>/<version id>.jar
        assets/indexes/<asset index id>.json
        assets/objects/<hash[0:2]>/<hash>

The layout is pure path arithmetic; nothing here touches the filesystem.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

__all__ = ["InstallLayout", "normalize"]

CLIENT_EXTENSION = "jar"


def normalize(path: Path | str) -> Path:
    """Drop ``.``/``..`` segments and redundant separators."""
    return Path(os.path.normpath(path))


@dataclass(frozen=True, slots=True)
class InstallLayout:
    """Paths inside an installation root.

    Use ``InstallLayout.at(path)`` to get a layout with an absolute,
    normalized root.
    """

    root: Path

    @classmethod
    def at(cls, path: Path) -> InstallLayout:
        return cls(root=Path(os.path.abspath(path.expanduser())))

    @property
    def libraries_dir(self) -> Path:
        return self.root / "libraries"

    @property
    def versions_dir(self) -> Path:
        return self.root / "versions"

    @property
    def assets_dir(self) -> Path:
        return self.root / "assets"

    @property
    def indexes_dir(self) -> Path:
        return self.assets_dir / "indexes"

    @property
    def objects_dir(self) -> Path:
        return self.assets_dir / "objects"

    def library_path(self, relative: str) -> Path:
        """Destination of a library artifact, normalized."""
        return normalize(self.libraries_dir / relative)

    def client_path(self, version_id: str) -> Path:
        return self.versions_dir / version_id / f"{version_id}.{CLIENT_EXTENSION}"

    def asset_index_path(self, index_id: str) -> Path:
        return self.indexes_dir / f"{index_id}.json"

    def object_path(self, digest: str) -> Path:
        """Destination of a content-addressed resource."""
        return self.objects_dir / digest[:2] / digest
