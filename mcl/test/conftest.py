"""Shared fixtures: a fake release served by MockHttpClient."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar

import pytest

from mcl.core.config import LaunchConfig, Settings, SourcesConfig
from mcl.net.http import MockHttpClient

INDEX_URL = "https://meta.example/version_manifest.json"
DETAIL_URL = "https://example/detail.json"
ASSET_INDEX_URL = "https://meta.example/indexes/1.16.json"
RESOURCES_URL = "https://resources.example"
CLIENT_URL = "https://launcher.example/1.16.1/client.jar"
LIB_URL = "https://libraries.example/com/x/lib-1.0.jar"
NATIVE_LINUX_URL = "https://libraries.example/org/lwjgl/lwjgl-natives-linux.jar"
NATIVE_WINDOWS_URL = "https://libraries.example/org/lwjgl/lwjgl-natives-windows.jar"
NATIVE_MACOS_URL = "https://libraries.example/org/lwjgl/lwjgl-natives-macos.jar"

SOUND = b"ogg vorbis bytes"
ICON = b"png bytes"


def sha1(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()


def object_url(data: bytes) -> str:
    digest = sha1(data)
    return f"{RESOURCES_URL}/{digest[:2]}/{digest}"


@dataclass
class FakeRelease:
    """Documents and blobs of one release, registered on a MockHttpClient."""

    http: MockHttpClient
    index: dict[str, object]
    detail: dict[str, object]
    asset_index: dict[str, object]
    blobs: dict[str, bytes] = field(default_factory=dict)

    index_url: ClassVar[str] = INDEX_URL
    detail_url: ClassVar[str] = DETAIL_URL
    asset_index_url: ClassVar[str] = ASSET_INDEX_URL
    resources_url: ClassVar[str] = RESOURCES_URL
    client_url: ClassVar[str] = CLIENT_URL
    lib_url: ClassVar[str] = LIB_URL
    sound: ClassVar[bytes] = SOUND
    icon: ClassVar[bytes] = ICON

    @staticmethod
    def digest(data: bytes) -> str:
        return sha1(data)

    @staticmethod
    def object_url(data: bytes) -> str:
        return object_url(data)

    def publish(self) -> None:
        """(Re-)register every document and blob."""
        self.http.set_json(INDEX_URL, self.index)
        self.http.set_json(DETAIL_URL, self.detail)
        self.http.set_json(ASSET_INDEX_URL, self.asset_index)
        for url, body in self.blobs.items():
            self.http.set_bytes(url, body)


def make_release() -> FakeRelease:
    index: dict[str, object] = {
        "latest": {"release": "1.16.1", "snapshot": "20w30a"},
        "versions": [
            {
                "id": "20w30a",
                "type": "snapshot",
                "url": "https://example/20w30a.json",
                "time": "2020-07-22T14:00:00+00:00",
                "releaseTime": "2020-07-22T14:00:00+00:00",
            },
            {
                "id": "1.16.1",
                "type": "release",
                "url": DETAIL_URL,
                "time": "2020-06-24T10:00:00+00:00",
                "releaseTime": "2020-06-24T10:00:00+00:00",
            },
        ],
    }
    detail: dict[str, object] = {
        "id": "1.16.1",
        "type": "release",
        "mainClass": "net.minecraft.client.main.Main",
        "assetIndex": {"id": "1.16", "url": ASSET_INDEX_URL, "sha1": "", "size": 0},
        "downloads": {"client": {"url": CLIENT_URL, "sha1": sha1(b"client jar")}},
        "libraries": [
            {
                "name": "com.x:lib:1.0",
                "downloads": {
                    "artifact": {"path": "com/x/lib-1.0.jar", "url": LIB_URL, "sha1": sha1(b"lib")}
                },
            },
            {
                "name": "org.lwjgl:lwjgl:3.2.2",
                "downloads": {
                    "artifact": {
                        "path": "org/lwjgl/lwjgl.jar",
                        "url": "https://libraries.example/org/lwjgl/lwjgl.jar",
                    },
                    "classifiers": {
                        "natives-linux": {
                            "path": "org/lwjgl/lwjgl-natives-linux.jar",
                            "url": NATIVE_LINUX_URL,
                        },
                        "natives-windows": {
                            "path": "org/lwjgl/lwjgl-natives-windows.jar",
                            "url": NATIVE_WINDOWS_URL,
                        },
                        "natives-macos": {
                            "path": "org/lwjgl/lwjgl-natives-macos.jar",
                            "url": NATIVE_MACOS_URL,
                        },
                    },
                },
            },
        ],
    }
    asset_index: dict[str, object] = {
        "objects": {
            "minecraft/sounds/a.ogg": {"hash": sha1(SOUND), "size": len(SOUND)},
            "minecraft/sounds/a_copy.ogg": {"hash": sha1(SOUND), "size": len(SOUND)},
            "icons/icon_16x16.png": {"hash": sha1(ICON), "size": len(ICON)},
        }
    }
    blobs = {
        CLIENT_URL: b"client jar",
        LIB_URL: b"lib",
        "https://libraries.example/org/lwjgl/lwjgl.jar": b"lwjgl",
        NATIVE_LINUX_URL: b"natives linux",
        NATIVE_WINDOWS_URL: b"natives windows",
        NATIVE_MACOS_URL: b"natives macos",
        object_url(SOUND): SOUND,
        object_url(ICON): ICON,
    }
    release = FakeRelease(
        http=MockHttpClient(),
        index=index,
        detail=detail,
        asset_index=asset_index,
        blobs=blobs,
    )
    release.publish()
    return release


@pytest.fixture
def release() -> FakeRelease:
    return make_release()


@pytest.fixture
def settings() -> Settings:
    return Settings(sources=SourcesConfig(version_index=INDEX_URL, resources=RESOURCES_URL))


@pytest.fixture
def launch_config(tmp_path: Path) -> LaunchConfig:
    return LaunchConfig(install_path=tmp_path / "game", version_id="1.16.1")
