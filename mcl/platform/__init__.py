"""Platform abstraction layer."""

from .detection import (
    Platform,
    PlatformTraits,
    detect_platform,
    platform_from_tag,
)
from .files import atomic_write_bytes, atomic_write_text, sha1_of
from .paths import default_settings_path, home, user_config_dir

__all__ = [
    # detection
    "Platform",
    "PlatformTraits",
    "detect_platform",
    "platform_from_tag",
    # files
    "atomic_write_bytes",
    "atomic_write_text",
    "sha1_of",
    # paths
    "default_settings_path",
    "home",
    "user_config_dir",
]
