"""Classpath construction."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from mcl.core.failures import UnsupportedPlatform
from mcl.core.result import Err, Ok, Result
from mcl.install.layout import normalize
from mcl.platform.detection import Platform

__all__ = ["build_classpath"]


def build_classpath(
    platform: Platform,
    library_paths: Iterable[Path],
    client_path: Path,
) -> Result[str, UnsupportedPlatform]:
    """Join library paths and the client jar into one classpath string.

    Entries keep their given order and the client jar is always last. The
    separator is ``:`` on linux/macos and ``;`` on windows.

    Args:
        platform: Running platform
        library_paths: Local paths of library artifacts, in resolution order
        client_path: Local path of the client jar

    Returns:
        Ok with the classpath, or Err(UnsupportedPlatform)
    """
    traits = platform.traits("choosing classpath separator")
    if isinstance(traits, Err):
        return traits

    entries = [str(normalize(path)) for path in library_paths]
    entries.append(str(normalize(client_path)))
    return Ok(traits.value.classpath_separator.join(entries))
