"""Library resolution.

Turns the ``libraries`` list of a version detail into fetch targets. Every
library contributes its default artifact; a library with a ``classifiers``
block additionally contributes the variant matching the running platform,
if it has one.
"""

from __future__ import annotations

from collections.abc import Iterable

from mcl.core.failures import DocumentError, UnsupportedPlatform
from mcl.core.result import Err, Ok, Result
from mcl.install.fetcher import FetchTarget
from mcl.install.layout import InstallLayout, normalize
from mcl.manifest.models import Artifact, LibraryRef
from mcl.platform.detection import Platform

__all__ = ["resolve_libraries", "select_variant"]


def select_variant(
    library: LibraryRef, platform: Platform
) -> Result[Artifact | None, UnsupportedPlatform]:
    """Pick the platform variant of a library.

    Returns:
        Ok(None) if the library has no variant for this platform (or no
        classifiers at all), Ok(artifact) if it has one, and
        Err(UnsupportedPlatform) if the library has classifiers but the
        platform is not recognized.
    """
    if library.classifiers is None:
        return Ok(None)

    traits = platform.traits("download libraries")
    if isinstance(traits, Err):
        return traits

    for key in traits.value.classifier_keys:
        variant = library.classifiers.get(key)
        if variant is not None:
            return Ok(variant)
    return Ok(None)


def _target(
    artifact: Artifact, layout: InstallLayout, library: LibraryRef
) -> Result[FetchTarget, DocumentError]:
    dest = layout.library_path(artifact.path)
    libraries_dir = normalize(layout.libraries_dir)
    if dest == libraries_dir or not dest.is_relative_to(libraries_dir):
        return Err(
            DocumentError(
                source=library.name or artifact.path,
                message=f"library path {artifact.path!r} is outside libraries/",
            )
        )
    return Ok(
        FetchTarget(
            url=artifact.url,
            dest=dest,
            sha1=artifact.sha1,
            label=library.name or artifact.path,
        )
    )


def resolve_libraries(
    libraries: Iterable[LibraryRef],
    platform: Platform,
    layout: InstallLayout,
) -> Result[list[FetchTarget], UnsupportedPlatform | DocumentError]:
    """Fetch targets for all libraries, in declaration order.

    Args:
        libraries: Libraries of the version detail
        platform: Running platform
        layout: Installation layout

    Returns:
        Ok with targets (default artifact first, then variant, per library),
        Err(UnsupportedPlatform), or Err(DocumentError) for a path that
        leaves the libraries directory
    """
    targets: list[FetchTarget] = []
    for library in libraries:
        artifacts: list[Artifact] = []
        if library.artifact is not None:
            artifacts.append(library.artifact)

        variant = select_variant(library, platform)
        if isinstance(variant, Err):
            return variant
        if variant.value is not None:
            artifacts.append(variant.value)

        for artifact in artifacts:
            target = _target(artifact, layout, library)
            if isinstance(target, Err):
                return target
            targets.append(target.value)
    return Ok(targets)
