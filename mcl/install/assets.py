"""Asset resolution: asset index -> content-addressed fetch targets."""

from __future__ import annotations

from mcl.install.fetcher import FetchTarget
from mcl.install.layout import InstallLayout
from mcl.manifest.models import AssetIndex, AssetIndexRef

__all__ = ["resolve_assets", "asset_index_target", "object_url"]


def object_url(resource_base_url: str, digest: str) -> str:
    return f"{resource_base_url.rstrip('/')}/{digest[:2]}/{digest}"


def asset_index_target(ref: AssetIndexRef, layout: InstallLayout) -> FetchTarget:
    """Target storing the asset index document itself."""
    return FetchTarget(
        url=ref.url,
        dest=layout.asset_index_path(ref.id),
        sha1=ref.sha1,
        label=f"asset index {ref.id}",
    )


def resolve_assets(
    ref: AssetIndexRef,
    index: AssetIndex,
    layout: InstallLayout,
    resource_base_url: str,
    *,
    include_index: bool = True,
) -> list[FetchTarget]:
    """Fetch targets for an asset index.

    The first target is the index document (unless ``include_index`` is
    False); the rest are one per distinct content hash, sorted by hash.
    Names sharing a hash share one blob.
    """
    targets = [asset_index_target(ref, layout)] if include_index else []
    for digest in index.unique_hashes():
        targets.append(
            FetchTarget(
                url=object_url(resource_base_url, digest),
                dest=layout.object_path(digest),
                sha1=digest,
                label=digest,
            )
        )
    return targets
