"""Materialization of a release into an installation root.

- layout.py: where every file goes
- fetcher.py: idempotent downloads (sequential or on a worker pool)
- libraries.py: libraries + platform variants -> fetch targets
- assets.py: asset index -> content-addressed fetch targets
"""

from .fetcher import ContentFetcher, FetchOutcome, FetchStatus, FetchSummary, FetchTarget
from .layout import InstallLayout, normalize
from .libraries import resolve_libraries, select_variant
from .assets import asset_index_target, object_url, resolve_assets

__all__ = [
    "ContentFetcher",
    "FetchOutcome",
    "FetchStatus",
    "FetchSummary",
    "FetchTarget",
    "InstallLayout",
    "normalize",
    "resolve_libraries",
    "select_variant",
    "asset_index_target",
    "object_url",
    "resolve_assets",
]
