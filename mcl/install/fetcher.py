"""Content fetcher: idempotent "download URL to path".

A target whose destination already exists is skipped; that existence check
is the installer's only cache, which makes an interrupted install resumable
by simply running it again. With ``verify=True`` an existing file is only
skipped when its SHA-1 matches the declared digest, and a downloaded body
must match it before it is written.

Bodies are written atomically (temp file + rename), so a crash never leaves
a truncated file that a later run would mistake for a finished download.
"""

from __future__ import annotations

import hashlib
import threading
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path

from mcl.core.failures import FetchError, FilesystemError
from mcl.core.result import Err, Ok, Result
from mcl.net.http import HttpClient
from mcl.platform.files import atomic_write_bytes, sha1_of

__all__ = [
    "FetchTarget",
    "FetchStatus",
    "FetchOutcome",
    "FetchSummary",
    "ContentFetcher",
]

type FetchFailure = FetchError | FilesystemError


@dataclass(frozen=True, slots=True)
class FetchTarget:
    """One file to materialize.

    Attributes:
        url: Remote location; empty means nothing to download
        dest: Local destination path
        sha1: Declared digest, if the manifest provides one
        label: Short name for progress output
    """

    url: str
    dest: Path
    sha1: str | None = None
    label: str = ""


class FetchStatus(Enum):
    DOWNLOADED = auto()
    SKIPPED_EXISTS = auto()
    SKIPPED_NO_URL = auto()

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")


@dataclass(frozen=True, slots=True)
class FetchOutcome:
    target: FetchTarget
    status: FetchStatus
    size: int = 0


@dataclass(frozen=True, slots=True)
class FetchSummary:
    """Totals for a batch of targets."""

    downloaded: int = 0
    skipped: int = 0
    bytes: int = 0

    @classmethod
    def of(cls, outcomes: Iterable[FetchOutcome]) -> FetchSummary:
        downloaded = skipped = size = 0
        for outcome in outcomes:
            if outcome.status == FetchStatus.DOWNLOADED:
                downloaded += 1
                size += outcome.size
            else:
                skipped += 1
        return cls(downloaded=downloaded, skipped=skipped, bytes=size)

    @property
    def total(self) -> int:
        return self.downloaded + self.skipped


class ContentFetcher:
    """Downloads fetch targets into the installation root.

    Safe to share between worker threads: the existence check and the write
    for one destination happen under a per-destination lock.

    Usage:
        fetcher = ContentFetcher(RealHttpClient())
        result = fetcher.fetch_all(targets, workers=4)
        if isinstance(result, Ok):
            print(f"{result.value.downloaded} downloaded")
    """

    def __init__(self, http: HttpClient, *, verify: bool = False) -> None:
        self._http = http
        self._verify = verify
        # dest -> (lock, number of fetches holding or waiting for it)
        self._locks: dict[Path, tuple[threading.Lock, int]] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def _locked(self, dest: Path) -> Iterator[None]:
        """Hold the lock for ``dest``; the entry is dropped by its last user."""
        with self._locks_guard:
            lock, users = self._locks.get(dest, (threading.Lock(), 0))
            self._locks[dest] = (lock, users + 1)
        try:
            with lock:
                yield
        finally:
            with self._locks_guard:
                _, users = self._locks[dest]
                if users == 1:
                    del self._locks[dest]
                else:
                    self._locks[dest] = (lock, users - 1)

    def _is_complete(self, target: FetchTarget) -> Result[bool, FilesystemError]:
        if not target.dest.exists():
            return Ok(False)
        if not self._verify or not target.sha1:
            return Ok(True)
        try:
            return Ok(sha1_of(target.dest) == target.sha1.lower())
        except OSError as e:
            return Err(FilesystemError(path=target.dest, message=f"cannot read: {e}"))

    def fetch(self, target: FetchTarget) -> Result[FetchOutcome, FetchFailure]:
        """Materialize a single target.

        Args:
            target: What to download and where

        Returns:
            Ok with the outcome (downloaded or skipped), Err(FetchError) on
            network failure, Err(FilesystemError) if the file cannot be written
        """
        if not target.url:
            return Ok(FetchOutcome(target, FetchStatus.SKIPPED_NO_URL))

        with self._locked(target.dest):
            complete = self._is_complete(target)
            if isinstance(complete, Err):
                return complete
            if complete.value:
                return Ok(FetchOutcome(target, FetchStatus.SKIPPED_EXISTS))

            try:
                target.dest.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                return Err(
                    FilesystemError(
                        path=target.dest.parent, message=f"cannot create directory: {e}"
                    )
                )

            body = self._http.get_bytes(target.url)
            if isinstance(body, Err):
                return body

            if self._verify and target.sha1:
                actual = hashlib.sha1(body.value).hexdigest()
                if actual != target.sha1.lower():
                    return Err(
                        FetchError(
                            url=target.url,
                            status=0,
                            message=f"SHA-1 mismatch: expected {target.sha1}, got {actual}",
                        )
                    )

            try:
                atomic_write_bytes(target.dest, body.value)
            except OSError as e:
                return Err(FilesystemError(path=target.dest, message=f"cannot write: {e}"))

        return Ok(FetchOutcome(target, FetchStatus.DOWNLOADED, size=len(body.value)))

    def fetch_all(
        self,
        targets: list[FetchTarget],
        *,
        workers: int = 1,
        on_outcome: Callable[[FetchOutcome], None] | None = None,
    ) -> Result[FetchSummary, FetchFailure]:
        """Materialize a batch of targets, stopping at the first failure.

        Args:
            targets: Targets in resolution order
            workers: 1 for strictly sequential fetching, otherwise the size of
                the worker pool
            on_outcome: Optional callback invoked for every finished target

        Returns:
            Ok with totals, or Err with the first failure
        """
        if workers <= 1 or len(targets) <= 1:
            return self._fetch_sequential(targets, on_outcome)
        return self._fetch_parallel(targets, workers, on_outcome)

    def _fetch_sequential(
        self,
        targets: list[FetchTarget],
        on_outcome: Callable[[FetchOutcome], None] | None,
    ) -> Result[FetchSummary, FetchFailure]:
        outcomes: list[FetchOutcome] = []
        for target in targets:
            result = self.fetch(target)
            if isinstance(result, Err):
                return result
            outcomes.append(result.value)
            if on_outcome:
                on_outcome(result.value)
        return Ok(FetchSummary.of(outcomes))

    def _fetch_parallel(
        self,
        targets: list[FetchTarget],
        workers: int,
        on_outcome: Callable[[FetchOutcome], None] | None,
    ) -> Result[FetchSummary, FetchFailure]:
        outcomes: list[FetchOutcome] = []
        failure: FetchFailure | None = None

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="mcl-fetch") as pool:
            futures: list[Future[Result[FetchOutcome, FetchFailure]]] = [
                pool.submit(self.fetch, target) for target in targets
            ]
            for future in as_completed(futures):
                result = future.result()
                if isinstance(result, Err):
                    failure = result.error
                    # Queued work is dropped; in-flight fetches finish on exit.
                    for pending in futures:
                        pending.cancel()
                    break
                outcomes.append(result.value)
                if on_outcome:
                    on_outcome(result.value)

        if failure is not None:
            return Err(failure)
        return Ok(FetchSummary.of(outcomes))
