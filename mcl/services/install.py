"""Install pipeline.

    version index -> version ref -> version detail
        -> libraries (+ platform variants) -> client jar
        -> asset index document -> resource blobs
        -> classpath -> launch script

Stages run in that order and the first failure ends the run as a
``PipelineError`` naming the stage. Files that already exist are skipped, so
re-running after a failure resumes where the previous run stopped.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from mcl.core.config import LaunchConfig, Settings
from mcl.core.failures import InstallFailure, PipelineError
from mcl.core.result import Err, Ok, Result
from mcl.install.assets import asset_index_target, resolve_assets
from mcl.install.fetcher import ContentFetcher, FetchOutcome, FetchStatus, FetchSummary, FetchTarget
from mcl.install.layout import InstallLayout
from mcl.install.libraries import resolve_libraries
from mcl.launch.classpath import build_classpath
from mcl.launch.command import (
    LaunchCommand,
    LaunchParams,
    compose_command,
    render_script,
    write_script,
)
from mcl.manifest.models import VersionDetail
from mcl.manifest.resolver import (
    Channel,
    ManifestResolver,
    find_version,
    latest_version_id,
    read_asset_index,
)
from mcl.net.http import HttpClient, RealHttpClient
from mcl.output.console import ConsoleProtocol, Style
from mcl.platform.detection import Platform

__all__ = ["InstallService", "InstallReport", "StageSummary"]

STAGE_INDEX = "version index"
STAGE_VERSION = "version"
STAGE_DETAILS = "version details"
STAGE_LIBRARIES = "libraries"
STAGE_CLIENT = "client"
STAGE_ASSET_INDEX = "asset index"
STAGE_ASSETS = "assets"
STAGE_CLASSPATH = "classpath"
STAGE_SCRIPT = "launch script"


@dataclass(frozen=True, slots=True)
class StageSummary:
    stage: str
    summary: FetchSummary


@dataclass(frozen=True, slots=True)
class InstallReport:
    """What a successful run produced."""

    version_id: str
    layout: InstallLayout
    classpath: str
    command: LaunchCommand
    script_path: Path
    stages: tuple[StageSummary, ...]
    elapsed: float

    @property
    def downloaded(self) -> int:
        return sum(s.summary.downloaded for s in self.stages)

    @property
    def bytes(self) -> int:
        return sum(s.summary.bytes for s in self.stages)


def _stage[T](stage: str, result: Result[T, InstallFailure]) -> Result[T, PipelineError]:
    return result.map_err(lambda cause: PipelineError(stage=stage, cause=cause))


def _human_size(size: int) -> str:
    value = float(size)
    for unit in ("B", "KiB", "MiB"):
        if value < 1024:
            return f"{value:.0f} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GiB"


class InstallService:
    """Runs the install pipeline for one configuration at a time.

    Nothing is kept between runs except the HTTP client, so one service can
    install several versions or roots in the same process.
    """

    def __init__(
        self,
        *,
        settings: Settings,
        platform: Platform,
        console: ConsoleProtocol,
        http: HttpClient | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._settings = settings
        self._platform = platform
        self._console = console
        self._http = http or RealHttpClient(
            timeout=settings.http.timeout,
            user_agent=settings.http.user_agent,
        )
        self._clock = clock

    def install(
        self,
        config: LaunchConfig,
        *,
        channel: Channel | None = None,
        output_dir: Path | None = None,
        workers: int | None = None,
        verify: bool | None = None,
    ) -> Result[InstallReport, PipelineError]:
        """Install a release and write its launch script.

        Args:
            config: What to install and how to launch it
            channel: Install the latest release/snapshot instead of
                ``config.version_id``
            output_dir: Directory for the launch script (default: cwd)
            workers: Override ``settings.fetch.workers``
            verify: Override ``settings.fetch.verify_hashes``

        Returns:
            Ok(InstallReport), or Err(PipelineError) for the first failing stage
        """
        started = self._clock()
        layout = InstallLayout.at(config.install_path)
        resolver = ManifestResolver(self._http)
        fetcher = ContentFetcher(
            self._http,
            verify=self._settings.fetch.verify_hashes if verify is None else verify,
        )
        pool_size = self._settings.fetch.workers if workers is None else workers

        detail = self._resolve(resolver, config.version_id, channel)
        if isinstance(detail, Err):
            return detail
        version = detail.value
        self._console.header(f"Installing {version.id} into {layout.root}")

        stages: list[StageSummary] = []

        lib_targets = _stage(
            STAGE_LIBRARIES, resolve_libraries(version.libraries, self._platform, layout)
        )
        if isinstance(lib_targets, Err):
            return lib_targets
        fetched = self._fetch_stage(fetcher, STAGE_LIBRARIES, lib_targets.value, pool_size)
        if isinstance(fetched, Err):
            return fetched
        stages.append(fetched.value)

        client_target = FetchTarget(
            url=version.client.url,
            dest=layout.client_path(version.id),
            sha1=version.client.sha1,
            label=f"{version.id} client",
        )
        fetched = self._fetch_stage(fetcher, STAGE_CLIENT, [client_target], 1)
        if isinstance(fetched, Err):
            return fetched
        stages.append(fetched.value)

        index_target = asset_index_target(version.asset_index, layout)
        fetched = self._fetch_stage(fetcher, STAGE_ASSET_INDEX, [index_target], 1)
        if isinstance(fetched, Err):
            return fetched
        stages.append(fetched.value)

        index = _stage(STAGE_ASSET_INDEX, read_asset_index(index_target.dest))
        if isinstance(index, Err):
            return index
        asset_targets = resolve_assets(
            version.asset_index,
            index.value,
            layout,
            self._settings.sources.resources,
            include_index=False,
        )
        fetched = self._fetch_stage(fetcher, STAGE_ASSETS, asset_targets, pool_size)
        if isinstance(fetched, Err):
            return fetched
        stages.append(fetched.value)

        classpath = _stage(
            STAGE_CLASSPATH,
            build_classpath(
                self._platform,
                [t.dest for t in lib_targets.value],
                client_target.dest,
            ),
        )
        if isinstance(classpath, Err):
            return classpath

        command = compose_command(
            classpath=classpath.value,
            main_class=version.main_class,
            layout=layout,
            asset_index_id=version.asset_index.id,
            version_id=version.id,
            params=LaunchParams(
                username=config.username,
                access_token=config.access_token,
                initial_heap_mb=config.initial_heap_mb,
                max_heap_mb=config.max_heap_mb,
                java=self._settings.launch.java,
            ),
        )
        script = _stage(STAGE_SCRIPT, render_script(command, self._platform))
        if isinstance(script, Err):
            return script
        script_path = _stage(
            STAGE_SCRIPT, write_script(script.value, output_dir or Path.cwd())
        )
        if isinstance(script_path, Err):
            return script_path

        return Ok(
            InstallReport(
                version_id=version.id,
                layout=layout,
                classpath=classpath.value,
                command=command,
                script_path=script_path.value,
                stages=tuple(stages),
                elapsed=self._clock() - started,
            )
        )

    def _resolve(
        self,
        resolver: ManifestResolver,
        version_id: str,
        channel: Channel | None,
    ) -> Result[VersionDetail, PipelineError]:
        index_url = self._settings.sources.version_index
        self._console.debug(f"version index: {index_url}")
        index = _stage(STAGE_INDEX, resolver.fetch_index(index_url))
        if isinstance(index, Err):
            return index

        if channel is not None:
            latest = _stage(STAGE_VERSION, latest_version_id(index.value, channel))
            if isinstance(latest, Err):
                return latest
            version_id = latest.value

        ref = _stage(STAGE_VERSION, find_version(index.value, version_id))
        if isinstance(ref, Err):
            return ref
        return _stage(STAGE_DETAILS, resolver.fetch_detail(ref.value))

    def _fetch_stage(
        self,
        fetcher: ContentFetcher,
        stage: str,
        targets: list[FetchTarget],
        workers: int,
    ) -> Result[StageSummary, PipelineError]:
        def report(outcome: FetchOutcome) -> None:
            if outcome.status == FetchStatus.DOWNLOADED:
                size = _human_size(outcome.size)
                self._console.debug(f"  {outcome.target.label} ({size}) -> {outcome.target.dest}")

        summary = _stage(stage, fetcher.fetch_all(targets, workers=workers, on_outcome=report))
        if isinstance(summary, Err):
            return summary

        s = summary.value
        self._console.print(
            f"{stage}: {s.downloaded} downloaded ({_human_size(s.bytes)}), {s.skipped} up to date",
            Style.DIM,
        )
        return Ok(StageSummary(stage=stage, summary=s))
