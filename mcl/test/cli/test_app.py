from __future__ import annotations

from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from mcl import __version__
from mcl.cli.app import app
from mcl.cli.context import CLIContext, build_context
from mcl.core.config import Settings
from mcl.output.console import MockConsole
from mcl.platform.detection import Platform

runner = CliRunner()


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == __version__


def test_help_lists_commands() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "install" in result.stdout
    assert "versions" in result.stdout


def test_install_help() -> None:
    result = runner.invoke(app, ["install", "--help"])
    assert result.exit_code == 0
    assert "Install a release" in result.stdout


def test_install_exclusive_channels(monkeypatch: pytest.MonkeyPatch, settings: Settings) -> None:
    import mcl.cli.commands.install as install_cmd

    console = MockConsole()
    monkeypatch.setattr(
        install_cmd,
        "build_context",
        lambda **_: CLIContext(platform=Platform.LINUX, settings=settings, console=console),
    )

    result = runner.invoke(app, ["install", "--latest", "--snapshot"])

    assert result.exit_code == 1
    assert console.find("mutually exclusive")


def test_versions_command(monkeypatch: pytest.MonkeyPatch, release, settings: Settings) -> None:
    import mcl.cli.commands.versions as versions_cmd

    console = MockConsole()
    monkeypatch.setattr(
        versions_cmd,
        "build_context",
        lambda **_: CLIContext(platform=Platform.LINUX, settings=settings, console=console),
    )
    monkeypatch.setattr(versions_cmd, "RealHttpClient", lambda **_: release.http)

    result = runner.invoke(app, ["versions", "--type", "release"])

    assert result.exit_code == 0
    assert len(console.outputs) == 1
    assert console.messages[0].startswith("1.16.1")
    assert console.messages[0].endswith("(latest release)")


def test_versions_no_match(monkeypatch: pytest.MonkeyPatch, release, settings: Settings) -> None:
    import mcl.cli.commands.versions as versions_cmd

    console = MockConsole()
    monkeypatch.setattr(
        versions_cmd,
        "build_context",
        lambda **_: CLIContext(platform=Platform.LINUX, settings=settings, console=console),
    )
    monkeypatch.setattr(versions_cmd, "RealHttpClient", lambda **_: release.http)

    result = runner.invoke(app, ["versions", "--type", "old_alpha"])

    assert result.exit_code == 0
    assert console.find("no matching versions")


def test_versions_index_failure(
    monkeypatch: pytest.MonkeyPatch, release, settings: Settings
) -> None:
    import mcl.cli.commands.versions as versions_cmd

    console = MockConsole()
    monkeypatch.setattr(
        versions_cmd,
        "build_context",
        lambda **_: CLIContext(platform=Platform.LINUX, settings=settings, console=console),
    )
    release.http.set_bytes(release.index_url, b"not json")
    monkeypatch.setattr(versions_cmd, "RealHttpClient", lambda **_: release.http)

    result = runner.invoke(app, ["versions"])

    assert result.exit_code == 6
    assert console.has_error()


class TestBuildContext:
    """Tests for build_context."""

    def test_missing_explicit_config(self, tmp_path: Path) -> None:
        with pytest.raises(typer.Exit) as exc:
            build_context(config=tmp_path / "missing.toml")
        assert exc.value.exit_code == 1

    def test_invalid_config(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("[fetch]\nworkers = 0\n", encoding="utf-8")
        with pytest.raises(typer.Exit) as exc:
            build_context(config=path)
        assert exc.value.exit_code == 1

    def test_loads_explicit_config(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[launch]\njava = "java21"\n', encoding="utf-8")
        ctx = build_context(config=path)
        assert ctx.settings.launch.java == "java21"

    def test_default_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        import mcl.cli.context as context

        monkeypatch.setattr(context, "default_settings_path", lambda: tmp_path / "none.toml")
        assert build_context().settings == Settings()
