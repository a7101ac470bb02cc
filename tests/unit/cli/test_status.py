"""Unit tests for the status command."""

import json
import os
from collections.abc import Callable
from pathlib import Path

from archdiff.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()

WriteFile = Callable[..., Path]
AddPackage = Callable[..., Path]


class TestStatusText:
    """Tests for the plain-text report."""

    def test_clean_system_prints_nothing(self, audit_args: list[str]) -> None:
        """An empty root with an empty database has no drift."""
        result = runner.invoke(app, ["status", *audit_args])

        assert result.exit_code == 0
        assert result.stdout == ""

    def test_reports_sorted_markers(
        self,
        audit_args: list[str],
        live_root: Path,
        mirror: Path,
        write_file: WriteFile,
        add_package: AddPackage,
    ) -> None:
        """Every kind of drift is printed, sorted by path."""
        write_file(live_root, "etc/stray")
        write_file(live_root, "etc/baz.conf", "edited\n")
        write_file(live_root, "etc/qux.conf", "live\n")
        write_file(mirror, "etc/qux.conf", "mirror\n")
        add_package(
            "demo",
            files=["etc/", "etc/bar.conf", "etc/baz.conf", "etc/qux.conf"],
            backups={"etc/baz.conf": "abc123", "etc/qux.conf": "abc123"},
        )

        result = runner.invoke(app, ["status", *audit_args])

        assert result.exit_code == 0
        assert result.stdout.splitlines() == [
            f"D {live_root}/etc/bar.conf",
            f"B {live_root}/etc/baz.conf",
            f"R {live_root}/etc/qux.conf",
            f"? {live_root}/etc/stray",
        ]

    def test_ignore_rules_applied(
        self,
        audit_args: list[str],
        live_root: Path,
        ignore_dir: Path,
        write_file: WriteFile,
        add_package: AddPackage,
    ) -> None:
        """Rules from the ignore directory hide matching paths."""
        write_file(live_root, "var/log/pacman.log")
        write_file(ignore_dir, "base", "# runtime state\nvar/log/\nvar/cache/*\n")
        add_package("cache", files=["var/cache/gone"])

        result = runner.invoke(app, ["status", *audit_args])

        assert result.exit_code == 0
        assert result.stdout == ""


class TestStatusJson:
    """Tests for --format json."""

    def test_json_report(
        self,
        audit_args: list[str],
        live_root: Path,
        write_file: WriteFile,
        add_package: AddPackage,
    ) -> None:
        """JSON output carries a summary and absolute paths."""
        write_file(live_root, "etc/stray")
        add_package("demo", files=["etc/gone"])

        result = runner.invoke(app, ["status", *audit_args, "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["root"] == f"{live_root}/"
        assert data["summary"]["untracked"] == 1
        assert data["summary"]["deleted"] == 1
        assert data["summary"]["total"] == 2
        assert [e["marker"] for e in data["entries"]] == ["D", "?"]
        assert data["entries"][1]["path"] == f"{live_root}/etc/stray"


class TestStatusErrors:
    """Tests for fatal startup errors."""

    def test_missing_database(self, audit_args: list[str], tmp_path: Path) -> None:
        """An unreadable package database exits with code 1."""
        args = [*audit_args, "--dbpath", str(tmp_path / "nowhere")]

        result = runner.invoke(app, ["status", *args])

        assert result.exit_code == 1
        assert "Failed to load package database" in result.output

    def test_missing_ignore_directory(self, audit_args: list[str], tmp_path: Path) -> None:
        """A missing ignore directory exits with code 1."""
        args = [*audit_args, "--ignore", str(tmp_path / "nowhere")]

        result = runner.invoke(app, ["status", *args])

        assert result.exit_code == 1
        assert "Failed to load ignore rules" in result.output

    def test_invalid_jobs(self, audit_args: list[str]) -> None:
        """An out-of-range worker count exits with code 1."""
        result = runner.invoke(app, ["status", *audit_args, "--jobs", "0"])

        assert result.exit_code == 1
        assert "Failed to load configuration" in result.output

    def test_invalid_config_file(self, audit_args: list[str], tmp_path: Path) -> None:
        """A broken config file exits with code 1."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("workers = [\n")

        result = runner.invoke(app, ["--config", str(config_file), "status", *audit_args])

        assert result.exit_code == 1
        assert "Failed to load configuration" in result.output


class TestStatusConfig:
    """Tests for settings taken from the config file."""

    def test_root_from_config_file(
        self,
        tmp_path: Path,
        live_root: Path,
        dbpath: Path,
        mirror: Path,
        ignore_dir: Path,
        write_file: WriteFile,
    ) -> None:
        """Paths in the config file are used when no option overrides them."""
        write_file(live_root, "stray")
        config_file = tmp_path / "config.toml"
        config_file.write_text(
            f'root = "{live_root}"\n'
            f'dbpath = "{dbpath}"\n'
            f'repo = "{mirror}"\n'
            f'ignore_dir = "{ignore_dir}"\n'
        )

        result = runner.invoke(app, ["--config", str(config_file), "status"])

        assert result.exit_code == 0
        assert result.stdout == f"? {live_root}/stray\n"


class TestStatusRawFilenames:
    """Tests for file names that are not valid UTF-8."""

    def test_undecodable_name_written_as_raw_bytes(
        self, audit_args: list[str], live_root: Path
    ) -> None:
        """A Latin-1 file name is reported with its original bytes and exit code 0."""
        etc = os.fsencode(live_root) + b"/etc"
        os.mkdir(etc)
        with open(etc + b"/caf\xe9.conf", "wb"):
            pass

        result = runner.invoke(app, ["status", *audit_args])

        assert result.exit_code == 0
        assert result.stdout_bytes == b"? " + etc + b"/caf\xe9.conf\n"
