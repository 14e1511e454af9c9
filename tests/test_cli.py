"""Tests for the command-line interface."""

import json
import logging
import sys
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, call

import pytest
from typer.testing import CliRunner

from conftest import BASE_NS, HOUR_NS, write_file
from winadmin_tools import __version__, cli
from winadmin_tools.cli import app
from winadmin_tools.rsat import Capability, CapabilityClient, CapabilityError

runner = CliRunner()


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers added by commands so their streams can be closed."""
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()


class TestSyncTemplatesCommand:
    """Test the sync-templates command."""

    def test_sync_writes_report(self, temp_config_dir: Path, tmp_path: Path) -> None:
        """Test a successful run and its report file."""
        source = tmp_path / "PolicyDefinitions"
        store = tmp_path / "store"
        write_file(source / "a.admx", "a", BASE_NS + HOUR_NS)
        write_file(source / "en-US" / "a.adml", "a-en", BASE_NS)

        result = runner.invoke(
            app,
            [
                "sync-templates",
                "--source", str(source),
                "--dest", str(store),
                "--no-backup",
                "--config-dir", str(temp_config_dir),
            ],
        )

        assert result.exit_code == 0, result.output
        assert (store / "a.admx").read_text() == "a"
        reports = list((temp_config_dir / "logs").glob("template-sync_*.log"))
        assert len(reports) == 1
        assert "Updated: 2, Skipped: 0, Failed: 0" in reports[0].read_text(encoding="utf-8")

    def test_missing_source_exits_with_error(self, temp_config_dir: Path, tmp_path: Path) -> None:
        """Test that an unreadable source folder exits 1."""
        result = runner.invoke(
            app,
            [
                "sync-templates",
                "--source", str(tmp_path / "missing"),
                "--dest", str(tmp_path / "store"),
                "--no-backup",
                "--config-dir", str(temp_config_dir),
            ],
        )

        assert result.exit_code == 1


def test_version() -> None:
    """Test the version command."""
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


class TestSyncTemplatesExitCode:
    """Test sync-templates exit codes on per-file failures."""

    def test_failed_file_exits_one(self, temp_config_dir: Path, tmp_path: Path) -> None:
        """Test that a run with a failed file still reports and exits 1."""
        source = tmp_path / "PolicyDefinitions"
        store = tmp_path / "store"
        write_file(source / "a.admx", "a", BASE_NS)
        write_file(source / "b.admx", "b", BASE_NS)
        (store / "a.admx").mkdir(parents=True)

        result = runner.invoke(
            app,
            [
                "sync-templates",
                "--source", str(source),
                "--dest", str(store),
                "--no-backup",
                "--config-dir", str(temp_config_dir),
            ],
        )

        assert result.exit_code == 1
        assert (store / "b.admx").read_text() == "b"
        report = next((temp_config_dir / "logs").glob("template-sync_*.log")).read_text(encoding="utf-8")
        assert "Failed: a.admx" in report
        assert "Updated: 1, Skipped: 0, Failed: 1" in report


class FakeRegistry:
    """Registry with TLS 1.2 Server enabled and TLS 1.0 unreadable."""

    def key_exists(self, path: str) -> bool:
        if "TLS 1.0" in path:
            raise PermissionError("Access is denied")
        return path.endswith(r"TLS 1.2\Server")

    def get_value(self, path: str, name: str) -> Any | None:
        return {"Enabled": 1}.get(name)


@pytest.fixture
def fake_registry(monkeypatch: pytest.MonkeyPatch) -> None:
    """Swap the Windows registry for a fixed in-memory one."""
    monkeypatch.setattr("winadmin_tools.cli.WindowsRegistry", FakeRegistry)
    monkeypatch.setattr(cli.console, "width", 200)


class TestAuditSchannelCommand:
    """Test the audit-schannel command."""

    def test_table_output(self, fake_registry: None, temp_config_dir: Path) -> None:
        """Test the table including an error row."""
        result = runner.invoke(app, ["audit-schannel", "--config-dir", str(temp_config_dir)])

        assert result.exit_code == 0, result.output
        assert "Enabled" in result.stdout
        assert "Key not present" in result.stdout
        assert "Error: Access is denied" in result.stdout

    def test_json_output(self, fake_registry: None, temp_config_dir: Path) -> None:
        """Test machine-readable output."""
        result = runner.invoke(app, ["audit-schannel", "--json", "--config-dir", str(temp_config_dir)])

        assert result.exit_code == 0, result.output
        statuses = {(s["protocol"], s["role"]): s for s in json.loads(result.stdout)}
        assert len(statuses) == 12
        assert statuses[("TLS 1.2", "Server")]["state"] == "enabled"
        assert statuses[("TLS 1.2", "Client")]["state"] == "key_absent"
        assert statuses[("TLS 1.0", "Client")]["error"] == "Access is denied"


@pytest.fixture
def capability_client(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """A mocked capability client with two missing capabilities and one installed."""
    client = MagicMock(spec=CapabilityClient)
    client.list_capabilities.return_value = [
        Capability(Name="Rsat.A", State="NotPresent"),
        Capability(Name="Rsat.B", State="Installed"),
        Capability(Name="Rsat.C", State="NotPresent"),
    ]
    monkeypatch.setattr("winadmin_tools.cli.CapabilityClient", lambda runner=None: client)
    monkeypatch.setattr("winadmin_tools.cli.is_elevated", lambda: True)
    monkeypatch.setattr(cli.console, "width", 200)
    return client


class TestInstallRsatCommand:
    """Test the install-rsat command."""

    def test_refuses_without_elevation(
        self, capability_client: MagicMock, monkeypatch: pytest.MonkeyPatch, temp_config_dir: Path
    ) -> None:
        """Test that installs need administrator rights unless forced."""
        monkeypatch.setattr("winadmin_tools.cli.is_elevated", lambda: False)

        result = runner.invoke(app, ["install-rsat", "--config-dir", str(temp_config_dir)])

        assert result.exit_code == 1
        assert "Administrator rights are required" in result.stdout
        capability_client.list_capabilities.assert_not_called()

    def test_force_skips_elevation_check(
        self, capability_client: MagicMock, monkeypatch: pytest.MonkeyPatch, temp_config_dir: Path
    ) -> None:
        """Test that --force proceeds without administrator rights."""
        monkeypatch.setattr("winadmin_tools.cli.is_elevated", lambda: False)

        result = runner.invoke(app, ["install-rsat", "--force", "--all", "--config-dir", str(temp_config_dir)])

        assert result.exit_code == 0, result.output
        assert capability_client.install.call_count == 2

    def test_invalid_selection_prompts_again(self, capability_client: MagicMock, temp_config_dir: Path) -> None:
        """Test that an out-of-range entry is rejected and the user asked again."""
        result = runner.invoke(app, ["install-rsat", "--config-dir", str(temp_config_dir)], input="9\n2\n")

        assert result.exit_code == 0, result.output
        assert "out of range" in result.stdout
        assert capability_client.install.call_args_list == [call("Rsat.C")]

    def test_all_with_failure_exits_one(self, capability_client: MagicMock, temp_config_dir: Path) -> None:
        """Test that --all installs every missing capability and reports failures."""
        capability_client.install.side_effect = [None, CapabilityError("0x800f0954")]

        result = runner.invoke(app, ["install-rsat", "--all", "--config-dir", str(temp_config_dir)])

        assert result.exit_code == 1
        assert capability_client.install.call_args_list == [call("Rsat.A"), call("Rsat.C")]
        assert "0x800f0954" in result.stdout

    def test_nothing_to_install(self, capability_client: MagicMock, temp_config_dir: Path) -> None:
        """Test the message when every capability is already present."""
        capability_client.list_capabilities.return_value = [Capability(Name="Rsat.B", State="Installed")]

        result = runner.invoke(app, ["install-rsat", "--config-dir", str(temp_config_dir)])

        assert result.exit_code == 0
        assert "already installed" in result.stdout
        capability_client.install.assert_not_called()


class TestMain:
    """Test the console entry point."""

    def test_exit_code_passed_through(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a normal command exits 0."""
        monkeypatch.setattr(sys, "argv", ["winadmin-tools", "version"])

        with pytest.raises(SystemExit) as exc_info:
            cli.main()

        assert exc_info.value.code == 0

    def test_command_exit_code_passed_through(
        self, monkeypatch: pytest.MonkeyPatch, temp_config_dir: Path, tmp_path: Path
    ) -> None:
        """Test that a command's non-zero exit code reaches the process."""
        monkeypatch.setattr(
            sys,
            "argv",
            [
                "winadmin-tools", "sync-templates",
                "--source", str(tmp_path / "missing"),
                "--dest", str(tmp_path / "store"),
                "--no-backup",
                "--config-dir", str(temp_config_dir),
            ],
        )

        with pytest.raises(SystemExit) as exc_info:
            cli.main()

        assert exc_info.value.code == 1

    def test_keyboard_interrupt_exits_zero(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that Ctrl-C prints a notice and exits 0."""
        monkeypatch.setattr(sys, "argv", ["winadmin-tools", "version"])
        printed = MagicMock(side_effect=[KeyboardInterrupt(), None])
        monkeypatch.setattr(cli.console, "print", printed)

        with pytest.raises(SystemExit) as exc_info:
            cli.main()

        assert exc_info.value.code == 0
        assert "Interrupted" in printed.call_args.args[0]
