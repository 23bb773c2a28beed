"""
Tests for main.py — the CLI wiring, driven through click's CliRunner.

The real HostEnvironment is replaced by a FakeHost and the shared
console by a capturing one, so nothing here touches the machine.
"""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from conftest import FakeHost, make_console

from coursecheck.main import cli


WSL_PROC = "Linux version 5.15.153.1-microsoft-standard-WSL2"


@pytest.fixture
def run_cli(tmp_path):
    """run_cli(host, *args, input=None) → (exit_code, console output)."""
    config = tmp_path / "config.toml"

    def _run(host, *args, input=None):
        con, buf = make_console()
        with patch("coursecheck.main.console", con), \
             patch("coursecheck.main.HostEnvironment", lambda console, verbose: host):
            result = CliRunner().invoke(cli, ["--config", str(config), *args], input=input)
        if result.exception and not isinstance(result.exception, SystemExit):
            raise result.exception
        return result.exit_code, buf.getvalue()

    _run.config = config
    return _run


def _mac_all_installed():
    return FakeHost(
        kernel="Darwin",
        home="/Users/student",
        executables={
            "g++": "/usr/bin/g++", "brew": "/opt/homebrew/bin/brew",
            "tree": "/opt/homebrew/bin/tree", "wget": "/opt/homebrew/bin/wget",
            "git": "/usr/bin/git", "code": "/usr/local/bin/code",
        },
        commands={("xcode-select", "-p"): (0, "/Library/Developer/CommandLineTools\n", "")},
    )


class TestOptions:
    def test_yes_and_check_only_conflict(self, run_cli):
        code, out = run_cli(FakeHost(), "--yes", "--check-only")
        assert code == 1
        assert "cannot be combined" in out

    def test_list_checks(self, run_cli):
        code, out = run_cli(FakeHost(), "--platform", "wsl", "--list-checks")
        assert code == 0
        assert "WSL checklist" in out
        assert "wsl_version" in out
        assert "vscode_extensions" in out
        assert "Makes sure you are logged in as a regular user, not root." in out

    def test_list_checks_honours_skip(self, run_cli):
        run_cli.config.write_text('skip = ["wsl_version"]\n')
        _, out = run_cli(FakeHost(), "--platform", "wsl", "--list-checks")
        assert "wsl_version" not in out
        assert "wsl_user" in out

    def test_auto_detects_macos(self, run_cli):
        _, out = run_cli(FakeHost(kernel="Darwin"), "--list-checks")
        assert "macOS checklist" in out

    def test_auto_detects_wsl(self, run_cli):
        _, out = run_cli(FakeHost(proc_version=WSL_PROC), "--list-checks")
        assert "WSL checklist" in out


class TestRun:
    def test_all_clear(self, run_cli):
        code, out = run_cli(_mac_all_installed())
        assert code == 0
        assert "macOS Setup Verification Tool" in out
        assert "All checks passed! Your Mac is ready for EECS 280." in out
        assert "Questions? Visit:" in out

    def test_check_only_reports_without_running_anything(self, run_cli):
        host = FakeHost(proc_version=WSL_PROC, executables={"apt": "/usr/bin/apt"})
        code, out = run_cli(host, "--check-only")
        assert code == 0
        assert host.streamed == []
        assert "issue(s) found" in out
        assert "sudo apt install -y" in out

    def test_yes_applies_fixes(self, run_cli):
        host = FakeHost(proc_version=WSL_PROC, executables={"apt": "/usr/bin/apt"})
        code, out = run_cli(host, "--yes")
        assert code == 0
        assert ("sudo", "apt", "update") in host.streamed
        assert "Fixes were applied." in out

    def test_gate_decline_exits_cleanly(self, run_cli):
        host = FakeHost(kernel="Linux")
        code, out = run_cli(host, "--platform", "wsl", input="n\n")
        assert code == 0
        assert "Exiting." in out
        assert "Questions? Visit:" not in out
        assert host.captured == []

    def test_closed_stdin_is_an_error(self, run_cli):
        code, out = run_cli(FakeHost(kernel="Linux"), "--platform", "wsl", input="")
        assert code == 1
        assert "No interactive input available" in out

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "coursecheck" in result.output
