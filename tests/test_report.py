"""
Tests for ui/report.py, ui/header.py and ui/narrator.py.

Covers:
  - closing summary: one message per category
  - banner: title, version subtitle, links
  - narrator: markers and note layout
"""

from conftest import make_console

from coursecheck.checks.base import CheckResult, command, info, plain, warn
from coursecheck.checks.macos import VARIANT as MACOS
from coursecheck.checks.wsl import VARIANT as WSL
from coursecheck.runner import RunSummary
from coursecheck.ui.header import print_header
from coursecheck.ui.narrator import ChecklistNarrator, format_note, format_result
from coursecheck.ui.report import print_summary


def _result(**kwargs) -> CheckResult:
    """Build a minimal CheckResult; kwargs override any field."""
    defaults = dict(id="tree", name="tree", status="pass", message="tree is installed.")
    defaults.update(kwargs)
    return CheckResult(**defaults)


def _summary(issues, fixes) -> str:
    con, buf = make_console()
    print_summary(con, RunSummary(issues_found=issues, fixes_applied=fixes), MACOS)
    return buf.getvalue()


# ── Summary ───────────────────────────────────────────────────────────────────

class TestSummary:
    def test_all_clear_uses_variant_message(self):
        out = _summary(0, 0)
        assert "All checks passed! Your Mac is ready for EECS 280." in out

    def test_wsl_ready_message(self):
        con, buf = make_console()
        print_summary(con, RunSummary(), WSL)
        assert "Your WSL environment is ready for EECS 280." in buf.getvalue()

    def test_fixes_applied_asks_for_rerun(self):
        out = _summary(3, 2)
        assert "Fixes were applied." in out
        assert "close and reopen your terminal" in out
        assert "issue(s) found" not in out

    def test_issues_remain_counts_issues(self):
        out = _summary(2, 0)
        assert "2 issue(s) found." in out
        assert "Follow the instructions above" in out

    def test_help_link_always_shown(self):
        for issues, fixes in ((0, 0), (3, 2), (2, 0)):
            assert "Questions? Visit: https://eecs280staff.github.io/tutorials/" in _summary(issues, fixes)


# ── Header ────────────────────────────────────────────────────────────────────

class TestHeader:
    def test_title_and_links(self):
        con, buf = make_console()
        print_header(con, WSL)
        out = buf.getvalue()
        assert "EECS 280 — WSL Setup Verification Tool" in out
        assert "coursecheck" in out
        assert "https://eecs280staff.github.io/tutorials/setup_wsl.html" in out
        assert "https://eecs280staff.github.io/tutorials/setup_vscode_wsl.html" in out


# ── Narrator ──────────────────────────────────────────────────────────────────

class TestNarrator:
    def test_status_markers(self):
        assert format_result(_result()).plain == "  ✔ tree is installed."
        assert format_result(_result(status="fail", message="x")).plain == "  ✘ x"
        assert format_result(_result(status="skip", message="x")).plain == "  – x"

    def test_note_layout(self):
        assert format_note(info("hint")).plain == "  ℹ hint"
        assert format_note(warn("careful")).plain == "  ⚠ careful"
        assert format_note(command("brew install tree")).plain == "      brew install tree"
        assert format_note(plain("and select it.")).plain == "      and select it."

    def test_markup_in_messages_is_literal(self):
        con, buf = make_console()
        ChecklistNarrator(con, MACOS.sections).print_result(
            _result(status="fail", message="[bold]not markup[/bold]")
        )
        assert "[bold]not markup[/bold]" in buf.getvalue()

    def test_section_header(self):
        con, buf = make_console()
        ChecklistNarrator(con, MACOS.sections).print_section("utilities")
        out = buf.getvalue()
        assert "[3/4] CLI Utilities (tree, wget, git)" in out
        assert "Small command-line programs" in out
