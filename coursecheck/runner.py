"""
Checklist runner — one sequential pass over the checks.

  not_started → running → summarized → done

Each check is probed in registration order. Every failed result is one
issue. Failures that name packages are collected into the section's
PackageBatch and installed with a single prompt when the section ends;
other failures go to the check's own remediate(). Each applied fix is
one fix. The counters live in an immutable RunSummary that the loop
threads through and returns.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

from coursecheck.checks.base import (
    BaseCheck,
    CheckResult,
    RemediationOutcome,
    Variant,
    command,
    info,
    success,
    warn,
)
from coursecheck.context import RunContext
from coursecheck.fixer.prompt import offer_fix
from coursecheck.ui.narrator import ChecklistNarrator, print_note


SummaryCategory = Literal["all_clear", "fixes_applied", "issues_remain"]

RunState = Literal["not_started", "running", "summarized", "done"]


# ── Run summary ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RunSummary:
    issues_found: int = 0
    fixes_applied: int = 0
    results: tuple[CheckResult, ...] = ()
    outcomes: tuple[tuple[str, RemediationOutcome], ...] = ()

    def record_result(self, result: CheckResult) -> "RunSummary":
        return replace(
            self,
            issues_found=self.issues_found + (1 if result.failed else 0),
            results=self.results + (result,),
        )

    def record_outcome(self, key: str, outcome: RemediationOutcome | None) -> "RunSummary":
        if outcome is None:
            return self
        return replace(
            self,
            fixes_applied=self.fixes_applied + (1 if outcome.was_applied else 0),
            outcomes=self.outcomes + ((key, outcome),),
        )

    @property
    def category(self) -> SummaryCategory:
        return summary_category(self.issues_found, self.fixes_applied)


def summary_category(issues_found: int, fixes_applied: int) -> SummaryCategory:
    """
    Pick the closing message.

    Any applied fix selects "fixes_applied" even if other issues are
    still open; the re-run it asks for shows what is left.
    """
    if issues_found == 0:
        return "all_clear"
    if fixes_applied > 0:
        return "fixes_applied"
    return "issues_remain"


# ── Package batch ─────────────────────────────────────────────────────────────

class PackageBatch:
    """Ordered set of package names destined for one installer call."""

    def __init__(self) -> None:
        self._names: dict[str, None] = {}

    def add(self, *names: str) -> None:
        for name in names:
            self._names.setdefault(name, None)

    def clear(self) -> None:
        self._names.clear()

    @property
    def names(self) -> list[str]:
        return list(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __bool__(self) -> bool:
        return bool(self._names)


# ── Runner ────────────────────────────────────────────────────────────────────

class ChecklistRunner:
    """Runs one variant's checks against a host and summarises the result."""

    def __init__(
        self,
        variant: Variant,
        checks: list[BaseCheck],
        ctx: RunContext,
    ) -> None:
        self.variant = variant
        self.checks = checks
        self.ctx = ctx
        self.narrator = ChecklistNarrator(ctx.console, variant.sections)
        self.state: RunState = "not_started"

    # ── Public API ────────────────────────────────────────────────────────────

    def platform_confirmed(self) -> bool:
        """
        Preflight gate: True if the host looks like this variant's platform
        or the user chooses to continue anyway.
        """
        if self.variant.matches(self.ctx.host):
            return True

        for note in self.variant.mismatch_notes(self.ctx.host):
            print_note(self.ctx.console, note)
        if self.ctx.prompter.confirm("Continue anyway?"):
            self.ctx.console.print()
            return True

        self.ctx.console.print()
        print_note(self.ctx.console, info("Exiting."))
        return False

    def run(self) -> RunSummary | None:
        """
        Run the platform gate then every check in order.

        Returns the final RunSummary, or None when the user stopped at
        the platform gate (no checks run, nothing to summarise).
        """
        if not self.platform_confirmed():
            self.state = "done"
            return None

        self.state = "running"
        summary = RunSummary()
        batch = PackageBatch()
        current_section: str | None = None

        for check in self.checks:
            if check.section != current_section:
                if current_section is not None:
                    summary = self._flush_batch(summary, batch, current_section)
                    self.narrator.end_section()
                self.narrator.print_section(check.section)
                current_section = check.section

            summary = self._evaluate(check, summary, batch)

        if current_section is not None:
            summary = self._flush_batch(summary, batch, current_section)
            self.narrator.end_section()

        self.state = "summarized"
        return summary

    def finish(self) -> None:
        self.state = "done"

    # ── Internal ──────────────────────────────────────────────────────────────

    def _evaluate(
        self,
        check: BaseCheck,
        summary: RunSummary,
        batch: PackageBatch,
    ) -> RunSummary:
        results = check.execute(self.ctx.host)
        for result in results:
            self.narrator.print_result(result)
            summary = summary.record_result(result)

        failed = [r for r in results if r.failed]
        if not failed:
            return summary

        batched = [r for r in failed if r.packages]
        for result in batched:
            batch.add(*result.packages)

        rest = [r for r in failed if not r.packages]
        if rest:
            outcome = check.remediate(self.ctx, rest)
            summary = summary.record_outcome(check.id, outcome)

        return summary

    def _flush_batch(
        self,
        summary: RunSummary,
        batch: PackageBatch,
        section: str,
    ) -> RunSummary:
        """Offer one install for everything collected in `section`."""
        if not batch:
            return summary

        names = batch.names
        batch.clear()
        installer = self.ctx.installer
        console = self.ctx.console
        cmd = installer.install_command(names)

        if not installer.available():
            console.print()
            print_note(console, info(f"Fix: Install missing tools with {installer.name}:"))
            print_note(console, command(cmd))
            console.print()
            print_note(
                console,
                warn(f"{installer.name} is not available yet, so these can't be auto-installed."),
            )
            print_note(
                console,
                info(f"Please fix {installer.name} first (see above), then re-run this script."),
            )
            return summary

        pkg_list = " ".join(names)

        def install() -> RemediationOutcome:
            print_note(console, info(f"Installing {pkg_list} via {installer.name}..."))
            outcome = installer.install_packages(names)
            if outcome.was_applied:
                print_note(console, success(f"Installed: {pkg_list}"))
            return outcome

        outcome = offer_fix(
            self.ctx,
            pkg_list,
            cmd,
            install,
            intro=f"Fix: Install missing tools with {installer.name}:",
        )
        return summary.record_outcome(f"batch:{section}", outcome)

