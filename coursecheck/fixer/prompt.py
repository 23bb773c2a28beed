"""
Yes/no prompting and the consent gate for automatic fixes.

Every automatic fix is offered through offer_fix():

  1. show the exact command(s) that will run
  2. ask once — only an answer starting with y/Y counts as yes
  3. run the action; a failure is reported, never raised

Prompters:
  ConsolePrompter — reads one line from stdin per question
  FixedPrompter   — answers every question the same way (--yes)
"""

from __future__ import annotations

from typing import Callable, Protocol

from rich.console import Console
from rich.markup import escape

from coursecheck.checks.base import Note, RemediationOutcome, command, info, warn
from coursecheck.ui.narrator import print_note


class PromptUnavailable(Exception):
    """Raised when a prompt needs an answer but stdin is closed."""


# ── Prompters ─────────────────────────────────────────────────────────────────

class Prompter(Protocol):
    def confirm(self, message: str) -> bool:
        ...


def is_affirmative(answer: str) -> bool:
    return answer.strip()[:1] in ("y", "Y")


class ConsolePrompter:
    """Ask on the shared console; read one line from standard input."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def confirm(self, message: str) -> bool:
        self.console.print()
        try:
            answer = self.console.input(escape(f"    {message} [y/n] "))
        except EOFError:
            raise PromptUnavailable(
                f"No interactive input available to answer: {message}"
            ) from None
        return is_affirmative(answer)


class FixedPrompter:
    """Answer every question with the same value, echoing it for the record."""

    def __init__(self, console: Console, answer: bool) -> None:
        self.console = console
        self.answer = answer

    def confirm(self, message: str) -> bool:
        reply = "y" if self.answer else "n"
        self.console.print()
        self.console.print(f"    {message} [y/n] {reply}", highlight=False, markup=False)
        return self.answer


# ── Consent gate ──────────────────────────────────────────────────────────────

def offer_fix(
    ctx,
    label: str,
    commands: str | list[str],
    action: Callable[[], RemediationOutcome],
    intro: str = "Fix: Run the following command:",
) -> RemediationOutcome:
    """
    Show `commands`, ask for consent, then run `action`.

    Args:
        ctx:      RunContext for this run.
        label:    What gets installed, as in "install <label> for you?".
        commands: The exact command line(s) the action will run.
        action:   Performs the fix; returns the outcome.
        intro:    Info line printed above the command(s).

    Returns Declined without side effects when the user says no (or when
    the run is --check-only), Failed with a reason when the action
    fails or raises, otherwise whatever the action returned.
    """
    console = ctx.console
    lines = [commands] if isinstance(commands, str) else list(commands)

    console.print()
    print_note(console, info(intro))
    for line in lines:
        print_note(console, command(line))

    if not ctx.allow_fixes:
        return RemediationOutcome.declined()

    if not ctx.prompter.confirm(f"Would you like me to install {label} for you?"):
        print_note(
            console,
            info(f"Skipping {label} installation. You can install it manually later."),
        )
        return RemediationOutcome.declined()

    try:
        outcome = action()
    except (PromptUnavailable, KeyboardInterrupt):
        raise
    except Exception as e:
        outcome = RemediationOutcome.failed(str(e))

    if outcome.status == "failed":
        _report_failure(console, outcome, lines)
    return outcome


def _report_failure(console: Console, outcome: RemediationOutcome, lines: list[str]) -> None:
    notes: list[Note] = [warn(f"The fix did not complete: {outcome.reason}")]
    notes.append(info("You can run it yourself later:"))
    notes.extend(command(line) for line in lines)
    for note in notes:
        print_note(console, note)
