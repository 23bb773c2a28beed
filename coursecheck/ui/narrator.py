"""
ChecklistNarrator — line-oriented report printed while checks run.

Layout:

  [3/4] CLI Utilities (tree, wget, git)
        Small command-line programs used throughout the course for
        viewing files, downloading content, and version control.

    ✔ tree is installed. (Displays directory structures ...)
    ✘ wget is NOT installed.
    ℹ wget is used to download starter files and project resources.

Everything the run prints goes through print_note()/print_result() so
markers, indentation and colours stay consistent.
"""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

from coursecheck.checks.base import CheckResult, Note, Section
from coursecheck.ui.theme import (
    COLOR_DIM,
    NOTE_ICONS,
    STATUS_ICONS,
    STATUS_STYLES,
    STYLE_COMMAND,
)


class ChecklistNarrator:
    """Prints section headers and results in registration order."""

    def __init__(self, console: Console, sections: tuple[Section, ...]) -> None:
        self.console = console
        self.sections = sections
        self._index = {s.key: i for i, s in enumerate(sections, 1)}

    def print_section(self, key: str) -> None:
        """'[i/N] Title' followed by the dim description lines."""
        section = next((s for s in self.sections if s.key == key), None)
        title = section.title if section else key
        idx = self._index.get(key)

        header = Text()
        if idx is not None:
            header.append(f"[{idx}/{len(self.sections)}] ", style="bold")
        header.append(title, style="bold")
        self.console.print(header)
        if section:
            for line in section.description:
                self.console.print(f"      {line}", style=COLOR_DIM, highlight=False, markup=False)
        self.console.print()

    def print_result(self, result: CheckResult) -> None:
        self.console.print(format_result(result))
        for note in result.notes:
            print_note(self.console, note)

    def end_section(self) -> None:
        self.console.print()


# ── Module-level helpers ──────────────────────────────────────────────────────

def format_result(result: CheckResult) -> Text:
    """One status line: marker + message."""
    icon = STATUS_ICONS.get(result.status, "?")
    style = STATUS_STYLES.get(result.status)

    line = Text()
    line.append(f"  {icon} ", style=style)
    line.append(result.message, style=COLOR_DIM if result.status == "skip" else "")
    return line


def format_note(note: Note) -> Text:
    line = Text()
    if note.kind == "command":
        line.append(f"      {note.text}", style=STYLE_COMMAND)
        return line
    if note.kind == "text":
        line.append(f"      {note.text}")
        return line

    icon, style = NOTE_ICONS.get(note.kind, ("·", None))
    line.append(f"  {icon} ", style=style)
    line.append(note.text)
    return line


def print_note(console: Console, note: Note) -> None:
    console.print(format_note(note))
