"""
Banner printed before the checklist runs.

  ╭──────────────────────────────────────────────────────────────╮
  │          EECS 280 — macOS Setup Verification Tool            │
  │                                                              │
  │                     /ᐠ - ˕ -マ ᶻ 𝗓 𐰁                          │
  ╰────────────────────────────────────────── coursecheck 1.0 ───╯

    CLI Tools:  https://eecs280staff.github.io/tutorials/setup_macos.html
    VS Code:    https://eecs280staff.github.io/tutorials/setup_vscode_macos.html
"""

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from coursecheck.checks.base import Variant
from coursecheck.ui.theme import APP_NAME, APP_VERSION, CAT_SLEEPY, COLOR_BRAND, COLOR_INFO


def build_header(variant: Variant) -> Panel:
    body = Text(justify="center")
    body.append(variant.title, style="bold")
    body.append("\n\n")
    body.append(CAT_SLEEPY, style=f"bold {COLOR_BRAND}")

    return Panel(
        body,
        border_style="bold",
        subtitle=f"{APP_NAME} {APP_VERSION}",
        subtitle_align="right",
        width=66,
    )


def print_header(console: Console, variant: Variant) -> None:
    console.print()
    console.print(build_header(variant))
    console.print()

    width = max((len(label) for label, _ in variant.links), default=0) + 1
    for label, url in variant.links:
        line = Text()
        line.append(f"  {(label + ':').ljust(width)}  ")
        line.append(url, style=COLOR_INFO)
        console.print(line)
    console.print()
