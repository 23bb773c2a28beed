"""
Closing summary block.

One of three messages, chosen from the run's counters:

  all_clear      🎉 All checks passed! ...
  fixes_applied  ⚙  Fixes were applied. Reopen the terminal and re-run.
  issues_remain  ✘  N issue(s) found. Follow the instructions above.
"""

from rich.console import Console, Group
from rich.rule import Rule
from rich.text import Text

from coursecheck.checks.base import Variant
from coursecheck.runner import RunSummary
from coursecheck.ui.theme import (
    CAT_BUSY,
    CAT_HAPPY,
    CAT_SAD,
    COLOR_BRAND,
    COLOR_FAIL,
    COLOR_INFO,
    COLOR_PASS,
    COLOR_WARNING,
)


def build_summary(summary: RunSummary, variant: Variant) -> Group:
    body = Text()
    body.append("\n")

    category = summary.category
    if category == "all_clear":
        body.append(
            f"  🎉 All checks passed! {variant.ready_message}\n",
            style=f"bold {COLOR_PASS}",
        )
        cat = CAT_HAPPY
    elif category == "fixes_applied":
        body.append("  ⚙  Fixes were applied.\n", style=f"bold {COLOR_WARNING}")
        body.append("  Please ")
        body.append("close and reopen your terminal", style="bold")
        body.append(", then run this script\n  again to verify everything is working.\n")
        cat = CAT_BUSY
    else:
        body.append(
            f"  ✘  {summary.issues_found} issue(s) found.\n",
            style=f"bold {COLOR_FAIL}",
        )
        body.append("  Follow the instructions above to fix them, then re-run this script.\n")
        cat = CAT_SAD

    body.append(f"     {cat}\n", style=f"bold {COLOR_BRAND}")
    body.append("\n  Questions? Visit: ")
    body.append(variant.help_url, style=COLOR_INFO)

    return Group(Rule(style="bold"), body, Rule(style="bold"))


def print_summary(console: Console, summary: RunSummary, variant: Variant) -> None:
    console.print(build_summary(summary, variant))
    console.print()
