"""
coursecheck — entry point and orchestrator.

CLI flags, variant selection, wiring of host / prompter / installer,
summary dispatch.
"""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from coursecheck import __version__
from coursecheck.checks.base import BaseCheck, Variant
from coursecheck.config import load_config
from coursecheck.context import RunContext
from coursecheck.fixer.prompt import ConsolePrompter, FixedPrompter, PromptUnavailable
from coursecheck.host import HostEnvironment
from coursecheck.runner import ChecklistRunner
from coursecheck.ui.theme import COLOR_DIM, COURSECHECK_THEME
from coursecheck.variants import VARIANTS, detect_variant, get_variant


# ── Console (shared across the tool) ─────────────────────────────────────────

console = Console(theme=COURSECHECK_THEME)


# ── CLI ───────────────────────────────────────────────────────────────────────

@click.command(name="coursecheck", context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-V", "--version", prog_name="coursecheck")
@click.option(
    "--platform",
    "platform_name",
    type=click.Choice(["auto", *VARIANTS], case_sensitive=False),
    default="auto",
    show_default=True,
    help="Which checklist to run (auto-detected by default).",
)
@click.option("--yes", "-y", is_flag=True, default=False,
              help="Answer yes to every prompt and apply every available fix.")
@click.option("--check-only", is_flag=True, default=False,
              help="Report only; show fix commands without offering to run them.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.config/coursecheck/config.toml).",
)
@click.option("--list-checks", is_flag=True, default=False,
              help="List the checks for the selected platform and exit.")
@click.option("--verbose", is_flag=True, default=False,
              help="Echo every command coursecheck runs and its exit status.")
def cli(
    platform_name: str,
    yes: bool,
    check_only: bool,
    config_path: Optional[Path],
    list_checks: bool,
    verbose: bool,
) -> None:
    """Student development environment checker.

    Verifies the compiler toolchain, package manager, command-line
    utilities and VS Code setup, explains anything missing, and offers
    to install it for you. Nothing is changed without asking.

    \b
    Environment variables:
      NO_COLOR=1   Disable all colour output.
    """
    if yes and check_only:
        console.print("[red]Error:[/red] --yes and --check-only cannot be combined.")
        raise SystemExit(1)

    config = load_config(config_path)
    host = HostEnvironment(console=console, verbose=verbose)
    variant = _resolve_variant(platform_name, host)
    checks = _collect_checks(variant, skip=config["skip"])

    if list_checks:
        _print_check_list(variant, checks)
        return

    ctx = RunContext(
        host=host,
        console=console,
        prompter=FixedPrompter(console, True) if yes else ConsolePrompter(console),
        installer=variant.installer_cls(host, console),
        config=config,
        allow_fixes=not check_only,
    )

    from coursecheck.ui.header import print_header
    print_header(console, variant)

    runner = ChecklistRunner(variant, checks, ctx)
    try:
        summary = runner.run()
    except PromptUnavailable as e:
        console.print()
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        console.print(
            "  [dim]Run coursecheck from an interactive terminal, "
            "or pass --yes / --check-only.[/dim]"
        )
        raise SystemExit(1)
    except KeyboardInterrupt:
        console.print("\n  [dim]Cancelled.[/dim]\n")
        return

    if summary is None:
        console.print()
        return

    from coursecheck.ui.report import print_summary
    print_summary(console, summary, variant)
    runner.finish()


# ── Variant resolution ────────────────────────────────────────────────────────

def _resolve_variant(requested: str, host: HostEnvironment) -> Variant:
    """Explicit --platform wins; otherwise detect from the host signature."""
    if requested and requested.lower() != "auto":
        return get_variant(requested)
    return detect_variant(host)


# ── Check registry ────────────────────────────────────────────────────────────

def _collect_checks(variant: Variant, skip: set[str]) -> list[BaseCheck]:
    """Instantiate the variant's checks in display order, minus skipped ids."""
    return [c for c in variant.build_checks() if c.id not in skip]


def _print_check_list(variant: Variant, checks: list[BaseCheck]) -> None:
    titles = {s.key: s.title for s in variant.sections}
    console.print(f"\n  [bold]{variant.label} checklist[/bold]\n")
    current = None
    for check in checks:
        if check.section != current:
            console.print(f"  [bold]{titles.get(check.section, check.section)}[/bold]")
            current = check.section
        console.print(
            f"    {check.id.ljust(22)} [{COLOR_DIM}]{escape(check.description)}[/{COLOR_DIM}]",
            highlight=False,
        )
    console.print()


# ── Entry ─────────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    cli()
