"""
macOS checklist.

Checks:
  - XcodeToolsCheck   — Xcode Command Line Tools + g++
  - HomebrewCheck     — brew in PATH (installs it, or fixes PATH)
  - tree / wget / git — batched `brew install`
  - CodeCommandCheck  — VS Code 'code' shim (installs the cask)

Homebrew must come before anything installed with brew: its fix puts
brew on the in-process PATH so the later batch can use it in the same
run.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from coursecheck.checks import probes
from coursecheck.checks.base import (
    BaseCheck,
    CheckResult,
    ExecutableCheck,
    Note,
    RemediationOutcome,
    Section,
    Variant,
    command,
    info,
    plain,
    success,
    warn,
)
from coursecheck.fixer.installer import BREW_LOCATIONS, BrewInstaller
from coursecheck.fixer.prompt import offer_fix
from coursecheck.ui.narrator import print_note

if TYPE_CHECKING:
    from coursecheck.context import RunContext
    from coursecheck.host import HostEnvironment


SECTIONS = (
    Section(
        "xcode",
        "Xcode Command Line Tools (C++ compiler)",
        (
            "Provides g++/clang — the compiler that turns your C++ code",
            "into programs your Mac can run.",
        ),
    ),
    Section(
        "homebrew",
        "Homebrew (package manager)",
        (
            "Homebrew lets you easily install developer tools on macOS,",
            "similar to an app store for command-line programs.",
        ),
    ),
    Section(
        "utilities",
        "CLI Utilities (tree, wget, git)",
        (
            "Small command-line programs used throughout the course for",
            "viewing files, downloading content, and version control.",
        ),
    ),
    Section(
        "vscode",
        "VS Code 'code' command",
        (
            "The 'code' command lets you open VS Code from the terminal.",
            "It's also needed for managing extensions from the command line.",
        ),
    ),
)


# ── Xcode Command Line Tools ──────────────────────────────────────────────────

class XcodeToolsCheck(BaseCheck):
    id = "xcode_cli_tools"
    name = "Xcode CLI Tools"
    section = "xcode"
    description = (
        "Asks xcode-select where the Command Line Tools live and checks "
        "that g++ is available."
    )

    install_argv = ["xcode-select", "--install"]

    def run(self, host: "HostEnvironment") -> CheckResult:
        rc, out, _ = host.run_capturing_output(["xcode-select", "-p"])
        gxx = probes.which(host, "g++")

        if rc != 0:
            return self._fail("Xcode Command Line Tools are NOT installed.")
        if not gxx:
            return self._fail(
                "Xcode Command Line Tools are registered, but g++ was not found.",
                data={"tools_dir": out.strip()},
            )

        notes = []
        version = probes.version_line(host, [gxx, "--version"])
        if version:
            notes.append(info(f"Compiler: {version}"))
        return self._pass("Xcode CLI Tools are installed.", notes=notes)

    def remediate(self, ctx: "RunContext", failed: list[CheckResult]) -> RemediationOutcome:
        tools_dir = failed[0].data.get("tools_dir")

        def install() -> RemediationOutcome:
            console = ctx.console
            for note in (
                info("Opening the Xcode CLI Tools installer..."),
                info("A dialog box will appear — click 'Install' and wait for it to finish."),
                info("After installation completes, please re-run this verification script."),
            ):
                print_note(console, note)

            rc = ctx.host.run_streaming(self.install_argv, console)
            if rc != 0 and tools_dir is not None:
                # xcode-select refuses to reinstall tools it thinks are present.
                return RemediationOutcome.failed(
                    "xcode-select reports the tools as already installed, but g++ is missing. "
                    f"Remove {tools_dir or 'the Command Line Tools folder'} "
                    "and run 'xcode-select --install' again"
                )
            if rc != 0:
                return RemediationOutcome.failed(f"xcode-select exited with status {rc}")

            console.print()
            print_note(console, warn("The installer is running in the background. Once it finishes,"))
            print_note(console, warn("close and reopen your terminal, then re-run this check."))
            return RemediationOutcome.applied()

        return offer_fix(
            ctx,
            "Xcode Command Line Tools",
            "xcode-select --install",
            install,
            intro="Fix: Run the following command, then click 'Install' in the dialog:",
        )


# ── Homebrew ──────────────────────────────────────────────────────────────────

BREW_INSTALL_SCRIPT = (
    '/bin/bash -c "$(curl -fsSL '
    'https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh)"'
)


def shellenv_line(brew_path: str) -> str:
    return f'eval "$({brew_path} shellenv)"'


class HomebrewCheck(BaseCheck):
    id = "homebrew"
    name = "Homebrew"
    section = "homebrew"
    description = (
        "Looks for brew in your PATH and at the standard Apple Silicon and "
        "Intel install locations."
    )

    def run(self, host: "HostEnvironment") -> CheckResult:
        brew = probes.which(host, "brew")
        if brew:
            notes = []
            version = probes.version_line(host, [brew, "--version"])
            if version:
                notes.append(info(f"Version: {version}"))
            return self._pass("Homebrew is installed and in your PATH.", notes=notes)

        installed = probes.first_executable(host, BREW_LOCATIONS)
        if installed:
            return self._fail(
                "Homebrew is installed but NOT in your shell PATH.",
                data={"brew_path": installed},
            )

        return self._fail("Homebrew is NOT installed.")

    def remediate(self, ctx: "RunContext", failed: list[CheckResult]) -> RemediationOutcome:
        brew_path = failed[0].data.get("brew_path")
        if brew_path:
            return self._offer_path_fix(ctx, brew_path)
        return self._offer_install(ctx)

    # ── Fixes ─────────────────────────────────────────────────────────────────

    def _offer_path_fix(self, ctx: "RunContext", brew_path: str) -> RemediationOutcome:
        profile = ctx.shell_profile

        def apply() -> RemediationOutcome:
            activate_brew(ctx, brew_path)
            print_note(ctx.console, success("Homebrew PATH fix applied. It will persist in new terminals."))
            return RemediationOutcome.applied()

        return offer_fix(
            ctx,
            "the Homebrew PATH fix",
            f"echo '{shellenv_line(brew_path)}' >> {profile}",
            apply,
            intro="Fix: Add Homebrew to your shell profile by running:",
        )

    def _offer_install(self, ctx: "RunContext") -> RemediationOutcome:
        def install() -> RemediationOutcome:
            console = ctx.console
            print_note(console, info("Running the Homebrew installer... Follow any prompts that appear."))
            console.print()

            rc = ctx.host.run_streaming(BREW_INSTALL_SCRIPT, console, interactive=True)
            if rc != 0:
                return RemediationOutcome.failed(f"Homebrew installer exited with status {rc}")

            brew_path = probes.which(ctx.host, "brew") or probes.first_executable(
                ctx.host, BREW_LOCATIONS
            )
            if brew_path:
                activate_brew(ctx, brew_path)
                print_note(console, success("Homebrew installed and PATH configured."))
            else:
                print_note(console, warn("Homebrew installed, but you may need to restart your terminal."))
            return RemediationOutcome.applied()

        return offer_fix(
            ctx,
            "Homebrew",
            BREW_INSTALL_SCRIPT,
            install,
            intro="Fix: Run the following command to install Homebrew:",
        )


def activate_brew(ctx: "RunContext", brew_path: str) -> None:
    """Persist brew's shellenv in the shell profile and use it for this run."""
    ctx.host.append_line(ctx.shell_profile, shellenv_line(brew_path))
    ctx.host.prepend_to_path(os.path.dirname(brew_path))


# ── VS Code 'code' command ────────────────────────────────────────────────────

CODE_LOCATIONS = (
    "/Applications/Visual Studio Code.app/Contents/Resources/app/bin/code",
    "~/Applications/Visual Studio Code.app/Contents/Resources/app/bin/code",
)

CODE_CASK = "visual-studio-code"

_SHELL_COMMAND = "Shell Command: Install 'code' command in PATH"


class CodeCommandCheck(BaseCheck):
    id = "vscode_cli"
    name = "VS Code 'code' command"
    section = "vscode"
    description = (
        "Looks for the 'code' command, then for a VS Code app bundle in "
        "/Applications or ~/Applications."
    )

    def run(self, host: "HostEnvironment") -> CheckResult:
        if probes.which(host, "code"):
            return self._pass("'code' command is available.")

        bundled = probes.first_executable(host, CODE_LOCATIONS)
        if bundled:
            return self._fail(
                "VS Code is installed, but the 'code' command is not in your shell PATH.",
                notes=[
                    info("Fix: Open VS Code, press Cmd+Shift+P, type:"),
                    command(_SHELL_COMMAND),
                    plain("and select it. This adds 'code' to your terminal."),
                ],
                data={"code_path": bundled},
            )

        return self._fail(
            "'code' command not found, and VS Code was not detected.",
            notes=[
                info("Make sure VS Code is installed in /Applications."),
                info("Then open VS Code, press Cmd+Shift+P, and run:"),
                command(_SHELL_COMMAND),
            ],
        )

    def remediate(
        self,
        ctx: "RunContext",
        failed: list[CheckResult],
    ) -> RemediationOutcome | None:
        # VS Code present but not linked: only the editor itself can fix that.
        if failed[0].data.get("code_path") or not ctx.installer.available():
            return None

        def install() -> RemediationOutcome:
            outcome = ctx.installer.install_cask(CODE_CASK)
            if outcome.was_applied and (
                probes.which(ctx.host, "code")
                or probes.first_executable(ctx.host, CODE_LOCATIONS)
            ):
                print_note(ctx.console, success("VS Code installed."))
            return outcome

        return offer_fix(
            ctx,
            "VS Code via Homebrew",
            ctx.installer.cask_command(CODE_CASK),
            install,
            intro=f"Or install VS Code via {ctx.installer.name}:",
        )


# ── Registry ──────────────────────────────────────────────────────────────────

def build_checks() -> list[BaseCheck]:
    """Instantiate the macOS checklist in display order."""
    return [
        XcodeToolsCheck(),
        HomebrewCheck(),
        ExecutableCheck(
            "tree",
            section="utilities",
            purpose="Displays directory structures in a visual tree format.",
            missing_hint="tree displays your project folder structure visually — helpful for debugging.",
        ),
        ExecutableCheck(
            "wget",
            section="utilities",
            purpose="Downloads files from the web via the command line.",
            missing_hint="wget is used to download starter files and project resources.",
        ),
        ExecutableCheck(
            "git",
            section="utilities",
            purpose="Version control system for tracking code changes.",
            missing_hint="git tracks changes to your code and is required for project submission.",
        ),
        CodeCommandCheck(),
    ]


def is_macos(host: "HostEnvironment") -> bool:
    return host.kernel_name() == "Darwin"


def mismatch_notes(host: "HostEnvironment") -> list[Note]:
    return [
        warn(f"This script is for macOS, but you appear to be on {host.kernel_name() or 'an unknown system'}."),
        info("If you're on Windows/WSL, use the WSL verification instead (--platform wsl)."),
    ]


VARIANT = Variant(
    name="macos",
    label="macOS",
    title="EECS 280 — macOS Setup Verification Tool",
    links=(
        ("CLI Tools", "https://eecs280staff.github.io/tutorials/setup_macos.html"),
        ("VS Code", "https://eecs280staff.github.io/tutorials/setup_vscode_macos.html"),
    ),
    sections=SECTIONS,
    build_checks=build_checks,
    installer_cls=BrewInstaller,
    matches=is_macos,
    mismatch_notes=mismatch_notes,
    ready_message="Your Mac is ready for EECS 280.",
)
