"""
WSL (Ubuntu on Windows) checklist.

Checks:
  - NotRootCheck        — logged in as a regular user
  - WslVersionCheck     — WSL 2, plus the distribution name
  - g++ / gdb / make    — batched `apt install`
  - tree … python3      — batched `apt install`
  - CodeCommandCheck    — 'code' provided by the VS Code WSL extension
  - ExtensionsCheck     — required VS Code extensions
"""

from __future__ import annotations

import re
import shlex
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
from coursecheck.fixer.installer import AptInstaller
from coursecheck.fixer.prompt import offer_fix
from coursecheck.ui.narrator import print_note

if TYPE_CHECKING:
    from coursecheck.context import RunContext
    from coursecheck.host import HostEnvironment


DEFAULT_DISTRO = "Ubuntu-24.04"

SECTIONS = (
    Section(
        "wsl",
        "WSL Environment",
        (
            "WSL (Windows Subsystem for Linux) runs an Ubuntu Linux",
            "environment on your Windows machine for C++ development.",
        ),
    ),
    Section(
        "toolchain",
        "C++ Compiler & Debugger",
        (
            "g++ compiles your C++ code into programs. gdb is the debugger",
            "that lets you step through code and find bugs.",
        ),
    ),
    Section(
        "utilities",
        "CLI Utilities (tree, wget, git, rsync, ssh, python3)",
        (
            "Command-line programs used throughout the course for viewing",
            "files, downloading content, version control, and more.",
        ),
    ),
    Section(
        "vscode",
        "VS Code & Extensions",
        (
            "VS Code is your code editor. The WSL extension connects it to",
            "your Ubuntu environment, and the C/C++ extension provides",
            "IntelliSense and debugging support.",
        ),
    ),
)


# ── WSL environment ───────────────────────────────────────────────────────────

class NotRootCheck(BaseCheck):
    id = "wsl_user"
    name = "Regular user"
    section = "wsl"
    description = "Makes sure you are logged in as a regular user, not root."

    def run(self, host: "HostEnvironment") -> CheckResult:
        user = host.username()
        if user != "root":
            return self._pass(f"Logged in as user '{user}' (not root).")

        distro = host.getenv("WSL_DISTRO_NAME") or DEFAULT_DISTRO
        return self._fail(
            "You are logged in as 'root' — this is not correct.",
            notes=[
                info("You should be logged in as a regular user, not root."),
                info("Fix: Open PowerShell as administrator and reinstall Ubuntu:"),
                command(f"wsl --unregister {distro}"),
                command(f"wsl --install -d {distro}"),
                plain("Then create a new user account when prompted."),
            ],
        )


class WslVersionCheck(BaseCheck):
    """
    WSL version marker from `wsl.exe -l -v` (Windows interop).

    The listing looks like:

          NAME            STATE           VERSION
        * Ubuntu-24.04    Running         2

    Only a definite "1" is a failure; an unreadable listing is reported
    as a warning and left for the student to confirm by hand.
    """

    id = "wsl_version"
    name = "WSL version"
    section = "wsl"
    description = (
        "Reads 'wsl.exe -l -v' to confirm this distribution runs under "
        "WSL 2, which the course tools require."
    )

    expected = "2"

    def run(self, host: "HostEnvironment") -> CheckResult:
        distro = host.getenv("WSL_DISTRO_NAME")
        matches, version = False, None
        if distro:
            pattern = rf"^\s*\*?\s*{re.escape(distro)}\s+\S+\s+(\d+)\s*$"
            matches, version = probes.attribute_equals(
                host, ["wsl.exe", "-l", "-v"], pattern, self.expected
            )

        notes = _distribution_notes(host)

        if matches:
            return self._pass("WSL version 2 detected.", notes=notes)

        if version is not None:
            return self._fail(
                f"WSL version {version} detected — you need version 2.",
                notes=[
                    info("Fix: Open PowerShell as administrator and run:"),
                    command(f"wsl --set-version {distro} 2"),
                    *notes,
                ],
                data={"version": version},
            )

        return self._pass(
            "WSL is running.",
            notes=[
                warn("Could not determine WSL version (this is usually fine)."),
                info("To verify, open PowerShell and run:"),
                command("wsl -l -v"),
                info("Make sure the VERSION column shows '2'."),
                *notes,
            ],
        )


def _distribution_notes(host: "HostEnvironment") -> list[Note]:
    if not probes.which(host, "lsb_release"):
        return []
    rc, out, _ = host.run_capturing_output(["lsb_release", "-ds"])
    distro = out.strip() if rc == 0 and out.strip() else "Unknown"
    return [info(f"Distribution: {distro}")]


# ── VS Code ───────────────────────────────────────────────────────────────────

class CodeCommandCheck(BaseCheck):
    """In WSL, 'code' is a wrapper the VS Code WSL extension exposes from Windows."""

    id = "vscode_cli"
    name = "VS Code 'code' command"
    section = "vscode"
    description = (
        "Looks for the 'code' command that VS Code's WSL extension adds "
        "to your Ubuntu shell."
    )

    def run(self, host: "HostEnvironment") -> CheckResult:
        if probes.which(host, "code"):
            return self._pass(
                "'code' command is available in WSL.",
                notes=[info("(This means VS Code + the WSL extension are working.)")],
            )

        return self._fail(
            "'code' command not found in WSL.",
            notes=[
                info("This usually means one of:"),
                info("  1. VS Code is not installed on Windows."),
                info("  2. The WSL extension is not installed in VS Code."),
                info("  3. You need to restart your terminal after installing VS Code."),
                info("Fix:"),
                info("  1. Install VS Code from: https://code.visualstudio.com/"),
                info("  2. Open VS Code on Windows, install the 'WSL' extension."),
                info("  3. Close and reopen your Ubuntu terminal."),
                info("  4. Re-run this script."),
            ],
        )


REQUIRED_EXTENSIONS: tuple[tuple[str, str], ...] = (
    (
        "ms-vscode-remote.remote-wsl",
        "WSL (ms-vscode-remote.remote-wsl) — connects VS Code to your Ubuntu environment",
    ),
    (
        "ms-vscode.cpptools",
        "C/C++ (ms-vscode.cpptools) — provides IntelliSense and debugging for C++",
    ),
)


class ExtensionsCheck(BaseCheck):
    """One result per required extension, from a single `code --list-extensions`."""

    id = "vscode_extensions"
    name = "VS Code extensions"
    section = "vscode"
    description = (
        "Lists installed VS Code extensions and looks for the WSL and "
        "C/C++ extensions the course setup relies on."
    )
    requires_tool = "code"

    def __init__(self, required: tuple[tuple[str, str], ...] = REQUIRED_EXTENSIONS) -> None:
        self.required = required

    def run(self, host: "HostEnvironment") -> list[CheckResult]:
        present = probes.membership(
            host, [ext for ext, _ in self.required], ["code", "--list-extensions"]
        )
        results = []
        for ext, label in self.required:
            result = self._pass(label) if present[ext] else self._fail(label)
            result.id = f"{self.id}:{ext}"
            result.data["extension"] = ext
            results.append(result)
        return results

    def remediate(self, ctx: "RunContext", failed: list[CheckResult]) -> RemediationOutcome:
        missing = [r.data["extension"] for r in failed]
        code = probes.which(ctx.host, "code") or "code"
        steps = [(ext, [code, "--install-extension", ext, "--force"]) for ext in missing]

        def install() -> RemediationOutcome:
            errors = []
            for ext, argv in steps:
                print_note(ctx.console, info(f"Installing {ext}..."))
                rc = ctx.host.run_streaming(argv, ctx.console)
                if rc != 0:
                    errors.append(f"{ext} (exit {rc})")
            if errors:
                return RemediationOutcome.failed("could not install " + ", ".join(errors))
            print_note(ctx.console, success("Extensions installed. You may need to reload VS Code."))
            return RemediationOutcome.applied()

        return offer_fix(
            ctx,
            "the missing VS Code extension(s)",
            [shlex.join(argv) for _, argv in steps],
            install,
            intro="Fix: Install missing extensions with:",
        )


# ── Registry ──────────────────────────────────────────────────────────────────

def build_checks() -> list[BaseCheck]:
    """Instantiate the WSL checklist in display order."""
    return [
        NotRootCheck(),
        WslVersionCheck(),
        ExecutableCheck(
            "g++",
            section="toolchain",
            version_label="Compiler",
            check_id="gxx",
            description="Looks for the g++ compiler that builds your C++ projects.",
        ),
        ExecutableCheck(
            "gdb",
            section="toolchain",
            version_label="Debugger",
            description="Looks for gdb, the debugger VS Code uses to step through your code.",
        ),
        ExecutableCheck(
            "make",
            section="toolchain",
            description="Looks for make, which runs the build and test rules in project Makefiles.",
        ),
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
        ExecutableCheck(
            "rsync",
            section="utilities",
            purpose="Efficiently syncs and transfers files.",
            missing_hint="rsync is used to sync files between directories and remote servers.",
        ),
        ExecutableCheck(
            "ssh",
            section="utilities",
            purpose="Secure remote login to other computers.",
            missing_hint="ssh lets you connect to remote servers like CAEN Linux.",
        ),
        ExecutableCheck(
            "python3",
            section="utilities",
            purpose="Python interpreter, used by some course tools.",
            missing_hint="python3 is used by some course tools and scripts.",
        ),
        CodeCommandCheck(),
        ExtensionsCheck(),
    ]


def is_wsl(host: "HostEnvironment") -> bool:
    return re.search(r"microsoft|wsl", host.read_text("/proc/version"), re.IGNORECASE) is not None


def mismatch_notes(host: "HostEnvironment") -> list[Note]:
    return [
        warn("It doesn't look like you're running this inside WSL/Ubuntu."),
        info("This script is meant to be run in an Ubuntu terminal on Windows (WSL)."),
        info("If you're on macOS, use the macOS verification instead (--platform macos)."),
    ]


VARIANT = Variant(
    name="wsl",
    label="WSL",
    title="EECS 280 — WSL Setup Verification Tool",
    links=(
        ("WSL Setup", "https://eecs280staff.github.io/tutorials/setup_wsl.html"),
        ("VS Code", "https://eecs280staff.github.io/tutorials/setup_vscode_wsl.html"),
    ),
    sections=SECTIONS,
    build_checks=build_checks,
    installer_cls=AptInstaller,
    matches=is_wsl,
    mismatch_notes=mismatch_notes,
    ready_message="Your WSL environment is ready for EECS 280.",
)
