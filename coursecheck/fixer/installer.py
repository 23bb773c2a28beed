"""
Package-manager installers — one class per platform.

The only place install command lines are constructed. Each installer:
  - knows whether its package manager is usable right now
  - renders the exact command it will run (shown before asking)
  - runs it with live output and maps the exit status to an outcome

  BrewInstaller — macOS, Homebrew formulae and casks
  AptInstaller  — Ubuntu/WSL, apt via sudo
"""

from __future__ import annotations

import shlex
from abc import ABC, abstractmethod

from rich.console import Console

from coursecheck.checks import probes
from coursecheck.checks.base import RemediationOutcome
from coursecheck.host import HostEnvironment


class Installer(ABC):
    """A package manager the checklist can hand missing packages to."""

    name: str = "package manager"

    def __init__(self, host: HostEnvironment, console: Console) -> None:
        self.host = host
        self.console = console

    @abstractmethod
    def available(self) -> bool:
        """True if the package manager can be invoked in this run."""

    @abstractmethod
    def install_argv(self, names: list[str]) -> list[list[str]]:
        """Commands (in order) that install `names`."""

    def cask_argv(self, name: str) -> list[list[str]]:
        raise NotImplementedError(f"{self.name} has no cask installs")

    # ── Display ───────────────────────────────────────────────────────────────

    def install_command(self, names: list[str]) -> str:
        """The install command as the user would type it."""
        return " && ".join(shlex.join(argv) for argv in self.install_argv(names))

    def cask_command(self, name: str) -> str:
        return " && ".join(shlex.join(argv) for argv in self.cask_argv(name))

    # ── Execution ─────────────────────────────────────────────────────────────

    def install_packages(self, names: list[str]) -> RemediationOutcome:
        return self._run_all(self.install_argv(names))

    def install_cask(self, name: str) -> RemediationOutcome:
        try:
            steps = self.cask_argv(name)
        except NotImplementedError as e:
            return RemediationOutcome.failed(str(e))
        return self._run_all(steps)

    def _run_all(self, steps: list[list[str]]) -> RemediationOutcome:
        if not self.available():
            return RemediationOutcome.failed(f"{self.name} is not available")

        for argv in steps:
            self.console.print()
            rc = self.host.run_streaming(argv, self.console, interactive=True)
            if rc != 0:
                return RemediationOutcome.failed(
                    f"'{shlex.join(argv)}' exited with status {rc}"
                )
        return RemediationOutcome.applied()


# ── Homebrew ──────────────────────────────────────────────────────────────────

BREW_LOCATIONS = ("/opt/homebrew/bin/brew", "/usr/local/bin/brew")  # Apple Silicon, Intel


class BrewInstaller(Installer):
    """
    Homebrew formulae and casks.

    brew is usable even when its prefix is missing from PATH: a brew at
    one of the standard locations is run by absolute path.
    """

    name = "Homebrew"

    def brew(self) -> str | None:
        """'brew' if it is on the search path, else its absolute location, else None."""
        if self.host.resolve_executable("brew"):
            return "brew"
        return probes.first_executable(self.host, BREW_LOCATIONS)

    def available(self) -> bool:
        return self.brew() is not None

    def install_argv(self, names: list[str]) -> list[list[str]]:
        return [[self.brew() or "brew", "install", *names]]

    def cask_argv(self, name: str) -> list[list[str]]:
        return [[self.brew() or "brew", "install", "--cask", name]]


# ── apt ───────────────────────────────────────────────────────────────────────

class AptInstaller(Installer):
    name = "apt"

    def available(self) -> bool:
        return self.host.resolve_executable("apt") is not None

    def _sudo(self) -> list[str]:
        # Already root (e.g. a fresh WSL distro): sudo may not even exist.
        if self.host.username() == "root":
            return []
        return ["sudo"]

    def install_argv(self, names: list[str]) -> list[list[str]]:
        sudo = self._sudo()
        return [
            [*sudo, "apt", "update"],
            [*sudo, "apt", "install", "-y", *names],
        ]
