"""
Core data model for coursecheck checks.

CheckResult        — the contract every probe returns.
RemediationOutcome — what a consent-gated fix reports back.
BaseCheck          — abstract base class all checks inherit from.
ExecutableCheck    — "is command X in the search path" with a batched package fix.
Section / Variant  — how checks are grouped and which platform they target.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Literal

from coursecheck.checks import probes

if TYPE_CHECKING:
    from coursecheck.context import RunContext
    from coursecheck.fixer.installer import Installer
    from coursecheck.host import HostEnvironment


# ── Data model ────────────────────────────────────────────────────────────────

NoteKind = Literal["info", "warn", "pass", "fail", "command", "text"]


@dataclass(frozen=True)
class Note:
    """One indented detail line printed under a check's status line."""
    kind: NoteKind
    text: str


def info(text: str) -> Note:
    return Note("info", text)


def warn(text: str) -> Note:
    return Note("warn", text)


def success(text: str) -> Note:
    return Note("pass", text)


def command(text: str) -> Note:
    return Note("command", text)


def plain(line: str) -> Note:
    return Note("text", line)


@dataclass
class CheckResult:
    # Identity
    id: str                     # "tree"
    name: str                   # "tree"

    # Result
    status: Literal["pass", "fail", "skip"]
    message: str                # "tree is installed."

    # Detail lines, in display order
    notes: list[Note] = field(default_factory=list)

    # Packages a batched install would add to fix this failure
    packages: tuple[str, ...] = ()

    # Metadata
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return self.status == "pass"

    @property
    def failed(self) -> bool:
        return self.status == "fail"


@dataclass(frozen=True)
class RemediationOutcome:
    status: Literal["applied", "declined", "failed"]
    reason: str = ""

    @classmethod
    def applied(cls) -> "RemediationOutcome":
        return cls("applied")

    @classmethod
    def declined(cls) -> "RemediationOutcome":
        return cls("declined")

    @classmethod
    def failed(cls, reason: str) -> "RemediationOutcome":
        return cls("failed", reason)

    @property
    def was_applied(self) -> bool:
        return self.status == "applied"


# ── Grouping ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Section:
    """A numbered block of related checks, e.g. '[3/4] CLI Utilities'."""
    key: str
    title: str
    description: tuple[str, ...] = ()


@dataclass(frozen=True)
class Variant:
    """One platform flavour of the checklist (macOS, WSL)."""
    name: str                                   # "macos"
    label: str                                  # "macOS"
    title: str                                  # banner title
    links: tuple[tuple[str, str], ...]          # (label, url) pairs under the banner
    sections: tuple[Section, ...]
    build_checks: Callable[[], list["BaseCheck"]]
    installer_cls: type["Installer"]
    matches: Callable[["HostEnvironment"], bool]
    mismatch_notes: Callable[["HostEnvironment"], list[Note]]
    ready_message: str                          # "Your Mac is ready for EECS 280."
    help_url: str = "https://eecs280staff.github.io/tutorials/"


# ── Base class ────────────────────────────────────────────────────────────────

class BaseCheck(ABC):
    """
    Abstract base class for all coursecheck checks.

    Subclasses must:
      1. Set class attributes (id, name, section, description, …)
      2. Override run() to return one CheckResult (or a list, for checks
         that verify several identifiers at once)

    run() is the probe: it reads host state and never changes it.
    run() is only called when the required tool (if any) resolves.

    remediate() is optional. It receives the failed results and returns
    a RemediationOutcome, or None when there is no automatic fix.
    """

    id: str = "base_check"
    name: str = "Base Check"
    section: str = "general"
    description: str = "Running check..."   # What is verified and why, one sentence

    requires_tool: str | None = None

    # ── Public API ────────────────────────────────────────────────────────────

    def execute(self, host: "HostEnvironment") -> list[CheckResult]:
        """
        Gate-check then delegate to run().

        Call this from the runner — not run() directly.
        """
        if self.requires_tool and not probes.which(host, self.requires_tool):
            return [self._skip(f"'{self.requires_tool}' is not available")]

        # Safety net: one bad probe must never stop the checklist
        try:
            outcome = self.run(host)
        except Exception as e:
            return [self._fail(f"Unexpected error in {self.id}: {e}")]

        return outcome if isinstance(outcome, list) else [outcome]

    @abstractmethod
    def run(self, host: "HostEnvironment") -> CheckResult | list[CheckResult]:
        """Probe the host. Must not modify it."""

    def remediate(
        self,
        ctx: "RunContext",
        failed: list[CheckResult],
    ) -> RemediationOutcome | None:
        return None

    # ── Result builders ───────────────────────────────────────────────────────

    def _result(
        self,
        status: Literal["pass", "fail", "skip"],
        message: str,
        notes: list[Note] | None = None,
        data: dict[str, Any] | None = None,
        packages: tuple[str, ...] = (),
    ) -> CheckResult:
        return CheckResult(
            id=self.id,
            name=self.name,
            status=status,
            message=message,
            notes=list(notes or []),
            packages=packages,
            data=data or {},
        )

    def _pass(
        self,
        message: str,
        notes: list[Note] | None = None,
        data: dict[str, Any] | None = None,
    ) -> CheckResult:
        return self._result("pass", message, notes=notes, data=data)

    def _fail(
        self,
        message: str,
        notes: list[Note] | None = None,
        data: dict[str, Any] | None = None,
        packages: tuple[str, ...] = (),
    ) -> CheckResult:
        return self._result("fail", message, notes=notes, data=data, packages=packages)

    def _skip(self, reason: str) -> CheckResult:
        return self._result("skip", reason)


# ── Executable-in-PATH check ──────────────────────────────────────────────────

class ExecutableCheck(BaseCheck):
    """
    Pass when `command` resolves in the search path.

    Failures carry `packages` so the runner can fold every missing tool
    in the same section into one installer invocation.
    """

    def __init__(
        self,
        command: str,
        section: str,
        purpose: str = "",
        missing_hint: str = "",
        packages: tuple[str, ...] | None = None,
        version_label: str | None = None,
        check_id: str | None = None,
        description: str | None = None,
    ) -> None:
        self.command = command
        self.id = check_id or command
        self.name = command
        self.section = section
        self.purpose = purpose
        self.description = description or purpose or f"Looks for '{command}' in your PATH."
        self.missing_hint = missing_hint
        self.packages = packages if packages is not None else (command,)
        self.version_label = version_label

    def run(self, host: "HostEnvironment") -> CheckResult:
        path = probes.which(host, self.command)
        if not path:
            notes = [info(self.missing_hint)] if self.missing_hint else []
            return self._fail(
                f"{self.command} is NOT installed.",
                notes=notes,
                packages=self.packages,
            )

        message = f"{self.command} is installed."
        if self.purpose:
            message += f" ({self.purpose})"

        notes = []
        if self.version_label:
            version = probes.version_line(host, [path, "--version"])
            if version:
                notes.append(info(f"{self.version_label}: {version}"))

        return self._pass(message, notes=notes, data={"path": path})
