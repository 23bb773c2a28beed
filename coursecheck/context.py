"""
RunContext — everything a remediation needs, handed over explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rich.console import Console

from coursecheck.config import default_config

if TYPE_CHECKING:
    from coursecheck.fixer.installer import Installer
    from coursecheck.fixer.prompt import Prompter
    from coursecheck.host import HostEnvironment


@dataclass
class RunContext:
    host: "HostEnvironment"
    console: Console
    prompter: "Prompter"
    installer: "Installer"
    config: dict = field(default_factory=default_config)
    allow_fixes: bool = True

    @property
    def shell_profile(self) -> str:
        return self.config.get("shell_profile") or default_config()["shell_profile"]
