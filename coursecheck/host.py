"""
Host environment access — search path, filesystem, subprocesses.

Every probe and remediation talks to the machine through a
HostEnvironment so tests can substitute a fake host without touching
the real filesystem or process table.

The in-process search path starts as a copy of $PATH. Remediations
that install a package manager prepend its directory here (and to
os.environ, so child processes inherit it) to make the tool usable for
the rest of the run.
"""

from __future__ import annotations

import getpass
import os
import platform
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from rich.console import Console


class HostEnvironment:
    """Read/write access to the machine coursecheck is inspecting."""

    def __init__(
        self,
        console: Optional[Console] = None,
        verbose: bool = False,
        environ: Optional[dict[str, str]] = None,
    ) -> None:
        self.console = console
        self.verbose = verbose
        self.environ = environ if environ is not None else os.environ
        self.home = Path(self.environ.get("HOME") or Path.home())
        self.path = self.environ.get("PATH", os.defpath)

    # ── Search path ───────────────────────────────────────────────────────────

    def resolve_executable(self, name: str) -> str | None:
        """Return the full path `name` resolves to in the search path, or None."""
        return shutil.which(name, path=self.path)

    def prepend_to_path(self, directory: str) -> None:
        """Put `directory` first in the search path for the rest of this run."""
        parts = [p for p in self.path.split(os.pathsep) if p and p != directory]
        self.path = os.pathsep.join([directory, *parts])
        self.environ["PATH"] = self.path

    # ── Filesystem ────────────────────────────────────────────────────────────

    def expand(self, path: str | Path) -> Path:
        """Expand a leading ~ against this host's home directory."""
        p = str(path)
        if p == "~" or p.startswith("~/"):
            return self.home / p[2:]
        return Path(p)

    def path_exists(self, path: str | Path) -> bool:
        return self.expand(path).exists()

    def is_executable(self, path: str | Path) -> bool:
        """True if `path` is a regular file the current user may execute."""
        p = self.expand(path)
        return p.is_file() and os.access(p, os.X_OK)

    def read_text(self, path: str | Path) -> str:
        """Return file contents, or '' when the file is missing or unreadable."""
        try:
            return self.expand(path).read_text(errors="replace")
        except OSError:
            return ""

    def append_line(self, path: str | Path, line: str) -> bool:
        """
        Append `line` to a text file unless an identical line is already there.

        Returns True if the file was changed.
        """
        p = self.expand(path)
        existing = self.read_text(p)
        if line in (ln.rstrip("\n") for ln in existing.splitlines()):
            return False
        p.parent.mkdir(parents=True, exist_ok=True)
        with p.open("a") as fh:
            if existing and not existing.endswith("\n"):
                fh.write("\n")
            fh.write(line + "\n")
        return True

    # ── Identity ──────────────────────────────────────────────────────────────

    def kernel_name(self) -> str:
        """Kernel name as reported by `uname -s`, e.g. 'Darwin' or 'Linux'."""
        return platform.system()

    def getenv(self, name: str) -> str | None:
        return self.environ.get(name)

    def username(self) -> str:
        try:
            return getpass.getuser()
        except (KeyError, OSError):
            return self.environ.get("USER", "")

    # ── Subprocesses ──────────────────────────────────────────────────────────

    def run_capturing_output(
        self,
        argv: list[str],
        timeout: int = 10,
    ) -> tuple[int, str, str]:
        """
        Run a read-only command and return its output.

        Args:
            argv:    Argument list, e.g. ["g++", "--version"].
            timeout: Maximum seconds to wait before aborting (default 10).

        Returns:
            (returncode, stdout, stderr) — all strings, never None.
            On timeout or missing binary, returncode is -1 and stderr
            contains a human-readable error description.
        """
        # C locale keeps tool output in English for pattern matching.
        env = {**self.environ, "LANG": "C", "LC_ALL": "C", "PATH": self.path}
        try:
            result = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=timeout,
                check=False,
                env=env,
            )
            rc, out, err = result.returncode, result.stdout, result.stderr
        except subprocess.TimeoutExpired:
            rc, out, err = -1, "", f"Command timed out after {timeout}s: {' '.join(argv)}"
        except FileNotFoundError:
            rc, out, err = -1, "", f"Command not found: {argv[0]}"
        except Exception as e:
            rc, out, err = -1, "", str(e)

        self._trace(argv, rc)
        return rc, out, err

    def run_streaming(
        self,
        cmd: list[str] | str,
        console: Console,
        interactive: bool = False,
    ) -> int:
        """
        Run a remediation command, surfacing its output live.

        A string is run through the shell so quoting and $(...) in
        installer one-liners work. With interactive=True the child
        inherits the terminal directly (installers that ask for a
        password or for RETURN); otherwise output is piped and echoed
        line by line, indented under the current check.

        Returns the exit status, or -1 if the command could not start.
        On KeyboardInterrupt the child is killed and reaped before the
        interrupt propagates.
        """
        shell = isinstance(cmd, str)
        env = {**self.environ, "PATH": self.path}
        try:
            proc = subprocess.Popen(
                cmd,
                shell=shell,
                stdout=None if interactive else subprocess.PIPE,
                stderr=None if interactive else subprocess.STDOUT,
                text=True,
                bufsize=1,
                env=env,
            )
        except OSError as e:
            console.print(f"  ⚠ Could not start command: {e}", style="warning", markup=False)
            return -1

        try:
            if proc.stdout is not None:
                for line in proc.stdout:
                    stripped = line.rstrip()
                    if stripped:
                        console.print(
                            f"      {stripped}", style="dim", highlight=False, markup=False,
                        )
            rc = proc.wait()
        except KeyboardInterrupt:
            proc.kill()
            proc.wait()
            raise

        self._trace(cmd if shell else list(cmd), rc)
        return rc

    # ── Internal ──────────────────────────────────────────────────────────────

    def _trace(self, cmd: list[str] | str, rc: int) -> None:
        if not (self.verbose and self.console):
            return
        shown = cmd if isinstance(cmd, str) else shlex.join(cmd)
        self.console.print(f"      $ {shown}  → exit {rc}", style="dim", highlight=False, markup=False)
