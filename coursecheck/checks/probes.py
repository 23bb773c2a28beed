"""
Read-only host probes shared by every check.

  which / first_executable — does a command resolve (search path or fixed location)
  version_line             — first line of a version query, for details
  read_attribute           — pattern-match a command's output (attribute equality)
  membership               — are all required ids listed by a command

None of these raise for "not found": absence is a normal answer.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from coursecheck.host import HostEnvironment


def which(host: "HostEnvironment", name: str) -> str | None:
    """Full path of `name` in the host search path, or None."""
    return host.resolve_executable(name)


def first_executable(host: "HostEnvironment", candidates: Iterable[str]) -> str | None:
    """Return the first candidate path that is an executable file (~ expanded)."""
    for candidate in candidates:
        if host.is_executable(candidate):
            return str(host.expand(candidate))
    return None


def version_line(host: "HostEnvironment", argv: list[str]) -> str:
    """First non-empty line of stdout+stderr, or '' if the command fails to start."""
    rc, out, err = host.run_capturing_output(argv)
    if rc == -1 and not out:
        return ""
    for line in (out + err).splitlines():
        if line.strip():
            return line.strip()
    return ""


def _normalise(output: str) -> str:
    # wsl.exe writes UTF-16; decoded as text it arrives interleaved with NULs.
    return output.replace("\x00", "").replace("\r", "")


def read_attribute(
    host: "HostEnvironment",
    argv: list[str],
    pattern: str,
) -> str | None:
    """
    Run `argv` and return the first capture group of `pattern` in its output.

    The match is case-insensitive and multiline. Returns None when the
    command cannot run or nothing matches.
    """
    rc, out, err = host.run_capturing_output(argv)
    if rc != 0 and not out:
        return None
    match = re.search(pattern, _normalise(out), re.IGNORECASE | re.MULTILINE)
    if not match:
        return None
    return match.group(1).strip() if match.groups() else match.group(0).strip()


def attribute_equals(
    host: "HostEnvironment",
    argv: list[str],
    pattern: str,
    expected: str,
) -> tuple[bool, str | None]:
    """(matches expected, value found) for an attribute read via read_attribute()."""
    value = read_attribute(host, argv, pattern)
    return value is not None and value.lower() == expected.lower(), value


def membership(
    host: "HostEnvironment",
    required: Iterable[str],
    argv: list[str],
) -> dict[str, bool]:
    """
    Map each required id to whether `argv` lists it on a line of its own.

    Comparison is case-insensitive. If the listing command fails, every
    id is reported missing.
    """
    rc, out, _ = host.run_capturing_output(argv, timeout=30)
    listed: set[str] = set()
    if rc == 0:
        listed = {
            ln.strip().lower()
            for ln in _normalise(out).splitlines()
            if ln.strip()
        }
    return {ident: ident.lower() in listed for ident in required}
