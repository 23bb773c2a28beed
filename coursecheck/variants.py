"""
Variant registry — which checklist applies to this machine.
"""

from __future__ import annotations

from coursecheck.checks import macos, wsl
from coursecheck.checks.base import Variant
from coursecheck.host import HostEnvironment


VARIANTS: dict[str, Variant] = {
    "macos": macos.VARIANT,
    "wsl": wsl.VARIANT,
}


def get_variant(name: str) -> Variant:
    return VARIANTS[name.lower()]


def detect_variant(host: HostEnvironment) -> Variant:
    """
    Pick the variant whose platform signature matches the host.

    When none matches, fall back on the kernel name (Darwin → macOS,
    anything else → WSL) and let the runner's platform gate ask.
    """
    for variant in VARIANTS.values():
        if variant.matches(host):
            return variant
    return macos.VARIANT if host.kernel_name() == "Darwin" else wsl.VARIANT
