"""
coursecheck visual design system.

All colors, styles, and icons as named constants.
Import from here — never hardcode markup strings in other modules.
"""

from rich.style import Style
from rich.theme import Theme

from coursecheck import __version__


# ── Brand ─────────────────────────────────────────────────────────────────────

APP_NAME = "coursecheck"
APP_TAGLINE = "Student Setup Verification Tool"
APP_VERSION = __version__


# ── Color palette ─────────────────────────────────────────────────────────────
# Plain ANSI names: the report is read in every kind of terminal,
# including the Windows Terminal hosting WSL.

COLOR_PASS    = "green"
COLOR_FAIL    = "red"
COLOR_INFO    = "blue"
COLOR_WARNING = "yellow"
COLOR_COMMAND = "yellow"
COLOR_BRAND   = "blue"
COLOR_DIM     = "bright_black"
COLOR_TEXT    = "default"


# ── Rich styles ───────────────────────────────────────────────────────────────

STYLE_PASS    = Style(color=COLOR_PASS)
STYLE_FAIL    = Style(color=COLOR_FAIL)
STYLE_INFO    = Style(color=COLOR_INFO)
STYLE_WARNING = Style(color=COLOR_WARNING)
STYLE_COMMAND = Style(color=COLOR_COMMAND)
STYLE_DIM     = Style(color=COLOR_DIM)


# ── Status icons ──────────────────────────────────────────────────────────────

ICON_PASS = "✔"
ICON_FAIL = "✘"
ICON_INFO = "ℹ"
ICON_WARNING = "⚠"
ICON_SKIP = "–"

STATUS_ICONS: dict[str, str] = {
    "pass": ICON_PASS,
    "fail": ICON_FAIL,
    "skip": ICON_SKIP,
}

STATUS_STYLES: dict[str, Style] = {
    "pass": STYLE_PASS,
    "fail": STYLE_FAIL,
    "skip": STYLE_DIM,
}

# Note kind → (icon, icon style). Kinds without an icon are indented text.
NOTE_ICONS: dict[str, tuple[str, Style]] = {
    "info": (ICON_INFO, STYLE_INFO),
    "warn": (ICON_WARNING, STYLE_WARNING),
    "pass": (ICON_PASS, STYLE_PASS),
    "fail": (ICON_FAIL, STYLE_FAIL),
}


# ── Cat ───────────────────────────────────────────────────────────────────────

CAT_SLEEPY = "/ᐠ - ˕ -マ ᶻ 𝗓 𐰁"
CAT_HAPPY  = "/ᐠ > ˕ <マ ₊˚⊹♡"
CAT_BUSY   = "ദ്ദി(• ˕ •マ.ᐟ"
CAT_SAD    = "/ᐠ ╥ ˕ ╥マ"


# ── Rich Theme ────────────────────────────────────────────────────────────────

COURSECHECK_THEME = Theme(
    {
        "pass":    COLOR_PASS,
        "fail":    COLOR_FAIL,
        "info":    COLOR_INFO,
        "warning": COLOR_WARNING,
        "command": COLOR_COMMAND,
        "brand":   f"{COLOR_BRAND} bold",
        "dim":     COLOR_DIM,
        "section": "bold",
    }
)
