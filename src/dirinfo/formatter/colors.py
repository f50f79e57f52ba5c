"""Color policy for entry names, resolved to ANSI escapes only when printed."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

from dirinfo.metadata import EntryType


class Color(Enum):
    RED = "red"
    GREEN = "green"
    MAGENTA = "magenta"
    CYAN = "cyan"


# https://en.wikipedia.org/wiki/ANSI_escape_code#Colors
ANSI_CODES: Final[dict[Color, str]] = {
    Color.RED: "\x1b[31m",
    Color.GREEN: "\x1b[32m",
    Color.MAGENTA: "\x1b[35m",
    Color.CYAN: "\x1b[36m",
}
ANSI_RESET: Final[str] = "\x1b[0m"


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Options shared by the brief and detail formatters.

    Attributes:
        color: Whether names are wrapped in ANSI color escapes.
    """

    color: bool = True


def color_for(entry_type: EntryType) -> Color:
    """Return the display color for an entry type."""
    if entry_type is EntryType.DIRECTORY:
        return Color.MAGENTA
    if entry_type is EntryType.SYMLINK:
        return Color.CYAN
    if entry_type in (EntryType.REGULAR_FILE, EntryType.UNKNOWN):
        return Color.GREEN
    return Color.RED


def colorize(text: str, color: Color, options: RenderOptions | None = None) -> str:
    """Wrap *text* in the escape sequence for *color* when colors are enabled."""
    opts = options or RenderOptions()
    if not opts.color:
        return text
    return f"{ANSI_CODES[color]}{text}{ANSI_RESET}"
