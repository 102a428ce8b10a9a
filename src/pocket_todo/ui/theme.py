# src/pocket_todo/ui/theme.py

"""Light/dark palettes and ANSI styling for the console front end.

- Truecolor when COLORTERM advertises it, otherwise the xterm 256-color cube.
- Disabled when stdout is not a TTY (unless FORCE_COLOR is set) or NO_COLOR is set.
- Theme choice never touches the task store.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from enum import StrEnum


class Theme(StrEnum):
    LIGHT = "light"
    DARK = "dark"

    def toggle(self) -> Theme:
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT

    @classmethod
    def parse(cls, raw: str | None) -> Theme:
        try:
            return cls((raw or "").strip().lower())
        except ValueError:
            return cls.LIGHT


@dataclass(frozen=True, slots=True)
class Palette:
    title: str
    primary: str
    task_text: str
    empty_text: str


PALETTES: dict[Theme, Palette] = {
    Theme.LIGHT: Palette(
        title="#00796b",
        primary="#009688",
        task_text="#333333",
        empty_text="#9e9e9e",
    ),
    Theme.DARK: Palette(
        title="#E0E7FF",
        primary="#4DD0E1",
        task_text="#F5F5F5",
        empty_text="#B0BEC5",
    ),
}

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
STRIKE = "\033[9m"


def colors_enabled() -> bool:
    if os.environ.get("NO_COLOR") is not None:
        return False
    force = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
    return force or sys.stdout.isatty()


def _truecolor() -> bool:
    colorterm = os.environ.get("COLORTERM", "").lower()
    return any(tok in colorterm for tok in ("truecolor", "24bit"))


def _hex_to_rgb(hex_code: str) -> tuple[int, int, int]:
    h = hex_code.lstrip("#")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def fg(hex_code: str, *, truecolor: bool | None = None) -> str:
    """ANSI foreground escape for a #rrggbb color."""
    r, g, b = _hex_to_rgb(hex_code)
    if truecolor is None:
        truecolor = _truecolor()
    if truecolor:
        return f"\033[38;2;{r};{g};{b}m"

    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))

    idx = 16 + 36 * to_6(r) + 6 * to_6(g) + to_6(b)
    return f"\033[38;5;{idx}m"


class Styler:
    """Applies the active palette to text; a no-op when colors are disabled."""

    def __init__(self, theme: Theme, *, enabled: bool | None = None) -> None:
        self.theme = theme
        self.enabled = colors_enabled() if enabled is None else enabled

    @property
    def palette(self) -> Palette:
        return PALETTES[self.theme]

    def paint(self, text: str, hex_code: str, *styles: str) -> str:
        if not self.enabled:
            return text
        return "".join(styles) + fg(hex_code) + text + RESET

    def title(self, text: str) -> str:
        return self.paint(text, self.palette.title, BOLD)

    def primary(self, text: str) -> str:
        return self.paint(text, self.palette.primary, BOLD)

    def task(self, text: str, *, completed: bool) -> str:
        # Completed tasks render struck through and dimmed.
        if completed:
            return self.paint(text, self.palette.task_text, DIM, STRIKE)
        return self.paint(text, self.palette.task_text)

    def empty(self, text: str) -> str:
        return self.paint(text, self.palette.empty_text, DIM)
