"""Configuration models and helpers for the window watcher."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

DEFAULT_TERMINAL_NAMES: frozenset[str] = frozenset(
    {
        "Kitty",
        "Alacritty",
        "Terminator",
        "Tilda",
        "Guake",
        "Yakuake",
        "Roxterm",
        "Eterm",
        "Rxvt",
        "Xterm",
        "Tilix",
        "Lxterminal",
        "Konsole",
        "St",
        "Gnome-terminal",
        "Xfce4-terminal",
        "Terminology",
        "Extraterm",
    }
)

# Checked in order; the first marker found in the window title wins.
DEFAULT_EDITOR_TITLE_MARKERS: tuple[tuple[str, str], ...] = (
    ("Nvim", "NeoVim"),
    ("Vim", "Vim"),
    ("NVIM", "LunarVim"),
)


@dataclass(slots=True, frozen=True)
class FocusRules:
    """Lookup tables used to attribute terminal-hosted editors."""

    terminal_names: frozenset[str] = DEFAULT_TERMINAL_NAMES
    editor_title_markers: tuple[tuple[str, str], ...] = DEFAULT_EDITOR_TITLE_MARKERS

    def is_terminal(self, app_name: str) -> bool:
        return app_name in self.terminal_names

    def editor_for_title(self, title: str) -> str | None:
        for marker, editor in self.editor_title_markers:
            if marker in title:
                return editor
        return None


@dataclass(slots=True)
class WatcherSettings:
    """Runtime configuration for the watch loop."""

    poll_interval: timedelta = timedelta(milliseconds=200)
    rules: FocusRules = field(default_factory=FocusRules)

    @classmethod
    def from_intervals(
        cls,
        poll_seconds: float,
        rules: FocusRules | None = None,
    ) -> "WatcherSettings":
        return cls(
            poll_interval=timedelta(seconds=poll_seconds),
            rules=rules if rules is not None else FocusRules(),
        )
