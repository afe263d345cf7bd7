"""Focused-window queries against the X11 windowing system."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from Xlib import X, Xatom
from Xlib import display as xdisplay
from Xlib import error as xerror
from Xlib.xobject.drawable import Window

logger = logging.getLogger(__name__)


class WindowQueryError(RuntimeError):
    """Raised when a focused-window lookup fails during a poll."""


class WindowSystemUnavailable(RuntimeError):
    """Raised when the windowing system cannot be reached at startup."""


class WindowProbe(Protocol):
    def get_focused_window_class_and_title(self) -> tuple[str, str]:
        ...

    def close(self) -> None:
        ...


def _decode_property(value: object) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        return value
    return ""


class XlibWindowProbe:
    """Retrieves the focused window's WM_CLASS and WM_NAME."""

    def __init__(self, display_name: Optional[str] = None) -> None:
        try:
            self._display = xdisplay.Display(display_name)
        except (xerror.DisplayError, xerror.ConnectionClosedError) as exc:
            raise WindowSystemUnavailable(f"Cannot connect to X display: {exc}") from exc
        logger.debug("Connected to X display %s", self._display.get_display_name())

    def get_focused_window_class_and_title(self) -> tuple[str, str]:
        try:
            focus = self._display.get_input_focus().focus
            if not isinstance(focus, Window):
                raise WindowQueryError(f"No focused window (focus={focus!r})")
            window_class = focus.get_full_property(Xatom.WM_CLASS, X.AnyPropertyType)
            window_title = focus.get_full_property(Xatom.WM_NAME, X.AnyPropertyType)
        except (xerror.XError, xerror.ConnectionClosedError) as exc:
            raise WindowQueryError(f"Focused window query failed: {exc}") from exc

        return (
            _decode_property(window_class.value) if window_class else "",
            _decode_property(window_title.value) if window_title else "",
        )

    def close(self) -> None:
        self._display.close()
