"""Utilities to normalize window class strings into application names."""

from __future__ import annotations

from .config import FocusRules
from .models import UNKNOWN_APP

_CLASS_SEPARATOR = "\x00"


def parse_application_name(window_class: str) -> str:
    """Return the class part of a NUL-separated WM_CLASS value.

    WM_CLASS holds ``instance\\0class\\0``; the second token is the
    application name. Anything shorter yields ``"Unknown"``.
    """
    parts = window_class.split(_CLASS_SEPARATOR)
    if len(parts) > 1:
        return parts[1]
    return UNKNOWN_APP


def refine_application_name(
    app_name: str,
    window_title: str,
    previous_app: str,
    rules: FocusRules,
) -> str:
    """Attribute a terminal-hosted editor to the editor instead of the terminal."""
    if not rules.is_terminal(previous_app):
        return app_name
    editor = rules.editor_for_title(window_title)
    return editor if editor is not None else app_name


def normalize_application_name(
    window_class: str,
    window_title: str,
    previous_app: str,
    rules: FocusRules,
) -> str:
    return refine_application_name(
        parse_application_name(window_class), window_title, previous_app, rules
    )
