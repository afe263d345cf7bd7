"""Active-window change detection."""

from __future__ import annotations

import logging

from .config import FocusRules
from .models import FocusState
from .normalization import normalize_application_name
from .probe import WindowProbe

logger = logging.getLogger(__name__)


class WindowTracker:
    """Detects when the focused application differs from the recorded one."""

    def __init__(
        self,
        probe: WindowProbe,
        rules: FocusRules | None = None,
        state: FocusState | None = None,
    ) -> None:
        self.probe = probe
        self.rules = rules if rules is not None else FocusRules()
        self.state = state if state is not None else FocusState()

    def poll_change(self) -> bool:
        """Poll the probe once and record a focus change if there is one.

        Raises ``WindowQueryError`` without touching the state when the
        windowing system lookup fails.
        """
        window_class, window_title = self.probe.get_focused_window_class_and_title()
        app_name = normalize_application_name(
            window_class, window_title, self.state.current, self.rules
        )
        if app_name == self.state.current:
            return False

        logger.debug("Focus changed: %r -> %r", self.state.current, app_name)
        self.state.previous = self.state.current
        self.state.current = app_name
        return True
