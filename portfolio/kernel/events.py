"""
Portfolio Kernel — Notification Hub

Named-event publish/subscribe registry. The store announces every state
transition through one of these; view code subscribes and re-renders.

Fan-out is synchronous. Each callback runs through dispatch(), which catches
and logs whatever the callback raises so the remaining callbacks still run and
the mutating caller never sees the failure.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

Listener = Callable[[Any], Any]


def dispatch(callback: Listener, event: str, payload: Any) -> bool:
    """
    Invoke one listener. Returns False if it raised.
    Listener failures are logged, never propagated.
    """
    try:
        callback(payload)
    except Exception:
        logger.exception("Error in event listener for %s", event)
        return False
    return True


class NotificationHub:
    """Mapping of event name to a set of listener callbacks."""

    def __init__(self) -> None:
        # dict keys give set semantics with stable iteration
        self._listeners: dict[str, dict[Listener, None]] = {}

    def add_listener(self, event: str, callback: Listener) -> None:
        self._listeners.setdefault(event, {})[callback] = None

    def remove_listener(self, event: str, callback: Listener) -> None:
        listeners = self._listeners.get(event)
        if listeners is not None:
            listeners.pop(callback, None)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, {}))

    def notify(self, event: str, payload: Any = None) -> int:
        """
        Call every listener registered for `event` with `payload`.
        Returns the number of listeners that raised.

        Iterates over a copy so listeners may subscribe or unsubscribe
        (or mutate the store) while being notified.
        """
        failures = 0
        for callback in list(self._listeners.get(event, {})):
            if not dispatch(callback, event, payload):
                failures += 1
        return failures
