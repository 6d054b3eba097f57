from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, DefaultDict, List

logger = logging.getLogger(__name__)

SELECTION_CHANGED = "selectionChanged"

Handler = Callable[[Any], Any]


class SelectionBroadcaster:
    """
    Synchronous publish/subscribe hub shared by all views.

    Purpose:
    - Decouples the brush controller from the views that react to a selection
    - Replaces the page-level custom DOM event with an explicit object that is
      constructed once and passed to whoever needs it

    Delivery rules:
    - handlers run synchronously, in subscription order, on the publisher's call stack
    - subscribing never replays earlier events
    - a handler that raises is logged and skipped; later handlers still receive the payload
    """

    def __init__(self) -> None:
        self._handlers: DefaultDict[str, List[Handler]] = defaultdict(list)

    def subscribe(self, event_name: str, handler: Handler) -> None:
        """
        Register `handler` for future publishes of `event_name`.

        Subscriptions live for the lifetime of the broadcaster; there is no unsubscribe.
        """
        if not callable(handler):
            raise TypeError(f"Handler for '{event_name}' must be callable, got {handler!r}")
        self._handlers[event_name].append(handler)

    def publish(self, event_name: str, payload: Any) -> int:
        """
        Deliver `payload` to every handler currently registered for `event_name`.

        :return: the number of handlers that completed without raising
        """
        # Snapshot so a handler subscribing during delivery only sees later publishes.
        handlers = list(self._handlers.get(event_name, ()))
        delivered = 0
        for handler in handlers:
            try:
                handler(payload)
            except Exception:
                logger.exception(
                    "Selection handler failed",
                    extra={"event_name": event_name, "handler": getattr(handler, "__qualname__", repr(handler))},
                )
                continue
            delivered += 1
        return delivered

    def subscriber_count(self, event_name: str) -> int:
        return len(self._handlers.get(event_name, ()))
