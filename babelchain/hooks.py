"""Observer registry for translator events."""

import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass

from babelchain.errors import InvalidArgument

MISSING_KEY = "missing_key"
MISSING_LANGUAGE = "missing_language"
CHANGE = "change"

EVENTS = (MISSING_KEY, MISSING_LANGUAGE, CHANGE)

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Subscription:
    """Opaque handle returned by :meth:`Notifier.on`."""

    event: str
    id: int


class Notifier:
    def __init__(self, events: tuple[str, ...] = EVENTS):
        self._events = events
        self._handlers: dict[str, dict[Subscription, Callable]] = {e: {} for e in events}
        self._ids = itertools.count(1)

    def on(self, event: str, handler: Callable) -> Subscription:
        """Register a handler for an event."""
        if event not in self._handlers:
            raise InvalidArgument(f"unknown event '{event}', expected one of {self._events}")
        if not callable(handler):
            raise InvalidArgument("handler must be callable")
        sub = Subscription(event, next(self._ids))
        self._handlers[event][sub] = handler
        return sub

    def off(self, subscription: Subscription) -> bool:
        """Remove a handler. Returns False if the handle was not registered."""
        if not isinstance(subscription, Subscription):
            return False
        handlers = self._handlers.get(subscription.event, {})
        return handlers.pop(subscription, None) is not None

    def emit(self, event: str, **kwargs) -> None:
        """Emit an event, calling all registered handlers.

        A failing handler is logged and skipped; it never reaches the caller
        or the remaining handlers.
        """
        # copy so handlers may unsubscribe while we iterate
        for handler in list(self._handlers.get(event, {}).values()):
            try:
                handler(**kwargs)
            except Exception:
                _log.exception("Handler %r for event '%s' failed", handler, event)

    def count(self, event: str) -> int:
        return len(self._handlers.get(event, {}))

    def clear(self) -> None:
        """Remove all handlers. Useful for testing."""
        for handlers in self._handlers.values():
            handlers.clear()
