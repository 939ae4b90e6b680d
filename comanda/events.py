"""Change notifications for observers of the point-of-sale state."""

from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

MENU_LOADED = "menu-loaded"
CART_UPDATED = "cart-updated"
ORDER_PLACED = "order-placed"
ORDERS_UPDATED = "orders-updated"
TABLES_UPDATED = "tables-updated"
SALES_UPDATED = "sales-updated"
MENU_UPDATED = "menu-updated"
STATE_RELOADED = "state-reloaded"

ALL_EVENTS = (
    MENU_LOADED,
    CART_UPDATED,
    ORDER_PLACED,
    ORDERS_UPDATED,
    TABLES_UPDATED,
    SALES_UPDATED,
    MENU_UPDATED,
    STATE_RELOADED,
)

Listener = Callable[[str, Any], None]


class NotificationBus:
    """Synchronous publish/subscribe keyed by event name."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}
        self._wildcard: list[Listener] = []

    def subscribe(self, event: str, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for one event and return an unsubscribe callable."""
        if event not in ALL_EVENTS:
            raise ValueError(f"Unknown event: {event}")
        self._listeners.setdefault(event, []).append(listener)

        def unsubscribe() -> None:
            listeners = self._listeners.get(event, [])
            if listener in listeners:
                listeners.remove(listener)

        return unsubscribe

    def subscribe_all(self, listener: Listener) -> Callable[[], None]:
        self._wildcard.append(listener)

        def unsubscribe() -> None:
            if listener in self._wildcard:
                self._wildcard.remove(listener)

        return unsubscribe

    def emit(self, event: str, payload: Any = None) -> None:
        # Copy so listeners may unsubscribe while being notified.
        for listener in [*self._listeners.get(event, []), *self._wildcard]:
            try:
                listener(event, payload)
            except Exception:
                logger.exception("listener %r failed on %s", listener, event)
