"""Stock-gated shopping cart."""

from __future__ import annotations

import logging

from comanda.events import CART_UPDATED, NotificationBus
from comanda.models import CartLine, MenuItem, Outcome
from comanda.state import AppState

logger = logging.getLogger(__name__)


class CartManager:
    def __init__(self, state: AppState, bus: NotificationBus) -> None:
        self.state = state
        self.bus = bus

    @property
    def lines(self) -> list[CartLine]:
        return self.state.cart

    @property
    def total(self) -> float:
        return sum(line.price for line in self.state.cart)

    def count(self, item_id: str) -> int:
        return sum(1 for line in self.state.cart if line.item_id == item_id)

    def add(self, item: MenuItem) -> Outcome:
        """Append a copy of ``item`` unless the cart would exceed its live stock."""
        if item.stock <= 0:
            logger.info("cart add declined: %s out of stock", item.item_id)
            return Outcome.declined(f"No stock available for {item.name}")
        if self.count(item.item_id) >= item.stock:
            logger.info("cart add declined: %s limited to %d", item.item_id, item.stock)
            return Outcome.declined(f"Only {item.stock} units of {item.name} left in stock")

        self.state.cart.append(CartLine.from_item(item))
        self.bus.emit(CART_UPDATED)
        return Outcome.done(CART_UPDATED)

    def remove(self, index: int) -> Outcome:
        """Remove the line at ``index``; an out-of-range index removes nothing."""
        removed = 0 <= index < len(self.state.cart)
        if removed:
            del self.state.cart[index]
        self.bus.emit(CART_UPDATED)
        if not removed:
            return Outcome(ok=False, reason=f"No cart line at position {index}", events=(CART_UPDATED,))
        return Outcome.done(CART_UPDATED)

    def clear(self) -> None:
        self.state.cart.clear()
