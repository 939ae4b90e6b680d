"""Active kitchen orders."""

from __future__ import annotations

from comanda.clock import Clock
from comanda.models import CartLine, Order, OrderStatus
from comanda.state import AppState


class OrderLedger:
    """Orders live here from placement until their table (or the day) closes."""

    def __init__(self, state: AppState, clock: Clock) -> None:
        self.state = state
        self.clock = clock

    @property
    def orders(self) -> list[Order]:
        return self.state.orders

    def find(self, order_id: int) -> Order | None:
        for order in self.state.orders:
            if order.order_id == order_id:
                return order
        return None

    def pending(self) -> list[Order]:
        return [order for order in self.state.orders if order.status == OrderStatus.PENDING]

    def for_table(self, table_id: int) -> list[Order]:
        return [order for order in self.state.orders if order.table_id == table_id]

    def create(self, table_id: int, lines: list[CartLine]) -> Order:
        order = Order(
            order_id=self.clock.next_id(),
            table_id=table_id,
            items=list(lines),
            status=OrderStatus.PENDING,
            created_at=self.clock.now_iso(),
        )
        self.state.orders.append(order)
        return order

    def mark_ready(self, order_id: int) -> bool:
        """Move an order from pending to ready. Returns False for unknown ids."""
        order = self.find(order_id)
        if order is None:
            return False
        order.status = OrderStatus.READY
        return True

    def remove_for_table(self, table_id: int) -> int:
        """Drop every order of ``table_id`` whatever its status; return how many."""
        kept = [order for order in self.state.orders if order.table_id != table_id]
        removed = len(self.state.orders) - len(kept)
        self.state.orders = kept
        return removed

    def clear(self) -> None:
        self.state.orders = []
