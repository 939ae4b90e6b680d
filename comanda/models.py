"""Domain models for comanda."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "pending"
    READY = "ready"


class TableStatus(str, Enum):
    FREE = "free"
    OCCUPIED = "occupied"


@dataclass
class MenuItem:
    """A sellable menu item with its live stock counter."""

    item_id: str
    name: str
    price: float
    stock: int = 0


@dataclass
class Category:
    """An ordered group of menu items."""

    category_id: str
    name: str
    items: list[MenuItem] = field(default_factory=list)


@dataclass
class Menu:
    categories: list[Category] = field(default_factory=list)


@dataclass(frozen=True)
class CartLine:
    """A copy of a menu item taken when it was added to the cart."""

    item_id: str
    name: str
    price: float

    @classmethod
    def from_item(cls, item: MenuItem) -> CartLine:
        return cls(item_id=item.item_id, name=item.name, price=item.price)


@dataclass
class Order:
    """One kitchen-facing submission of cart contents for a table."""

    order_id: int
    table_id: int
    items: list[CartLine]
    status: OrderStatus = OrderStatus.PENDING
    created_at: str = ""


@dataclass
class Table:
    """A table tab: occupancy, accumulated lines and running total."""

    table_id: int
    status: TableStatus = TableStatus.FREE
    items: list[CartLine] = field(default_factory=list)
    total: float = 0
    adults: int = 0
    children: int = 0

    @property
    def is_free(self) -> bool:
        return self.status == TableStatus.FREE

    def reset(self) -> None:
        self.status = TableStatus.FREE
        self.items = []
        self.total = 0
        self.adults = 0
        self.children = 0


@dataclass(frozen=True)
class Sale:
    """Archived snapshot of a closed table tab."""

    sale_id: int
    table_id: int
    items: tuple[CartLine, ...]
    total: float
    adults: int
    children: int
    closed_at: str


@dataclass(frozen=True)
class Session:
    user: str
    role: str
    timestamp: int


@dataclass(frozen=True)
class Outcome:
    """Result of a state-changing operation.

    A declined operation carries a human-readable ``reason``; a completed one
    lists the change events it raised.
    """

    ok: bool
    reason: str = ""
    events: tuple[str, ...] = ()

    @classmethod
    def declined(cls, reason: str) -> Outcome:
        return cls(ok=False, reason=reason)

    @classmethod
    def done(cls, *events: str) -> Outcome:
        return cls(ok=True, events=events)


@dataclass
class SoldItem:
    item_id: str
    name: str
    quantity: int = 0
    revenue: float = 0


@dataclass(frozen=True)
class BeverageStockLine:
    item_id: str
    name: str
    current_stock: int
    sold_today: int

    @property
    def total_stock(self) -> int:
        """Stock level at the start of the day."""
        return self.current_stock + self.sold_today


@dataclass(frozen=True)
class DaySummary:
    sales_count: int
    revenue: float
    adults: int
    children: int

    @property
    def covers(self) -> int:
        return self.adults + self.children
