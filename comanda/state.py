"""Process-wide state container."""

from __future__ import annotations

from dataclasses import dataclass, field

from comanda.config import TOTAL_TABLES
from comanda.models import CartLine, Menu, Order, Sale, Table


@dataclass
class AppState:
    """Every collection the point of sale mutates, owned by one ``PointOfSale``."""

    menu: Menu = field(default_factory=Menu)
    cart: list[CartLine] = field(default_factory=list)
    orders: list[Order] = field(default_factory=list)
    tables: dict[int, Table] = field(default_factory=dict)
    sales: list[Sale] = field(default_factory=list)
    total_tables: int = TOTAL_TABLES
