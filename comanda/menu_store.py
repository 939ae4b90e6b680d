"""Menu lookup and stock mutation."""

from __future__ import annotations

from typing import Iterator

from comanda.models import Category, MenuItem
from comanda.parsing import parse_int
from comanda.state import AppState


class MenuStore:
    """View over ``state.menu``; changes are made in place."""

    def __init__(self, state: AppState) -> None:
        self.state = state

    def items(self) -> Iterator[MenuItem]:
        for category in self.state.menu.categories:
            yield from category.items

    def category(self, category_id: str) -> Category | None:
        for category in self.state.menu.categories:
            if category.category_id == category_id:
                return category
        return None

    def find_item(self, item_id: str) -> MenuItem | None:
        """Return the first item with ``item_id``, or None."""
        for item in self.items():
            if item.item_id == item_id:
                return item
        return None

    def decrement_stock(self, item_id: str) -> bool:
        """Take one unit from stock without checking availability.

        Callers validate availability first. The check and the decrement are
        separate steps, which is only safe while there is a single writer.
        """
        item = self.find_item(item_id)
        if item is None:
            return False
        item.stock -= 1
        return True

    def set_stock(self, item_id: str, value: object) -> bool:
        """Set stock to the non-negative integer parsed from ``value``."""
        item = self.find_item(item_id)
        if item is None:
            return False
        item.stock = max(0, parse_int(value))
        return True
