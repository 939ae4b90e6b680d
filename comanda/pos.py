"""Point-of-sale facade: owns the state, sequences every mutation, persists and notifies."""

from __future__ import annotations

import logging
from typing import Any, Callable

from comanda.cart import CartManager
from comanda.clock import Clock
from comanda.config import BEVERAGE_CATEGORY_ID, TOTAL_TABLES
from comanda.data import default_menu_payload
from comanda.errors import EngineNotReadyError, MenuUnavailableError
from comanda.events import (
    CART_UPDATED,
    MENU_LOADED,
    MENU_UPDATED,
    ORDER_PLACED,
    ORDERS_UPDATED,
    SALES_UPDATED,
    STATE_RELOADED,
    TABLES_UPDATED,
    NotificationBus,
)
from comanda.menu_loader import MenuFetcher, acquire_menu, fetch_remote_menu
from comanda.menu_store import MenuStore
from comanda.models import BeverageStockLine, CartLine, DaySummary, Order, Outcome, SoldItem, Table
from comanda.orders import OrderLedger
from comanda.parsing import parse_int
from comanda.persistence import KeyValueStore, StateRepository
from comanda.sales import SalesLedger
from comanda.state import AppState
from comanda.tables import TableRegistry

logger = logging.getLogger(__name__)

REASON_EMPTY_CART = "Cart is empty"
REASON_ZERO_PARTY = "Enter how many adults and children are at the table"
REASON_UNKNOWN_ITEM = "Unknown menu item"
REASON_UNKNOWN_ORDER = "Unknown order"


class PointOfSale:
    """Single logical owner of menu, cart, orders, tables and sales.

    Call ``start()`` once before anything else; it loads the menu and replays
    persisted state.
    """

    def __init__(
        self,
        store: KeyValueStore,
        bus: NotificationBus | None = None,
        clock: Clock | None = None,
        total_tables: int = TOTAL_TABLES,
        menu_fetcher: MenuFetcher | None = fetch_remote_menu,
        menu_fallback: Callable[[], Any] | None = default_menu_payload,
        beverage_category_id: str = BEVERAGE_CATEGORY_ID,
    ) -> None:
        self.bus = bus or NotificationBus()
        self.clock = clock or Clock()
        self.state = AppState(total_tables=total_tables)
        self.repository = StateRepository(store)
        self.menu = MenuStore(self.state)
        self.cart = CartManager(self.state, self.bus)
        self.orders = OrderLedger(self.state, self.clock)
        self.tables = TableRegistry(self.state)
        self.sales = SalesLedger(self.state, self.clock)
        self.beverage_category_id = beverage_category_id
        self.menu_source: str | None = None
        self.last_order: Order | None = None
        self._menu_fetcher = menu_fetcher
        self._menu_fallback = menu_fallback
        self._ready = False

    @property
    def ready(self) -> bool:
        """True once the menu is loaded and persisted state replayed."""
        return self._ready

    def start(self) -> None:
        try:
            menu, source = acquire_menu(self.repository, self._menu_fetcher, self._menu_fallback)
        except MenuUnavailableError:
            logger.critical("cannot start: no menu source available")
            raise
        self.state.menu = menu
        self.menu_source = source
        self._load_collections()
        self._ready = True
        logger.info(
            "started menu_source=%s orders=%d sales=%d tables=%d",
            source,
            len(self.state.orders),
            len(self.state.sales),
            len(self.state.tables),
        )
        self.bus.emit(MENU_LOADED, menu)

    def reload_state(self) -> Outcome:
        """Re-read persisted state, e.g. after another screen wrote it."""
        self._require_ready()
        menu = self.repository.load_menu()
        if menu is not None:
            self.state.menu = menu
        self._load_collections()
        self.bus.emit(STATE_RELOADED)
        return Outcome.done(STATE_RELOADED)

    def _load_collections(self) -> None:
        self.state.orders = self.repository.load_orders()
        self.state.tables = self.repository.load_tables()
        self.state.sales = self.repository.load_sales()
        self.tables.init_tables()
        for order in self.state.orders:
            self.clock.observe_id(order.order_id)
        for sale in self.state.sales:
            self.clock.observe_id(sale.sale_id)

    def _require_ready(self) -> None:
        if not self._ready:
            raise EngineNotReadyError("Menu not loaded; call start() first")

    def _commit(self, *events: str, payloads: dict[str, Any] | None = None) -> Outcome:
        self.repository.save_snapshot(self.state.menu, self.state.orders, self.state.tables, self.state.sales)
        payloads = payloads or {}
        for event in events:
            self.bus.emit(event, payloads.get(event))
        return Outcome.done(*events)

    # Cart

    @property
    def cart_lines(self) -> list[CartLine]:
        return self.cart.lines

    def add_to_cart(self, item_id: str) -> Outcome:
        self._require_ready()
        item = self.menu.find_item(item_id)
        if item is None:
            return Outcome.declined(REASON_UNKNOWN_ITEM)
        return self.cart.add(item)

    def remove_from_cart(self, index: int) -> Outcome:
        self._require_ready()
        return self.cart.remove(index)

    # Orders

    def place_order(self, table_id: object, adults: object, children: object) -> Outcome:
        """Send the cart to the kitchen and add it to the table's tab."""
        self._require_ready()
        if not self.state.cart:
            return Outcome.declined(REASON_EMPTY_CART)

        adults_count = parse_int(adults)
        children_count = parse_int(children)
        if adults_count + children_count <= 0:
            return Outcome.declined(REASON_ZERO_PARTY)

        table_number = parse_int(table_id)
        if not 1 <= table_number <= self.state.total_tables:
            return Outcome.declined(f"Table {table_id} does not exist")

        lines = list(self.state.cart)
        for line in lines:
            self.menu.decrement_stock(line.item_id)

        order = self.orders.create(table_number, lines)
        self.tables.merge(table_number, lines, adults_count, children_count)
        self.cart.clear()
        self.last_order = order
        logger.info("order %d placed table=%d lines=%d", order.order_id, table_number, len(lines))
        return self._commit(ORDER_PLACED, CART_UPDATED, payloads={ORDER_PLACED: order})

    def mark_order_ready(self, order_id: int) -> Outcome:
        self._require_ready()
        if not self.orders.mark_ready(order_id):
            return Outcome.declined(REASON_UNKNOWN_ORDER)
        return self._commit(ORDERS_UPDATED)

    # Stock

    def set_stock(self, item_id: str, value: object) -> Outcome:
        self._require_ready()
        if not self.menu.set_stock(item_id, value):
            return Outcome.declined(REASON_UNKNOWN_ITEM)
        return self._commit(MENU_UPDATED)

    # Tables

    def table(self, table_id: int) -> Table | None:
        return self.tables.get(table_id)

    def close_table(self, table_id: object) -> Outcome:
        """Archive the table's tab as a sale, free it and drop its orders."""
        self._require_ready()
        table_number = parse_int(table_id)
        table = self.tables.get(table_number)
        if table is None or table.is_free:
            logger.warning("cannot close table %s: not found or free", table_id)
            return Outcome.declined(f"Table {table_id} is not open")

        sale = self.sales.record(table)
        self.tables.release(table_number)
        dropped = self.orders.remove_for_table(table_number)
        logger.info("table %d closed total=%s orders_dropped=%d", table_number, sale.total, dropped)
        return self._commit(TABLES_UPDATED, ORDERS_UPDATED, SALES_UPDATED, payloads={SALES_UPDATED: sale})

    # End of day

    def reset_day(self) -> DaySummary:
        """Clear sales and orders and free every table. Stock is left as is."""
        self._require_ready()
        summary = self.sales.day_summary()
        self.sales.clear()
        self.orders.clear()
        self.tables.reset_all()
        logger.info("day closed sales=%d revenue=%s", summary.sales_count, summary.revenue)
        self._commit(SALES_UPDATED, TABLES_UPDATED, ORDERS_UPDATED, payloads={SALES_UPDATED: summary})
        return summary

    def close_day(self, confirm: Callable[[], bool]) -> DaySummary | None:
        """Run ``reset_day`` if ``confirm()`` agrees."""
        self._require_ready()
        if not confirm():
            return None
        return self.reset_day()

    # Reports

    def sold_report(self) -> dict[str, SoldItem]:
        self._require_ready()
        return self.sales.sold_report()

    def beverage_stock_report(self) -> list[BeverageStockLine]:
        self._require_ready()
        return self.sales.beverage_stock_report(self.menu, self.beverage_category_id)

    def day_summary(self) -> DaySummary:
        self._require_ready()
        return self.sales.day_summary()
