"""Main Textual app class."""

from __future__ import annotations

import logging
from typing import Any, Callable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.widgets import Header, Static

from comanda.models import MenuItem, Outcome
from comanda.pos import PointOfSale
from comanda.printer import KitchenPrinter
from comanda.prompt_modal import ConfirmModal, PromptModal
from comanda.rendering import (
    format_cart_line,
    format_menu_item,
    format_money,
    format_order,
    format_reports,
    format_table,
)
from comanda.report_modal import ReportModal
from comanda.session import SessionGate

logger = logging.getLogger(__name__)

STAFF_ROLE = "cashier"


class ComandaApp(App):
    """Cashier/kitchen terminal for a small restaurant."""

    TITLE = "Comanda"
    SUB_TITLE = "Mesas / Cocina / Caja"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #cart-pane {
        width: 2fr;
        border: round $primary;
        padding: 1;
    }

    #search-pane {
        width: 3fr;
        border: round $secondary;
        padding: 1;
    }

    #floor-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #search-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 4;
    }

    #results, #cart-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #tables-list, #kitchen-list {
        height: 1fr;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    input_state = reactive("normal")
    search_text = reactive("")
    selected_index = reactive(0)
    cart_selected_index = reactive(None)

    BINDINGS = [
        ("tab", "cycle_results(1)", "Next result"),
        ("up", "cycle_results(-1)", "Previous result"),
        ("down", "cycle_results(1)", "Next result"),
        ("enter", "add_selected", "Add to cart"),
        ("backspace", "backspace_query", "Delete query char"),
        Binding("ctrl+s", "submit_order", "Send order", priority=True),
        Binding("ctrl+e", "edit_stock", "Edit stock", priority=True),
        Binding("ctrl+d", "close_day", "Close day", priority=True),
        ("ctrl+c", "cancel_active_mode", "Exit search"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, pos: PointOfSale, gate: SessionGate, printer: KitchenPrinter | None = None) -> None:
        super().__init__()
        self.pos = pos
        self.gate = gate
        self.printer = printer
        self.system_status = ""
        self._unsubscribe: list[Callable[[], None]] = []

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="cart-pane"):
                yield Static("Cart", classes="pane-title")
                yield Static("(empty)", id="cart-list")
            with Vertical(id="search-pane"):
                yield Static(id="search-bar")
                yield Static(id="results")
            with Vertical(id="floor-pane"):
                yield Static("Tables", classes="pane-title")
                yield Static(id="tables-list")
                yield Static("Kitchen", classes="pane-title")
                yield Static(id="kitchen-list")

    def on_mount(self) -> None:
        self._unsubscribe.append(self.pos.bus.subscribe_all(self._on_state_change))
        if self.printer is not None:
            self._unsubscribe.append(self.pos.bus.subscribe_all(self.printer))
        self._refresh_all()
        if not self.gate.is_authorized():
            self._prompt_login()

    def on_unmount(self) -> None:
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe.clear()

    def _on_state_change(self, event: str, payload: Any) -> None:
        logger.debug("ui refresh on %s", event)
        self._refresh_all()

    def _is_modal_open(self) -> bool:
        return isinstance(self.screen, (PromptModal, ConfirmModal, ReportModal))

    # Session

    def _prompt_login(self) -> None:
        def on_user(user: str | None) -> None:
            if user is None:
                self.exit()
                return
            self.push_screen(
                PromptModal(f"Password for {user}", digits_only=False, secret=True),
                lambda password: self._finish_login(user, password),
            )

        self.push_screen(PromptModal("User", digits_only=False), on_user)

    def _finish_login(self, user: str, password: str | None) -> None:
        if password is not None and self.gate.login(user, password, STAFF_ROLE):
            self._set_status(f"Logged in as {user}")
            return
        self._set_status("Wrong password")
        self._prompt_login()

    # Keys

    def on_key(self, event: Key) -> None:
        if self._is_modal_open():
            return
        if not event.is_printable or not event.character or len(event.character) != 1:
            return

        key = event.character
        if self.input_state == "normal":
            handler = {
                "s": self._enter_search,
                "j": lambda: self._move_cart_selection(1),
                "k": lambda: self._move_cart_selection(-1),
                "d": self._delete_selected_line,
                "r": self._mark_next_ready,
                "x": self._prompt_close_table,
                "v": self._show_reports,
                "l": self._logout,
            }.get(key.lower())
            if handler is not None:
                handler()
                event.stop()
            return

        if not (key.isalnum() or key == " "):
            return
        self.search_text += key
        self.selected_index = 0
        self._refresh_search()
        event.stop()

    def _enter_search(self) -> None:
        self.input_state = "active"
        self.search_text = ""
        self.selected_index = 0
        self._refresh_search()

    def action_cancel_active_mode(self) -> None:
        if self._is_modal_open() or self.input_state == "normal":
            return
        self.input_state = "normal"
        self.search_text = ""
        self.selected_index = 0
        self._refresh_search()

    def action_cycle_results(self, delta: int) -> None:
        if self._is_modal_open() or self.input_state != "active":
            return
        results = self._filtered_results()
        if not results:
            self.selected_index = 0
        else:
            self.selected_index = (self.selected_index + delta) % len(results)
        self._refresh_results(results)

    def action_backspace_query(self) -> None:
        if self._is_modal_open() or self.input_state != "active" or not self.search_text:
            return
        self.search_text = self.search_text[:-1]
        self.selected_index = 0
        self._refresh_search()

    def action_add_selected(self) -> None:
        if self._is_modal_open() or self.input_state != "active":
            return
        item = self._selected_result()
        if item is None:
            return
        self._report(self.pos.add_to_cart(item.item_id), f"Added {item.name}")

    def action_edit_stock(self) -> None:
        if self._is_modal_open() or self.input_state != "active":
            return
        item = self._selected_result()
        if item is None:
            return

        def on_value(value: str | None) -> None:
            if value is not None:
                self._report(self.pos.set_stock(item.item_id, value), f"Stock of {item.name} set")

        self.push_screen(PromptModal(f"Stock for {item.name}", initial=str(item.stock)), on_value)

    def action_submit_order(self) -> None:
        if self._is_modal_open():
            return
        if self.input_state != "normal":
            self._set_status("Send only from NORMAL mode (Ctrl+C to leave search)")
            return
        if not self.pos.cart_lines:
            self._set_status("Cart is empty")
            return

        answers: dict[str, str] = {}

        def ask(field: str, title: str, then: Callable[[], None]) -> None:
            def on_value(value: str | None) -> None:
                if value is None:
                    self._set_status("Order not sent")
                    return
                answers[field] = value
                then()

            self.push_screen(PromptModal(title), on_value)

        def submit() -> None:
            outcome = self.pos.place_order(answers["table"], answers["adults"], answers["children"])
            message = f"Order sent to kitchen for table {answers['table']}"
            if outcome.ok and self.printer is not None and self.printer.last_error:
                message += f" (print failed: {self.printer.last_error})"
            self._report(outcome, message)

        ask(
            "table",
            f"Table number (1-{self.pos.state.total_tables})",
            lambda: ask("adults", "Adults", lambda: ask("children", "Children", submit)),
        )

    def _prompt_close_table(self) -> None:
        def on_value(value: str | None) -> None:
            if value is None:
                return

            def on_confirm(confirmed: bool) -> None:
                if confirmed:
                    self._report(self.pos.close_table(value), f"Table {value} closed")

            table = self.pos.table(int(value))
            total = "" if table is None else f" (total {format_money(table.total)})"
            self.push_screen(ConfirmModal(f"Close table {value}{total}?"), on_confirm)

        self.push_screen(PromptModal("Close table number"), on_value)

    def action_close_day(self) -> None:
        if self._is_modal_open():
            return

        def on_confirm(confirmed: bool) -> None:
            if not confirmed:
                return
            summary = self.pos.reset_day()
            self._set_status(f"Day closed: {summary.sales_count} tables, {summary.covers} covers")

        self.push_screen(
            ConfirmModal("Close the day? Sales history and orders are cleared and every table is freed."),
            on_confirm,
        )

    def _mark_next_ready(self) -> None:
        pending = self.pos.orders.pending()
        if not pending:
            self._set_status("No pending orders")
            return
        order = pending[0]
        self._report(self.pos.mark_order_ready(order.order_id), f"Order for table {order.table_id} ready")

    def _show_reports(self) -> None:
        body = format_reports(self.pos.sold_report(), self.pos.beverage_stock_report(), self.pos.day_summary())
        self.push_screen(ReportModal(body))

    def _logout(self) -> None:
        self.gate.logout()
        self._prompt_login()

    def _report(self, outcome: Outcome, success: str) -> None:
        self._set_status(success if outcome.ok else outcome.reason)

    def _set_status(self, message: str) -> None:
        self.system_status = message
        self._refresh_search_bar()

    # Cart selection

    def _move_cart_selection(self, delta: int) -> None:
        lines = self.pos.cart_lines
        if not lines:
            return
        if self.cart_selected_index is None:
            self.cart_selected_index = 0 if delta > 0 else len(lines) - 1
        else:
            self.cart_selected_index = (self.cart_selected_index + delta) % len(lines)
        self._refresh_cart()

    def _delete_selected_line(self) -> None:
        if self.cart_selected_index is None:
            return
        idx = self.cart_selected_index
        self.pos.remove_from_cart(idx)
        remaining = len(self.pos.cart_lines)
        self.cart_selected_index = None if remaining == 0 else min(idx, remaining - 1)
        self._refresh_cart()

    # Search

    def _filtered_results(self) -> list[MenuItem]:
        items = list(self.pos.menu.items())
        if not self.search_text:
            return items
        q = self.search_text.lower()
        return [item for item in items if q in item.name.lower() or q in item.item_id.lower()]

    def _selected_result(self) -> MenuItem | None:
        results = self._filtered_results()
        if not results:
            return None
        return results[min(self.selected_index, len(results) - 1)]

    # Refresh

    def _refresh_all(self) -> None:
        try:
            self._refresh_cart()
            self._refresh_search()
            self._refresh_floor()
        except NoMatches:
            return

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            start = max(0, selected - rows // 2)
            start = min(start, total - rows)
        return (start, start + rows)

    def _render_window(self, widget: Static, rows: list[Text], selected: int | None) -> Text:
        start, end = self._window_bounds(len(rows), self._visible_rows(widget), selected)
        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")
        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            lines.append("➤ " if idx == selected else "  ")
            lines.append_text(rows[idx])
        if end < len(rows):
            lines.append("\n⋮", style="dim")
        return lines

    def _refresh_cart(self) -> None:
        cart_widget = self.query_one("#cart-list", Static)
        lines = self.pos.cart_lines
        if not lines:
            self.cart_selected_index = None
            cart_widget.update("(empty)")
            return
        if self.cart_selected_index is not None and self.cart_selected_index >= len(lines):
            self.cart_selected_index = len(lines) - 1

        rows = [format_cart_line(line) for line in lines]
        body = self._render_window(cart_widget, rows, self.cart_selected_index)
        body.append(f"\n\nTotal: {format_money(self.pos.cart.total)}", style="bold")
        cart_widget.update(body)

    def _refresh_floor(self) -> None:
        tables = Text("\n").join(format_table(table) for table in self.pos.tables.all())
        self.query_one("#tables-list", Static).update(tables)
        orders = self.pos.orders.orders
        kitchen = Text("\n").join(format_order(order) for order in orders) if orders else Text("(no orders)")
        self.query_one("#kitchen-list", Static).update(kitchen)

    def _refresh_search(self) -> None:
        self._refresh_search_bar()
        if self.input_state == "normal":
            self._refresh_results([])
            return
        self._refresh_results(self._filtered_results())

    def _refresh_search_bar(self) -> None:
        try:
            bar = self.query_one("#search-bar", Static)
        except NoMatches:
            return
        if self.input_state == "normal":
            status = self.system_status or "Ready"
            bar.update(f"S search  Ctrl+S send  R ready  X close table  V reports  Ctrl+D close day\n{status}")
            return

        text = Text()
        text.append(" MENU ", style="bold #ffffff on #2f6db5")
        text.append(f": {self.search_text}")
        text.append(f"\n{self.system_status}", style="dim")
        bar.update(text)

    def _refresh_results(self, results: list[MenuItem]) -> None:
        results_widget = self.query_one("#results", Static)
        if self.input_state == "normal":
            results_widget.update("")
            return
        if not results:
            results_widget.update("No results")
            return
        if self.selected_index >= len(results):
            self.selected_index = 0
        rows = [format_menu_item(item) for item in results]
        results_widget.update(self._render_window(results_widget, rows, self.selected_index))
