"""Closed-sales ledger and daily reporting."""

from __future__ import annotations

from comanda.clock import Clock
from comanda.menu_store import MenuStore
from comanda.models import BeverageStockLine, DaySummary, Sale, SoldItem, Table
from comanda.state import AppState


class SalesLedger:
    """Append-only record of closed tabs; cleared only at end of day."""

    def __init__(self, state: AppState, clock: Clock) -> None:
        self.state = state
        self.clock = clock

    @property
    def sales(self) -> list[Sale]:
        return self.state.sales

    def record(self, table: Table) -> Sale:
        """Archive a snapshot of ``table`` as it is right now."""
        sale = Sale(
            sale_id=self.clock.next_id(),
            table_id=table.table_id,
            items=tuple(table.items),
            total=table.total,
            adults=table.adults,
            children=table.children,
            closed_at=self.clock.now_iso(),
        )
        self.state.sales.append(sale)
        return sale

    def clear(self) -> None:
        self.state.sales = []

    def sold_report(self) -> dict[str, SoldItem]:
        """Quantity and revenue per item id across every sale.

        Revenue uses the price each line was sold at, not the current menu price.
        """
        report: dict[str, SoldItem] = {}
        for sale in self.state.sales:
            for line in sale.items:
                row = report.get(line.item_id)
                if row is None:
                    row = report[line.item_id] = SoldItem(item_id=line.item_id, name=line.name)
                row.quantity += 1
                row.revenue += line.price
        return report

    def beverage_stock_report(self, menu: MenuStore, category_id: str) -> list[BeverageStockLine]:
        category = menu.category(category_id)
        if category is None:
            return []
        sold = self.sold_report()
        return [
            BeverageStockLine(
                item_id=item.item_id,
                name=item.name,
                current_stock=item.stock,
                sold_today=sold[item.item_id].quantity if item.item_id in sold else 0,
            )
            for item in category.items
        ]

    def day_summary(self) -> DaySummary:
        return DaySummary(
            sales_count=len(self.state.sales),
            revenue=sum(sale.total for sale in self.state.sales),
            adults=sum(sale.adults for sale in self.state.sales),
            children=sum(sale.children for sale in self.state.sales),
        )
