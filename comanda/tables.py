"""Table occupancy and running tabs."""

from __future__ import annotations

from comanda.models import CartLine, Table, TableStatus
from comanda.state import AppState


class TableRegistry:
    def __init__(self, state: AppState) -> None:
        self.state = state

    def init_tables(self) -> None:
        """Backfill a free table for every missing index in [1, total_tables]."""
        for table_id in range(1, self.state.total_tables + 1):
            if table_id not in self.state.tables:
                self.state.tables[table_id] = Table(table_id=table_id)

    def get(self, table_id: int) -> Table | None:
        return self.state.tables.get(table_id)

    def all(self) -> list[Table]:
        return [self.state.tables[table_id] for table_id in sorted(self.state.tables)]

    def occupied(self) -> list[Table]:
        return [table for table in self.all() if not table.is_free]

    def merge(self, table_id: int, lines: list[CartLine], adults: int, children: int) -> Table:
        """Add ``lines`` to the table's tab, opening it if it was free.

        Party sizes are replaced by this submission's values, not summed.
        """
        table = self.state.tables.get(table_id)
        if table is None or table.is_free:
            table = Table(table_id=table_id, status=TableStatus.OCCUPIED)
            self.state.tables[table_id] = table

        table.items.extend(lines)
        # total is always the sum of the tab lines
        table.total = sum(line.price for line in table.items)
        table.adults = adults
        table.children = children
        table.status = TableStatus.OCCUPIED
        return table

    def release(self, table_id: int) -> None:
        table = self.state.tables.get(table_id)
        if table is not None:
            table.reset()

    def reset_all(self) -> None:
        self.state.tables = {table_id: Table(table_id=table_id) for table_id in range(1, self.state.total_tables + 1)}
