from __future__ import annotations

from conftest import fill_cart

from comanda.events import ORDERS_UPDATED, SALES_UPDATED, TABLES_UPDATED


def _busy_day(pos):
    fill_cart(pos, "A", "B")
    pos.place_order(1, 2, 1)
    pos.close_table(1)
    fill_cart(pos, "W", "C")
    pos.place_order(2, 3, 0)
    fill_cart(pos, "B")
    pos.place_order(4, 1, 0)


def test_reset_day_clears_orders_and_sales_and_frees_tables(pos, recorder):
    _busy_day(pos)
    stock_before = {item.item_id: item.stock for item in pos.menu.items()}
    recorder.events.clear()

    summary = pos.reset_day()

    assert summary.sales_count == 1
    assert summary.revenue == 1300
    assert summary.covers == 3
    assert pos.orders.orders == []
    assert pos.sales.sales == []
    assert all(table.is_free for table in pos.tables.all())
    assert sorted(pos.state.tables) == list(range(1, 11))
    assert {item.item_id: item.stock for item in pos.menu.items()} == stock_before
    assert recorder.names == [SALES_UPDATED, TABLES_UPDATED, ORDERS_UPDATED]


def test_close_day_requires_confirmation(pos):
    _busy_day(pos)

    assert pos.close_day(lambda: False) is None
    assert len(pos.sales.sales) == 1
    assert len(pos.orders.orders) == 2

    summary = pos.close_day(lambda: True)
    assert summary is not None
    assert pos.sales.sales == []


def test_reset_day_is_persisted(pos, make_pos):
    _busy_day(pos)
    pos.reset_day()

    replayed = make_pos()

    assert replayed.orders.orders == []
    assert replayed.sales.sales == []
    assert all(table.is_free for table in replayed.tables.all())
