from __future__ import annotations

from conftest import FIXED_INSTANT, assert_table_totals_consistent, fill_cart

from comanda.events import CART_UPDATED, ORDER_PLACED
from comanda.models import OrderStatus, TableStatus
from comanda.pos import REASON_EMPTY_CART, REASON_ZERO_PARTY


def test_example_flow_from_cart_to_sale(pos):
    assert pos.add_to_cart("A").ok
    assert pos.add_to_cart("A").ok
    assert not pos.add_to_cart("A").ok

    assert pos.place_order(3, 2, 1).ok
    table = pos.table(3)
    assert table.status == TableStatus.OCCUPIED
    assert table.total == 1000
    assert pos.menu.find_item("A").stock == 0

    assert pos.close_table(3).ok
    assert len(pos.sales.sales) == 1
    assert pos.sales.sales[0].total == 1000
    assert pos.table(3).is_free


def test_empty_cart_is_declined(pos):
    outcome = pos.place_order(1, 2, 0)

    assert not outcome.ok
    assert outcome.reason == REASON_EMPTY_CART
    assert pos.orders.orders == []


def test_zero_party_size_is_declined_and_nothing_changes(pos):
    fill_cart(pos, "B")

    for adults, children in [(0, 0), ("", None), ("abc", "x"), (-1, 1)]:
        outcome = pos.place_order(1, adults, children)
        assert not outcome.ok
        assert outcome.reason == REASON_ZERO_PARTY

    assert len(pos.cart_lines) == 1
    assert pos.menu.find_item("B").stock == 10
    assert pos.table(1).is_free


def test_party_sizes_parse_leniently(pos):
    fill_cart(pos, "B")

    assert pos.place_order("4", "2 adults", "").ok
    table = pos.table(4)
    assert (table.adults, table.children) == (2, 0)


def test_invalid_table_is_declined(pos):
    fill_cart(pos, "B")

    assert not pos.place_order(0, 1, 0).ok
    assert not pos.place_order(11, 1, 0).ok
    assert not pos.place_order("abc", 1, 0).ok
    assert len(pos.cart_lines) == 1


def test_order_snapshot_status_and_timestamp(pos):
    fill_cart(pos, "A", "B")

    pos.place_order(2, 1, 0)

    [order] = pos.orders.orders
    assert order.status == OrderStatus.PENDING
    assert order.table_id == 2
    assert [line.item_id for line in order.items] == ["A", "B"]
    assert order.created_at == FIXED_INSTANT.isoformat()
    assert pos.last_order is order
    assert pos.cart_lines == []


def test_stock_decrement_matches_cart_lines_across_orders(pos):
    fill_cart(pos, "B", "B", "W")
    pos.place_order(1, 2, 0)
    fill_cart(pos, "B", "C")
    pos.place_order(2, 1, 1)
    fill_cart(pos, "B")
    pos.place_order(1, 3, 0)

    assert pos.menu.find_item("B").stock == 10 - 4
    assert pos.menu.find_item("W").stock == 20 - 1
    assert pos.menu.find_item("C").stock == 5 - 1
    assert pos.menu.find_item("A").stock == 2


def test_second_order_accumulates_and_last_party_size_wins(pos):
    fill_cart(pos, "A", "B")
    pos.place_order(5, 4, 2)
    fill_cart(pos, "W")
    pos.place_order(5, 1, 0)

    table = pos.table(5)
    assert [line.item_id for line in table.items] == ["A", "B", "W"]
    assert table.total == 500 + 800 + 150
    assert (table.adults, table.children) == (1, 0)
    assert len(pos.orders.for_table(5)) == 2
    assert_table_totals_consistent(pos)


def test_order_ids_are_unique_within_one_instant(pos):
    for table_id in (1, 2, 3):
        fill_cart(pos, "W")
        pos.place_order(table_id, 1, 0)

    ids = [order.order_id for order in pos.orders.orders]
    assert len(set(ids)) == 3


def test_new_order_leaves_ready_orders_untouched(pos):
    fill_cart(pos, "B")
    pos.place_order(1, 1, 0)
    first = pos.orders.orders[0]
    pos.mark_order_ready(first.order_id)

    fill_cart(pos, "W")
    pos.place_order(1, 1, 0)

    statuses = [order.status for order in pos.orders.for_table(1)]
    assert statuses == [OrderStatus.READY, OrderStatus.PENDING]


def test_place_order_events_carry_the_order(pos, recorder):
    fill_cart(pos, "B")
    recorder.events.clear()

    outcome = pos.place_order(1, 1, 0)

    assert outcome.events == (ORDER_PLACED, CART_UPDATED)
    assert recorder.events[0] == (ORDER_PLACED, pos.last_order)


def test_mark_order_ready(pos, recorder):
    fill_cart(pos, "B")
    pos.place_order(1, 1, 0)
    order_id = pos.orders.orders[0].order_id

    assert pos.mark_order_ready(order_id).ok
    assert pos.orders.orders[0].status == OrderStatus.READY
    assert pos.orders.pending() == []


def test_mark_unknown_order_is_silent(pos, recorder):
    recorder.events.clear()

    outcome = pos.mark_order_ready(123)

    assert not outcome.ok
    assert recorder.events == []
