from __future__ import annotations

from conftest import fill_cart


def test_sold_report_uses_historical_prices(pos):
    fill_cart(pos, "B", "B", "W")
    pos.place_order(1, 2, 0)
    pos.close_table(1)
    pos.menu.find_item("B").price = 1000
    fill_cart(pos, "B")
    pos.place_order(2, 1, 0)
    pos.close_table(2)

    report = pos.sold_report()

    assert report["B"].quantity == 3
    assert report["B"].revenue == 800 + 800 + 1000
    assert report["W"].quantity == 1
    assert report["W"].revenue == 150


def test_sold_report_ignores_open_tables(pos):
    fill_cart(pos, "B")
    pos.place_order(1, 1, 0)

    assert pos.sold_report() == {}


def test_sold_report_is_keyed_by_item_id_not_name(pos):
    fill_cart(pos, "W")
    pos.place_order(1, 1, 0)
    pos.close_table(1)
    pos.menu.find_item("W").name = "Agua con gas"
    fill_cart(pos, "W")
    pos.place_order(1, 1, 0)
    pos.close_table(1)

    report = pos.sold_report()

    assert list(report) == ["W"]
    assert report["W"].quantity == 2
    assert report["W"].name == "Agua"


def test_beverage_stock_report_reconstructs_opening_stock(pos):
    fill_cart(pos, "W", "W", "C")
    pos.place_order(1, 2, 0)
    pos.close_table(1)
    fill_cart(pos, "C")
    pos.place_order(2, 1, 0)

    report = {line.item_id: line for line in pos.beverage_stock_report()}

    assert report["W"].current_stock == 18
    assert report["W"].sold_today == 2
    assert report["W"].total_stock == 20
    # table 2 is still open, so its beer is out of stock but not sold yet
    assert report["C"].current_stock == 3
    assert report["C"].sold_today == 1
    assert report["C"].total_stock == 4


def test_beverage_stock_report_without_category(make_pos):
    pos = make_pos(beverage_category_id="drinks")

    assert pos.beverage_stock_report() == []


def test_set_stock_parses_and_clamps(pos, recorder):
    assert pos.set_stock("B", "7").ok
    assert pos.menu.find_item("B").stock == 7
    assert pos.set_stock("B", "-3").ok
    assert pos.menu.find_item("B").stock == 0
    assert pos.set_stock("B", "lots").ok
    assert pos.menu.find_item("B").stock == 0
    assert pos.set_stock("B", 12.8).ok
    assert pos.menu.find_item("B").stock == 12
    assert not pos.set_stock("missing", 3).ok
    assert recorder.names.count("menu-updated") == 4
