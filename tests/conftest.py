from __future__ import annotations

from datetime import datetime, timezone

import pytest

from comanda.clock import FrozenClock
from comanda.events import NotificationBus
from comanda.persistence import KeyValueStore
from comanda.pos import PointOfSale

FIXED_INSTANT = datetime(2026, 3, 14, 20, 30, tzinfo=timezone.utc)


def sample_menu_payload() -> dict:
    return {
        "categories": [
            {
                "id": "mains",
                "name": "Principales",
                "items": [
                    {"id": "A", "name": "Milanesa", "price": 500, "stock": 2},
                    {"id": "B", "name": "Ravioles", "price": 800, "stock": 10},
                    {"id": "Z", "name": "Agotado", "price": 300, "stock": 0},
                ],
            },
            {
                "id": "beverages",
                "name": "Bebidas",
                "items": [
                    {"id": "W", "name": "Agua", "price": 150, "stock": 20},
                    {"id": "C", "name": "Cerveza", "price": 300, "stock": 5},
                ],
            },
        ]
    }


class EventRecorder:
    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []

    def __call__(self, event: str, payload: object) -> None:
        self.events.append((event, payload))

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.events]


@pytest.fixture
def store(tmp_path) -> KeyValueStore:
    return KeyValueStore(str(tmp_path / "comanda.db"))


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(FIXED_INSTANT)


@pytest.fixture
def bus() -> NotificationBus:
    return NotificationBus()


@pytest.fixture
def recorder(bus) -> EventRecorder:
    recorder = EventRecorder()
    bus.subscribe_all(recorder)
    return recorder


@pytest.fixture
def make_pos(store, bus, clock):
    def factory(**kwargs) -> PointOfSale:
        options = {
            "bus": bus,
            "clock": clock,
            "total_tables": 10,
            "menu_fetcher": None,
            "menu_fallback": sample_menu_payload,
        }
        options.update(kwargs)
        pos = PointOfSale(store, **options)
        pos.start()
        return pos

    return factory


@pytest.fixture
def pos(make_pos) -> PointOfSale:
    return make_pos()


def fill_cart(pos: PointOfSale, *item_ids: str) -> None:
    for item_id in item_ids:
        assert pos.add_to_cart(item_id).ok, item_id


def assert_table_totals_consistent(pos: PointOfSale) -> None:
    for table in pos.tables.all():
        assert table.total == sum(line.price for line in table.items)
