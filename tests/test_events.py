from __future__ import annotations

import pytest

from comanda.events import CART_UPDATED, ORDERS_UPDATED, NotificationBus


def test_subscribers_receive_only_their_event():
    bus = NotificationBus()
    seen = []
    bus.subscribe(ORDERS_UPDATED, lambda event, payload: seen.append((event, payload)))

    bus.emit(CART_UPDATED)
    bus.emit(ORDERS_UPDATED, 42)

    assert seen == [(ORDERS_UPDATED, 42)]


def test_unsubscribe_stops_delivery():
    bus = NotificationBus()
    seen = []
    unsubscribe = bus.subscribe_all(lambda event, payload: seen.append(event))

    bus.emit(CART_UPDATED)
    unsubscribe()
    bus.emit(CART_UPDATED)

    assert seen == [CART_UPDATED]


def test_failing_listener_does_not_block_others(caplog):
    bus = NotificationBus()
    seen = []

    def broken(event, payload):
        raise RuntimeError("boom")

    bus.subscribe(CART_UPDATED, broken)
    bus.subscribe(CART_UPDATED, lambda event, payload: seen.append(event))

    bus.emit(CART_UPDATED)

    assert seen == [CART_UPDATED]
    assert "failed on cart-updated" in caplog.text


def test_unknown_event_name_is_rejected():
    with pytest.raises(ValueError):
        NotificationBus().subscribe("order-cancelled", lambda event, payload: None)
