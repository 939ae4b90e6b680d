from __future__ import annotations

import httpx
import pytest
from conftest import sample_menu_payload

from comanda import menu_loader
from comanda.errors import EngineNotReadyError, MenuUnavailableError
from comanda.events import MENU_LOADED
from comanda.menu_loader import acquire_menu, fetch_remote_menu
from comanda.persistence import MENU_KEY, StateRepository
from comanda.pos import PointOfSale


def _remote_payload() -> dict:
    payload = sample_menu_payload()
    payload["categories"][0]["items"][0]["name"] = "Remote milanesa"
    return payload


def _failing_fetcher():
    raise httpx.ConnectError("offline")


def test_stored_menu_wins(store):
    store.set(MENU_KEY, sample_menu_payload())

    menu, source = acquire_menu(StateRepository(store), fetcher=_remote_payload, fallback=None)

    assert source == "storage"
    assert menu.categories[0].items[0].name == "Milanesa"


def test_remote_menu_is_used_and_persisted(store):
    repository = StateRepository(store)

    menu, source = acquire_menu(repository, fetcher=_remote_payload, fallback=sample_menu_payload)

    assert source == "remote"
    assert menu.categories[0].items[0].name == "Remote milanesa"
    assert repository.load_menu() == menu


def test_bundled_default_when_fetch_fails(store):
    repository = StateRepository(store)

    menu, source = acquire_menu(repository, fetcher=_failing_fetcher, fallback=sample_menu_payload)

    assert source == "bundled"
    assert repository.load_menu() == menu


def test_stored_menu_without_categories_is_reacquired(store):
    store.set(MENU_KEY, {"items": []})

    _, source = acquire_menu(StateRepository(store), fetcher=_remote_payload, fallback=None)

    assert source == "remote"


def test_remote_payload_without_categories_falls_through(store):
    _, source = acquire_menu(StateRepository(store), fetcher=lambda: {"menu": []}, fallback=sample_menu_payload)

    assert source == "bundled"


def test_no_source_is_fatal(store, bus):
    pos = PointOfSale(store, bus=bus, menu_fetcher=_failing_fetcher, menu_fallback=None)

    with pytest.raises(MenuUnavailableError):
        pos.start()
    assert not pos.ready
    with pytest.raises(EngineNotReadyError):
        pos.add_to_cart("A")


def test_operations_before_start_raise(store):
    pos = PointOfSale(store, menu_fetcher=None)

    with pytest.raises(EngineNotReadyError):
        pos.place_order(1, 1, 0)
    with pytest.raises(EngineNotReadyError):
        pos.reset_day()


def test_start_signals_menu_loaded(recorder, pos):
    assert pos.ready
    assert recorder.names[0] == MENU_LOADED


def test_fetch_remote_menu_busts_caches(monkeypatch):
    seen = {}

    def fake_get(url, params, timeout):
        seen.update(url=url, params=params, timeout=timeout)
        return httpx.Response(200, json=_remote_payload(), request=httpx.Request("GET", url))

    monkeypatch.setattr(menu_loader.httpx, "get", fake_get)

    payload = fetch_remote_menu("http://menu.local/data/menu.json", timeout=2.0)

    assert payload == _remote_payload()
    assert seen["url"] == "http://menu.local/data/menu.json"
    assert isinstance(seen["params"]["v"], int)
    assert seen["timeout"] == 2.0


def test_fetch_remote_menu_raises_on_http_error(monkeypatch):
    def fake_get(url, params, timeout):
        return httpx.Response(404, request=httpx.Request("GET", url))

    monkeypatch.setattr(menu_loader.httpx, "get", fake_get)

    with pytest.raises(httpx.HTTPStatusError):
        fetch_remote_menu("http://menu.local/data/menu.json")


def test_reload_state_picks_up_external_writes(pos, make_pos, recorder):
    other = make_pos()
    other.add_to_cart("B")
    other.place_order(6, 2, 0)
    recorder.events.clear()

    outcome = pos.reload_state()

    assert outcome.ok
    assert pos.table(6).total == 800
    assert pos.menu.find_item("B").stock == 9
    assert recorder.names == ["state-reloaded"]


@pytest.mark.parametrize("payload", [{"nope": 1}, {"categories": ["mains"]}, None])
def test_malformed_bundled_default_is_fatal(store, payload):
    with pytest.raises(MenuUnavailableError):
        acquire_menu(StateRepository(store), fetcher=_failing_fetcher, fallback=lambda: payload)
    assert store.get(MENU_KEY) is None
