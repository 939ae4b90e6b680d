"""Menu acquisition: stored copy, then the remote menu, then the bundled default."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

import httpx

from comanda.config import MENU_FETCH_TIMEOUT_SECONDS, MENU_URL
from comanda.data import default_menu_payload
from comanda.errors import MenuUnavailableError
from comanda.models import Menu
from comanda.persistence import StateRepository
from comanda.serialization import menu_from_dict

logger = logging.getLogger(__name__)

MenuFetcher = Callable[[], Any]


def fetch_remote_menu(url: str = MENU_URL, timeout: float = MENU_FETCH_TIMEOUT_SECONDS) -> Any:
    """GET the menu JSON, bypassing intermediate caches."""
    response = httpx.get(url, params={"v": int(time.time() * 1000)}, timeout=timeout)
    response.raise_for_status()
    return response.json()


def acquire_menu(
    repository: StateRepository,
    fetcher: MenuFetcher | None = fetch_remote_menu,
    fallback: Callable[[], Any] | None = default_menu_payload,
) -> tuple[Menu, str]:
    """Return the menu and the name of the tier it came from.

    The remote and bundled tiers persist what they load. Raises
    ``MenuUnavailableError`` when every tier fails.
    """
    stored = repository.load_menu()
    if stored is not None:
        logger.info("menu loaded from storage")
        return stored, "storage"

    if fetcher is not None:
        try:
            menu = menu_from_dict(fetcher())
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
            logger.warning("remote menu unavailable (%s); trying bundled default", exc)
        else:
            repository.save_menu(menu)
            logger.info("menu loaded from remote source and saved")
            return menu, "remote"

    if fallback is not None:
        try:
            menu = menu_from_dict(fallback())
        except (ValueError, KeyError, TypeError) as exc:
            raise MenuUnavailableError(f"Bundled default menu is malformed: {exc}") from exc
        repository.save_menu(menu)
        logger.info("menu loaded from bundled default")
        return menu, "bundled"

    raise MenuUnavailableError("No menu source available (storage empty, fetch failed, no bundled default)")
