"""Bundled menu data."""

from __future__ import annotations

import copy
from typing import Any

from comanda.constant import DEFAULT_MENU
from comanda.models import Menu
from comanda.serialization import menu_from_dict


def default_menu_payload() -> dict[str, Any]:
    """Return a private copy of the bundled menu payload."""
    return copy.deepcopy(DEFAULT_MENU)


def default_menu() -> Menu:
    return menu_from_dict(default_menu_payload())
