"""JSON-compatible codecs for persisted collections.

Field names follow the stored blob format (``id``, ``tableId``, ``timestamp``)
so existing data keeps loading. Decoders raise ``KeyError``, ``TypeError`` or
``ValueError`` on malformed input; callers decide whether that means absence.
"""

from __future__ import annotations

from itertools import repeat
from typing import Any

from comanda.models import (
    CartLine,
    Category,
    Menu,
    MenuItem,
    Order,
    OrderStatus,
    Sale,
    Session,
    Table,
    TableStatus,
)
from comanda.parsing import parse_int


def _object(raw: Any, what: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise TypeError(f"{what} entry must be an object, got {type(raw).__name__}")
    return raw


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return float(value)
    return value


def menu_to_dict(menu: Menu) -> dict[str, Any]:
    return {
        "categories": [
            {
                "id": category.category_id,
                "name": category.name,
                "items": [
                    {"id": item.item_id, "name": item.name, "price": item.price, "stock": item.stock}
                    for item in category.items
                ],
            }
            for category in menu.categories
        ]
    }


def menu_from_dict(raw: Any) -> Menu:
    """Build a menu; a payload without a ``categories`` list is rejected."""
    if not isinstance(raw, dict) or not isinstance(raw.get("categories"), list):
        raise ValueError("menu payload has no categories")
    categories = []
    for raw_category in raw["categories"]:
        raw_category = _object(raw_category, "category")
        items = [
            MenuItem(
                item_id=str(raw_item["id"]),
                name=str(raw_item["name"]),
                price=_number(raw_item.get("price", 0)),
                stock=parse_int(raw_item.get("stock", 0)),
            )
            for raw_item in map(_object, raw_category.get("items", []), repeat("menu item"))
        ]
        categories.append(
            Category(
                category_id=str(raw_category["id"]),
                name=str(raw_category.get("name", raw_category["id"])),
                items=items,
            )
        )
    return Menu(categories=categories)


def line_to_dict(line: CartLine) -> dict[str, Any]:
    return {"id": line.item_id, "name": line.name, "price": line.price}


def line_from_dict(raw: Any) -> CartLine:
    raw = _object(raw, "line")
    return CartLine(item_id=str(raw["id"]), name=str(raw["name"]), price=_number(raw["price"]))


def orders_to_list(orders: list[Order]) -> list[dict[str, Any]]:
    return [
        {
            "id": order.order_id,
            "tableId": order.table_id,
            "items": [line_to_dict(line) for line in order.items],
            "status": order.status.value,
            "timestamp": order.created_at,
        }
        for order in orders
    ]


def orders_from_list(raw: Any) -> list[Order]:
    if not isinstance(raw, list):
        raise TypeError("orders payload must be a list")
    return [
        Order(
            order_id=int(entry["id"]),
            table_id=int(entry["tableId"]),
            items=[line_from_dict(line) for line in entry["items"]],
            status=OrderStatus(entry.get("status", OrderStatus.PENDING.value)),
            created_at=str(entry.get("timestamp", "")),
        )
        for entry in map(_object, raw, repeat("order"))
    ]


def tables_to_dict(tables: dict[int, Table]) -> dict[str, Any]:
    return {
        str(table_id): {
            "items": [line_to_dict(line) for line in table.items],
            "total": table.total,
            "status": table.status.value,
            "adults": table.adults,
            "children": table.children,
        }
        for table_id, table in sorted(tables.items())
    }


def tables_from_dict(raw: Any) -> dict[int, Table]:
    if not isinstance(raw, dict):
        raise TypeError("tables payload must be an object")
    tables: dict[int, Table] = {}
    for key, entry in raw.items():
        table_id = int(key)
        entry = _object(entry, "table")
        tables[table_id] = Table(
            table_id=table_id,
            status=TableStatus(entry.get("status", TableStatus.FREE.value)),
            items=[line_from_dict(line) for line in entry.get("items", [])],
            total=_number(entry.get("total", 0)),
            adults=parse_int(entry.get("adults")),
            children=parse_int(entry.get("children")),
        )
    return tables


def sales_to_list(sales: list[Sale]) -> list[dict[str, Any]]:
    return [
        {
            "id": sale.sale_id,
            "tableId": sale.table_id,
            "items": [line_to_dict(line) for line in sale.items],
            "total": sale.total,
            "adults": sale.adults,
            "children": sale.children,
            "timestamp": sale.closed_at,
        }
        for sale in sales
    ]


def sales_from_list(raw: Any) -> list[Sale]:
    if not isinstance(raw, list):
        raise TypeError("sales payload must be a list")
    return [
        Sale(
            sale_id=int(entry["id"]),
            table_id=int(entry["tableId"]),
            items=tuple(line_from_dict(line) for line in entry["items"]),
            total=_number(entry["total"]),
            adults=parse_int(entry.get("adults")),
            children=parse_int(entry.get("children")),
            closed_at=str(entry.get("timestamp", "")),
        )
        for entry in map(_object, raw, repeat("sale"))
    ]


def session_to_dict(session: Session) -> dict[str, Any]:
    return {"user": session.user, "role": session.role, "timestamp": session.timestamp}


def session_from_dict(raw: Any) -> Session:
    if not isinstance(raw, dict):
        raise TypeError("session payload must be an object")
    return Session(user=str(raw.get("user", "")), role=str(raw.get("role") or ""), timestamp=int(raw.get("timestamp", 0)))
