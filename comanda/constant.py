"""Editable bundled menu, used when no stored or remote menu is available."""

from __future__ import annotations

DEFAULT_MENU: dict[str, list[dict[str, object]]] = {
    "categories": [
        {
            "id": "starters",
            "name": "Entradas",
            "items": [
                {"id": "empanada_carne", "name": "Empanada de carne", "price": 1200, "stock": 48},
                {"id": "empanada_jyq", "name": "Empanada jamon y queso", "price": 1200, "stock": 48},
                {"id": "provoleta", "name": "Provoleta", "price": 4500, "stock": 20},
            ],
        },
        {
            "id": "mains",
            "name": "Principales",
            "items": [
                {"id": "bife_chorizo", "name": "Bife de chorizo", "price": 12500, "stock": 25},
                {"id": "milanesa_napo", "name": "Milanesa napolitana", "price": 9800, "stock": 30},
                {"id": "ravioles", "name": "Ravioles de ricota", "price": 8200, "stock": 20},
                {"id": "pollo_grill", "name": "Pollo a la parrilla", "price": 8900, "stock": 20},
            ],
        },
        {
            "id": "desserts",
            "name": "Postres",
            "items": [
                {"id": "flan", "name": "Flan con dulce de leche", "price": 3500, "stock": 15},
                {"id": "panqueque", "name": "Panqueque con dulce de leche", "price": 3800, "stock": 15},
            ],
        },
        {
            "id": "beverages",
            "name": "Bebidas",
            "items": [
                {"id": "agua", "name": "Agua mineral", "price": 1500, "stock": 60},
                {"id": "gaseosa", "name": "Gaseosa", "price": 2000, "stock": 60},
                {"id": "cerveza", "name": "Cerveza", "price": 3000, "stock": 48},
                {"id": "vino_copa", "name": "Copa de vino", "price": 3200, "stock": 40},
            ],
        },
    ]
}
