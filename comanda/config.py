"""Runtime configuration defaults for storage, menu sources and printing."""

from __future__ import annotations

import os

DB_PATH = os.getenv("COMANDA_DB_PATH", "data/comanda.db")
STORAGE_PREFIX = "md_"
LOG_PATH = os.getenv("COMANDA_LOG_PATH", "/tmp/comanda-debug.log")

TOTAL_TABLES = int(os.getenv("COMANDA_TOTAL_TABLES", 10))
BEVERAGE_CATEGORY_ID = os.getenv("COMANDA_BEVERAGE_CATEGORY", "beverages")

MENU_URL = os.getenv("COMANDA_MENU_URL", "http://localhost:8000/data/menu.json")
MENU_FETCH_TIMEOUT_SECONDS = float(os.getenv("COMANDA_MENU_FETCH_TIMEOUT", 5.0))

# Shared staff password; any user with this password gets the requested role.
SHARED_PASSWORD = os.getenv("COMANDA_SHARED_PASSWORD", "1234")

PRINT_TICKETS = os.getenv("COMANDA_PRINT_TICKETS", "0") == "1"
PRINTER_USB_VENDOR_ID = 0x28E9
PRINTER_USB_PRODUCT_ID = 0x0289
PRINTER_WIDTH_PX = 384
PRINTER_FONT_SIZE = 48
PRINTER_FONT_PATH = "/System/Library/Fonts/SFNS.ttf"
PRINTER_LEFT_INDENT_PX = 16
