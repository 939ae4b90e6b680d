"""Entry point for the comanda Textual app."""

from __future__ import annotations

import logging
import sys

from comanda.config import DB_PATH, PRINT_TICKETS
from comanda.errors import MenuUnavailableError
from comanda.logging_setup import configure_logging
from comanda.persistence import KeyValueStore
from comanda.pos import PointOfSale
from comanda.pos_app import ComandaApp
from comanda.printer import KitchenPrinter, check_printer_dependencies
from comanda.session import SessionGate

logger = logging.getLogger(__name__)


def main() -> None:
    """Load the menu, replay stored state and run the terminal UI."""
    configure_logging()
    store = KeyValueStore(DB_PATH)
    pos = PointOfSale(store)
    try:
        pos.start()
    except MenuUnavailableError as exc:
        print(f"Cannot start: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    printer = None
    if PRINT_TICKETS:
        ok, message = check_printer_dependencies()
        logger.info("printer status: %s", message)
        if ok:
            printer = KitchenPrinter()

    ComandaApp(pos, SessionGate(store), printer=printer).run()


if __name__ == "__main__":
    main()
