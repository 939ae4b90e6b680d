"""Kitchen ticket printing on a USB ESC/POS thermal printer."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from comanda.config import (
    PRINTER_FONT_PATH,
    PRINTER_FONT_SIZE,
    PRINTER_LEFT_INDENT_PX,
    PRINTER_USB_PRODUCT_ID,
    PRINTER_USB_VENDOR_ID,
    PRINTER_WIDTH_PX,
)
from comanda.events import ORDER_PLACED
from comanda.models import CartLine, Order

logger = logging.getLogger(__name__)

# Extra vertical headroom so descenders are not clipped on thermal output.
_LINE_EXTRA_PX = 24
_TAIL_SPACER_PX = 60
_FONT_OVERRIDE_ENV = "COMANDA_PRINTER_FONT_PATH"
_LINUX_FONT_FALLBACKS = (
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/noto/NotoSans-Regular.ttf",
    "/usr/share/fonts/liberation/LiberationSans-Regular.ttf",
)


@dataclass
class TicketRow:
    name: str
    count: int
    first_seen_index: int


def group_ticket_rows(lines: list[CartLine]) -> list[TicketRow]:
    """Collapse repeated items into one row with a count, keeping first-seen order."""
    rows: dict[str, TicketRow] = {}
    for idx, line in enumerate(lines):
        row = rows.get(line.item_id)
        if row is None:
            rows[line.item_id] = TicketRow(name=line.name, count=1, first_seen_index=idx)
        else:
            row.count += 1
    return sorted(rows.values(), key=lambda row: row.first_seen_index)


def ticket_lines(order: Order) -> list[str]:
    header = f"Mesa {order.table_id}"
    body = [row.name if row.count == 1 else f"{row.count} x {row.name}" for row in group_ticket_rows(order.items)]
    return [header, *body]


def resolve_printer_font_path() -> str:
    """
    Resolve a printer font path.

    Resolution order:
    1. COMANDA_PRINTER_FONT_PATH (if set)
    2. PRINTER_FONT_PATH
    3. Known Linux fallbacks
    """
    env_override = os.environ.get(_FONT_OVERRIDE_ENV, "").strip()
    candidates: list[str] = []
    if env_override:
        candidates.append(env_override)
    candidates.append(PRINTER_FONT_PATH)
    candidates.extend(_LINUX_FONT_FALLBACKS)

    seen: set[str] = set()
    for candidate in candidates:
        if not candidate or candidate in seen:
            continue
        seen.add(candidate)
        if Path(candidate).is_file():
            return candidate

    raise RuntimeError(
        f"No usable printer font found. Set {_FONT_OVERRIDE_ENV} to a valid .ttf/.otf file. "
        f"Tried: {', '.join(seen)}"
    )


def check_printer_dependencies() -> tuple[bool, str]:
    """Check whether printer dependencies are importable."""
    try:
        from escpos.printer import Usb  # noqa: F401
        from PIL import ImageFont

        ImageFont.truetype(resolve_printer_font_path(), max(10, PRINTER_FONT_SIZE // 2))
    except Exception as exc:
        return (False, f"Printer unavailable: {exc}")
    return (True, "Printer ready")


def _render_line(text: str, font: Any) -> Any:
    from PIL import Image, ImageDraw

    canvas_height = PRINTER_FONT_SIZE + _LINE_EXTRA_PX
    img = Image.new("1", (PRINTER_WIDTH_PX, canvas_height), color=1)
    draw = ImageDraw.Draw(img)
    bbox = draw.textbbox((0, 0), text, font=font)
    text_height = bbox[3] - bbox[1]
    # Offset by bbox top so the glyphs sit centred in the strip.
    y = (canvas_height - text_height) // 2 - bbox[1]
    draw.text((PRINTER_LEFT_INDENT_PX, y), text, font=font, fill=0)
    return img


def _render_rule() -> Any:
    from PIL import Image, ImageDraw

    img = Image.new("1", (PRINTER_WIDTH_PX, 12), color=1)
    ImageDraw.Draw(img).rectangle((0, 4, PRINTER_WIDTH_PX - 1, 7), fill=0)
    return img


def print_order_ticket(order: Order) -> None:
    """Print one kitchen ticket for ``order`` and cut."""
    if not order.items:
        return
    try:
        from escpos.printer import Usb
        from PIL import Image, ImageFont
    except ImportError as exc:
        raise RuntimeError(f"Printer dependencies unavailable: {exc}") from exc

    printer = Usb(PRINTER_USB_VENDOR_ID, PRINTER_USB_PRODUCT_ID)
    font = ImageFont.truetype(resolve_printer_font_path(), PRINTER_FONT_SIZE)
    header, *body = ticket_lines(order)
    printer.image(_render_line(header, font))
    printer.image(_render_rule())
    for text in body:
        printer.image(_render_line(text, font))
    printer.image(Image.new("1", (PRINTER_WIDTH_PX, _TAIL_SPACER_PX), color=1))
    printer.cut()


class KitchenPrinter:
    """Bus listener that prints a ticket for every placed order."""

    def __init__(self) -> None:
        self.last_error: str | None = None

    def __call__(self, event: str, payload: Any) -> None:
        if event != ORDER_PLACED or not isinstance(payload, Order):
            return
        try:
            print_order_ticket(payload)
        except Exception as exc:
            # A failed print never undoes the order; the UI shows the error.
            self.last_error = str(exc)
            logger.exception("ticket print failed for order %d", payload.order_id)
            return
        self.last_error = None
