"""Rendering helpers for the terminal UI."""

from __future__ import annotations

from rich.text import Text

from comanda.models import BeverageStockLine, CartLine, DaySummary, MenuItem, Order, OrderStatus, SoldItem, Table


def format_money(amount: float) -> str:
    """Format as pesos with dot thousands separators, e.g. ``$ 12.500``."""
    whole = int(round(amount))
    sign = "-" if whole < 0 else ""
    return f"{sign}$ {abs(whole):,}".replace(",", ".")


def stock_style(stock: int) -> str:
    if stock <= 0:
        return "bold #ffffff on #b23a48"
    if stock <= 5:
        return "bold #0b1f0f on #e0b84a"
    return "bold #0b1f0f on #5fbf72"


def format_menu_item(item: MenuItem) -> Text:
    text = Text()
    text.append(f" {item.stock:>3} ", style=stock_style(item.stock))
    text.append(f" {item.name}  ")
    text.append(format_money(item.price), style="dim")
    return text


def format_cart_line(line: CartLine) -> Text:
    text = Text(line.name)
    text.append(f"  {format_money(line.price)}", style="dim")
    return text


def format_table(table: Table) -> Text:
    text = Text()
    if table.is_free:
        text.append(f"Mesa {table.table_id:>2}  libre", style="dim")
        return text
    text.append(f"Mesa {table.table_id:>2}", style="bold")
    text.append(f"  {len(table.items)} items  {format_money(table.total)}")
    text.append(f"  ({table.adults}A {table.children}N)", style="dim")
    return text


def format_order(order: Order) -> Text:
    text = Text()
    if order.status == OrderStatus.READY:
        text.append(" LISTO ", style="bold #0b1f0f on #5fbf72")
    else:
        text.append(" COCINA ", style="bold #ffffff on #b23a48")
    text.append(f" Mesa {order.table_id}: ")
    text.append(", ".join(line.name for line in order.items))
    return text


def format_reports(sold: dict[str, SoldItem], beverages: list[BeverageStockLine], summary: DaySummary) -> Text:
    text = Text()
    text.append("Day\n", style="bold")
    text.append(
        f"  {summary.sales_count} tables closed, {summary.covers} covers, revenue {format_money(summary.revenue)}\n\n"
    )

    text.append("Items sold\n", style="bold")
    if not sold:
        text.append("  (none)\n", style="dim")
    for row in sorted(sold.values(), key=lambda row: (-row.quantity, row.name)):
        text.append(f"  {row.quantity:>3} x {row.name}  {format_money(row.revenue)}\n")

    text.append("\nBeverage stock\n", style="bold")
    if not beverages:
        text.append("  (no beverage category)\n", style="dim")
    for line in beverages:
        text.append(f"  {line.name}: {line.current_stock} left, {line.sold_today} sold, {line.total_stock} at opening\n")
    return text
