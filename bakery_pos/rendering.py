"""Rendering helpers shared by the terminal screens."""

from __future__ import annotations

from datetime import datetime

from rich.text import Text

from bakery_pos.config import ALCOHOL_FROM, CURRENCY_SYMBOL, EAT_IN_UNTIL, LOW_STOCK_BADGE_AT
from bakery_pos.models import CartLine, InventoryRecord, Product, RestockRequest, RestockStatus

_TYPE_TAGS = {"food": "F", "drink": "D", "alcohol": "A", "merchandise": "M"}


def format_yen(amount: int) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(amount):,}"


def badge_style(product_type: str) -> str:
    """Return a consistent badge style for product type tags."""
    if product_type == "alcohol":
        return "bold #ffffff on #b23a48"
    if product_type == "drink":
        return "bold #ffffff on #2f6db5"
    if product_type == "merchandise":
        return "bold #1f1400 on #e0b040"
    return "bold #0b1f0f on #5fbf72"


def format_product_row(product: Product, available: int | None, alcohol_ok: bool) -> Text:
    """Render a catalog row with its type tag, price and stock badge."""
    text = Text()
    text.append(_TYPE_TAGS.get(product.type, "?"), style=badge_style(product.type))
    text.append(f" {product.name}  {format_yen(product.price)}")

    if product.is_alcoholic and not alcohol_ok:
        text.append(f"  [from {ALCOHOL_FROM:%H:%M}]", style="dim")
    elif available is not None and available <= 0:
        text.append("  [SOLD OUT]", style="bold red")
    elif available is not None and available <= LOW_STOCK_BADGE_AT:
        text.append(f"  [{available} left]", style="yellow")
    elif available is not None:
        text.append(f"  [stock {available}]", style="dim")
    return text


def format_cart_line(line: CartLine) -> Text:
    text = Text()
    text.append(_TYPE_TAGS.get(line.product.type, "?"), style=badge_style(line.product.type))
    text.append(f" {line.product.name}")
    text.append(f"  x{line.quantity}", style="bold")
    text.append(f"  {format_yen(line.subtotal)}")
    return text


def format_clock(now: datetime, simulated: bool) -> Text:
    text = Text()
    text.append(now.strftime("%Y-%m-%d %H:%M:%S"), style="bold")
    if simulated:
        text.append("  SIMULATED", style="bold #1f1400 on #e0b040")
    return text


def format_gates(alcohol_ok: bool, eat_in_ok: bool) -> Text:
    text = Text()
    text.append("Alcohol ", style="dim")
    text.append("OPEN" if alcohol_ok else f"from {ALCOHOL_FROM:%H:%M}", style="green" if alcohol_ok else "red")
    text.append("   Eat-in ", style="dim")
    text.append("OPEN" if eat_in_ok else f"closed {EAT_IN_UNTIL:%H:%M}", style="green" if eat_in_ok else "red")
    return text


def format_order_type(order_type: str, eat_in_ok: bool) -> Text:
    text = Text()
    for value, label in (("eat-in", "Eat-in"), ("takeaway", "Takeaway")):
        if value != "eat-in":
            text.append("  ")
        if value == order_type:
            text.append(f"[{label}]", style="bold reverse")
        elif value == "eat-in" and not eat_in_ok:
            text.append(f" {label} ", style="dim strike")
        else:
            text.append(f" {label} ")
    return text


def format_inventory_row(product: Product, record: InventoryRecord | None) -> Text:
    text = Text()
    text.append(f"{product.name:<18}")
    if not product.is_stock_managed:
        text.append("untracked", style="dim")
        return text
    if record is None:
        text.append("no record", style="red")
        return text
    qty_style = "bold red" if record.is_low else "bold"
    text.append(f"{record.current_quantity:>5}", style=qty_style)
    text.append(f"  min {record.min_threshold:>3}", style="dim")
    text.append(f"  {record.last_updated:%H:%M}", style="dim")
    if record.is_low:
        text.append("  LOW", style="bold #ffffff on #b23a48")
    return text


def restock_status_style(status: RestockStatus) -> str:
    if status is RestockStatus.PENDING:
        return "bold #1f1400 on #e0b040"
    if status is RestockStatus.DELIVERED:
        return "bold #0b1f0f on #5fbf72"
    return "bold #ffffff on #666666"


def format_restock_row(request: RestockRequest) -> Text:
    text = Text()
    text.append(f" {request.status.value} ", style=restock_status_style(request.status))
    text.append(f" {request.product_name} +{request.request_quantity}")
    text.append(f"  eta {request.eta_at:%H:%M}", style="dim")
    if request.note:
        text.append(f"  ({request.note})", style="italic")
    return text


def window_bounds(total: int, rows: int, selected: int | None) -> tuple[int, int]:
    """Visible slice of a list so the selected row stays centered."""
    if total <= 0:
        return (0, 0)

    rows = max(1, rows)
    if total <= rows:
        return (0, total)

    if selected is None:
        start = 0
    else:
        half = rows // 2
        start = selected - half
        start = max(0, start)
        start = min(start, total - rows)

    return (start, start + rows)


def render_window(rows: list[Text], visible: int, selected: int | None) -> Text:
    """Join rows with a pointer on the selected one and ellipses when clipped."""
    start, end = window_bounds(len(rows), visible, selected)
    lines = Text()
    if start > 0:
        lines.append("⋮\n", style="dim")

    for idx in range(start, end):
        if idx > start:
            lines.append("\n")
        pointer = "➤ " if idx == selected else "  "
        lines.append(pointer)
        lines.append_text(rows[idx])

    if end < len(rows):
        lines.append("\n⋮", style="dim")
    return lines
