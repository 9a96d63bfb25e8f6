"""Receipt printing for committed orders on a USB thermal printer."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from bakery_pos.config import (
    PRINTER_FONT_ENV,
    PRINTER_FONT_PATH,
    PRINTER_FONT_SIZE,
    PRINTER_LEFT_INDENT_PX,
    PRINTER_USB_PRODUCT_ID,
    PRINTER_USB_VENDOR_ID,
    PRINTER_WIDTH_PX,
    SHOP_NAME,
)
from bakery_pos.models import Order
from bakery_pos.rendering import format_yen

logger = logging.getLogger(__name__)

_LINE_EXTRA_PX = 10
_RULE_HEIGHT_PX = 12
_RULE_TOKEN = "__RULE__"
_ORDER_TYPE_LABELS = {"eat-in": "Eat-in", "takeaway": "Takeaway"}
_LINUX_FONT_FALLBACKS = (
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/noto/NotoSans-Regular.ttf",
    "/usr/share/fonts/liberation/LiberationSans-Regular.ttf",
)


def render_receipt_lines(order: Order) -> list[str]:
    """Text lines of a receipt; `_RULE_TOKEN` marks a horizontal rule."""
    lines = [
        SHOP_NAME,
        order.order_time.strftime("%Y-%m-%d %H:%M"),
        f"{order.order_id}  {_ORDER_TYPE_LABELS.get(order.order_type, order.order_type)}",
        _RULE_TOKEN,
    ]
    for item in order.items:
        lines.append(item.name)
        lines.append(f"  {item.quantity} x {format_yen(item.unit_price)} = {format_yen(item.subtotal)}")
    lines.extend(
        [
            _RULE_TOKEN,
            f"Total {format_yen(order.total_amount)}",
            f"{order.payment_method.title()} {format_yen(order.payment_received)}",
            f"Change {format_yen(order.change_amount)}",
        ]
    )
    return lines


def resolve_printer_font_path() -> str:
    """
    Resolve a printer font path.

    Resolution order:
    1. BAKERY_POS_PRINTER_FONT_PATH (if set)
    2. PRINTER_FONT_PATH
    3. Known Linux fallbacks
    """
    env_override = os.environ.get(PRINTER_FONT_ENV, "").strip()
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
        f"No usable printer font found. Set {PRINTER_FONT_ENV} to a valid .ttf/.otf file. "
        f"Tried: {', '.join(seen)}"
    )


def check_printer_dependencies() -> tuple[bool, str]:
    """Check whether printer dependencies are importable."""
    try:
        from escpos.printer import Usb  # noqa: F401
        from PIL import ImageFont

        font_path = resolve_printer_font_path()
        ImageFont.truetype(font_path, PRINTER_FONT_SIZE)
    except Exception as exc:
        return (False, f"Printer unavailable: {exc}")
    return (True, "Printer ready")


def _render_line(text: str, font: object) -> object:
    from PIL import Image, ImageDraw

    probe = Image.new("1", (1, 1), color=1)
    bbox = ImageDraw.Draw(probe).textbbox((0, 0), text or " ", font=font)
    text_height = bbox[3] - bbox[1]
    canvas_height = max(12, text_height + _LINE_EXTRA_PX)

    img = Image.new("1", (PRINTER_WIDTH_PX, canvas_height), color=1)
    draw = ImageDraw.Draw(img)
    # Offset by bbox top so descenders are not clipped.
    y = (canvas_height - text_height) // 2 - bbox[1]
    draw.text((PRINTER_LEFT_INDENT_PX, y), text, font=font, fill=0)
    return img


def _render_rule() -> object:
    from PIL import Image, ImageDraw

    img = Image.new("1", (PRINTER_WIDTH_PX, _RULE_HEIGHT_PX), color=1)
    draw = ImageDraw.Draw(img)
    mid = _RULE_HEIGHT_PX // 2
    draw.line((PRINTER_LEFT_INDENT_PX, mid, PRINTER_WIDTH_PX - PRINTER_LEFT_INDENT_PX, mid), fill=0, width=2)
    return img


def render_receipt_images(order: Order, font: object) -> list[object]:
    return [_render_rule() if line == _RULE_TOKEN else _render_line(line, font) for line in render_receipt_lines(order)]


def print_receipt(order: Order, printer: object | None = None, font: object | None = None) -> None:
    """Print one receipt and cut the paper.

    Without an explicit printer the configured USB printer is opened.
    """
    try:
        from PIL import ImageFont
    except Exception as exc:
        raise RuntimeError(f"Printer dependencies unavailable: {exc}") from exc

    if printer is None:
        try:
            from escpos.printer import Usb
        except Exception as exc:
            raise RuntimeError(f"Printer dependencies unavailable: {exc}") from exc
        printer = Usb(PRINTER_USB_VENDOR_ID, PRINTER_USB_PRODUCT_ID)
    if font is None:
        font = ImageFont.truetype(resolve_printer_font_path(), PRINTER_FONT_SIZE)

    for img in render_receipt_images(order, font):
        printer.image(img)
    printer.cut()
    logger.info("receipt_printed order_id=%r", order.order_id)
