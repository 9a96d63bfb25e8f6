"""Runtime configuration defaults for policy gates, printing and logging."""

from __future__ import annotations

import logging
import os
from datetime import time
from pathlib import Path

SHOP_NAME = "Bakery POS"
CURRENCY_SYMBOL = "¥"

ALCOHOL_FROM = time(17, 0)
EAT_IN_UNTIL = time(20, 30)

CHECKOUT_DELAY_SECONDS = float(os.environ.get("BAKERY_POS_CHECKOUT_DELAY", "0.8"))
CLOCK_TICK_SECONDS = 1.0
RESTOCK_ETA_MINUTES = 5
DEFAULT_RESTOCK_QUANTITY = 10
# Catalog rows show "only N left" at or below this stock.
LOW_STOCK_BADGE_AT = 5

PRINTER_USB_VENDOR_ID = 0x28E9
PRINTER_USB_PRODUCT_ID = 0x0289
PRINTER_WIDTH_PX = 384
PRINTER_FONT_SIZE = 28
PRINTER_FONT_PATH = "/System/Library/Fonts/SFNS.ttf"
PRINTER_FONT_ENV = "BAKERY_POS_PRINTER_FONT_PATH"
PRINTER_LEFT_INDENT_PX = 16

DEBUG_LOG_PATH = os.environ.get("BAKERY_POS_DEBUG_LOG", "/tmp/bakery-pos-debug.log")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(path: str | None = None, level: int = logging.DEBUG) -> logging.Handler:
    """Send bakery_pos logs to the debug log file.

    The terminal owns stdout, so nothing is logged to the console.
    """
    log_path = Path(path or DEBUG_LOG_PATH)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("bakery_pos")
    logger.setLevel(level)
    logger.addHandler(handler)
    return handler
