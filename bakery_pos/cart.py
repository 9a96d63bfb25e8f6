"""Cart built from catalog selections under stock and time-of-day rules."""

from __future__ import annotations

import logging

from bakery_pos.clock import TimeSource
from bakery_pos.config import ALCOHOL_FROM
from bakery_pos.inventory import InventoryLedger
from bakery_pos.models import CartLine, CartResult, Outcome, Product
from bakery_pos.policy import alcohol_allowed

logger = logging.getLogger(__name__)


class Cart:
    """Insertion-ordered cart lines, at most one per product.

    Quantities of stock-managed products never exceed the ledger's quantity
    at the time of the mutation. Decrementing stops at 1; removing a line
    is always an explicit `remove_selection`.
    """

    def __init__(self, inventory: InventoryLedger, time_source: TimeSource) -> None:
        self._inventory = inventory
        self._time_source = time_source
        self._lines: dict[str, CartLine] = {}

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._lines

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def lines(self) -> list[CartLine]:
        return list(self._lines.values())

    def quantity_of(self, product_id: str) -> int:
        line = self._lines.get(product_id)
        return line.quantity if line is not None else 0

    def total(self) -> int:
        return sum(line.subtotal for line in self._lines.values())

    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def add_selection(self, product: Product) -> CartResult:
        if product.is_alcoholic and not alcohol_allowed(self._time_source.now()):
            logger.info("cart_add_rejected product_id=%r reason=alcohol_gate", product.product_id)
            return CartResult(Outcome.POLICY_VIOLATION, f"Alcohol can only be sold from {ALCOHOL_FROM:%H:%M}")

        available = self._inventory.availability(product)
        if available is not None and available <= 0:
            logger.info("cart_add_rejected product_id=%r reason=out_of_stock", product.product_id)
            return CartResult(Outcome.STOCK_EXHAUSTED, f"{product.name} is out of stock")

        line = self._lines.get(product.product_id)
        if line is None:
            self._lines[product.product_id] = CartLine(product=product, quantity=1)
            logger.info("cart_add product_id=%r qty=1", product.product_id)
            return CartResult(Outcome.OK)

        if available is not None and line.quantity + 1 > available:
            logger.info("cart_add_rejected product_id=%r reason=stock_limit qty=%d", product.product_id, line.quantity)
            return CartResult(Outcome.STOCK_EXHAUSTED, f"Only {available} {product.name} in stock")

        line.quantity += 1
        logger.info("cart_add product_id=%r qty=%d", product.product_id, line.quantity)
        return CartResult(Outcome.OK)

    def change_quantity(self, product_id: str, delta: int) -> CartResult:
        line = self._lines.get(product_id)
        if line is None:
            return CartResult(Outcome.NOT_FOUND, "Item is not in the cart")

        new_quantity = line.quantity + delta
        if new_quantity <= 0:
            return CartResult(Outcome.INVALID_STATE, "Quantity cannot go below 1; remove the item instead")

        available = self._inventory.availability(line.product)
        if available is not None and new_quantity > available:
            logger.info("cart_change_rejected product_id=%r reason=stock_limit qty=%d", product_id, new_quantity)
            return CartResult(Outcome.STOCK_EXHAUSTED, f"Only {available} {line.product.name} in stock")

        line.quantity = new_quantity
        logger.info("cart_change product_id=%r qty=%d", product_id, new_quantity)
        return CartResult(Outcome.OK)

    def remove_selection(self, product_id: str) -> None:
        if self._lines.pop(product_id, None) is not None:
            logger.info("cart_remove product_id=%r", product_id)

    def clear(self) -> None:
        self._lines.clear()
