"""Inventory ledger for stock-managed products."""

from __future__ import annotations

import logging
from typing import Iterable

from bakery_pos.clock import TimeSource
from bakery_pos.config import DEFAULT_RESTOCK_QUANTITY
from bakery_pos.models import InventoryRecord, Product

logger = logging.getLogger(__name__)


class InventoryLedger:
    """Stock quantity and reorder threshold per stock-managed product.

    Drinks and alcohol have no record and always count as available.
    Quantities have no lower bound: order fulfilment trusts the checks done
    while the cart was built, and `adjust` is how drift gets corrected.
    """

    def __init__(self, time_source: TimeSource, records: Iterable[InventoryRecord] = ()) -> None:
        self._time_source = time_source
        self._records: dict[str, InventoryRecord] = {}
        for record in records:
            self._records[record.product_id] = record

    @classmethod
    def from_stock(
        cls,
        time_source: TimeSource,
        products: Iterable[Product],
        stock: dict[str, tuple[int, int]],
    ) -> InventoryLedger:
        """Build records for the stock-managed products listed in `stock`."""
        now = time_source.now()
        records = [
            InventoryRecord(product.product_id, stock[product.product_id][0], stock[product.product_id][1], now)
            for product in products
            if product.is_stock_managed and product.product_id in stock
        ]
        return cls(time_source, records)

    def record(self, product_id: str) -> InventoryRecord | None:
        return self._records.get(product_id)

    def records(self) -> list[InventoryRecord]:
        return list(self._records.values())

    def availability(self, product: Product) -> int | None:
        """Current quantity, or None for untracked products (unlimited).

        A stock-managed product without a record reports 0.
        """
        if not product.is_stock_managed:
            return None
        record = self._records.get(product.product_id)
        if record is None:
            return 0
        return record.current_quantity

    def adjust(self, product_id: str, new_quantity: int) -> bool:
        record = self._records.get(product_id)
        if record is None:
            logger.info("inventory_adjust_skipped product_id=%r reason=no_record", product_id)
            return False
        record.current_quantity = new_quantity
        record.last_updated = self._time_source.now()
        logger.info("inventory_adjust product_id=%r qty=%d", product_id, new_quantity)
        return True

    def decrement(self, product_id: str, amount: int) -> None:
        record = self._records.get(product_id)
        if record is None:
            return
        record.current_quantity -= amount
        if record.current_quantity < 0:
            logger.warning("inventory_negative product_id=%r qty=%d", product_id, record.current_quantity)

    def increment(self, product_id: str, amount: int) -> bool:
        """Add `amount` on top of whatever quantity is on hand right now."""
        record = self._records.get(product_id)
        if record is None:
            return False
        return self.adjust(product_id, record.current_quantity + amount)

    def recommended_restock(self, product_id: str) -> int:
        """Suggested request size: refill up to twice the threshold."""
        record = self._records.get(product_id)
        if record is None:
            return DEFAULT_RESTOCK_QUANTITY
        return max(1, record.min_threshold * 2 - record.current_quantity)
