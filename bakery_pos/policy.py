"""Time-of-day sales restrictions."""

from __future__ import annotations

import logging
from datetime import datetime

from bakery_pos.clock import TimeSource
from bakery_pos.config import ALCOHOL_FROM, EAT_IN_UNTIL
from bakery_pos.models import ORDER_TYPES, CartResult, OrderType, Outcome

logger = logging.getLogger(__name__)


def alcohol_allowed(instant: datetime) -> bool:
    """Alcohol may be sold from 17:00 on."""
    return instant.hour >= ALCOHOL_FROM.hour


def eat_in_allowed(instant: datetime) -> bool:
    """Eat-in closes at 20:30 sharp."""
    return instant.hour < EAT_IN_UNTIL.hour or (
        instant.hour == EAT_IN_UNTIL.hour and instant.minute < EAT_IN_UNTIL.minute
    )


class OrderTypeSelector:
    """Active order type for the next checkout.

    Watches the time source and falls back to takeaway as soon as the
    eat-in gate closes, whichever way the clock moved.
    """

    def __init__(self, time_source: TimeSource, order_type: OrderType = "takeaway") -> None:
        self._time_source = time_source
        self._order_type: OrderType = order_type
        time_source.subscribe(self._on_time_change)
        self._on_time_change(time_source.now())

    @property
    def order_type(self) -> OrderType:
        return self._order_type

    def select(self, order_type: OrderType) -> CartResult:
        if order_type not in ORDER_TYPES:
            return CartResult(Outcome.INVALID_STATE, f"Unknown order type: {order_type}")
        if order_type == "eat-in" and not eat_in_allowed(self._time_source.now()):
            logger.info("order_type_rejected order_type='eat-in'")
            return CartResult(Outcome.POLICY_VIOLATION, f"Eat-in is not available after {EAT_IN_UNTIL:%H:%M}")
        self._order_type = order_type
        return CartResult(Outcome.OK)

    def _on_time_change(self, instant: datetime) -> None:
        if self._order_type == "eat-in" and not eat_in_allowed(instant):
            self._order_type = "takeaway"
            logger.info("order_type_forced order_type='takeaway' at=%s", instant.isoformat())
