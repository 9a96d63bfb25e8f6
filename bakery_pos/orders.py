"""Order ledger and order finalization."""

from __future__ import annotations

import logging
from datetime import datetime

from bakery_pos.cart import Cart
from bakery_pos.clock import TimeSource
from bakery_pos.inventory import InventoryLedger
from bakery_pos.models import (
    ORDER_TYPES,
    PAYMENT_METHODS,
    Order,
    OrderItem,
    OrderResult,
    OrderType,
    Outcome,
    PaymentMethod,
)

logger = logging.getLogger(__name__)


class OrderLedger:
    """Append-only order history, most recent first."""

    def __init__(self) -> None:
        self._orders: list[Order] = []
        self._ids: set[str] = set()

    def __len__(self) -> int:
        return len(self._orders)

    @property
    def version(self) -> int:
        # Append-only, so the length identifies a ledger state.
        return len(self._orders)

    def orders(self) -> list[Order]:
        return list(self._orders)

    def get(self, order_id: str) -> Order | None:
        for order in self._orders:
            if order.order_id == order_id:
                return order
        return None

    def append(self, order: Order) -> None:
        if order.order_id in self._ids:
            raise ValueError(f"duplicate order id {order.order_id!r}")
        self._orders.insert(0, order)
        self._ids.add(order.order_id)

    def next_order_id(self, order_time: datetime) -> str:
        base = f"ORD-{int(order_time.timestamp() * 1000)}"
        order_id = base
        suffix = 1
        while order_id in self._ids:
            suffix += 1
            order_id = f"{base}-{suffix}"
        return order_id


def place_order(
    cart: Cart,
    inventory: InventoryLedger,
    ledger: OrderLedger,
    time_source: TimeSource,
    order_type: OrderType,
    payment_method: PaymentMethod,
    received_amount: int,
) -> OrderResult:
    """Freeze the cart into an Order, take the stock and clear the cart.

    The payment is not validated: change may be negative. Stock is
    decremented without re-checking the ledger, since every quantity was
    checked when the cart line was built.
    """
    if cart.is_empty:
        logger.info("order_rejected reason=empty_cart")
        return OrderResult(Outcome.EMPTY_CART, message="Cart is empty")
    if order_type not in ORDER_TYPES:
        return OrderResult(Outcome.INVALID_STATE, message=f"Unknown order type: {order_type}")
    if payment_method not in PAYMENT_METHODS:
        return OrderResult(Outcome.INVALID_STATE, message=f"Unsupported payment method: {payment_method}")

    lines = cart.lines()
    total_amount = cart.total()
    order_time = time_source.now()
    order = Order(
        order_id=ledger.next_order_id(order_time),
        order_time=order_time,
        order_type=order_type,
        items=tuple(
            OrderItem(
                product_id=line.product_id,
                name=line.product.name,
                quantity=line.quantity,
                unit_price=line.product.price,
            )
            for line in lines
        ),
        total_amount=total_amount,
        payment_method=payment_method,
        payment_received=received_amount,
        change_amount=received_amount - total_amount,
    )

    for line in lines:
        if line.product.is_stock_managed:
            inventory.decrement(line.product_id, line.quantity)

    ledger.append(order)
    cart.clear()
    logger.info(
        "order_committed order_id=%r total=%d items=%d type=%r",
        order.order_id,
        order.total_amount,
        order.item_count,
        order.order_type,
    )
    return OrderResult(Outcome.OK, order=order)
