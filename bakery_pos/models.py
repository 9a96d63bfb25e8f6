"""Domain models for bakery-pos."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Literal

ProductType = Literal["food", "drink", "alcohol", "merchandise"]
OrderType = Literal["eat-in", "takeaway"]
PaymentMethod = Literal["cash"]

PRODUCT_TYPES: tuple[str, ...] = ("food", "drink", "alcohol", "merchandise")
ORDER_TYPES: tuple[str, ...] = ("eat-in", "takeaway")
PAYMENT_METHODS: tuple[str, ...] = ("cash",)

# Drinks and alcohol are prepared at the counter and never counted.
UNTRACKED_TYPES = frozenset({"drink", "alcohol"})


@dataclass(frozen=True)
class Category:
    """A catalog category."""

    category_id: str
    name: str


@dataclass(frozen=True)
class Product:
    """An immutable catalog record."""

    product_id: str
    name: str
    price: int
    category_id: str
    type: ProductType
    is_alcoholic: bool = False
    is_active: bool = True

    def __post_init__(self) -> None:
        if self.price < 0:
            raise ValueError(f"price must be non-negative for {self.product_id!r}")
        if self.type not in PRODUCT_TYPES:
            raise ValueError(f"unknown product type {self.type!r} for {self.product_id!r}")

    @property
    def is_stock_managed(self) -> bool:
        return self.type not in UNTRACKED_TYPES


@dataclass
class InventoryRecord:
    """Mutable stock state for one stock-managed product."""

    product_id: str
    current_quantity: int
    min_threshold: int
    last_updated: datetime

    @property
    def is_low(self) -> bool:
        return self.current_quantity <= self.min_threshold


@dataclass
class CartLine:
    """A product snapshot plus the quantity being bought."""

    product: Product
    quantity: int = 1

    @property
    def product_id(self) -> str:
        return self.product.product_id

    @property
    def subtotal(self) -> int:
        return self.product.price * self.quantity


@dataclass(frozen=True)
class OrderItem:
    """A frozen copy of one cart line, decoupled from later catalog changes."""

    product_id: str
    name: str
    quantity: int
    unit_price: int

    @property
    def subtotal(self) -> int:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Order:
    """A finalized order. Never mutated once appended to the ledger."""

    order_id: str
    order_time: datetime
    order_type: OrderType
    items: tuple[OrderItem, ...]
    total_amount: int
    payment_method: PaymentMethod
    payment_received: int
    change_amount: int

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)


class RestockStatus(str, Enum):
    PENDING = "PENDING"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


@dataclass
class RestockRequest:
    """A factory restock request. Status only moves out of PENDING once."""

    request_id: str
    product_id: str
    product_name: str
    request_quantity: int
    created_at: datetime
    eta_at: datetime
    note: str | None = None
    status: RestockStatus = RestockStatus.PENDING

    @property
    def is_pending(self) -> bool:
        return self.status is RestockStatus.PENDING


class Outcome(str, Enum):
    """Result kinds for store operations. Only OK means state changed."""

    OK = "ok"
    POLICY_VIOLATION = "policy_violation"
    STOCK_EXHAUSTED = "stock_exhausted"
    EMPTY_CART = "empty_cart"
    NOT_FOUND = "not_found"
    INVALID_STATE = "invalid_state"
    CHECKOUT_IN_PROGRESS = "checkout_in_progress"


@dataclass(frozen=True)
class CartResult:
    outcome: Outcome
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK

    def __bool__(self) -> bool:
        return self.ok


@dataclass(frozen=True)
class OrderResult:
    outcome: Outcome
    order: Order | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK

    def __bool__(self) -> bool:
        return self.ok


@dataclass(frozen=True)
class RestockResult:
    outcome: Outcome
    request: RestockRequest | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK

    def __bool__(self) -> bool:
        return self.ok
