"""Read-only sales projections over the order history."""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Generic, Iterable, TypeVar

from bakery_pos.models import InventoryRecord, Order, Product

T = TypeVar("T")


@dataclass
class DailySummary:
    day: date
    total: int = 0
    eat_in: int = 0
    takeaway: int = 0
    count: int = 0
    orders: list[Order] = field(default_factory=list)


@dataclass
class ProductSales:
    product_id: str
    name: str
    quantity: int = 0
    sales: int = 0


@dataclass(frozen=True)
class Dashboard:
    day: date
    sales: int
    order_count: int
    average_ticket: int
    hourly_sales: tuple[int, ...]
    eat_in_sales: int
    takeaway_sales: int
    top_products: tuple[ProductSales, ...]
    low_stock: tuple[InventoryRecord, ...]


def daily_summary(orders: Iterable[Order]) -> list[DailySummary]:
    """Group orders by calendar day, newest day first."""
    days: dict[date, DailySummary] = {}
    for order in orders:
        day = order.order_time.date()
        entry = days.setdefault(day, DailySummary(day=day))
        entry.total += order.total_amount
        entry.count += 1
        entry.orders.append(order)
        if order.order_type == "eat-in":
            entry.eat_in += order.total_amount
        else:
            entry.takeaway += order.total_amount
    return sorted(days.values(), key=lambda entry: entry.day, reverse=True)


def product_analysis(orders: Iterable[Order]) -> list[ProductSales]:
    """Quantity and sales per product, best sellers by revenue first."""
    stats: OrderedDict[str, ProductSales] = OrderedDict()
    for order in orders:
        for item in order.items:
            entry = stats.get(item.product_id)
            if entry is None:
                entry = stats[item.product_id] = ProductSales(item.product_id, item.name)
            entry.quantity += item.quantity
            entry.sales += item.subtotal
    return sorted(stats.values(), key=lambda entry: entry.sales, reverse=True)


def orders_on(orders: Iterable[Order], day: date) -> list[Order]:
    return [order for order in orders if order.order_time.date() == day]


def hourly_sales(orders: Iterable[Order]) -> list[int]:
    buckets = [0] * 24
    for order in orders:
        buckets[order.order_time.hour] += order.total_amount
    return buckets


def top_products(orders: Iterable[Order], products: Iterable[Product], limit: int = 5) -> list[ProductSales]:
    """Best sellers by quantity, named from the current catalog."""
    names = {product.product_id: product.name for product in products}
    counts: OrderedDict[str, int] = OrderedDict()
    for order in orders:
        for item in order.items:
            counts[item.product_id] = counts.get(item.product_id, 0) + item.quantity
    ranked = sorted(counts.items(), key=lambda pair: pair[1], reverse=True)[:limit]
    return [ProductSales(product_id, names.get(product_id, "Unknown"), quantity) for product_id, quantity in ranked]


def low_stock(records: Iterable[InventoryRecord], products: Iterable[Product]) -> list[InventoryRecord]:
    managed = {product.product_id for product in products if product.is_stock_managed}
    return [record for record in records if record.product_id in managed and record.is_low]


def dashboard(
    orders: Iterable[Order],
    records: Iterable[InventoryRecord],
    products: Iterable[Product],
    day: date,
) -> Dashboard:
    products = list(products)
    todays = orders_on(orders, day)
    sales = sum(order.total_amount for order in todays)
    eat_in = sum(order.total_amount for order in todays if order.order_type == "eat-in")
    return Dashboard(
        day=day,
        sales=sales,
        order_count=len(todays),
        average_ticket=sales // len(todays) if todays else 0,
        hourly_sales=tuple(hourly_sales(todays)),
        eat_in_sales=eat_in,
        takeaway_sales=sales - eat_in,
        top_products=tuple(top_products(todays, products)),
        low_stock=tuple(low_stock(records, products)),
    )


class ReportCache(Generic[T]):
    """Memoize one projection, recomputed when the ledger version moves."""

    def __init__(self, compute: Callable[[], T]) -> None:
        self._compute = compute
        self._key: object = None
        self._value: T | None = None
        self._filled = False

    def get(self, key: object) -> T:
        if not self._filled or key != self._key:
            self._value = self._compute()
            self._key = key
            self._filled = True
        return self._value  # type: ignore[return-value]
