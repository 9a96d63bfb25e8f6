"""The POS store: one owned state container handed to the terminal."""

from __future__ import annotations

import logging
from datetime import datetime

from bakery_pos.cart import Cart
from bakery_pos.catalog import CatalogProvider, StaticCatalog, filter_products, opening_stock
from bakery_pos.clock import TimeSource
from bakery_pos.inventory import InventoryLedger
from bakery_pos.models import (
    CartResult,
    Category,
    OrderResult,
    OrderType,
    Outcome,
    PaymentMethod,
    Product,
)
from bakery_pos.orders import OrderLedger, place_order
from bakery_pos.policy import OrderTypeSelector, alcohol_allowed, eat_in_allowed
from bakery_pos.restock import RestockWorkflow

logger = logging.getLogger(__name__)


class PosStore:
    """Catalog snapshot, cart, inventory, order history and the clock.

    Views hold a reference to the store and go through its operations;
    nothing outside this package mutates the ledgers directly.
    """

    def __init__(
        self,
        catalog: CatalogProvider | None = None,
        time_source: TimeSource | None = None,
        stock: dict[str, tuple[int, int]] | None = None,
    ) -> None:
        catalog = catalog or StaticCatalog()
        self.time_source = time_source or TimeSource()
        # Loaded once; the catalog is a fixed snapshot for the session.
        self._products = catalog.list_products()
        self._categories = catalog.list_categories()
        self._products_by_id = {product.product_id: product for product in self._products}

        self.inventory = InventoryLedger.from_stock(
            self.time_source,
            self._products,
            opening_stock() if stock is None else stock,
        )
        self.cart = Cart(self.inventory, self.time_source)
        self.orders = OrderLedger()
        self.restock = RestockWorkflow(self.inventory, self.time_source, self._products)
        self._order_type = OrderTypeSelector(self.time_source)
        self._processing = False

    # Catalog

    def products(self) -> list[Product]:
        return list(self._products)

    def categories(self) -> list[Category]:
        return list(self._categories)

    def product(self, product_id: str) -> Product | None:
        return self._products_by_id.get(product_id)

    def search(self, query: str = "", category_id: str | None = None) -> list[Product]:
        return filter_products(self._products, query, category_id)

    # Time and gates

    def now(self) -> datetime:
        return self.time_source.now()

    @property
    def is_simulated(self) -> bool:
        return self.time_source.is_simulated

    @property
    def alcohol_allowed(self) -> bool:
        return alcohol_allowed(self.time_source.now())

    @property
    def eat_in_allowed(self) -> bool:
        return eat_in_allowed(self.time_source.now())

    def tick(self) -> None:
        self.time_source.tick()

    def simulate_time(self, hour: int, minute: int) -> datetime:
        return self.time_source.simulate(hour, minute)

    def reset_time(self) -> datetime:
        return self.time_source.reset()

    @property
    def order_type(self) -> OrderType:
        return self._order_type.order_type

    def select_order_type(self, order_type: OrderType) -> CartResult:
        return self._order_type.select(order_type)

    # Cart

    def _cart_locked(self) -> CartResult | None:
        if not self._processing:
            return None
        logger.info("cart_change_blocked reason=checkout_in_progress")
        return CartResult(Outcome.CHECKOUT_IN_PROGRESS, "Checkout in progress")

    def add_selection(self, product: Product | str) -> CartResult:
        locked = self._cart_locked()
        if locked is not None:
            return locked
        if isinstance(product, str):
            found = self.product(product)
            if found is None:
                return CartResult(Outcome.NOT_FOUND, f"Unknown product {product}")
            product = found
        return self.cart.add_selection(product)

    def change_quantity(self, product_id: str, delta: int) -> CartResult:
        locked = self._cart_locked()
        if locked is not None:
            return locked
        return self.cart.change_quantity(product_id, delta)

    def remove_selection(self, product_id: str) -> CartResult:
        locked = self._cart_locked()
        if locked is not None:
            return locked
        self.cart.remove_selection(product_id)
        return CartResult(Outcome.OK)

    def clear_cart(self) -> CartResult:
        locked = self._cart_locked()
        if locked is not None:
            return locked
        self.cart.clear()
        return CartResult(Outcome.OK)

    # Checkout

    @property
    def is_processing(self) -> bool:
        return self._processing

    def place_order(
        self,
        order_type: OrderType,
        payment_method: PaymentMethod,
        received_amount: int,
    ) -> OrderResult:
        return place_order(
            self.cart,
            self.inventory,
            self.orders,
            self.time_source,
            order_type,
            payment_method,
            received_amount,
        )

    def begin_checkout(self) -> OrderResult:
        """Enter Processing. Refuses while a checkout is in flight or the cart is empty."""
        if self._processing:
            logger.info("checkout_blocked reason=in_progress")
            return OrderResult(Outcome.CHECKOUT_IN_PROGRESS, message="Checkout already in progress")
        if self.cart.is_empty:
            return OrderResult(Outcome.EMPTY_CART, message="Cart is empty")
        self._processing = True
        logger.info("checkout_begin total=%d", self.cart.total())
        return OrderResult(Outcome.OK)

    def complete_checkout(self, payment_method: PaymentMethod = "cash") -> OrderResult:
        """Charge the exact cart total in cash and return to Idle."""
        try:
            return self.place_order(self.order_type, payment_method, self.cart.total())
        finally:
            self._processing = False

    # Inventory

    def adjust_inventory(self, product_id: str, new_quantity: int) -> bool:
        return self.inventory.adjust(product_id, new_quantity)

    def availability(self, product: Product) -> int | None:
        return self.inventory.availability(product)
