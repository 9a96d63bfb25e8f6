"""Catalog provider interface and the static seed catalog."""

from __future__ import annotations

from typing import Protocol

from bakery_pos.constant import CATEGORY_NAMES, OPENING_STOCK, PRODUCTS_BY_ID
from bakery_pos.models import Category, Product


class CatalogProvider(Protocol):
    """Supplies the product and category snapshot for a session."""

    def list_products(self) -> list[Product]:
        ...

    def list_categories(self) -> list[Category]:
        ...


def _product_from_meta(product_id: str, meta: dict[str, str | int | bool]) -> Product:
    return Product(
        product_id=product_id,
        name=str(meta["name"]),
        price=int(meta["price"]),
        category_id=str(meta["category_id"]),
        type=str(meta["type"]),  # type: ignore[arg-type]
        is_alcoholic=bool(meta.get("is_alcoholic", False)),
        is_active=bool(meta.get("is_active", True)),
    )


class StaticCatalog:
    """Catalog served from in-process data; defaults to the seed catalog."""

    def __init__(
        self,
        products: list[Product] | None = None,
        categories: list[Category] | None = None,
    ) -> None:
        if products is None:
            products = [_product_from_meta(product_id, meta) for product_id, meta in PRODUCTS_BY_ID.items()]
        if categories is None:
            categories = [Category(category_id, name) for category_id, name in CATEGORY_NAMES.items()]
        self._products = list(products)
        self._categories = list(categories)

    def list_products(self) -> list[Product]:
        return list(self._products)

    def list_categories(self) -> list[Category]:
        return list(self._categories)


def opening_stock() -> dict[str, tuple[int, int]]:
    """Return a copy of the seed opening stock keyed by product id."""
    return dict(OPENING_STOCK)


def filter_products(products: list[Product], query: str = "", category_id: str | None = None) -> list[Product]:
    """Active products whose name contains `query` (case-insensitive) in the given category."""
    q = query.strip().lower()
    return [
        product
        for product in products
        if product.is_active
        and (not q or q in product.name.lower())
        and (category_id is None or product.category_id == category_id)
    ]
