"""Shared fixtures: a controllable wall clock and a small bakery catalog."""

from __future__ import annotations

from datetime import datetime

import pytest

from bakery_pos.catalog import StaticCatalog
from bakery_pos.clock import TimeSource
from bakery_pos.inventory import InventoryLedger
from bakery_pos.models import Category, Product
from bakery_pos.store import PosStore


class FakeClock:
    """Wall clock that only moves when a test moves it."""

    def __init__(self, instant: datetime) -> None:
        self.instant = instant

    def __call__(self) -> datetime:
        return self.instant


BREAD = Product("bread", "Bread", 300, "bakery", "food")
CROISSANT = Product("croissant", "Croissant", 250, "bakery", "food")
MUFFIN = Product("muffin", "Muffin", 200, "bakery", "food")
COFFEE = Product("coffee", "Coffee", 350, "drinks", "drink")
BEER = Product("beer", "Beer", 600, "drinks", "alcohol", is_alcoholic=True)
TOTE = Product("tote", "Tote Bag", 1200, "goods", "merchandise")
OLD_TART = Product("old_tart", "Old Tart", 180, "bakery", "food", is_active=False)

PRODUCTS = [BREAD, CROISSANT, MUFFIN, COFFEE, BEER, TOTE, OLD_TART]
CATEGORIES = [Category("bakery", "Bakery"), Category("drinks", "Drinks"), Category("goods", "Goods")]
# Muffin is stock-managed but deliberately has no record.
STOCK = {"bread": (5, 2), "croissant": (1, 3), "tote": (0, 1), "old_tart": (4, 1)}


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 10, 18, 12, 0, 0))


@pytest.fixture
def time_source(clock):
    return TimeSource(clock)


@pytest.fixture
def inventory(time_source):
    return InventoryLedger.from_stock(time_source, PRODUCTS, STOCK)


@pytest.fixture
def catalog():
    return StaticCatalog(PRODUCTS, CATEGORIES)


@pytest.fixture
def store(catalog, time_source):
    return PosStore(catalog=catalog, time_source=time_source, stock=STOCK)
