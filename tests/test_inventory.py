from datetime import datetime

from bakery_pos.inventory import InventoryLedger
from bakery_pos.reports import low_stock
from tests.conftest import BEER, BREAD, COFFEE, MUFFIN, PRODUCTS, STOCK, TOTE


def test_records_exist_only_for_stock_managed_products(inventory):
    assert {record.product_id for record in inventory.records()} == {"bread", "croissant", "tote", "old_tart"}
    assert inventory.record("coffee") is None


def test_from_stock_skips_untracked_products_even_if_listed(time_source):
    ledger = InventoryLedger.from_stock(time_source, PRODUCTS, {**STOCK, "coffee": (9, 1)})
    assert ledger.record("coffee") is None


def test_availability(inventory):
    assert inventory.availability(BREAD) == 5
    assert inventory.availability(TOTE) == 0
    assert inventory.availability(COFFEE) is None
    assert inventory.availability(BEER) is None
    assert inventory.availability(MUFFIN) == 0


def test_adjust_sets_quantity_and_stamps_current_instant(inventory, time_source):
    time_source.simulate(15, 45)

    assert inventory.adjust("bread", 11)

    record = inventory.record("bread")
    assert record.current_quantity == 11
    assert record.last_updated == datetime(2026, 10, 18, 15, 45)


def test_adjust_allows_negative_corrections(inventory):
    assert inventory.adjust("bread", -2)
    assert inventory.record("bread").current_quantity == -2


def test_adjust_unknown_product_is_a_no_op(inventory):
    assert not inventory.adjust("coffee", 3)
    assert inventory.record("coffee") is None


def test_decrement_does_not_validate_sufficiency(inventory):
    inventory.decrement("bread", 7)
    assert inventory.record("bread").current_quantity == -2


def test_decrement_untracked_product_is_ignored(inventory):
    inventory.decrement("coffee", 3)
    assert inventory.record("coffee") is None


def test_increment_reads_live_quantity(inventory):
    inventory.adjust("bread", 8)

    assert inventory.increment("bread", 4)

    assert inventory.record("bread").current_quantity == 12


def test_low_stock_and_recommendation(inventory):
    low = {record.product_id for record in low_stock(inventory.records(), PRODUCTS)}
    assert low == {"croissant", "tote"}

    # croissant: threshold 3, stock 1 -> 3 * 2 - 1
    assert inventory.recommended_restock("croissant") == 5
    # bread: 2 * 2 - 5 is negative, floor at 1
    assert inventory.recommended_restock("bread") == 1
    assert inventory.recommended_restock("muffin") == 10
