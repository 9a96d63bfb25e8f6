from datetime import datetime

import pytest

from bakery_pos.cart import Cart
from bakery_pos.models import Order, Outcome
from bakery_pos.orders import OrderLedger, place_order
from tests.conftest import BREAD, COFFEE, CROISSANT


@pytest.fixture
def cart(inventory, time_source):
    return Cart(inventory, time_source)


@pytest.fixture
def ledger():
    return OrderLedger()


def checkout(cart, inventory, ledger, time_source, received, order_type="takeaway"):
    return place_order(cart, inventory, ledger, time_source, order_type, "cash", received)


def test_empty_cart_is_rejected_without_side_effects(cart, inventory, ledger, time_source):
    result = checkout(cart, inventory, ledger, time_source, 0)

    assert result.outcome is Outcome.EMPTY_CART
    assert result.order is None
    assert not result
    assert len(ledger) == 0


def test_order_snapshot_and_totals(cart, inventory, ledger, time_source):
    cart.add_selection(BREAD)
    cart.change_quantity("bread", 1)
    cart.add_selection(COFFEE)

    result = checkout(cart, inventory, ledger, time_source, 1000, order_type="eat-in")

    order = result.order
    assert result.ok
    assert order.total_amount == sum(item.unit_price * item.quantity for item in order.items) == 950
    assert order.change_amount == order.payment_received - order.total_amount == 50
    assert order.order_type == "eat-in"
    assert order.payment_method == "cash"
    assert [(item.product_id, item.quantity, item.unit_price) for item in order.items] == [
        ("bread", 2, 300),
        ("coffee", 1, 350),
    ]


def test_underpayment_is_not_validated(cart, inventory, ledger, time_source):
    cart.add_selection(BREAD)

    order = checkout(cart, inventory, ledger, time_source, 100).order

    assert order.change_amount == -200


def test_order_time_comes_from_simulated_clock(cart, inventory, ledger, time_source, clock):
    time_source.simulate(19, 45)
    clock.instant = datetime(2026, 10, 18, 8, 0)
    cart.add_selection(BREAD)

    order = checkout(cart, inventory, ledger, time_source, 300).order

    assert order.order_time == datetime(2026, 10, 18, 19, 45)


def test_only_stock_managed_lines_decrement_inventory(cart, inventory, ledger, time_source):
    cart.add_selection(BREAD)
    cart.add_selection(COFFEE)

    checkout(cart, inventory, ledger, time_source, 650)

    assert inventory.record("bread").current_quantity == 4
    assert inventory.record("coffee") is None


def test_decrement_is_not_revalidated_at_commit(cart, inventory, ledger, time_source):
    cart.add_selection(CROISSANT)
    inventory.adjust("croissant", 0)

    result = checkout(cart, inventory, ledger, time_source, 250)

    assert result.ok
    assert inventory.record("croissant").current_quantity == -1


def test_commit_clears_cart_and_prepends_to_ledger(cart, inventory, ledger, time_source):
    cart.add_selection(BREAD)
    first = checkout(cart, inventory, ledger, time_source, 300).order
    cart.add_selection(COFFEE)
    second = checkout(cart, inventory, ledger, time_source, 350).order

    assert cart.is_empty
    assert ledger.orders() == [second, first]
    assert ledger.version == 2
    assert ledger.get(first.order_id) is first


def test_order_ids_stay_unique_for_the_same_instant(cart, inventory, ledger, time_source):
    cart.add_selection(COFFEE)
    first = checkout(cart, inventory, ledger, time_source, 350).order
    cart.add_selection(COFFEE)
    second = checkout(cart, inventory, ledger, time_source, 350).order

    assert first.order_id.startswith("ORD-")
    assert second.order_id == f"{first.order_id}-2"


def test_order_is_frozen_against_later_cart_changes(cart, inventory, ledger, time_source):
    cart.add_selection(BREAD)
    order = checkout(cart, inventory, ledger, time_source, 300).order
    cart.add_selection(BREAD)
    cart.change_quantity("bread", 2)

    assert order.items[0].quantity == 1
    with pytest.raises(AttributeError):
        order.total_amount = 0  # type: ignore[misc]


def test_unknown_order_type_or_payment_is_rejected(cart, inventory, ledger, time_source):
    cart.add_selection(BREAD)

    bad_type = place_order(cart, inventory, ledger, time_source, "delivery", "cash", 300)
    bad_payment = place_order(cart, inventory, ledger, time_source, "takeaway", "card", 300)

    assert bad_type.outcome is Outcome.INVALID_STATE
    assert bad_payment.outcome is Outcome.INVALID_STATE
    assert cart.quantity_of("bread") == 1
    assert inventory.record("bread").current_quantity == 5


def test_ledger_refuses_duplicate_ids():
    ledger = OrderLedger()
    order = Order("ORD-1", datetime(2026, 1, 1), "takeaway", (), 0, "cash", 0, 0)
    ledger.append(order)

    with pytest.raises(ValueError):
        ledger.append(order)
