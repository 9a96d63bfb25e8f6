from datetime import datetime

from bakery_pos.catalog import StaticCatalog
from bakery_pos.clock import TimeSource
from bakery_pos.models import Outcome
from bakery_pos.store import PosStore
from tests.conftest import BEER, BREAD, CATEGORIES, COFFEE, FakeClock, PRODUCTS


def make_store(stock, instant=datetime(2026, 10, 18, 12, 0)):
    return PosStore(
        catalog=StaticCatalog(PRODUCTS, CATEGORIES),
        time_source=TimeSource(FakeClock(instant)),
        stock=stock,
    )


def test_scenario_a_add_change_and_place_order():
    store = make_store({"bread": (5, 1)})
    assert store.cart.is_empty

    assert store.add_selection(BREAD)
    assert len(store.cart) == 1
    assert store.cart.quantity_of("bread") == 1

    assert store.change_quantity("bread", 1)
    assert store.cart.quantity_of("bread") == 2

    result = store.place_order("takeaway", "cash", 600)

    assert result.ok
    assert result.order.total_amount == 600
    assert store.inventory.record("bread").current_quantity == 3
    assert store.cart.is_empty


def test_scenario_b_alcohol_follows_simulated_time(store):
    store.simulate_time(10, 0)
    result = store.add_selection(BEER)
    assert result.outcome is Outcome.POLICY_VIOLATION
    assert store.cart.is_empty

    store.simulate_time(18, 0)
    assert store.add_selection(BEER)
    assert store.cart.quantity_of("beer") == 1


def test_scenario_c_eat_in_switches_to_takeaway_at_cutoff(store):
    store.simulate_time(20, 0)
    assert store.select_order_type("eat-in")
    assert store.order_type == "eat-in"

    store.simulate_time(20, 31)

    assert not store.eat_in_allowed
    assert store.order_type == "takeaway"


def test_scenario_d_restock_delivery_uses_live_reading():
    store = make_store({"bread": (2, 3)})
    request = store.restock.create_request("bread", 10)
    store.adjust_inventory("bread", 5)

    store.restock.confirm_delivery(request.request_id)

    assert store.inventory.record("bread").current_quantity == 15


def test_gate_properties_track_clock(store):
    store.time_source.pin(datetime(2026, 10, 18, 16, 59, 59))
    assert not store.alcohol_allowed
    assert store.eat_in_allowed

    store.time_source.pin(datetime(2026, 10, 18, 20, 30, 0))
    assert store.alcohol_allowed
    assert not store.eat_in_allowed

    store.reset_time()
    assert not store.is_simulated
    assert store.now() == datetime(2026, 10, 18, 12, 0)


def test_add_selection_by_id(store):
    assert store.add_selection("bread")
    assert store.add_selection("ghost").outcome is Outcome.NOT_FOUND


def test_checkout_state_machine(store):
    assert store.begin_checkout().outcome is Outcome.EMPTY_CART
    assert not store.is_processing

    store.add_selection(BREAD)
    assert store.begin_checkout()
    assert store.is_processing
    assert store.begin_checkout().outcome is Outcome.CHECKOUT_IN_PROGRESS

    result = store.complete_checkout()

    assert result.ok
    assert not store.is_processing
    assert result.order.payment_received == result.order.total_amount == 300
    assert result.order.change_amount == 0
    assert result.order.order_type == "takeaway"


def test_checkout_uses_active_order_type(store):
    store.simulate_time(12, 0)
    store.select_order_type("eat-in")
    store.add_selection(BREAD)
    store.begin_checkout()

    assert store.complete_checkout().order.order_type == "eat-in"


def test_cart_is_frozen_while_checkout_is_processing(store):
    store.add_selection(BREAD)
    store.begin_checkout()

    assert store.add_selection(COFFEE).outcome is Outcome.CHECKOUT_IN_PROGRESS
    assert store.add_selection("coffee").outcome is Outcome.CHECKOUT_IN_PROGRESS
    assert store.change_quantity("bread", 1).outcome is Outcome.CHECKOUT_IN_PROGRESS
    assert store.remove_selection("bread").outcome is Outcome.CHECKOUT_IN_PROGRESS
    assert store.clear_cart().outcome is Outcome.CHECKOUT_IN_PROGRESS

    order = store.complete_checkout().order

    assert order.total_amount == 300
    assert [(item.product_id, item.quantity) for item in order.items] == [("bread", 1)]
    # Idle again: the cart accepts changes.
    assert store.add_selection(COFFEE)


def test_search_filters_by_name_and_category(store):
    assert [p.product_id for p in store.search("cro")] == ["croissant"]
    assert [p.product_id for p in store.search(category_id="drinks")] == ["coffee", "beer"]
    assert [p.product_id for p in store.search("BREAD", "bakery")] == ["bread"]
    assert "old_tart" not in {p.product_id for p in store.search()}


def test_seed_catalog_store_builds():
    store = PosStore(time_source=TimeSource(FakeClock(datetime(2026, 10, 18, 18, 0))))

    assert store.products()
    assert store.categories()
    assert store.inventory.record("blend_coffee") is None
    assert store.inventory.record("shokupan").current_quantity > 0
    assert store.add_selection("craft_beer")
