from datetime import datetime, timedelta

import pytest

from bakery_pos.models import Outcome, RestockStatus
from bakery_pos.restock import RestockWorkflow
from tests.conftest import PRODUCTS


@pytest.fixture
def workflow(inventory, time_source):
    return RestockWorkflow(inventory, time_source, PRODUCTS)


def test_create_request_defaults(workflow, time_source):
    request = workflow.create_request("croissant", 10, note="  ")

    assert request.status is RestockStatus.PENDING
    assert request.product_name == "Croissant"
    assert request.request_id.startswith("FR-")
    assert request.created_at == time_source.now()
    assert request.eta_at == time_source.now() + timedelta(minutes=5)
    assert request.note is None
    assert workflow.pending() == [request]


def test_create_request_clamps_quantity_and_keeps_note(workflow):
    eta = datetime(2026, 10, 18, 12, 30)

    request = workflow.create_request("bread", 0, eta=eta, note=" before lunch ")

    assert request.request_quantity == 1
    assert request.eta_at == eta
    assert request.note == "before lunch"


def test_create_request_rejects_untracked_and_unknown_products(workflow):
    with pytest.raises(ValueError):
        workflow.create_request("coffee", 5)
    with pytest.raises(ValueError):
        workflow.create_request("nope", 5)


def test_newest_request_first_with_unique_ids(workflow):
    first = workflow.create_request("bread", 3)
    second = workflow.create_request("bread", 4)

    assert workflow.requests() == [second, first]
    assert first.request_id != second.request_id


def test_delivery_adds_to_live_stock(workflow, inventory):
    inventory.adjust("croissant", 2)
    request = workflow.create_request("croissant", 10)
    inventory.adjust("croissant", 5)

    result = workflow.confirm_delivery(request.request_id)

    assert result.ok
    assert request.status is RestockStatus.DELIVERED
    assert inventory.record("croissant").current_quantity == 15


def test_cancel_has_no_inventory_effect(workflow, inventory):
    request = workflow.create_request("croissant", 10)

    assert workflow.cancel(request.request_id)

    assert request.status is RestockStatus.CANCELLED
    assert inventory.record("croissant").current_quantity == 1
    assert workflow.pending() == []


def test_terminal_states_do_not_move(workflow, inventory):
    delivered = workflow.create_request("bread", 2)
    cancelled = workflow.create_request("bread", 3)
    workflow.confirm_delivery(delivered.request_id)
    workflow.cancel(cancelled.request_id)

    assert workflow.confirm_delivery(delivered.request_id).outcome is Outcome.INVALID_STATE
    assert workflow.cancel(delivered.request_id).outcome is Outcome.INVALID_STATE
    assert workflow.confirm_delivery(cancelled.request_id).outcome is Outcome.INVALID_STATE
    assert cancelled.status is RestockStatus.CANCELLED
    assert inventory.record("bread").current_quantity == 7


def test_unknown_request_id(workflow):
    assert workflow.cancel("FR-0").outcome is Outcome.NOT_FOUND
    assert workflow.confirm_delivery("FR-0").outcome is Outcome.NOT_FOUND
