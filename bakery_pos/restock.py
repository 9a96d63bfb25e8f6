"""Factory restock requests and their delivery into the inventory ledger."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from bakery_pos.clock import TimeSource
from bakery_pos.config import RESTOCK_ETA_MINUTES
from bakery_pos.inventory import InventoryLedger
from bakery_pos.models import Outcome, Product, RestockRequest, RestockResult, RestockStatus

logger = logging.getLogger(__name__)


class RestockWorkflow:
    """PENDING requests move once, to DELIVERED or CANCELLED.

    Delivery adds the requested quantity to the stock on hand at
    confirmation time, not to the stock seen when the request was made.
    """

    def __init__(self, inventory: InventoryLedger, time_source: TimeSource, products: list[Product]) -> None:
        self._inventory = inventory
        self._time_source = time_source
        self._products = {product.product_id: product for product in products}
        self._requests: list[RestockRequest] = []

    def requests(self) -> list[RestockRequest]:
        return list(self._requests)

    def pending(self) -> list[RestockRequest]:
        return [request for request in self._requests if request.is_pending]

    def get(self, request_id: str) -> RestockRequest | None:
        for request in self._requests:
            if request.request_id == request_id:
                return request
        return None

    def create_request(
        self,
        product_id: str,
        quantity: int,
        eta: datetime | None = None,
        note: str | None = None,
    ) -> RestockRequest:
        product = self._products.get(product_id)
        if product is None:
            raise ValueError(f"unknown product {product_id!r}")
        if not product.is_stock_managed:
            raise ValueError(f"{product_id!r} is not stock-managed")

        created_at = self._time_source.now()
        request = RestockRequest(
            request_id=self._next_request_id(created_at),
            product_id=product_id,
            product_name=product.name,
            request_quantity=max(1, quantity),
            created_at=created_at,
            eta_at=eta or created_at + timedelta(minutes=RESTOCK_ETA_MINUTES),
            note=(note or "").strip() or None,
        )
        self._requests.insert(0, request)
        logger.info(
            "restock_created request_id=%r product_id=%r qty=%d",
            request.request_id,
            product_id,
            request.request_quantity,
        )
        return request

    def cancel(self, request_id: str) -> RestockResult:
        request = self.get(request_id)
        if request is None:
            return RestockResult(Outcome.NOT_FOUND, message=f"No restock request {request_id}")
        if not request.is_pending:
            return RestockResult(Outcome.INVALID_STATE, request, f"Request is already {request.status.value}")
        request.status = RestockStatus.CANCELLED
        logger.info("restock_cancelled request_id=%r", request_id)
        return RestockResult(Outcome.OK, request)

    def confirm_delivery(self, request_id: str) -> RestockResult:
        request = self.get(request_id)
        if request is None:
            return RestockResult(Outcome.NOT_FOUND, message=f"No restock request {request_id}")
        if not request.is_pending:
            return RestockResult(Outcome.INVALID_STATE, request, f"Request is already {request.status.value}")
        self._inventory.increment(request.product_id, request.request_quantity)
        request.status = RestockStatus.DELIVERED
        logger.info("restock_delivered request_id=%r qty=%d", request_id, request.request_quantity)
        return RestockResult(Outcome.OK, request)

    def _next_request_id(self, created_at: datetime) -> str:
        base = f"FR-{int(created_at.timestamp() * 1000)}"
        taken = {request.request_id for request in self._requests}
        request_id = base
        suffix = 1
        while request_id in taken:
            suffix += 1
            request_id = f"{base}-{suffix}"
        return request_id
