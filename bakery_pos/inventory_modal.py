"""Inventory and factory restock modal screen."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from bakery_pos.config import RESTOCK_ETA_MINUTES
from bakery_pos.models import Product
from bakery_pos.rendering import format_inventory_row, format_restock_row, render_window
from bakery_pos.store import PosStore
from bakery_pos.time_modal import DIGITS, parse_hhmm

logger = logging.getLogger(__name__)

_NOTE_MAX_LEN = 40
_FIELD_MAX_LEN = {"adjust": 5, "request": 4, "eta": 4}


class InventoryModal(ModalScreen[None]):
    """Stock table with manual adjustment, plus the factory request list.

    Stock pane: Enter edits the quantity, F raises a restock request (only
    for low stock), asking for quantity, ETA and an optional note in turn.
    Request pane: Enter confirms delivery, X cancels.
    """

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("ctrl+c", "close", "Close"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("tab", "switch_pane", "Switch pane"),
        ("enter", "activate", "Edit / Deliver"),
        ("f", "request_restock", "Factory request"),
        ("x", "cancel_request", "Cancel request"),
    ]

    CSS = """
    InventoryModal {
        align: center middle;
        background: $background 60%;
    }

    #inventory-dialog {
        width: 110;
        height: 80%;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #inventory-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #inventory-panes {
        height: 1fr;
    }

    #stock-list {
        width: 3fr;
        border: tall $surface;
        padding: 0 1;
        color: white;
    }

    #request-list {
        width: 2fr;
        border: tall $surface;
        padding: 0 1;
        color: white;
    }

    #inventory-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)
    request_index = reactive(0)
    pane = reactive("stock")

    def __init__(self, store: PosStore, on_change: Callable[[], None]) -> None:
        super().__init__()
        self.store = store
        self.on_change = on_change
        self.typing: str | None = None
        self.input_value = ""
        self.message = ""
        self._draft_quantity: int | None = None
        self._draft_eta: datetime | None = None

    def compose(self) -> ComposeResult:
        with Container(id="inventory-dialog"):
            yield Static("Inventory", id="inventory-title")
            with Horizontal(id="inventory-panes"):
                yield Static(id="stock-list")
                yield Static(id="request-list")
            yield Static(id="inventory-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event) -> None:
        if self.typing is None:
            return

        if event.key == "escape":
            self._stop_typing()
            event.stop()
            return

        if event.key == "enter":
            self._confirm_input()
            event.stop()
            return

        if event.key == "backspace":
            if self.input_value:
                self.input_value = self.input_value[:-1]
            self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            char = event.character
            if self.typing == "note":
                if len(self.input_value) < _NOTE_MAX_LEN:
                    self.input_value += char
            elif char in DIGITS or (char == "-" and not self.input_value and self.typing == "adjust"):
                if len(self.input_value) < _FIELD_MAX_LEN[self.typing]:
                    self.input_value += char
            self._refresh_content()

        # Ignore all other keys while typing.
        event.stop()

    def action_close(self) -> None:
        if self.typing is not None:
            self._stop_typing()
            return
        self.dismiss()
        self.on_change()

    def action_move_cursor(self, delta: int) -> None:
        if self.typing is not None:
            return
        if self.pane == "stock":
            products = self.store.products()
            if products:
                self.cursor_index = (self.cursor_index + delta) % len(products)
        else:
            requests = self.store.restock.requests()
            if requests:
                self.request_index = (self.request_index + delta) % len(requests)
        self._refresh_content()

    def action_switch_pane(self) -> None:
        if self.typing is not None:
            return
        self.pane = "requests" if self.pane == "stock" else "stock"
        self._refresh_content()

    def action_activate(self) -> None:
        if self.typing is not None:
            return
        if self.pane == "stock":
            product = self._selected_product()
            if product is None or not product.is_stock_managed:
                return
            record = self.store.inventory.record(product.product_id)
            if record is None:
                return
            self._start_typing("adjust", str(record.current_quantity))
            return

        request = self._selected_request()
        if request is None:
            return
        result = self.store.restock.confirm_delivery(request.request_id)
        self.message = f"Delivered {request.product_name} +{request.request_quantity}" if result else result.message
        self._refresh_content()

    def action_request_restock(self) -> None:
        if self.typing is not None or self.pane != "stock":
            return
        product = self._selected_product()
        if product is None or not product.is_stock_managed:
            return
        record = self.store.inventory.record(product.product_id)
        if record is None or not record.is_low:
            self.message = f"{product.name} is not below its threshold"
            self._refresh_content()
            return
        self._start_typing("request", str(self.store.inventory.recommended_restock(product.product_id)))

    def action_cancel_request(self) -> None:
        if self.typing is not None or self.pane != "requests":
            return
        request = self._selected_request()
        if request is None:
            return
        result = self.store.restock.cancel(request.request_id)
        self.message = f"Cancelled request for {request.product_name}" if result else result.message
        self._refresh_content()

    def _selected_product(self) -> Product | None:
        products = self.store.products()
        if not (0 <= self.cursor_index < len(products)):
            return None
        return products[self.cursor_index]

    def _selected_request(self):
        requests = self.store.restock.requests()
        if not (0 <= self.request_index < len(requests)):
            return None
        return requests[self.request_index]

    def _stop_typing(self) -> None:
        self.typing = None
        self.input_value = ""
        self._draft_quantity = None
        self._draft_eta = None
        self._refresh_content()

    def _start_typing(self, mode: str, value: str) -> None:
        self.typing = mode
        self.input_value = value
        self.message = ""
        self._refresh_content()

    def _confirm_input(self) -> None:
        product = self._selected_product()
        mode = self.typing
        raw = self.input_value
        if product is None:
            self._stop_typing()
            return

        if mode == "adjust":
            if raw in {"", "-"}:
                self._stop_typing()
                return
            quantity = int(raw)
            self.store.adjust_inventory(product.product_id, quantity)
            self.message = f"{product.name} set to {quantity}"
            logger.info("inventory_modal_adjust product_id=%r value=%d", product.product_id, quantity)
            self._stop_typing()
            return

        if mode == "request":
            if not raw:
                self._stop_typing()
                return
            self._draft_quantity = int(raw)
            default_eta = self.store.now() + timedelta(minutes=RESTOCK_ETA_MINUTES)
            self._start_typing("eta", f"{default_eta:%H%M}")
            return

        if mode == "eta":
            parsed = parse_hhmm(raw)
            if parsed is None:
                self.message = "ETA must be HHMM between 0000 and 2359"
                self._refresh_content()
                return
            self._draft_eta = self._eta_from(*parsed)
            self._start_typing("note", "")
            return

        quantity = self._draft_quantity or 1
        request = self.store.restock.create_request(product.product_id, quantity, eta=self._draft_eta, note=raw)
        self.request_index = 0
        logger.info(
            "inventory_modal_request product_id=%r value=%d eta=%s", product.product_id, quantity, f"{request.eta_at:%H:%M}"
        )
        self._stop_typing()
        self.message = f"Requested {request.request_quantity} {product.name} by {request.eta_at:%H:%M}"
        self._refresh_content()

    def _eta_from(self, hour: int, minute: int) -> datetime:
        """Next occurrence of hour:minute on the store clock."""
        now = self.store.now()
        eta = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
        if eta < now:
            eta += timedelta(days=1)
        return eta

    def _refresh_content(self) -> None:
        stock_widget = self.query_one("#stock-list", Static)
        request_widget = self.query_one("#request-list", Static)
        help_widget = self.query_one("#inventory-help", Static)

        products = self.store.products()
        rows = [format_inventory_row(product, self.store.inventory.record(product.product_id)) for product in products]
        stock = Text(style="white")
        stock.append("Stock\n", style="bold" if self.pane == "stock" else "dim")
        stock.append_text(render_window(rows, max(1, stock_widget.size.height - 1), self.cursor_index if self.pane == "stock" else None))
        stock_widget.update(stock)

        requests = self.store.restock.requests()
        pending = sum(1 for request in requests if request.is_pending)
        req_text = Text(style="white")
        req_text.append(f"Factory requests ({pending} pending)\n", style="bold" if self.pane == "requests" else "dim")
        if requests:
            req_rows = [format_restock_row(request) for request in requests]
            req_text.append_text(
                render_window(req_rows, max(1, request_widget.size.height - 1), self.request_index if self.pane == "requests" else None)
            )
        else:
            req_text.append("No requests yet.", style="dim")
        request_widget.update(req_text)

        if self.typing == "adjust":
            help_widget.update(f"New quantity: {self.input_value}|   Enter confirm, Esc cancel")
        elif self.typing == "request":
            help_widget.update(f"Request quantity: {self.input_value}|   Enter next, Esc cancel")
        elif self.typing == "eta":
            prompt = f"ETA (HHMM): {self.input_value}|   Enter next, Esc cancel"
            help_widget.update(f"{self.message}\n{prompt}" if self.message else prompt)
        elif self.typing == "note":
            help_widget.update(f"Note (optional): {self.input_value}|   Enter submit, Esc cancel")
        else:
            hint = "J/K move, Tab switch pane, Enter edit/deliver, F factory request, X cancel, Esc close"
            help_widget.update(f"{self.message}\n{hint}" if self.message else hint)
