"""Main Textual app class."""

from __future__ import annotations

import logging

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from bakery_pos.config import CHECKOUT_DELAY_SECONDS, CLOCK_TICK_SECONDS, SHOP_NAME
from bakery_pos.dashboard_modal import DashboardModal
from bakery_pos.history_modal import HistoryModal
from bakery_pos.inventory_modal import InventoryModal
from bakery_pos.models import CartLine, Order, Product
from bakery_pos.receipt import check_printer_dependencies, print_receipt
from bakery_pos.rendering import (
    format_cart_line,
    format_clock,
    format_gates,
    format_order_type,
    format_product_row,
    format_yen,
    render_window,
)
from bakery_pos.store import PosStore
from bakery_pos.time_modal import TimeModal

logger = logging.getLogger(__name__)


class BakeryPosApp(App):
    """A Textual app for selling bakery products at one counter."""

    TITLE = SHOP_NAME
    SUB_TITLE = "Counter"

    CSS = """
    Screen {
        layout: vertical;
    }

    #status-bar {
        height: 3;
        border: heavy $secondary;
        padding: 0 1;
    }

    #main-layout {
        height: 1fr;
    }

    #catalog-pane {
        width: 3fr;
        border: round $secondary;
        padding: 1;
    }

    #cart-pane {
        width: 2fr;
        border: round $primary;
        padding: 1;
    }

    #search-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 3;
    }

    #results {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #cart-summary {
        height: auto;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    input_state = reactive("normal")
    search_query = reactive("")
    category_index = reactive(-1)
    selected_index = reactive(0)
    cart_selected_index = reactive(None)

    BINDINGS = [
        ("tab", "cycle_results(1)", "Next product"),
        ("up", "cycle_results(-1)", "Previous product"),
        ("down", "cycle_results(1)", "Next product"),
        ("enter", "add_selected", "Add to cart"),
        ("backspace", "backspace_query", "Delete query char"),
        ("plus", "change_quantity(1)", "Qty +1"),
        ("minus", "change_quantity(-1)", "Qty -1"),
        Binding("ctrl+s", "checkout", "Checkout", priority=True),
        ("ctrl+c", "cancel_active_mode", "Exit search"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        store: PosStore | None = None,
        checkout_delay: float = CHECKOUT_DELAY_SECONDS,
        printer: object | None = None,
        printer_font: object | None = None,
    ) -> None:
        super().__init__()
        self.store = store or PosStore()
        self.checkout_delay = checkout_delay
        self.printer = printer
        self.printer_font = printer_font
        self.system_status = ""
        self.last_order: Order | None = None
        self.store.time_source.subscribe(lambda _instant: self._refresh_time_dependent())
        logger.info("app_init products=%d", len(self.store.products()))

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(id="status-bar")
        with Horizontal(id="main-layout"):
            with Vertical(id="catalog-pane"):
                yield Static(id="search-bar")
                yield Static(id="results")
            with Vertical(id="cart-pane"):
                yield Static("Cart", classes="pane-title")
                yield Static("(cart is empty)", id="cart-list")
                yield Static(id="cart-summary")

    def on_mount(self) -> None:
        if self.printer is None:
            _, msg = check_printer_dependencies()
            self.system_status = msg
            logger.info("on_mount printer_status=%r", msg)
        self.set_interval(CLOCK_TICK_SECONDS, self.store.tick)
        self._refresh_all()

    def _modal_open(self) -> bool:
        return isinstance(self.screen, ModalScreen)

    def on_key(self, event: Key) -> None:
        if self._modal_open():
            return

        if not event.is_printable or not event.character or len(event.character) != 1 or not event.character.isalnum():
            return

        key = event.character.lower()
        if self.input_state == "normal":
            handler = {
                "s": self._enter_search,
                "c": self._cycle_category,
                "j": lambda: self._move_cart_selection(1),
                "k": lambda: self._move_cart_selection(-1),
                "d": self._remove_selected_line,
                "x": self._clear_cart,
                "e": self._toggle_order_type,
                "t": self._open_time_modal,
                "l": self._reset_time,
                "i": self._open_inventory,
                "h": self._open_history,
                "b": self._open_dashboard,
                "p": self._print_last_order,
            }.get(key)
            if handler is None:
                return
            handler()
            event.stop()
            return

        self.search_query += event.character
        self.selected_index = 0
        self._refresh_catalog()
        event.stop()

    def action_cancel_active_mode(self) -> None:
        if self._modal_open():
            return
        if self.input_state == "normal":
            return

        self.input_state = "normal"
        self.search_query = ""
        self.selected_index = 0
        self._refresh_catalog()

    def action_cycle_results(self, delta: int) -> None:
        if self._modal_open():
            return

        results = self._filtered_results()
        if not results:
            self.selected_index = 0
            self._refresh_results(results)
            return
        self.selected_index = (self.selected_index + delta) % len(results)
        self._refresh_results(results)

    def action_add_selected(self) -> None:
        if self._modal_open() or self.store.is_processing:
            return

        results = self._filtered_results()
        if not results:
            return
        if self.selected_index >= len(results):
            self.selected_index = 0

        product = results[self.selected_index]
        result = self.store.add_selection(product)
        if result:
            lines = self.store.cart.lines()
            self.cart_selected_index = next(
                idx for idx, line in enumerate(lines) if line.product_id == product.product_id
            )
            self.system_status = f"Added {product.name}"
        else:
            self.system_status = result.message
        self._refresh_all()

    def action_backspace_query(self) -> None:
        if self._modal_open():
            return
        if self.input_state != "active":
            return

        if not self.search_query:
            return
        self.search_query = self.search_query[:-1]
        self.selected_index = 0
        self._refresh_catalog()

    def action_change_quantity(self, delta: int) -> None:
        if self._modal_open() or self.store.is_processing:
            return
        line = self._selected_line()
        if line is None:
            return
        result = self.store.change_quantity(line.product_id, delta)
        self.system_status = "" if result else result.message
        self._refresh_all()

    def action_checkout(self) -> None:
        if self._modal_open():
            return
        if self.input_state != "normal":
            self.system_status = "Checkout only in NORMAL mode (Ctrl+C to exit search)"
            self._refresh_status()
            return

        started = self.store.begin_checkout()
        if not started:
            self.system_status = started.message
            self._refresh_status()
            return

        self.system_status = f"Processing {format_yen(self.store.cart.total())} cash..."
        self._refresh_status()
        if self.checkout_delay > 0:
            self.set_timer(self.checkout_delay, self._finish_checkout)
        else:
            self.call_later(self._finish_checkout)

    def _finish_checkout(self) -> None:
        result = self.store.complete_checkout()
        if not result or result.order is None:
            self.system_status = result.message
            self._refresh_all()
            return

        self.last_order = result.order
        self.cart_selected_index = None
        self.system_status = f"Order {result.order.order_id} complete: {format_yen(result.order.total_amount)}"
        self._refresh_all()

    def _print_order(self, order: Order) -> str:
        try:
            print_receipt(order, printer=self.printer, font=self.printer_font)
        except Exception as exc:
            logger.warning("receipt_print_failed order_id=%r error=%r", order.order_id, exc)
            return f"Print failed: {exc}"
        return f"Printed {order.order_id}"

    def _print_last_order(self) -> None:
        if self.last_order is None:
            self.system_status = "No order to print"
        else:
            self.system_status = self._print_order(self.last_order)
        self._refresh_status()

    def _enter_search(self) -> None:
        self.input_state = "active"
        self.search_query = ""
        self.selected_index = 0
        self._refresh_catalog()

    def _cycle_category(self) -> None:
        categories = self.store.categories()
        # -1 means all categories.
        self.category_index = (self.category_index + 2) % (len(categories) + 1) - 1
        self.selected_index = 0
        self._refresh_catalog()

    def _current_category_id(self) -> str | None:
        categories = self.store.categories()
        if not (0 <= self.category_index < len(categories)):
            return None
        return categories[self.category_index].category_id

    def _filtered_results(self) -> list[Product]:
        return self.store.search(self.search_query, self._current_category_id())

    def _toggle_order_type(self) -> None:
        target = "takeaway" if self.store.order_type == "eat-in" else "eat-in"
        result = self.store.select_order_type(target)
        self.system_status = "" if result else result.message
        self._refresh_cart()
        self._refresh_status()

    def _open_time_modal(self) -> None:
        now = self.store.now()
        self.push_screen(TimeModal(initial=f"{now:%H%M}", day=now.date()), self._apply_simulated_time)

    def _apply_simulated_time(self, value: tuple[int, int] | None) -> None:
        if value is None:
            return
        hour, minute = value
        self.store.simulate_time(hour, minute)
        self.system_status = f"Simulating {hour:02d}:{minute:02d}"
        self._refresh_all()

    def _reset_time(self) -> None:
        if not self.store.is_simulated:
            return
        self.store.reset_time()
        self.system_status = "Clock back to live time"
        self._refresh_all()

    def _open_inventory(self) -> None:
        self.push_screen(InventoryModal(self.store, on_change=self._refresh_all))

    def _open_history(self) -> None:
        self.push_screen(HistoryModal(self.store, on_print=self._print_order))

    def _open_dashboard(self) -> None:
        self.push_screen(DashboardModal(self.store))

    def _move_cart_selection(self, delta: int) -> None:
        lines = self.store.cart.lines()
        if not lines:
            return

        if self.cart_selected_index is None:
            self.cart_selected_index = 0 if delta > 0 else len(lines) - 1
        else:
            self.cart_selected_index = (self.cart_selected_index + delta) % len(lines)
        self._refresh_cart()

    def _selected_line(self) -> CartLine | None:
        lines = self.store.cart.lines()
        if self.cart_selected_index is None:
            return None
        if not (0 <= self.cart_selected_index < len(lines)):
            return None
        return lines[self.cart_selected_index]

    def _remove_selected_line(self) -> None:
        line = self._selected_line()
        if line is None or self.store.is_processing:
            return

        idx = self.cart_selected_index
        self.store.remove_selection(line.product_id)
        remaining = len(self.store.cart)
        self.cart_selected_index = None if not remaining else min(idx, remaining - 1)
        self._refresh_all()

    def _clear_cart(self) -> None:
        if self.store.is_processing:
            return
        self.store.clear_cart()
        self.cart_selected_index = None
        self._refresh_all()

    def _refresh_time_dependent(self) -> None:
        if not self.is_running:
            return
        # Gates are read from the store on every refresh, never cached here.
        self._refresh_status()
        self._refresh_cart()
        self._refresh_results(self._filtered_results())

    def _refresh_all(self) -> None:
        self._refresh_status()
        self._refresh_cart()
        self._refresh_catalog()

    def _refresh_status(self) -> None:
        try:
            bar = self.query_one("#status-bar", Static)
        except NoMatches:
            return
        text = format_clock(self.store.now(), self.store.is_simulated)
        text.append("   ")
        text.append_text(format_gates(self.store.alcohol_allowed, self.store.eat_in_allowed))
        text.append("\n")
        text.append(self.system_status or "Ready")
        bar.update(text)

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _refresh_cart(self) -> None:
        try:
            cart_widget = self.query_one("#cart-list", Static)
            summary_widget = self.query_one("#cart-summary", Static)
        except NoMatches:
            return

        summary = Text()
        summary.append_text(format_order_type(self.store.order_type, self.store.eat_in_allowed))
        summary.append(f"\nItems {self.store.cart.item_count()}   Total ")
        summary.append(format_yen(self.store.cart.total()), style="bold")
        summary.append("\n+/- qty  D remove  X clear  E eat-in/takeaway  Ctrl+S checkout", style="dim")
        summary_widget.update(summary)

        lines = self.store.cart.lines()
        if not lines:
            self.cart_selected_index = None
            cart_widget.update("(cart is empty)")
            return

        if self.cart_selected_index is not None and self.cart_selected_index >= len(lines):
            self.cart_selected_index = len(lines) - 1

        rows = [format_cart_line(line) for line in lines]
        cart_widget.update(render_window(rows, self._visible_rows(cart_widget), self.cart_selected_index))

    def _refresh_catalog(self) -> None:
        self._refresh_search_bar()
        self._refresh_results(self._filtered_results())

    def _refresh_search_bar(self) -> None:
        try:
            bar = self.query_one("#search-bar", Static)
        except NoMatches:
            return
        category_id = self._current_category_id()
        category = next(
            (category.name for category in self.store.categories() if category.category_id == category_id),
            "All",
        )
        text = Text()
        text.append(f" {category} ", style="bold reverse")
        if self.input_state == "normal":
            text.append("  S search, C category, T set time, L live time, I inventory, H history, B dashboard")
        else:
            text.append(f"  search: {self.search_query}|")
        bar.update(text)

    def _refresh_results(self, results: list[Product]) -> None:
        try:
            results_widget = self.query_one("#results", Static)
        except NoMatches:
            return

        if not results:
            results_widget.update("No results")
            return

        if self.selected_index >= len(results):
            self.selected_index = 0

        alcohol_ok = self.store.alcohol_allowed
        rows = [format_product_row(product, self.store.availability(product), alcohol_ok) for product in results]
        results_widget.update(render_window(rows, self._visible_rows(results_widget), self.selected_index))
