"""Order history and sales report modal screen."""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from bakery_pos.models import Order
from bakery_pos.reports import DailySummary, ProductSales, ReportCache, daily_summary, product_analysis
from bakery_pos.rendering import format_yen, render_window
from bakery_pos.store import PosStore


class HistoryModal(ModalScreen[None]):
    """Daily summary with every order, or per-product sales analysis."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("ctrl+c", "close", "Close"),
        ("tab", "switch_tab", "Daily / Products"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("p", "print_selected", "Print receipt"),
    ]

    CSS = """
    HistoryModal {
        align: center middle;
        background: $background 60%;
    }

    #history-dialog {
        width: 96;
        height: 80%;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #history-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #history-body {
        height: 1fr;
        color: white;
    }

    #history-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    tab = reactive("daily")
    cursor_index = reactive(0)

    def __init__(self, store: PosStore, on_print: Callable[[Order], str]) -> None:
        super().__init__()
        self.store = store
        self.on_print = on_print
        self.message = ""
        self._daily = ReportCache(lambda: daily_summary(self.store.orders.orders()))
        self._products = ReportCache(lambda: product_analysis(self.store.orders.orders()))

    def compose(self) -> ComposeResult:
        with Container(id="history-dialog"):
            yield Static("Order History", id="history-title")
            yield Static(id="history-body")
            yield Static(id="history-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def daily(self) -> list[DailySummary]:
        return self._daily.get(self.store.orders.version)

    def products(self) -> list[ProductSales]:
        return self._products.get(self.store.orders.version)

    def action_close(self) -> None:
        self.dismiss()

    def action_switch_tab(self) -> None:
        self.tab = "products" if self.tab == "daily" else "daily"
        self.cursor_index = 0
        self._refresh_content()

    def action_move_cursor(self, delta: int) -> None:
        total = len(self.store.orders) if self.tab == "daily" else len(self.products())
        if total:
            self.cursor_index = (self.cursor_index + delta) % total
        self._refresh_content()

    def action_print_selected(self) -> None:
        if self.tab != "daily":
            return
        orders = [order for day in self.daily() for order in day.orders]
        if not (0 <= self.cursor_index < len(orders)):
            return
        self.message = self.on_print(orders[self.cursor_index])
        self._refresh_content()

    def _daily_rows(self) -> tuple[list[Text], list[int]]:
        """Rows for every day header and order; second list maps order index to row index."""
        rows: list[Text] = []
        order_rows: list[int] = []
        for day in self.daily():
            header = Text()
            header.append(f"{day.day:%Y-%m-%d}", style="bold underline")
            header.append(
                f"  {format_yen(day.total)}  eat-in {format_yen(day.eat_in)}"
                f"  takeaway {format_yen(day.takeaway)}  {day.count} orders",
                style="bold",
            )
            rows.append(header)
            for order in day.orders:
                line = Text()
                line.append(f"{order.order_time:%H:%M}  ")
                line.append("Eat-in  " if order.order_type == "eat-in" else "Takeaway", style="cyan")
                line.append(f"  {order.order_id}  {order.item_count} items  {format_yen(order.total_amount)}")
                order_rows.append(len(rows))
                rows.append(line)
        return rows, order_rows

    def _product_rows(self) -> list[Text]:
        rows = []
        for rank, entry in enumerate(self.products(), start=1):
            line = Text()
            line.append(f"{rank:>2}. {entry.name:<20}")
            line.append(f"{entry.quantity:>5} pcs  ")
            line.append(format_yen(entry.sales), style="bold")
            rows.append(line)
        return rows

    def _refresh_content(self) -> None:
        body = self.query_one("#history-body", Static)
        help_widget = self.query_one("#history-help", Static)
        visible = max(1, body.size.height - 1)

        content = Text(style="white")
        if self.tab == "daily":
            content.append("[Daily]  Products\n", style="bold")
            rows, order_rows = self._daily_rows()
            if not rows:
                content.append("No orders yet.", style="dim")
            else:
                selected = order_rows[self.cursor_index] if self.cursor_index < len(order_rows) else None
                content.append_text(render_window(rows, visible, selected))
            hint = "J/K move, P print receipt, Tab products, Esc close"
        else:
            content.append(" Daily  [Products]\n", style="bold")
            rows = self._product_rows()
            if not rows:
                content.append("No sales yet.", style="dim")
            else:
                content.append_text(render_window(rows, visible, self.cursor_index))
            hint = "J/K move, Tab daily, Esc close"

        body.update(content)
        help_widget.update(f"{self.message}\n{hint}" if self.message else hint)
