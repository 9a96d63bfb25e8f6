"""Today's sales dashboard modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static

from bakery_pos.reports import Dashboard, dashboard
from bakery_pos.rendering import format_yen
from bakery_pos.store import PosStore

_BAR_WIDTH = 30


def format_dashboard(board: Dashboard) -> Text:
    text = Text(style="white")
    text.append(f"{board.day:%Y-%m-%d}\n\n", style="bold")
    text.append(f"Sales {format_yen(board.sales)}   Orders {board.order_count}   ")
    text.append(f"Avg {format_yen(board.average_ticket)}   Low stock {len(board.low_stock)}\n\n")

    text.append("Hourly sales\n", style="bold")
    peak = max(board.hourly_sales) or 1
    for hour, amount in enumerate(board.hourly_sales):
        if not amount:
            continue
        bar = "█" * max(1, amount * _BAR_WIDTH // peak)
        text.append(f"{hour:>2}:00 ")
        text.append(bar, style="#ea5f0c")
        text.append(f" {format_yen(amount)}\n")
    if not any(board.hourly_sales):
        text.append("  (no sales today)\n", style="dim")

    text.append("\nEat-in ", style="bold")
    text.append(format_yen(board.eat_in_sales))
    text.append("   Takeaway ", style="bold")
    text.append(f"{format_yen(board.takeaway_sales)}\n\n")

    text.append("Top products\n", style="bold")
    for rank, entry in enumerate(board.top_products, start=1):
        text.append(f"  {rank}. {entry.name} x{entry.quantity}\n")
    if not board.top_products:
        text.append("  -\n", style="dim")

    text.append("\nLow stock\n", style="bold")
    for record in board.low_stock:
        text.append(f"  {record.product_id} {record.current_quantity} (min {record.min_threshold})\n", style="red")
    if not board.low_stock:
        text.append("  -\n", style="dim")
    return text


class DashboardModal(ModalScreen[None]):
    """KPIs for the current day of the (possibly simulated) clock."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("ctrl+c", "close", "Close"),
    ]

    CSS = """
    DashboardModal {
        align: center middle;
        background: $background 60%;
    }

    #dashboard-dialog {
        width: 80;
        height: auto;
        max-height: 90%;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #dashboard-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #dashboard-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    def __init__(self, store: PosStore) -> None:
        super().__init__()
        self.store = store

    def compose(self) -> ComposeResult:
        with Container(id="dashboard-dialog"):
            yield Static("Dashboard", id="dashboard-title")
            yield Static(id="dashboard-body")
            yield Static("Esc / q / Ctrl+C to close", id="dashboard-help")

    def on_mount(self) -> None:
        board = dashboard(
            self.store.orders.orders(),
            self.store.inventory.records(),
            self.store.products(),
            self.store.now().date(),
        )
        self.query_one("#dashboard-body", Static).update(format_dashboard(board))

    def action_close(self) -> None:
        self.dismiss()
