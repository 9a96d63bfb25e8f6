"""Simulated time entry modal screen."""

from __future__ import annotations

from datetime import date, datetime

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from bakery_pos.policy import alcohol_allowed, eat_in_allowed
from bakery_pos.rendering import format_gates

DIGITS = "0123456789"


def parse_hhmm(value: str) -> tuple[int, int] | None:
    """Parse 'HHMM' or 'HMM' digits into (hour, minute); None when out of range."""
    if not (3 <= len(value) <= 4) or any(ch not in DIGITS for ch in value):
        return None
    hour, minute = int(value[:-2]), int(value[-2:])
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return (hour, minute)


def format_time_face(value: str) -> str:
    """Typed digits laid over an HH:MM template, e.g. '93' -> '--:93', '930' -> '-9:30'."""
    padded = value.rjust(4, "-")
    return f"{padded[:2]}:{padded[2:]}"


class TimeModal(ModalScreen[tuple[int, int] | None]):
    """Pin the store clock to a time of day; the gates preview follows the digits."""

    CSS = """
    TimeModal {
        align: center middle;
        background: $background 60%;
    }

    #time-dialog {
        width: 44;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #time-face {
        content-align: center middle;
        text-style: bold;
        border: heavy $secondary;
        color: white;
    }

    #time-gates {
        margin-top: 1;
        height: 2;
    }
    """

    def __init__(self, initial: str = "", day: date | None = None) -> None:
        super().__init__()
        self.value = initial
        self.day = day or date.today()

    def compose(self) -> ComposeResult:
        with Container(id="time-dialog"):
            yield Static("Simulate time (24h)", classes="pane-title")
            yield Static(id="time-face")
            yield Static(id="time-gates")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "q", "ctrl+c"}:
            self.dismiss(None)
        elif event.key == "enter":
            parsed = parse_hhmm(self.value)
            if parsed is not None:
                self.dismiss(parsed)
        elif event.key == "backspace":
            self.value = self.value[:-1]
            self._refresh_content()
        elif event.is_printable and event.character and event.character in DIGITS:
            # Typing past four digits starts over.
            self.value = event.character if len(self.value) >= 4 else self.value + event.character
            self._refresh_content()
        else:
            return
        event.stop()

    def _refresh_content(self) -> None:
        self.query_one("#time-face", Static).update(format_time_face(self.value))

        parsed = parse_hhmm(self.value)
        if parsed is None:
            preview = Text("Type HHMM, 0000 to 2359", style="#ffb3b3" if len(self.value) >= 3 else "dim")
        else:
            instant = datetime.combine(self.day, datetime.min.time()).replace(hour=parsed[0], minute=parsed[1])
            preview = format_gates(alcohol_allowed(instant), eat_in_allowed(instant))
            preview.append("\nEnter pin, Esc cancel", style="dim")
        self.query_one("#time-gates", Static).update(preview)
