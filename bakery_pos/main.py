"""Entry point for the bakery-pos Textual app."""

from __future__ import annotations

from bakery_pos.config import configure_logging
from bakery_pos.pos_app import BakeryPosApp


def main() -> None:
    """Run the Textual application."""
    configure_logging()
    BakeryPosApp().run()


if __name__ == "__main__":
    main()
