"""Logging utilities and board display."""

import logging
import sys
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from concentration.session.game import CardView, GameSnapshot


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


class BoardDisplay:
    """Display a game board to a text stream."""

    def __init__(self, columns: int = 4, out: TextIO | None = None):
        """Initialize display.

        Args:
            columns: Cards per row
            out: Stream to write to (stdout if None)
        """
        self.columns = columns
        self.out = out or sys.stdout

    def _print(self, text: str = "") -> None:
        print(text, file=self.out)

    def print_message(self, text: str) -> None:
        self._print(text)

    def print_separator(self) -> None:
        """Print a separator line."""
        self._print("=" * 24)

    @staticmethod
    def format_card(card: "CardView") -> str:
        """Hidden cards show their id, face-up cards their symbol, pairs a star."""
        if card.matched:
            return f" {card.symbol}* "
        if card.revealed:
            return f"  {card.symbol} "
        return f"[{card.id:2d}]"

    def print_board(self, snapshot: "GameSnapshot") -> None:
        """Print the grid and move counter."""
        self.print_separator()
        self._print(f"Moves: {snapshot.move_count}")
        cards = snapshot.cards
        for start in range(0, len(cards), self.columns):
            row = cards[start:start + self.columns]
            self._print(" ".join(self.format_card(card) for card in row))
        self.print_separator()

    def print_mismatch(self) -> None:
        self._print("No match.")

    def print_match(self, symbol: str) -> None:
        self._print(f"Match: {symbol}")

    def print_win(self, moves: int) -> None:
        """Print the end-of-game message."""
        self._print("")
        self._print("Congratulations!")
        self._print(f"You won in {moves} moves!")
