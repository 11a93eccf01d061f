"""
Game State - Value types for one game of Concentration.

Design principles:
- Immutable: every transition returns a new state
- Index-addressed: card ``id`` is its position in the deck
- Observable: renderers read state, never mutate it
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class TurnPhase(Enum):
    """Where the turn state machine currently is."""
    IDLE = "idle"  # No card picked this turn
    ONE_SELECTED = "one_selected"  # Waiting for the second pick
    RESOLVING = "resolving"  # Mismatch flip-back pending, input locked
    WON = "won"  # Every card matched


@dataclass(frozen=True)
class Card:
    """
    A card on the table.

    ``id`` and ``symbol`` are fixed at deck creation.
    Only the ``revealed`` / ``matched`` flags change over a game.
    """
    id: int
    symbol: str
    revealed: bool = False
    matched: bool = False

    @property
    def face_up(self) -> bool:
        return self.revealed or self.matched

    def reveal(self) -> Card:
        """Return the card turned face up."""
        return Card(id=self.id, symbol=self.symbol, revealed=True, matched=self.matched)

    def hide(self) -> Card:
        """Return the card turned face down."""
        return Card(id=self.id, symbol=self.symbol, revealed=False, matched=self.matched)

    def match(self) -> Card:
        """Return the card resolved as part of a pair (matched cards stay revealed)."""
        return Card(id=self.id, symbol=self.symbol, revealed=True, matched=True)


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state the engine operates on.
    All state changes go through the reducer.
    """
    game_id: str
    deck: tuple[Card, ...] = ()

    # Card ids picked in the current, unresolved turn (at most two)
    selection: tuple[int, ...] = ()
    resolving: bool = False
    move_count: int = 0

    # Bumped on every reset; deferred work from an older generation is stale
    generation: int = 0

    @property
    def size(self) -> int:
        return len(self.deck)

    @property
    def won(self) -> bool:
        """True iff every card is matched."""
        return bool(self.deck) and all(card.matched for card in self.deck)

    @property
    def phase(self) -> TurnPhase:
        if self.won:
            return TurnPhase.WON
        if self.resolving:
            return TurnPhase.RESOLVING
        if len(self.selection) == 1:
            return TurnPhase.ONE_SELECTED
        return TurnPhase.IDLE

    @property
    def matched_pairs(self) -> int:
        return sum(1 for card in self.deck if card.matched) // 2

    def card(self, card_id: int) -> Card:
        return self.deck[card_id]

    def with_cards(self, *cards: Card) -> GameState:
        """Return new state with the given cards replaced by id."""
        new_deck = list(self.deck)
        for card in cards:
            new_deck[card.id] = card
        return self._copy_with(deck=tuple(new_deck))

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return GameState(
            game_id=kwargs.get("game_id", self.game_id),
            deck=kwargs.get("deck", self.deck),
            selection=kwargs.get("selection", self.selection),
            resolving=kwargs.get("resolving", self.resolving),
            move_count=kwargs.get("move_count", self.move_count),
            generation=kwargs.get("generation", self.generation),
        )
