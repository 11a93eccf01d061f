"""
Engine Core - Deterministic game state and turn resolution.

The engine is the runtime that:
1. Deals a shuffled deck
2. Holds GameState
3. Applies actions via the reducer
4. Reports which mismatches need a deferred flip-back
"""

from .state import Card, GameState, TurnPhase
from .deck import SYMBOLS, DECK_SIZE, ShuffleMode, create_deck, deck_from_symbols
from .action import Action, ActionType, ActionPayload, ActionResult
from .reducer import Reducer, apply_action
from .errors import InvalidCardError

__all__ = [
    "Card",
    "GameState",
    "TurnPhase",
    "SYMBOLS",
    "DECK_SIZE",
    "ShuffleMode",
    "create_deck",
    "deck_from_symbols",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Reducer",
    "apply_action",
    "InvalidCardError",
]
