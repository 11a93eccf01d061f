"""
Reducer - Applies actions to game state.

The reducer is the single point of state transition.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state
- Player input that the rules do not allow is a no-op, not an error
- An id outside the deck is a caller bug and raises InvalidCardError
- Scheduling of the mismatch flip-back is left to the caller
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from .state import GameState
from .action import Action, ActionType, ActionResult
from .errors import InvalidCardError


logger = logging.getLogger(__name__)


# Reasons reported on ignored actions
IGNORED_WON = "game_won"
IGNORED_RESOLVING = "resolving"
IGNORED_SELECTION_FULL = "selection_full"
IGNORED_MATCHED = "already_matched"
IGNORED_REVEALED = "already_revealed"
IGNORED_STALE = "stale"


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    """

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with the new state, or the same state
        and an ``ignored_reason`` when the action has no effect.
        """
        handler = self._get_handler(action.action_type)
        if not handler:
            raise ValueError(f"No handler for action type: {action.action_type}")

        result = handler(state, action)
        if result.ignored:
            logger.debug(
                "Ignored %s in game %s: %s",
                action.action_type.value, state.game_id, result.ignored_reason,
            )
        return result

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.SELECT: self._handle_select,
            ActionType.RESOLVE_MISMATCH: self._handle_resolve_mismatch,
            ActionType.RESET: self._handle_reset,
        }
        return handlers.get(action_type)

    def _validate_card_id(self, state: GameState, card_id) -> int:
        # bool is an int subclass but never a card id
        if isinstance(card_id, bool) or not isinstance(card_id, int):
            raise InvalidCardError(card_id, state.size)
        if not 0 <= card_id < state.size:
            raise InvalidCardError(card_id, state.size)
        return card_id

    def _handle_select(self, state: GameState, action: Action) -> ActionResult:
        """Handle a card pick."""
        card_id = self._validate_card_id(state, action.payload.card_id)
        card = state.card(card_id)

        if state.won:
            return ActionResult.ignore(state, IGNORED_WON)
        if state.resolving:
            return ActionResult.ignore(state, IGNORED_RESOLVING)
        if len(state.selection) >= 2:
            return ActionResult.ignore(state, IGNORED_SELECTION_FULL)
        if card.matched:
            return ActionResult.ignore(state, IGNORED_MATCHED)
        if card.revealed:
            return ActionResult.ignore(state, IGNORED_REVEALED)

        revealed = card.reveal()
        new_state = state.with_cards(revealed)
        selection = state.selection + (card_id,)
        changes = [f"Revealed card {card_id} ({card.symbol})"]

        if len(selection) == 1:
            return ActionResult.success_with_state(
                new_state._copy_with(selection=selection),
                changes=changes,
            )

        # Second pick: one move, then compare
        first = new_state.card(selection[0])
        move_count = state.move_count + 1

        if first.symbol == revealed.symbol:
            new_state = new_state.with_cards(first.match(), revealed.match())
            new_state = new_state._copy_with(selection=(), move_count=move_count)
            changes.append(f"Matched pair {first.id} and {card_id} ({card.symbol})")
            if new_state.won:
                changes.append(f"All pairs found in {move_count} moves")
            return ActionResult.success_with_state(new_state, changes=changes)

        new_state = new_state._copy_with(
            selection=selection,
            resolving=True,
            move_count=move_count,
        )
        changes.append(f"Cards {first.id} and {card_id} do not match")
        return ActionResult.success_with_state(
            new_state,
            changes=changes,
            pending_resolution=(first.id, card_id),
        )

    def _handle_resolve_mismatch(self, state: GameState, action: Action) -> ActionResult:
        """Handle the deferred flip-back of a mismatched pair."""
        payload = action.payload
        if payload.generation != state.generation:
            return ActionResult.ignore(state, IGNORED_STALE)
        if not state.resolving or tuple(payload.card_ids) != state.selection:
            return ActionResult.ignore(state, IGNORED_STALE)

        hidden = [state.card(card_id).hide() for card_id in payload.card_ids]
        new_state = state.with_cards(*hidden)._copy_with(selection=(), resolving=False)
        return ActionResult.success_with_state(
            new_state,
            changes=[f"Flipped back cards {', '.join(str(c) for c in payload.card_ids)}"],
        )

    def _handle_reset(self, state: GameState, action: Action) -> ActionResult:
        """Handle starting over with a new deck."""
        deck = action.payload.deck
        if not deck:
            raise ValueError("Reset requires a deck")

        new_state = GameState(
            game_id=state.game_id,
            deck=tuple(deck),
            generation=state.generation + 1,
        )
        return ActionResult.success_with_state(new_state, changes=["Dealt a new deck"])


def apply_action(state: GameState, action: Action) -> ActionResult:
    """Convenience function to apply an action."""
    return Reducer().apply(state, action)
