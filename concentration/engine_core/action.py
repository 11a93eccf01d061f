"""
Action System - Actions, payloads, and results.

Actions represent:
1. Player input (select a card)
2. Deferred system work (flip a mismatched pair back)
3. Lifecycle (start over with a new deck)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    # Player actions
    SELECT = "select"

    # System actions
    RESOLVE_MISMATCH = "resolve_mismatch"
    RESET = "reset"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields.
    Validation happens in the reducer.
    """
    card_id: int | None = None

    # For mismatch resolution: the pair to hide and the game it belongs to
    card_ids: tuple[int, ...] = ()
    generation: int | None = None

    # For reset: the replacement deck (built outside the reducer)
    deck: tuple[Any, ...] | None = None


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Actions are applied atomically by the reducer.
    """
    action_type: ActionType
    payload: ActionPayload

    @classmethod
    def select(cls, card_id: int) -> Action:
        """Factory for a card pick."""
        return cls(
            action_type=ActionType.SELECT,
            payload=ActionPayload(card_id=card_id),
        )

    @classmethod
    def resolve(cls, card_ids: tuple[int, ...], generation: int) -> Action:
        """Factory for the deferred mismatch flip-back."""
        return cls(
            action_type=ActionType.RESOLVE_MISMATCH,
            payload=ActionPayload(card_ids=tuple(card_ids), generation=generation),
        )

    @classmethod
    def reset(cls, deck: tuple[Any, ...]) -> Action:
        """Factory for starting over with a new deck."""
        return cls(
            action_type=ActionType.RESET,
            payload=ActionPayload(deck=tuple(deck)),
        )


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - New state (unchanged state when the action was ignored)
    - Why the action was ignored, if it was
    - Side effects the caller must carry out
    """
    new_state: Any  # GameState
    changed: bool = True
    ignored_reason: str | None = None

    # For UI/presentation
    state_changes: list[str] = field(default_factory=list)  # Human-readable changes

    # Mismatched pair the caller must schedule a RESOLVE_MISMATCH for
    pending_resolution: tuple[int, int] | None = None

    @property
    def ignored(self) -> bool:
        return not self.changed

    @classmethod
    def ignore(cls, state: Any, reason: str) -> ActionResult:
        """Create a no-op result."""
        return cls(new_state=state, changed=False, ignored_reason=reason)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        pending_resolution: tuple[int, int] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            new_state=state,
            state_changes=changes or [],
            pending_resolution=pending_resolution,
        )
