"""
Memory Game - The single owner of one game's state.

Renderers and input handlers talk to MemoryGame only:

    game = MemoryGame(scheduler=ManualScheduler())
    game.select(3)
    game.select(7)          # mismatch -> flip-back scheduled
    scheduler.advance(1.0)  # cards hidden again
    game.reset()

The game owns the mismatch delay. Collaborators must not flip cards
back themselves; they re-render from snapshot() after each call.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import random
import uuid

from ..config import GameConfig
from ..engine_core import (
    Action,
    ActionResult,
    Card,
    GameState,
    Reducer,
    TurnPhase,
    create_deck,
)
from .scheduler import Scheduler, TaskHandle


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CardView:
    """What a renderer may show for one card. Hidden symbols are withheld."""
    id: int
    revealed: bool
    matched: bool
    symbol: str | None = None


@dataclass(frozen=True)
class GameSnapshot:
    """Public, render-ready view of a game."""
    game_id: str
    cards: list[CardView] = field(default_factory=list)
    selection: tuple[int, ...] = ()
    move_count: int = 0
    won: bool = False
    phase: TurnPhase = TurnPhase.IDLE
    generation: int = 0


class MemoryGame:
    """
    One game of Concentration and its deferred flip-back.

    State is replaced, never mutated in place; every transition goes
    through the reducer. A pending flip-back is tied to the deck's
    generation, so a reset makes it harmless even if it still fires.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        config: GameConfig | None = None,
        rng: random.Random | None = None,
        game_id: str | None = None,
        deck: tuple[Card, ...] | None = None,
    ):
        self.scheduler = scheduler
        self.config = config or GameConfig()
        self.rng = rng or random.Random(self.config.seed)
        self._reducer = Reducer()
        self._pending: TaskHandle | None = None
        self._state = GameState(
            game_id=game_id or str(uuid.uuid4()),
            deck=deck if deck is not None else self.create_deck(),
        )
        logger.info("New game %s with %d cards", self._state.game_id, self._state.size)

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def game_id(self) -> str:
        return self._state.game_id

    @property
    def move_count(self) -> int:
        return self._state.move_count

    @property
    def won(self) -> bool:
        return self._state.won

    @property
    def has_pending_resolution(self) -> bool:
        return self._pending is not None

    def create_deck(self) -> tuple[Card, ...]:
        """Deal a new shuffled deck without touching the current game."""
        return create_deck(rng=self.rng, shuffle=self.config.shuffle)

    def select(self, card_id: int) -> ActionResult:
        """
        Pick a card.

        Picks the rules do not allow (while resolving, on a face-up card,
        after the win) are ignored. An id outside the deck raises
        InvalidCardError.
        """
        result = self._dispatch(Action.select(card_id))
        if result.pending_resolution:
            self._schedule_resolution(result.pending_resolution)
        if result.changed and result.new_state.won:
            logger.info(
                "Game %s won in %d moves", self.game_id, result.new_state.move_count,
            )
        return result

    def reset(self, deck: tuple[Card, ...] | None = None) -> ActionResult:
        """Start over: new deck, zero moves, and any pending flip-back dropped."""
        self._cancel_pending()
        result = self._dispatch(Action.reset(deck if deck is not None else self.create_deck()))
        logger.info("Game %s reset (generation %d)", self.game_id, self._state.generation)
        return result

    def close(self) -> None:
        """Drop pending work; the game must not be used afterwards."""
        self._cancel_pending()

    def snapshot(self) -> GameSnapshot:
        state = self._state
        return GameSnapshot(
            game_id=state.game_id,
            cards=[
                CardView(
                    id=card.id,
                    revealed=card.revealed,
                    matched=card.matched,
                    symbol=card.symbol if card.face_up else None,
                )
                for card in state.deck
            ],
            selection=state.selection,
            move_count=state.move_count,
            won=state.won,
            phase=state.phase,
            generation=state.generation,
        )

    def _dispatch(self, action: Action) -> ActionResult:
        result = self._reducer.apply(self._state, action)
        if result.changed:
            self._state = result.new_state
            for change in result.state_changes:
                logger.debug("Game %s: %s", self.game_id, change)
        return result

    def _schedule_resolution(self, pair: tuple[int, int]) -> None:
        generation = self._state.generation

        def flip_back() -> None:
            if generation == self._state.generation:
                self._pending = None
            self._dispatch(Action.resolve(pair, generation))

        self._pending = self.scheduler.call_later(self.config.mismatch_delay, flip_back)
        logger.debug(
            "Game %s: flip-back of %s scheduled in %.2fs",
            self.game_id, pair, self.config.mismatch_delay,
        )

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
