"""
Pytest fixtures for Concentration tests.
"""

import random

import pytest

from ..config import GameConfig
from ..engine_core.deck import deck_from_symbols
from ..engine_core.state import GameState
from ..session import ManualScheduler, MemoryGame


# Two pairs, laid out A B A B
SMALL_LAYOUT = "ABAB"

# Full 16-card deck with pairs at (0, 8), (1, 9), ... (7, 15)
FULL_LAYOUT = "ABCDEFGHABCDEFGH"


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible decks."""
    return random.Random(1234)


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Virtual-clock scheduler; nothing fires until advanced."""
    return ManualScheduler()


@pytest.fixture
def game_config() -> GameConfig:
    return GameConfig(mismatch_delay=1.0)


@pytest.fixture
def small_state() -> GameState:
    """A bare 4-card state for reducer tests."""
    return GameState(game_id="test_game", deck=deck_from_symbols(SMALL_LAYOUT))


@pytest.fixture
def small_game(scheduler, game_config) -> MemoryGame:
    """A 4-card game laid out A B A B."""
    return MemoryGame(
        scheduler=scheduler,
        config=game_config,
        game_id="small",
        deck=deck_from_symbols(SMALL_LAYOUT),
    )


@pytest.fixture
def full_game(scheduler, game_config, rng) -> MemoryGame:
    """A 16-card game with a known layout."""
    return MemoryGame(
        scheduler=scheduler,
        config=game_config,
        rng=rng,
        game_id="full",
        deck=deck_from_symbols(FULL_LAYOUT),
    )


def pair_positions(game: MemoryGame) -> list[tuple[int, int]]:
    """Card id pairs sharing a symbol, read from the engine state."""
    by_symbol: dict[str, list[int]] = {}
    for card in game.state.deck:
        by_symbol.setdefault(card.symbol, []).append(card.id)
    return [tuple(ids) for ids in by_symbol.values()]
