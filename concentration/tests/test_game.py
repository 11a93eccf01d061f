"""
Tests for MemoryGame (the state owner and its deferred flip-back).

Tests:
- The A B A B walkthrough
- Mismatch transience and input lock
- Move-count law over full games
- Reset during resolution
- Snapshot hides face-down symbols
"""

import random

import pytest

from ..config import GameConfig
from ..engine_core import InvalidCardError, ShuffleMode, TurnPhase
from ..session import ManualScheduler, MemoryGame
from .conftest import pair_positions


class TestWalkthrough:
    """The four-card A B A B game played start to finish."""

    def test_scenario(self, small_game, scheduler):
        game = small_game

        game.select(0)
        assert game.state.card(0).revealed
        assert game.state.selection == (0,)
        assert game.move_count == 0

        result = game.select(1)
        assert result.pending_resolution == (0, 1)
        assert game.state.card(1).revealed
        assert game.move_count == 1
        assert game.state.phase == TurnPhase.RESOLVING

        scheduler.advance(1.0)
        assert not game.state.card(0).revealed
        assert not game.state.card(1).revealed
        assert game.state.selection == ()

        game.select(0)
        assert game.state.selection == (0,)
        game.select(2)
        assert game.move_count == 2
        assert game.state.card(0).matched and game.state.card(2).matched
        assert game.state.selection == ()
        assert not game.won

        game.select(1)
        game.select(3)
        assert game.move_count == 3
        assert game.won


class TestMismatch:
    """Mismatched pairs stay up for the delay, then flip back."""

    def test_visible_until_delay_elapses(self, small_game, scheduler):
        small_game.select(0)
        small_game.select(1)

        scheduler.advance(0.999)
        assert small_game.state.card(0).revealed
        assert small_game.state.resolving

        scheduler.advance(0.001)
        assert not small_game.state.card(0).revealed
        assert not small_game.state.resolving
        assert not small_game.has_pending_resolution

    def test_input_locked_while_resolving(self, small_game, scheduler):
        small_game.select(0)
        small_game.select(1)

        result = small_game.select(2)
        assert result.ignored
        assert not small_game.state.card(2).revealed
        assert small_game.move_count == 1

    def test_match_needs_no_delay(self, small_game, scheduler):
        small_game.select(0)
        small_game.select(2)

        assert scheduler.pending == 0
        assert small_game.state.phase == TurnPhase.IDLE

    def test_uses_configured_delay(self, scheduler):
        game = MemoryGame(
            scheduler=scheduler,
            config=GameConfig(mismatch_delay=0.25),
            deck=None,
            rng=random.Random(3),
        )
        first, second = pair_positions(game)[:2]
        game.select(first[0])
        game.select(second[0])

        scheduler.advance(0.25)
        assert game.state.selection == ()

    def test_out_of_range_raises(self, small_game):
        with pytest.raises(InvalidCardError):
            small_game.select(4)


class TestFullGame:
    """Move-count law and win closure on a full deck."""

    def test_perfect_game(self, full_game):
        for first, second in pair_positions(full_game):
            full_game.select(first)
            full_game.select(second)

        assert full_game.won
        assert full_game.move_count == 8

    def test_mistakes_add_moves(self, full_game, scheduler):
        pairs = pair_positions(full_game)

        # Two misses before playing perfectly
        for a, b in [(pairs[0][0], pairs[1][0]), (pairs[2][0], pairs[3][0])]:
            full_game.select(a)
            full_game.select(b)
            scheduler.advance(1.0)

        for first, second in pairs:
            full_game.select(first)
            full_game.select(second)

        assert full_game.won
        assert full_game.move_count == 10

    def test_selection_never_exceeds_two(self, full_game, scheduler):
        rng = random.Random(99)
        while not full_game.won:
            full_game.select(rng.randrange(16))
            assert len(full_game.state.selection) <= 2
            if full_game.state.resolving:
                scheduler.advance(1.0)
        assert full_game.move_count >= 8

    def test_matches_are_permanent(self, full_game, scheduler):
        (a, b), (c, _), (d, _) = pair_positions(full_game)[:3]
        full_game.select(a)
        full_game.select(b)
        full_game.select(c)
        full_game.select(d)
        scheduler.advance(1.0)

        assert full_game.state.card(a).matched and full_game.state.card(a).revealed
        assert full_game.state.card(b).matched and full_game.state.card(b).revealed

    def test_nothing_changes_after_win(self, small_game):
        for card_id in (0, 2, 1, 3):
            small_game.select(card_id)
        before = small_game.state

        for card_id in range(4):
            assert small_game.select(card_id).ignored
        assert small_game.state is before


class TestReset:
    """Reset deals a new deck and invalidates pending work."""

    def test_reset_state(self, full_game):
        full_game.select(0)
        full_game.select(8)
        full_game.select(1)
        full_game.reset()

        state = full_game.state
        assert state.move_count == 0
        assert not state.won
        assert state.selection == ()
        assert not state.resolving
        assert state.size == 16
        assert not any(card.revealed or card.matched for card in state.deck)

    def test_reset_is_idempotent(self, full_game):
        for _ in range(3):
            full_game.reset()
            assert full_game.move_count == 0
            assert full_game.state.selection == ()
            assert not full_game.won

    def test_reset_during_resolution(self, small_game, scheduler):
        small_game.select(0)
        small_game.select(1)
        small_game.reset()

        assert scheduler.pending == 0
        small_game.select(0)
        scheduler.advance(5.0)

        # The old flip-back never touched the new deck
        assert small_game.state.card(0).revealed
        assert small_game.state.selection == (0,)

    def test_stale_callback_ignored_even_if_it_fires(self, small_game, scheduler):
        small_game.select(0)
        small_game.select(1)
        stale = small_game._pending
        small_game.reset()
        small_game.select(0)

        stale.callback()

        assert small_game.state.card(0).revealed
        assert small_game.state.selection == (0,)

    def test_new_mismatch_after_reset_still_resolves(self, small_game, scheduler):
        small_game.select(0)
        small_game.select(1)
        small_game.reset()

        deck = small_game.state.deck
        a = 0
        b = next(card.id for card in deck if card.symbol != deck[a].symbol)
        small_game.select(a)
        small_game.select(b)
        scheduler.advance(1.0)

        assert small_game.state.selection == ()
        assert not small_game.has_pending_resolution

    def test_create_deck_has_no_side_effects(self, full_game):
        before = full_game.state
        deck = full_game.create_deck()
        assert len(deck) == 16
        assert full_game.state is before


class TestSnapshot:
    """Render view withholds hidden symbols."""

    def test_hidden_symbols_withheld(self, small_game):
        snapshot = small_game.snapshot()
        assert all(card.symbol is None for card in snapshot.cards)

    def test_face_up_symbols_shown(self, small_game):
        small_game.select(0)
        small_game.select(2)
        small_game.select(1)
        snapshot = small_game.snapshot()

        assert snapshot.cards[0].symbol == "A"
        assert snapshot.cards[2].symbol == "A"
        assert snapshot.cards[1].symbol == "B"
        assert snapshot.cards[3].symbol is None
        assert snapshot.phase == TurnPhase.ONE_SELECTED
        assert snapshot.move_count == 1


class TestComparatorShuffle:
    """The biased shuffle is still a valid deck."""

    def test_comparator_game_plays(self):
        scheduler = ManualScheduler()
        game = MemoryGame(
            scheduler=scheduler,
            config=GameConfig(shuffle=ShuffleMode.COMPARATOR, seed=5),
        )
        for first, second in pair_positions(game):
            game.select(first)
            game.select(second)
        assert game.won
