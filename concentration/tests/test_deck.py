"""
Tests for deck construction.

Tests:
- Pairing invariant
- Fresh cards are hidden
- Shuffle strategies
- Fixture deck validation
"""

from collections import Counter
import random

import pytest

from ..engine_core.deck import (
    DECK_SIZE,
    SYMBOLS,
    ShuffleMode,
    create_deck,
    deck_from_symbols,
)


class TestCreateDeck:
    """Tests for create_deck."""

    def test_sixteen_cards(self):
        deck = create_deck()
        assert len(deck) == DECK_SIZE == 16

    def test_ids_follow_position(self):
        deck = create_deck(rng=random.Random(7))
        assert [card.id for card in deck] == list(range(16))

    @pytest.mark.parametrize("shuffle", list(ShuffleMode))
    def test_every_symbol_twice(self, shuffle):
        """Each alphabet symbol appears in exactly two cards."""
        for seed in range(20):
            deck = create_deck(rng=random.Random(seed), shuffle=shuffle)
            counts = Counter(card.symbol for card in deck)
            assert set(counts) == set(SYMBOLS)
            assert all(count == 2 for count in counts.values())

    def test_cards_start_hidden(self):
        deck = create_deck()
        assert not any(card.revealed or card.matched for card in deck)

    def test_same_seed_same_deck(self):
        first = create_deck(rng=random.Random(42))
        second = create_deck(rng=random.Random(42))
        assert first == second

    def test_decks_differ_across_seeds(self):
        orders = {
            tuple(card.symbol for card in create_deck(rng=random.Random(seed)))
            for seed in range(10)
        }
        assert len(orders) > 1

    def test_uniform_shuffle_has_no_positional_bias(self):
        """Over many deals, the first slot sees every symbol at a similar rate."""
        rng = random.Random(2024)
        counts = Counter(create_deck(rng=rng)[0].symbol for _ in range(4000))
        expected = 4000 / len(SYMBOLS)
        assert all(abs(count - expected) < expected * 0.25 for count in counts.values())

    def test_custom_symbols(self):
        deck = create_deck(symbols=("X", "Y"), rng=random.Random(1))
        assert sorted(card.symbol for card in deck) == ["X", "X", "Y", "Y"]

    def test_duplicate_symbols_rejected(self):
        with pytest.raises(ValueError):
            create_deck(symbols=("X", "X"))


class TestDeckFromSymbols:
    """Tests for fixed-layout decks."""

    def test_keeps_order(self):
        deck = deck_from_symbols("ABAB")
        assert [card.symbol for card in deck] == ["A", "B", "A", "B"]
        assert [card.id for card in deck] == [0, 1, 2, 3]

    def test_rejects_unpaired_symbol(self):
        with pytest.raises(ValueError):
            deck_from_symbols("ABA")
