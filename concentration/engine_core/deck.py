"""
Deck construction.

A deck is every symbol of the alphabet twice, shuffled, with card ids
assigned by final position.
"""

from __future__ import annotations
from enum import Enum
from functools import cmp_to_key
import random

from .state import Card


SYMBOLS: tuple[str, ...] = ("A", "B", "C", "D", "E", "F", "G", "H")
DECK_SIZE = len(SYMBOLS) * 2


class ShuffleMode(str, Enum):
    """How the doubled alphabet is permuted."""
    UNIFORM = "uniform"  # Fisher-Yates, every ordering equally likely
    COMPARATOR = "comparator"  # Sort with a coin-flip comparator; biased


def _comparator_shuffle(symbols: list[str], rng: random.Random) -> list[str]:
    """
    Order symbols by sorting with a random comparator.

    Reproduces the classic ``sort(() => Math.random() - 0.5)`` idiom.
    The result is NOT a uniform permutation; keep for parity only.
    """
    def coin_flip(_a: str, _b: str) -> int:
        return -1 if rng.random() < 0.5 else 1

    return sorted(symbols, key=cmp_to_key(coin_flip))


def create_deck(
    symbols: tuple[str, ...] = SYMBOLS,
    rng: random.Random | None = None,
    shuffle: ShuffleMode = ShuffleMode.UNIFORM,
) -> tuple[Card, ...]:
    """
    Create a freshly shuffled, fully hidden deck.

    Args:
        symbols: Alphabet; each symbol is dealt exactly twice
        rng: Random source (seed it for reproducible decks)
        shuffle: Permutation strategy

    Returns:
        Tuple of cards with ids 0..len-1 in deck order
    """
    if len(set(symbols)) != len(symbols):
        raise ValueError("Deck symbols must be distinct")

    rng = rng or random.Random()
    faces = [*symbols, *symbols]

    if ShuffleMode(shuffle) is ShuffleMode.COMPARATOR:
        faces = _comparator_shuffle(faces, rng)
    else:
        rng.shuffle(faces)

    return tuple(Card(id=i, symbol=symbol) for i, symbol in enumerate(faces))


def deck_from_symbols(symbols: list[str] | str) -> tuple[Card, ...]:
    """Build an unshuffled deck in the given order (fixtures, replays)."""
    for symbol in set(symbols):
        if list(symbols).count(symbol) != 2:
            raise ValueError(f"Symbol {symbol!r} must appear exactly twice")
    return tuple(Card(id=i, symbol=symbol) for i, symbol in enumerate(symbols))
