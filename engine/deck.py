"""Deck creation, shuffling and dealing for Tarneeb."""

from __future__ import annotations

from random import Random
from typing import List, Optional, Sequence, Tuple

from .cards import Card, RANK_ORDER, Suit, sort_for_display

DECK_SIZE = 52
HAND_SIZE = 13
PLAYER_COUNT = 4


class DeckError(ValueError):
    """Raised when a deck breaks the one-of-each-card invariant."""


def build_deck() -> List[Card]:
    """Return the ordered 52-card deck, suit-major and rank-minor."""
    return [Card(rank, suit) for suit in Suit for rank in RANK_ORDER]


def validate_deck(cards: Sequence[Card]) -> None:
    if len(cards) != DECK_SIZE:
        raise DeckError(f"Deck must contain exactly {DECK_SIZE} cards, got {len(cards)}.")
    if len(set(cards)) != DECK_SIZE:
        raise DeckError("Deck contains duplicate cards.")


def shuffle(deck: Sequence[Card], *, rng: Optional[Random] = None) -> List[Card]:
    """Return a new uniformly shuffled copy of the deck."""
    if rng is None:
        rng = Random()
    cards = list(deck)
    # Random.shuffle is a Fisher-Yates pass.
    rng.shuffle(cards)
    return cards


def deal(deck: Sequence[Card]) -> Tuple[List[Card], ...]:
    """Deal four 13-card hands round-robin and sort each for display."""
    cards = list(deck)
    validate_deck(cards)

    hands: List[List[Card]] = [[] for _ in range(PLAYER_COUNT)]
    for index, card in enumerate(cards):
        hands[index % PLAYER_COUNT].append(card)

    return tuple(sort_for_display(hand) for hand in hands)


def shuffled_deal(*, rng: Optional[Random] = None) -> Tuple[List[Card], ...]:
    return deal(shuffle(build_deck(), rng=rng))
