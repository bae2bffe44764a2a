"""Heuristic hand strength estimation used by the AI for bidding and trump."""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Optional, Tuple

from .cards import Card, Rank, Suit

DEFAULT_DISCOUNT = 0.85
MAX_TRICKS = 13


def _count(cards: Iterable[Card], ranks: Iterable[Rank]) -> int:
    wanted = set(ranks)
    return sum(1 for card in cards if card.rank in wanted)


def trump_suit_tricks(cards: List[Card]) -> int:
    length = len(cards)
    if length >= 5:
        return min(3, _count(cards, (Rank.ACE, Rank.KING, Rank.QUEEN))) + (length - 5)
    if length >= 3:
        return min(2, _count(cards, (Rank.ACE, Rank.KING)))
    return _count(cards, (Rank.ACE,))


def side_suit_tricks(cards: List[Card]) -> int:
    length = len(cards)
    aces = _count(cards, (Rank.ACE,))
    kings = _count(cards, (Rank.KING,))
    if length >= 6:
        return aces + min(kings, 1) + max(0, length - 7)
    if length >= 4:
        return aces + (min(kings, 1) if aces > 0 else 0)
    return aces


def estimate_tricks(
    hand: Iterable[Card],
    trump: Optional[Suit],
    *,
    discount: float = DEFAULT_DISCOUNT,
) -> int:
    """Return a conservative estimate (0..13) of the tricks ``hand`` can take."""
    by_suit: Dict[Suit, List[Card]] = {suit: [] for suit in Suit}
    for card in hand:
        by_suit[card.suit].append(card)

    raw = 0
    for suit in Suit:
        cards = by_suit[suit]
        if not cards:
            continue
        raw += trump_suit_tricks(cards) if suit is trump else side_suit_tricks(cards)

    return max(0, min(MAX_TRICKS, math.floor(raw * discount)))


def estimates_by_suit(hand: Iterable[Card], *, discount: float = DEFAULT_DISCOUNT) -> List[Tuple[Suit, int]]:
    cards = list(hand)
    return [(suit, estimate_tricks(cards, suit, discount=discount)) for suit in Suit]


def best_trump(hand: Iterable[Card], *, discount: float = DEFAULT_DISCOUNT) -> Tuple[Optional[Suit], int]:
    """Return the suit with the strictly highest estimate and that estimate.

    Suits are tried in ``Suit`` declaration order and a later suit only takes
    over on a strictly higher estimate, so ties go to the first suit seen.
    ``(None, 0)`` means no suit rose above zero.
    """
    best_suit: Optional[Suit] = None
    best_tricks = 0
    for suit, tricks in estimates_by_suit(hand, discount=discount):
        if tricks > best_tricks:
            best_suit, best_tricks = suit, tricks
    return best_suit, best_tricks
