"""Legal move generation for Tarneeb."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from .cards import Card
from .trick import Play, lead_suit


def legal_moves(hand: Iterable[Card], trick: Sequence[Play]) -> List[Card]:
    """Return the subset of cards that may be played into the current trick.

    Any card may lead. Afterwards a player holding the lead suit must follow
    it; a player void in the lead suit may play anything.
    """
    cards = list(hand)
    led = lead_suit(trick)
    if led is None:
        return cards

    in_led = [card for card in cards if card.suit is led]
    return in_led if in_led else cards


def is_legal_play(hand: Sequence[Card], trick: Sequence[Play], card: Card) -> bool:
    if card not in hand:
        return False
    return card in legal_moves(hand, trick)
