"""Card-related data structures and helpers for Tarneeb."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, List, Mapping, Optional


class Suit(Enum):
    # Declaration order is the engine's fixed suit iteration order.
    HEARTS = auto()
    DIAMONDS = auto()
    CLUBS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        return self.name.lower()


class Rank(Enum):
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        return RANK_SYMBOLS[self]


RANK_ORDER: list[Rank] = sorted(Rank, key=lambda rank: rank.value)

RANK_SYMBOLS: dict[Rank, str] = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}
RANKS_BY_SYMBOL: dict[str, Rank] = {symbol: rank for rank, symbol in RANK_SYMBOLS.items()}

SUIT_SYMBOLS: dict[Suit, str] = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

# Cosmetic ordering used when sorting a dealt hand for display.
DISPLAY_SUIT_ORDER: dict[Suit, int] = {
    Suit.SPADES: 0,
    Suit.HEARTS: 1,
    Suit.DIAMONDS: 2,
    Suit.CLUBS: 3,
}

HONORS = frozenset({Rank.ACE, Rank.KING, Rank.QUEEN, Rank.JACK})


@dataclass(frozen=True)
class Card:
    """Immutable representation of a playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{RANK_SYMBOLS[self.rank]}{SUIT_SYMBOLS[self.suit]}"


def rank_value(card: Card) -> int:
    """Return the numeric rank value (2..14) used for every comparison."""
    return card.rank.value


def display_key(card: Card) -> tuple[int, int]:
    return DISPLAY_SUIT_ORDER[card.suit], rank_value(card)


def sort_for_display(cards: Iterable[Card]) -> List[Card]:
    return sorted(cards, key=display_key)


def lowest_card(cards: Iterable[Card]) -> Card:
    """Return the card with the smallest rank value; first one wins on ties."""
    return min(cards, key=rank_value)


def cards_of_suit(cards: Iterable[Card], suit: Optional[Suit]) -> List[Card]:
    return [card for card in cards if card.suit is suit]


def beats(candidate: Card, current: Card, led_suit: Suit, trump: Optional[Suit]) -> bool:
    """Return True if candidate wins over current within the trick context."""
    if candidate == current:
        return False

    candidate_trump = trump is not None and candidate.suit is trump
    current_trump = trump is not None and current.suit is trump

    if candidate_trump and not current_trump:
        return True
    if current_trump and not candidate_trump:
        return False

    if candidate.suit is current.suit:
        if candidate_trump or candidate.suit is led_suit:
            return rank_value(candidate) > rank_value(current)
        return False

    if candidate.suit is led_suit and current.suit is not led_suit:
        return True

    return False


def serialize_card(card: Card) -> dict[str, str]:
    return {"rank": RANK_SYMBOLS[card.rank], "suit": card.suit.name.lower()}


def deserialize_card(payload: Mapping[str, str]) -> Card:
    try:
        rank = RANKS_BY_SYMBOL[str(payload["rank"]).upper()]
        suit = Suit[str(payload["suit"]).upper()]
    except KeyError as exc:
        raise ValueError(f"Not a card payload: {dict(payload)!r}") from exc
    return Card(rank, suit)


def parse_suit(value: str) -> Suit:
    try:
        return Suit[value.upper()]
    except KeyError as exc:
        raise ValueError(f"Unknown suit: {value!r}") from exc


def card_label(card: Card) -> str:
    return f"{card.rank.name.title()} of {card.suit.name.title()}"
