"""Trick representation and resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .cards import Card, Suit, beats

TRICK_SIZE = 4


class TrickError(RuntimeError):
    """Raised when a trick is resolved out of order."""


@dataclass(frozen=True)
class Play:
    seat: int
    card: Card


@dataclass(frozen=True)
class CompletedTrick:
    plays: Tuple[Play, ...]
    winner: int

    @property
    def cards(self) -> Tuple[Card, ...]:
        return tuple(play.card for play in self.plays)

    def winning_card(self) -> Card:
        for play in self.plays:
            if play.seat == self.winner:
                return play.card
        raise TrickError("Winner did not play in this trick.")


def lead_suit(plays: Sequence[Play]) -> Optional[Suit]:
    return plays[0].card.suit if plays else None


def winning_play(plays: Sequence[Play], trump: Optional[Suit]) -> Play:
    """Return the play currently taking the trick.

    Works on partial tricks too: the AI uses it to see who is winning so far.
    A trump beats any non-trump, then the highest card of the lead suit wins;
    off-suit discards never win.
    """
    if not plays:
        raise TrickError("Cannot determine winner on empty trick.")
    led = plays[0].card.suit
    best = plays[0]
    for play in plays[1:]:
        if beats(play.card, best.card, led, trump):
            best = play
    return best


def resolve_trick(plays: Sequence[Play], trump: Optional[Suit]) -> CompletedTrick:
    if len(plays) != TRICK_SIZE:
        raise TrickError(f"A trick resolves only with {TRICK_SIZE} plays, got {len(plays)}.")
    if len({play.seat for play in plays}) != TRICK_SIZE:
        raise TrickError("Each seat plays exactly once per trick.")
    winner = winning_play(plays, trump)
    return CompletedTrick(plays=tuple(plays), winner=winner.seat)
