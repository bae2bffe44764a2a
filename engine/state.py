"""Round state for Tarneeb.

A round is one immutable ``RoundState`` value. Every transition in
``engine.bidding`` and ``engine.play`` validates first and then returns a new
value built with ``dataclasses.replace``; the input is never touched.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Sequence, Tuple

from .cards import Card, Suit
from .deck import DECK_SIZE, HAND_SIZE, PLAYER_COUNT
from .seats import SEATS, Team, validate_seat
from .trick import TRICK_SIZE, CompletedTrick, Play

TRICKS_PER_ROUND = HAND_SIZE


class IllegalAction(RuntimeError):
    """Base class for actions the rules reject; state is left unchanged."""


class PhaseError(IllegalAction):
    """Raised when an action does not belong to the current phase."""


class NotYourTurn(IllegalAction):
    """Raised when a seat acts out of turn."""


class InvariantViolation(AssertionError):
    """Raised when a structural invariant is broken. Indicates a bug, not a user error."""


class Phase(Enum):
    BIDDING = "bidding"
    TRUMP_SELECTION = "trump-selection"
    PLAYING = "playing"
    FINISHED = "finished"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Bid:
    seat: Optional[int] = None
    amount: int = 0

    def exists(self) -> bool:
        return self.seat is not None


@dataclass(frozen=True)
class Scores:
    team_a: int = 0
    team_b: int = 0

    def of(self, team: Team) -> int:
        return self.team_a if team is Team.A else self.team_b

    def add(self, team: Team, delta: int) -> "Scores":
        if team is Team.A:
            return replace(self, team_a=self.team_a + delta)
        return replace(self, team_b=self.team_b + delta)


BidRecord = Tuple[int, str, Optional[int]]


@dataclass(frozen=True)
class RoundState:
    phase: Phase
    current_seat: Optional[int]
    hands: Tuple[Tuple[Card, ...], ...]
    bid: Bid = field(default_factory=Bid)
    pass_set: FrozenSet[int] = frozenset()
    trump: Optional[Suit] = None
    current_trick: Tuple[Play, ...] = ()
    completed_tricks: Tuple[CompletedTrick, ...] = ()
    scores: Scores = field(default_factory=Scores)
    opening_seat: int = 1
    round_number: int = 1
    history: Tuple[BidRecord, ...] = ()

    def hand(self, seat: int) -> Tuple[Card, ...]:
        validate_seat(seat)
        return self.hands[seat - 1]

    def with_hand(self, seat: int, cards: Iterable[Card]) -> Tuple[Tuple[Card, ...], ...]:
        """Return a copy of ``hands`` with the given seat's hand replaced."""
        hands = list(self.hands)
        hands[seat - 1] = tuple(cards)
        return tuple(hands)

    def is_finished(self) -> bool:
        return self.phase is Phase.FINISHED

    def tricks_played(self) -> int:
        return len(self.completed_tricks)

    def played_cards(self) -> Tuple[Card, ...]:
        cards = [play.card for trick in self.completed_tricks for play in trick.plays]
        cards.extend(play.card for play in self.current_trick)
        return tuple(cards)


def new_round(
    hands: Sequence[Sequence[Card]],
    *,
    opening_seat: int = 1,
    scores: Optional[Scores] = None,
    round_number: int = 1,
) -> RoundState:
    """Create a round in the bidding phase with ``opening_seat`` to act."""
    validate_seat(opening_seat)
    if len(hands) != PLAYER_COUNT:
        raise ValueError(f"A round needs exactly {PLAYER_COUNT} hands.")
    state = RoundState(
        phase=Phase.BIDDING,
        current_seat=opening_seat,
        hands=tuple(tuple(hand) for hand in hands),
        scores=scores or Scores(),
        opening_seat=opening_seat,
        round_number=round_number,
    )
    check_invariants(state)
    return state


def ensure_phase(state: RoundState, expected: Phase) -> None:
    if state.phase is not expected:
        raise PhaseError(f"Action not allowed in phase {state.phase}. Expected {expected}.")


def ensure_turn(state: RoundState, seat: int) -> None:
    validate_seat(seat)
    if seat != state.current_seat:
        raise NotYourTurn(f"Seat {seat} cannot act; it is seat {state.current_seat}'s turn.")


def check_invariants(state: RoundState) -> None:
    """Verify the structural invariants of a round value."""
    if len(state.hands) != PLAYER_COUNT:
        raise InvariantViolation("Round must hold four hands.")
    if len(state.current_trick) >= TRICK_SIZE:
        raise InvariantViolation("A full trick must be resolved before play continues.")
    if len(state.completed_tricks) > TRICKS_PER_ROUND:
        raise InvariantViolation("A round has at most 13 tricks.")

    in_hands = sum(len(hand) for hand in state.hands)
    expected = DECK_SIZE - TRICK_SIZE * len(state.completed_tricks) - len(state.current_trick)
    if in_hands != expected:
        raise InvariantViolation(f"Hands hold {in_hands} cards, expected {expected}.")

    seen = [card for hand in state.hands for card in hand]
    seen.extend(state.played_cards())
    if len(seen) != len(set(seen)):
        raise InvariantViolation("Duplicate card found in round state.")

    if state.current_seat is not None and state.current_seat not in SEATS:
        raise InvariantViolation(f"Invalid current seat {state.current_seat!r}.")
