"""Trump selection and trick play for Tarneeb."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List

from .cards import Card, Suit
from .mechanics import legal_moves
from .scoring import RoundScoreResult, score_round
from .state import (
    TRICKS_PER_ROUND,
    IllegalAction,
    Phase,
    RoundState,
    Scores,
    check_invariants,
    ensure_phase,
    ensure_turn,
)
from .seats import next_seat
from .trick import TRICK_SIZE, Play, resolve_trick

logger = logging.getLogger(__name__)


class PlayError(IllegalAction):
    """Base class for trump and card play errors."""


class InvalidPlay(PlayError):
    """Raised when an illegal card play is attempted."""


class InvalidTrumpSelection(PlayError):
    """Raised when trump cannot be set as requested."""


def choose_trump(state: RoundState, seat: int, suit: Suit) -> RoundState:
    """The winning bidder names trump and leads the first trick."""
    ensure_phase(state, Phase.TRUMP_SELECTION)
    ensure_turn(state, seat)
    if seat != state.bid.seat:
        raise InvalidTrumpSelection("Only the winning bidder may choose trump.")
    if not isinstance(suit, Suit):
        raise InvalidTrumpSelection(f"Trump must be a Suit, got {suit!r}.")
    if state.trump is not None:
        raise InvalidTrumpSelection("Trump has already been chosen.")

    logger.info("Seat %s chooses %s as trump", seat, suit)
    return replace(state, trump=suit, phase=Phase.PLAYING, current_seat=state.bid.seat)


def available_moves(state: RoundState, seat: int) -> List[Card]:
    ensure_phase(state, Phase.PLAYING)
    ensure_turn(state, seat)
    return legal_moves(state.hand(seat), state.current_trick)


def play_card(state: RoundState, seat: int, card: Card) -> RoundState:
    """Play ``card`` from ``seat``; resolves the trick and scores the round when due."""
    ensure_phase(state, Phase.PLAYING)
    ensure_turn(state, seat)

    hand = state.hand(seat)
    if card not in hand:
        raise InvalidPlay(f"Card {card} is not in seat {seat}'s hand.")
    if card not in legal_moves(hand, state.current_trick):
        led = state.current_trick[0].card.suit
        raise InvalidPlay(f"Seat {seat} must follow {led}; {card} is not legal.")

    remaining = tuple(held for held in hand if held != card)
    trick = state.current_trick + (Play(seat=seat, card=card),)
    updated = replace(state, hands=state.with_hand(seat, remaining), current_trick=trick)

    if len(trick) < TRICK_SIZE:
        return replace(updated, current_seat=next_seat(seat))
    return _complete_trick(updated)


def _complete_trick(state: RoundState) -> RoundState:
    completed = resolve_trick(state.current_trick, state.trump)
    tricks = state.completed_tricks + (completed,)
    logger.info("Trick %s won by seat %s with %s", len(tricks), completed.winner, completed.winning_card())

    updated = replace(
        state,
        completed_tricks=tricks,
        current_trick=(),
        current_seat=completed.winner,
    )
    if len(tricks) == TRICKS_PER_ROUND:
        updated = _finish_round(updated)
    check_invariants(updated)
    return updated


def _finish_round(state: RoundState) -> RoundState:
    result = score_round(
        bid=state.bid,
        completed_tricks=state.completed_tricks,
        prior_scores=state.scores,
    )
    logger.info(
        "Round %s scored: bid %s %s, tricks %s, scores A=%s B=%s",
        state.round_number,
        state.bid.amount,
        "made" if result.bid_made else "failed",
        result.tricks,
        result.new_scores.team_a,
        result.new_scores.team_b,
    )
    return replace(state, phase=Phase.FINISHED, current_seat=None, scores=result.new_scores)


def round_result(state: RoundState) -> RoundScoreResult:
    """Describe how a finished round changed the scores it carries."""
    ensure_phase(state, Phase.FINISHED)
    result = score_round(bid=state.bid, completed_tricks=state.completed_tricks, prior_scores=Scores())
    return replace(result, new_scores=state.scores)
