"""Bidding state machine for Tarneeb."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List

from .rules_schema import DEFAULT_RULES, RuleSet
from .seats import next_seat
from .state import Bid, IllegalAction, Phase, RoundState, ensure_phase, ensure_turn

logger = logging.getLogger(__name__)

PASS = 0
PASSES_TO_CLOSE = 3


class BiddingError(IllegalAction, ValueError):
    """Base class for bidding related errors."""


class BidNotAllowed(BiddingError):
    """Raised when the bid cannot legally be made."""


def valid_bid_amounts(state: RoundState, rules: RuleSet = DEFAULT_RULES) -> List[int]:
    """Return every amount that would raise the current bid."""
    floor = max(rules.min_bid, state.bid.amount + 1)
    return list(range(floor, rules.max_bid + 1))


def is_all_passed(state: RoundState) -> bool:
    """True once every seat has passed and nobody ever bid."""
    return state.phase is Phase.BIDDING and not state.bid.exists() and len(state.pass_set) == 4


def bidding_over(state: RoundState) -> bool:
    return state.phase is not Phase.BIDDING or is_all_passed(state)


def place_bid(state: RoundState, seat: int, amount: int, rules: RuleSet = DEFAULT_RULES) -> RoundState:
    """Apply a bid of ``amount`` tricks (0 means pass) by ``seat``."""
    if amount == PASS:
        return pass_bid(state, seat, rules)

    _ensure_open(state, seat)
    if amount < rules.min_bid or amount > rules.max_bid:
        raise BidNotAllowed(f"Bid {amount} outside {rules.min_bid}..{rules.max_bid}.")

    if amount <= state.bid.amount:
        if rules.invalid_bid_policy == "reject":
            raise BidNotAllowed(f"Bid {amount} must exceed the current bid {state.bid.amount}.")
        logger.warning("Ignoring bid %s from seat %s; current bid is %s", amount, seat, state.bid.amount)
        return replace(
            state,
            current_seat=next_seat(seat),
            history=state.history + ((seat, "ignored", amount),),
        )

    updated = replace(
        state,
        bid=Bid(seat=seat, amount=amount),
        pass_set=frozenset(),
        current_seat=next_seat(seat),
        history=state.history + ((seat, "bid", amount),),
    )
    if amount >= rules.max_bid:
        return _close_bidding(updated)
    return updated


def pass_bid(state: RoundState, seat: int, rules: RuleSet = DEFAULT_RULES) -> RoundState:
    _ensure_open(state, seat)

    updated = replace(
        state,
        pass_set=state.pass_set | {seat},
        current_seat=next_seat(seat),
        history=state.history + ((seat, "pass", None),),
    )

    if updated.bid.exists() and len(updated.pass_set) >= PASSES_TO_CLOSE:
        return _close_bidding(updated)

    if is_all_passed(updated):
        return _resolve_all_passed(updated, rules)

    return updated


def _close_bidding(state: RoundState) -> RoundState:
    logger.info("Seat %s wins the bidding with %s", state.bid.seat, state.bid.amount)
    return replace(state, phase=Phase.TRUMP_SELECTION, current_seat=state.bid.seat)


def _resolve_all_passed(state: RoundState, rules: RuleSet) -> RoundState:
    if rules.all_pass_policy == "force_minimum":
        logger.warning("All seats passed; seat %s is forced to bid %s", state.opening_seat, rules.min_bid)
        forced = replace(state, bid=Bid(seat=state.opening_seat, amount=rules.min_bid))
        return _close_bidding(forced)
    logger.warning("All seats passed in round %s; a redeal is required", state.round_number)
    return replace(state, current_seat=None)


def _ensure_open(state: RoundState, seat: int) -> None:
    ensure_phase(state, Phase.BIDDING)
    if is_all_passed(state):
        raise BiddingError("All seats passed; the round must be redealt.")
    ensure_turn(state, seat)
