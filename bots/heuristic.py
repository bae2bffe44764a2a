"""Heuristic Tarneeb bot.

Each decision (bidding, leading, following) is a prioritized list of rules.
A rule looks at a context object and either returns a decision or ``None``
to hand over to the next rule, so every rule can be tested on its own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, Sequence, Tuple, TypeVar

from engine.cards import (
    HONORS,
    Card,
    Rank,
    Suit,
    beats,
    cards_of_suit,
    lowest_card,
    rank_value,
)
from engine.estimator import best_trump
from engine.rules_schema import DEFAULT_RULES, RuleSet
from engine.seats import same_team
from engine.state import RoundState
from engine.trick import CompletedTrick, Play, lead_suit, winning_play

from .base import BotStrategy

logger = logging.getLogger(__name__)

Ctx = TypeVar("Ctx")
Out = TypeVar("Out")

EARLY_TRICK_PLAYS = 2
LATE_TRICK_PLAYS = 3


@dataclass(frozen=True)
class Rule(Generic[Ctx, Out]):
    name: str
    apply: Callable[[Ctx], Optional[Out]]


def run_rules(rules: Sequence[Rule[Ctx, Out]], context: Ctx) -> Tuple[str, Out]:
    """Return the name and decision of the first rule that fires."""
    for rule in rules:
        decision = rule.apply(context)
        if decision is not None:
            return rule.name, decision
    raise RuntimeError("No rule produced a decision.")


# Bidding -------------------------------------------------------------------


@dataclass(frozen=True)
class BidContext:
    current_bid: int
    best_suit: Optional[Suit]
    best_tricks: int
    rules: RuleSet

    @property
    def desired_bid(self) -> int:
        return self.best_tricks + 1


def _pass_when_unsure(ctx: BidContext) -> Optional[int]:
    return 0 if ctx.best_tricks < ctx.rules.ai.min_confidence else None


def _pass_when_outbid(ctx: BidContext) -> Optional[int]:
    return 0 if ctx.desired_bid <= ctx.current_bid else None


def _bid_estimate_plus_one(ctx: BidContext) -> Optional[int]:
    return max(ctx.rules.min_bid, min(ctx.rules.max_bid, ctx.desired_bid))


BID_RULES: List[Rule[BidContext, int]] = [
    Rule("too few tricks", _pass_when_unsure),
    Rule("cannot outbid", _pass_when_outbid),
    Rule("estimate plus one", _bid_estimate_plus_one),
]


# Card play -----------------------------------------------------------------


@dataclass(frozen=True)
class PlayContext:
    seat: int
    hand: Tuple[Card, ...]
    trump: Optional[Suit]
    trick: Tuple[Play, ...]
    completed_tricks: Tuple[CompletedTrick, ...]

    @classmethod
    def from_state(cls, state: RoundState, seat: int) -> "PlayContext":
        return cls(
            seat=seat,
            hand=state.hand(seat),
            trump=state.trump,
            trick=state.current_trick,
            completed_tricks=state.completed_tricks,
        )

    @property
    def non_trump(self) -> List[Card]:
        return [card for card in self.hand if card.suit is not self.trump]

    @property
    def trumps(self) -> List[Card]:
        return cards_of_suit(self.hand, self.trump) if self.trump is not None else []

    @property
    def led(self) -> Optional[Suit]:
        return lead_suit(self.trick)

    @property
    def in_led_suit(self) -> List[Card]:
        return cards_of_suit(self.hand, self.led)

    @property
    def winner(self) -> Play:
        return winning_play(self.trick, self.trump)

    @property
    def partner_winning(self) -> bool:
        return same_team(self.seat, self.winner.seat)

    def beaters(self, cards: Sequence[Card]) -> List[Card]:
        led = self.led
        assert led is not None
        winning = self.winner.card
        return [card for card in cards if beats(card, winning, led, self.trump)]

    def ace_seen(self, suit: Suit) -> bool:
        return any(
            card.rank is Rank.ACE and card.suit is suit
            for trick in self.completed_tricks
            for card in trick.cards
        )


def _lowest_discard(ctx: PlayContext) -> Card:
    return lowest_card(ctx.non_trump or ctx.hand)


def _lead_side_ace(ctx: PlayContext) -> Optional[Card]:
    return next((card for card in ctx.non_trump if card.rank is Rank.ACE), None)


def _lead_king_after_ace(ctx: PlayContext) -> Optional[Card]:
    for card in ctx.non_trump:
        if card.rank is Rank.KING and ctx.ace_seen(card.suit):
            return card
    return None


def _lead_middle_of_longest(ctx: PlayContext) -> Optional[Card]:
    counts: dict[Suit, int] = {}
    for card in ctx.non_trump:
        counts[card.suit] = counts.get(card.suit, 0) + 1
    if not counts:
        return None
    # Equal lengths resolve to the suit met later in the hand.
    longest = None
    for suit, count in counts.items():
        if longest is None or count >= counts[longest]:
            longest = suit
    ordered = sorted(cards_of_suit(ctx.hand, longest), key=rank_value)
    return ordered[len(ordered) // 2]


def _lead_any_side_card(ctx: PlayContext) -> Optional[Card]:
    return ctx.non_trump[0] if ctx.non_trump else None


def _lead_anything(ctx: PlayContext) -> Optional[Card]:
    return ctx.hand[0] if ctx.hand else None


LEAD_RULES: List[Rule[PlayContext, Card]] = [
    Rule("side-suit ace", _lead_side_ace),
    Rule("king after its ace fell", _lead_king_after_ace),
    Rule("middle of longest side suit", _lead_middle_of_longest),
    Rule("any side card", _lead_any_side_card),
    Rule("any card", _lead_anything),
]


def _follow_low_for_partner(ctx: PlayContext) -> Optional[Card]:
    return lowest_card(ctx.in_led_suit) if ctx.partner_winning else None


def _follow_cheapest_winner(ctx: PlayContext) -> Optional[Card]:
    if len(ctx.trick) > EARLY_TRICK_PLAYS:
        return None
    winners = ctx.beaters(ctx.in_led_suit)
    return lowest_card(winners) if winners else None


def _follow_low(ctx: PlayContext) -> Optional[Card]:
    return lowest_card(ctx.in_led_suit)


FOLLOW_RULES: List[Rule[PlayContext, Card]] = [
    Rule("partner winning, play low", _follow_low_for_partner),
    Rule("win early with lowest winner", _follow_cheapest_winner),
    Rule("play low", _follow_low),
]


def _void_discard_for_partner(ctx: PlayContext) -> Optional[Card]:
    return _lowest_discard(ctx) if ctx.partner_winning else None


def _worth_trumping(ctx: PlayContext) -> bool:
    has_honor = any(play.card.rank in HONORS for play in ctx.trick)
    return has_honor or len(ctx.trick) >= LATE_TRICK_PLAYS


def _void_ruff(ctx: PlayContext) -> Optional[Card]:
    winners = ctx.beaters(ctx.trumps)
    if not winners or not _worth_trumping(ctx):
        return None
    return lowest_card(winners)


def _void_discard(ctx: PlayContext) -> Optional[Card]:
    return _lowest_discard(ctx)


VOID_RULES: List[Rule[PlayContext, Card]] = [
    Rule("partner winning, discard", _void_discard_for_partner),
    Rule("trump with lowest sufficient trump", _void_ruff),
    Rule("discard lowest", _void_discard),
]


class HeuristicBot(BotStrategy):
    """Trick-counting bidder with partner-aware card play."""

    name = "Heuristic"

    def __init__(self, rules: RuleSet = DEFAULT_RULES) -> None:
        self.rules = rules

    def offer_bid(self, state: RoundState, seat: int) -> int:
        suit, tricks = best_trump(state.hand(seat), discount=self.rules.ai.discount)
        ctx = BidContext(current_bid=state.bid.amount, best_suit=suit, best_tricks=tricks, rules=self.rules)
        rule, amount = run_rules(BID_RULES, ctx)
        logger.debug(
            "Seat %s bidding: best %s with %s tricks, current bid %s -> %s (%s)",
            seat, suit, tricks, state.bid.amount, amount or "pass", rule,
        )
        return amount

    def choose_trump(self, state: RoundState, seat: int) -> Suit:
        suit, tricks = best_trump(state.hand(seat), discount=self.rules.ai.discount)
        if suit is None:
            suit = Suit[self.rules.ai.default_trump.upper()]
        logger.debug("Seat %s selects trump %s (estimated %s tricks)", seat, suit, tricks)
        return suit

    def play_card(self, state: RoundState, seat: int) -> Card:
        ctx = PlayContext.from_state(state, seat)
        if not ctx.trick:
            rules = LEAD_RULES
        elif ctx.in_led_suit:
            rules = FOLLOW_RULES
        else:
            rules = VOID_RULES
        rule, card = run_rules(rules, ctx)
        logger.debug("Seat %s plays %s (%s)", seat, card, rule)
        return card
