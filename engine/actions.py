"""Structured player actions and their dispatch onto round transitions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional

from .bidding import bidding_over, pass_bid, place_bid, valid_bid_amounts
from .cards import Card, Suit, card_label
from .mechanics import legal_moves
from .play import choose_trump, play_card
from .rules_schema import DEFAULT_RULES, RuleSet
from .state import Phase, RoundState


class ActionType(Enum):
    """Top-level action categories."""

    BID = auto()
    PASS = auto()
    CHOOSE_TRUMP = auto()
    PLAY_CARD = auto()


@dataclass(frozen=True)
class Action:
    action_type: ActionType
    seat: int
    amount: Optional[int] = None
    suit: Optional[Suit] = None
    card: Optional[Card] = None

    @classmethod
    def bid(cls, seat: int, amount: int) -> "Action":
        if amount == 0:
            return cls(ActionType.PASS, seat)
        return cls(ActionType.BID, seat, amount=amount)

    @classmethod
    def pass_(cls, seat: int) -> "Action":
        return cls(ActionType.PASS, seat)

    @classmethod
    def trump(cls, seat: int, suit: Suit) -> "Action":
        return cls(ActionType.CHOOSE_TRUMP, seat, suit=suit)

    @classmethod
    def play(cls, seat: int, card: Card) -> "Action":
        return cls(ActionType.PLAY_CARD, seat, card=card)

    def describe(self) -> str:
        if self.action_type is ActionType.BID:
            return f"Seat {self.seat} bids {self.amount}"
        if self.action_type is ActionType.PASS:
            return f"Seat {self.seat} passes"
        if self.action_type is ActionType.CHOOSE_TRUMP:
            return f"Seat {self.seat} chooses {self.suit} as trump"
        assert self.card is not None
        return f"Seat {self.seat} plays {card_label(self.card)}"


def apply_action(state: RoundState, action: Action, rules: RuleSet = DEFAULT_RULES) -> RoundState:
    """Apply one action and return the next state."""
    if action.action_type is ActionType.BID:
        if action.amount is None:
            raise ValueError("Bid action missing amount.")
        return place_bid(state, action.seat, action.amount, rules)
    if action.action_type is ActionType.PASS:
        return pass_bid(state, action.seat, rules)
    if action.action_type is ActionType.CHOOSE_TRUMP:
        if action.suit is None:
            raise ValueError("Trump action missing suit.")
        return choose_trump(state, action.seat, action.suit)
    if action.card is None:
        raise ValueError("Play action missing card.")
    return play_card(state, action.seat, action.card)


def legal_actions(state: RoundState, rules: RuleSet = DEFAULT_RULES) -> List[Action]:
    """Enumerate every action the seat to act may legally take."""
    seat = state.current_seat
    if seat is None:
        return []
    if state.phase is Phase.BIDDING:
        if bidding_over(state):
            return []
        actions = [Action.bid(seat, amount) for amount in valid_bid_amounts(state, rules)]
        actions.append(Action.pass_(seat))
        return actions
    if state.phase is Phase.TRUMP_SELECTION:
        return [Action.trump(seat, suit) for suit in Suit]
    if state.phase is Phase.PLAYING:
        return [Action.play(seat, card) for card in legal_moves(state.hand(seat), state.current_trick)]
    return []
