"""Convenience service layer for UI and agents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .bidding import valid_bid_amounts
from .cards import Card, card_label, deserialize_card, parse_suit, serialize_card
from .game import GameSession
from .mechanics import legal_moves
from .scoring import team_tricks
from .seats import SEATS
from .state import Phase, RoundState
from .trick import Play


@dataclass
class TrickPlayView:
    seat: int
    card: dict
    label: str


@dataclass
class TrickView:
    plays: list[TrickPlayView]
    winner: Optional[int] = None


@dataclass
class RoundView:
    phase: str
    round_number: int
    perspective: int
    current_seat: Optional[int]
    is_my_turn: bool
    bid_amount: int
    bid_seat: Optional[int]
    passed: list[int]
    trump: Optional[str]
    hand: list[dict]
    hand_labels: list[str]
    legal_moves: list[dict]
    legal_move_labels: list[str]
    legal_bids: list[int]
    hand_sizes: list[int]
    trick: Optional[TrickView]
    completed_tricks: list[TrickView]
    tricks_won: dict
    scores: dict
    bidding_history: list[dict]


@dataclass
class SessionView:
    scores: dict
    round: Optional[RoundView]
    match_winner: Optional[str]


def _play_view(play: Play) -> TrickPlayView:
    return TrickPlayView(seat=play.seat, card=serialize_card(play.card), label=card_label(play.card))


class RoundService:
    """Facade around GameSession for UI consumers."""

    def __init__(self, session: Optional[GameSession] = None) -> None:
        self.session = session or GameSession()

    # Session lifecycle -------------------------------------------------

    def start_round(self, opening_seat: Optional[int] = None) -> RoundView:
        self.session.start_round(opening_seat=opening_seat)
        return self.get_round_view()

    def has_active_round(self) -> bool:
        return self.session.state is not None

    def finish_round(self) -> SessionView:
        self.session.finish_round()
        return self.get_session_view()

    # Actions -----------------------------------------------------------

    def place_bid(self, seat: int, amount: int) -> RoundView:
        self.session.bid(seat, amount)
        return self.get_round_view(seat)

    def pass_bid(self, seat: int) -> RoundView:
        self.session.pass_bid(seat)
        return self.get_round_view(seat)

    def choose_trump(self, seat: int, suit_name: str) -> RoundView:
        self.session.choose_trump(seat, parse_suit(suit_name))
        return self.get_round_view(seat)

    def play_card(self, seat: int, card_payload: dict) -> RoundView:
        card = deserialize_card(card_payload)
        self.session.play_card(seat, card)
        return self.get_round_view(seat)

    def advance_ai(self) -> list[str]:
        """Run AI seats until a human is up; return what they did."""
        return [action.describe() for action in self.session.run_ai_turns()]

    # Views -------------------------------------------------------------

    def get_session_view(self, perspective: int = 1) -> SessionView:
        winner = self.session.match_winner()
        return SessionView(
            scores={"teamA": self.session.scores.team_a, "teamB": self.session.scores.team_b},
            round=self.get_round_view(perspective) if self.has_active_round() else None,
            match_winner=str(winner) if winner is not None else None,
        )

    def get_round_view(self, perspective: int = 1) -> RoundView:
        state = self._require_round()
        hand = list(state.hand(perspective))
        my_turn = state.current_seat == perspective and not state.is_finished()

        moves: List[Card] = []
        if my_turn and state.phase is Phase.PLAYING:
            moves = legal_moves(hand, state.current_trick)
        bids: List[int] = []
        if my_turn and state.phase is Phase.BIDDING:
            bids = valid_bid_amounts(state, self.session.rules)

        team_a, team_b = team_tricks(state.completed_tricks)
        return RoundView(
            phase=state.phase.value,
            round_number=state.round_number,
            perspective=perspective,
            current_seat=state.current_seat,
            is_my_turn=my_turn,
            bid_amount=state.bid.amount,
            bid_seat=state.bid.seat,
            passed=sorted(state.pass_set),
            trump=str(state.trump) if state.trump is not None else None,
            hand=[serialize_card(card) for card in hand],
            hand_labels=[card_label(card) for card in hand],
            legal_moves=[serialize_card(card) for card in moves],
            legal_move_labels=[card_label(card) for card in moves],
            legal_bids=bids,
            hand_sizes=[len(state.hand(seat)) for seat in SEATS],
            trick=TrickView(plays=[_play_view(play) for play in state.current_trick]) if state.current_trick else None,
            completed_tricks=[
                TrickView(plays=[_play_view(play) for play in trick.plays], winner=trick.winner)
                for trick in state.completed_tricks
            ],
            tricks_won={"teamA": team_a, "teamB": team_b},
            scores={"teamA": state.scores.team_a, "teamB": state.scores.team_b},
            bidding_history=[
                {"seat": seat, "action": action, "amount": amount}
                for seat, action, amount in state.history
            ],
        )

    # Helpers -----------------------------------------------------------

    def _require_round(self) -> RoundState:
        if self.session.state is None:
            raise RuntimeError("No active round.")
        return self.session.state
