"""High-level game orchestration for Tarneeb."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from random import Random
from typing import Dict, List, Optional, Sequence

from bots.base import BotStrategy
from bots.heuristic import HeuristicBot

from .actions import Action, apply_action
from .bidding import is_all_passed
from .cards import Card, Suit
from .deck import build_deck, deal, shuffle
from .play import round_result
from .rules_schema import RuleSet
from .scoring import RoundScoreResult
from .seats import SEATS, Team, next_seat
from .state import Phase, RoundState, Scores, new_round

logger = logging.getLogger(__name__)

MAX_AI_STEPS = 2000


@dataclass
class Player:
    seat: int
    name: str
    is_human: bool = False


def default_players(human_seats: Sequence[int] = (1,)) -> List[Player]:
    return [
        Player(seat=seat, name="You" if seat in human_seats else f"AI Player {seat}", is_human=seat in human_seats)
        for seat in SEATS
    ]


@dataclass
class GameSession:
    """Hold the authoritative round state and apply one action at a time.

    Human actions arrive through ``apply`` (or the ``bid``/``choose_trump``/
    ``play_card`` wrappers). AI seats are driven by ``step_ai`` and
    ``run_ai_turns``, which ask the seat's bot for a decision and apply it
    through the same path.
    """

    players: List[Player] = field(default_factory=default_players)
    seed: Optional[int] = None
    rules: RuleSet = field(default_factory=RuleSet)
    strategies: Dict[int, BotStrategy] = field(default_factory=dict)
    scores: Scores = field(default_factory=Scores)
    rng: Random = field(init=False)
    state: Optional[RoundState] = field(default=None, init=False)
    round_number: int = field(default=0, init=False)
    redeals: int = field(default=0, init=False)
    round_history: List[RoundScoreResult] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        if sorted(player.seat for player in self.players) != list(SEATS):
            raise ValueError("A session needs exactly one player per seat 1-4.")
        self.players = sorted(self.players, key=lambda player: player.seat)
        self.rng = Random(self.seed)
        for player in self.players:
            if not player.is_human and player.seat not in self.strategies:
                self.strategies[player.seat] = HeuristicBot(self.rules)

    # Round lifecycle ---------------------------------------------------

    def start_round(self, *, opening_seat: Optional[int] = None, deck: Optional[Sequence[Card]] = None) -> RoundState:
        if self.state is not None and not self.state.is_finished():
            raise RuntimeError("Current round is still in progress.")
        if self.state is not None:
            self.finish_round()
        self.round_number += 1
        if opening_seat is None:
            opening_seat = (self.round_number - 1) % len(SEATS) + 1
        self.state = self._deal_round(opening_seat, deck)
        logger.info("Round %s dealt; seat %s opens the bidding", self.round_number, opening_seat)
        return self.state

    def finish_round(self) -> RoundScoreResult:
        state = self._require_state()
        if state.phase is not Phase.FINISHED:
            raise RuntimeError("Cannot finish round before play is complete.")
        result = round_result(state)
        self.scores = state.scores
        self.round_history.append(result)
        self.state = None
        return result

    def match_winner(self) -> Optional[Team]:
        """Return the team that reached the target score, if any."""
        reached = [team for team in Team if self.scores.of(team) >= self.rules.target_score]
        if not reached:
            return None
        if len(reached) == 2 and self.scores.team_a == self.scores.team_b:
            return None
        return max(reached, key=self.scores.of)

    # Actions -----------------------------------------------------------

    def apply(self, action: Action) -> RoundState:
        state = self._require_state()
        updated = apply_action(state, action, self.rules)
        if is_all_passed(updated):
            updated = self._redeal(updated)
        self.state = updated
        return updated

    def bid(self, seat: int, amount: int) -> RoundState:
        return self.apply(Action.bid(seat, amount))

    def pass_bid(self, seat: int) -> RoundState:
        return self.apply(Action.pass_(seat))

    def choose_trump(self, seat: int, suit: Suit) -> RoundState:
        return self.apply(Action.trump(seat, suit))

    def play_card(self, seat: int, card: Card) -> RoundState:
        return self.apply(Action.play(seat, card))

    # AI ----------------------------------------------------------------

    def player(self, seat: int) -> Player:
        return self.players[seat - 1]

    def seat_to_act(self) -> Optional[int]:
        if self.state is None or self.state.is_finished():
            return None
        return self.state.current_seat

    def is_ai_turn(self) -> bool:
        seat = self.seat_to_act()
        return seat is not None and not self.player(seat).is_human

    def step_ai(self) -> Optional[Action]:
        """Let the AI seat to act make one decision; ``None`` if a human is up."""
        if not self.is_ai_turn():
            return None
        state = self._require_state()
        seat = state.current_seat
        assert seat is not None
        if self.rules.ai.delay_seconds > 0:
            time.sleep(self.rules.ai.delay_seconds)
        action = self.strategies[seat].decide(state, seat)
        logger.debug("%s", action.describe())
        self.apply(action)
        return action

    def run_ai_turns(self, max_steps: int = MAX_AI_STEPS) -> List[Action]:
        """Apply AI decisions until a human must act or the round ends."""
        taken: List[Action] = []
        while self.is_ai_turn():
            if len(taken) >= max_steps:
                raise RuntimeError(f"AI did not yield within {max_steps} actions.")
            action = self.step_ai()
            assert action is not None
            taken.append(action)
        return taken

    # Helpers -----------------------------------------------------------

    def _deal_round(self, opening_seat: int, deck: Optional[Sequence[Card]]) -> RoundState:
        cards = list(deck) if deck is not None else shuffle(build_deck(), rng=self.rng)
        return new_round(
            deal(cards),
            opening_seat=opening_seat,
            scores=self.scores,
            round_number=self.round_number,
        )

    def _redeal(self, state: RoundState) -> RoundState:
        self.redeals += 1
        opening_seat = next_seat(state.opening_seat)
        logger.warning("Round %s: all seats passed, redealing with seat %s opening", state.round_number, opening_seat)
        return self._deal_round(opening_seat, None)

    def _require_state(self) -> RoundState:
        if self.state is None:
            raise RuntimeError("No active round.")
        return self.state
