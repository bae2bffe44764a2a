"""Round scoring helpers for Tarneeb."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

from .seats import Team, team_of
from .state import Bid, Scores
from .trick import CompletedTrick


class ScoringError(ValueError):
    """Raised when a round cannot be scored."""


@dataclass(frozen=True)
class RoundScoreResult:
    new_scores: Scores
    delta: Scores
    bid_made: bool
    bidding_team: Team
    tricks: Tuple[int, int]

    def tricks_for(self, team: Team) -> int:
        return self.tricks[0] if team is Team.A else self.tricks[1]


def team_tricks(completed_tricks: Iterable[CompletedTrick]) -> Tuple[int, int]:
    """Return (team A, team B) trick counts."""
    team_a = 0
    team_b = 0
    for trick in completed_tricks:
        if team_of(trick.winner) is Team.A:
            team_a += 1
        else:
            team_b += 1
    return team_a, team_b


def score_round(
    *,
    bid: Bid,
    completed_tricks: Iterable[CompletedTrick],
    prior_scores: Scores,
) -> RoundScoreResult:
    """Score a finished round.

    The defending team always banks the tricks it took. The bidding team banks
    its tricks when it makes the bid; when it falls short it loses the full
    bid amount, not just the shortfall.
    """
    if bid.seat is None or bid.amount <= 0:
        raise ScoringError("Cannot score a round without a winning bid.")

    tricks = team_tricks(completed_tricks)
    bidding_team = team_of(bid.seat)
    defending_team = Team.B if bidding_team is Team.A else Team.A
    bidder_tricks = tricks[0] if bidding_team is Team.A else tricks[1]
    defender_tricks = tricks[1] if bidding_team is Team.A else tricks[0]

    bid_made = bidder_tricks >= bid.amount
    delta = Scores()
    if bid_made:
        delta = delta.add(bidding_team, bidder_tricks)
    else:
        delta = delta.add(bidding_team, -bid.amount)
    delta = delta.add(defending_team, defender_tricks)
    new_scores = Scores(
        team_a=prior_scores.team_a + delta.team_a,
        team_b=prior_scores.team_b + delta.team_b,
    )

    return RoundScoreResult(
        new_scores=new_scores,
        delta=delta,
        bid_made=bid_made,
        bidding_team=bidding_team,
        tricks=tricks,
    )
