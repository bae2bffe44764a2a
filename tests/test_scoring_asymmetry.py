import pytest

from engine.scoring import ScoringError, score_round, team_tricks
from engine.seats import Team
from engine.state import Bid, Scores
from engine.trick import CompletedTrick


def tricks_won(team_a, team_b):
    return [CompletedTrick(plays=(), winner=1 + (i % 2) * 2) for i in range(team_a)] + [
        CompletedTrick(plays=(), winner=2 + (i % 2) * 2) for i in range(team_b)
    ]


def test_failed_bid_loses_full_amount_and_defenders_score():
    result = score_round(bid=Bid(seat=1, amount=9), completed_tricks=tricks_won(7, 6), prior_scores=Scores())
    assert not result.bid_made
    assert result.bidding_team is Team.A
    assert result.delta == Scores(team_a=-9, team_b=6)
    assert result.new_scores == Scores(team_a=-9, team_b=6)


def test_made_bid_scores_tricks_taken():
    result = score_round(bid=Bid(seat=2, amount=7), completed_tricks=tricks_won(5, 8), prior_scores=Scores(10, 4))
    assert result.bid_made
    assert result.bidding_team is Team.B
    assert result.delta == Scores(team_a=5, team_b=8)
    assert result.new_scores == Scores(team_a=15, team_b=12)
    assert result.tricks_for(Team.B) == 8


def test_exactly_making_the_bid_counts():
    result = score_round(bid=Bid(seat=3, amount=7), completed_tricks=tricks_won(7, 6), prior_scores=Scores())
    assert result.bid_made
    assert result.new_scores == Scores(team_a=7, team_b=6)


def test_team_tricks_by_winner_seat():
    assert team_tricks(tricks_won(4, 9)) == (4, 9)


def test_scoring_requires_a_bid():
    with pytest.raises(ScoringError):
        score_round(bid=Bid(), completed_tricks=tricks_won(7, 6), prior_scores=Scores())
