import logging

import pytest

from engine.deck import build_deck
from engine.game import GameSession, Player, default_players
from engine.rules_schema import AIConfig, RuleSet
from engine.scoring import score_round
from engine.seats import Team
from engine.state import Phase, Scores, check_invariants
from bots.heuristic import HeuristicBot
from bots.random_bot import RandomBot


def all_bots_session(seed=11, rules=None):
    rules = rules or RuleSet(all_pass_policy="force_minimum")
    return GameSession(players=default_players(human_seats=()), seed=seed, rules=rules)


def test_ai_plays_a_full_round():
    session = all_bots_session()
    session.start_round()
    actions = session.run_ai_turns()
    state = session.state

    assert actions
    assert state.phase is Phase.FINISHED
    assert len(state.completed_tricks) == 13
    check_invariants(state)

    expected = score_round(bid=state.bid, completed_tricks=state.completed_tricks, prior_scores=Scores())
    result = session.finish_round()
    assert result.delta == expected.delta
    assert session.scores == expected.new_scores
    assert session.state is None
    assert session.round_history == [result]


def test_scores_carry_across_rounds_and_opening_rotates():
    session = all_bots_session(seed=3)
    first = session.start_round()
    assert first.opening_seat == 1
    session.run_ai_turns()
    after_first = session.state.scores

    second = session.start_round()
    assert second.opening_seat == 2
    assert second.round_number == 2
    assert second.scores == after_first
    assert session.scores == after_first


def test_human_seat_blocks_ai_loop():
    session = GameSession(seed=5)
    session.start_round(opening_seat=1, deck=build_deck())
    assert not session.is_ai_turn()
    assert session.run_ai_turns() == []

    session.bid(1, 7)
    taken = session.run_ai_turns()
    assert all(action.seat != 1 for action in taken)
    assert session.seat_to_act() == 1 or session.state.phase is not Phase.BIDDING


def test_all_pass_redeals_with_next_opening_seat(caplog):
    session = GameSession(players=default_players(human_seats=(1, 2, 3, 4)))
    session.start_round(opening_seat=1, deck=build_deck())
    with caplog.at_level(logging.WARNING, logger="engine.game"):
        for seat in (1, 2, 3, 4):
            session.pass_bid(seat)

    state = session.state
    assert session.redeals == 1
    assert state.phase is Phase.BIDDING
    assert state.opening_seat == 2
    assert state.current_seat == 2
    assert state.history == ()
    assert "redealing" in caplog.text


def test_start_round_refuses_while_round_in_progress():
    session = GameSession(seed=1)
    session.start_round()
    with pytest.raises(RuntimeError):
        session.start_round()


def test_match_winner_needs_target_and_a_lead():
    session = GameSession()
    assert session.match_winner() is None
    session.scores = Scores(team_a=31, team_b=12)
    assert session.match_winner() is Team.A
    session.scores = Scores(team_a=33, team_b=35)
    assert session.match_winner() is Team.B
    session.scores = Scores(team_a=32, team_b=32)
    assert session.match_winner() is None


def test_custom_strategies_and_seat_validation():
    rules = RuleSet(all_pass_policy="force_minimum", ai=AIConfig(min_confidence=0))
    strategies = {2: RandomBot(seed=2, rules=rules), 4: RandomBot(seed=4, rules=rules)}
    session = GameSession(players=default_players(human_seats=()), seed=8, rules=rules, strategies=strategies)
    assert isinstance(session.strategies[1], HeuristicBot)
    assert session.strategies[2] is strategies[2]
    session.start_round()
    session.run_ai_turns()
    assert session.state.is_finished()

    with pytest.raises(ValueError):
        GameSession(players=[Player(seat=1, name="solo")])
