import pytest

from engine.game import GameSession, default_players
from engine.service import RoundService
from engine.state import IllegalAction


def human_table():
    return RoundService(GameSession(players=default_players(human_seats=(1, 2, 3, 4)), seed=4))


def test_round_view_initial_state():
    service = human_table()
    view = service.start_round(opening_seat=1)

    assert view.phase == "bidding"
    assert view.is_my_turn
    assert len(view.hand) == 13
    assert len(view.hand_labels) == 13
    assert view.legal_bids == list(range(7, 14))
    assert view.legal_moves == []
    assert view.hand_sizes == [13, 13, 13, 13]
    assert view.bid_seat is None
    assert view.trick is None


def test_round_view_tracks_bids_and_passes():
    service = human_table()
    service.start_round(opening_seat=1)
    view = service.place_bid(1, 8)

    assert view.bid_amount == 8
    assert view.bid_seat == 1
    assert not view.is_my_turn
    assert view.bidding_history[-1] == {"seat": 1, "action": "bid", "amount": 8}
    assert service.get_round_view(2).legal_bids == [9, 10, 11, 12, 13]

    view = service.pass_bid(2)
    assert view.passed == [2]


def test_play_through_service_payloads():
    service = human_table()
    service.start_round(opening_seat=1)
    service.place_bid(1, 7)
    for seat in (2, 3, 4):
        service.pass_bid(seat)
    view = service.choose_trump(1, "Hearts")
    assert view.phase == "playing"
    assert view.trump == "hearts"
    assert view.legal_moves == view.hand

    card = view.legal_moves[0]
    view = service.play_card(1, card)
    assert view.trick.plays[0].card == card
    assert len(view.hand) == 12

    follower = service.get_round_view(2)
    assert follower.is_my_turn
    in_suit = [held for held in follower.hand if held["suit"] == card["suit"]]
    assert follower.legal_moves == (in_suit or follower.hand)


def test_illegal_actions_surface_engine_errors():
    service = human_table()
    service.start_round(opening_seat=1)
    with pytest.raises(IllegalAction):
        service.place_bid(2, 7)
    with pytest.raises(ValueError):
        service.choose_trump(1, "stars")


def test_advance_ai_stops_at_human_seat():
    service = RoundService(GameSession(seed=6))
    service.start_round(opening_seat=2)
    actions = service.advance_ai()
    assert actions
    assert service.session.seat_to_act() == 1

    session_view = service.get_session_view()
    assert session_view.round is not None
    assert session_view.scores == {"teamA": 0, "teamB": 0}
    assert session_view.match_winner is None


def test_views_require_a_round():
    service = RoundService()
    assert not service.has_active_round()
    assert service.get_session_view().round is None
    with pytest.raises(RuntimeError):
        service.get_round_view()
