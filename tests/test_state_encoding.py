import json
from dataclasses import replace

import pytest

from engine.bidding import pass_bid, place_bid
from engine.cards import Card, Rank, Suit
from engine.deck import build_deck, deal
from engine.encode import decode_state, encode_state
from engine.play import choose_trump, play_card
from engine.state import InvariantViolation, new_round


def mid_round_state():
    state = new_round(deal(build_deck()), opening_seat=1)
    state = place_bid(state, 1, 7)
    for seat in (2, 3, 4):
        state = pass_bid(state, seat)
    state = choose_trump(state, 1, Suit.SPADES)
    for seat, rank in ((1, Rank.TWO), (2, Rank.THREE), (3, Rank.FOUR), (4, Rank.FIVE)):
        state = play_card(state, seat, Card(rank, Suit.HEARTS))
    return play_card(state, 4, Card(Rank.FOUR, Suit.DIAMONDS))


def test_snapshot_survives_json():
    state = mid_round_state()
    payload = json.loads(json.dumps(encode_state(state)))

    assert payload["phase"] == "playing"
    assert payload["trump"] == "spades"
    assert payload["completed_tricks"][0]["winner"] == 4
    assert payload["current_trick"] == [{"card": {"rank": "4", "suit": "diamonds"}, "seat": 4}]
    assert len(payload["hands"]["4"]) == 11
    assert decode_state(payload) == state


def test_shared_snapshot_hides_hands():
    state = mid_round_state()
    shared = encode_state(state, include_hands=False)
    assert "hands" not in shared
    with pytest.raises(ValueError):
        decode_state(shared)

    hands = encode_state(state)["hands"]
    assert decode_state(shared, hands=hands) == state


def test_decode_rejects_duplicated_cards():
    state = mid_round_state()
    broken = replace(state, hands=state.with_hand(1, state.hand(1)[:-1] + (state.hand(2)[0],)))
    with pytest.raises(InvariantViolation):
        decode_state(encode_state(broken))
