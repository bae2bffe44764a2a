from random import Random

import pytest

from engine.bidding import pass_bid, place_bid
from engine.cards import Card, Rank, Suit
from engine.deck import build_deck, deal, shuffle
from engine.mechanics import is_legal_play, legal_moves
from engine.play import InvalidPlay, available_moves, choose_trump, play_card, round_result
from engine.state import NotYourTurn, Phase, PhaseError, check_invariants, new_round
from engine.trick import Play


def round_in_play(deck=None, trump=Suit.SPADES):
    state = new_round(deal(deck or build_deck()), opening_seat=1)
    state = place_bid(state, 1, 7)
    for seat in (2, 3, 4):
        state = pass_bid(state, seat)
    return choose_trump(state, 1, trump)


def test_choose_trump_hands_lead_to_bidder():
    state = new_round(deal(build_deck()))
    state = place_bid(state, 1, 9)
    for seat in (2, 3, 4):
        state = pass_bid(state, seat)
    with pytest.raises(NotYourTurn):
        choose_trump(state, 2, Suit.HEARTS)
    state = choose_trump(state, 1, Suit.HEARTS)
    assert state.phase is Phase.PLAYING
    assert state.trump is Suit.HEARTS
    assert state.current_seat == 1
    with pytest.raises(PhaseError):
        choose_trump(state, 1, Suit.CLUBS)


def test_must_follow_lead_suit():
    state = round_in_play()
    state = play_card(state, 1, Card(Rank.TWO, Suit.HEARTS))
    assert state.current_seat == 2

    with pytest.raises(InvalidPlay):
        play_card(state, 2, Card(Rank.TWO, Suit.DIAMONDS))
    with pytest.raises(InvalidPlay):
        play_card(state, 2, Card(Rank.ACE, Suit.SPADES))

    moves = available_moves(state, 2)
    assert moves and all(card.suit is Suit.HEARTS for card in moves)


def test_void_player_may_play_anything():
    hand = [Card(Rank.ACE, Suit.CLUBS), Card(Rank.TWO, Suit.SPADES)]
    trick = (Play(seat=1, card=Card(Rank.KING, Suit.HEARTS)),)
    assert legal_moves(hand, trick) == hand
    assert legal_moves(hand, ()) == hand
    assert is_legal_play(hand, trick, Card(Rank.TWO, Suit.SPADES))
    assert not is_legal_play(hand, trick, Card(Rank.THREE, Suit.SPADES))


def test_completed_trick_winner_leads_next():
    state = round_in_play()
    before = state
    state = play_card(state, 1, Card(Rank.TWO, Suit.HEARTS))
    state = play_card(state, 2, Card(Rank.THREE, Suit.HEARTS))
    state = play_card(state, 3, Card(Rank.FOUR, Suit.HEARTS))
    state = play_card(state, 4, Card(Rank.FIVE, Suit.HEARTS))

    assert state.current_trick == ()
    assert len(state.completed_tricks) == 1
    assert state.completed_tricks[0].winner == 4
    assert state.current_seat == 4
    assert all(len(state.hand(seat)) == 12 for seat in (1, 2, 3, 4))
    assert len(before.hand(1)) == 13
    check_invariants(state)


def test_full_round_scores_once():
    state = round_in_play(deck=shuffle(build_deck(), rng=Random(21)))
    for _ in range(52):
        seat = state.current_seat
        state = play_card(state, seat, legal_moves(state.hand(seat), state.current_trick)[0])
        check_invariants(state)

    assert state.phase is Phase.FINISHED
    assert state.current_seat is None
    assert len(state.completed_tricks) == 13
    assert all(not state.hand(seat) for seat in (1, 2, 3, 4))

    result = round_result(state)
    assert sum(result.tricks) == 13
    assert result.new_scores == state.scores
    assert state.scores.team_a == result.delta.team_a
    assert state.scores.team_b == result.delta.team_b
    with pytest.raises(PhaseError):
        play_card(state, 1, Card(Rank.TWO, Suit.HEARTS))
