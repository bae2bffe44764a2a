import pytest

from engine.cards import Card, Rank, Suit, beats
from engine.seats import next_seat, partner_of, same_team, team_of, Team
from engine.trick import Play, TrickError, resolve_trick, winning_play


def trick(*plays):
    return tuple(Play(seat=seat, card=card) for seat, card in plays)


def test_trump_beats_lead_suit():
    plays = trick(
        (1, Card(Rank.TEN, Suit.HEARTS)),
        (2, Card(Rank.ACE, Suit.SPADES)),
        (3, Card(Rank.KING, Suit.HEARTS)),
        (4, Card(Rank.TWO, Suit.SPADES)),
    )
    completed = resolve_trick(plays, Suit.SPADES)
    assert completed.winner == 2
    assert completed.winning_card() == Card(Rank.ACE, Suit.SPADES)


def test_highest_lead_card_wins_without_trump():
    plays = trick(
        (3, Card(Rank.TEN, Suit.HEARTS)),
        (4, Card(Rank.ACE, Suit.CLUBS)),
        (1, Card(Rank.QUEEN, Suit.HEARTS)),
        (2, Card(Rank.FOUR, Suit.HEARTS)),
    )
    assert resolve_trick(plays, Suit.SPADES).winner == 1


def test_lowest_trump_still_beats_lead_ace():
    plays = trick(
        (1, Card(Rank.ACE, Suit.DIAMONDS)),
        (2, Card(Rank.TWO, Suit.CLUBS)),
        (3, Card(Rank.KING, Suit.DIAMONDS)),
        (4, Card(Rank.THREE, Suit.DIAMONDS)),
    )
    assert resolve_trick(plays, Suit.CLUBS).winner == 2


def test_winning_play_on_partial_trick():
    plays = trick((2, Card(Rank.FIVE, Suit.HEARTS)), (3, Card(Rank.NINE, Suit.HEARTS)))
    assert winning_play(plays, Suit.SPADES).seat == 3
    with pytest.raises(TrickError):
        winning_play((), Suit.SPADES)


def test_resolve_requires_four_distinct_seats():
    three = trick(
        (1, Card(Rank.TWO, Suit.HEARTS)),
        (2, Card(Rank.THREE, Suit.HEARTS)),
        (3, Card(Rank.FOUR, Suit.HEARTS)),
    )
    with pytest.raises(TrickError):
        resolve_trick(three, Suit.SPADES)
    repeated = three + trick((1, Card(Rank.FIVE, Suit.HEARTS)))
    with pytest.raises(TrickError):
        resolve_trick(repeated, Suit.SPADES)


def test_beats_ignores_off_suit_discards():
    led = Suit.HEARTS
    assert not beats(Card(Rank.ACE, Suit.CLUBS), Card(Rank.TWO, Suit.HEARTS), led, Suit.SPADES)
    assert beats(Card(Rank.TWO, Suit.HEARTS), Card(Rank.ACE, Suit.CLUBS), led, Suit.SPADES)
    assert beats(Card(Rank.THREE, Suit.SPADES), Card(Rank.TWO, Suit.SPADES), led, Suit.SPADES)
    assert not beats(Card(Rank.ACE, Suit.HEARTS), Card(Rank.TWO, Suit.SPADES), led, Suit.SPADES)


def test_seat_partnerships():
    assert team_of(1) is Team.A and team_of(3) is Team.A
    assert team_of(2) is Team.B and team_of(4) is Team.B
    assert partner_of(1) == 3 and partner_of(4) == 2
    assert same_team(2, 4) and not same_team(1, 2)
    assert [next_seat(seat) for seat in (1, 2, 3, 4)] == [2, 3, 4, 1]
    with pytest.raises(ValueError):
        team_of(5)
