"""JSON-friendly snapshot encoding of round state."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from .cards import Card, deserialize_card, parse_suit, serialize_card
from .seats import SEATS
from .state import Bid, Phase, RoundState, Scores, check_invariants
from .trick import CompletedTrick, Play


def encode_hand(cards: Iterable[Card]) -> List[dict]:
    return [serialize_card(card) for card in cards]


def encode_play(play: Play) -> Dict[str, Any]:
    return {"card": serialize_card(play.card), "seat": play.seat}


def decode_play(payload: Mapping[str, Any]) -> Play:
    return Play(seat=int(payload["seat"]), card=deserialize_card(payload["card"]))


def encode_state(state: RoundState, *, include_hands: bool = True) -> Dict[str, Any]:
    """Return the round as plain dicts and lists.

    Hands are keyed by seat number as a string. Pass ``include_hands=False``
    for the shared part of the state that every seat may see.
    """
    payload: Dict[str, Any] = {
        "phase": state.phase.value,
        "current_seat": state.current_seat,
        "bid": {"seat": state.bid.seat, "amount": state.bid.amount},
        "pass_set": sorted(state.pass_set),
        "trump": str(state.trump) if state.trump is not None else None,
        "current_trick": [encode_play(play) for play in state.current_trick],
        "completed_tricks": [
            {"cards": [encode_play(play) for play in trick.plays], "winner": trick.winner}
            for trick in state.completed_tricks
        ],
        "scores": {"teamA": state.scores.team_a, "teamB": state.scores.team_b},
        "opening_seat": state.opening_seat,
        "round_number": state.round_number,
        "history": [
            {"seat": seat, "action": action, "amount": amount}
            for seat, action, amount in state.history
        ],
    }
    if include_hands:
        payload["hands"] = {str(seat): encode_hand(state.hand(seat)) for seat in SEATS}
    return payload


def decode_state(payload: Mapping[str, Any], *, hands: Optional[Mapping[str, Any]] = None) -> RoundState:
    """Rebuild a ``RoundState`` from ``encode_state`` output and check its invariants."""
    hand_payload = hands if hands is not None else payload.get("hands")
    if hand_payload is None:
        raise ValueError("Snapshot carries no hands; pass them explicitly.")

    trump = payload.get("trump")
    bid = payload.get("bid") or {}
    scores = payload.get("scores") or {}
    state = RoundState(
        phase=Phase(payload["phase"]),
        current_seat=payload.get("current_seat"),
        hands=tuple(
            tuple(deserialize_card(card) for card in hand_payload[str(seat)])
            for seat in SEATS
        ),
        bid=Bid(seat=bid.get("seat"), amount=int(bid.get("amount", 0))),
        pass_set=frozenset(int(seat) for seat in payload.get("pass_set", ())),
        trump=parse_suit(trump) if trump else None,
        current_trick=tuple(decode_play(play) for play in payload.get("current_trick", ())),
        completed_tricks=tuple(
            CompletedTrick(
                plays=tuple(decode_play(play) for play in trick["cards"]),
                winner=int(trick["winner"]),
            )
            for trick in payload.get("completed_tricks", ())
        ),
        scores=Scores(team_a=int(scores.get("teamA", 0)), team_b=int(scores.get("teamB", 0))),
        opening_seat=int(payload.get("opening_seat", 1)),
        round_number=int(payload.get("round_number", 1)),
        history=tuple(
            (int(entry["seat"]), str(entry["action"]), entry.get("amount"))
            for entry in payload.get("history", ())
        ),
    )
    check_invariants(state)
    return state
