"""REST service for Tarneeb rooms and single-player games against the heuristic bots."""

from __future__ import annotations

import logging
import uuid
from dataclasses import asdict
from typing import Dict, Literal, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from engine.actions import Action
from engine.cards import deserialize_card, parse_suit
from engine.encode import encode_hand, encode_state
from engine.game import GameSession, default_players
from engine.rules_schema import RuleSet
from engine.service import RoundService
from engine.state import IllegalAction, InvariantViolation

from server.rooms import RoomAlreadyStarted, RoomError, RoomFull, RoomNotFound, RoomNotReady, RoomStore

logger = logging.getLogger(__name__)

HUMAN_SEAT = 1


class CardPayload(BaseModel):
    rank: str
    suit: str


class NameRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=20)


class RoomActionRequest(BaseModel):
    seat: int = Field(..., ge=1, le=4)
    type: Literal["bid", "pass", "trump", "play"]
    amount: Optional[int] = None
    suit: Optional[str] = None
    card: Optional[CardPayload] = None


class StartRequest(BaseModel):
    name: str = Field("You", min_length=1, max_length=20)
    seed: Optional[int] = None
    rules: Optional[RuleSet] = None


class BidRequest(BaseModel):
    amount: int = Field(..., ge=0, le=13)


class TrumpRequest(BaseModel):
    suit: str


class PlayRequest(BaseModel):
    card: CardPayload


rooms = RoomStore()
sessions: Dict[str, RoundService] = {}


app = FastAPI(title="Tarneeb Play Service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(IllegalAction)
async def illegal_action_handler(request: Request, exc: IllegalAction) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(RoomError)
async def room_error_handler(request: Request, exc: RoomError) -> JSONResponse:
    if isinstance(exc, RoomNotFound):
        status = 404
    elif isinstance(exc, (RoomFull, RoomAlreadyStarted, RoomNotReady)):
        status = 409
    else:
        status = 400
    return JSONResponse(status_code=status, content={"detail": str(exc)})


@app.exception_handler(InvariantViolation)
async def invariant_handler(request: Request, exc: InvariantViolation) -> JSONResponse:
    logger.error("Invariant violated while handling %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal game state error"})


def to_action(request: RoomActionRequest) -> Action:
    try:
        if request.type == "bid":
            if request.amount is None:
                raise ValueError("Bid requires an amount.")
            return Action.bid(request.seat, request.amount)
        if request.type == "pass":
            return Action.pass_(request.seat)
        if request.type == "trump":
            if request.suit is None:
                raise ValueError("Trump selection requires a suit.")
            return Action.trump(request.seat, parse_suit(request.suit))
        if request.card is None:
            raise ValueError("Play requires a card.")
        return Action.play(request.seat, deserialize_card(request.card.model_dump()))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


# Rooms ---------------------------------------------------------------------


@app.post("/rooms")
def create_room(request: NameRequest) -> Dict[str, object]:
    return asdict(rooms.create_room(request.name))


@app.post("/rooms/{code}/join")
def join_room(code: str, request: NameRequest) -> Dict[str, object]:
    return asdict(rooms.join_room(code, request.name))


@app.get("/rooms/{room_id}/seats")
def list_seats(room_id: str) -> Dict[str, object]:
    return {"seats": [asdict(info) for info in rooms.list_seats(room_id)]}


@app.post("/rooms/{room_id}/start")
def start_room_round(room_id: str) -> Dict[str, object]:
    state = rooms.start_round(room_id)
    return {"state": encode_state(state, include_hands=False)}


@app.get("/rooms/{room_id}/state")
def room_state(room_id: str, seat: int = Query(..., ge=1, le=4)) -> Dict[str, object]:
    state = rooms.get_state(room_id)
    return {"state": encode_state(state, include_hands=False), "hand": encode_hand(state.hand(seat))}


@app.post("/rooms/{room_id}/actions")
def room_action(room_id: str, request: RoomActionRequest) -> Dict[str, object]:
    state = rooms.apply(room_id, to_action(request))
    return {"state": encode_state(state, include_hands=False), "hand": encode_hand(state.hand(request.seat))}


# Single player -------------------------------------------------------------


def ensure_session(session_id: str) -> RoundService:
    service = sessions.get(session_id)
    if service is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return service


def validate_payload(parser, value) -> None:
    try:
        parser(value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def session_payload(service: RoundService, ai_actions: list[str]) -> Dict[str, object]:
    view = service.get_session_view(HUMAN_SEAT)
    return {"view": asdict(view), "aiActions": ai_actions}


@app.post("/session/start")
def start_session(request: StartRequest) -> Dict[str, object]:
    players = default_players((HUMAN_SEAT,))
    players[HUMAN_SEAT - 1].name = request.name
    session = GameSession(players=players, seed=request.seed, rules=request.rules or RuleSet())
    service = RoundService(session)
    service.start_round(opening_seat=HUMAN_SEAT)
    session_id = uuid.uuid4().hex
    sessions[session_id] = service
    ai_actions = service.advance_ai()
    return {"session_id": session_id, **session_payload(service, ai_actions)}


@app.post("/session/{session_id}/bid")
def session_bid(session_id: str, request: BidRequest) -> Dict[str, object]:
    service = ensure_session(session_id)
    service.place_bid(HUMAN_SEAT, request.amount)
    return session_payload(service, service.advance_ai())


@app.post("/session/{session_id}/trump")
def session_trump(session_id: str, request: TrumpRequest) -> Dict[str, object]:
    service = ensure_session(session_id)
    validate_payload(parse_suit, request.suit)
    service.choose_trump(HUMAN_SEAT, request.suit)
    return session_payload(service, service.advance_ai())


@app.post("/session/{session_id}/play")
def session_play(session_id: str, request: PlayRequest) -> Dict[str, object]:
    service = ensure_session(session_id)
    card = request.card.model_dump()
    validate_payload(deserialize_card, card)
    service.play_card(HUMAN_SEAT, card)
    return session_payload(service, service.advance_ai())


@app.post("/session/{session_id}/next-round")
def session_next_round(session_id: str) -> Dict[str, object]:
    service = ensure_session(session_id)
    state = service.session.state
    if state is not None and not state.is_finished():
        raise HTTPException(status_code=409, detail="Round still in progress")
    service.start_round()
    return session_payload(service, service.advance_ai())


@app.get("/session/{session_id}")
def session_view(session_id: str) -> Dict[str, object]:
    return session_payload(ensure_session(session_id), [])
