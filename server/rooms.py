"""In-memory room store and state sync channel for multiplayer Tarneeb.

The engine only needs create/join/list/start plus subscribe/publish. This
store keeps everything in process memory and serializes writes with a lock,
so one seat at a time mutates a room's round.
"""

from __future__ import annotations

import logging
import secrets
import string
import threading
import uuid
from dataclasses import dataclass, field
from random import Random
from typing import Callable, Dict, List, Optional

from engine.actions import Action, apply_action
from engine.bidding import is_all_passed
from engine.deck import build_deck, deal, shuffle
from engine.encode import encode_state
from engine.rules_schema import RuleSet
from engine.seats import SEATS, next_seat
from engine.state import RoundState, Scores, check_invariants, new_round

logger = logging.getLogger(__name__)

CODE_LENGTH = 6
CODE_ALPHABET = string.ascii_uppercase + string.digits

Listener = Callable[[str, dict], None]


class RoomError(RuntimeError):
    """Base class for room store failures."""


class RoomNotFound(RoomError):
    """Raised when no room matches the id or code."""


class RoomFull(RoomError):
    """Raised when all four seats are taken."""


class RoomAlreadyStarted(RoomError):
    """Raised when joining a room whose game has begun."""


class RoomNotReady(RoomError):
    """Raised when a round cannot start or continue yet."""


@dataclass
class SeatInfo:
    seat: int
    name: str
    is_host: bool = False
    connected: bool = True


@dataclass(frozen=True)
class RoomTicket:
    room_id: str
    code: str
    seat: int


@dataclass
class Room:
    room_id: str
    code: str
    status: str = "waiting"
    seats: Dict[int, SeatInfo] = field(default_factory=dict)
    state: Optional[RoundState] = None
    round_number: int = 0
    listeners: List[Listener] = field(default_factory=list)

    def connected_seats(self) -> List[SeatInfo]:
        return [info for seat, info in sorted(self.seats.items()) if info.connected]


class RoomStore:
    def __init__(self, *, rules: Optional[RuleSet] = None, seed: Optional[int] = None) -> None:
        self.rules = rules or RuleSet()
        self._rng = Random(seed)
        self._rooms: Dict[str, Room] = {}
        self._codes: Dict[str, str] = {}
        self._lock = threading.RLock()

    # Rooms -------------------------------------------------------------

    def create_room(self, name: str) -> RoomTicket:
        with self._lock:
            code = self._new_code()
            room = Room(room_id=uuid.uuid4().hex, code=code)
            room.seats[1] = SeatInfo(seat=1, name=name, is_host=True)
            self._rooms[room.room_id] = room
            self._codes[code] = room.room_id
        logger.info("Room %s created by %s", code, name)
        return RoomTicket(room_id=room.room_id, code=code, seat=1)

    def join_room(self, code: str, name: str) -> RoomTicket:
        with self._lock:
            room_id = self._codes.get(code.strip().upper())
            if room_id is None:
                raise RoomNotFound(f"No room with code {code!r}.")
            room = self._rooms[room_id]
            if room.status != "waiting":
                raise RoomAlreadyStarted(f"Room {room.code} has already started.")
            taken = {info.seat for info in room.connected_seats()}
            free = next((seat for seat in SEATS if seat not in taken), None)
            if free is None:
                raise RoomFull(f"Room {room.code} is full.")
            room.seats[free] = SeatInfo(seat=free, name=name)
            seats = self._seat_payload(room)
        logger.info("%s joined room %s at seat %s", name, room.code, free)
        self._notify(room, "seats", seats)
        return RoomTicket(room_id=room.room_id, code=room.code, seat=free)

    def leave_room(self, room_id: str, seat: int) -> None:
        with self._lock:
            room = self._room(room_id)
            info = room.seats.get(seat)
            if info is None:
                raise RoomError(f"Seat {seat} is empty in room {room.code}.")
            info.connected = False
            seats = self._seat_payload(room)
        logger.info("Seat %s left room %s", seat, room.code)
        self._notify(room, "seats", seats)

    def list_seats(self, room_id: str) -> List[SeatInfo]:
        with self._lock:
            return list(self._room(room_id).connected_seats())

    def room_code(self, room_id: str) -> str:
        return self._room(room_id).code

    # Rounds ------------------------------------------------------------

    def start_round(self, room_id: str) -> RoundState:
        """Deal a new round; scores carry over from the previous one."""
        with self._lock:
            room = self._room(room_id)
            if len(room.connected_seats()) != len(SEATS):
                raise RoomNotReady(f"Room {room.code} needs four players to start.")
            if room.state is not None and not room.state.is_finished():
                raise RoomNotReady(f"Room {room.code} already has a round in progress.")
            scores = room.state.scores if room.state is not None else Scores()
            room.round_number += 1
            opening_seat = (room.round_number - 1) % len(SEATS) + 1
            state = self._deal(opening_seat, scores, room.round_number)
            room.status = "playing"
            logger.info("Room %s dealt round %s", room.code, state.round_number)
            self.publish(room_id, state)
        return state

    def get_state(self, room_id: str) -> RoundState:
        with self._lock:
            state = self._room(room_id).state
        if state is None:
            raise RoomNotReady("No round has been dealt in this room.")
        return state

    def apply(self, room_id: str, action: Action) -> RoundState:
        """Apply one action to the room's round and publish the result."""
        with self._lock:
            state = apply_action(self.get_state(room_id), action, self.rules)
            if is_all_passed(state):
                state = self._redeal(self._room(room_id), state)
            self.publish(room_id, state)
        return state

    # Sync channel ------------------------------------------------------

    def subscribe(self, room_id: str, listener: Listener) -> Callable[[], None]:
        """Register ``listener(kind, payload)``; returns a callable that unsubscribes."""
        with self._lock:
            room = self._room(room_id)
            room.listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in room.listeners:
                    room.listeners.remove(listener)

        return unsubscribe

    def publish(self, room_id: str, state: RoundState) -> None:
        check_invariants(state)
        with self._lock:
            room = self._room(room_id)
            room.state = state
            if state.is_finished():
                room.status = "finished"
        self._notify(room, "state", encode_state(state, include_hands=False))

    # Helpers -----------------------------------------------------------

    def _room(self, room_id: str) -> Room:
        room = self._rooms.get(room_id)
        if room is None:
            raise RoomNotFound(f"Room {room_id!r} not found.")
        return room

    def _new_code(self) -> str:
        while True:
            code = "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))
            if code not in self._codes:
                return code

    def _deal(self, opening_seat: int, scores: Scores, round_number: int) -> RoundState:
        return new_round(
            deal(shuffle(build_deck(), rng=self._rng)),
            opening_seat=opening_seat,
            scores=scores,
            round_number=round_number,
        )

    def _redeal(self, room: Room, state: RoundState) -> RoundState:
        opening_seat = next_seat(state.opening_seat)
        logger.warning("Room %s: all seats passed, redealing with seat %s opening", room.code, opening_seat)
        return self._deal(opening_seat, state.scores, state.round_number)

    def _seat_payload(self, room: Room) -> dict:
        return {
            "seats": [
                {"seat": info.seat, "name": info.name, "is_host": info.is_host}
                for info in room.connected_seats()
            ]
        }

    def _notify(self, room: Room, kind: str, payload: dict) -> None:
        for listener in list(room.listeners):
            try:
                listener(kind, payload)
            except Exception:
                logger.exception("Listener failed for room %s", room.code)
