"""Seat numbering and the fixed partnerships."""

from __future__ import annotations

from enum import Enum
from typing import Tuple

SEATS: Tuple[int, ...] = (1, 2, 3, 4)


class Team(Enum):
    A = "teamA"
    B = "teamB"

    def __str__(self) -> str:
        return self.value


def validate_seat(seat: int) -> int:
    if seat not in SEATS:
        raise ValueError(f"Seat must be one of {SEATS}, got {seat!r}.")
    return seat


def team_of(seat: int) -> Team:
    """Seats 1 and 3 sit on team A, seats 2 and 4 on team B."""
    validate_seat(seat)
    return Team.A if seat % 2 == 1 else Team.B


def same_team(first: int, second: int) -> bool:
    return team_of(first) is team_of(second)


def partner_of(seat: int) -> int:
    validate_seat(seat)
    return (seat + 1) % 4 + 1


def next_seat(seat: int) -> int:
    validate_seat(seat)
    return seat % 4 + 1


def seats_of(team: Team) -> Tuple[int, int]:
    return (1, 3) if team is Team.A else (2, 4)
