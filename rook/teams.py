"""Seats and fixed partnerships."""

from __future__ import annotations

from enum import Enum

# Point cards per hand add up to this total.
TOTAL_HAND_POINTS = 180

SEAT_COUNT = 4
SEATS: tuple[int, ...] = tuple(range(SEAT_COUNT))


class Team(Enum):
    A = "1"
    B = "2"

    def __str__(self) -> str:
        return self.value

    @property
    def other(self) -> "Team":
        return Team.B if self is Team.A else Team.A

    @property
    def index(self) -> int:
        return 0 if self is Team.A else 1


def team_of(position) -> Team:
    """Return the partnership for a seat: 0 and 2 sit together against 1 and 3."""
    return Team.A if position == 0 or position == 2 else Team.B


def team_seats(team: Team) -> tuple[int, int]:
    return (0, 2) if team is Team.A else (1, 3)
