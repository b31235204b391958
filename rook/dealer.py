"""Dealer rotation."""

from __future__ import annotations

from typing import Sequence

from .hand import hand_field
from .normalize import coerce_position
from .teams import SEAT_COUNT


def advance(position: int) -> int:
    return (position + 1) % SEAT_COUNT


def next_dealer(
    hands: Sequence,
    starting_dealer: int,
    *,
    manual: bool = False,
    manual_index: int = 0,
) -> int:
    """Return who deals next.

    A manual override wins outright; otherwise the deal passes left from
    whoever dealt the last hand, or falls back to the starting dealer.
    """
    if manual:
        return manual_index
    if hands:
        return advance(coerce_position(hand_field(hands[-1], "dealer")))
    return starting_dealer
