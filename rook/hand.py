"""Hand records and inference from the non-bidding team's points."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .normalize import coerce_number, coerce_position, normalize
from .teams import TOTAL_HAND_POINTS, Team, team_of

# Older saves used camelCase keys for the per-team points.
_LEGACY_KEYS = {
    "team_a_points": "teamAPoints",
    "team_b_points": "teamBPoints",
}


@dataclass(frozen=True)
class Hand:
    """One scored hand. Corrections go through undo, never mutation."""

    bid: int
    bidder: int
    dealer: int
    team_a_points: int
    team_b_points: int

    @property
    def bidding_team(self) -> Team:
        return team_of(self.bidder)

    def points_for(self, team: Team) -> int:
        return self.team_a_points if team is Team.A else self.team_b_points


def infer_hand(bid, bidder, dealer, non_bidding_points) -> Hand:
    """Build a full hand from the bid and the points the defenders took.

    Only the defending side's points are entered at the table; the bidding
    side gets the rest of the 180-point pool.
    """
    bidder = coerce_position(bidder)
    defenders = team_of(bidder).other
    taken = normalize(non_bidding_points)
    remainder = TOTAL_HAND_POINTS - taken

    if defenders is Team.A:
        team_a_points, team_b_points = taken, remainder
    else:
        team_a_points, team_b_points = remainder, taken

    return Hand(
        bid=normalize(bid),
        bidder=bidder,
        dealer=coerce_position(dealer),
        team_a_points=team_a_points,
        team_b_points=team_b_points,
    )


def hand_field(payload: Any, name: str):
    """Read a hand field from a Hand, a mapping, or anything attribute-shaped."""
    if isinstance(payload, Mapping):
        if name in payload:
            return payload[name]
        legacy = _LEGACY_KEYS.get(name)
        return payload.get(legacy) if legacy else None
    return getattr(payload, name, None)


def serialize_hand(hand: Hand) -> dict[str, int]:
    return {
        "bid": hand.bid,
        "bidder": hand.bidder,
        "dealer": hand.dealer,
        "team_a_points": hand.team_a_points,
        "team_b_points": hand.team_b_points,
    }


def deserialize_hand(payload: Any) -> Hand:
    """Rebuild a hand from stored data, defaulting anything missing to 0."""
    if isinstance(payload, Hand):
        return payload
    return Hand(
        bid=coerce_number(hand_field(payload, "bid")),
        bidder=coerce_position(hand_field(payload, "bidder")),
        dealer=coerce_position(hand_field(payload, "dealer")),
        team_a_points=coerce_number(hand_field(payload, "team_a_points")),
        team_b_points=coerce_number(hand_field(payload, "team_b_points")),
    )
