"""Running totals for a sequence of hands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple

from .hand import deserialize_hand
from .teams import Team


@dataclass(frozen=True)
class HandOutcome:
    bidding_team: Team
    bid: int
    made_bid: bool
    team_a_delta: int
    team_b_delta: int

    @property
    def label(self) -> str:
        if self.made_bid:
            return f"Made ({self.bid})"
        return f"Set (-{self.bid})"


@dataclass(frozen=True)
class TotalsSnapshot:
    hand_number: int
    team1: int
    team2: int


@dataclass(frozen=True)
class Totals:
    team_a: int
    team_b: int
    history: Tuple[TotalsSnapshot, ...]

    def for_team(self, team: Team) -> int:
        return self.team_a if team is Team.A else self.team_b


def hand_outcome(payload) -> HandOutcome:
    """Score a single hand.

    A made bid banks both sides' points. A set bid costs the bidding side the
    full bid and its own points are discarded; the defenders bank theirs
    either way.
    """
    hand = deserialize_hand(payload)
    bidding_team = hand.bidding_team
    made_bid = hand.points_for(bidding_team) >= hand.bid

    team_a_delta = hand.team_a_points
    team_b_delta = hand.team_b_points
    if not made_bid:
        if bidding_team is Team.A:
            team_a_delta = -hand.bid
        else:
            team_b_delta = -hand.bid

    return HandOutcome(
        bidding_team=bidding_team,
        bid=hand.bid,
        made_bid=made_bid,
        team_a_delta=team_a_delta,
        team_b_delta=team_b_delta,
    )


def compute_totals(hands: Iterable) -> Totals:
    """Fold hands in order into final totals plus one snapshot per hand."""
    team_a = 0
    team_b = 0
    history = []
    for hand in hands:
        outcome = hand_outcome(hand)
        team_a += outcome.team_a_delta
        team_b += outcome.team_b_delta
        history.append(TotalsSnapshot(hand_number=len(history) + 1, team1=team_a, team2=team_b))
    return Totals(team_a=team_a, team_b=team_b, history=tuple(history))
