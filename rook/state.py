"""Scorekeeper application state and the transitions that act on it."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from .dealer import advance, next_dealer
from .hand import Hand, infer_hand
from .normalize import coerce_position, normalize
from .scoring import Totals, compute_totals
from .teams import SEAT_COUNT, SEATS, Team, team_seats


class ScorekeeperError(ValueError):
    """Base class for scorekeeper state errors."""


class InvalidSeat(ScorekeeperError):
    """Raised when a seat or team index is out of range."""


class NoPendingBid(ScorekeeperError):
    """Raised when scores are entered before a bid was submitted."""


@dataclass(frozen=True)
class PendingBid:
    bid: int
    bidder: int


@dataclass(frozen=True)
class ScorekeeperState:
    players: Tuple[str, str, str, str] = ("", "", "", "")
    team_names: Tuple[str, str] = ("Team 1", "Team 2")
    starting_dealer: int = 0
    dealer_locked: bool = False
    hands: Tuple[Hand, ...] = field(default_factory=tuple)
    pending_bid: Optional[PendingBid] = None
    next_dealer_manual: bool = False
    next_dealer_index: int = 0
    show_setup: bool = True

    @property
    def totals(self) -> Totals:
        return compute_totals(self.hands)

    @property
    def next_dealer(self) -> int:
        return next_dealer(
            self.hands,
            self.starting_dealer,
            manual=self.next_dealer_manual,
            manual_index=self.next_dealer_index,
        )

    @property
    def setup_hidden(self) -> bool:
        return not self.show_setup and (self.dealer_locked or bool(self.hands))

    def player_name(self, position: int) -> str:
        if 0 <= position < SEAT_COUNT and self.players[position]:
            return self.players[position]
        return f"Player {position + 1}"

    def team_name(self, team: Team) -> str:
        return self.team_names[team.index] or f"Team {team.value}"

    def team_composition(self, team: Team) -> str:
        return "/".join(self.player_name(seat) for seat in team_seats(team))


def _check_seat(position: int) -> int:
    if position not in SEATS:
        raise InvalidSeat(f"Seat must be one of {SEATS}, got {position!r}.")
    return position


def rename_player(state: ScorekeeperState, position: int, name: str) -> ScorekeeperState:
    _check_seat(position)
    players = list(state.players)
    players[position] = name
    return replace(state, players=tuple(players))


def rename_team(state: ScorekeeperState, team: Team, name: str) -> ScorekeeperState:
    names = list(state.team_names)
    names[team.index] = name
    return replace(state, team_names=tuple(names))


def choose_dealer(state: ScorekeeperState, position: int) -> ScorekeeperState:
    """Pick the starting dealer before the first hand, or the next dealer after it."""
    _check_seat(position)
    if not state.hands:
        return replace(state, starting_dealer=position, dealer_locked=True)
    return replace(
        state,
        next_dealer_manual=True,
        next_dealer_index=position,
        dealer_locked=True,
    )


def override_dealer(state: ScorekeeperState) -> ScorekeeperState:
    """Unlock the dealer selector, starting manual mode from whoever deals next."""
    return replace(
        state,
        dealer_locked=False,
        next_dealer_manual=True,
        next_dealer_index=state.next_dealer,
    )


def submit_bid(state: ScorekeeperState, bid, bidder) -> ScorekeeperState:
    bidder = _check_seat(coerce_position(bidder))
    return replace(
        state,
        pending_bid=PendingBid(bid=normalize(bid), bidder=bidder),
        dealer_locked=True,
        show_setup=False,
    )


def record_hand(state: ScorekeeperState, non_bidding_points) -> ScorekeeperState:
    """Close out the pending bid with the defenders' points."""
    pending = state.pending_bid
    if pending is None:
        raise NoPendingBid("Submit a bid before entering scores.")

    dealer = state.next_dealer
    hand = infer_hand(pending.bid, pending.bidder, dealer, non_bidding_points)
    updated = replace(state, hands=state.hands + (hand,), pending_bid=None)
    if state.next_dealer_manual:
        updated = replace(updated, next_dealer_index=advance(dealer))
    return updated


def undo_last_hand(state: ScorekeeperState) -> ScorekeeperState:
    if not state.hands:
        return state
    return replace(state, hands=state.hands[:-1])


def new_game(state: ScorekeeperState) -> ScorekeeperState:
    """Clear the hands and dealer setup; player and team names carry over."""
    return ScorekeeperState(players=state.players, team_names=state.team_names)


def toggle_setup(state: ScorekeeperState) -> ScorekeeperState:
    return replace(state, show_setup=not state.show_setup)
