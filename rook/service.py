"""Convenience service layer for UI, API and CLI consumers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from . import state as transitions
from .persistence import DEFAULT_PREFIX, KeyValueStore, MemoryStore, clear_state, load_state, save_state
from .scoring import hand_outcome
from .state import ScorekeeperState
from .teams import Team, team_of

logger = logging.getLogger(__name__)


@dataclass
class TeamView:
    label: str
    name: str
    composition: str
    score: int


@dataclass
class HandRowView:
    number: int
    dealer: str
    bidder: str
    bidding_team: str
    bid: int
    team_a_points: int
    team_b_points: int
    made_bid: bool
    result: str
    team1_total: int
    team2_total: int


@dataclass
class PendingBidView:
    bid: int
    bidder: int
    bidder_name: str
    bidding_team: str
    non_bidding_team: str
    non_bidding_team_name: str


@dataclass
class SetupView:
    players: list[str]
    team_names: list[str]
    starting_dealer: int
    dealer_locked: bool
    next_dealer_manual: bool
    hidden: bool
    dealer_selector_value: int


@dataclass
class SessionView:
    next_dealer: int
    next_dealer_name: str
    teams: list[TeamView]
    hands: list[HandRowView]
    pending_bid: Optional[PendingBidView]
    setup: SetupView


class ScoreService:
    """Facade around ScorekeeperState that saves after every change."""

    def __init__(self, store: Optional[KeyValueStore] = None, *, prefix: str = DEFAULT_PREFIX) -> None:
        self.store = store if store is not None else MemoryStore()
        self.prefix = prefix
        self.state = load_state(self.store, prefix=prefix)

    # Setup -------------------------------------------------------------

    def rename_player(self, position: int, name: str) -> SessionView:
        return self._apply(transitions.rename_player, position, name)

    def rename_team(self, team: Team, name: str) -> SessionView:
        return self._apply(transitions.rename_team, team, name)

    def choose_dealer(self, position: int) -> SessionView:
        return self._apply(transitions.choose_dealer, position)

    def override_dealer(self) -> SessionView:
        return self._apply(transitions.override_dealer)

    def toggle_setup(self) -> SessionView:
        return self._apply(transitions.toggle_setup)

    # Hands -------------------------------------------------------------

    def submit_bid(self, bid, bidder) -> SessionView:
        view = self._apply(transitions.submit_bid, bid, bidder)
        pending = self.state.pending_bid
        logger.debug("Pending bid %s by seat %s", pending.bid, pending.bidder)
        return view

    def record_hand(self, non_bidding_points) -> SessionView:
        view = self._apply(transitions.record_hand, non_bidding_points)
        hand = self.state.hands[-1]
        totals = self.state.totals
        logger.info(
            "Hand %d: bid %d by seat %d, team points %d/%d, totals %d/%d",
            len(self.state.hands),
            hand.bid,
            hand.bidder,
            hand.team_a_points,
            hand.team_b_points,
            totals.team_a,
            totals.team_b,
        )
        return view

    def undo_last_hand(self) -> SessionView:
        if self.state.hands:
            logger.info("Removing hand %d", len(self.state.hands))
        return self._apply(transitions.undo_last_hand)

    def new_game(self) -> SessionView:
        logger.info("Starting a new game after %d hands", len(self.state.hands))
        return self._apply(transitions.new_game)

    def forget(self) -> SessionView:
        """Drop everything saved, names included."""
        clear_state(self.store, prefix=self.prefix)
        self.state = ScorekeeperState()
        return self.get_view()

    # Views -------------------------------------------------------------

    def get_view(self) -> SessionView:
        state = self.state
        totals = state.totals
        teams = [
            TeamView(
                label=team.value,
                name=state.team_name(team),
                composition=state.team_composition(team),
                score=totals.for_team(team),
            )
            for team in Team
        ]

        rows = []
        for index, (hand, snapshot) in enumerate(zip(state.hands, totals.history)):
            outcome = hand_outcome(hand)
            rows.append(
                HandRowView(
                    number=index + 1,
                    dealer=state.player_name(hand.dealer),
                    bidder=state.player_name(hand.bidder),
                    bidding_team=outcome.bidding_team.value,
                    bid=hand.bid,
                    team_a_points=hand.team_a_points,
                    team_b_points=hand.team_b_points,
                    made_bid=outcome.made_bid,
                    result=outcome.label,
                    team1_total=snapshot.team1,
                    team2_total=snapshot.team2,
                )
            )

        pending_view = None
        if state.pending_bid is not None:
            bidding_team = team_of(state.pending_bid.bidder)
            pending_view = PendingBidView(
                bid=state.pending_bid.bid,
                bidder=state.pending_bid.bidder,
                bidder_name=state.player_name(state.pending_bid.bidder),
                bidding_team=bidding_team.value,
                non_bidding_team=bidding_team.other.value,
                non_bidding_team_name=state.team_name(bidding_team.other),
            )

        next_dealer = state.next_dealer
        if not state.hands or state.dealer_locked:
            selector = state.starting_dealer
        else:
            selector = next_dealer

        return SessionView(
            next_dealer=next_dealer,
            next_dealer_name=state.player_name(next_dealer),
            teams=teams,
            hands=rows,
            pending_bid=pending_view,
            setup=SetupView(
                players=list(state.players),
                team_names=list(state.team_names),
                starting_dealer=state.starting_dealer,
                dealer_locked=state.dealer_locked,
                next_dealer_manual=state.next_dealer_manual,
                hidden=state.setup_hidden,
                dealer_selector_value=selector,
            ),
        )

    # Helpers -----------------------------------------------------------

    def _apply(self, transition: Callable[..., ScorekeeperState], *args) -> SessionView:
        self.state = transition(self.state, *args)
        save_state(self.store, self.state, prefix=self.prefix)
        return self.get_view()
