import pytest

from rook.hand import infer_hand
from rook.state import (
    InvalidSeat,
    NoPendingBid,
    PendingBid,
    ScorekeeperState,
    choose_dealer,
    new_game,
    override_dealer,
    record_hand,
    rename_player,
    rename_team,
    submit_bid,
    toggle_setup,
    undo_last_hand,
)
from rook.teams import Team


def play(state, bid, bidder, points):
    return record_hand(submit_bid(state, bid, bidder), points)


def test_submit_bid_locks_dealer_and_hides_setup():
    state = submit_bid(ScorekeeperState(), 118, 1)

    assert state.pending_bid == PendingBid(bid=120, bidder=1)
    assert state.dealer_locked
    assert not state.show_setup
    assert state.setup_hidden


def test_record_hand_appends_inferred_hand():
    state = choose_dealer(ScorekeeperState(), 2)
    state = play(state, 100, 0, 60)

    assert state.pending_bid is None
    assert state.hands == (infer_hand(100, 0, 2, 60),)
    assert (state.totals.team_a, state.totals.team_b) == (120, 60)
    assert state.next_dealer == 3


def test_record_hand_requires_pending_bid():
    with pytest.raises(NoPendingBid):
        record_hand(ScorekeeperState(), 60)


def test_submit_bid_rejects_unknown_seat():
    with pytest.raises(InvalidSeat):
        submit_bid(ScorekeeperState(), 100, 4)


def test_resubmitting_bid_edits_pending():
    state = submit_bid(ScorekeeperState(), 100, 0)
    state = submit_bid(state, 135, 3)

    assert state.pending_bid == PendingBid(bid=135, bidder=3)


def test_override_sets_only_the_next_dealer():
    state = choose_dealer(ScorekeeperState(), 1)
    state = play(state, 90, 0, 80)

    state = override_dealer(state)
    assert not state.dealer_locked
    state = choose_dealer(state, 3)
    state = play(state, 95, 2, 70)
    assert state.next_dealer_index == 0
    state = play(state, 85, 1, 60)

    assert [hand.dealer for hand in state.hands] == [1, 3, 0]


def test_undo_removes_last_hand_only():
    state = play(ScorekeeperState(), 100, 0, 60)
    state = play(state, 120, 1, 80)

    state = undo_last_hand(state)
    assert len(state.hands) == 1
    assert state.totals.team_a == 120

    state = undo_last_hand(undo_last_hand(state))
    assert state.hands == ()


def test_new_game_keeps_names():
    state = rename_player(ScorekeeperState(), 0, "Ada")
    state = rename_team(state, Team.B, "Rooks")
    state = choose_dealer(state, 2)
    state = play(state, 100, 0, 60)
    state = override_dealer(state)

    state = new_game(state)

    assert state.players[0] == "Ada"
    assert state.team_name(Team.B) == "Rooks"
    assert state.hands == ()
    assert state.starting_dealer == 0
    assert not state.dealer_locked
    assert not state.next_dealer_manual
    assert state.show_setup


def test_names_fall_back_to_seat_numbers():
    state = rename_player(ScorekeeperState(), 2, "Cy")
    state = rename_team(state, Team.A, "")

    assert state.player_name(0) == "Player 1"
    assert state.team_composition(Team.A) == "Player 1/Cy"
    assert state.team_name(Team.A) == "Team 1"
    with pytest.raises(InvalidSeat):
        rename_player(state, 5, "Nobody")


def test_setup_only_hides_once_game_is_underway():
    state = toggle_setup(ScorekeeperState())

    assert not state.show_setup
    assert not state.setup_hidden
    assert choose_dealer(state, 0).setup_hidden
