"""Streamlit scorekeeper for Rook."""

from __future__ import annotations

import streamlit as st

from rook.config import load_config
from rook.persistence import JsonFileStore
from rook.service import ScoreService
from rook.teams import SEATS, TOTAL_HAND_POINTS, Team


def get_service() -> ScoreService:
    if "score_service" not in st.session_state:
        config = load_config()
        store = JsonFileStore(config.storage_path)
        st.session_state["score_service"] = ScoreService(store, prefix=config.key_prefix)
    return st.session_state["score_service"]


def rerun() -> None:
    st.rerun()


def seat_label(view, seat: int) -> str:
    return view.setup.players[seat] or f"Player {seat + 1}"


def render_setup(service: ScoreService, view) -> None:
    setup = view.setup
    if setup.hidden:
        cols = st.columns([3, 1])
        with cols[0]:
            for team in view.teams:
                st.write(f"Team {team.label}: **{team.name}** ({team.composition})")
        if cols[1].button("Edit Setup"):
            service.toggle_setup()
            rerun()
        return

    header = st.columns([3, 1])
    header[0].subheader("Setup")
    if header[1].button("Hide"):
        service.toggle_setup()
        rerun()

    cols = st.columns(2)
    for seat in SEATS:
        name = cols[seat % 2].text_input(
            f"Player {seat + 1}", value=setup.players[seat], placeholder=f"Player {seat + 1}", key=f"player_{seat}"
        )
        if name != setup.players[seat]:
            service.rename_player(seat, name)
            rerun()

    cols = st.columns(2)
    for team, column, team_view in zip(Team, cols, view.teams):
        name = column.text_input(
            f"Team {team.value} Name", value=setup.team_names[team.index], key=f"team_{team.value}"
        )
        column.caption(f"Composition: {team_view.composition}")
        if name != setup.team_names[team.index]:
            service.rename_team(team, name)
            rerun()

    label_cols = st.columns([3, 1])
    if (setup.dealer_locked or view.hands) and label_cols[1].button("Override"):
        service.override_dealer()
        rerun()
    dealer = label_cols[0].selectbox(
        "Starting Dealer",
        list(SEATS),
        index=setup.dealer_selector_value,
        format_func=lambda seat: seat_label(view, seat),
        disabled=setup.dealer_locked,
    )
    if not setup.dealer_locked and dealer != setup.dealer_selector_value:
        service.choose_dealer(dealer)
        rerun()


def render_scoreboard(view) -> None:
    cols = st.columns(2)
    for column, team in zip(cols, view.teams):
        column.metric(team.name, team.score)


def render_bid_form(service: ScoreService, view) -> None:
    pending = view.pending_bid
    title = "Edit Pending Bid" if pending else "Start Hand (Bid)"
    with st.expander(title, expanded=pending is None):
        with st.form("bid_form"):
            bid = st.number_input(
                "Bid (increments of 5)",
                min_value=0,
                max_value=TOTAL_HAND_POINTS,
                step=5,
                value=pending.bid if pending else 120,
            )
            bidder = st.selectbox(
                "Took Bid",
                list(SEATS),
                index=pending.bidder if pending else 0,
                format_func=lambda seat: seat_label(view, seat),
            )
            if st.form_submit_button("Submit Bid"):
                service.submit_bid(bid, bidder)
                rerun()


def render_score_form(service: ScoreService, view) -> None:
    pending = view.pending_bid
    if pending is None:
        return
    st.subheader("Enter Scores")
    st.write(f"Bid: **{pending.bid}** - Took Bid: **{pending.bidder_name}** (Team {pending.bidding_team})")
    with st.form("score_form"):
        points = st.number_input(
            f"Non-bidding Team ({pending.non_bidding_team_name}) Points",
            min_value=0,
            max_value=TOTAL_HAND_POINTS,
            step=5,
            value=0,
        )
        st.caption("Any number rounds to the nearest 5.")
        if st.form_submit_button("Add Round"):
            service.record_hand(points)
            rerun()


def render_hands_table(service: ScoreService, view) -> None:
    header = st.columns([3, 1])
    header[0].subheader("Hands")
    if header[1].button("Undo Last", disabled=not view.hands):
        service.undo_last_hand()
        rerun()

    if not view.hands:
        st.info("No hands yet. Start a hand to record a bid.")
        return

    team_a, team_b = view.teams
    st.table(
        [
            {
                "#": row.number,
                "Dealer": row.dealer,
                "Bidder": f"{row.bidder} (Team {row.bidding_team})",
                "Result": row.result,
                team_a.name: row.team1_total,
                team_b.name: row.team2_total,
            }
            for row in view.hands
        ]
    )


def render_new_game(service: ScoreService) -> None:
    if st.button("New Game"):
        st.session_state["confirm_new_game"] = True
    if st.session_state.get("confirm_new_game"):
        st.warning("This will clear rounds and reset the setup.")
        cols = st.columns(2)
        if cols[0].button("Cancel"):
            st.session_state["confirm_new_game"] = False
            rerun()
        if cols[1].button("Yes, New Game"):
            st.session_state["confirm_new_game"] = False
            service.new_game()
            rerun()


def main() -> None:
    st.set_page_config(page_title="Rook Scorekeeper", layout="centered")
    st.title("Rook Scorekeeper")

    service = get_service()
    view = service.get_view()

    st.write(f"Next Dealer: **{view.next_dealer_name}**")
    render_setup(service, view)
    render_scoreboard(view)
    render_bid_form(service, view)
    render_score_form(service, view)
    render_hands_table(service, view)
    render_new_game(service)

    with st.expander("Variant notes"):
        st.write(
            "The Rook card ranks as 10.5 for trick-taking but is worth 20 points. "
            f"The deck drops the 2-4s; point cards per hand total {TOTAL_HAND_POINTS}. "
            "Teams are fixed as P1/P3 vs P2/P4. Starting Dealer sets the rotation; "
            "Override sets only the NEXT dealer."
        )


if __name__ == "__main__":
    main()
