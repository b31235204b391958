"""Command-line scorekeeper working against the saved game file."""

from __future__ import annotations

import argparse
from typing import Iterable

from .config import load_config
from .log import setup_logging
from .persistence import JsonFileStore
from .service import ScoreService, SessionView
from .state import ScorekeeperError


def format_view(view: SessionView) -> str:
    lines = [f"Next dealer: {view.next_dealer_name}"]
    for team in view.teams:
        lines.append(f"{team.name} ({team.composition}): {team.score}")
    if view.pending_bid is not None:
        pending = view.pending_bid
        lines.append(
            f"Pending bid: {pending.bid} by {pending.bidder_name} (Team {pending.bidding_team}), "
            f"waiting on {pending.non_bidding_team_name} points"
        )
    if view.hands:
        lines.append("")
        lines.append("#  Dealer      Bidder      Bid  Result      T1    T2")
        for row in view.hands:
            lines.append(
                f"{row.number:<2} {row.dealer:<11} {row.bidder:<11} {row.bid:>3}  "
                f"{row.result:<10} {row.team1_total:>5} {row.team2_total:>5}"
            )
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rook-score", description="Keep score for a game of Rook.")
    parser.add_argument("--config", default=None, help="Optional JSON config file.")
    parser.add_argument("--store", default=None, help="Saved game file (overrides config).")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("show", help="Print the scoreboard.")

    bid = sub.add_parser("bid", help="Record the winning bid for the hand being played.")
    bid.add_argument("--bid", required=True, help="Bid amount, rounded to the nearest 5.")
    bid.add_argument("--bidder", type=int, required=True, help="Seat (0-3) that took the bid.")

    score = sub.add_parser("score", help="Enter the non-bidding team's points for the pending bid.")
    score.add_argument("--points", required=True, help="Points taken by the non-bidding team.")

    dealer = sub.add_parser("dealer", help="Set the starting dealer, or the next dealer mid-game.")
    dealer.add_argument("seat", type=int)

    name = sub.add_parser("name", help="Rename a player seat (0-3).")
    name.add_argument("seat", type=int)
    name.add_argument("name")

    sub.add_parser("undo", help="Remove the most recent hand.")
    sub.add_parser("new-game", help="Clear hands and dealer setup, keeping names.")
    return parser


def main(argv: Iterable[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)
    setup_logging(config.logging_level)
    store = JsonFileStore(args.store or config.storage_path)
    service = ScoreService(store, prefix=config.key_prefix)

    try:
        if args.command == "bid":
            view = service.submit_bid(args.bid, args.bidder)
        elif args.command == "score":
            view = service.record_hand(args.points)
        elif args.command == "dealer":
            view = service.choose_dealer(args.seat)
        elif args.command == "name":
            view = service.rename_player(args.seat, args.name)
        elif args.command == "undo":
            view = service.undo_last_hand()
        elif args.command == "new-game":
            view = service.new_game()
        else:
            view = service.get_view()
    except ScorekeeperError as exc:
        parser.error(str(exc))

    print(format_view(view))


if __name__ == "__main__":
    main()
