"""REST service keeping score for Rook tables."""

from __future__ import annotations

import logging
import uuid
from dataclasses import asdict
from typing import Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from rook.service import ScoreService, SessionView
from rook.state import ScorekeeperError
from rook.teams import Team

logger = logging.getLogger(__name__)


class StartRequest(BaseModel):
    players: Optional[List[str]] = Field(None, max_length=4)
    team_names: Optional[List[str]] = Field(None, max_length=2)


class BidRequest(BaseModel):
    bid: Union[float, str, None] = None
    bidder: int


class ScoreRequest(BaseModel):
    non_bidding_points: Union[float, str, None] = None


class SetupRequest(BaseModel):
    players: Optional[List[str]] = Field(None, max_length=4)
    team_names: Optional[List[str]] = Field(None, max_length=2)


class DealerRequest(BaseModel):
    seat: int


sessions: Dict[str, ScoreService] = {}


app = FastAPI(title="Rook Scorekeeper")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def serialize_state(view: SessionView) -> Dict[str, object]:
    return asdict(view)


def ensure_session(session_id: str) -> ScoreService:
    service = sessions.get(session_id)
    if service is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return service


def apply_setup(service: ScoreService, players: Optional[List[str]], team_names: Optional[List[str]]) -> SessionView:
    view = service.get_view()
    for seat, name in enumerate(players or []):
        view = service.rename_player(seat, name)
    for team, name in zip(Team, team_names or []):
        view = service.rename_team(team, name)
    return view


def run_action(service: ScoreService, action, *args) -> Dict[str, object]:
    try:
        view = action(*args)
    except ScorekeeperError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"state": serialize_state(view)}


@app.post("/session/start")
def start_session(request: StartRequest) -> Dict[str, object]:
    service = ScoreService()
    view = apply_setup(service, request.players, request.team_names)
    session_id = uuid.uuid4().hex
    sessions[session_id] = service
    logger.info("Started session %s", session_id)
    return {"session_id": session_id, "state": serialize_state(view)}


@app.get("/session/{session_id}")
def get_session(session_id: str) -> Dict[str, object]:
    service = ensure_session(session_id)
    return {"state": serialize_state(service.get_view())}


@app.post("/session/{session_id}/setup")
def update_setup(session_id: str, request: SetupRequest) -> Dict[str, object]:
    service = ensure_session(session_id)
    return run_action(service, apply_setup, service, request.players, request.team_names)


@app.post("/session/{session_id}/dealer")
def choose_dealer(session_id: str, request: DealerRequest) -> Dict[str, object]:
    service = ensure_session(session_id)
    return run_action(service, service.choose_dealer, request.seat)


@app.post("/session/{session_id}/dealer/override")
def override_dealer(session_id: str) -> Dict[str, object]:
    service = ensure_session(session_id)
    return run_action(service, service.override_dealer)


@app.post("/session/{session_id}/bid")
def submit_bid(session_id: str, request: BidRequest) -> Dict[str, object]:
    service = ensure_session(session_id)
    return run_action(service, service.submit_bid, request.bid, request.bidder)


@app.post("/session/{session_id}/score")
def record_hand(session_id: str, request: ScoreRequest) -> Dict[str, object]:
    service = ensure_session(session_id)
    return run_action(service, service.record_hand, request.non_bidding_points)


@app.post("/session/{session_id}/undo")
def undo_last_hand(session_id: str) -> Dict[str, object]:
    service = ensure_session(session_id)
    return run_action(service, service.undo_last_hand)


@app.post("/session/{session_id}/new-game")
def new_game(session_id: str) -> Dict[str, object]:
    service = ensure_session(session_id)
    return run_action(service, service.new_game)


@app.delete("/session/{session_id}")
def close_session(session_id: str) -> Dict[str, object]:
    ensure_session(session_id)
    del sessions[session_id]
    return {"closed": session_id}
