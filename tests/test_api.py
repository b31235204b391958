from fastapi.testclient import TestClient

from server.score_service import app, sessions

client = TestClient(app)


def start(**payload):
    response = client.post("/session/start", json=payload)
    assert response.status_code == 200
    return response.json()["session_id"]


def test_start_session_with_names():
    session_id = start(players=["Ada", "Bea", "Cy", "Di"], team_names=["Crows", "Rooks"])

    state = client.get(f"/session/{session_id}").json()["state"]
    assert state["teams"][0]["name"] == "Crows"
    assert state["teams"][1]["composition"] == "Bea/Di"
    assert state["next_dealer_name"] == "Ada"


def test_play_and_undo_hand():
    session_id = start()

    response = client.post(f"/session/{session_id}/bid", json={"bid": 102, "bidder": 0})
    assert response.json()["state"]["pending_bid"]["bid"] == 100

    state = client.post(f"/session/{session_id}/score", json={"non_bidding_points": 60}).json()["state"]
    assert [team["score"] for team in state["teams"]] == [120, 60]
    assert state["hands"][0]["result"] == "Made (100)"

    state = client.post(f"/session/{session_id}/undo").json()["state"]
    assert state["hands"] == []


def test_domain_errors_are_bad_requests():
    session_id = start()

    assert client.post(f"/session/{session_id}/score", json={"non_bidding_points": 60}).status_code == 400
    assert client.post(f"/session/{session_id}/bid", json={"bid": 100, "bidder": 6}).status_code == 400
    assert client.post(f"/session/{session_id}/dealer", json={"seat": -1}).status_code == 400


def test_dealer_override_and_new_game():
    session_id = start()
    client.post(f"/session/{session_id}/dealer", json={"seat": 1})
    client.post(f"/session/{session_id}/bid", json={"bid": 90, "bidder": 0})
    client.post(f"/session/{session_id}/score", json={"non_bidding_points": 80})
    client.post(f"/session/{session_id}/dealer/override")
    state = client.post(f"/session/{session_id}/dealer", json={"seat": 3}).json()["state"]
    assert state["next_dealer"] == 3

    state = client.post(f"/session/{session_id}/new-game").json()["state"]
    assert state["hands"] == []
    assert state["setup"]["dealer_locked"] is False


def test_unknown_and_closed_sessions():
    assert client.get("/session/missing").status_code == 404

    session_id = start()
    assert client.delete(f"/session/{session_id}").status_code == 200
    assert session_id not in sessions
    assert client.get(f"/session/{session_id}").status_code == 404


def test_setup_renames_mid_session():
    session_id = start()
    client.post(f"/session/{session_id}/bid", json={"bid": 100, "bidder": 1})
    client.post(f"/session/{session_id}/score", json={"non_bidding_points": 60})

    response = client.post(
        f"/session/{session_id}/setup", json={"players": ["Ada", "Bea"], "team_names": ["Crows", "Rooks"]}
    )

    assert response.status_code == 200
    state = response.json()["state"]
    assert state["setup"]["players"] == ["Ada", "Bea", "", ""]
    assert [team["name"] for team in state["teams"]] == ["Crows", "Rooks"]
    assert state["teams"][1]["composition"] == "Bea/Player 4"
    assert state["hands"][0]["bidder"] == "Bea"
