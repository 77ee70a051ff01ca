"""Tests for the FastAPI Jeopardy interface."""

from __future__ import annotations

import random

import httpx
import pytest
from fastapi.testclient import TestClient

from jeopardy import ui
from jeopardy.client import TriviaClient
from jeopardy.ui import app

from conftest import make_handler


client = TestClient(app)
ui.LOADING_DELAY = 0.0


@pytest.fixture(autouse=True)
def fake_trivia_api(monkeypatch):
    transport = httpx.MockTransport(make_handler())
    monkeypatch.setattr(
        ui,
        "_create_client",
        lambda: TriviaClient(transport=transport, rng=random.Random(99)),
    )


def _new_game():
    response = client.post("/api/game")
    assert response.status_code == 200
    return response.json()


def _act(game_id, **payload):
    return client.post(f"/api/game/{game_id}/action", json=payload)


def _started_game():
    game_id = _new_game()["id"]
    assert _act(game_id, kind="start").status_code == 200
    return game_id


def test_create_game_shows_start_screen():
    payload = _new_game()
    assert payload["panel"] == "start"
    assert payload["scores"] == {"1": 0, "2": 0, "3": 0}
    assert payload["ranking"] == [1, 2, 3]
    assert payload["lastError"] is None


def test_lifecycle_through_panels():
    game_id = _new_game()["id"]

    started = _act(game_id, kind="start")
    assert started.status_code == 200
    assert started.json()["panel"] == "loading"

    board = client.get(f"/api/game/{game_id}").json()
    assert board["panel"] == "board"
    assert board["board"]["header"][0] == "Value"
    assert len(board["board"]["header"]) == 7
    assert [row["value"] for row in board["board"]["rows"]] == [100, 200, 300, 400, 500]
    assert all(cell["text"] == "?" for row in board["board"]["rows"] for cell in row["cells"])

    final = _act(game_id, kind="complete").json()
    assert final["panel"] == "final-rankings"
    assert final["finalRankings"] == [
        "Team 1: 0 points",
        "Team 2: 0 points",
        "Team 3: 0 points",
    ]

    back = _act(game_id, kind="back").json()
    assert back["panel"] == "start"


def test_reveal_cell_cycles_text():
    game_id = _started_game()

    texts = []
    for _ in range(3):
        response = _act(game_id, kind="reveal", categoryIndex=1, clueIndex=4)
        assert response.status_code == 200
        texts.append(response.json()["board"]["rows"][4]["cells"][1]["text"])

    assert texts[0].startswith("Q")
    assert texts[1].startswith("A")
    assert texts[2] == texts[1]


def test_score_adjustments_update_leaderboard():
    game_id = _started_game()
    for _ in range(3):
        state = _act(game_id, kind="score", team=2, direction="increase").json()
    state = _act(game_id, kind="score", team=1, direction="decrease").json()

    assert state["scores"] == {"1": 0, "2": 300, "3": 0}
    assert state["ranking"] == [2, 1, 3]
    assert state["leaderboard"][0] == "Team 2: 300"
    assert state["winningTeam"] == "Winning Team: Team 2"


def test_action_on_wrong_screen_rejected():
    game_id = _new_game()["id"]
    response = _act(game_id, kind="complete")
    assert response.status_code == 400
    assert response.json()["detail"]


def test_reveal_requires_indices():
    game_id = _started_game()
    response = _act(game_id, kind="reveal", categoryIndex=0)
    assert response.status_code == 422


def test_reveal_outside_board_rejected():
    game_id = _started_game()
    response = _act(game_id, kind="reveal", categoryIndex=0, clueIndex=9)
    assert response.status_code == 400


def test_network_failure_returns_to_start(monkeypatch):
    monkeypatch.setattr(
        ui,
        "_create_client",
        lambda: TriviaClient(
            transport=httpx.MockTransport(lambda r: httpx.Response(503))
        ),
    )
    game_id = _new_game()["id"]
    assert _act(game_id, kind="start").json()["panel"] == "loading"

    state = client.get(f"/api/game/{game_id}").json()
    assert state["panel"] == "start"
    assert state["lastError"]


def test_missing_game_returns_404():
    assert client.get("/api/game/INVALID").status_code == 404
    assert _act("INVALID", kind="start").status_code == 404


def test_index_serves_page():
    response = client.get("/")
    assert response.status_code == 200
    assert "jeopardy" in response.text
