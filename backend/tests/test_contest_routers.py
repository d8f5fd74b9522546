"""
backend/tests/test_contest_routers.py

Purpose:
    HTTP contract of the state, picks and admin routers: status codes for
    rule violations, admin header guard and response payload shapes.

Dependencies:
    - fastapi.testclient
    - app.main
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models.contest import Game
from app.services.auth_service import hash_password
from app.services.contest_service import ContestService, get_contest_service

ADMIN = {"X-Admin-Password": "letmein"}


@pytest.fixture
def client(memory_store):
    memory_store.config.admin_password_hash = hash_password("letmein")
    service = ContestService(memory_store)
    app.dependency_overrides[get_contest_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_state_returns_public_config(client):
    response = client.get("/api/state")

    assert response.status_code == 200
    body = response.json()
    assert body["site_locked"] is False
    assert body["config"]["current_day"] == "thursday_r1"
    assert "admin_password_hash" not in body["config"]
    assert len(body["players"]) == 2


def test_state_when_locked_requires_admin(client, memory_store):
    memory_store.config.site_locked = True
    memory_store.config.lock_message = "Maintenance"

    assert client.get("/api/state").json() == {"site_locked": True, "lock_message": "Maintenance"}
    assert client.get("/api/state", headers={"X-Admin-Password": "nope"}).json()["site_locked"] is True
    assert client.get("/api/state", headers=ADMIN).json()["site_locked"] is False


def test_submit_picks_ok(client):
    response = client.post(
        "/api/picks",
        json={"playerId": 1, "day": "thursday_r1", "picks": ["Duke", "UNC"]},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert body["player"]["picks"] == {"thursday_r1": ["Duke", "UNC"]}


@pytest.mark.parametrize(
    ("payload", "status_code", "detail"),
    [
        ({"player_id": 9, "day": "thursday_r1", "picks": ["Duke", "UNC"]}, 404, "Player not found."),
        ({"player_id": 1, "day": "thursday_r1", "picks": ["Duke", "Duke"]}, 400, "Duplicate teams in picks."),
        ({"player_id": 1, "day": "thursday_r1", "picks": ["Duke", "Yale"]}, 400, "Invalid team: Yale"),
        ({"player_id": 1, "day": "thursday_r1", "picks": ["Duke"]}, 400, "Exactly 2 pick(s) required for this day."),
        (
            {"player_id": 1, "day": "saturday_r2", "picks": ["Duke"], "is_buyback": True},
            400,
            "Buybacks are not available on this day.",
        ),
    ],
)
def test_submit_picks_rule_violations(client, payload, status_code, detail):
    response = client.post("/api/picks", json=payload)
    assert response.status_code == status_code
    assert response.json()["detail"] == detail


def test_submit_picks_missing_fields_is_validation_error(client):
    response = client.post("/api/picks", json={"player_id": 1, "day": "thursday_r1", "picks": []})
    assert response.status_code == 422


def test_submit_picks_locked_site(client, memory_store):
    memory_store.config.site_locked = True
    response = client.post("/api/picks", json={"player_id": 1, "day": "thursday_r1", "picks": ["Duke", "UNC"]})
    assert response.status_code == 423


def test_admin_auth(client):
    assert client.post("/api/admin/auth", json={"password": "letmein"}).json() == {"ok": True}
    assert client.post("/api/admin/auth", json={"password": "wrong"}).status_code == 401


def test_admin_routes_require_header(client):
    assert client.post("/api/admin/player", json={"name": "Casey"}).status_code == 401
    assert client.delete("/api/admin/player/1").status_code == 401
    assert client.post("/api/admin/process-day", json={"day": "thursday_r1"}).status_code == 401


def test_admin_player_lifecycle(client):
    created = client.post("/api/admin/player", json={"name": "Casey"}, headers=ADMIN).json()["player"]
    assert created["id"] == 3

    patched = client.patch(
        "/api/admin/player/3", json={"needsBuyback": True, "buybacks": 1}, headers=ADMIN,
    ).json()["player"]
    assert patched["needs_buyback"] is True
    assert patched["buybacks"] == 1

    assert client.patch("/api/admin/player/3", json={"picks": {}}, headers=ADMIN).status_code == 422
    assert client.delete("/api/admin/player/3", headers=ADMIN).json() == {"ok": True}
    assert client.delete("/api/admin/player/3", headers=ADMIN).status_code == 404


def test_admin_config_cannot_touch_credential(client):
    response = client.post(
        "/api/admin/config", json={"adminPasswordHash": "x", "site_locked": True}, headers=ADMIN,
    )
    assert response.status_code == 422

    response = client.post("/api/admin/config", json={"lockMessage": "Soon"}, headers=ADMIN)
    assert response.status_code == 200
    assert response.json()["config"]["lock_message"] == "Soon"


def test_admin_games_and_process_day(client, memory_store):
    client.post("/api/picks", json={"player_id": 1, "day": "thursday_r1", "picks": ["Duke", "Kansas"]})

    response = client.post(
        "/api/admin/games",
        json={
            "day": "thursday_r1",
            "games": [
                {"id": "g1", "home": "Duke", "away": "UNC"},
                {"id": "g2", "home": "Kansas", "away": "Gonzaga"},
            ],
        },
        headers=ADMIN,
    )
    assert response.json() == {"ok": True, "day": "thursday_r1", "count": 2}

    for game_id, winner in (("g1", "Duke"), ("g2", "Kansas")):
        response = client.post(
            "/api/admin/game-result",
            json={"day": "thursday_r1", "gameId": game_id, "final": True, "winner": winner},
            headers=ADMIN,
        )
        assert response.json()["game"]["winner"] == winner

    response = client.post("/api/admin/process-day", json={"day": "thursday_r1"}, headers=ADMIN)
    body = response.json()
    assert body["current_day"] == "friday_r1"
    results = {entry["id"]: entry["result"] for entry in body["summary"]["entries"]}
    assert results == {1: "win", 2: None}

    again = client.post("/api/admin/process-day", json={"day": "thursday_r1"}, headers=ADMIN)
    assert again.status_code == 409


def test_admin_game_result_not_found(client):
    response = client.post(
        "/api/admin/game-result", json={"day": "friday_r1", "game_id": "g1"}, headers=ADMIN,
    )
    assert response.status_code == 404
    assert response.json()["detail"] == "Day not found."


def test_admin_game_result_rejects_foreign_winner(client, memory_store):
    memory_store.games["thursday_r1"] = [Game(id="g1", home="Duke", away="UNC")]
    response = client.post(
        "/api/admin/game-result",
        json={"day": "thursday_r1", "game_id": "g1", "final": True, "winner": "Kansas"},
        headers=ADMIN,
    )
    assert response.status_code == 400


def test_admin_games_rejects_repeated_game_id(client, memory_store):
    response = client.post(
        "/api/admin/games",
        json={
            "day": "thursday_r1",
            "games": [
                {"id": "g1", "home": "Duke", "away": "UNC"},
                {"id": "g1", "home": "Kansas", "away": "Gonzaga"},
            ],
        },
        headers=ADMIN,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Duplicate game id on thursday_r1: g1"
    assert memory_store.games == {}


def test_admin_config_unknown_day_message(client):
    response = client.post("/api/admin/config", json={"currentDay": "someday"}, headers=ADMIN)
    assert response.status_code == 404
    assert response.json()["detail"] == "Unknown day: someday"
