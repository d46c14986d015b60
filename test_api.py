#!/usr/bin/env python3
"""API endpoints over the bundled sample teams."""

import pytest
from fastapi.testclient import TestClient

from api.main import app


@pytest.fixture(scope="module")
def client():
    return TestClient(app)


class TestListing:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        assert body["teams"] >= 4

    def test_teams(self, client):
        body = client.get("/teams").json()
        keys = {t["key"] for t in body["teams"]}
        assert "northfield" in keys and "pine_ridge" in keys
        assert "offense" in body["strategies"]

    def test_strategies(self, client):
        body = client.get("/strategies").json()
        assert set(body) == {"offense", "defense"}
        assert body["defense"]["collapse_the_slot"]["label"] == "Collapse the Slot"


class TestSimulate:
    def test_seeded_game_repeats(self, client):
        payload = {"home": "northfield", "away": "lakeshore", "seed": 31}
        first = client.post("/simulate", json=payload)
        second = client.post("/simulate", json=payload)
        assert first.status_code == 200
        assert first.json() == second.json()

    def test_result_shape(self, client):
        body = client.post("/simulate", json={"home": "granite_state", "away": "pine_ridge",
                                              "seed": 4}).json()
        home, away = body["final_score"]["home"], body["final_score"]["away"]
        assert home["abbreviation"] == "GRS" and away["abbreviation"] == "PIN"
        assert home["score"] != away["score"]
        assert sum(body["period_scores"]["home"]) == home["score"]
        assert body["play_by_play"]
        assert set(body["player_stats"]["away"]) >= {"shooter", "goalie"}

    def test_rivalry_name(self, client):
        body = client.post("/simulate", json={"home": "northfield", "away": "lakeshore",
                                              "seed": 1, "game_name": "In Conf"}).json()
        assert body["game_name"] == "Rivalry Game"

    def test_team_key_normalized(self, client):
        resp = client.post("/simulate", json={"home": "Granite State", "away": "pine-ridge", "seed": 2})
        assert resp.status_code == 200

    def test_unknown_team(self, client):
        resp = client.post("/simulate", json={"home": "nowhere_tech", "away": "lakeshore"})
        assert resp.status_code == 404

    def test_bad_strategy_override(self, client):
        resp = client.post("/simulate", json={
            "home": "northfield", "away": "lakeshore",
            "strategies": {"home_offense": "left_wing_lock"},
        })
        assert resp.status_code == 400

    def test_strategy_override_applied(self, client):
        body = client.post("/simulate", json={
            "home": "northfield", "away": "lakeshore", "seed": 9,
            "strategies": {"home_offense": "cycle_game", "away_defense": "collapse_the_slot"},
        }).json()
        assert body["final_score"]["home"]["team"] == "Northfield"


class TestSimulateMany:
    def test_batch(self, client):
        body = client.post("/simulate_many", json={"home": "northfield", "away": "pine_ridge",
                                                   "count": 4, "seed": 100}).json()
        assert body["games_played"] == 4
        record = body["record"]
        assert record["home_wins"] + record["away_wins"] == 4
        assert [g["seed"] for g in body["games"]] == [100, 101, 102, 103]

    def test_count_bounds(self, client):
        resp = client.post("/simulate_many", json={"home": "northfield", "away": "pine_ridge",
                                                   "count": 0})
        assert resp.status_code == 422
