"""
College Hockey Simulation API
FastAPI wrapper around the match engine
"""

import sys
import os
from typing import Optional
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))
from rink_engine import (
    HockeyEngine,
    LeagueContext,
    RosterError,
    SimulationBoundError,
    load_team_from_json,
    get_available_teams,
    get_available_strategies,
)
from rink_engine.roster import TEAMS_DIR, get_offense_strategy, get_defense_strategy


app = FastAPI(title="College Hockey Simulation API", version="1.0.0")


class SimulateRequest(BaseModel):
    home: str
    away: str
    seed: Optional[int] = None
    neutral_site: bool = False
    game_name: str = ""
    # Optional per-side strategy overrides: {"home_offense": "cycle_game", ...}
    strategies: Optional[dict] = None


class SimulateManyRequest(BaseModel):
    home: str
    away: str
    count: int = Field(10, ge=1, le=1000)
    seed: Optional[int] = None
    neutral_site: bool = False
    strategies: Optional[dict] = None


def _load_team(key: str):
    filepath = os.path.join(TEAMS_DIR, f"{key}.json")
    if not os.path.exists(filepath):
        cleaned = key.lower().replace(" ", "_").replace("-", "_")
        filepath = os.path.join(TEAMS_DIR, f"{cleaned}.json")
    if not os.path.exists(filepath):
        raise HTTPException(status_code=404, detail=f"Team '{key}' not found")
    try:
        return load_team_from_json(filepath)
    except RosterError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _apply_strategies(home, away, strategies: Optional[dict]):
    if not strategies:
        return
    try:
        for side, team in (("home", home), ("away", away)):
            if f"{side}_offense" in strategies:
                team.offense_strategy = get_offense_strategy(strategies[f"{side}_offense"])
            if f"{side}_defense" in strategies:
                team.defense_strategy = get_defense_strategy(strategies[f"{side}_defense"])
    except RosterError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _run(home_key: str, away_key: str, seed: Optional[int], neutral_site: bool,
         strategies: Optional[dict], game_name: str = "") -> dict:
    home_team = _load_team(home_key)
    away_team = _load_team(away_key)
    _apply_strategies(home_team, away_team, strategies)
    engine = HockeyEngine(home_team, away_team, seed=seed, neutral_site=neutral_site,
                          game_name=game_name, context=LeagueContext())
    try:
        result = engine.simulate_game()
    except SimulationBoundError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return result.to_dict()


@app.get("/health")
def health_check():
    team_count = len(get_available_teams())
    return {"status": "ok", "teams": team_count}


@app.get("/teams")
def list_teams():
    teams = get_available_teams()
    strategies = get_available_strategies()
    return {"teams": teams, "strategies": strategies}


@app.get("/strategies")
def list_strategies():
    return get_available_strategies()


@app.post("/simulate")
def simulate(req: SimulateRequest):
    return _run(req.home, req.away, req.seed, req.neutral_site, req.strategies, req.game_name)


@app.post("/simulate_many")
def simulate_many(req: SimulateManyRequest):
    results = []
    for i in range(req.count):
        game_seed = (req.seed + i) if req.seed is not None else None
        results.append(_run(req.home, req.away, game_seed, req.neutral_site, req.strategies))

    home_scores = [r["final_score"]["home"]["score"] for r in results]
    away_scores = [r["final_score"]["away"]["score"] for r in results]
    home_wins = sum(1 for h, a in zip(home_scores, away_scores) if h > a)
    away_wins = req.count - home_wins
    overtimes = sum(1 for r in results if r["overtime_count"] > 0)

    home_shots = [r["stats"]["home"]["shots"] for r in results]
    away_shots = [r["stats"]["away"]["shots"] for r in results]
    home_tk = [r["stats"]["home"]["takeaways"] for r in results]
    away_tk = [r["stats"]["away"]["takeaways"] for r in results]

    return {
        "games_played": req.count,
        "home_team": results[0]["final_score"]["home"]["team"],
        "away_team": results[0]["final_score"]["away"]["team"],
        "record": {"home_wins": home_wins, "away_wins": away_wins, "overtime_games": overtimes},
        "averages": {
            "home_score": round(sum(home_scores) / req.count, 1),
            "away_score": round(sum(away_scores) / req.count, 1),
            "home_shots": round(sum(home_shots) / req.count, 1),
            "away_shots": round(sum(away_shots) / req.count, 1),
            "home_takeaways": round(sum(home_tk) / req.count, 2),
            "away_takeaways": round(sum(away_tk) / req.count, 2),
        },
        "games": [
            {
                "seed": r["seed"],
                "home_score": r["final_score"]["home"]["score"],
                "away_score": r["final_score"]["away"]["score"],
                "overtime_count": r["overtime_count"],
            }
            for r in results
        ],
    }
