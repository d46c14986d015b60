#!/usr/bin/env python3
"""Batch simulation for checking engine balance metrics.

Usage:
    python batch_sim.py [num_games] [seed]
"""

import sys
import random
import glob
from pathlib import Path
from collections import defaultdict

import pandas as pd

sys.path.insert(0, str(Path(__file__).parent))

from rink_engine import HockeyEngine, load_team_from_json, generate_team_on_the_fly


def _team_pool(rng: random.Random):
    """Team files from data/teams, or a generated pair when there are none."""
    team_files = sorted(glob.glob("data/teams/*.json"))
    if len(team_files) >= 2:
        return lambda: [load_team_from_json(f) for f in rng.sample(team_files, 2)]
    print("Fewer than 2 team files, generating rosters on the fly")
    return lambda: [
        generate_team_on_the_fly("Home State", "HOM", rng=rng),
        generate_team_on_the_fly("Away Tech", "AWY", rng=rng),
    ]


def run_batch(num_games=200, seed=None) -> pd.DataFrame:
    rng = random.Random(seed)
    pick_teams = _team_pool(rng)

    rows = []
    for i in range(num_games):
        home, away = pick_teams()
        game_seed = rng.randrange(2 ** 31)
        result = HockeyEngine(home, away, seed=game_seed).simulate_game()
        rows.append({
            "seed": game_seed,
            "home": result.home_abbreviation,
            "away": result.away_abbreviation,
            "home_score": result.home_score,
            "away_score": result.away_score,
            "home_shots": result.team_stats["home"]["shots"],
            "away_shots": result.team_stats["away"]["shots"],
            "home_takeaways": result.team_stats["home"]["takeaways"],
            "away_takeaways": result.team_stats["away"]["takeaways"],
            "overtime_count": result.overtime_count,
            "plays": result.play_count,
            "home_win": result.home_score > result.away_score,
        })

        if (i + 1) % 25 == 0:
            print(f"  Completed {i+1}/{num_games} games...")

    df = pd.DataFrame(rows)

    print(f"\n{'='*60}")
    print(f"BATCH SIMULATION RESULTS ({len(df)} games)")
    print(f"{'='*60}\n")

    summary = pd.DataFrame({
        "home": [df["home_score"].mean(), df["home_shots"].mean(), df["home_takeaways"].mean()],
        "away": [df["away_score"].mean(), df["away_shots"].mean(), df["away_takeaways"].mean()],
    }, index=["score", "shots", "takeaways"]).round(2)
    print(summary.to_string())
    print()

    print(f"{'Plays/game':<35} {df['plays'].mean():>12.1f}")
    print(f"{'  Min/Max plays':<35} {df['plays'].min():>5}/{df['plays'].max():<6}")
    print(f"{'Home win %':<35} {df['home_win'].mean() * 100:>11.1f}%")
    print(f"{'Overtime games %':<35} {(df['overtime_count'] > 0).mean() * 100:>11.1f}%")
    print(f"{'  Longest overtime':<35} {df['overtime_count'].max():>12}")

    print(f"\n{'='*60}")
    print("SCORE DISTRIBUTION")
    print(f"{'='*60}")
    buckets = defaultdict(int)
    for s in pd.concat([df["home_score"], df["away_score"]]):
        buckets[int(s // 10) * 10] += 1
    for b in sorted(buckets.keys()):
        bar = '#' * (buckets[b] // 2)
        print(f"  {b:>3}-{b+9:<3}: {buckets[b]:>4} {bar}")

    return df


if __name__ == "__main__":
    num = int(sys.argv[1]) if len(sys.argv) > 1 else 200
    seed = int(sys.argv[2]) if len(sys.argv) > 2 else None
    print(f"Running {num} game batch simulation...")
    run_batch(num, seed)
