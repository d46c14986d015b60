#!/usr/bin/env python3
"""
Simulate a college hockey match and generate outputs

Usage:
    python simulate_game.py <home_team> <away_team> [seed]

Example:
    python simulate_game.py northfield lakeshore 42
"""

import sys
import json
import os
from pathlib import Path

# Add engine to path
sys.path.insert(0, str(Path(__file__).parent))

from rink_engine import HockeyEngine, load_team_from_json, get_available_teams, BoxScoreGenerator


def simulate_game(home_team_file: str, away_team_file: str, seed=None):
    """Simulate a match between two teams"""

    print("=" * 60)
    print("COLLEGE HOCKEY SIMULATION")
    print("=" * 60)
    print()

    print(f"Loading home team from: {home_team_file}")
    home_team = load_team_from_json(home_team_file)

    print(f"Loading away team from: {away_team_file}")
    away_team = load_team_from_json(away_team_file)

    print()
    print(f"{away_team.name} @ {home_team.name}")
    print()

    engine = HockeyEngine(home_team, away_team, seed=seed)
    result = engine.simulate_game()
    game_data = result.to_dict()

    print(result.event_log())
    print()
    print("=" * 60)
    print("GAME COMPLETE")
    print("=" * 60)
    print()

    print("FINAL SCORE:")
    print(f"  {away_team.name}: {result.away_score}")
    print(f"  {home_team.name}: {result.home_score}")
    if result.went_to_overtime:
        print(f"  ({result.overtime_count} overtime frame(s))")
    print()
    for story in result.headlines:
        print(f"HEADLINE: {story.split('>')[0]}")

    out_dir = os.path.join("output", "box_scores")
    os.makedirs(out_dir, exist_ok=True)
    stem = f"{away_team.abbreviation}_at_{home_team.abbreviation}"

    pbp_filename = os.path.join("output", f"play_by_play_{stem}.json")
    with open(pbp_filename, 'w') as f:
        json.dump(game_data, f, indent=2)
    print(f"Play-by-play saved to: {pbp_filename}")

    box_score_filename = os.path.join(out_dir, f"{stem}.md")
    BoxScoreGenerator(game_data).save_to_file(box_score_filename)
    print(f"Box score saved to: {box_score_filename}")

    return game_data


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python simulate_game.py <home_team> <away_team> [seed]")
        print("\nAvailable teams:")
        for t in get_available_teams():
            print(f"  - {t['key']}")
        sys.exit(1)

    home = sys.argv[1]
    away = sys.argv[2]
    seed = int(sys.argv[3]) if len(sys.argv) > 3 else None

    home_file = f"data/teams/{home}.json"
    away_file = f"data/teams/{away}.json"

    if not os.path.exists(home_file):
        print(f"Error: Home team file not found: {home_file}")
        sys.exit(1)

    if not os.path.exists(away_file):
        print(f"Error: Away team file not found: {away_file}")
        sys.exit(1)

    simulate_game(home_file, away_file, seed)
