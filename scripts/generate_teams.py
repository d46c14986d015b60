#!/usr/bin/env python3
"""
College Hockey Team Generator

Rolls a full roster for each sample school and writes it to data/teams/.
Rerunning with the same seed rewrites identical files.

Usage:
    python scripts/generate_teams.py [seed]
"""

import random
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from rink_engine.roster import generate_team_on_the_fly, save_team_to_json

DATA_DIR = Path(__file__).parent.parent / 'data'

# key, school, abbreviation, mascot, conference, offense, defense, stars, rival
SCHOOLS = [
    ("northfield", "Northfield", "NTH", "Wolves", "Great Lakes",
     "crash_the_net", "aggressive_forecheck", 4, "LKS"),
    ("lakeshore", "Lakeshore", "LKS", "Lakers", "Great Lakes",
     "cycle_game", "neutral_zone_trap", 3, "NTH"),
    ("granite_state", "Granite State", "GRS", "Huskies", "Northeast",
     "shooting_gallery", "collapse_the_slot", 3, "PIN"),
    ("pine_ridge", "Pine Ridge", "PIN", "Timberjacks", "Northeast",
     "no_preference", "no_preference", 2, "GRS"),
]


def main():
    seed = int(sys.argv[1]) if len(sys.argv) > 1 else 2024
    rng = random.Random(seed)
    out_dir = DATA_DIR / 'teams'
    out_dir.mkdir(parents=True, exist_ok=True)

    print(f"Generating {len(SCHOOLS)} teams (seed {seed})...")
    for key, school, abbr, mascot, conference, offense, defense, stars, rival in SCHOOLS:
        team = generate_team_on_the_fly(
            school, abbr, mascot=mascot, conference=conference,
            offense=offense, defense=defense, stars=stars, rng=rng,
        )
        team.rival = rival
        save_team_to_json(team, str(out_dir / f"{key}.json"))
        print(f"  {school} {mascot}: {team.offense_strategy.label}/{team.defense_strategy.label}, "
              f"off {team.offense_talent} def {team.defense_talent}")

    print(f"\nTeams saved to {out_dir}")


if __name__ == "__main__":
    main()
