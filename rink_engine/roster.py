"""
Teams, players and strategies for the college hockey simulator.

A Team is the side descriptor the engine borrows for one match: ratings
are read during play, season counters are written by stat recording and
post-game settlement.  Every player shares one record type; the role
decides which ratings the play formulas look at.
"""

import json
import os
import random
from dataclasses import dataclass, field, fields, asdict
from enum import Enum
from typing import Dict, List, Optional

from .config import OFFENSE_STRATEGIES, DEFENSE_STRATEGIES, ROSTER_MINIMUMS


TEAMS_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "data", "teams")


class RosterError(ValueError):
    """A team descriptor is missing roster slots or names an unknown strategy."""


class Role(Enum):
    SHOOTER = "shooter"     # centers: take the shot on a shot play
    SKATER = "skater"       # wings: carry the puck on a skate play
    DEFENDER = "defender"   # shot targets on offense, coverage on defense
    GOALIE = "goalie"       # follow-ups, restarts, last line


POSITION_TAGS = {
    Role.SHOOTER.value: "C",
    Role.SKATER.value: "LW",
    Role.DEFENDER.value: "D",
    Role.GOALIE.value: "G",
}

YEAR_LABELS = {0: "RS", 1: "Fr", 2: "So", 3: "Jr", 4: "Sr"}


@dataclass
class StatLine:
    """Named counters shared by every role.

    Shooters use attempts/completions/gain/goals/takeaways, defenders add
    missed_shots and lost_pucks, skaters use attempts/gain/goals/lost_pucks,
    goalies use the follow-up and shots-faced counters.
    """
    attempts: int = 0
    completions: int = 0
    gain: int = 0
    goals: int = 0
    takeaways: int = 0
    missed_shots: int = 0
    lost_pucks: int = 0
    follow_up_attempts: int = 0
    follow_up_makes: int = 0
    shots_faced: int = 0
    goals_allowed: int = 0

    @property
    def saves(self) -> int:
        return self.shots_faced - self.goals_allowed

    def to_dict(self) -> Dict[str, int]:
        d = asdict(self)
        d["saves"] = self.saves
        return d


@dataclass
class Player:
    # --- Identity ---
    name: str
    role: str
    number: int = 0
    position: str = ""
    year: int = 1

    # --- Ratings (0-100) ---
    overall: int = 70
    potential: int = 70
    hockey_iq: int = 70
    speed: int = 70
    shot_accuracy: int = 70
    shot_power: int = 70
    awareness: int = 70      # offensive awareness, getting open for a shot
    skill: int = 70          # offensive puck skill
    def_awareness: int = 70
    def_skill: int = 70
    checking: int = 70
    blocking: int = 70
    goalie_skill: int = 70
    faceoff: int = 70

    # --- Season counters (written by the engine and settlement) ---
    season: StatLine = field(default_factory=StatLine)
    games_played: int = 0
    game_wins: int = 0

    def __post_init__(self):
        if isinstance(self.role, Role):
            self.role = self.role.value
        if not self.position:
            self.position = POSITION_TAGS.get(self.role, self.role[:2].upper())

    @property
    def initial_name(self) -> str:
        parts = self.name.split()
        if len(parts) > 1:
            return f"{parts[0][0]}. {parts[1]}"
        return self.name

    @property
    def year_label(self) -> str:
        return YEAR_LABELS.get(self.year, "ERR")


RATING_FIELDS = [f.name for f in fields(Player)
                 if f.name not in ("name", "role", "number", "position", "year",
                                   "season", "games_played", "game_wins")]


def compute_overall(player: Player) -> int:
    """Role-weighted overall rating."""
    p = player
    if p.role == Role.SHOOTER.value:
        return (p.shot_accuracy + p.shot_power + p.hockey_iq) // 3
    if p.role == Role.SKATER.value:
        return (p.speed + p.skill + p.blocking) // 3
    if p.role == Role.DEFENDER.value:
        return (p.awareness + p.skill + p.speed + p.def_awareness + p.def_skill + p.checking) // 6
    return (p.goalie_skill + p.faceoff + p.def_awareness) // 3


@dataclass
class Strategy:
    key: str
    label: str
    pass_yards: int = 0
    pass_aggression: int = 0
    run_yards: int = 0
    run_aggression: int = 0

    @classmethod
    def from_catalog(cls, key: str, catalog: Dict[str, Dict]) -> "Strategy":
        if key not in catalog:
            raise RosterError(f"Unknown strategy '{key}'")
        entry = catalog[key]
        return cls(
            key=key,
            label=entry["label"],
            pass_yards=entry["pass_yards"],
            pass_aggression=entry["pass_aggression"],
            run_yards=entry["run_yards"],
            run_aggression=entry["run_aggression"],
        )


def get_offense_strategy(key: str = "no_preference") -> Strategy:
    return Strategy.from_catalog(key, OFFENSE_STRATEGIES)


def get_defense_strategy(key: str = "no_preference") -> Strategy:
    return Strategy.from_catalog(key, DEFENSE_STRATEGIES)


@dataclass
class WinStreak:
    team: str
    wins: int = 0
    start_year: int = 0
    end_year: int = 0

    def add_win(self, year: int):
        self.wins += 1
        if self.wins == 1:
            self.start_year = year
        self.end_year = year

    def reset(self, year: int):
        self.wins = 0
        self.start_year = year
        self.end_year = year


@dataclass
class Team:
    name: str
    abbreviation: str
    shooters: List[Player]
    skaters: List[Player]
    defenders: List[Player]
    goalies: List[Player]
    mascot: str = ""
    conference: str = "Independent"
    rival: str = ""
    poll_rank: int = 0
    offense_strategy: Strategy = field(default_factory=get_offense_strategy)
    defense_strategy: Strategy = field(default_factory=get_defense_strategy)

    # --- Season record (written by settlement) ---
    wins: int = 0
    losses: int = 0
    total_wins: int = 0
    total_losses: int = 0
    results: List[str] = field(default_factory=list)
    beaten: List[str] = field(default_factory=list)
    goals_scored: int = 0
    goals_allowed: int = 0
    shots: int = 0
    shots_against: int = 0
    takeaway_diff: int = 0
    won_rivalry_game: bool = False
    win_streak: Optional[WinStreak] = None

    def __post_init__(self):
        if self.win_streak is None:
            self.win_streak = WinStreak(team=self.abbreviation)

    def validate(self):
        """Raise RosterError unless every role meets its minimum depth."""
        for role, minimum in ROSTER_MINIMUMS.items():
            have = len(self.roster(role))
            if have < minimum:
                raise RosterError(
                    f"{self.abbreviation} needs at least {minimum} {role}(s), has {have}"
                )

    def roster(self, role: str) -> List[Player]:
        return {
            Role.SHOOTER.value: self.shooters,
            Role.SKATER.value: self.skaters,
            Role.DEFENDER.value: self.defenders,
            Role.GOALIE.value: self.goalies,
        }[role]

    @property
    def players(self) -> List[Player]:
        return self.shooters + self.skaters + self.defenders + self.goalies

    @property
    def shooter(self) -> Player:
        return self.shooters[0]

    @property
    def goalie(self) -> Player:
        return self.goalies[0]

    # ── Aggregate ratings read by the play formulas ──

    @property
    def line_block(self) -> int:
        line = [self.shooters[0], self.skaters[0], self.skaters[1]]
        return sum(p.blocking for p in line) // 3

    @property
    def line_rush(self) -> int:
        line = [self.shooters[0], self.skaters[0], self.skaters[1]]
        return sum((p.blocking + p.speed) // 2 for p in line) // 3

    @property
    def front_check(self) -> int:
        return sum(d.checking for d in self.defenders[:3]) // 3

    @property
    def front_rush(self) -> int:
        return sum((d.checking + d.def_skill) // 2 for d in self.defenders[:3]) // 3

    @property
    def shot_offense(self) -> int:
        return (self.shooters[0].overall * 3 + sum(d.overall for d in self.defenders[:3])) // 6

    @property
    def shot_defense(self) -> int:
        return (sum(d.def_awareness for d in self.defenders[:3]) + self.goalies[0].overall) // 4

    @property
    def skate_offense(self) -> int:
        return (self.skaters[0].overall * 2 + self.skaters[1].overall + self.line_rush) // 4

    @property
    def skate_defense(self) -> int:
        return (self.front_rush * 2 + self.defenders[0].def_skill) // 3

    @property
    def composite_iq(self) -> int:
        top = self.shooters[:2] + self.skaters[:2] + self.defenders[:3] + self.goalies[:1]
        return sum(p.hockey_iq for p in top) // len(top)

    @property
    def offense_talent(self) -> int:
        return (self.shooters[0].overall + self.skaters[0].overall + self.skaters[1].overall) // 3

    @property
    def defense_talent(self) -> int:
        return (self.defenders[0].overall + self.defenders[1].overall + self.goalies[0].overall) // 3

    # ── Season helpers ──

    def num_games(self) -> int:
        if self.wins + self.losses == 0:
            return 1
        return self.wins + self.losses

    def record_str(self) -> str:
        return f"{self.abbreviation} ({self.wins}-{self.losses})"

    def str_rep(self) -> str:
        return f"#{self.poll_rank} {self.abbreviation} ({self.wins}-{self.losses})"


# ═══════════════════════════════════════════════════════════════
# ROSTER GENERATION
# ═══════════════════════════════════════════════════════════════

FIRST_NAMES = [
    "Jack", "Cole", "Ryan", "Owen", "Liam", "Mason", "Tyler", "Nolan", "Evan", "Logan",
    "Brady", "Quinn", "Carter", "Hunter", "Luke", "Adam", "Sam", "Jake", "Matt", "Ben",
    "Drew", "Max", "Nate", "Reid", "Trevor", "Cam", "Alex", "Zach", "Eli", "Gavin",
]

LAST_NAMES = [
    "Hughes", "Larson", "Nieminen", "Bergstrom", "Kowalski", "Fleury", "Tremblay",
    "Gagnon", "Olson", "Peterson", "Lindqvist", "Murphy", "Sullivan", "Brennan",
    "Holm", "Kessler", "Dubois", "Novak", "Sorensen", "McKay", "Walsh", "Eriksson",
    "Lemieux", "Carlson", "Johansson", "Reilly", "Pronger", "Anderson", "Hartley",
    "Ferris",
]

ROSTER_TEMPLATE = [
    (Role.SHOOTER, "C", 4),
    (Role.SKATER, "LW", 4),
    (Role.DEFENDER, "RW", 2),
    (Role.DEFENDER, "LD", 3),
    (Role.DEFENDER, "RD", 3),
    (Role.GOALIE, "G", 2),
]


def generate_player(role: Role, position: str, number: int, rng: random.Random,
                    stars: int = 3, year: Optional[int] = None) -> Player:
    """Roll a player the way recruits are rolled: 60 + year*5 + stars*5 - 25*U."""
    if year is None:
        year = rng.randint(1, 4)

    def roll() -> int:
        return int(60 + year * 5 + stars * 5 - 25 * rng.random())

    player = Player(
        name=f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}",
        role=role.value,
        number=number,
        position=position,
        year=year,
        potential=int(50 + 50 * rng.random()),
        hockey_iq=int(50 + 50 * rng.random()),
    )
    for attr in ("speed", "shot_accuracy", "shot_power", "awareness", "skill",
                 "def_awareness", "def_skill", "checking", "blocking",
                 "goalie_skill", "faceoff"):
        setattr(player, attr, roll())
    player.overall = compute_overall(player)
    return player


def generate_team_on_the_fly(
    team_name: str,
    abbreviation: str,
    mascot: str = "",
    conference: str = "Independent",
    offense: str = "no_preference",
    defense: str = "no_preference",
    stars: int = 3,
    rng: Optional[random.Random] = None,
) -> Team:
    """Generate a complete Team with a fresh roster.

    Depth charts are sorted by overall so index 0 is the starter, which is
    what the engine and the lineup snapshot assume.
    """
    rng = rng or random.Random()
    groups: Dict[str, List[Player]] = {r.value: [] for r in Role}
    number = 2
    for role, position, count in ROSTER_TEMPLATE:
        for _ in range(count):
            groups[role.value].append(generate_player(role, position, number, rng, stars=stars))
            number += rng.randint(1, 3)
    for players in groups.values():
        players.sort(key=lambda p: p.overall, reverse=True)

    return Team(
        name=team_name,
        abbreviation=abbreviation,
        mascot=mascot,
        conference=conference,
        shooters=groups[Role.SHOOTER.value],
        skaters=groups[Role.SKATER.value],
        defenders=groups[Role.DEFENDER.value],
        goalies=groups[Role.GOALIE.value],
        offense_strategy=get_offense_strategy(offense),
        defense_strategy=get_defense_strategy(defense),
    )


# ═══════════════════════════════════════════════════════════════
# JSON PERSISTENCE
# ═══════════════════════════════════════════════════════════════

def team_to_dict(team: Team) -> Dict:
    players = []
    for p in team.players:
        players.append({
            "number": p.number,
            "name": p.name,
            "role": p.role,
            "position": p.position,
            "year": p.year,
            "ratings": {attr: getattr(p, attr) for attr in RATING_FIELDS},
        })
    return {
        "team_info": {
            "school": team.name,
            "abbreviation": team.abbreviation,
            "mascot": team.mascot,
            "conference": team.conference,
            "rival": team.rival,
        },
        "strategy": {
            "offense": team.offense_strategy.key,
            "defense": team.defense_strategy.key,
        },
        "roster": {"players": players},
    }


def team_from_dict(data: Dict) -> Team:
    info = data["team_info"]
    groups: Dict[str, List[Player]] = {r.value: [] for r in Role}
    for p_data in data.get("roster", {}).get("players", []):
        role = p_data["role"]
        if role not in groups:
            raise RosterError(f"Unknown role '{role}' for {p_data.get('name', '?')}")
        ratings = p_data.get("ratings", {})
        player = Player(
            name=p_data["name"],
            role=role,
            number=p_data.get("number", 0),
            position=p_data.get("position", ""),
            year=p_data.get("year", 1),
            **{k: v for k, v in ratings.items() if k in RATING_FIELDS},
        )
        if "overall" not in ratings:
            player.overall = compute_overall(player)
        groups[role].append(player)

    strategy = data.get("strategy", {})
    team = Team(
        name=info.get("school", "Unknown"),
        abbreviation=info["abbreviation"],
        mascot=info.get("mascot", ""),
        conference=info.get("conference", "Independent"),
        rival=info.get("rival", ""),
        shooters=groups[Role.SHOOTER.value],
        skaters=groups[Role.SKATER.value],
        defenders=groups[Role.DEFENDER.value],
        goalies=groups[Role.GOALIE.value],
        offense_strategy=get_offense_strategy(strategy.get("offense", "no_preference")),
        defense_strategy=get_defense_strategy(strategy.get("defense", "no_preference")),
    )
    team.validate()
    return team


def load_team_from_json(filepath: str) -> Team:
    """Load a team from its JSON file (see team_to_dict for the layout)."""
    with open(filepath, "r") as f:
        data = json.load(f)
    return team_from_dict(data)


def save_team_to_json(team: Team, filepath: str):
    with open(filepath, "w") as f:
        json.dump(team_to_dict(team), f, indent=2)


def get_available_teams(teams_dir: str = TEAMS_DIR) -> List[Dict]:
    teams = []
    if not os.path.isdir(teams_dir):
        return teams
    for f in sorted(os.listdir(teams_dir)):
        if f.endswith(".json"):
            filepath = os.path.join(teams_dir, f)
            with open(filepath) as fh:
                data = json.load(fh)
            team_info = data["team_info"]
            teams.append({
                "key": f.replace(".json", ""),
                "name": team_info.get("school", "Unknown"),
                "abbreviation": team_info["abbreviation"],
                "mascot": team_info.get("mascot", ""),
                "conference": team_info.get("conference", "Independent"),
                "file": filepath,
            })
    return teams


def get_available_strategies() -> Dict:
    return {
        "offense": {k: {"label": v["label"], "description": v["description"]}
                    for k, v in OFFENSE_STRATEGIES.items()},
        "defense": {k: {"label": v["label"], "description": v["description"]}
                    for k, v in DEFENSE_STRATEGIES.items()},
    }
