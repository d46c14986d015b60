"""
College Hockey Match Simulation Engine
"""

from .config import ENGINE_CONFIG, OFFENSE_STRATEGIES, DEFENSE_STRATEGIES
from .roster import (
    Team,
    Player,
    Role,
    StatLine,
    Strategy,
    RosterError,
    load_team_from_json,
    save_team_to_json,
    generate_team_on_the_fly,
    get_available_teams,
    get_available_strategies,
)
from .state import MatchState, OvertimePhase
from .resolver import PlayChoice, choose_play
from .game_engine import HockeyEngine, SimulationBoundError, simulate_match
from .result import GameResult
from .settlement import LeagueContext, settle_game, generate_headlines
from .box_score import BoxScoreGenerator, scouting_report
