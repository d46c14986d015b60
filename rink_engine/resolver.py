"""
Per-down play selection.

Both preference scores are drawn on every live down, shot first, whichever
branch ends up deciding the play.
"""

import random
from enum import Enum
from typing import Tuple

from .roster import Team
from .state import MatchState


class PlayChoice(Enum):
    SHOT = "shot"
    SKATE = "skate"
    TURNOVER_ON_DOWNS = "turnover_on_downs"


def play_preferences(offense: Team, defense: Team, rng: random.Random) -> Tuple[float, float]:
    shot = (offense.shot_offense * 2 - defense.shot_defense) * rng.random() - 10
    skate = ((offense.skate_offense * 2 - defense.skate_defense) * rng.random()
             + offense.offense_strategy.run_yards)
    return shot, skate


def choose_play(state: MatchState, offense: Team, defense: Team,
                rng: random.Random) -> PlayChoice:
    if state.down > 4:
        return PlayChoice.TURNOVER_ON_DOWNS

    shot, skate = play_preferences(offense, defense, rng)
    if state.down == 3 and state.distance_to_convert > 4:
        return PlayChoice.SHOT
    if state.down in (1, 2) and shot >= skate:
        return PlayChoice.SHOT
    return PlayChoice.SKATE
