"""
Stat bookkeeping for one match.

Every side keeps seven game blocks keyed by lineup slot (shooter, the two
skaters, the three defenders and the goalie).  Season counters live on the
Player objects themselves and are bumped alongside the game blocks.  The
recorder makes no decisions: handlers tell it what happened.
"""

from typing import Dict

from .roster import Player, StatLine, Team
from .state import MatchState, other_side


BLOCK_KEYS = ("shooter", "skater1", "skater2",
              "defender1", "defender2", "defender3", "goalie")


def defender_key(index: int) -> str:
    return f"defender{index + 1}"


def skater_key(index: int) -> str:
    return f"skater{index + 1}"


class StatRecorder:

    def __init__(self, state: MatchState):
        self.state = state
        self.blocks: Dict[str, Dict[str, StatLine]] = {
            side: {key: StatLine() for key in BLOCK_KEYS} for side in ("home", "away")
        }

    def block(self, side: str, key: str) -> StatLine:
        return self.blocks[side][key]

    def _add_team_gain(self, side: str, gain: int):
        if side == "home":
            self.state.home_gain += gain
        else:
            self.state.away_gain += gain

    def _add_takeaway(self, side: str):
        if side == "home":
            self.state.home_takeaways += 1
        else:
            self.state.away_takeaways += 1

    # ── Shot plays ──

    def shot_completion(self, side: str, offense: Team, target: Player, target_key: str, gain: int):
        shooter = offense.shooter
        shooter.season.completions += 1
        shooter.season.gain += gain
        target.season.completions += 1
        target.season.gain += gain
        offense.shots += gain
        self._add_team_gain(side, gain)
        self.block(side, "shooter").completions += 1
        self.block(side, target_key).completions += 1

    def shot_attempt(self, side: str, offense: Team, defense: Team,
                     target: Player, target_key: str, gain: int):
        """Called once for every shot that gets off the stick, made or not."""
        offense.shooter.season.attempts += 1
        target.season.attempts += 1
        self._add_team_gain(side, gain)
        shooter_block = self.block(side, "shooter")
        shooter_block.gain += gain
        shooter_block.attempts += 1
        target_block = self.block(side, target_key)
        target_block.gain += gain
        target_block.attempts += 1

        goalie_block = self.block(other_side(side), "goalie")
        goalie_block.shots_faced += 1
        defense.goalie.season.shots_faced += 1

    def missed_shot(self, side: str, target: Player, target_key: str):
        self.block(side, target_key).missed_shots += 1
        target.season.missed_shots += 1

    def shot_goal(self, side: str, offense: Team, defense: Team, target: Player, target_key: str):
        self.block(side, "shooter").goals += 1
        self.block(side, target_key).goals += 1
        offense.shooter.season.goals += 1
        target.season.goals += 1
        self.block(other_side(side), "goalie").goals_allowed += 1
        defense.goalie.season.goals_allowed += 1

    def shot_lost_puck(self, side: str, target: Player, target_key: str):
        self.block(side, target_key).lost_pucks += 1
        target.season.lost_pucks += 1
        self._add_takeaway(other_side(side))

    # ── Skate plays ──

    def skate_attempt(self, side: str, offense: Team, skater: Player, key: str, gain: int):
        skater.season.attempts += 1
        skater.season.gain += gain
        offense.shots += gain
        self._add_team_gain(side, gain)
        block = self.block(side, key)
        block.attempts += 1
        block.gain += gain

    def skate_goal(self, side: str, skater: Player, key: str):
        self.block(side, key).goals += 1
        skater.season.goals += 1

    def skate_lost_puck(self, side: str, skater: Player, key: str):
        self.block(side, key).lost_pucks += 1
        skater.season.lost_pucks += 1
        self._add_takeaway(other_side(side))

    # ── Turnovers and follow-ups ──

    def takeaway(self, side: str, offense: Team):
        """Shot stripped before release: charged to the shooter, credited to the defense."""
        block = self.block(side, "shooter")
        block.takeaways += 1
        block.attempts += 1
        offense.shooter.season.takeaways += 1
        self._add_takeaway(other_side(side))

    def follow_up(self, side: str, offense: Team, made: bool):
        block = self.block(side, "goalie")
        block.follow_up_attempts += 1
        goalie = offense.goalie
        goalie.season.follow_up_attempts += 1
        if made:
            block.follow_up_makes += 1
            goalie.season.follow_up_makes += 1

    def to_dict(self) -> Dict[str, Dict[str, Dict[str, int]]]:
        return {
            side: {key: line.to_dict() for key, line in blocks.items()}
            for side, blocks in self.blocks.items()
        }
