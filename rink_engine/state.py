"""
Per-match mutable state: clock, zone position, possession, downs and the
overtime phase machine.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from .config import ENGINE_CONFIG


# Clock value once regulation is over and sudden death has begun
OVERTIME_CLOCK = -1


class OvertimePhase(Enum):
    NONE = "none"           # regulation
    TOP = "top"             # first half of a sudden-death frame
    BOTTOM = "bottom"       # second half of the frame
    FINISHED = "finished"


def other_side(side: str) -> str:
    return "away" if side == "home" else "home"


def _period_slots() -> List[int]:
    return [0] * ENGINE_CONFIG["period_slots"]


@dataclass
class MatchState:
    clock: int = 3600
    zone_position: int = 20
    possession: str = "home"
    down: int = 1
    distance_to_convert: int = 10
    overtime_phase: OvertimePhase = OvertimePhase.NONE
    overtime_count: int = 0
    overtime_leadoff: str = "away"
    home_score: int = 0
    away_score: int = 0
    # Team gain totals ("shots" in the box score) and takeaways forced
    home_gain: int = 0
    away_gain: int = 0
    home_takeaways: int = 0
    away_takeaways: int = 0
    play_count: int = 0
    period_scores: Dict[str, List[int]] = field(
        default_factory=lambda: {"home": _period_slots(), "away": _period_slots()}
    )

    @property
    def overtime_active(self) -> bool:
        return self.overtime_phase in (OvertimePhase.TOP, OvertimePhase.BOTTOM)

    @property
    def finished(self) -> bool:
        return self.overtime_phase == OvertimePhase.FINISHED

    @property
    def defense_side(self) -> str:
        return other_side(self.possession)

    def score(self, side: str) -> int:
        return self.home_score if side == "home" else self.away_score

    def margin(self, side: str) -> int:
        """Score of `side` minus its opponent's."""
        return self.score(side) - self.score(other_side(side))

    @property
    def tied(self) -> bool:
        return self.home_score == self.away_score

    def set_zone(self, zone: int):
        self.zone_position = max(0, min(100, zone))

    def flip_possession(self):
        self.possession = other_side(self.possession)

    def reset_downs(self):
        self.down = 1
        self.distance_to_convert = ENGINE_CONFIG["first_down_distance"]

    def advance_downs(self, gain: int):
        """Apply gain to the distance; convert or use up a down."""
        self.distance_to_convert -= gain
        if self.distance_to_convert <= 0:
            self.reset_downs()
        else:
            self.down += 1

    def turn_over(self):
        """Regulation change of possession: new side takes over at the mirrored zone."""
        self.reset_downs()
        self.flip_possession()
        self.set_zone(100 - self.zone_position)

    def run_clock(self, seconds: float):
        """Burn regulation time; truncates toward zero like the integer clock it models."""
        if self.overtime_phase != OvertimePhase.NONE:
            return
        self.clock = int(self.clock - seconds)

    # ── Overtime ──

    def frame_top_side(self) -> str:
        if self.overtime_count % 2 == 1:
            return self.overtime_leadoff
        return other_side(self.overtime_leadoff)

    def frame_bottom_side(self) -> str:
        return other_side(self.frame_top_side())

    def _reset_for_frame_half(self):
        self.zone_position = ENGINE_CONFIG["overtime_zone"]
        self.reset_downs()
        self.clock = OVERTIME_CLOCK

    def start_overtime(self):
        """Regulation ended tied: the side without the puck leads off frame 1."""
        self.overtime_leadoff = other_side(self.possession)
        self.overtime_count = 1
        self.overtime_phase = OvertimePhase.TOP
        self.possession = self.overtime_leadoff
        self._reset_for_frame_half()

    def advance_overtime(self) -> OvertimePhase:
        """Single transition function for the sudden-death phases.

        BOTTOM + tied   -> next frame, TOP, possession by frame parity
        TOP             -> BOTTOM, possession flips
        BOTTOM + untied -> FINISHED
        """
        if self.overtime_phase == OvertimePhase.BOTTOM and self.tied:
            self.overtime_count += 1
            self.overtime_phase = OvertimePhase.TOP
            self.possession = self.frame_top_side()
            self._reset_for_frame_half()
        elif self.overtime_phase == OvertimePhase.TOP:
            self.overtime_phase = OvertimePhase.BOTTOM
            self.flip_possession()
            self._reset_for_frame_half()
        else:
            self.overtime_phase = OvertimePhase.FINISHED
        return self.overtime_phase

    # ── Scoring ──

    def period_index(self) -> int:
        period = ENGINE_CONFIG["period_seconds"]
        if self.clock > period * 3:
            return 0
        if self.clock > period * 2:
            return 1
        if self.clock > period:
            return 2
        if self.overtime_count == 0:
            return 3
        return min(3 + self.overtime_count, ENGINE_CONFIG["period_slots"] - 1)

    def add_points(self, points: int, side: str = ""):
        """Credit points to the score and the current period bucket."""
        side = side or self.possession
        if side == "home":
            self.home_score += points
        else:
            self.away_score += points
        self.period_scores[side][self.period_index()] += points

    # ── Display ──

    def clock_label(self) -> str:
        if self.overtime_active or (self.finished and self.overtime_count > 0):
            half = "TOP" if self.overtime_phase == OvertimePhase.TOP else "BOT"
            return f"{half} OT{self.overtime_count}"
        if self.clock <= 0:
            return "0:00 P4"
        period = ENGINE_CONFIG["period_seconds"]
        regulation = ENGINE_CONFIG["regulation_seconds"]
        number = (regulation - self.clock) // period + 1
        left = self.clock - period * (4 - number)
        return f"{left // 60}:{left % 60:02d} P{number}"
