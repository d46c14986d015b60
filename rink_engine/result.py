"""Immutable record of one finished match.

Nested blocks are stored as read-only mappings and tuples; `to_dict()`
builds fresh plain dicts and lists, so editing a payload never reaches
back into the record.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


@dataclass(frozen=True)
class GameResult:
    home_team: str
    away_team: str
    home_abbreviation: str
    away_abbreviation: str
    home_score: int
    away_score: int
    # 10 slots per side: periods 1-4, OT frames, overflow
    period_scores: Mapping[str, Tuple[int, ...]]
    overtime_count: int
    # side -> lineup slot -> StatLine.to_dict()
    player_stats: Mapping[str, Mapping[str, Mapping[str, int]]]
    # side -> {"shots", "takeaways", "takeaway_diff"}
    team_stats: Mapping[str, Mapping[str, int]]
    narrative: Tuple[str, ...]
    log_header: str
    headlines: Tuple[str, ...] = ()
    winner: str = ""
    # side -> lineup slot -> {"name", "position", "year", "overall", "potential"}
    starting_lineup: Mapping[str, Mapping[str, Mapping]] = field(default_factory=dict)
    game_name: str = ""
    seed: Optional[int] = None
    play_count: int = 0

    def __post_init__(self):
        for name in ("period_scores", "player_stats", "team_stats", "starting_lineup",
                     "narrative", "headlines"):
            object.__setattr__(self, name, _freeze(getattr(self, name)))

    @property
    def margin(self) -> int:
        return abs(self.home_score - self.away_score)

    @property
    def went_to_overtime(self) -> bool:
        return self.overtime_count > 0

    def event_log(self) -> str:
        return "\n\n".join((self.log_header,) + self.narrative)

    def to_dict(self) -> Dict:
        return {
            "final_score": {
                "home": {
                    "team": self.home_team,
                    "abbreviation": self.home_abbreviation,
                    "score": self.home_score,
                },
                "away": {
                    "team": self.away_team,
                    "abbreviation": self.away_abbreviation,
                    "score": self.away_score,
                },
            },
            "winner": self.winner,
            "game_name": self.game_name,
            "seed": self.seed,
            "overtime_count": self.overtime_count,
            "play_count": self.play_count,
            "period_scores": _thaw(self.period_scores),
            "stats": _thaw(self.team_stats),
            "player_stats": _thaw(self.player_stats),
            "starting_lineup": _thaw(self.starting_lineup),
            "play_by_play": list(self.narrative),
            "headlines": list(self.headlines),
        }
