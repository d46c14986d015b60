"""Play-by-play narrative: one entry per notable event."""

from typing import List

from .roster import Team
from .state import MatchState


class EventLog:

    def __init__(self, home: Team, away: Team):
        self.home = home
        self.away = away
        self.header = self._header()
        self.lines: List[str] = []

    def _header(self) -> str:
        home, away = self.home, self.away
        return (
            f"LOG: {away.str_rep()} @ {home.str_rep()}\n"
            + "-" * 57 + "\n\n"
            f"{away.abbreviation} Off Strategy: {away.offense_strategy.label}\n"
            f"{away.abbreviation} Def Strategy: {away.defense_strategy.label}\n"
            f"{home.abbreviation} Off Strategy: {home.offense_strategy.label}\n"
            f"{home.abbreviation} Def Strategy: {home.defense_strategy.label}"
        )

    def prefix(self, state: MatchState) -> str:
        """Scoreboard line plus down-and-distance, e.g. `STU 2 and 7 at 43 zone.`"""
        home, away = self.home.abbreviation, self.away.abbreviation
        poss = home if state.possession == "home" else away
        need = str(state.distance_to_convert)
        if state.zone_position + state.distance_to_convert >= 100:
            need = "Goal"
        return (
            f"{home} {state.home_score} - {state.away_score} {away}, Time: {state.clock_label()}\n"
            f"\t{poss} {min(state.down, 4)} and {need} at {state.zone_position} zone.\n"
        )

    def add(self, state: MatchState, text: str):
        self.lines.append(self.prefix(state) + text)

    def text(self) -> str:
        return "\n\n".join([self.header] + self.lines)

    def __len__(self):
        return len(self.lines)
