"""
Post-game settlement: season records, streaks, rivalry flags and headlines.

The engine hands a finished MatchState here together with an explicit
LeagueContext.  Nothing in this module reaches for league-wide state on its
own; whoever owns the season passes in the week, the year, the news board
and the record streak.
"""

import logging
from copy import copy
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import ENGINE_CONFIG
from .roster import Team, WinStreak
from .state import MatchState

_log = logging.getLogger("rink.settlement")


@dataclass
class LeagueContext:
    current_week: int = 0
    year: int = 0
    news: Dict[int, List[str]] = field(default_factory=dict)
    longest_win_streak: Optional[WinStreak] = None

    def add_news(self, week: int, story: str):
        self.news.setdefault(week, []).append(story)

    def check_longest_win_streak(self, streak: WinStreak):
        if self.longest_win_streak is None or streak.wins > self.longest_win_streak.wins:
            self.longest_win_streak = copy(streak)


def is_rivalry(home: Team, away: Team) -> bool:
    return home.rival == away.abbreviation or away.rival == home.abbreviation


def _credit_starters(team: Team, won: bool):
    starters = ENGINE_CONFIG["starters"]
    for role, count in starters.items():
        for player in team.roster(role)[:count]:
            player.games_played += 1
            if won:
                player.game_wins += 1


def _record_result(winner: Team, loser: Team, context: LeagueContext):
    winner.wins += 1
    winner.total_wins += 1
    winner.results.append("W")
    winner.beaten.append(loser.abbreviation)
    loser.losses += 1
    loser.total_losses += 1
    loser.results.append("L")

    winner.win_streak.add_win(context.year)
    context.check_longest_win_streak(winner.win_streak)
    loser.win_streak.reset(context.year)


def generate_headlines(home: Team, away: Team, state: MatchState,
                       context: LeagueContext) -> List[str]:
    """At most one headline; the first rule that matches wins.

    Reads season records, so call it after the result has been recorded.
    Headline text uses `title>body` so boards can split on the marker.
    """
    hs, aws = state.home_score, state.away_score
    ot = state.overtime_count
    week = context.current_week

    if ot >= 3:
        if aws > hs:
            winner, loser, ws, ls = away, home, aws, hs
        else:
            winner, loser, ws, ls = home, away, hs, aws
        return [
            f"{ot}OT Thriller!>{winner.str_rep()} and {loser.str_rep()} played an absolutely "
            f"thrilling game that went to {ot} overtimes, with {winner.name} finally "
            f"emerging victorious {ws} to {ls}."
        ]
    if hs > aws and away.losses == 1 and week > 5:
        return [
            f"Undefeated no more! {away.name} suffers first loss!>{home.str_rep()} hands "
            f"{away.str_rep()} their first loss of the season, winning {hs} to {aws}."
        ]
    if aws > hs and home.losses == 1 and week > 5:
        return [
            f"Undefeated no more! {home.name} suffers first loss!>{away.str_rep()} hands "
            f"{home.str_rep()} their first loss of the season, winning {aws} to {hs}."
        ]
    if aws > hs and home.poll_rank < 20 and (away.poll_rank - home.poll_rank) > 20:
        return [
            f"Upset! {away.str_rep()} beats {home.str_rep()}>#{away.poll_rank} {away.name} "
            f"was able to pull off the upset on the road against #{home.poll_rank} "
            f"{home.name}, winning {aws} to {hs}."
        ]
    if hs > aws and away.poll_rank < 20 and (home.poll_rank - away.poll_rank) > 20:
        return [
            f"Upset! {home.str_rep()} beats {away.str_rep()}>#{home.poll_rank} {home.name} "
            f"was able to pull off the upset at home against #{away.poll_rank} "
            f"{away.name}, winning {hs} to {aws}."
        ]
    return []


def settle_game(home: Team, away: Team, state: MatchState,
                context: Optional[LeagueContext] = None) -> List[str]:
    """Write a finished match into both teams' season records.

    Returns the headlines, which are also posted to the context's news board
    for the following week.
    """
    if context is None:
        context = LeagueContext()

    hs, aws = state.home_score, state.away_score
    if hs > aws:
        _record_result(home, away, context)
    else:
        _record_result(away, home, context)

    _credit_starters(home, hs > aws)
    _credit_starters(away, aws > hs)

    home.goals_scored += hs
    away.goals_scored += aws
    home.goals_allowed += aws
    away.goals_allowed += hs

    home.shots += state.home_gain
    away.shots += state.away_gain
    home.shots_against += state.away_gain
    away.shots_against += state.home_gain

    home.takeaway_diff += state.home_takeaways - state.away_takeaways
    away.takeaway_diff += state.away_takeaways - state.home_takeaways

    headlines = generate_headlines(home, away, state, context)
    for story in headlines:
        context.add_news(context.current_week + 1, story)
        _log.info("week %d headline: %s", context.current_week + 1, story.split(">")[0])

    if is_rivalry(home, away):
        if hs > aws:
            home.won_rivalry_game = True
        else:
            away.won_rivalry_game = True

    return headlines
