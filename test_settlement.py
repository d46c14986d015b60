#!/usr/bin/env python3
"""Post-game settlement: records, starters, streaks, rivalry flags and headlines."""

import logging

from rink_engine import LeagueContext, Player, Team, generate_headlines, settle_game
from rink_engine.state import MatchState


def make_team(name, abbr, rank=0):
    def group(role, count):
        return [Player(name=f"{abbr} {role} {i + 1}", role=role) for i in range(count)]

    return Team(
        name=name,
        abbreviation=abbr,
        shooters=group("shooter", 2),
        skaters=group("skater", 3),
        defenders=group("defender", 7),
        goalies=group("goalie", 2),
        poll_rank=rank,
    )


def final_state(home_score, away_score, overtime_count=0, **kwargs):
    return MatchState(clock=0, home_score=home_score, away_score=away_score,
                      overtime_count=overtime_count, **kwargs)


# ═══════════════════════════════════════════════════════════════
# SEASON RECORDS
# ═══════════════════════════════════════════════════════════════

class TestRecords:
    def setup_method(self):
        self.home = make_team("Home U", "HOM")
        self.away = make_team("Away St", "AWY")

    def test_win_and_loss(self):
        settle_game(self.home, self.away, final_state(13, 7))
        assert (self.home.wins, self.home.losses) == (1, 0)
        assert (self.away.wins, self.away.losses) == (0, 1)
        assert self.home.total_wins == 1 and self.away.total_losses == 1
        assert self.home.results == ["W"] and self.away.results == ["L"]
        assert self.home.beaten == ["AWY"]
        assert self.away.beaten == []

    def test_goals_and_shots(self):
        state = final_state(6, 14, home_gain=120, away_gain=210)
        settle_game(self.home, self.away, state)
        assert (self.home.goals_scored, self.home.goals_allowed) == (6, 14)
        assert (self.away.goals_scored, self.away.goals_allowed) == (14, 6)
        assert self.home.shots == 120 and self.away.shots_against == 120
        assert self.away.shots == 210 and self.home.shots_against == 210

    def test_takeaway_diff(self):
        state = final_state(7, 6, home_takeaways=3, away_takeaways=1)
        settle_game(self.home, self.away, state)
        assert self.home.takeaway_diff == 2
        assert self.away.takeaway_diff == -2

    def test_starters_credited(self):
        settle_game(self.home, self.away, final_state(7, 6))
        assert all(p.games_played == 1 and p.game_wins == 1 for p in self.home.shooters)
        assert all(p.games_played == 1 and p.game_wins == 1 for p in self.home.skaters)
        assert [p.games_played for p in self.home.defenders] == [1] * 6 + [0]
        assert [p.games_played for p in self.home.goalies] == [1, 0]
        assert self.away.goalies[0].games_played == 1
        assert self.away.goalies[0].game_wins == 0

    def test_rivalry_flag(self):
        self.away.rival = "HOM"
        settle_game(self.home, self.away, final_state(6, 7))
        assert self.away.won_rivalry_game
        assert not self.home.won_rivalry_game

    def test_no_rivalry_flag_for_strangers(self):
        settle_game(self.home, self.away, final_state(6, 7))
        assert not self.away.won_rivalry_game

    def test_win_streak_recorded_by_copy(self):
        context = LeagueContext(year=2025)
        settle_game(self.home, self.away, final_state(7, 0), context)
        assert self.home.win_streak.wins == 1
        assert context.longest_win_streak.wins == 1
        assert context.longest_win_streak is not self.home.win_streak

        settle_game(self.home, self.away, final_state(7, 0), context)
        assert context.longest_win_streak.wins == 2
        assert self.away.win_streak.wins == 0


# ═══════════════════════════════════════════════════════════════
# HEADLINES
# ═══════════════════════════════════════════════════════════════

class TestHeadlines:
    def setup_method(self):
        self.home = make_team("Home U", "HOM")
        self.away = make_team("Away St", "AWY")

    def test_triple_overtime_thriller(self):
        context = LeagueContext(current_week=8)
        headlines = settle_game(self.home, self.away, final_state(6, 13, overtime_count=3), context)
        assert len(headlines) == 1
        assert headlines[0].startswith("3OT Thriller!>")
        assert "Away St finally emerging victorious 13 to 6" in headlines[0]
        assert context.news[9] == headlines

    def test_thriller_outranks_undefeated(self):
        context = LeagueContext(current_week=8)
        headlines = settle_game(self.home, self.away, final_state(13, 6, overtime_count=4), context)
        assert headlines[0].startswith("4OT Thriller!")

    def test_undefeated_no_more(self):
        context = LeagueContext(current_week=6)
        headlines = settle_game(self.home, self.away, final_state(13, 6), context)
        assert headlines == [
            "Undefeated no more! Away St suffers first loss!>#0 HOM (1-0) hands #0 AWY (0-1) "
            "their first loss of the season, winning 13 to 6."
        ]

    def test_first_loss_too_early_in_season(self):
        context = LeagueContext(current_week=5)
        assert settle_game(self.home, self.away, final_state(13, 6), context) == []
        assert context.news == {}

    def test_road_upset(self):
        self.home.poll_rank, self.away.poll_rank = 5, 30
        headlines = settle_game(self.home, self.away, final_state(6, 7))
        assert headlines[0].startswith("Upset! #30 AWY (1-0) beats #5 HOM (0-1)>")
        assert "on the road" in headlines[0]

    def test_home_upset(self):
        self.home.poll_rank, self.away.poll_rank = 40, 3
        headlines = settle_game(self.home, self.away, final_state(7, 6))
        assert "at home against #3 Away St" in headlines[0]

    def test_unranked_pair_has_no_upset(self):
        assert generate_headlines(self.home, self.away, final_state(6, 7), LeagueContext()) == []

    def test_headline_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger="rink.settlement"):
            settle_game(self.home, self.away, final_state(6, 13, overtime_count=3))
        assert "3OT Thriller!" in caplog.text
