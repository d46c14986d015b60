#!/usr/bin/env python3
"""Markdown box scores and pre-game scouting tables."""

from rink_engine import BoxScoreGenerator, HockeyEngine, Player, Team, scouting_report
from rink_engine.box_score import _period_columns


def make_team(name, abbr):
    def group(role, count):
        return [Player(name=f"{abbr} {role.title()} {i + 1}", role=role) for i in range(count)]

    return Team(name=name, abbreviation=abbr, shooters=group("shooter", 2),
                skaters=group("skater", 3), defenders=group("defender", 4),
                goalies=group("goalie", 1))


def play(seed=11, **kwargs):
    home = make_team("Northfield", "NTH")
    away = make_team("Lakeshore", "LKS")
    return HockeyEngine(home, away, seed=seed, **kwargs).simulate_game().to_dict()


class TestPeriodColumns:
    def test_regulation_only(self):
        assert _period_columns({"overtime_count": 0}) == ["P1", "P2", "P3", "P4"]

    def test_overtime_frames(self):
        assert _period_columns({"overtime_count": 2}) == ["P1", "P2", "P3", "P4", "OT1", "OT2"]

    def test_long_overtime_collapses(self):
        columns = _period_columns({"overtime_count": 9})
        assert len(columns) == 10
        assert columns[-2:] == ["OT5", "OT+"]


class TestBoxScore:
    def test_contains_teams_and_final(self):
        data = play(game_name="Rivalry Game")
        md = BoxScoreGenerator(data).generate()
        assert "# COLLEGE HOCKEY BOX SCORE" in md
        assert "**Lakeshore** @ **Northfield**" in md
        assert "> **Rivalry Game**" in md
        assert f"| **{data['final_score']['home']['score']}** |" in md
        assert "## NORTHFIELD STARTERS" in md
        assert "## LAKESHORE STARTERS" in md
        assert "wins by" in md

    def test_overtime_column_shown(self):
        data = play()
        data["overtime_count"] = 2
        md = BoxScoreGenerator(data).generate()
        assert "| Team | P1 | P2 | P3 | P4 | OT1 | OT2 | Final |" in md
        assert "in 2OT**" in md

    def test_goalie_line(self):
        data = play()
        goalie = data["player_stats"]["home"]["goalie"]
        md = BoxScoreGenerator(data).generate()
        assert f"{goalie['saves']}/{goalie['shots_faced']}" in md

    def test_headlines_split_on_marker(self):
        data = play()
        data["headlines"] = ["Big Win!>Northfield rolls."]
        md = BoxScoreGenerator(data).generate()
        assert "- **Big Win!** Northfield rolls." in md

    def test_save_to_file(self, tmp_path):
        path = tmp_path / "box.md"
        generator = BoxScoreGenerator(play())
        generator.save_to_file(str(path))
        assert path.read_text() == generator.generate()


class TestScoutingReport:
    def test_first_game_has_no_division_error(self):
        report = scouting_report(make_team("Northfield", "NTH"), make_team("Lakeshore", "LKS"))
        assert "## SCOUTING REPORT" in report
        assert "| Record | 0-0 | 0-0 |" in report
        assert "No Preference" in report

    def test_per_game_averages(self):
        home = make_team("Northfield", "NTH")
        away = make_team("Lakeshore", "LKS")
        home.wins, home.losses = 3, 1
        home.goals_scored = 52
        home.shots = 1000
        report = scouting_report(home, away)
        assert "| GF/G | 0 | 13 |" in report
        assert "| Shots/G | 0 | 250 |" in report
