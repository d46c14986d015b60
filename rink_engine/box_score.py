"""
Box Score Generator for College Hockey
Generates markdown-formatted box scores from a finished match and
pre-game scouting tables from season records.
"""

from typing import Dict, List

from .roster import Team


PERIOD_LABELS = ["P1", "P2", "P3", "P4"]


def _period_columns(game_data: Dict) -> List[str]:
    """Regulation periods always; OT frame columns only when played."""
    ot = game_data.get("overtime_count", 0)
    labels = list(PERIOD_LABELS)
    for n in range(1, ot + 1):
        if 3 + n >= 9:
            labels.append("OT+")
            break
        labels.append(f"OT{n}")
    return labels


class BoxScoreGenerator:
    """Generate box scores in markdown format from GameResult.to_dict()"""

    def __init__(self, game_data: Dict):
        self.game_data = game_data
        self.home = game_data['final_score']['home']
        self.away = game_data['final_score']['away']
        self.home_stats = game_data['stats']['home']
        self.away_stats = game_data['stats']['away']
        self.lineup = game_data.get('starting_lineup', {})
        self.player_stats = game_data['player_stats']

    def generate(self) -> str:
        lines = []

        lines.append("# COLLEGE HOCKEY BOX SCORE")
        lines.append("")
        if self.game_data.get('game_name'):
            lines.append(f"> **{self.game_data['game_name']}**")
            lines.append("")
        lines.append(f"**{self.away['team']}** @ **{self.home['team']}**")
        lines.append("")
        lines.append("---")
        lines.append("")

        lines.extend(self._scoring_summary())
        lines.extend(self._team_statistics())
        for side in ("away", "home"):
            lines.extend(self._player_table(side))

        headlines = self.game_data.get('headlines', [])
        if headlines:
            lines.append("## HEADLINES")
            lines.append("")
            for story in headlines:
                title, _, body = story.partition(">")
                lines.append(f"- **{title}** {body}")
            lines.append("")

        return "\n".join(lines)

    def save_to_file(self, filepath: str):
        """Save box score to markdown file"""
        content = self.generate()
        with open(filepath, 'w') as f:
            f.write(content)

    def _scoring_summary(self) -> List[str]:
        lines = ["## SCORING SUMMARY", ""]
        columns = _period_columns(self.game_data)
        periods = self.game_data['period_scores']

        lines.append("| Team | " + " | ".join(columns) + " | Final |")
        lines.append("|------|" + "----|" * len(columns) + "-------|")
        for side, info in (("away", self.away), ("home", self.home)):
            slots = periods[side]
            cells = [str(slots[i]) for i in range(len(columns))]
            lines.append(f"| {info['team']} | " + " | ".join(cells) + f" | **{info['score']}** |")
        lines.append("")

        if self.home['score'] > self.away['score']:
            winner = f"{self.home['team']} wins by {self.home['score'] - self.away['score']}"
        else:
            winner = f"{self.away['team']} wins by {self.away['score'] - self.home['score']}"
        ot = self.game_data.get('overtime_count', 0)
        if ot:
            winner += f" in {ot}OT"
        lines.append(f"**{winner}**")
        lines.append("")
        lines.append("---")
        lines.append("")
        return lines

    def _team_statistics(self) -> List[str]:
        lines = ["## TEAM STATISTICS", ""]
        lines.append(f"| Statistic | {self.away['team']} | {self.home['team']} |")
        lines.append(f"|-----------|" + "-" * (len(self.away['team']) + 2) + "|"
                     + "-" * (len(self.home['team']) + 2) + "|")
        lines.append(f"| Goals | {self.away['score']} | {self.home['score']} |")
        lines.append(f"| Shots | {self.away_stats['shots']} | {self.home_stats['shots']} |")
        lines.append(f"| Takeaways | {self.away_stats['takeaways']} | {self.home_stats['takeaways']} |")
        lines.append("")
        return lines

    def _player_table(self, side: str) -> List[str]:
        team = self.away if side == "away" else self.home
        lineup = self.lineup.get(side, {})
        blocks = self.player_stats[side]

        lines = [f"## {team['team'].upper()} STARTERS", ""]
        lines.append("| Slot | Player | Yr Ovr/Pot | Att | Comp | Gain | G | TKW | Miss | LP |")
        lines.append("|------|--------|------------|-----|------|------|---|-----|------|----|")
        for key in ("shooter", "skater1", "skater2", "defender1", "defender2", "defender3"):
            s = blocks[key]
            p = lineup.get(key, {})
            lines.append(
                f"| {p.get('position', key)} | {p.get('initial_name', '-')} "
                f"| {p.get('year', '')} {p.get('overall', '')}/{p.get('potential', '')} "
                f"| {s['attempts']} | {s['completions']} | {s['gain']} | {s['goals']} "
                f"| {s['takeaways']} | {s['missed_shots']} | {s['lost_pucks']} |"
            )
        lines.append("")

        g = blocks["goalie"]
        p = lineup.get("goalie", {})
        lines.append("| Goalie | Saves/Shots | Follow-ups |")
        lines.append("|--------|-------------|------------|")
        lines.append(
            f"| {p.get('initial_name', '-')} | {g['saves']}/{g['shots_faced']} "
            f"| {g['follow_up_makes']}/{g['follow_up_attempts']} |"
        )
        lines.append("")
        return lines


def scouting_report(home: Team, away: Team) -> str:
    """Pre-game comparison from season records, per-game averages."""
    def column(t: Team) -> List[str]:
        g = t.num_games()
        return [
            f"#{t.poll_rank} {t.abbreviation}",
            f"{t.wins}-{t.losses}",
            str(t.goals_scored // g),
            str(t.goals_allowed // g),
            str(t.shots // g),
            str(t.shots_against // g),
            str(t.offense_talent),
            str(t.defense_talent),
        ]

    labels = ["Ranking", "Record", "GF/G", "GA/G", "Shots/G", "Shots Against/G",
              "Off Talent", "Def Talent"]
    a, h = column(away), column(home)
    lines = ["## SCOUTING REPORT", ""]
    lines.append(f"| | {away.name} | {home.name} |")
    lines.append("|---|---|---|")
    for label, av, hv in zip(labels, a, h):
        lines.append(f"| {label} | {av} | {hv} |")
    lines.append("")
    lines.append(f"{away.abbreviation} plays {away.offense_strategy.label} / {away.defense_strategy.label}; "
                 f"{home.abbreviation} plays {home.offense_strategy.label} / {home.defense_strategy.label}.")
    return "\n".join(lines)
