"""
College hockey match engine.

A match is a possession/down drive model laid over a 0-100 zone: the side
with the puck gets four downs to gain ten, a zone position of 100 is a goal,
and a tied regulation goes to sudden-death frames where each side gets one
possession from the 75 zone.  Every play draws from one injectable
random.Random, so a seed fully determines a match.
"""

import logging
import random
from typing import Dict, Optional

from .config import ENGINE_CONFIG, GOAL_POINTS, FOLLOW_UP_POINTS, TWO_POINT_FOLLOW_UP
from .event_log import EventLog
from .resolver import PlayChoice, choose_play
from .result import GameResult
from .roster import Team
from .settlement import LeagueContext, is_rivalry, settle_game
from .state import MatchState, OvertimePhase
from .stats import StatRecorder, defender_key, skater_key

_log = logging.getLogger("rink.engine")


class SimulationBoundError(RuntimeError):
    """A match ran past the play or overtime-frame guard."""


def normalize(rating: int) -> int:
    return (100 + rating) // 2


class HockeyEngine:
    """Simulates one match between two Team objects.

    The teams are borrowed, not copied: season counters on the teams and
    their players are updated as the match is played and settled.  Callers
    running matches in parallel must hand each engine its own Team objects.
    """

    def __init__(self, home_team: Team, away_team: Team, seed: Optional[int] = None,
                 rng: Optional[random.Random] = None,
                 neutral_site: bool = False,
                 game_name: str = "",
                 context: Optional[LeagueContext] = None):
        home_team.validate()
        away_team.validate()
        self.home_team = home_team
        self.away_team = away_team
        self.seed = seed
        self.rng = rng or random.Random(seed)
        self.neutral_site = neutral_site
        self.context = context if context is not None else LeagueContext()

        if game_name == "In Conf" and is_rivalry(home_team, away_team):
            game_name = "Rivalry Game"
        self.game_name = game_name

        self.state = MatchState(
            clock=ENGINE_CONFIG["regulation_seconds"],
            zone_position=ENGINE_CONFIG["opening_zone"],
            possession="home",
        )
        self.state.reset_downs()
        self.stats = StatRecorder(self.state)
        self.log = EventLog(home_team, away_team)
        self.goal_info = ""

    # ── Helpers ──

    def _teams(self):
        """(offense, defense) for the side in possession."""
        if self.state.possession == "home":
            return self.home_team, self.away_team
        return self.away_team, self.home_team

    def ice_advantage(self) -> int:
        offense, defense = self._teams()
        cap = ENGINE_CONFIG["ice_advantage_max"]
        diff = int((offense.composite_iq - defense.composite_iq) / ENGINE_CONFIG["ice_advantage_divisor"])
        diff = max(-cap, min(cap, diff))
        if self.state.possession == "home" and not self.neutral_site:
            diff += ENGINE_CONFIG["home_ice_bonus"]
        return diff

    def _change_possession(self):
        """Turnover-class exit: mirror the zone in regulation, next half-frame in overtime."""
        if self.state.overtime_active:
            self.reset_for_overtime()
        else:
            self.state.turn_over()

    # ── Game loop ──

    def simulate_game(self) -> GameResult:
        state = self.state
        _log.debug("puck drop: %s @ %s (seed=%s)",
                   self.away_team.abbreviation, self.home_team.abbreviation, self.seed)

        while state.clock > 0:
            self.simulate_play()

        if not state.tied:
            self.log.add(state, "Time has expired! The game is over.")
            state.overtime_phase = OvertimePhase.FINISHED
        else:
            self.log.add(state, "OVERTIME!\nTie game at 0:00, overtime begins!")
            state.start_overtime()
            _log.debug("overtime: %s leads off", state.overtime_leadoff)
            while state.overtime_active:
                self.simulate_play()

        headlines = settle_game(self.home_team, self.away_team, state, self.context)
        _log.debug("final: %s %d - %d %s (%d OT, %d plays)",
                   self.home_team.abbreviation, state.home_score, state.away_score,
                   self.away_team.abbreviation, state.overtime_count, state.play_count)
        return self._build_result(headlines)

    def simulate_play(self):
        state = self.state
        state.play_count += 1
        if state.play_count > ENGINE_CONFIG["max_plays"]:
            raise SimulationBoundError(
                f"match exceeded {ENGINE_CONFIG['max_plays']} plays"
            )

        offense, defense = self._teams()
        choice = choose_play(state, offense, defense, self.rng)
        if choice == PlayChoice.TURNOVER_ON_DOWNS:
            self.turnover_on_downs(offense, defense)
        elif choice == PlayChoice.SHOT:
            self.shot_play(offense, defense)
        else:
            self.skate_play(offense, defense)
        return choice

    # ── Play handlers ──

    def turnover_on_downs(self, offense: Team, defense: Team):
        if not self.state.overtime_active:
            self.log.add(self.state, f"TURNOVER ON POSSESSION!\n{offense.abbreviation} failed to "
                                     f"keep possession. {defense.abbreviation} takes over!")
            self.state.turn_over()
        else:
            self.log.add(self.state, f"TURNOVER ON POSSESSION in OT!\n{offense.abbreviation} "
                                     f"failed to keep possession in OT frame.")
            self.reset_for_overtime()

    def shot_play(self, offense: Team, defense: Team):
        state, rng = self.state, self.rng
        side = state.possession
        off_strat, def_strat = offense.offense_strategy, defense.defense_strategy
        shooter = offense.shooter
        cover, safety = defense.defenders[0], defense.defenders[1]
        gain = 0
        got_goal = False
        lost_puck = False

        # Shot target: one of the first three defenders, by overall x U
        prefs = [d.overall * rng.random() for d in offense.defenders[:3]]
        if prefs[0] > prefs[1] and prefs[0] > prefs[2]:
            index = 0
        elif prefs[1] > prefs[0] and prefs[1] > prefs[2]:
            index = 1
        else:
            index = 2
        target = offense.defenders[index]
        target_key = defender_key(index)

        adv = self.ice_advantage()
        pressure = defense.front_check * 2 - offense.line_block - adv

        takeaway_chance = (
            int((pressure + safety.overall - (shooter.shot_accuracy + shooter.hockey_iq + 100) // 3) / 18)
            + off_strat.pass_aggression + def_strat.pass_aggression
        )
        if takeaway_chance < 0.015:
            takeaway_chance = 0.015
        if 100 * rng.random() < takeaway_chance:
            self.takeaway(offense, defense)
            return

        success = (
            int((adv + normalize(shooter.shot_accuracy) + normalize(target.awareness)
                 - normalize(cover.def_awareness)) / 2)
            + 18.25 - pressure / 16.8
            - off_strat.pass_aggression - def_strat.pass_aggression
        )
        if not 100 * rng.random() < success:
            self.stats.shot_attempt(side, offense, defense, target, target_key, gain)
            state.down += 1
            state.run_clock(15 * rng.random())
            return

        if 100 * rng.random() < (100 - target.awareness) // 3:
            state.down += 1
            self.stats.missed_shot(side, target, target_key)
            self.stats.shot_attempt(side, offense, defense, target, target_key, gain)
            state.run_clock(15 * rng.random())
            return

        gain = int(
            (normalize(shooter.shot_power) + normalize(target.awareness)
             - normalize(cover.def_awareness)) * rng.random() / 3.7
            + int(off_strat.pass_yards / 2) - def_strat.pass_yards
        )
        breakaway = (
            (normalize(target.skill) * 3 - cover.def_skill - safety.overall) * rng.random()
            + off_strat.pass_yards - def_strat.pass_aggression
        )
        if breakaway > 92 or rng.random() > 0.95:
            gain = int(gain + 3 + target.speed * rng.random() / 3)
        if breakaway > 75 and rng.random() < 0.1 + (off_strat.pass_aggression - def_strat.pass_aggression) / 200:
            gain += 100

        zone = state.zone_position + gain
        if zone >= 100:
            gain -= zone - 100
            state.set_zone(100)
            state.add_points(GOAL_POINTS)
            self.stats.shot_goal(side, offense, defense, target, target_key)
            self.goal_info = (f"{offense.abbreviation} C {shooter.name} shot a {gain} foot "
                              f"GOAL to {target.name}!")
            got_goal = True
        else:
            state.set_zone(zone)
            lost_chance = (safety.def_skill + cover.def_skill) // 2
            if 100 * rng.random() < lost_chance / 50:
                lost_puck = True

        if not got_goal and not lost_puck:
            state.advance_downs(gain)
        self.stats.shot_completion(side, offense, target, target_key, gain)
        self.stats.shot_attempt(side, offense, defense, target, target_key, gain)

        if lost_puck:
            self.log.add(state, f"LOST PUCK!\n{offense.abbreviation} D {target.name} "
                                f"lost the puck after the shot!")
            self.stats.shot_lost_puck(side, target, target_key)
            if not state.overtime_active:
                state.turn_over()
                state.run_clock(15 * rng.random())
            else:
                self.reset_for_overtime()
            return

        if got_goal:
            state.run_clock(15 * rng.random())
            self.scoring_follow_up(offense, defense)
            self._after_goal(offense)
            return

        state.run_clock(15 + 15 * rng.random())

    def skate_play(self, offense: Team, defense: Team):
        state, rng = self.state, self.rng
        side = state.possession
        off_strat, def_strat = offense.offense_strategy, defense.defense_strategy
        got_goal = False

        first = offense.skaters[0].overall ** 1.5 * rng.random()
        second = offense.skaters[1].overall ** 1.5 * rng.random()
        index = 0 if first > second else 1
        skater = offense.skaters[index]
        key = skater_key(index)

        block_adv = offense.line_rush - defense.front_rush
        gain = int((skater.speed + block_adv + self.ice_advantage()) * rng.random() / 10
                   + off_strat.run_yards / 2 - def_strat.run_yards / 2)
        if gain < 2:
            gain = int(gain + skater.skill // 20 - 3 - def_strat.run_yards / 2)
        elif rng.random() < 0.28 + (off_strat.run_aggression - def_strat.run_yards / 2) / 50:
            gain = int(gain + skater.skill // 5 * rng.random())

        zone = state.zone_position + gain
        if zone >= 100:
            state.add_points(GOAL_POINTS)
            gain -= zone - 100
            state.set_zone(100)
            self.stats.skate_goal(side, skater, key)
            self.goal_info = f"{offense.abbreviation} LW {skater.name} skated in {gain} for a GOAL!"
            got_goal = True
        else:
            state.set_zone(zone)
            state.advance_downs(gain)

        self.stats.skate_attempt(side, offense, skater, key, gain)

        if got_goal:
            state.run_clock(5 + 15 * rng.random())
            self.scoring_follow_up(offense, defense)
            self._after_goal(offense)
            return

        state.run_clock(25 + 15 * rng.random())
        lost_chance = (int((defense.defenders[1].def_skill + defense.front_rush - self.ice_advantage()) / 2)
                       + off_strat.run_aggression)
        if 100 * rng.random() < lost_chance / 50:
            self.stats.skate_lost_puck(side, skater, key)
            self.log.add(state, f"LOST PUCK!\n{offense.abbreviation} LW {skater.name} lost the puck!")
            self._change_possession()

    def takeaway(self, offense: Team, defense: Team):
        state = self.state
        self.stats.takeaway(state.possession, offense)
        self.log.add(state, f"TAKEAWAY!\n{offense.abbreviation} C {offense.shooter.name} "
                            f"lost possession to the goalie!")
        state.run_clock(15 * self.rng.random())
        self._change_possession()

    def _after_goal(self, offense: Team):
        if self.state.overtime_active:
            self.reset_for_overtime()
        else:
            self.faceoff(offense)

    def scoring_follow_up(self, offense: Team, defense: Team):
        """Decide and resolve the extra attempt after a goal."""
        state, rng = self.state, self.rng
        side = state.possession
        abbr = offense.abbreviation
        margin = state.margin(side)

        if (state.overtime_phase == OvertimePhase.BOTTOM
                and state.margin(state.frame_bottom_side()) > 0):
            self.log.add(state, f"{self.goal_info}\n{abbr} wins on a walk-off goal!")
            return

        if not state.overtime_active and state.clock <= 0 and abs(margin) > 2:
            if abs(margin) < 7 and margin > 0:
                self.log.add(state, f"{self.goal_info}\n{abbr} with a walk-off goal!")
            else:
                self.log.add(state, self.goal_info)
            return

        if state.overtime_count >= 3 or (margin == -2 and state.clock < 300):
            if rng.random() <= 0.50:
                carrier = offense.skaters[0]
                block_adv = offense.line_rush - defense.front_rush
                attempt = int((carrier.speed + block_adv) * rng.random() / 6)
                if attempt > 5:
                    state.add_points(TWO_POINT_FOLLOW_UP)
                    self.log.add(state, f"{self.goal_info} {carrier.name} added the 2-pt follow-up!")
                else:
                    self.log.add(state, f"{self.goal_info} {carrier.name} fails the 2-pt follow-up.")
            else:
                shooter = offense.shooter
                pressure = defense.front_check * 2 - offense.line_block
                completion = (int((normalize(shooter.shot_accuracy) + offense.defenders[0].awareness
                                   - defense.defenders[0].def_awareness) / 2)
                              + 25 - pressure / 20.0)
                if 100 * rng.random() < completion:
                    state.add_points(TWO_POINT_FOLLOW_UP)
                    self.log.add(state, f"{self.goal_info} {shooter.name} completed pass for 2-pt follow-up.")
                else:
                    self.log.add(state, f"{self.goal_info} {shooter.name} fails the 2-pt follow-up.")
            return

        goalie = offense.goalie
        made = rng.random() * 100 < 23 + goalie.goalie_skill and rng.random() > 0.01
        if made:
            state.add_points(FOLLOW_UP_POINTS)
            self.log.add(state, f"{self.goal_info} {goalie.name} earned the 1-pt follow-up.")
        else:
            self.log.add(state, f"{self.goal_info} {goalie.name} missed the 1-pt follow-up.")
        self.stats.follow_up(side, offense, made)

    def faceoff(self, offense: Team):
        """Restart after a goal by `offense`; no-op once regulation time is gone."""
        state, rng = self.state, self.rng
        if state.clock <= 0:
            return

        goalie = offense.goalie
        trailing_by = -state.margin(state.possession)
        if state.clock < 180 and 0 < trailing_by <= 8:
            if goalie.faceoff * rng.random() > 60 or rng.random() < 0.1:
                self.log.add(state, f"{offense.abbreviation} G {goalie.name} wins the faceOff! "
                                    f"{offense.abbreviation} retains possession!")
            else:
                self.log.add(state, f"{offense.abbreviation} G {goalie.name} loses the faceOff, "
                                    f"possession goes other way.")
                state.flip_possession()
            state.set_zone(50)
            state.reset_downs()
            state.run_clock(4 + 5 * rng.random())
        else:
            zone = int(100 - (goalie.goalie_skill + 20 - 40 * rng.random()))
            if zone <= 0:
                zone = 25
            state.set_zone(zone)
            state.reset_downs()
            state.flip_possession()
            state.run_clock(15 * rng.random())

    def reset_for_overtime(self):
        state = self.state
        phase = state.advance_overtime()
        if state.overtime_count > ENGINE_CONFIG["max_overtime_frames"]:
            raise SimulationBoundError(
                f"match exceeded {ENGINE_CONFIG['max_overtime_frames']} overtime frames"
            )
        _log.debug("overtime frame %d: %s (%s has the puck)",
                   state.overtime_count, phase.value, state.possession)

    # ── Result assembly ──

    def _lineup(self, team: Team) -> Dict[str, Dict]:
        slots = {
            "shooter": team.shooters[0],
            "skater1": team.skaters[0],
            "skater2": team.skaters[1],
            "defender1": team.defenders[0],
            "defender2": team.defenders[1],
            "defender3": team.defenders[2],
            "goalie": team.goalies[0],
        }
        return {
            key: {
                "name": p.name,
                "initial_name": p.initial_name,
                "position": p.position,
                "year": p.year_label,
                "overall": p.overall,
                "potential": p.potential,
            }
            for key, p in slots.items()
        }

    def _build_result(self, headlines) -> GameResult:
        state = self.state
        if state.home_score > state.away_score:
            winner = self.home_team.abbreviation
        else:
            winner = self.away_team.abbreviation
        return GameResult(
            home_team=self.home_team.name,
            away_team=self.away_team.name,
            home_abbreviation=self.home_team.abbreviation,
            away_abbreviation=self.away_team.abbreviation,
            home_score=state.home_score,
            away_score=state.away_score,
            period_scores={side: tuple(slots) for side, slots in state.period_scores.items()},
            overtime_count=state.overtime_count,
            player_stats=self.stats.to_dict(),
            team_stats={
                "home": {
                    "shots": state.home_gain,
                    "takeaways": state.home_takeaways,
                    "takeaway_diff": state.home_takeaways - state.away_takeaways,
                },
                "away": {
                    "shots": state.away_gain,
                    "takeaways": state.away_takeaways,
                    "takeaway_diff": state.away_takeaways - state.home_takeaways,
                },
            },
            narrative=tuple(self.log.lines),
            log_header=self.log.header,
            headlines=tuple(headlines),
            winner=winner,
            starting_lineup={
                "home": self._lineup(self.home_team),
                "away": self._lineup(self.away_team),
            },
            game_name=self.game_name,
            seed=self.seed,
            play_count=state.play_count,
        )


def simulate_match(home_team: Team, away_team: Team, seed: Optional[int] = None,
                   **kwargs) -> GameResult:
    """Construct an engine and play the match in one call."""
    return HockeyEngine(home_team, away_team, seed=seed, **kwargs).simulate_game()
