"""
Engine configuration for the college hockey match simulator.

Tunables live in ENGINE_CONFIG so that batch tools and tests can adjust
them before constructing a HockeyEngine.  Strategy catalogs follow the
same shape as the play-style tables: label, description and the four
integer biases the play formulas read.
"""

from typing import Dict


# ═══════════════════════════════════════════════════════════════
# ENGINE CONFIGURATION
# ═══════════════════════════════════════════════════════════════

ENGINE_CONFIG = {
    # Regulation length in simulated seconds (four 15-minute periods)
    "regulation_seconds": 3600,
    "period_seconds": 900,
    # Distance needed to reset the down counter
    "first_down_distance": 10,
    # Zone position every drive starts from at opening puck drop
    "opening_zone": 20,
    # Zone position for both halves of each overtime frame
    "overtime_zone": 75,
    # Added to the ice-advantage term when the home side has the puck
    "home_ice_bonus": 1,
    # Composite IQ gap is divided by this, then clamped to +/- max
    "ice_advantage_divisor": 5,
    "ice_advantage_max": 2,
    # Safety guards: a match exceeding these raises SimulationBoundError
    "max_plays": 5000,
    "max_overtime_frames": 100,
    # Period score buckets: 4 regulation periods, OT frames, last = overflow
    "period_slots": 10,
    # Starters credited with a game played in settlement
    "starters": {
        "shooter": 4,
        "skater": 4,
        "defender": 6,
        "goalie": 1,
    },
}

# Points per scoring event
GOAL_POINTS = 6
FOLLOW_UP_POINTS = 1
TWO_POINT_FOLLOW_UP = 2

# Minimum roster depth per role for a side to take the ice
ROSTER_MINIMUMS = {
    "shooter": 1,
    "skater": 2,
    "defender": 3,
    "goalie": 1,
}


# ═══════════════════════════════════════════════════════════════
# STRATEGIES
# pass_yards (PYB), pass_aggression (PAB), run_yards (RYB),
# run_aggression (RAB).  "Pass" reads as shot play, "run" as skate play.
# ═══════════════════════════════════════════════════════════════

OFFENSE_STRATEGIES: Dict[str, Dict] = {
    "no_preference": {
        "label": "No Preference",
        "description": "Balanced attack, reads the defense and takes what it gives.",
        "pass_yards": 0, "pass_aggression": 0, "run_yards": 0, "run_aggression": 0,
    },
    "crash_the_net": {
        "label": "Crash the Net",
        "description": "Skate the puck in hard. More skate gain, more lost pucks.",
        "pass_yards": -1, "pass_aggression": 0, "run_yards": 2, "run_aggression": 1,
    },
    "cycle_game": {
        "label": "Cycle Game",
        "description": "Short, safe puck movement along the boards.",
        "pass_yards": -1, "pass_aggression": -1, "run_yards": 1, "run_aggression": 0,
    },
    "shooting_gallery": {
        "label": "Shooting Gallery",
        "description": "Fire from everywhere. Bigger shot gains, more takeaways.",
        "pass_yards": 2, "pass_aggression": 1, "run_yards": -1, "run_aggression": 0,
    },
}

DEFENSE_STRATEGIES: Dict[str, Dict] = {
    "no_preference": {
        "label": "No Preference",
        "description": "Straight-up zone coverage.",
        "pass_yards": 0, "pass_aggression": 0, "run_yards": 0, "run_aggression": 0,
    },
    "neutral_zone_trap": {
        "label": "Neutral Zone Trap",
        "description": "Clog the middle and take away skating lanes.",
        "pass_yards": 0, "pass_aggression": -1, "run_yards": 2, "run_aggression": 0,
    },
    "aggressive_forecheck": {
        "label": "Aggressive Forecheck",
        "description": "Pressure the puck carrier, gamble for takeaways.",
        "pass_yards": -1, "pass_aggression": 1, "run_yards": 0, "run_aggression": 1,
    },
    "collapse_the_slot": {
        "label": "Collapse the Slot",
        "description": "Pack the slot and force long, low-percentage shots.",
        "pass_yards": 2, "pass_aggression": 0, "run_yards": -1, "run_aggression": 0,
    },
}
