"""
Training System Constants

XP amounts, practice modifiers and age curves used by
DefaultPlayerDevelopment and the integration bridge.
"""

from typing import Dict, Tuple

# ============================================================
# XP EARNING
# ============================================================

GAME_BASE_XP = 50
GAME_WIN_BONUS = 25

# (minimum grade, bonus), best first
PERFORMANCE_XP_BONUSES: Tuple[Tuple[int, int], ...] = (
    (90, 100),  # Elite
    (85, 75),   # Excellent
    (80, 50),   # Very good
    (75, 35),   # Good
    (70, 20),   # Average
    (65, 10),   # Below average
)

PRACTICE_BASE_XP: Dict[str, int] = {
    'passing': 50,
    'running': 50,
    'pass_rush': 50,
    'coverage': 50,
    'red_zone_offense': 45,
    'red_zone_defense': 45,
    'special_teams': 50,
    'conditioning': 30,
    'film_study': 40,
    'recovery': 20,
}

PRACTICE_INTENSITY_MODIFIERS: Dict[str, float] = {
    'high': 1.5,
    'normal': 1.0,
    'light': 0.7,
    'rest': 0.0,
}

BYE_WEEK_XP_MULTIPLIER = 1.5

AWARD_XP_BONUSES: Dict[str, int] = {
    'pro_bowl': 500,
    'all_pro': 750,
    'weekly_award': 200,
    'mvp': 1000,
    'championship': 500,
    'playoff_game': 100,
}

# Practice focus -> positions that benefit (None means every position)
FOCUS_POSITIONS: Dict[str, Tuple[str, ...]] = {
    'passing': ('QB', 'WR', 'TE'),
    'running': ('RB', 'LT', 'LG', 'C', 'RG', 'RT'),
    'pass_rush': ('DE', 'DT', 'OLB'),
    'coverage': ('CB', 'FS', 'SS', 'MLB', 'OLB'),
    'red_zone_offense': ('QB', 'WR', 'TE', 'RB'),
    'red_zone_defense': ('DE', 'DT', 'MLB', 'OLB', 'CB', 'FS', 'SS'),
    'special_teams': ('K', 'P'),
}

UNIVERSAL_FOCUSES = ('conditioning', 'film_study', 'recovery')

# ============================================================
# TRAIT MODIFIERS
# ============================================================

# Applied to every XP source
TRAIT_XP_MODIFIERS: Dict[str, float] = {
    'Quick Learner': 0.15,
    'Focused': 0.05,
    'Slow Learner': -0.15,
    'Unfocused': -0.10,
}

# Applied to practice and bye week XP only
TRAIT_PRACTICE_MODIFIERS: Dict[str, float] = {
    'High Motor': 0.10,
    'Lazy': -0.20,
}

# ============================================================
# AGE CURVES
# ============================================================

# (min age, max age, phase, physical, technical, mental)
AGE_CURVES: Tuple[Tuple[int, int, str, int, int, int], ...] = (
    (0, 22, 'growth', 3, 2, 1),
    (23, 24, 'developing', 2, 2, 2),
    (25, 27, 'prime', 1, 1, 2),
    (28, 29, 'maintenance', 0, 1, 1),
    (30, 32, 'early_decline', -1, 0, 1),
    (33, 35, 'declining', -2, -1, 0),
    (36, 99, 'steep_decline', -3, -2, -1),
)

MIN_RATING = 40
MAX_RATING = 99
