"""
Player Development

The progression math behind XP grants. The season engine only depends on
the PlayerDevelopment protocol; DefaultPlayerDevelopment is the built-in
implementation and can be swapped for any object with the same methods.
"""

from typing import Iterable, Optional, Protocol

from shared.team import RosterPlayer
from .models import AgeProgression, PracticePlan
from .training_constants import (
    AGE_CURVES,
    AWARD_XP_BONUSES,
    BYE_WEEK_XP_MULTIPLIER,
    FOCUS_POSITIONS,
    GAME_BASE_XP,
    GAME_WIN_BONUS,
    MAX_RATING,
    MIN_RATING,
    PERFORMANCE_XP_BONUSES,
    PRACTICE_BASE_XP,
    PRACTICE_INTENSITY_MODIFIERS,
    TRAIT_PRACTICE_MODIFIERS,
    TRAIT_XP_MODIFIERS,
    UNIVERSAL_FOCUSES,
)


class PlayerDevelopment(Protocol):
    """Protocol for pluggable player development calculators."""

    def calculate_game_xp(
        self,
        player: Optional[RosterPlayer],
        won: bool,
        performance_grade: int,
        snap_share: float = 1.0
    ) -> int:
        """XP for one game appearance."""
        ...

    def calculate_practice_xp(self, player: RosterPlayer, plan: PracticePlan) -> int:
        """XP for one week of practice."""
        ...

    def calculate_bye_week_xp(self, player: RosterPlayer, plan: PracticePlan) -> int:
        """XP for practicing through a bye week."""
        ...

    def calculate_award_xp(self, award_type: str) -> int:
        """XP for a season or weekly award."""
        ...

    def calculate_age_progression(self, player: RosterPlayer) -> AgeProgression:
        """Offseason rating change from the player's age."""
        ...


def performance_xp_bonus(grade: int) -> int:
    """Bonus XP for a 0-100 performance grade."""
    for minimum, bonus in PERFORMANCE_XP_BONUSES:
        if grade >= minimum:
            return bonus
    return 0


def trait_modifier(traits: Iterable[str], table) -> float:
    return sum(table.get(trait, 0.0) for trait in traits)


class DefaultPlayerDevelopment:
    """
    Default XP calculator.

    - Game: 50 base, +25 for a win, +10..100 for the performance grade,
      scaled by snap share
    - Practice: focus base XP for players the focus applies to, times
      intensity (high 1.5, normal 1.0, light 0.7, rest 0)
    - Bye week: practice XP x 1.5
    - Traits such as Quick Learner or Lazy adjust the result
    """

    def calculate_game_xp(
        self,
        player: Optional[RosterPlayer],
        won: bool,
        performance_grade: int,
        snap_share: float = 1.0
    ) -> int:
        subtotal = GAME_BASE_XP + (GAME_WIN_BONUS if won else 0) + performance_xp_bonus(performance_grade)
        multiplier = 1.0 + (trait_modifier(player.traits, TRAIT_XP_MODIFIERS) if player else 0.0)
        share = max(0.0, min(1.0, snap_share))
        return max(0, int(round(subtotal * multiplier * share)))

    def calculate_practice_xp(self, player: RosterPlayer, plan: PracticePlan) -> int:
        focus = plan.focus.value
        if focus not in UNIVERSAL_FOCUSES and player.position not in FOCUS_POSITIONS.get(focus, ()):
            return 0

        after_intensity = PRACTICE_BASE_XP[focus] * PRACTICE_INTENSITY_MODIFIERS[plan.intensity.value]
        multiplier = (
            1.0
            + trait_modifier(player.traits, TRAIT_XP_MODIFIERS)
            + trait_modifier(player.traits, TRAIT_PRACTICE_MODIFIERS)
        )
        return max(0, int(round(after_intensity * multiplier)))

    def calculate_bye_week_xp(self, player: RosterPlayer, plan: PracticePlan) -> int:
        return int(round(self.calculate_practice_xp(player, plan) * BYE_WEEK_XP_MULTIPLIER))

    def calculate_award_xp(self, award_type: str) -> int:
        try:
            return AWARD_XP_BONUSES[award_type]
        except KeyError:
            raise ValueError(
                f"Unknown award type '{award_type}', expected one of {sorted(AWARD_XP_BONUSES)}"
            ) from None

    def calculate_age_progression(self, player: RosterPlayer) -> AgeProgression:
        curve = next(
            (c for c in AGE_CURVES if c[0] <= player.age <= c[1]),
            AGE_CURVES[-1]
        )
        _, _, phase, physical, technical, mental = curve
        change = int(round((physical + technical + mental) / 3))
        new_overall = max(MIN_RATING, min(MAX_RATING, player.overall + change))

        return AgeProgression(
            player_id=player.player_id,
            age=player.age,
            phase=phase,
            physical_change=physical,
            technical_change=technical,
            mental_change=mental,
            old_overall=player.overall,
            new_overall=new_overall,
        )
