"""
Statistical Leaderboards

Ranks PlayerSeasonStats by a named category.

Ordering: value descending, then fewer games played, then player id, so
equal totals always rank the same way. Rate categories only include players
that reach a minimum volume (attempts, carries, targets, ...).
"""
from enum import Enum
from typing import Dict, List, Mapping, Optional

from .models import LeaderEntry, PlayerSeasonStats


class StatCategory(Enum):
    """Leaderboard categories; value is the PlayerSeasonStats attribute."""
    PASSING_YARDS = "passing_yards"
    PASSING_TOUCHDOWNS = "passing_touchdowns"
    PASSER_RATING = "passer_rating"
    COMPLETION_PERCENTAGE = "completion_percentage"
    RUSHING_YARDS = "rushing_yards"
    RUSHING_TOUCHDOWNS = "rushing_touchdowns"
    YARDS_PER_CARRY = "yards_per_carry"
    RECEPTIONS = "receptions"
    RECEIVING_YARDS = "receiving_yards"
    RECEIVING_TOUCHDOWNS = "receiving_touchdowns"
    CATCH_RATE = "catch_rate"
    TOTAL_TOUCHDOWNS = "total_touchdowns"
    SCRIMMAGE_YARDS = "scrimmage_yards"
    TACKLES = "tackles"
    SACKS = "sacks"
    INTERCEPTIONS = "interceptions"
    PASSES_DEFENDED = "passes_defended"
    FIELD_GOALS_MADE = "field_goals_made"
    FIELD_GOAL_PERCENTAGE = "field_goal_percentage"
    PUNT_AVERAGE = "punt_average"

    @property
    def is_rate(self) -> bool:
        return self in QUALIFIERS


# Rate category -> (volume attribute, season minimum)
QUALIFIERS = {
    StatCategory.PASSER_RATING: ("passing_attempts", 100),
    StatCategory.COMPLETION_PERCENTAGE: ("passing_attempts", 100),
    StatCategory.YARDS_PER_CARRY: ("rushing_attempts", 50),
    StatCategory.CATCH_RATE: ("targets", 30),
    StatCategory.FIELD_GOAL_PERCENTAGE: ("field_goals_attempted", 10),
    StatCategory.PUNT_AVERAGE: ("punts", 20),
}


def get_season_leaders(
    stats: Mapping[str, PlayerSeasonStats],
    category: StatCategory,
    limit: int = 10,
    min_qualifier: Optional[int] = None
) -> List[LeaderEntry]:
    """
    Build one leaderboard.

    Args:
        stats: Season totals keyed by player id
        category: Category to rank by (StatCategory or its string value)
        limit: Maximum number of entries
        min_qualifier: Override the category's minimum volume

    Returns:
        LeaderEntry list, best first. Players without any production in the
        category are left out.
    """
    category = StatCategory(category)
    qualifier_field, minimum = QUALIFIERS.get(category, (None, 0))
    if min_qualifier is not None:
        minimum = min_qualifier

    candidates = []
    for player in stats.values():
        if qualifier_field and getattr(player, qualifier_field) < minimum:
            continue
        value = getattr(player, category.value)
        if value <= 0:
            continue
        candidates.append((value, player))

    candidates.sort(key=lambda item: (-item[0], item[1].games_played, item[1].player_id))

    return [
        LeaderEntry(
            rank=rank,
            player_id=player.player_id,
            player_name=player.player_name,
            team_id=player.team_id,
            position=player.position,
            category=category.value,
            value=value,
            games_played=player.games_played,
            qualifier=getattr(player, qualifier_field) if qualifier_field else None,
        )
        for rank, (value, player) in enumerate(candidates[:limit], start=1)
    ]


def get_all_leaders(stats: Mapping[str, PlayerSeasonStats], limit: int = 10) -> Dict[str, List[LeaderEntry]]:
    """Every category's leaderboard keyed by category value."""
    return {category.value: get_season_leaders(stats, category, limit) for category in StatCategory}
