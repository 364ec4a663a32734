"""
Statistics

Season totals and leaderboards folded from game results.
"""

from .models import PlayerSeasonStats, TeamSeasonStats, LeaderEntry
from .aggregations import accumulate_game_stats, aggregate_season_stats, aggregate_team_stats
from .leaderboards import StatCategory, QUALIFIERS, get_season_leaders, get_all_leaders
from .calculations import calculate_passer_rating

__all__ = [
    'PlayerSeasonStats',
    'TeamSeasonStats',
    'LeaderEntry',
    'accumulate_game_stats',
    'aggregate_season_stats',
    'aggregate_team_stats',
    'StatCategory',
    'QUALIFIERS',
    'get_season_leaders',
    'get_all_leaders',
    'calculate_passer_rating',
]
