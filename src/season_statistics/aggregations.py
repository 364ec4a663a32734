"""
Season Statistics Aggregation

Pure folds from GameResult box scores into season totals. Every operation
is a commutative integer sum (or a maximum for "long" plays), so the same
results produce identical totals in any order, and re-running an aggregation
over the same list always yields the same output.

Usage Example:
    stats = aggregate_season_stats(completed_games)
    # or incrementally, one game at a time
    stats = accumulate_game_stats(stats, result)
"""
from dataclasses import replace
from typing import Dict, Iterable, Mapping
import logging

from shared.game_result import COUNTING_FIELDS, MAXIMUM_FIELDS, GameResult, PlayerGameStats
from .models import PlayerSeasonStats, TeamSeasonStats


logger = logging.getLogger(__name__)


def accumulate_game_stats(
    stats: Mapping[str, PlayerSeasonStats],
    result: GameResult
) -> Dict[str, PlayerSeasonStats]:
    """
    Add one game's box score to season totals.

    Args:
        stats: Current totals keyed by player id (not modified)
        result: Completed game

    Returns:
        New dict of totals, keyed and ordered by player id
    """
    updated = dict(stats)
    for line in result.player_stats:
        if not line.participated:
            continue
        current = updated.get(line.player_id) or PlayerSeasonStats(
            player_id=line.player_id,
            player_name=line.player_name,
            team_id=line.team_id,
            position=line.position,
        )
        updated[line.player_id] = _add_line(current, line, result)
    return dict(sorted(updated.items()))


def _add_line(current: PlayerSeasonStats, line: PlayerGameStats, result: GameResult) -> PlayerSeasonStats:
    changes = {name: getattr(current, name) + getattr(line, name) for name in COUNTING_FIELDS}
    changes.update({name: max(getattr(current, name), getattr(line, name)) for name in MAXIMUM_FIELDS})
    changes['games_played'] = current.games_played + 1
    changes['snaps'] = current.snaps + line.snaps

    # Latest appearance decides identity
    if (result.week, result.game_id) >= (current.last_week, current.last_game_id):
        changes.update(
            player_name=line.player_name,
            team_id=line.team_id,
            position=line.position,
            last_week=result.week,
            last_game_id=result.game_id,
        )
    return replace(current, **changes)


def aggregate_season_stats(results: Iterable[GameResult]) -> Dict[str, PlayerSeasonStats]:
    """
    Rebuild season totals from scratch.

    Duplicate game ids are counted once.

    Args:
        results: Completed games in any order

    Returns:
        Totals keyed and ordered by player id
    """
    stats: Dict[str, PlayerSeasonStats] = {}
    seen = set()
    for result in results:
        if result.game_id in seen:
            logger.warning(f"Duplicate game {result.game_id} skipped during aggregation")
            continue
        seen.add(result.game_id)
        stats = accumulate_game_stats(stats, result)
    return stats


def aggregate_team_stats(results: Iterable[GameResult]) -> Dict[str, TeamSeasonStats]:
    """
    Team totals from scores and box score lines.

    Returns:
        TeamSeasonStats keyed and ordered by team id
    """
    teams: Dict[str, TeamSeasonStats] = {}
    seen = set()

    for result in results:
        if result.game_id in seen:
            continue
        seen.add(result.game_id)

        for team_id in result.team_ids:
            current = teams.get(team_id) or TeamSeasonStats(team_id=team_id)
            points_for = result.score_for(team_id)
            points_against = result.score_for(result.opponent_of(team_id))
            lines = result.stats_for_team(team_id)

            teams[team_id] = replace(
                current,
                games_played=current.games_played + 1,
                wins=current.wins + (points_for > points_against),
                losses=current.losses + (points_for < points_against),
                ties=current.ties + (points_for == points_against),
                points_for=current.points_for + points_for,
                points_against=current.points_against + points_against,
                passing_yards=current.passing_yards + sum(line.passing_yards for line in lines),
                rushing_yards=current.rushing_yards + sum(line.rushing_yards for line in lines),
                passing_touchdowns=current.passing_touchdowns + sum(line.passing_touchdowns for line in lines),
                rushing_touchdowns=current.rushing_touchdowns + sum(line.rushing_touchdowns for line in lines),
                turnovers=current.turnovers + sum(line.passing_interceptions + line.fumbles_lost for line in lines),
                takeaways=current.takeaways + sum(line.interceptions + line.fumble_recoveries for line in lines),
                sacks=current.sacks + sum(line.sacks for line in lines),
                sacks_allowed=current.sacks_allowed + sum(line.times_sacked for line in lines),
            )

    return dict(sorted(teams.items()))
