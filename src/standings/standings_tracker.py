"""
Standings Tracker

Pure functions that build and update league standings from game results.
Nothing here mutates its input: each update returns a new StandingsTable,
so callers can keep every weekly snapshot.

Usage Example:
    table = create_initial_standings(teams, season=2025)
    for result in week_results:
        table = update_standings_with_game(table, result)
"""

from dataclasses import replace
from typing import Dict, Iterable, Sequence
import logging

from shared.game_result import GameResult
from shared.team import Team
from .models import HeadToHeadRecord, StandingsTable, TeamStanding


logger = logging.getLogger(__name__)

LAST_GAMES_TRACKED = 5


def create_initial_standings(teams: Sequence[Team], season: int) -> StandingsTable:
    """
    Build zeroed standings for every team.

    Args:
        teams: League teams
        season: Season year

    Returns:
        StandingsTable with 0-0 records
    """
    standings = {
        team.team_id: TeamStanding(
            team_id=team.team_id,
            conference=team.conference,
            division=team.division,
        )
        for team in teams
    }
    return StandingsTable(season=season, standings=standings)


def update_standings_with_game(table: StandingsTable, result: GameResult) -> StandingsTable:
    """
    Apply one game result to both participants.

    Playoff games, games already applied and games involving unknown teams
    leave the table unchanged.

    Args:
        table: Current standings snapshot
        result: Completed game

    Returns:
        New StandingsTable
    """
    if result.is_playoff:
        return table

    if result.game_id in table.applied_game_ids:
        logger.warning(f"Game {result.game_id} already applied to standings, ignoring")
        return table

    home = table.get(result.home_team_id)
    away = table.get(result.away_team_id)
    if home is None or away is None:
        logger.warning(
            f"Game {result.game_id} references unknown team "
            f"({result.home_team_id} vs {result.away_team_id}), ignoring"
        )
        return table

    same_division = home.division == away.division
    same_conference = home.conference == away.conference

    if result.is_tie:
        home_outcome, away_outcome = "T", "T"
    elif result.home_score > result.away_score:
        home_outcome, away_outcome = "W", "L"
    else:
        home_outcome, away_outcome = "L", "W"

    standings = dict(table.standings)
    standings[home.team_id] = _apply_outcome(
        home, away.team_id, home_outcome, result.home_score, result.away_score,
        same_division, same_conference
    )
    standings[away.team_id] = _apply_outcome(
        away, home.team_id, away_outcome, result.away_score, result.home_score,
        same_division, same_conference
    )

    return StandingsTable(
        season=table.season,
        standings=standings,
        applied_game_ids=table.applied_game_ids | {result.game_id},
    )


def replay_standings(teams: Sequence[Team], results: Iterable[GameResult], season: int) -> StandingsTable:
    """Rebuild standings from scratch by folding every result in order."""
    table = create_initial_standings(teams, season)
    for result in results:
        table = update_standings_with_game(table, result)
    return table


def _apply_outcome(
    standing: TeamStanding,
    opponent_id: str,
    outcome: str,
    points_for: int,
    points_against: int,
    same_division: bool,
    same_conference: bool
) -> TeamStanding:
    """Return a copy of ``standing`` with one game applied."""
    win, loss, tie = outcome == "W", outcome == "L", outcome == "T"

    if win:
        streak = standing.streak + 1 if standing.streak > 0 else 1
    elif loss:
        streak = standing.streak - 1 if standing.streak < 0 else -1
    else:
        streak = 0

    h2h = standing.head_to_head_against(opponent_id)
    head_to_head: Dict[str, HeadToHeadRecord] = dict(standing.head_to_head)
    head_to_head[opponent_id] = HeadToHeadRecord(
        wins=h2h.wins + win,
        losses=h2h.losses + loss,
        ties=h2h.ties + tie,
    )

    return replace(
        standing,
        wins=standing.wins + win,
        losses=standing.losses + loss,
        ties=standing.ties + tie,
        division_wins=standing.division_wins + (win and same_division),
        division_losses=standing.division_losses + (loss and same_division),
        division_ties=standing.division_ties + (tie and same_division),
        conference_wins=standing.conference_wins + (win and same_conference),
        conference_losses=standing.conference_losses + (loss and same_conference),
        conference_ties=standing.conference_ties + (tie and same_conference),
        points_for=standing.points_for + points_for,
        points_against=standing.points_against + points_against,
        streak=streak,
        last_five=(standing.last_five + (outcome,))[-LAST_GAMES_TRACKED:],
        head_to_head=head_to_head,
    )