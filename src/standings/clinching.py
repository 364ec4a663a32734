"""
Clinching and Elimination

Determines which teams have mathematically secured a division title, a
first-round bye or a playoff berth, and which teams can no longer reach the
playoffs, given the games each team has left.

All checks compare standing points (2 per win, 1 per tie). A team's current
points are its floor (it loses out); current points plus two per remaining
game are its ceiling (it wins out). Ties in the final comparison are treated
as unresolved, so every clinch reported here holds under any tiebreak outcome.
"""

from collections import Counter
from typing import List
import logging

from .models import ClinchEvent, ClinchType, StandingsTable, TeamStanding


logger = logging.getLogger(__name__)

PLAYOFF_TEAMS_PER_CONFERENCE = 7
WILD_CARDS_PER_CONFERENCE = 3


def remaining_games(standing: TeamStanding, games_per_team: int) -> int:
    return max(0, games_per_team - standing.games_played)


def max_points(standing: TeamStanding, games_per_team: int) -> int:
    return standing.standing_points + 2 * remaining_games(standing, games_per_team)


def has_clinched_division(table: StandingsTable, team_id: str, games_per_team: int = 17) -> bool:
    """No division rival can reach this team's current total."""
    standing = table[team_id]
    floor = standing.standing_points
    return all(
        max_points(table[rival], games_per_team) < floor
        for rival in table.division_team_ids(standing.division)
        if rival != team_id
    )


def has_clinched_bye(table: StandingsTable, team_id: str, games_per_team: int = 17) -> bool:
    """No other conference team can reach this team's current total."""
    standing = table[team_id]
    floor = standing.standing_points
    return all(
        max_points(table[other], games_per_team) < floor
        for other in table.conference_team_ids(standing.conference)
        if other != team_id
    )


def has_clinched_playoff_berth(table: StandingsTable, team_id: str, games_per_team: int = 17) -> bool:
    """
    A team misses the playoffs only if its division winner and three wild
    cards all finish at or above it, so it is safe once at most three other
    conference teams can still reach its current total.
    """
    if has_clinched_division(table, team_id, games_per_team):
        return True

    standing = table[team_id]
    floor = standing.standing_points
    contenders = sum(
        1 for other in table.conference_team_ids(standing.conference)
        if other != team_id and max_points(table[other], games_per_team) >= floor
    )
    return contenders <= WILD_CARDS_PER_CONFERENCE


def is_eliminated(table: StandingsTable, team_id: str, games_per_team: int = 17) -> bool:
    """
    Eliminated when the team cannot win its division even by winning out and
    at least three teams already ahead of its ceiling must be wild cards
    (every division can crown only one winner).
    """
    standing = table[team_id]
    ceiling = max_points(standing, games_per_team)

    division_blocked = any(
        table[rival].standing_points > ceiling
        for rival in table.division_team_ids(standing.division)
        if rival != team_id
    )
    if not division_blocked:
        return False

    ahead_by_division = Counter(
        table[other].division
        for other in table.conference_team_ids(standing.conference)
        if other != team_id and table[other].standing_points > ceiling
    )
    guaranteed_wild_cards = sum(count - 1 for count in ahead_by_division.values())
    return guaranteed_wild_cards >= WILD_CARDS_PER_CONFERENCE


def check_clinching(table: StandingsTable, week: int, games_per_team: int = 17) -> List[ClinchEvent]:
    """
    Evaluate every team's clinch status for a standings snapshot.

    Args:
        table: Standings snapshot
        week: Week the snapshot belongs to
        games_per_team: Regular season length

    Returns:
        ClinchEvent for every settled outcome (not only new ones)
    """
    events: List[ClinchEvent] = []

    for team_id in table.team_ids:
        if has_clinched_bye(table, team_id, games_per_team):
            events.append(ClinchEvent(team_id, ClinchType.BYE, week))
        if has_clinched_division(table, team_id, games_per_team):
            events.append(ClinchEvent(team_id, ClinchType.DIVISION, week))
        if has_clinched_playoff_berth(table, team_id, games_per_team):
            events.append(ClinchEvent(team_id, ClinchType.PLAYOFF_BERTH, week))
        elif is_eliminated(table, team_id, games_per_team):
            events.append(ClinchEvent(team_id, ClinchType.ELIMINATED, week))

    logger.debug(f"Week {week}: {len(events)} clinch/elimination statuses")
    return events
