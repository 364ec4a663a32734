"""
Tiebreakers

Orders teams by win percentage, then resolves teams with identical win
percentage by applying, in order:

1. Head-to-head record among the tied teams
2. Division record
3. Conference record
4. Point differential
5. Coin flip

The coin flip is a SHA-256 digest of the season, week, tied team ids and the
team's own id, so the same standings always produce the same order.
"""

from fractions import Fraction
from typing import Dict, Iterable, List, Sequence, Tuple
import hashlib

from .models import StandingsTable, TeamStanding


TIEBREAK_RULES = (
    "head_to_head",
    "division_record",
    "conference_record",
    "point_differential",
    "coin_flip",
)


def exact_percentage(wins: int, losses: int, ties: int) -> Fraction:
    """Win percentage as an exact fraction (ties count half)."""
    games = wins + losses + ties
    if games == 0:
        return Fraction(0)
    return Fraction(2 * wins + ties, 2 * games)


def coin_flip_value(team_id: str, tied_team_ids: Iterable[str], season: int, week: int) -> str:
    """Deterministic stand-in for a coin flip."""
    key = f"{season}:{week}:{','.join(sorted(tied_team_ids))}:{team_id}"
    return hashlib.sha256(key.encode("utf-8")).hexdigest()


def head_to_head_percentage(standing: TeamStanding, opponents: Iterable[str]) -> Fraction:
    """Combined record against the given opponents; neutral when they never met."""
    wins = losses = ties = 0
    for opponent in opponents:
        if opponent == standing.team_id:
            continue
        record = standing.head_to_head_against(opponent)
        wins += record.wins
        losses += record.losses
        ties += record.ties
    if wins + losses + ties == 0:
        return Fraction(1, 2)
    return exact_percentage(wins, losses, ties)


def _tiebreak_key(standing: TeamStanding, group: Sequence[str], season: int, week: int) -> Tuple:
    return (
        -head_to_head_percentage(standing, group),
        -exact_percentage(standing.division_wins, standing.division_losses, standing.division_ties),
        -exact_percentage(standing.conference_wins, standing.conference_losses, standing.conference_ties),
        -standing.point_differential,
        coin_flip_value(standing.team_id, group, season, week),
    )


def rank_teams_with_notes(
    table: StandingsTable,
    team_ids: Iterable[str],
    week: int = 0
) -> Tuple[List[str], List[Dict[str, object]]]:
    """
    Order teams best-first and describe which rule separated tied teams.

    Args:
        table: Standings snapshot
        team_ids: Teams to order (unknown ids are skipped)
        week: Week used for the coin flip seed

    Returns:
        (ordered team ids, tiebreak notes)
    """
    standings = [table[t] for t in team_ids if t in table]
    by_percentage: Dict[Fraction, List[TeamStanding]] = {}
    for standing in standings:
        pct = exact_percentage(standing.wins, standing.losses, standing.ties)
        by_percentage.setdefault(pct, []).append(standing)

    ordered: List[str] = []
    notes: List[Dict[str, object]] = []

    for pct in sorted(by_percentage, reverse=True):
        group = by_percentage[pct]
        if len(group) == 1:
            ordered.append(group[0].team_id)
            continue

        group_ids = sorted(s.team_id for s in group)
        keyed = sorted(
            ((_tiebreak_key(s, group_ids, table.season, week), s.team_id) for s in group)
        )
        for index, (key, team_id) in enumerate(keyed):
            ordered.append(team_id)
            if index == 0:
                continue
            previous_key, previous_id = keyed[index - 1]
            rule = next(
                name for name, a, b in zip(TIEBREAK_RULES, previous_key, key) if a != b
            )
            notes.append({
                'teams': [previous_id, team_id],
                'rule': rule,
                'win_percentage': float(pct),
            })

    return ordered, notes


def rank_teams(table: StandingsTable, team_ids: Iterable[str], week: int = 0) -> List[str]:
    """Order teams best-first using win percentage and the tiebreak chain."""
    ordered, _ = rank_teams_with_notes(table, team_ids, week)
    return ordered


def break_ties(table: StandingsTable, team_ids: Sequence[str], week: int = 0) -> List[str]:
    """Order a group of teams that share a win percentage."""
    return rank_teams(table, team_ids, week)


def describe_tiebreaks(table: StandingsTable, team_ids: Iterable[str], week: int = 0) -> List[Dict[str, object]]:
    """Which rule separated each adjacent pair of tied teams."""
    _, notes = rank_teams_with_notes(table, team_ids, week)
    return notes


def division_standings(table: StandingsTable, division: str, week: int = 0) -> List[TeamStanding]:
    """Teams of one division, best first."""
    return [table[t] for t in rank_teams(table, table.division_team_ids(division), week)]


def conference_standings(table: StandingsTable, conference: str, week: int = 0) -> List[TeamStanding]:
    """Teams of one conference, best first."""
    return [table[t] for t in rank_teams(table, table.conference_team_ids(conference), week)]


def division_leaders(table: StandingsTable, conference: str, week: int = 0) -> List[str]:
    """Current leader of each division in a conference, ordered best first."""
    leaders = [
        rank_teams(table, table.division_team_ids(division), week)[0]
        for division in table.divisions_in(conference)
    ]
    return rank_teams(table, leaders, week)
