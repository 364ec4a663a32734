"""
Standings Data Models

Immutable team standing records. A StandingsTable is a snapshot: every
update produces a new table so week-by-week history stays replayable.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple


@dataclass(frozen=True)
class HeadToHeadRecord:
    """Record against a single opponent"""
    wins: int = 0
    losses: int = 0
    ties: int = 0

    @property
    def games(self) -> int:
        return self.wins + self.losses + self.ties

    def to_dict(self) -> Dict[str, int]:
        return {'wins': self.wins, 'losses': self.losses, 'ties': self.ties}


@dataclass(frozen=True)
class TeamStanding:
    """
    Base team standing with core record tracking.

    ``streak`` is positive for consecutive wins, negative for losses and
    zero after a tie. ``last_five`` holds "W"/"L"/"T", most recent last.
    """
    team_id: str
    conference: str
    division: str
    wins: int = 0
    losses: int = 0
    ties: int = 0
    division_wins: int = 0
    division_losses: int = 0
    division_ties: int = 0
    conference_wins: int = 0
    conference_losses: int = 0
    conference_ties: int = 0
    points_for: int = 0
    points_against: int = 0
    streak: int = 0
    last_five: Tuple[str, ...] = ()
    head_to_head: Dict[str, HeadToHeadRecord] = field(default_factory=dict)

    @property
    def games_played(self) -> int:
        """Total games played"""
        return self.wins + self.losses + self.ties

    @property
    def win_percentage(self) -> float:
        """Calculate win percentage"""
        return _percentage(self.wins, self.losses, self.ties)

    @property
    def division_percentage(self) -> float:
        return _percentage(self.division_wins, self.division_losses, self.division_ties)

    @property
    def conference_percentage(self) -> float:
        return _percentage(self.conference_wins, self.conference_losses, self.conference_ties)

    @property
    def point_differential(self) -> int:
        """Calculate point differential"""
        return self.points_for - self.points_against

    @property
    def standing_points(self) -> int:
        """Two per win, one per tie; used for clinching math."""
        return 2 * self.wins + self.ties

    @property
    def record_string(self) -> str:
        """Get record as string (e.g., '10-6')"""
        if self.ties > 0:
            return f"{self.wins}-{self.losses}-{self.ties}"
        return f"{self.wins}-{self.losses}"

    @property
    def division_record(self) -> str:
        return _record(self.division_wins, self.division_losses, self.division_ties)

    @property
    def conference_record(self) -> str:
        return _record(self.conference_wins, self.conference_losses, self.conference_ties)

    @property
    def streak_string(self) -> str:
        if self.streak > 0:
            return f"W{self.streak}"
        if self.streak < 0:
            return f"L{-self.streak}"
        return "T" if self.last_five and self.last_five[-1] == "T" else ""

    def head_to_head_against(self, opponent_id: str) -> HeadToHeadRecord:
        return self.head_to_head.get(opponent_id, HeadToHeadRecord())

    def to_dict(self) -> Dict[str, Any]:
        return {
            'team_id': self.team_id,
            'conference': self.conference,
            'division': self.division,
            'wins': self.wins,
            'losses': self.losses,
            'ties': self.ties,
            'division_wins': self.division_wins,
            'division_losses': self.division_losses,
            'division_ties': self.division_ties,
            'conference_wins': self.conference_wins,
            'conference_losses': self.conference_losses,
            'conference_ties': self.conference_ties,
            'points_for': self.points_for,
            'points_against': self.points_against,
            'streak': self.streak,
            'last_five': list(self.last_five),
            'head_to_head': {opp: rec.to_dict() for opp, rec in sorted(self.head_to_head.items())},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TeamStanding':
        values = dict(data)
        values['last_five'] = tuple(data.get('last_five', ()))
        values['head_to_head'] = {
            opp: HeadToHeadRecord(**rec) for opp, rec in data.get('head_to_head', {}).items()
        }
        return cls(**values)


def _percentage(wins: int, losses: int, ties: int) -> float:
    games = wins + losses + ties
    if games == 0:
        return 0.0
    return (wins + ties * 0.5) / games


def _record(wins: int, losses: int, ties: int) -> str:
    if ties:
        return f"{wins}-{losses}-{ties}"
    return f"{wins}-{losses}"


@dataclass(frozen=True)
class StandingsTable:
    """
    Standings snapshot for a whole league.

    Attributes:
        season: Season year
        standings: team_id -> TeamStanding
        applied_game_ids: Games already folded in; re-applying one is a no-op
    """
    season: int
    standings: Dict[str, TeamStanding]
    applied_game_ids: FrozenSet[str] = frozenset()

    def __getitem__(self, team_id: str) -> TeamStanding:
        return self.standings[team_id]

    def __contains__(self, team_id: str) -> bool:
        return team_id in self.standings

    def get(self, team_id: str) -> Optional[TeamStanding]:
        return self.standings.get(team_id)

    @property
    def team_ids(self) -> List[str]:
        return sorted(self.standings)

    @property
    def conferences(self) -> List[str]:
        return sorted({s.conference for s in self.standings.values()})

    def conference_team_ids(self, conference: str) -> List[str]:
        return sorted(t for t, s in self.standings.items() if s.conference == conference)

    def division_team_ids(self, division: str) -> List[str]:
        return sorted(t for t, s in self.standings.items() if s.division == division)

    def divisions_in(self, conference: str) -> List[str]:
        return sorted({s.division for s in self.standings.values() if s.conference == conference})

    def totals(self) -> Tuple[int, int, int]:
        """League-wide (wins, losses, ties)."""
        wins = sum(s.wins for s in self.standings.values())
        losses = sum(s.losses for s in self.standings.values())
        ties = sum(s.ties for s in self.standings.values())
        return wins, losses, ties

    def to_dict(self) -> Dict[str, Any]:
        return {
            'season': self.season,
            'standings': {t: s.to_dict() for t, s in sorted(self.standings.items())},
            'applied_game_ids': sorted(self.applied_game_ids),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StandingsTable':
        return cls(
            season=data['season'],
            standings={t: TeamStanding.from_dict(s) for t, s in data['standings'].items()},
            applied_game_ids=frozenset(data.get('applied_game_ids', ())),
        )


class ClinchType(Enum):
    """Mathematically settled playoff outcomes"""
    PLAYOFF_BERTH = "playoff_berth"
    DIVISION = "division"
    BYE = "bye"
    ELIMINATED = "eliminated"


@dataclass(frozen=True)
class ClinchEvent:
    """A team securing (or losing) a playoff outcome at a given week."""
    team_id: str
    clinch_type: ClinchType
    week: int

    def to_dict(self) -> Dict[str, Any]:
        return {'team_id': self.team_id, 'clinch_type': self.clinch_type.value, 'week': self.week}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ClinchEvent':
        return cls(team_id=data['team_id'], clinch_type=ClinchType(data['clinch_type']), week=data['week'])
