"""
Shared Team Classes

Static league data consumed by the season engine: teams, their rosters, and
the conference/division structure used by scheduling, standings and playoffs.
Teams are read-only here; roster generation happens elsewhere.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple


# Canonical division order inside a conference. Division pairings used by the
# schedule formula are expressed as indexes into this order.
DIVISION_ORDER = ("North", "South", "East", "West")


@dataclass(frozen=True)
class RosterPlayer:
    """A single player on a team roster."""
    player_id: str
    name: str
    position: str
    age: int = 25
    overall: int = 70
    traits: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'player_id': self.player_id,
            'name': self.name,
            'position': self.position,
            'age': self.age,
            'overall': self.overall,
            'traits': list(self.traits),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RosterPlayer':
        return cls(
            player_id=data['player_id'],
            name=data['name'],
            position=data['position'],
            age=data.get('age', 25),
            overall=data.get('overall', 70),
            traits=tuple(data.get('traits', ())),
        )


@dataclass(frozen=True)
class Team:
    """
    League team as seen by the season engine.

    Attributes:
        team_id: Stable identifier used everywhere (e.g. "BOS")
        conference: Conference name (e.g. "Atlantic")
        division: Full division name (e.g. "Atlantic North")
        market_size: 1-10, drives prime-time selection
        stadium_type: "outdoor" or "dome", drives home-field modifier
    """
    team_id: str
    name: str
    conference: str
    division: str
    abbreviation: str = ""
    city: str = ""
    market_size: int = 5
    stadium_type: str = "outdoor"
    offensive_scheme: str = "balanced"
    defensive_scheme: str = "4-3"
    roster: Tuple[RosterPlayer, ...] = field(default_factory=tuple)

    @property
    def display_name(self) -> str:
        if self.city:
            return f"{self.city} {self.name}"
        return self.name

    def get_player(self, player_id: str) -> Optional[RosterPlayer]:
        for player in self.roster:
            if player.player_id == player_id:
                return player
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'team_id': self.team_id,
            'name': self.name,
            'conference': self.conference,
            'division': self.division,
            'abbreviation': self.abbreviation,
            'city': self.city,
            'market_size': self.market_size,
            'stadium_type': self.stadium_type,
            'offensive_scheme': self.offensive_scheme,
            'defensive_scheme': self.defensive_scheme,
            'roster': [player.to_dict() for player in self.roster],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Team':
        return cls(
            team_id=data['team_id'],
            name=data['name'],
            conference=data['conference'],
            division=data['division'],
            abbreviation=data.get('abbreviation', ''),
            city=data.get('city', ''),
            market_size=data.get('market_size', 5),
            stadium_type=data.get('stadium_type', 'outdoor'),
            offensive_scheme=data.get('offensive_scheme', 'balanced'),
            defensive_scheme=data.get('defensive_scheme', '4-3'),
            roster=tuple(RosterPlayer.from_dict(p) for p in data.get('roster', ())),
        )


def _division_sort_key(conference: str, division: str) -> Tuple[int, str]:
    """Order divisions North/South/East/West when named that way, else by name."""
    suffix = division[len(conference):].strip() if division.startswith(conference) else division
    for index, name in enumerate(DIVISION_ORDER):
        if suffix == name or division.endswith(" " + name):
            return (index, division)
    return (len(DIVISION_ORDER), division)


class LeagueStructure:
    """
    Conference and division lookup built from a team list.

    Conferences are sorted by name; divisions inside a conference follow
    DIVISION_ORDER. Teams inside a division keep the order they were given.
    """

    def __init__(self, teams: Iterable[Team]):
        self.teams: Dict[str, Team] = {}
        self._divisions: Dict[str, List[str]] = {}
        self._conference_divisions: Dict[str, List[str]] = {}

        for team in teams:
            self.teams[team.team_id] = team
            self._divisions.setdefault(team.division, []).append(team.team_id)
            divisions = self._conference_divisions.setdefault(team.conference, [])
            if team.division not in divisions:
                divisions.append(team.division)

        for conference, divisions in self._conference_divisions.items():
            divisions.sort(key=lambda d: _division_sort_key(conference, d))

    @property
    def conferences(self) -> List[str]:
        return sorted(self._conference_divisions)

    def divisions_in(self, conference: str) -> List[str]:
        return list(self._conference_divisions.get(conference, []))

    def division_teams(self, division: str) -> List[str]:
        return list(self._divisions.get(division, []))

    def conference_teams(self, conference: str) -> List[str]:
        team_ids: List[str] = []
        for division in self.divisions_in(conference):
            team_ids.extend(self._divisions[division])
        return team_ids

    def conference_of(self, team_id: str) -> str:
        return self.teams[team_id].conference

    def division_of(self, team_id: str) -> str:
        return self.teams[team_id].division

    def division_rivals(self, team_id: str) -> List[str]:
        return [t for t in self._divisions[self.division_of(team_id)] if t != team_id]

    def is_standard_shape(self, conferences: int = 2, divisions: int = 4, teams_per_division: int = 4) -> bool:
        """True when the league is conferences x divisions x teams_per_division."""
        if len(self._conference_divisions) != conferences:
            return False
        for division_names in self._conference_divisions.values():
            if len(division_names) != divisions:
                return False
            for division in division_names:
                if len(self._divisions[division]) != teams_per_division:
                    return False
        return True
