"""
Playoff Seeding Data Models

Data structures for representing playoff seeding calculations.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class PlayoffSeed:
    """
    Represents a single playoff seed.

    Contains the team's record at the time seeding was calculated.
    """
    seed: int                      # 1-7
    team_id: str
    conference: str
    division: str
    wins: int
    losses: int
    ties: int
    win_percentage: float
    division_winner: bool          # True for seeds 1-4
    points_for: int = 0
    points_against: int = 0
    division_record: str = "0-0"
    conference_record: str = "0-0"

    @property
    def point_differential(self) -> int:
        return self.points_for - self.points_against

    @property
    def record_string(self) -> str:
        """Get record as string (e.g., '13-4' or '10-6-1')."""
        if self.ties > 0:
            return f"{self.wins}-{self.losses}-{self.ties}"
        return f"{self.wins}-{self.losses}"

    @property
    def seed_label(self) -> str:
        """Get seed label (e.g., '#1 Seed (Bye)' or '#6 Seed (Wild Card)')."""
        if self.seed == 1:
            return "#1 Seed (Bye)"
        elif self.division_winner:
            return f"#{self.seed} Seed (Division Winner)"
        else:
            return f"#{self.seed} Seed (Wild Card)"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'seed': self.seed,
            'team_id': self.team_id,
            'conference': self.conference,
            'division': self.division,
            'wins': self.wins,
            'losses': self.losses,
            'ties': self.ties,
            'win_percentage': self.win_percentage,
            'division_winner': self.division_winner,
            'points_for': self.points_for,
            'points_against': self.points_against,
            'division_record': self.division_record,
            'conference_record': self.conference_record,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlayoffSeed':
        return cls(**data)


@dataclass(frozen=True)
class ConferenceSeeding:
    """
    Seeding for a single conference.

    Contains all 7 playoff seeds; the first entries are the division winners.
    """
    conference: str
    seeds: Tuple[PlayoffSeed, ...]

    @property
    def division_winners(self) -> List[PlayoffSeed]:
        return [s for s in self.seeds if s.division_winner]

    @property
    def wildcards(self) -> List[PlayoffSeed]:
        return [s for s in self.seeds if not s.division_winner]

    @property
    def bye_team_id(self) -> str:
        return self.seeds[0].team_id

    def get_seed_by_number(self, seed_number: int) -> Optional[PlayoffSeed]:
        """Get seed by seed number (1-7)."""
        for seed in self.seeds:
            if seed.seed == seed_number:
                return seed
        return None

    def get_seed_by_team(self, team_id: str) -> Optional[PlayoffSeed]:
        """Get seed for a specific team."""
        for seed in self.seeds:
            if seed.team_id == team_id:
                return seed
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {'conference': self.conference, 'seeds': [s.to_dict() for s in self.seeds]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ConferenceSeeding':
        return cls(
            conference=data['conference'],
            seeds=tuple(PlayoffSeed.from_dict(s) for s in data['seeds']),
        )


@dataclass(frozen=True)
class PlayoffSeeding:
    """
    Complete playoff seeding for every conference.

    This is the main output of the PlayoffSeeder calculation.
    Can be calculated at any point during the season for a playoff picture.
    """
    season: int
    week: int
    conferences: Dict[str, ConferenceSeeding]
    tiebreakers_applied: Tuple[Dict[str, Any], ...] = field(default_factory=tuple)

    def get_seed(self, team_id: str) -> Optional[PlayoffSeed]:
        """
        Get playoff seed for a specific team (searches every conference).

        Args:
            team_id: Team ID to look up

        Returns:
            PlayoffSeed if team is in playoff position, None otherwise
        """
        for seeding in self.conferences.values():
            seed = seeding.get_seed_by_team(team_id)
            if seed is not None:
                return seed
        return None

    def is_in_playoffs(self, team_id: str) -> bool:
        return self.get_seed(team_id) is not None

    def get_matchups(self) -> Dict[str, List[Tuple[str, str]]]:
        """
        Get wild card round matchups as (higher seed, lower seed) pairs.

        Returns:
            {'AFC': [(seed2, seed7), (seed3, seed6), (seed4, seed5)], ...}
        """
        matchups = {}
        for conference, seeding in sorted(self.conferences.items()):
            seeds = seeding.seeds
            matchups[conference] = [
                (seeds[i].team_id, seeds[len(seeds) - i].team_id)
                for i in range(1, len(seeds) // 2 + 1)
            ]
        return matchups

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'season': self.season,
            'week': self.week,
            'conferences': {c: s.to_dict() for c, s in sorted(self.conferences.items())},
            'tiebreakers_applied': [dict(t) for t in self.tiebreakers_applied],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlayoffSeeding':
        return cls(
            season=data['season'],
            week=data['week'],
            conferences={
                c: ConferenceSeeding.from_dict(s) for c, s in data['conferences'].items()
            },
            tiebreakers_applied=tuple(data.get('tiebreakers_applied', ())),
        )
