"""
Season Simulation Options

Configuration surface for a simulated season.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple
import json

from scheduling.config import ScheduleConfig


@dataclass
class SeasonSimOptions:
    """
    Options for one simulated season.

    Attributes:
        season: Season year
        randomize_standings: Shuffle prior division places when scheduling
        combine_enabled: Run the injected combine simulator once the season completes
        max_workers: Engine calls simulated concurrently within a week (1 = sequential)
        seed: Seed for schedule generation and weather
    """
    season: int
    randomize_standings: bool = False
    combine_enabled: bool = False
    max_workers: int = 1
    seed: Optional[int] = None

    def validate(self) -> Tuple[bool, List[str]]:
        errors = []
        if self.season < 1920:
            errors.append(f"Season year {self.season} is not valid")
        if self.max_workers < 1:
            errors.append(f"max_workers must be at least 1, got {self.max_workers}")
        return len(errors) == 0, errors

    def schedule_config(self) -> ScheduleConfig:
        """Schedule generation settings derived from these options."""
        return ScheduleConfig(
            season_year=self.season,
            randomize_standings=self.randomize_standings,
            seed=self.seed,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'season': self.season,
            'randomize_standings': self.randomize_standings,
            'combine_enabled': self.combine_enabled,
            'max_workers': self.max_workers,
            'seed': self.seed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SeasonSimOptions':
        return cls(
            season=data['season'],
            randomize_standings=data.get('randomize_standings', False),
            combine_enabled=data.get('combine_enabled', False),
            max_workers=data.get('max_workers', 1),
            seed=data.get('seed'),
        )

    def to_json(self, filepath: str):
        """Save options to JSON file"""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_json(cls, filepath: str) -> 'SeasonSimOptions':
        """Load options from JSON file"""
        with open(filepath, 'r') as f:
            return cls.from_dict(json.load(f))
