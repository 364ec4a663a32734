"""
Configuration for Schedule Generator

Centralized configuration management for schedule generation parameters,
bye week windows and prime-time slot distribution.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import json


@dataclass
class ByeWeekConfig:
    """Configuration for bye week scheduling"""
    start_week: int = 5           # Earliest bye week
    end_week: int = 14            # Latest bye week
    max_teams_per_week: int = 6   # Maximum teams on bye each week
    min_teams_per_week: int = 2   # Minimum teams on bye each week

    @property
    def weeks(self) -> List[int]:
        return list(range(self.start_week, self.end_week + 1))

    def validate(self, team_count: int = 32, total_weeks: int = 18) -> Tuple[bool, List[str]]:
        """Validate bye week configuration"""
        errors = []
        if self.start_week < 1 or self.end_week > total_weeks:
            errors.append(f"Bye window {self.start_week}-{self.end_week} outside weeks 1-{total_weeks}")
        if self.start_week > self.end_week:
            errors.append("Bye window start_week after end_week")
        if self.max_teams_per_week < self.min_teams_per_week:
            errors.append("max_teams_per_week below min_teams_per_week")
        if self.min_teams_per_week < 2 or self.min_teams_per_week % 2 or self.max_teams_per_week % 2:
            errors.append("Bye team counts must be even and at least 2")

        # Bye teams leave in pairs, so the window must fit team_count / 2 games
        weeks_available = max(0, self.end_week - self.start_week + 1)
        if weeks_available * self.max_teams_per_week < team_count:
            errors.append(
                f"Bye capacity {weeks_available * self.max_teams_per_week} below {team_count} teams"
            )
        if weeks_available * self.min_teams_per_week > team_count:
            errors.append(
                f"Bye minimum {weeks_available * self.min_teams_per_week} exceeds {team_count} teams"
            )
        if weeks_available >= total_weeks:
            errors.append("Bye window must leave at least one week without byes")

        return len(errors) == 0, errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            'start_week': self.start_week,
            'end_week': self.end_week,
            'max_teams_per_week': self.max_teams_per_week,
            'min_teams_per_week': self.min_teams_per_week,
        }


@dataclass
class PrimetimeConfig:
    """Configuration for primetime game scheduling"""
    tnf_start_week: int = 2          # Thursday Night Football starts
    tnf_end_week: int = 17           # TNF ends
    snf_start_week: int = 1
    snf_end_week: int = 18
    mnf_start_week: int = 1
    mnf_end_week: int = 17

    # Teams primetime appearance limits
    max_primetime_games: int = 5     # Max primetime per team
    max_tnf_games: int = 2           # Max TNF per team

    # Candidate scoring: market_size * market_weight + division bonus + uniform(0, random_bonus_max)
    market_weight: float = 0.3
    division_game_bonus: float = 15.0
    random_bonus_max: float = 10.0

    def has_tnf(self, week: int) -> bool:
        return self.tnf_start_week <= week <= self.tnf_end_week

    def has_snf(self, week: int) -> bool:
        return self.snf_start_week <= week <= self.snf_end_week

    def has_mnf(self, week: int) -> bool:
        return self.mnf_start_week <= week <= self.mnf_end_week

    def slots_for_week(self, week: int) -> int:
        return int(self.has_tnf(week)) + int(self.has_snf(week)) + int(self.has_mnf(week))

    def validate(self, total_weeks: int = 18) -> Tuple[bool, List[str]]:
        errors = []
        for name in ('tnf', 'snf', 'mnf'):
            start = getattr(self, f"{name}_start_week")
            end = getattr(self, f"{name}_end_week")
            if start < 1 or end > total_weeks or start > end:
                errors.append(f"Invalid {name.upper()} window {start}-{end}")
        if self.max_primetime_games < 1:
            errors.append("max_primetime_games must be at least 1")
        if self.max_tnf_games < 1:
            errors.append("max_tnf_games must be at least 1")
        return len(errors) == 0, errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            'tnf_start_week': self.tnf_start_week,
            'tnf_end_week': self.tnf_end_week,
            'snf_start_week': self.snf_start_week,
            'snf_end_week': self.snf_end_week,
            'mnf_start_week': self.mnf_start_week,
            'mnf_end_week': self.mnf_end_week,
            'max_primetime_games': self.max_primetime_games,
            'max_tnf_games': self.max_tnf_games,
            'market_weight': self.market_weight,
            'division_game_bonus': self.division_game_bonus,
            'random_bonus_max': self.random_bonus_max,
        }


@dataclass
class ScheduleConfig:
    """
    Complete configuration for schedule generation.

    Attributes:
        season_year: Season being scheduled
        randomize_standings: Shuffle prior-season division places instead of
            using previous_standings / team order
        seed: RNG seed; the same seed and teams reproduce the same schedule
        previous_standings: division name -> team ids in finishing order
        max_retries: Bye search and time slot restarts before giving up
        max_search_nodes: Node budget per bye search attempt
    """

    # Basic parameters
    season_year: int
    randomize_standings: bool = False
    seed: Optional[int] = None
    total_weeks: int = 18
    games_per_team: int = 17

    # Component configurations
    bye_week: ByeWeekConfig = field(default_factory=ByeWeekConfig)
    primetime: PrimetimeConfig = field(default_factory=PrimetimeConfig)

    # Search bounds
    max_retries: int = 25
    max_search_nodes: int = 20000

    previous_standings: Optional[Dict[str, List[str]]] = None

    def validate(self) -> Tuple[bool, List[str]]:
        """Validate entire configuration"""
        errors = []

        if self.total_weeks != 18:
            errors.append(f"Season uses 18 weeks, got {self.total_weeks}")

        if self.games_per_team != 17:
            errors.append(f"Teams play 17 games, got {self.games_per_team}")

        # Component validation
        _, bye_errors = self.bye_week.validate(total_weeks=self.total_weeks)
        errors.extend(bye_errors)
        _, primetime_errors = self.primetime.validate(total_weeks=self.total_weeks)
        errors.extend(primetime_errors)

        if self.max_retries < 1:
            errors.append("max_retries must be at least 1")
        if self.max_search_nodes < 100:
            errors.append("max_search_nodes too low for bye search")

        return len(errors) == 0, errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            'season_year': self.season_year,
            'randomize_standings': self.randomize_standings,
            'seed': self.seed,
            'total_weeks': self.total_weeks,
            'games_per_team': self.games_per_team,
            'bye_week': self.bye_week.to_dict(),
            'primetime': self.primetime.to_dict(),
            'max_retries': self.max_retries,
            'max_search_nodes': self.max_search_nodes,
            'previous_standings': self.previous_standings,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScheduleConfig':
        config = cls(season_year=data['season_year'])
        config.randomize_standings = data.get('randomize_standings', False)
        config.seed = data.get('seed')
        config.total_weeks = data.get('total_weeks', 18)
        config.games_per_team = data.get('games_per_team', 17)
        config.max_retries = data.get('max_retries', 25)
        config.max_search_nodes = data.get('max_search_nodes', 20000)
        config.previous_standings = data.get('previous_standings')

        if 'bye_week' in data:
            config.bye_week = ByeWeekConfig(**data['bye_week'])
        if 'primetime' in data:
            config.primetime = PrimetimeConfig(**data['primetime'])

        return config

    def to_json(self, filepath: str):
        """Save configuration to JSON file"""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_json(cls, filepath: str) -> 'ScheduleConfig':
        """Load configuration from JSON file"""
        with open(filepath, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)
