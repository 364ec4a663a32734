"""
Season Statistics Data Models

Immutable season totals. Stored fields are integer sums only; every rate is
a derived property so totals stay exact whatever order games were summed in.
"""
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from .calculations import calculate_passer_rating, percentage, safe_divide


@dataclass(frozen=True)
class PlayerSeasonStats:
    """
    Season totals for one player.

    ``team_id``/``player_name``/``position`` follow the player's latest
    appearance, identified by (last_week, last_game_id).
    """
    player_id: str
    player_name: str
    team_id: str
    position: str
    games_played: int = 0
    last_week: int = 0
    last_game_id: str = ""
    snaps: int = 0

    # Passing
    passing_attempts: int = 0
    passing_completions: int = 0
    passing_yards: int = 0
    passing_touchdowns: int = 0
    passing_interceptions: int = 0
    times_sacked: int = 0

    # Rushing
    rushing_attempts: int = 0
    rushing_yards: int = 0
    rushing_touchdowns: int = 0
    rushing_long: int = 0
    fumbles_lost: int = 0

    # Receiving
    targets: int = 0
    receptions: int = 0
    receiving_yards: int = 0
    receiving_touchdowns: int = 0
    receiving_long: int = 0

    # Defense
    tackles: int = 0
    sacks: int = 0
    interceptions: int = 0
    passes_defended: int = 0
    fumble_recoveries: int = 0

    # Kicking
    field_goals_attempted: int = 0
    field_goals_made: int = 0
    extra_points_attempted: int = 0
    extra_points_made: int = 0
    punts: int = 0
    punt_yards: int = 0

    # ==================== Derived ====================

    @property
    def completion_percentage(self) -> float:
        return percentage(self.passing_completions, self.passing_attempts)

    @property
    def yards_per_attempt(self) -> float:
        return safe_divide(self.passing_yards, self.passing_attempts)

    @property
    def passer_rating(self) -> float:
        return calculate_passer_rating(
            self.passing_completions,
            self.passing_attempts,
            self.passing_yards,
            self.passing_touchdowns,
            self.passing_interceptions,
        )

    @property
    def yards_per_carry(self) -> float:
        return safe_divide(self.rushing_yards, self.rushing_attempts)

    @property
    def catch_rate(self) -> float:
        return percentage(self.receptions, self.targets)

    @property
    def yards_per_reception(self) -> float:
        return safe_divide(self.receiving_yards, self.receptions)

    @property
    def field_goal_percentage(self) -> float:
        return percentage(self.field_goals_made, self.field_goals_attempted)

    @property
    def punt_average(self) -> float:
        return safe_divide(self.punt_yards, self.punts)

    @property
    def total_touchdowns(self) -> int:
        return self.passing_touchdowns + self.rushing_touchdowns + self.receiving_touchdowns

    @property
    def scrimmage_yards(self) -> int:
        return self.rushing_yards + self.receiving_yards

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlayerSeasonStats':
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass(frozen=True)
class TeamSeasonStats:
    """Season totals for one team built from scores and box score lines."""
    team_id: str
    games_played: int = 0
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: int = 0
    points_against: int = 0
    passing_yards: int = 0
    rushing_yards: int = 0
    passing_touchdowns: int = 0
    rushing_touchdowns: int = 0
    turnovers: int = 0
    takeaways: int = 0
    sacks: int = 0
    sacks_allowed: int = 0

    @property
    def total_yards(self) -> int:
        return self.passing_yards + self.rushing_yards

    @property
    def points_per_game(self) -> float:
        return safe_divide(self.points_for, self.games_played)

    @property
    def points_allowed_per_game(self) -> float:
        return safe_divide(self.points_against, self.games_played)

    @property
    def turnover_differential(self) -> int:
        return self.takeaways - self.turnovers

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TeamSeasonStats':
        return cls(**data)


@dataclass(frozen=True)
class LeaderEntry:
    """One row of a leaderboard."""
    rank: int
    player_id: str
    player_name: str
    team_id: str
    position: str
    category: str
    value: float
    games_played: int
    qualifier: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
