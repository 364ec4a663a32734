"""
Shared Game Result Classes

Contains the GameResult produced by the external game engine together with
the per-player box score lines and in-game injuries it carries. Results are
immutable once recorded and are read by the standings tracker, the stats
aggregator and the training bridge.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class InjuryType(Enum):
    """Injury severity classes"""
    MINOR = "minor"
    MODERATE = "moderate"
    SEVERE = "severe"
    SEASON_ENDING = "season_ending"


# Weeks missed per severity class (inclusive range)
INJURY_DURATION: Dict[InjuryType, Tuple[int, int]] = {
    InjuryType.MINOR: (1, 2),
    InjuryType.MODERATE: (3, 5),
    InjuryType.SEVERE: (6, 10),
    InjuryType.SEASON_ENDING: (18, 18),
}


@dataclass(frozen=True)
class PlayerInjury:
    """Injury suffered during a game, counted down weekly by the season simulator."""
    player_id: str
    team_id: str
    injury_type: InjuryType
    week_occurred: int
    weeks_remaining: int
    player_name: str = ""
    description: str = ""

    @property
    def is_active(self) -> bool:
        return self.weeks_remaining > 0

    def decremented(self) -> 'PlayerInjury':
        """Return a copy with one fewer week remaining."""
        return PlayerInjury(
            player_id=self.player_id,
            team_id=self.team_id,
            injury_type=self.injury_type,
            week_occurred=self.week_occurred,
            weeks_remaining=max(0, self.weeks_remaining - 1),
            player_name=self.player_name,
            description=self.description,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'player_id': self.player_id,
            'team_id': self.team_id,
            'injury_type': self.injury_type.value,
            'week_occurred': self.week_occurred,
            'weeks_remaining': self.weeks_remaining,
            'player_name': self.player_name,
            'description': self.description,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlayerInjury':
        return cls(
            player_id=data['player_id'],
            team_id=data['team_id'],
            injury_type=InjuryType(data['injury_type']),
            week_occurred=data['week_occurred'],
            weeks_remaining=data['weeks_remaining'],
            player_name=data.get('player_name', ''),
            description=data.get('description', ''),
        )


@dataclass(frozen=True)
class PlayerGameStats:
    """
    Box score line for one player in one game.

    All counters are integers so season totals are exact regardless of the
    order games are summed in. ``snaps``/``team_snaps`` describe participation
    and feed the training bridge.
    """
    player_id: str
    player_name: str
    team_id: str
    position: str
    snaps: int = 0
    team_snaps: int = 0

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

    @property
    def participated(self) -> bool:
        """Whether the player recorded any snap or any counting stat."""
        if self.snaps > 0:
            return True
        return any(getattr(self, name) > 0 for name in COUNTING_FIELDS)

    @property
    def snap_share(self) -> float:
        if self.team_snaps > 0:
            return min(1.0, self.snaps / self.team_snaps)
        return 1.0 if self.participated else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PlayerGameStats':
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


# Stat fields that are summed across games
COUNTING_FIELDS: Tuple[str, ...] = tuple(
    f.name for f in fields(PlayerGameStats)
    if f.type in (int, 'int')
    and f.name not in ('snaps', 'team_snaps', 'rushing_long', 'receiving_long')
)

# Stat fields that keep the season maximum
MAXIMUM_FIELDS: Tuple[str, ...] = ('rushing_long', 'receiving_long')


@dataclass(frozen=True)
class GameResult:
    """
    Final result of a single game as returned by the game engine.

    Attributes:
        game_id: Scheduled game id (e.g. "WK3-BOS-NYE") or playoff matchup id
        player_stats: Box score lines for both teams
        injuries: Injuries that occurred during this game
        playoff_round: PlayoffRound value for postseason games
    """
    game_id: str
    week: int
    home_team_id: str
    away_team_id: str
    home_score: int
    away_score: int
    player_stats: Tuple[PlayerGameStats, ...] = field(default_factory=tuple)
    injuries: Tuple[PlayerInjury, ...] = field(default_factory=tuple)
    is_playoff: bool = False
    playoff_round: Optional[str] = None
    is_primetime: bool = False

    @property
    def is_tie(self) -> bool:
        return self.home_score == self.away_score

    @property
    def winner_id(self) -> Optional[str]:
        if self.home_score > self.away_score:
            return self.home_team_id
        if self.away_score > self.home_score:
            return self.away_team_id
        return None

    @property
    def loser_id(self) -> Optional[str]:
        if self.home_score > self.away_score:
            return self.away_team_id
        if self.away_score > self.home_score:
            return self.home_team_id
        return None

    @property
    def team_ids(self) -> Tuple[str, str]:
        return (self.home_team_id, self.away_team_id)

    def score_for(self, team_id: str) -> int:
        if team_id == self.home_team_id:
            return self.home_score
        if team_id == self.away_team_id:
            return self.away_score
        raise KeyError(team_id)

    def opponent_of(self, team_id: str) -> str:
        if team_id == self.home_team_id:
            return self.away_team_id
        if team_id == self.away_team_id:
            return self.home_team_id
        raise KeyError(team_id)

    def stats_for_team(self, team_id: str) -> Tuple[PlayerGameStats, ...]:
        return tuple(s for s in self.player_stats if s.team_id == team_id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for persistence"""
        return {
            'game_id': self.game_id,
            'week': self.week,
            'home_team_id': self.home_team_id,
            'away_team_id': self.away_team_id,
            'home_score': self.home_score,
            'away_score': self.away_score,
            'player_stats': [s.to_dict() for s in self.player_stats],
            'injuries': [i.to_dict() for i in self.injuries],
            'is_playoff': self.is_playoff,
            'playoff_round': self.playoff_round,
            'is_primetime': self.is_primetime,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GameResult':
        return cls(
            game_id=data['game_id'],
            week=data['week'],
            home_team_id=data['home_team_id'],
            away_team_id=data['away_team_id'],
            home_score=data['home_score'],
            away_score=data['away_score'],
            player_stats=tuple(PlayerGameStats.from_dict(s) for s in data.get('player_stats', ())),
            injuries=tuple(PlayerInjury.from_dict(i) for i in data.get('injuries', ())),
            is_playoff=data.get('is_playoff', False),
            playoff_round=data.get('playoff_round'),
            is_primetime=data.get('is_primetime', False),
        )
