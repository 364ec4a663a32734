"""
Schedule Data Models

Data structures for the 18-week regular season calendar: individual games,
week groupings with bye teams, per-team summaries and the full league
schedule.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class TimeSlot(Enum):
    """Kickoff window for a scheduled game"""
    EARLY = "early"
    LATE = "late"
    SUNDAY_NIGHT = "sunday_night"
    MONDAY_NIGHT = "monday_night"
    THURSDAY_NIGHT = "thursday_night"

    @property
    def is_primetime(self) -> bool:
        return self in (TimeSlot.SUNDAY_NIGHT, TimeSlot.MONDAY_NIGHT, TimeSlot.THURSDAY_NIGHT)


class GameDay(Enum):
    """Day of the week a game is played"""
    THURSDAY = "thursday"
    SUNDAY = "sunday"
    MONDAY = "monday"


class GameType(Enum):
    """Matchup category from the scheduling formula"""
    DIVISION = "division"
    CONFERENCE = "conference"
    ROTATING = "rotating"
    INTER_CONFERENCE = "inter_conference"


# Display order of slots inside a week
SLOT_ORDER: Dict[TimeSlot, int] = {
    TimeSlot.THURSDAY_NIGHT: 0,
    TimeSlot.EARLY: 1,
    TimeSlot.LATE: 2,
    TimeSlot.SUNDAY_NIGHT: 3,
    TimeSlot.MONDAY_NIGHT: 4,
}

SLOT_DAYS: Dict[TimeSlot, GameDay] = {
    TimeSlot.THURSDAY_NIGHT: GameDay.THURSDAY,
    TimeSlot.EARLY: GameDay.SUNDAY,
    TimeSlot.LATE: GameDay.SUNDAY,
    TimeSlot.SUNDAY_NIGHT: GameDay.SUNDAY,
    TimeSlot.MONDAY_NIGHT: GameDay.MONDAY,
}


def make_game_id(week: int, away_team_id: str, home_team_id: str) -> str:
    return f"WK{week}-{away_team_id}-{home_team_id}"


@dataclass(frozen=True)
class ScheduledGame:
    """A single regular season game on the calendar."""
    game_id: str
    week: int
    home_team_id: str
    away_team_id: str
    game_type: GameType
    time_slot: TimeSlot = TimeSlot.EARLY
    day: GameDay = GameDay.SUNDAY
    is_primetime: bool = False

    @property
    def team_ids(self) -> Tuple[str, str]:
        return (self.home_team_id, self.away_team_id)

    def involves(self, team_id: str) -> bool:
        return team_id == self.home_team_id or team_id == self.away_team_id

    def opponent_of(self, team_id: str) -> str:
        return self.away_team_id if team_id == self.home_team_id else self.home_team_id

    def to_dict(self) -> Dict[str, Any]:
        return {
            'game_id': self.game_id,
            'week': self.week,
            'home_team_id': self.home_team_id,
            'away_team_id': self.away_team_id,
            'game_type': self.game_type.value,
            'time_slot': self.time_slot.value,
            'day': self.day.value,
            'is_primetime': self.is_primetime,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScheduledGame':
        return cls(
            game_id=data['game_id'],
            week=data['week'],
            home_team_id=data['home_team_id'],
            away_team_id=data['away_team_id'],
            game_type=GameType(data['game_type']),
            time_slot=TimeSlot(data['time_slot']),
            day=GameDay(data['day']),
            is_primetime=data['is_primetime'],
        )


@dataclass(frozen=True)
class WeekSchedule:
    """Games and bye teams for one week."""
    week: int
    games: Tuple[ScheduledGame, ...]
    bye_teams: Tuple[str, ...] = ()

    @property
    def game_count(self) -> int:
        return len(self.games)

    @property
    def primetime_games(self) -> List[ScheduledGame]:
        return [g for g in self.games if g.is_primetime]

    def games_in_slot(self, slot: TimeSlot) -> List[ScheduledGame]:
        return [g for g in self.games if g.time_slot == slot]

    def game_for_team(self, team_id: str) -> Optional[ScheduledGame]:
        for game in self.games:
            if game.involves(team_id):
                return game
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'week': self.week,
            'games': [g.to_dict() for g in self.games],
            'bye_teams': list(self.bye_teams),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WeekSchedule':
        return cls(
            week=data['week'],
            games=tuple(ScheduledGame.from_dict(g) for g in data['games']),
            bye_teams=tuple(data.get('bye_teams', ())),
        )


@dataclass(frozen=True)
class TeamSchedule:
    """Per-team view of the season calendar with matchup counts."""
    team_id: str
    games: Tuple[ScheduledGame, ...]
    bye_week: Optional[int]
    home_games: int
    away_games: int
    division_games: int
    conference_games: int
    rotating_games: int
    inter_conference_games: int
    primetime_games: int

    @property
    def total_games(self) -> int:
        return len(self.games)

    @property
    def opponents(self) -> List[str]:
        return [g.opponent_of(self.team_id) for g in self.games]


@dataclass(frozen=True)
class LeagueSchedule:
    """
    Complete regular season schedule.

    Attributes:
        season: Season year
        weeks: WeekSchedule per week, ordered 1..N
        generated_at: ISO timestamp of generation
    """
    season: int
    weeks: Tuple[WeekSchedule, ...]
    generated_at: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def total_weeks(self) -> int:
        return len(self.weeks)

    @property
    def total_games(self) -> int:
        return sum(week.game_count for week in self.weeks)

    def all_games(self) -> List[ScheduledGame]:
        return [game for week in self.weeks for game in week.games]

    def get_week(self, week: int) -> Optional[WeekSchedule]:
        for week_schedule in self.weeks:
            if week_schedule.week == week:
                return week_schedule
        return None

    def games_for_team(self, team_id: str) -> List[ScheduledGame]:
        return [g for g in self.all_games() if g.involves(team_id)]

    def bye_weeks_for(self, team_id: str) -> List[int]:
        return [w.week for w in self.weeks if team_id in w.bye_teams]

    def bye_week_for(self, team_id: str) -> Optional[int]:
        byes = self.bye_weeks_for(team_id)
        return byes[0] if byes else None

    def team_schedule(self, team_id: str) -> TeamSchedule:
        games = tuple(self.games_for_team(team_id))
        by_type = {game_type: 0 for game_type in GameType}
        for game in games:
            by_type[game.game_type] += 1
        return TeamSchedule(
            team_id=team_id,
            games=games,
            bye_week=self.bye_week_for(team_id),
            home_games=sum(1 for g in games if g.home_team_id == team_id),
            away_games=sum(1 for g in games if g.away_team_id == team_id),
            division_games=by_type[GameType.DIVISION],
            conference_games=by_type[GameType.CONFERENCE],
            rotating_games=by_type[GameType.ROTATING],
            inter_conference_games=by_type[GameType.INTER_CONFERENCE],
            primetime_games=sum(1 for g in games if g.is_primetime),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'season': self.season,
            'weeks': [w.to_dict() for w in self.weeks],
            'generated_at': self.generated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LeagueSchedule':
        return cls(
            season=data['season'],
            weeks=tuple(WeekSchedule.from_dict(w) for w in data['weeks']),
            generated_at=data['generated_at'],
        )
