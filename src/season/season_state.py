"""
Season State

Immutable snapshot of a season in progress. Every SeasonSimulator operation
takes a SeasonState and returns a new one; the value passed in is the
checkpoint to fall back to when something fails.

Phase flow:
    NOT_STARTED -> REGULAR_SEASON -> PLAYOFFS -> COMPLETE
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from playoff_system.bracket_models import PlayoffBracket
from scheduling.models import LeagueSchedule
from shared.game_result import GameResult, PlayerInjury
from standings.models import ClinchEvent, StandingsTable
from season_statistics.models import PlayerSeasonStats
from training.models import XPGrant


class SeasonPhase(Enum):
    """Season lifecycle phases"""
    NOT_STARTED = "not_started"
    REGULAR_SEASON = "regular_season"
    PLAYOFFS = "playoffs"
    COMPLETE = "complete"


@dataclass(frozen=True)
class WeekSummary:
    """
    Everything that happened in one processed week (or playoff round).

    Attributes:
        games: Results in schedule order
        bye_teams: Teams idle this week (regular season only)
        new_injuries: Injuries suffered this week
        recoveries: Injuries that ran out this week
        active_injuries: Injuries still open after this week
        standings_snapshot: Standings after this week's games
        clinch_events: Clinch/elimination statuses settled for the first time
        xp_grants: XP handed out for this week
        playoff_round: PlayoffRound value for postseason weeks
    """
    week: int
    phase: SeasonPhase
    games: Tuple[GameResult, ...]
    bye_teams: Tuple[str, ...] = ()
    new_injuries: Tuple[PlayerInjury, ...] = ()
    recoveries: Tuple[PlayerInjury, ...] = ()
    active_injuries: Tuple[PlayerInjury, ...] = ()
    standings_snapshot: Optional[StandingsTable] = None
    clinch_events: Tuple[ClinchEvent, ...] = ()
    xp_grants: Tuple[XPGrant, ...] = ()
    playoff_round: Optional[str] = None

    @property
    def total_xp(self) -> int:
        return sum(grant.amount for grant in self.xp_grants)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'week': self.week,
            'phase': self.phase.value,
            'games': [g.to_dict() for g in self.games],
            'bye_teams': list(self.bye_teams),
            'new_injuries': [i.to_dict() for i in self.new_injuries],
            'recoveries': [i.to_dict() for i in self.recoveries],
            'active_injuries': [i.to_dict() for i in self.active_injuries],
            'standings_snapshot': self.standings_snapshot.to_dict() if self.standings_snapshot else None,
            'clinch_events': [e.to_dict() for e in self.clinch_events],
            'xp_grants': [g.to_dict() for g in self.xp_grants],
            'playoff_round': self.playoff_round,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WeekSummary':
        snapshot = data.get('standings_snapshot')
        return cls(
            week=data['week'],
            phase=SeasonPhase(data['phase']),
            games=tuple(GameResult.from_dict(g) for g in data['games']),
            bye_teams=tuple(data.get('bye_teams', ())),
            new_injuries=tuple(PlayerInjury.from_dict(i) for i in data.get('new_injuries', ())),
            recoveries=tuple(PlayerInjury.from_dict(i) for i in data.get('recoveries', ())),
            active_injuries=tuple(PlayerInjury.from_dict(i) for i in data.get('active_injuries', ())),
            standings_snapshot=StandingsTable.from_dict(snapshot) if snapshot else None,
            clinch_events=tuple(ClinchEvent.from_dict(e) for e in data.get('clinch_events', ())),
            xp_grants=tuple(XPGrant.from_dict(g) for g in data.get('xp_grants', ())),
            playoff_round=data.get('playoff_round'),
        )


@dataclass(frozen=True)
class SeasonState:
    """
    Complete state of one season.

    Attributes:
        season: Season year
        phase: Current SeasonPhase
        current_week: Next week to process (1-18 regular season, 19-22 playoffs)
        schedule: Regular season calendar, None before initialization
        standings: Regular season standings
        completed_games: Every recorded result, regular season and playoffs
        injuries: Open injuries keyed by player id
        player_stats: Regular season totals keyed by player id
        playoff_bracket: Bracket once the playoffs start
        history: One WeekSummary per processed week or round
        clinched: team_id -> clinch type values already settled
        xp_totals: player_id -> XP earned this season
        combine_results: Output of the combine hook, if it ran
    """
    season: int
    phase: SeasonPhase = SeasonPhase.NOT_STARTED
    current_week: int = 0
    schedule: Optional[LeagueSchedule] = None
    standings: Optional[StandingsTable] = None
    completed_games: Tuple[GameResult, ...] = ()
    injuries: Dict[str, PlayerInjury] = field(default_factory=dict)
    player_stats: Dict[str, PlayerSeasonStats] = field(default_factory=dict)
    playoff_bracket: Optional[PlayoffBracket] = None
    history: Tuple[WeekSummary, ...] = ()
    clinched: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    xp_totals: Dict[str, int] = field(default_factory=dict)
    combine_results: Optional[Dict[str, Any]] = None

    @property
    def is_complete(self) -> bool:
        return self.phase == SeasonPhase.COMPLETE

    @property
    def champion_id(self) -> Optional[str]:
        return self.playoff_bracket.champion_id if self.playoff_bracket else None

    @property
    def injured_player_ids(self) -> List[str]:
        return sorted(pid for pid, injury in self.injuries.items() if injury.is_active)

    def regular_season_games(self) -> List[GameResult]:
        return [g for g in self.completed_games if not g.is_playoff]

    def playoff_games(self) -> List[GameResult]:
        return [g for g in self.completed_games if g.is_playoff]

    def summary_for_week(self, week: int) -> Optional[WeekSummary]:
        for summary in self.history:
            if summary.week == week:
                return summary
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-compatible representation (see from_dict)."""
        return {
            'season': self.season,
            'phase': self.phase.value,
            'current_week': self.current_week,
            'schedule': self.schedule.to_dict() if self.schedule else None,
            'standings': self.standings.to_dict() if self.standings else None,
            'completed_games': [g.to_dict() for g in self.completed_games],
            'injuries': {pid: i.to_dict() for pid, i in sorted(self.injuries.items())},
            'player_stats': {pid: s.to_dict() for pid, s in sorted(self.player_stats.items())},
            'playoff_bracket': self.playoff_bracket.to_dict() if self.playoff_bracket else None,
            'history': [h.to_dict() for h in self.history],
            'clinched': {t: list(c) for t, c in sorted(self.clinched.items())},
            'xp_totals': dict(sorted(self.xp_totals.items())),
            'combine_results': self.combine_results,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SeasonState':
        schedule = data.get('schedule')
        standings = data.get('standings')
        bracket = data.get('playoff_bracket')
        return cls(
            season=data['season'],
            phase=SeasonPhase(data['phase']),
            current_week=data['current_week'],
            schedule=LeagueSchedule.from_dict(schedule) if schedule else None,
            standings=StandingsTable.from_dict(standings) if standings else None,
            completed_games=tuple(GameResult.from_dict(g) for g in data.get('completed_games', ())),
            injuries={pid: PlayerInjury.from_dict(i) for pid, i in data.get('injuries', {}).items()},
            player_stats={
                pid: PlayerSeasonStats.from_dict(s) for pid, s in data.get('player_stats', {}).items()
            },
            playoff_bracket=PlayoffBracket.from_dict(bracket) if bracket else None,
            history=tuple(WeekSummary.from_dict(h) for h in data.get('history', ())),
            clinched={t: tuple(c) for t, c in data.get('clinched', {}).items()},
            xp_totals=dict(data.get('xp_totals', {})),
            combine_results=data.get('combine_results'),
        )
