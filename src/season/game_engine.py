"""
Game Engine Interface

The play-by-play engine lives outside this package. The season simulator
talks to it through the GameEngine protocol, handing over two rosters and a
GameSituation describing the context of the game.

Engines signal failure with EngineError (transient, the simulator retries
once with identical inputs) or FatalEngineError (not retried).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional, Protocol, Sequence
import hashlib

from shared.game_result import GameResult
from shared.team import RosterPlayer, Team
from .season_constants import SeasonConstants


class EngineError(Exception):
    """Transient game engine failure (e.g. lazily loaded data not ready)."""

    def __init__(self, message: str, game_id: Optional[str] = None):
        self.game_id = game_id
        super().__init__(message)


class FatalEngineError(EngineError):
    """Game engine failure that a retry cannot fix (e.g. malformed roster)."""


WEATHER_CONDITIONS = ("clear", "cloudy", "rain", "wind")
LATE_SEASON_WEATHER = ("clear", "cloudy", "rain", "wind", "snow", "cold")
LATE_SEASON_WEEK = 13


@dataclass(frozen=True)
class GameSituation:
    """
    Everything about a game except the rosters.

    Attributes:
        home_field_modifier: 1.0 outdoors, 0.5 in a dome, 0.0 at a neutral site
        scheme_matchups: "home_offense"/"away_offense" -> "scheme vs scheme"
        is_high_importance: Playoff or late-season game ("clutch" framing)
        unavailable_player_ids: Injured players who must not play
    """
    game_id: str
    week: int
    season: int
    home_team_id: str
    away_team_id: str
    scheme_matchups: Dict[str, str] = field(default_factory=dict)
    weather: str = "clear"
    home_field_modifier: float = 1.0
    is_primetime: bool = False
    is_playoff: bool = False
    playoff_round: Optional[str] = None
    is_high_importance: bool = False
    unavailable_player_ids: FrozenSet[str] = frozenset()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'game_id': self.game_id,
            'week': self.week,
            'season': self.season,
            'home_team_id': self.home_team_id,
            'away_team_id': self.away_team_id,
            'scheme_matchups': dict(self.scheme_matchups),
            'weather': self.weather,
            'home_field_modifier': self.home_field_modifier,
            'is_primetime': self.is_primetime,
            'is_playoff': self.is_playoff,
            'playoff_round': self.playoff_round,
            'is_high_importance': self.is_high_importance,
            'unavailable_player_ids': sorted(self.unavailable_player_ids),
        }


class GameEngine(Protocol):
    """Protocol for the external play-by-play engine."""

    def simulate(
        self,
        home_roster: Sequence[RosterPlayer],
        away_roster: Sequence[RosterPlayer],
        situation: GameSituation
    ) -> GameResult:
        """Play one game and return its final result."""
        ...


def home_field_modifier(home: Team, neutral_site: bool = False) -> float:
    if neutral_site:
        return SeasonConstants.NEUTRAL_SITE_HOME_FIELD_MODIFIER
    if home.stadium_type == "dome":
        return SeasonConstants.DOME_HOME_FIELD_MODIFIER
    return SeasonConstants.OUTDOOR_HOME_FIELD_MODIFIER


def scheme_matchups(home: Team, away: Team) -> Dict[str, str]:
    return {
        'home_offense': f"{home.offensive_scheme} vs {away.defensive_scheme}",
        'away_offense': f"{away.offensive_scheme} vs {home.defensive_scheme}",
    }


def weather_for(home: Team, week: int, game_id: str, seed: Optional[int] = None) -> str:
    """Deterministic weather for a game, always "dome" indoors."""
    if home.stadium_type == "dome":
        return "dome"
    conditions = LATE_SEASON_WEATHER if week >= LATE_SEASON_WEEK else WEATHER_CONDITIONS
    digest = hashlib.sha256(f"{seed}:{game_id}".encode("utf-8")).hexdigest()
    return conditions[int(digest[:8], 16) % len(conditions)]
