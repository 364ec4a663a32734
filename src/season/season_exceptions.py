"""
Season Simulation Exception Hierarchy

Exceptions for season state machine misuse and game simulation failures.

Exception Hierarchy:
    SeasonException (base)
    ├── InvalidTransitionError
    ├── SimulationError
    └── SeasonInitializationError

All exceptions track:
- Season context (season, phase, week)
- Operation that failed
- Recovery strategy

None of these leave partial state behind: the SeasonState passed into the
failing call is still the last good checkpoint.
"""

from typing import Any, Dict, Optional
from datetime import datetime


class SeasonException(Exception):
    """
    Base exception for all season simulation errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error code
        season_context: Season information (season, phase, week)
        operation: What operation was being performed
        recovery_strategy: How to recover from this error
        original_exception: Wrapped exception if from try/except
    """

    def __init__(
        self,
        message: str,
        error_code: str = "SEASON_000",
        season_context: Optional[Dict[str, Any]] = None,
        operation: Optional[str] = None,
        recovery_strategy: str = "abort",
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.error_code = error_code
        self.season_context = season_context or {}
        self.operation = operation
        self.recovery_strategy = recovery_strategy
        self.original_exception = original_exception
        self.timestamp = datetime.now().isoformat()

        super().__init__(self._build_error_message())

    def _build_error_message(self) -> str:
        """Build comprehensive error message with all context"""
        lines = [f"[{self.error_code}] {self.message}"]

        if self.operation:
            lines.append(f"Operation: {self.operation}")

        if self.season_context:
            lines.append("Season Context:")
            for key, value in self.season_context.items():
                lines.append(f"  {key}: {value}")

        if self.recovery_strategy:
            lines.append(f"Recovery: {self.recovery_strategy}")

        if self.original_exception:
            lines.append(f"Original Error: {type(self.original_exception).__name__}: {str(self.original_exception)}")

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "operation": self.operation,
            "season_context": self.season_context,
            "recovery_strategy": self.recovery_strategy,
            "timestamp": self.timestamp,
            "original_error": str(self.original_exception) if self.original_exception else None
        }


class InvalidTransitionError(SeasonException):
    """
    Raised when an operation does not fit the current season phase.

    Valid transitions:
    - NOT_STARTED → REGULAR_SEASON (initialize_season)
    - REGULAR_SEASON → PLAYOFFS (advance_week after the last week)
    - PLAYOFFS → COMPLETE (advance_week records the championship)

    Examples:
    - Initializing a season that already started
    - Advancing a completed season
    - Simulating playoffs before the regular season ends
    """

    def __init__(
        self,
        phase: str,
        operation: str,
        message: Optional[str] = None,
        **kwargs
    ):
        context = {
            "phase": phase,
            **kwargs.get('season_context', {})
        }

        super().__init__(
            message=message or f"Cannot {operation} while season is {phase}",
            error_code="SEASON_001",
            season_context=context,
            operation=operation,
            recovery_strategy="abort",
            original_exception=kwargs.get('original_exception')
        )

        self.phase = phase


class SimulationError(SeasonException):
    """
    Raised when a game could not be simulated.

    Examples:
    - Game engine failed twice with a transient error
    - Game engine raised a fatal error (no retry)

    Week processing stops; no result of the failing week is applied.
    """

    def __init__(
        self,
        message: str,
        week: int,
        game_id: str,
        home_team_id: str,
        away_team_id: str,
        attempts: int,
        **kwargs
    ):
        context = {
            "week": week,
            "game_id": game_id,
            "home_team_id": home_team_id,
            "away_team_id": away_team_id,
            "attempts": attempts,
            **kwargs.get('season_context', {})
        }

        super().__init__(
            message=message,
            error_code="SEASON_002",
            season_context=context,
            operation="simulate_game",
            recovery_strategy="retry_week",
            original_exception=kwargs.get('original_exception')
        )

        self.week = week
        self.game_id = game_id
        self.home_team_id = home_team_id
        self.away_team_id = away_team_id
        self.attempts = attempts

    @property
    def matchup(self) -> str:
        return f"{self.away_team_id} @ {self.home_team_id}"


class SeasonInitializationError(SeasonException):
    """
    Raised when a season cannot be set up.

    Examples:
    - Schedule generation failed
    - Provided schedule references unknown teams
    - Duplicate team ids in the league
    """

    def __init__(
        self,
        message: str,
        component: Optional[str] = None,
        **kwargs
    ):
        context = {
            "component": component,
            **kwargs.get('season_context', {})
        }

        super().__init__(
            message=message,
            error_code="SEASON_003",
            season_context={k: v for k, v in context.items() if v is not None},
            operation="initialization",
            recovery_strategy="reset",
            original_exception=kwargs.get('original_exception')
        )

        self.component = component
