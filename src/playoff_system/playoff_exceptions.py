"""
Playoff System Exception Hierarchy

Exceptions for seeding and bracket operations, with error codes, severity,
recovery strategies and context for logging.

Exception Hierarchy:
    PlayoffException (base)
    ├── InvalidMatchupError
    └── InvalidSeedingError

Every rejected operation leaves the bracket it was given untouched; the
caller keeps its previous PlayoffBracket value.
"""

from enum import Enum
from typing import Any, Dict, List, Optional
from datetime import datetime


class ExceptionSeverity(Enum):
    """How badly a playoff error affects the season"""
    CRITICAL = "critical"  # No bracket can be built
    ERROR = "error"        # One call rejected, bracket intact
    WARNING = "warning"


class RecoveryStrategy(Enum):
    """What the caller should do with its unchanged bracket"""
    ABORT = "abort"      # Stop the postseason
    RETRY = "retry"      # Call again with corrected input
    SKIP = "skip"        # Drop the rejected result
    MANUAL = "manual"    # Fix the standings by hand


class PlayoffException(Exception):
    """
    Base exception for seeding and bracket errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error code (e.g., "PLAYOFF_001")
        severity: Exception severity level
        recovery_strategy: Recommended recovery action
        context_dict: Matchup id, conference, participants
        original_exception: Original exception if wrapping another exception
        timestamp: When the exception was raised
    """

    def __init__(
        self,
        message: str,
        error_code: str = "PLAYOFF_000",
        severity: ExceptionSeverity = ExceptionSeverity.ERROR,
        recovery_strategy: RecoveryStrategy = RecoveryStrategy.ABORT,
        context_dict: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.recovery_strategy = recovery_strategy
        self.context_dict = context_dict or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now().isoformat()

        super().__init__(self._build_error_message())

    def _build_error_message(self) -> str:
        """Error code line, severity, recovery and one line per context entry"""
        lines = [
            f"[{self.error_code}] {self.message}",
            f"Severity: {self.severity.value}",
            f"Recovery: {self.recovery_strategy.value}",
        ]

        if self.context_dict:
            lines.append("Context:")
            for key, value in self.context_dict.items():
                lines.append(f"  {key}: {value}")

        if self.original_exception:
            lines.append(f"Original Error: {type(self.original_exception).__name__}: {str(self.original_exception)}")

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Structured form used by log_exception"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "recovery_strategy": self.recovery_strategy.value,
            "context": self.context_dict,
            "timestamp": self.timestamp,
            "original_error": str(self.original_exception) if self.original_exception else None
        }


class InvalidMatchupError(PlayoffException):
    """
    Raised when a playoff result cannot be recorded.

    Examples:
    - Matchup id does not exist in the bracket
    - Matchup already has a recorded winner
    - Winner is not one of the two participants
    """

    def __init__(
        self,
        matchup_id: str,
        reason: str,
        winner_id: Optional[str] = None,
        participants: Optional[List[str]] = None,
        **kwargs
    ):
        context = {
            "matchup_id": matchup_id,
            "winner_id": winner_id,
            "participants": participants,
            **kwargs.get('context_dict', {})
        }

        super().__init__(
            message=f"Cannot record result for {matchup_id}: {reason}",
            error_code="PLAYOFF_001",
            severity=ExceptionSeverity.ERROR,
            recovery_strategy=RecoveryStrategy.SKIP,
            context_dict={k: v for k, v in context.items() if v is not None},
            original_exception=kwargs.get('original_exception')
        )

        self.matchup_id = matchup_id
        self.reason = reason
        self.winner_id = winner_id


class InvalidSeedingError(PlayoffException):
    """
    Raised when standings cannot produce a legal seeding.

    Examples:
    - Conference has fewer than 7 teams
    - Conference has more divisions than playoff spots
    """

    def __init__(
        self,
        message: str,
        conference: Optional[str] = None,
        team_count: Optional[int] = None,
        **kwargs
    ):
        context = {
            "conference": conference,
            "team_count": team_count,
            **kwargs.get('context_dict', {})
        }

        super().__init__(
            message=message,
            error_code="PLAYOFF_002",
            severity=ExceptionSeverity.CRITICAL,
            recovery_strategy=RecoveryStrategy.ABORT,
            context_dict={k: v for k, v in context.items() if v is not None},
            original_exception=kwargs.get('original_exception')
        )

        self.conference = conference
        self.team_count = team_count
