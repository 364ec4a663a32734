"""
Scheduling Exception Hierarchy

Exceptions raised while building a regular season calendar.

Exception Hierarchy:
    SchedulingException (base)
    ├── ScheduleGenerationError
    └── ScheduleConfigurationError

Generation never returns a partial schedule: any failure surfaces as one of
these exceptions with the context needed to reproduce it (season, seed,
attempts, week).
"""

from datetime import datetime
from typing import Any, Dict, Optional


class SchedulingException(Exception):
    """
    Base exception for all scheduling errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error code
        context_dict: Generation context (season, seed, week, ...)
        recovery_strategy: How to recover from this error
        original_exception: Wrapped exception if from try/except
    """

    def __init__(
        self,
        message: str,
        error_code: str = "SCHED_000",
        context_dict: Optional[Dict[str, Any]] = None,
        recovery_strategy: str = "abort",
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.error_code = error_code
        self.context_dict = context_dict or {}
        self.recovery_strategy = recovery_strategy
        self.original_exception = original_exception
        self.timestamp = datetime.now().isoformat()

        super().__init__(self._build_error_message())

    def _build_error_message(self) -> str:
        """Build comprehensive error message with all context"""
        lines = [f"[{self.error_code}] {self.message}"]

        if self.context_dict:
            lines.append("Context:")
            for key, value in self.context_dict.items():
                lines.append(f"  {key}: {value}")

        lines.append(f"Recovery: {self.recovery_strategy}")

        if self.original_exception:
            lines.append(f"Original Error: {type(self.original_exception).__name__}: {str(self.original_exception)}")

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context_dict,
            "recovery_strategy": self.recovery_strategy,
            "timestamp": self.timestamp,
            "original_error": str(self.original_exception) if self.original_exception else None
        }


class ScheduleGenerationError(SchedulingException):
    """
    Raised when constraint satisfaction is exhausted.

    Examples:
    - League is not 2 conferences x 4 divisions x 4 teams
    - Bye search used every retry without a legal assignment
    - A prime-time slot had no eligible game
    """

    def __init__(
        self,
        message: str,
        season: Optional[int] = None,
        attempts: Optional[int] = None,
        week: Optional[int] = None,
        **kwargs
    ):
        context = {
            "season": season,
            "attempts": attempts,
            "week": week,
            **kwargs.get('context_dict', {})
        }

        super().__init__(
            message=message,
            error_code="SCHED_001",
            context_dict={k: v for k, v in context.items() if v is not None},
            recovery_strategy="retry_with_new_seed",
            original_exception=kwargs.get('original_exception')
        )

        self.season = season
        self.attempts = attempts
        self.week = week


class ScheduleConfigurationError(SchedulingException):
    """Raised when a ScheduleConfig fails validation before generation starts."""

    def __init__(self, errors: list, **kwargs):
        super().__init__(
            message=f"Invalid schedule configuration: {'; '.join(errors)}",
            error_code="SCHED_002",
            context_dict={"errors": errors, **kwargs.get('context_dict', {})},
            recovery_strategy="fix_configuration",
        )
        self.errors = errors
