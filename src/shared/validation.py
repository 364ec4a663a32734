"""
Validation Result Types

Shared containers used by the schedule and bracket checkers. A checker runs
every check it knows about and records each violation as a ValidationError
entry; it never raises part-way through. Callers that prefer an exception
can call ``ValidationResult.raise_if_invalid()``.

Usage Example:
    result = validate_schedule(schedule, teams)

    if not result.valid:
        print(result.get_summary())
        for error in result.errors:
            print(f"  {error}")
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ValidationSeverity(Enum):
    """Severity levels for validation errors"""
    CRITICAL = "critical"  # Structure broken, cannot be used
    ERROR = "error"        # Invariant violated
    WARNING = "warning"    # Unusual but legal
    INFO = "info"          # Informational, no action needed


@dataclass
class ValidationError:
    """
    Single invariant violation found by a checker.

    Attributes:
        severity: Error severity level
        category: Error category (e.g., "games_per_team", "bye_weeks", "bracket")
        message: Human-readable error message
        context: Additional context (team ids, week numbers, matchup ids)
        suggestion: Suggested fix or recovery action
    """
    severity: ValidationSeverity
    category: str
    message: str
    context: Dict[str, Any] = field(default_factory=dict)
    suggestion: Optional[str] = None

    def __str__(self) -> str:
        """String representation for logging"""
        result = f"[{self.severity.value.upper()}] {self.category}: {self.message}"
        if self.context:
            result += f"\n  Context: {self.context}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> Dict[str, Any]:
        return {
            'severity': self.severity.value,
            'category': self.category,
            'message': self.message,
            'context': dict(self.context),
            'suggestion': self.suggestion,
        }


class ValidationFailedException(Exception):
    """Raised by ValidationResult.raise_if_invalid() when errors were recorded."""

    def __init__(self, result: 'ValidationResult'):
        self.result = result
        lines = [result.get_summary()] + [str(error) for error in result.errors]
        super().__init__("\n".join(lines))


@dataclass
class ValidationResult:
    """
    Result of validation run.

    Attributes:
        valid: Whether validation passed (no errors)
        errors: List of validation errors
        warnings: List of validation warnings
        info: List of informational messages
        total_checks: Total number of checks performed
    """
    valid: bool = True
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationError] = field(default_factory=list)
    info: List[ValidationError] = field(default_factory=list)
    total_checks: int = 0

    def add_error(
        self,
        severity: ValidationSeverity,
        category: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestion: Optional[str] = None
    ):
        """Add validation error to result"""
        error = ValidationError(
            severity=severity,
            category=category,
            message=message,
            context=context or {},
            suggestion=suggestion
        )

        if severity == ValidationSeverity.CRITICAL or severity == ValidationSeverity.ERROR:
            self.errors.append(error)
            self.valid = False
        elif severity == ValidationSeverity.WARNING:
            self.warnings.append(error)
        else:
            self.info.append(error)

    def check(self) -> None:
        """Count one performed check."""
        self.total_checks += 1

    def errors_in(self, category: str) -> List[ValidationError]:
        return [e for e in self.errors if e.category == category]

    def get_summary(self) -> str:
        """Get human-readable summary"""
        return (
            f"Validation Result: {'PASS' if self.valid else 'FAIL'}\n"
            f"  Total Checks: {self.total_checks}\n"
            f"  Errors: {len(self.errors)}\n"
            f"  Warnings: {len(self.warnings)}\n"
            f"  Info: {len(self.info)}"
        )

    def raise_if_invalid(self) -> None:
        if not self.valid:
            raise ValidationFailedException(self)
