"""
Tests for the shared validation containers.
"""

import pytest

from shared.validation import ValidationFailedException, ValidationResult, ValidationSeverity


class TestValidationResult:

    def test_starts_valid(self):
        result = ValidationResult()

        assert result.valid
        result.raise_if_invalid()

    def test_severity_routing(self):
        result = ValidationResult()
        result.add_error(ValidationSeverity.WARNING, "home_balance", "AN1 has 10 home games")
        result.add_error(ValidationSeverity.INFO, "note", "fyi")

        assert result.valid
        assert len(result.warnings) == 1
        assert len(result.info) == 1

        result.add_error(ValidationSeverity.CRITICAL, "week_count", "17 weeks")
        result.add_error(ValidationSeverity.ERROR, "bye_weeks", "AN1 has no bye", context={'team_id': "AN1"})

        assert not result.valid
        assert [e.category for e in result.errors] == ["week_count", "bye_weeks"]
        assert result.errors_in("bye_weeks")[0].context == {'team_id': "AN1"}

    def test_check_counter(self):
        result = ValidationResult()
        for _ in range(3):
            result.check()
        assert result.total_checks == 3
        assert "Total Checks: 3" in result.get_summary()

    def test_raise_if_invalid(self):
        result = ValidationResult()
        result.add_error(ValidationSeverity.ERROR, "bracket", "missing matchup", suggestion="regenerate")

        with pytest.raises(ValidationFailedException) as exc_info:
            result.raise_if_invalid()

        assert exc_info.value.result is result
        assert "missing matchup" in str(exc_info.value)
        assert "Suggestion: regenerate" in str(exc_info.value)

    def test_error_to_dict(self):
        result = ValidationResult()
        result.add_error(ValidationSeverity.ERROR, "seeding", "bad seed", context={'seed': 8})

        assert result.errors[0].to_dict() == {
            'severity': "error",
            'category': "seeding",
            'message': "bad seed",
            'context': {'seed': 8},
            'suggestion': None,
        }
