"""
Tests for ScheduleValidator against hand-corrupted schedules.
"""

from dataclasses import replace

import pytest

from scheduling import ScheduleConfig, ScheduleValidator, TimeSlot
from shared.validation import ValidationFailedException


def _replace_week(schedule, week_number, **changes):
    weeks = tuple(
        replace(week, **changes) if week.week == week_number else week
        for week in schedule.weeks
    )
    return replace(schedule, weeks=weeks)


@pytest.fixture
def validator(league_teams):
    return ScheduleValidator(league_teams, ScheduleConfig(season_year=2025))


class TestScheduleValidator:

    def test_generated_schedule_passes(self, validator, league_schedule):
        result = validator.validate_schedule(league_schedule)
        assert result.valid
        assert result.total_checks > 272
        result.raise_if_invalid()

    def test_missing_week_flagged(self, validator, league_schedule):
        truncated = replace(league_schedule, weeks=league_schedule.weeks[:-1])
        result = validator.validate_schedule(truncated)
        assert not result.valid
        assert result.errors_in("week_count")
        assert result.errors_in("games_per_team")

    def test_double_booked_team_flagged(self, validator, league_schedule):
        week = league_schedule.get_week(1)
        first, second = week.games[0], week.games[1]
        clash = replace(second, home_team_id=first.home_team_id)
        corrupted = _replace_week(league_schedule, 1, games=(first, clash) + week.games[2:])

        result = validator.validate_schedule(corrupted)
        assert result.errors_in("double_booked")

    def test_dropped_game_breaks_bye_count(self, validator, league_schedule):
        week = league_schedule.get_week(2)
        corrupted = _replace_week(league_schedule, 2, games=week.games[1:])

        result = validator.validate_schedule(corrupted)
        assert result.errors_in("bye_count")
        assert result.errors_in("bye_weeks") == []
        assert result.errors_in("games_per_team")

    def test_duplicate_game_id_flagged(self, validator, league_schedule):
        week = league_schedule.get_week(3)
        first, second = week.games[0], week.games[1]
        corrupted = _replace_week(
            league_schedule, 3, games=(first, replace(second, game_id=first.game_id)) + week.games[2:]
        )

        result = validator.validate_schedule(corrupted)
        assert result.errors_in("game_ids")

    def test_primetime_flag_mismatch_flagged(self, validator, league_schedule):
        week = league_schedule.get_week(4)
        games = list(week.games)
        index = next(i for i, g in enumerate(games) if g.time_slot == TimeSlot.EARLY)
        games[index] = replace(games[index], is_primetime=True)
        corrupted = _replace_week(league_schedule, 4, games=tuple(games))

        result = validator.validate_schedule(corrupted)
        assert result.errors_in("primetime")

    def test_raise_if_invalid(self, validator, league_schedule):
        corrupted = replace(league_schedule, weeks=league_schedule.weeks[:-1])
        with pytest.raises(ValidationFailedException):
            validator.validate_schedule(corrupted).raise_if_invalid()
