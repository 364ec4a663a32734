"""
Tests for SeasonSimOptions.
"""

import pytest

from scheduling import ScheduleConfig
from season import SeasonSimOptions


class TestValidation:

    def test_defaults_are_valid(self):
        options = SeasonSimOptions(season=2025)

        assert options.validate() == (True, [])
        assert options.max_workers == 1
        assert not options.combine_enabled
        assert options.seed is None

    @pytest.mark.parametrize("season", [1919, 0, -5])
    def test_season_year(self, season):
        is_valid, errors = SeasonSimOptions(season=season).validate()
        assert not is_valid
        assert str(season) in errors[0]

    def test_max_workers(self):
        is_valid, errors = SeasonSimOptions(season=2025, max_workers=0).validate()
        assert not is_valid
        assert "max_workers" in errors[0]

    def test_all_errors_reported(self):
        is_valid, errors = SeasonSimOptions(season=1900, max_workers=-1).validate()
        assert not is_valid
        assert len(errors) == 2


class TestSerialization:

    def test_dict_round_trip(self):
        options = SeasonSimOptions(
            season=2031, randomize_standings=True, combine_enabled=True, max_workers=8, seed=99
        )
        assert SeasonSimOptions.from_dict(options.to_dict()) == options

    def test_from_dict_defaults(self):
        assert SeasonSimOptions.from_dict({'season': 2025}) == SeasonSimOptions(season=2025)

    def test_json_file(self, tmp_path):
        options = SeasonSimOptions(season=2026, max_workers=4, seed=3)
        path = tmp_path / "options.json"

        options.to_json(str(path))

        assert path.exists()
        assert SeasonSimOptions.from_json(str(path)) == options


class TestScheduleConfig:

    def test_derived_config(self):
        config = SeasonSimOptions(season=2027, randomize_standings=True, seed=12).schedule_config()

        assert isinstance(config, ScheduleConfig)
        assert config.season_year == 2027
        assert config.randomize_standings
        assert config.seed == 12
        assert config.total_weeks == 18
        assert config.games_per_team == 17
