"""
Tests for the game engine helpers that build a GameSituation.
"""

from dataclasses import replace

import pytest

from season.game_engine import (
    LATE_SEASON_WEATHER,
    WEATHER_CONDITIONS,
    EngineError,
    FatalEngineError,
    GameSituation,
    home_field_modifier,
    scheme_matchups,
    weather_for,
)


@pytest.fixture
def teams_by_id(league_teams):
    return {team.team_id: team for team in league_teams}


class TestHomeField:

    def test_outdoor(self, teams_by_id):
        assert home_field_modifier(teams_by_id["AN1"]) == 1.0

    def test_dome(self, teams_by_id):
        assert home_field_modifier(teams_by_id["AS1"]) == 0.5

    def test_neutral_site(self, teams_by_id):
        assert home_field_modifier(teams_by_id["AN1"], neutral_site=True) == 0.0
        assert home_field_modifier(teams_by_id["AS1"], neutral_site=True) == 0.0


class TestWeather:

    def test_dome_always_dome(self, teams_by_id):
        for week in (1, 10, 17):
            assert weather_for(teams_by_id["NN3"], week, f"g{week}", seed=1) == "dome"

    def test_deterministic(self, teams_by_id):
        team = teams_by_id["AN1"]
        assert weather_for(team, 4, "g-1", seed=5) == weather_for(team, 4, "g-1", seed=5)

    def test_early_season_conditions(self, teams_by_id):
        team = teams_by_id["AN1"]
        for index in range(40):
            assert weather_for(team, 3, f"g-{index}", seed=2) in WEATHER_CONDITIONS

    def test_late_season_can_snow(self, teams_by_id):
        team = teams_by_id["AN1"]
        seen = {weather_for(team, 16, f"g-{index}", seed=2) for index in range(200)}

        assert seen <= set(LATE_SEASON_WEATHER)
        assert "snow" in seen or "cold" in seen


class TestSchemeMatchups:

    def test_both_sides(self, teams_by_id):
        home = replace(teams_by_id["AN1"], offensive_scheme="West Coast", defensive_scheme="4-3")
        away = replace(teams_by_id["AN2"], offensive_scheme="Air Raid", defensive_scheme="3-4")

        assert scheme_matchups(home, away) == {
            'home_offense': "West Coast vs 3-4",
            'away_offense': "Air Raid vs 4-3",
        }


class TestGameSituation:

    def test_to_dict(self):
        situation = GameSituation(
            game_id="g1",
            week=20,
            season=2025,
            home_team_id="AN1",
            away_team_id="AS1",
            is_playoff=True,
            playoff_round="divisional",
            unavailable_player_ids=frozenset({"AS1-WR", "AN1-QB"}),
        )
        data = situation.to_dict()

        assert data['unavailable_player_ids'] == ["AN1-QB", "AS1-WR"]
        assert data['playoff_round'] == "divisional"
        assert data['home_field_modifier'] == 1.0
        assert data['weather'] == "clear"


class TestEngineErrors:

    def test_fatal_is_engine_error(self):
        error = FatalEngineError("bad roster", game_id="g1")
        assert isinstance(error, EngineError)
        assert error.game_id == "g1"
        assert str(error) == "bad roster"
