"""
Tests for SeasonState and WeekSummary serialization and helpers.
"""

import json

import pytest

from season import SeasonPhase, SeasonSimOptions, SeasonSimulator, SeasonState, WeekSummary
from shared.game_result import InjuryType, PlayerInjury
from mocks.engines import StrengthEngine
from mocks.league import make_result


@pytest.fixture(scope="module")
def week_three_state(league_teams, league_schedule):
    """State after three weeks with one open injury."""
    game_id = league_schedule.get_week(3).game_for_team("NE2").game_id
    injury = PlayerInjury(
        player_id="NE2-RB", team_id="NE2", injury_type=InjuryType.MODERATE,
        week_occurred=3, weeks_remaining=4, player_name="NE2 RB",
    )
    simulator = SeasonSimulator(
        league_teams, StrengthEngine(injuries={game_id: injury}), SeasonSimOptions(season=2025)
    )
    state = simulator.initialize_season(simulator.create_season_state(), league_schedule)
    for _ in range(3):
        state = simulator.advance_week(state)
    return state


def _round_trip(state):
    return SeasonState.from_dict(json.loads(json.dumps(state.to_dict())))


class TestSeasonStateSerialization:

    def test_new_state(self):
        state = SeasonState(season=2025)
        restored = _round_trip(state)

        assert restored == state
        assert restored.phase == SeasonPhase.NOT_STARTED
        assert restored.schedule is None
        assert restored.standings is None

    def test_round_trip_is_stable(self, week_three_state):
        data = week_three_state.to_dict()
        assert _round_trip(week_three_state).to_dict() == data

    def test_round_trip_equal(self, week_three_state):
        assert _round_trip(week_three_state) == week_three_state

    def test_round_trip_fields(self, week_three_state):
        restored = _round_trip(week_three_state)

        assert restored.phase == SeasonPhase.REGULAR_SEASON
        assert restored.current_week == 4
        assert restored.completed_games == week_three_state.completed_games
        assert restored.injuries == week_three_state.injuries
        assert restored.standings == week_three_state.standings
        assert restored.schedule.weeks == week_three_state.schedule.weeks
        assert restored.player_stats == week_three_state.player_stats
        assert restored.xp_totals == week_three_state.xp_totals

    def test_restored_state_keeps_simulating(self, week_three_state, league_teams):
        simulator = SeasonSimulator(league_teams, StrengthEngine(), SeasonSimOptions(season=2025))

        from_original = simulator.advance_week(week_three_state)
        from_restored = simulator.advance_week(_round_trip(week_three_state))

        assert from_restored.standings == from_original.standings
        assert from_restored.injuries == from_original.injuries
        assert from_restored.xp_totals == from_original.xp_totals

    def test_json_safe(self, week_three_state):
        # Enums and tuples must already be plain values
        text = json.dumps(week_three_state.to_dict(), sort_keys=True)
        assert '"phase": "regular_season"' in text


class TestSeasonStateHelpers:

    def test_injured_player_ids(self, week_three_state):
        assert week_three_state.injured_player_ids == ["NE2-RB"]

    def test_game_partitions(self, week_three_state):
        assert len(week_three_state.regular_season_games()) == 48
        assert week_three_state.playoff_games() == []
        assert not week_three_state.is_complete
        assert week_three_state.champion_id is None

    def test_summary_for_week(self, week_three_state):
        assert week_three_state.summary_for_week(2).week == 2
        assert week_three_state.summary_for_week(9) is None


class TestWeekSummary:

    def test_total_xp(self, week_three_state):
        summary = week_three_state.summary_for_week(1)
        assert summary.total_xp == sum(g.amount for g in summary.xp_grants)
        assert summary.total_xp > 0

    def test_round_trip(self, week_three_state):
        summary = week_three_state.summary_for_week(3)
        restored = WeekSummary.from_dict(json.loads(json.dumps(summary.to_dict())))

        assert restored.week == 3
        assert restored.phase == SeasonPhase.REGULAR_SEASON
        assert restored.games == summary.games
        assert restored.new_injuries == summary.new_injuries
        assert restored.xp_grants == summary.xp_grants
        assert restored.to_dict() == summary.to_dict()

    def test_minimal_summary(self):
        summary = WeekSummary(
            week=1, phase=SeasonPhase.REGULAR_SEASON,
            games=(make_result("g1", 1, "AN1", "AN2", 20, 17),),
        )
        restored = WeekSummary.from_dict(summary.to_dict())

        assert restored == summary
        assert restored.standings_snapshot is None
        assert restored.total_xp == 0
