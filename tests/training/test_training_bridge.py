"""
Tests for TrainingIntegrationBridge: season events to XP grants.
"""

from collections import Counter

import pytest

from season.season_state import SeasonPhase, WeekSummary
from shared.game_result import PlayerGameStats
from training import (
    PracticeFocus,
    PracticeIntensity,
    PracticePlan,
    TrainingIntegrationBridge,
    XPSource,
    performance_grade,
)
from mocks.league import make_result, quarterback_line


@pytest.fixture
def teams(league_teams):
    return {team.team_id: team for team in league_teams}


@pytest.fixture
def bridge():
    return TrainingIntegrationBridge()


@pytest.fixture
def summary():
    result = make_result(
        "WK10-AN2-AN1", 10, "AN1", "AN2", 27, 13,
        player_stats=(quarterback_line("AN1"), quarterback_line("AN2", yards=180, touchdowns=1)),
    )
    return WeekSummary(
        week=10,
        phase=SeasonPhase.REGULAR_SEASON,
        games=(result,),
        bye_teams=("AS1", "AS2"),
    )


class TestPerformanceGrade:

    def test_offensive_line_flat_grade(self):
        line = PlayerGameStats(player_id="X", player_name="X", team_id="AN1", position="LT", snaps=60)
        assert performance_grade(line) == 70

    def test_quarterback_grade(self):
        assert performance_grade(quarterback_line("AN1")) == 78

    def test_grade_clamped(self):
        line = quarterback_line("AN1", yards=600, touchdowns=8, attempts=40, completions=38)
        assert performance_grade(line) == 100


class TestProcessWeek:

    def test_game_grants(self, bridge, summary, teams):
        grants = bridge.process_week(summary, teams)
        game = {g.player_id: g.amount for g in grants if g.source == XPSource.GAME}

        # Winner: 50 + 25 + 35 (grade 78), loser: 50 + 20 (grade 72)
        assert game == {"AN1-QB": 110, "AN2-QB": 70}

    def test_practice_for_teams_that_played(self, bridge, summary, teams):
        grants = bridge.process_week(summary, teams)
        practice = [g for g in grants if g.source == XPSource.PRACTICE]

        assert Counter(g.team_id for g in practice) == {"AN1": 10, "AN2": 10}
        assert {g.amount for g in practice} == {30}

    def test_bye_teams_get_bye_xp(self, bridge, summary, teams):
        grants = bridge.process_week(summary, teams)
        bye = [g for g in grants if g.source == XPSource.BYE_WEEK]

        assert Counter(g.team_id for g in bye) == {"AS1": 10, "AS2": 10}
        assert {g.amount for g in bye} == {45}

    def test_injured_players_skip_practice(self, bridge, summary, teams):
        grants = bridge.process_week(summary, teams, injured_ids={"AN1-RB", "AS1-QB"})
        practiced = {g.player_id for g in grants if g.source in (XPSource.PRACTICE, XPSource.BYE_WEEK)}

        assert "AN1-RB" not in practiced
        assert "AS1-QB" not in practiced
        assert "AN1-WR" in practiced

    def test_practice_plan_per_team(self, bridge, summary, teams):
        plans = {"AN1": PracticePlan(PracticeFocus.PASSING, PracticeIntensity.HIGH)}
        grants = bridge.process_week(summary, teams, practice_plans=plans)
        an1 = {g.player_id: g.amount for g in grants if g.source == XPSource.PRACTICE and g.team_id == "AN1"}

        assert an1 == {"AN1-QB": 75, "AN1-WR": 75, "AN1-TE": 75}

    def test_grant_order(self, bridge, summary, teams):
        sources = [g.source for g in bridge.process_week(summary, teams)]
        assert sources == sorted(
            sources, key=[XPSource.GAME, XPSource.PRACTICE, XPSource.BYE_WEEK].index
        )


class TestPostseason:

    def test_playoff_round_bonus(self, bridge, teams):
        result = make_result(
            "2025-WC-AFC-2v7", 19, "AS1", "AE2", 24, 10,
            player_stats=(quarterback_line("AS1"), quarterback_line("AE2")),
            is_playoff=True,
        )
        grants = bridge.process_playoff_round([result], teams, week=19)
        bonus = [g for g in grants if g.source == XPSource.PLAYOFF_GAME]

        assert {g.player_id for g in bonus} == {"AS1-QB", "AE2-QB"}
        assert {g.amount for g in bonus} == {100}
        assert len([g for g in grants if g.source == XPSource.GAME]) == 2

    def test_championship_and_awards(self, bridge, teams):
        grants = bridge.process_season_awards("NN1", teams, week=22, awards=[("AN1-QB", "mvp")])
        championship = [g for g in grants if g.description == "Championship"]

        assert len(championship) == 10
        assert {g.amount for g in championship} == {500}
        mvp = [g for g in grants if g.player_id == "AN1-QB"]
        assert mvp[0].amount == 1000
        assert mvp[0].team_id == "AN1"
        assert mvp[0].description == "Mvp"

    def test_unknown_award_raises(self, bridge, teams):
        with pytest.raises(ValueError):
            bridge.process_season_awards(None, teams, week=22, awards=[("AN1-QB", "best_haircut")])

    def test_age_progression_for_every_player(self, bridge, teams):
        progressions = bridge.process_age_progression(teams)
        assert len(progressions) == 320


class FlatDevelopment:
    """Any object with the PlayerDevelopment methods can drive the bridge."""

    def calculate_game_xp(self, player, won, performance_grade, snap_share=1.0):
        return 1

    def calculate_practice_xp(self, player, plan):
        return 2

    def calculate_bye_week_xp(self, player, plan):
        return 3

    def calculate_award_xp(self, award_type):
        return 4

    def calculate_age_progression(self, player):
        raise NotImplementedError


class TestCustomDevelopment:

    def test_bridge_uses_injected_development(self, summary, teams):
        grants = TrainingIntegrationBridge(development=FlatDevelopment()).process_week(summary, teams)
        amounts = Counter((g.source, g.amount) for g in grants)

        assert amounts[(XPSource.GAME, 1)] == 2
        assert amounts[(XPSource.PRACTICE, 2)] == 20
        assert amounts[(XPSource.BYE_WEEK, 3)] == 20
