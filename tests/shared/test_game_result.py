"""
Tests for GameResult, PlayerGameStats and PlayerInjury.
"""

import pytest

from shared.game_result import GameResult, InjuryType, PlayerGameStats, PlayerInjury
from mocks.league import make_result, quarterback_line


class TestGameResult:

    def test_home_win(self):
        result = make_result("g1", 1, "AN1", "AN2", 24, 17)

        assert result.winner_id == "AN1"
        assert result.loser_id == "AN2"
        assert not result.is_tie

    def test_away_win(self):
        result = make_result("g1", 1, "AN1", "AN2", 10, 13)
        assert result.winner_id == "AN2"
        assert result.loser_id == "AN1"

    def test_tie(self):
        result = make_result("g1", 1, "AN1", "AN2", 20, 20)

        assert result.is_tie
        assert result.winner_id is None
        assert result.loser_id is None

    def test_team_lookups(self):
        result = make_result(
            "g1", 1, "AN1", "AN2", 24, 17,
            player_stats=(quarterback_line("AN1"), quarterback_line("AN2")),
        )

        assert result.team_ids == ("AN1", "AN2")
        assert result.score_for("AN2") == 17
        assert result.opponent_of("AN1") == "AN2"
        assert [s.player_id for s in result.stats_for_team("AN2")] == ["AN2-QB"]

    def test_unknown_team(self):
        result = make_result("g1", 1, "AN1", "AN2", 24, 17)
        with pytest.raises(KeyError):
            result.score_for("NW4")
        with pytest.raises(KeyError):
            result.opponent_of("NW4")

    def test_dict_round_trip(self):
        injury = PlayerInjury("AN2-WR", "AN2", InjuryType.MODERATE, 3, 4, player_name="AN2 WR")
        result = GameResult(
            game_id="2025-WC-AFC-2v7",
            week=19,
            home_team_id="AS1",
            away_team_id="AE2",
            home_score=31,
            away_score=28,
            player_stats=(quarterback_line("AS1", yards=301),),
            injuries=(injury,),
            is_playoff=True,
            playoff_round="wild_card",
            is_primetime=True,
        )
        assert GameResult.from_dict(result.to_dict()) == result


class TestPlayerGameStats:

    def test_participation_from_snaps(self):
        line = PlayerGameStats("p1", "P One", "AN1", "LT", snaps=12, team_snaps=60)

        assert line.participated
        assert line.snap_share == pytest.approx(0.2)

    def test_participation_from_stats(self):
        line = PlayerGameStats("p1", "P One", "AN1", "K", field_goals_made=2, field_goals_attempted=2)

        assert line.participated
        assert line.snap_share == 1.0

    def test_inactive_line(self):
        line = PlayerGameStats("p1", "P One", "AN1", "WR")

        assert not line.participated
        assert line.snap_share == 0.0

    def test_snap_share_capped(self):
        line = PlayerGameStats("p1", "P One", "AN1", "CB", snaps=70, team_snaps=65)
        assert line.snap_share == 1.0

    def test_from_dict_ignores_unknown_fields(self):
        data = quarterback_line("AN1").to_dict()
        data['passer_rating'] = 104.2

        assert PlayerGameStats.from_dict(data) == quarterback_line("AN1")


class TestPlayerInjury:

    def test_decremented(self):
        injury = PlayerInjury("AN1-QB", "AN1", InjuryType.MINOR, 2, 1)
        healed = injury.decremented()

        assert injury.weeks_remaining == 1
        assert healed.weeks_remaining == 0
        assert not healed.is_active
        assert healed.decremented().weeks_remaining == 0

    def test_dict_round_trip(self):
        injury = PlayerInjury("AN1-QB", "AN1", InjuryType.SEASON_ENDING, 8, 18, description="ACL")
        assert PlayerInjury.from_dict(injury.to_dict()) == injury
