"""
Unit tests for standings updates.

update_standings_with_game is pure: every test checks the returned table and,
where it matters, that the input table was left alone.
"""

import pytest

from standings import create_initial_standings, replay_standings, update_standings_with_game
from mocks.league import make_result


@pytest.fixture
def initial_table(league_teams):
    return create_initial_standings(league_teams, 2025)


class TestInitialStandings:

    def test_every_team_starts_at_zero(self, initial_table, league_teams):
        assert len(initial_table.team_ids) == len(league_teams)
        for team in league_teams:
            standing = initial_table[team.team_id]
            assert standing.games_played == 0
            assert standing.win_percentage == 0.0
            assert standing.conference == team.conference
            assert standing.division == team.division

    def test_grouping_helpers(self, initial_table):
        assert initial_table.conferences == ["AFC", "NFC"]
        assert initial_table.division_team_ids("AFC North") == ["AN1", "AN2", "AN3", "AN4"]
        assert len(initial_table.conference_team_ids("NFC")) == 16
        assert len(initial_table.divisions_in("AFC")) == 4


class TestUpdateStandings:

    def test_win_and_loss_applied(self, initial_table):
        table = update_standings_with_game(initial_table, make_result("G1", 1, "AN1", "AN2", 24, 17))

        assert table["AN1"].record_string == "1-0"
        assert table["AN2"].record_string == "0-1"
        assert table["AN1"].points_for == 24
        assert table["AN1"].points_against == 17
        assert table["AN2"].point_differential == -7
        assert table["AN1"].streak_string == "W1"
        assert table["AN2"].streak_string == "L1"

    def test_input_table_not_mutated(self, initial_table):
        update_standings_with_game(initial_table, make_result("G1", 1, "AN1", "AN2", 24, 17))

        assert initial_table["AN1"].wins == 0
        assert initial_table["AN2"].losses == 0
        assert initial_table.applied_game_ids == frozenset()

    def test_division_game_counts_everywhere(self, initial_table):
        table = update_standings_with_game(initial_table, make_result("G1", 1, "AN1", "AN2", 24, 17))

        assert table["AN1"].division_record == "1-0"
        assert table["AN1"].conference_record == "1-0"
        assert table["AN1"].head_to_head_against("AN2").wins == 1
        assert table["AN2"].head_to_head_against("AN1").losses == 1

    def test_conference_game_outside_division(self, initial_table):
        table = update_standings_with_game(initial_table, make_result("G1", 1, "AN1", "AS1", 10, 20))

        assert table["AS1"].division_record == "0-0"
        assert table["AS1"].conference_record == "1-0"
        assert table["AN1"].conference_record == "0-1"

    def test_inter_conference_game(self, initial_table):
        table = update_standings_with_game(initial_table, make_result("G1", 1, "AN1", "NN1", 31, 3))

        assert table["AN1"].record_string == "1-0"
        assert table["AN1"].conference_record == "0-0"
        assert table["NN1"].division_record == "0-0"

    def test_tie_counts_half(self, initial_table):
        table = update_standings_with_game(initial_table, make_result("G1", 1, "AN1", "AN2", 20, 20))

        for team_id in ("AN1", "AN2"):
            standing = table[team_id]
            assert standing.record_string == "0-0-1"
            assert standing.win_percentage == 0.5
            assert standing.standing_points == 1
            assert standing.division_ties == 1
            assert standing.streak == 0
            assert standing.streak_string == "T"

    def test_duplicate_game_is_ignored(self, initial_table):
        result = make_result("G1", 1, "AN1", "AN2", 24, 17)
        once = update_standings_with_game(initial_table, result)
        twice = update_standings_with_game(once, result)

        assert twice is once
        assert twice["AN1"].wins == 1

    def test_playoff_game_is_ignored(self, initial_table):
        result = make_result("P1", 19, "AN1", "AS1", 24, 17, is_playoff=True)
        assert update_standings_with_game(initial_table, result) is initial_table

    def test_unknown_team_is_ignored(self, initial_table):
        result = make_result("G1", 1, "AN1", "XX9", 24, 17)
        assert update_standings_with_game(initial_table, result) is initial_table

    def test_streak_and_last_five(self, initial_table):
        table = initial_table
        for week in range(1, 8):
            table = update_standings_with_game(table, make_result(f"G{week}", week, "AN1", "AN2", 21, 14))
        table = update_standings_with_game(table, make_result("G8", 8, "AN1", "AN2", 7, 14))

        assert table["AN1"].streak == -1
        assert table["AN1"].last_five == ("W", "W", "W", "W", "L")
        assert table["AN2"].streak_string == "W1"


class TestReplay:

    @pytest.fixture
    def results(self):
        return [
            make_result("G1", 1, "AN1", "AN2", 24, 17),
            make_result("G2", 1, "AS1", "NN1", 10, 10),
            make_result("G3", 2, "AN2", "AS1", 3, 30),
            make_result("G4", 2, "NN1", "AN1", 14, 28),
            make_result("G5", 3, "AS1", "AN1", 17, 16),
        ]

    def test_order_does_not_change_records(self, league_teams, results):
        forward = replay_standings(league_teams, results, 2025)
        backward = replay_standings(league_teams, list(reversed(results)), 2025)

        for team_id in forward.team_ids:
            a, b = forward[team_id], backward[team_id]
            assert (a.wins, a.losses, a.ties) == (b.wins, b.losses, b.ties)
            assert (a.points_for, a.points_against) == (b.points_for, b.points_against)
            assert a.division_record == b.division_record
            assert a.conference_record == b.conference_record
        assert forward.totals() == backward.totals()

    def test_league_totals_balance(self, league_teams, results):
        wins, losses, ties = replay_standings(league_teams, results, 2025).totals()
        assert wins == losses == 4
        assert ties == 2

    def test_table_round_trip(self, league_teams, results):
        from standings import StandingsTable

        table = replay_standings(league_teams, results, 2025)
        restored = StandingsTable.from_dict(table.to_dict())

        assert restored == table
