"""
Tests for clinching and elimination math.
"""

from dataclasses import replace

import pytest

from standings import ClinchType, check_clinching, create_initial_standings
from standings.clinching import (
    has_clinched_bye,
    has_clinched_division,
    has_clinched_playoff_berth,
    is_eliminated,
)


def _records(table, records):
    """records: team_id -> (wins, losses); unlisted teams keep 0-0."""
    updated = dict(table.standings)
    for team_id, (wins, losses) in records.items():
        updated[team_id] = replace(updated[team_id], wins=wins, losses=losses)
    return replace(table, standings=updated)


def _conference(conference, wins, losses):
    return {
        f"{conference[0]}{division}{index}": (wins, losses)
        for division in "NSEW" for index in range(1, 5)
    }


@pytest.fixture
def table(league_teams):
    return create_initial_standings(league_teams, 2025)


class TestClinching:

    def test_nothing_settled_at_kickoff(self, table):
        assert check_clinching(table, week=0) == []

    def test_runaway_leader_clinches_everything(self, table):
        records = _conference("AFC", 4, 9)
        records["AN1"] = (13, 0)
        table = _records(table, records)

        assert has_clinched_division(table, "AN1")
        assert has_clinched_bye(table, "AN1")
        assert has_clinched_playoff_berth(table, "AN1")

        events = {e.clinch_type for e in check_clinching(table, week=13) if e.team_id == "AN1"}
        assert events == {ClinchType.DIVISION, ClinchType.BYE, ClinchType.PLAYOFF_BERTH}

    def test_berth_without_division(self, table):
        records = _conference("AFC", 5, 10)
        records["AN1"] = (14, 1)
        records["AN2"] = (14, 1)
        table = _records(table, records)

        assert not has_clinched_division(table, "AN1")
        assert has_clinched_playoff_berth(table, "AN1")
        assert has_clinched_playoff_berth(table, "AN2")
        assert not has_clinched_bye(table, "AN1")

    def test_catchable_leader_has_not_clinched(self, table):
        records = _conference("AFC", 8, 7)
        records["AN1"] = (10, 5)
        table = _records(table, records)

        assert not has_clinched_division(table, "AN1")
        assert not has_clinched_playoff_berth(table, "AN1")

    def test_equal_ceiling_is_not_a_clinch(self, table):
        # AN2 can only tie AN1; the tiebreak could still go either way
        table = _records(table, {"AN1": (12, 5), "AN2": (12, 5), "AN3": (0, 17), "AN4": (0, 17)})
        assert not has_clinched_division(table, "AN1")


class TestElimination:

    @pytest.fixture
    def late_season(self, table):
        records = _conference("AFC", 3, 12)
        records.update({
            "AN1": (12, 3), "AN4": (3, 12),
            "AS1": (12, 3), "AS2": (12, 3),
            "AE1": (12, 3), "AE2": (12, 3),
            "AW1": (12, 3), "AW2": (12, 3),
        })
        return _records(table, records)

    def test_eliminated_when_three_wild_cards_locked(self, late_season):
        assert is_eliminated(late_season, "AN4")

    def test_not_eliminated_while_division_open(self, late_season):
        assert not is_eliminated(late_season, "AN1")

        # 11-4 with two left can still pass AW1 and AW2
        table = _records(late_season, {"AW3": (11, 4)})
        assert not is_eliminated(table, "AW3")

    def test_two_wild_cards_not_enough(self, late_season):
        table = _records(late_season, {"AW2": (4, 11)})
        assert not is_eliminated(table, "AN4")

    def test_check_clinching_reports_eliminations(self, late_season):
        eliminated = {
            e.team_id for e in check_clinching(late_season, week=15)
            if e.clinch_type == ClinchType.ELIMINATED
        }
        assert "AN4" in eliminated
        assert "AN1" not in eliminated
