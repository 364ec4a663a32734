"""
Tests for weekly injury bookkeeping.
"""

from season.injuries import collect_new_injuries, update_injuries
from shared.game_result import InjuryType, PlayerInjury
from mocks.league import make_result


def _injury(player_id, weeks, week=1, injury_type=InjuryType.MINOR):
    return PlayerInjury(
        player_id=player_id,
        team_id=player_id.split("-")[0],
        injury_type=injury_type,
        week_occurred=week,
        weeks_remaining=weeks,
    )


class TestUpdateInjuries:

    def test_new_injury_keeps_full_duration(self):
        injuries, recoveries = update_injuries({}, [_injury("AN1-QB", 3)])

        assert injuries["AN1-QB"].weeks_remaining == 3
        assert recoveries == []

    def test_existing_injuries_count_down(self):
        current = {"AN1-QB": _injury("AN1-QB", 3), "AN2-WR": _injury("AN2-WR", 2)}

        injuries, recoveries = update_injuries(current, [])

        assert injuries["AN1-QB"].weeks_remaining == 2
        assert injuries["AN2-WR"].weeks_remaining == 1
        assert recoveries == []

    def test_recovery_at_zero(self):
        current = {"AN1-QB": _injury("AN1-QB", 1)}

        injuries, recoveries = update_injuries(current, [])

        assert injuries == {}
        assert len(recoveries) == 1
        assert recoveries[0].player_id == "AN1-QB"
        assert recoveries[0].weeks_remaining == 0

    def test_input_not_modified(self):
        current = {"AN1-QB": _injury("AN1-QB", 2)}
        update_injuries(current, [_injury("AN1-RB", 4)])

        assert list(current) == ["AN1-QB"]
        assert current["AN1-QB"].weeks_remaining == 2

    def test_reinjury_keeps_longer_absence(self):
        current = {"AN1-QB": _injury("AN1-QB", 5)}

        shorter, _ = update_injuries(current, [_injury("AN1-QB", 2, week=4)])
        longer, _ = update_injuries(current, [_injury("AN1-QB", 8, week=4)])

        assert shorter["AN1-QB"].weeks_remaining == 4
        assert longer["AN1-QB"].weeks_remaining == 8
        assert longer["AN1-QB"].week_occurred == 4

    def test_reinjured_on_recovery_week(self):
        """The old injury runs out and the new one replaces it; both are reported."""
        current = {"AN1-QB": _injury("AN1-QB", 1)}

        injuries, recoveries = update_injuries(current, [_injury("AN1-QB", 3, week=6)])

        assert [r.player_id for r in recoveries] == ["AN1-QB"]
        assert injuries["AN1-QB"].weeks_remaining == 3

    def test_zero_week_injury_ignored(self):
        injuries, recoveries = update_injuries({}, [_injury("AN1-QB", 0)])
        assert injuries == {}
        assert recoveries == []

    def test_recoveries_sorted_by_player(self):
        current = {pid: _injury(pid, 1) for pid in ("NW2-K", "AN1-QB", "AE3-CB")}
        _, recoveries = update_injuries(current, [])
        assert [r.player_id for r in recoveries] == ["AE3-CB", "AN1-QB", "NW2-K"]


class TestCollectNewInjuries:

    def test_result_order(self):
        results = [
            make_result("g1", 1, "AN1", "AN2", 20, 10, injuries=[_injury("AN2-RB", 2)]),
            make_result("g2", 1, "AS1", "AS2", 20, 10),
            make_result("g3", 1, "AE1", "AE2", 20, 10,
                        injuries=[_injury("AE1-QB", 6, injury_type=InjuryType.SEVERE), _injury("AE2-CB", 1)]),
        ]
        assert [i.player_id for i in collect_new_injuries(results)] == ["AN2-RB", "AE1-QB", "AE2-CB"]

    def test_no_injuries(self):
        assert collect_new_injuries([make_result("g1", 1, "AN1", "AN2", 20, 10)]) == []
