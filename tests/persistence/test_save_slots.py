"""
Tests for SaveSlotStore.

Each test gets its own database under tmp_path.
"""

import sqlite3

import pytest

from persistence import SaveSlotError, SaveSlotInfo, SaveSlotStore
from season import SeasonPhase, SeasonSimOptions, SeasonSimulator, SeasonState
from mocks.engines import StrengthEngine


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "saves" / "league.db")


@pytest.fixture
def store(db_path):
    store = SaveSlotStore(db_path)
    yield store
    store.close()


@pytest.fixture(scope="module")
def week_two_state(league_teams, league_schedule):
    simulator = SeasonSimulator(league_teams, StrengthEngine(), SeasonSimOptions(season=2025))
    state = simulator.initialize_season(simulator.create_season_state(), league_schedule)
    return simulator.advance_week(simulator.advance_week(state))


class TestSaveAndLoad:

    def test_round_trip(self, store, week_two_state):
        store.save("autosave", week_two_state)
        loaded = store.load("autosave")

        assert loaded.to_dict() == week_two_state.to_dict()
        assert loaded.standings == week_two_state.standings
        assert loaded.current_week == 3

    def test_save_returns_info(self, store, week_two_state):
        info = store.save("autosave", week_two_state)

        assert isinstance(info, SaveSlotInfo)
        assert info.slot == "autosave"
        assert info.season == 2025
        assert info.week == 3
        assert info.phase == "regular_season"
        assert info.created_at == info.updated_at

    def test_overwrite_keeps_created_at(self, store, week_two_state):
        first = store.save("manual", SeasonState(season=2025))
        second = store.save("manual", week_two_state)

        assert second.created_at == first.created_at
        assert second.week == 3
        assert store.load("manual").phase == SeasonPhase.REGULAR_SEASON
        assert len(store.list_slots()) == 1

    def test_missing_slot(self, store):
        with pytest.raises(SaveSlotError) as exc_info:
            store.load("nope")

        assert exc_info.value.slot == "nope"
        assert exc_info.value.operation == "load"
        assert store.get_info("nope") is None

    def test_empty_slot_name(self, store):
        with pytest.raises(SaveSlotError, match="must not be empty"):
            store.save("", SeasonState(season=2025))

    @pytest.mark.parametrize("payload", ["not json", "{}", "[1, 2]", "null", "7"])
    def test_corrupt_payload(self, store, db_path, payload):
        store.save("broken", SeasonState(season=2025))
        conn = sqlite3.connect(db_path)
        conn.execute("UPDATE save_slots SET payload = ? WHERE slot = ?", (payload, "broken"))
        conn.commit()
        conn.close()

        with pytest.raises(SaveSlotError, match="corrupt") as exc_info:
            store.load("broken")
        assert exc_info.value.original_exception is not None


class TestSlotManagement:

    def test_list_most_recent_first(self, store, week_two_state):
        store.save("a", SeasonState(season=2025))
        store.save("b", SeasonState(season=2026))
        store.save("a", week_two_state)

        slots = store.list_slots()

        assert [s.slot for s in slots] == ["a", "b"]
        assert slots[1].season == 2026
        assert slots[1].phase == "not_started"

    def test_empty_store(self, store):
        assert store.list_slots() == []

    def test_delete(self, store):
        store.save("old", SeasonState(season=2025))

        assert store.delete("old") is True
        assert store.delete("old") is False
        assert store.list_slots() == []

    def test_persists_across_connections(self, db_path, week_two_state):
        with SaveSlotStore(db_path) as first:
            first.save("autosave", week_two_state)

        with SaveSlotStore(db_path) as second:
            assert [s.slot for s in second.list_slots()] == ["autosave"]
            assert second.load("autosave").xp_totals == week_two_state.xp_totals

    def test_context_manager_closes(self, db_path):
        with SaveSlotStore(db_path) as store:
            store.get_connection()
        assert store._connection is None


class TestSaveSlotError:

    def test_to_dict(self):
        cause = ValueError("bad json")
        error = SaveSlotError("Save slot x is corrupt", slot="x", operation="load", original_exception=cause)
        data = error.to_dict()

        assert data['slot'] == "x"
        assert data['operation'] == "load"
        assert data['original_error'] == "bad json"
        assert "Slot: x" in str(error)
