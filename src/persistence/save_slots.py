"""
Save Slot Store

Named SeasonState snapshots in a SQLite database. Any state returned by the
season simulator is a consistent checkpoint, so a slot always holds a whole
processed week.

Usage Example:
    with SaveSlotStore("data/saves/league.db") as store:
        store.save("autosave", state)
        state = store.load("autosave")
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional
import json
import logging
import sqlite3

from season.season_state import SeasonState


class SaveSlotError(Exception):
    """
    Raised for save slot I/O failures.

    Attributes:
        slot: Slot name involved
        operation: "save", "load", "list" or "delete"
        original_exception: Underlying sqlite3/JSON error, if any
    """

    def __init__(
        self,
        message: str,
        slot: Optional[str] = None,
        operation: Optional[str] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.slot = slot
        self.operation = operation
        self.original_exception = original_exception
        self.timestamp = datetime.now().isoformat()
        super().__init__(self._build_error_message())

    def _build_error_message(self) -> str:
        lines = [self.message]
        if self.slot is not None:
            lines.append(f"Slot: {self.slot}")
        if self.operation:
            lines.append(f"Operation: {self.operation}")
        if self.original_exception:
            lines.append(f"Original Error: {type(self.original_exception).__name__}: {self.original_exception}")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "slot": self.slot,
            "operation": self.operation,
            "timestamp": self.timestamp,
            "original_error": str(self.original_exception) if self.original_exception else None,
        }


@dataclass(frozen=True)
class SaveSlotInfo:
    """Slot metadata without the payload."""
    slot: str
    season: int
    week: int
    phase: str
    created_at: str
    updated_at: str


SCHEMA = '''
    CREATE TABLE IF NOT EXISTS save_slots (
        slot TEXT PRIMARY KEY,
        season INTEGER NOT NULL,
        week INTEGER NOT NULL,
        phase TEXT NOT NULL,
        payload TEXT NOT NULL,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
'''


class SaveSlotStore:
    """
    SQLite-backed save slots.

    Features:
    - WAL mode (readers do not block the single writer)
    - One row per slot; saving over a slot keeps its created_at
    """

    def __init__(self, db_path: str, logger: logging.Logger = None):
        """
        Args:
            db_path: Path to the SQLite database file (created if missing)
        """
        self.db_path = db_path
        self.logger = logger or logging.getLogger(__name__)
        self._connection: Optional[sqlite3.Connection] = None

        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        try:
            self.get_connection().execute(SCHEMA)
            self.get_connection().commit()
        except sqlite3.Error as e:
            raise SaveSlotError(f"Cannot open save database {db_path}", operation="open", original_exception=e) from e

    def get_connection(self) -> sqlite3.Connection:
        if self._connection is None:
            self._connection = sqlite3.connect(self.db_path)
            self._connection.row_factory = sqlite3.Row
            self._connection.execute("PRAGMA journal_mode = WAL")
            self._connection.execute("PRAGMA synchronous = NORMAL")
        return self._connection

    def close(self) -> None:
        if self._connection:
            self._connection.close()
            self._connection = None

    def __enter__(self) -> "SaveSlotStore":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False

    # ==================== Operations ====================

    def save(self, slot: str, state: SeasonState) -> SaveSlotInfo:
        """
        Write a state to a slot, replacing what was there.

        Raises:
            SaveSlotError: Empty slot name or database failure
        """
        if not slot:
            raise SaveSlotError("Slot name must not be empty", slot=slot, operation="save")

        now = datetime.now().isoformat()
        payload = json.dumps(state.to_dict(), sort_keys=True)
        conn = self.get_connection()
        try:
            conn.execute(
                '''
                INSERT INTO save_slots (slot, season, week, phase, payload, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(slot) DO UPDATE SET
                    season = excluded.season,
                    week = excluded.week,
                    phase = excluded.phase,
                    payload = excluded.payload,
                    updated_at = excluded.updated_at
                ''',
                (slot, state.season, state.current_week, state.phase.value, payload, now, now)
            )
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            self.logger.error(f"Failed to save slot {slot}: {e}")
            raise SaveSlotError(f"Failed to save slot {slot}", slot=slot, operation="save", original_exception=e) from e

        self.logger.info(f"Saved slot {slot}: season {state.season} week {state.current_week} ({state.phase.value})")
        return self.get_info(slot)

    def load(self, slot: str) -> SeasonState:
        """
        Read the state stored in a slot.

        Raises:
            SaveSlotError: Slot missing or payload unreadable
        """
        row = self._query_one("SELECT payload FROM save_slots WHERE slot = ?", (slot,), "load", slot)
        if row is None:
            raise SaveSlotError(f"Save slot {slot} does not exist", slot=slot, operation="load")

        try:
            data = json.loads(row['payload'])
            if not isinstance(data, dict):
                raise TypeError(f"expected a JSON object, got {type(data).__name__}")
            return SeasonState.from_dict(data)
        except (ValueError, KeyError, TypeError) as e:
            raise SaveSlotError(
                f"Save slot {slot} is corrupt", slot=slot, operation="load", original_exception=e
            ) from e

    def get_info(self, slot: str) -> Optional[SaveSlotInfo]:
        row = self._query_one(
            "SELECT slot, season, week, phase, created_at, updated_at FROM save_slots WHERE slot = ?",
            (slot,), "load", slot
        )
        return _info_from_row(row) if row else None

    def list_slots(self) -> List[SaveSlotInfo]:
        """All slots, most recently updated first."""
        try:
            rows = self.get_connection().execute(
                "SELECT slot, season, week, phase, created_at, updated_at FROM save_slots "
                "ORDER BY updated_at DESC, slot"
            ).fetchall()
        except sqlite3.Error as e:
            raise SaveSlotError("Failed to list save slots", operation="list", original_exception=e) from e
        return [_info_from_row(row) for row in rows]

    def delete(self, slot: str) -> bool:
        """
        Remove a slot.

        Returns:
            True if a slot was deleted, False if it did not exist
        """
        conn = self.get_connection()
        try:
            cursor = conn.execute("DELETE FROM save_slots WHERE slot = ?", (slot,))
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise SaveSlotError(f"Failed to delete slot {slot}", slot=slot, operation="delete", original_exception=e) from e

        deleted = cursor.rowcount > 0
        if deleted:
            self.logger.info(f"Deleted save slot {slot}")
        return deleted

    def _query_one(self, sql: str, params: tuple, operation: str, slot: str) -> Optional[sqlite3.Row]:
        try:
            return self.get_connection().execute(sql, params).fetchone()
        except sqlite3.Error as e:
            raise SaveSlotError(
                f"Database error reading slot {slot}", slot=slot, operation=operation, original_exception=e
            ) from e


def _info_from_row(row: sqlite3.Row) -> SaveSlotInfo:
    return SaveSlotInfo(
        slot=row['slot'],
        season=row['season'],
        week=row['week'],
        phase=row['phase'],
        created_at=row['created_at'],
        updated_at=row['updated_at'],
    )
