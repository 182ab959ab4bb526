"""SQLite storage of driver reputations."""

from __future__ import annotations

import sqlite3
import threading
from collections.abc import Sequence
from typing import Any

from . import logger
from .types import DriverFlags, DriverReputation, DriverTrustLevel

_SCHEMA = """CREATE TABLE IF NOT EXISTS driver_reputation (
        customer_id INTEGER PRIMARY KEY,
        user_name TEXT,
        behavior_flags INTEGER NOT NULL DEFAULT 0,
        trust_level INTEGER NOT NULL DEFAULT 2,
        notes TEXT,
        encounter_count INTEGER NOT NULL DEFAULT 0,
        last_seen TEXT,
        last_updated INTEGER,
        trust_score REAL NOT NULL DEFAULT 0.5
    );"""

_SELECT_ALL = (
    "SELECT customer_id,user_name,behavior_flags,trust_level,notes,"
    "encounter_count,last_seen,last_updated,trust_score FROM driver_reputation"
)

_UPSERT = """INSERT INTO driver_reputation (customer_id,user_name,behavior_flags,trust_level,notes,encounter_count,last_seen,last_updated,trust_score)
        VALUES (?,?,?,?,?,?,?,?,?)
        ON CONFLICT(customer_id) DO UPDATE SET
          user_name=excluded.user_name,
          behavior_flags=excluded.behavior_flags,
          trust_level=excluded.trust_level,
          notes=excluded.notes,
          encounter_count=excluded.encounter_count,
          last_seen=excluded.last_seen,
          last_updated=excluded.last_updated,
          trust_score=excluded.trust_score"""

_AVOID_FLAGS = DriverFlags.DIRTY_DRIVER | DriverFlags.RAMMER
_CAUTION_FLAGS = DriverFlags.AGGRESSIVE | DriverFlags.BLOCKING | DriverFlags.UNSAFE_REJOIN
_TRUSTED_FLAGS = DriverFlags.CLEAN_DRIVER | DriverFlags.GOOD_RACER


class PersistenceError(Exception):
    """Raised when the database cannot be opened or a statement fails."""


class Database:
    """A single SQLite connection with serialised access."""

    def __init__(self) -> None:
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.RLock()

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self, path: str) -> None:
        """Open or create the database file; does nothing if already open."""
        with self._lock:
            if self._conn is not None:
                return
            try:
                self._conn = sqlite3.connect(
                    str(path), isolation_level=None, check_same_thread=False
                )
            except sqlite3.Error as exc:
                logger.error(f"SQLite open failed: {exc}")
                raise PersistenceError(f"cannot open database {path}: {exc}") from exc
            self.execute("PRAGMA journal_mode=WAL;")
            self.execute("PRAGMA synchronous=NORMAL;")

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise PersistenceError("database is not open")
        return self._conn

    def execute(self, sql: str, params: Sequence[Any] = ()) -> None:
        """Run a statement that returns no rows of interest."""
        with self._lock:
            conn = self._connection()
            try:
                conn.execute(sql, tuple(params))
            except sqlite3.Error as exc:
                logger.error(f"SQLite exec error: {exc}")
                raise PersistenceError(str(exc)) from exc

    def query(self, sql: str, params: Sequence[Any] = ()) -> list[tuple[Any, ...]]:
        """Run a statement and return all of its rows."""
        with self._lock:
            conn = self._connection()
            try:
                return conn.execute(sql, tuple(params)).fetchall()
            except sqlite3.Error as exc:
                logger.error(f"SQLite step error: {exc}")
                raise PersistenceError(str(exc)) from exc

    def last_insert_id(self) -> int:
        return int(self.query("SELECT last_insert_rowid()")[0][0])

    def changes(self) -> int:
        return int(self.query("SELECT changes()")[0][0])


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _trust_level(flags: int, stored: int) -> DriverTrustLevel:
    if flags & _AVOID_FLAGS:
        return DriverTrustLevel.AVOID
    if flags & _CAUTION_FLAGS:
        return DriverTrustLevel.CAUTION
    if flags & _TRUSTED_FLAGS:
        return DriverTrustLevel.TRUSTED
    try:
        return DriverTrustLevel(stored)
    except ValueError:
        return DriverTrustLevel.NEUTRAL


def _row_to_reputation(row: tuple[Any, ...]) -> DriverReputation:
    (customer_id, user_name, flags, trust_level, notes,
     encounters, last_seen, last_updated, trust_score) = row
    flags = int(flags or 0) & 0xFFFFFFFF
    return DriverReputation(
        customer_id=int(customer_id),
        user_name=user_name or "",
        trust_level=_trust_level(flags, int(trust_level or 0)),
        notes=notes or "",
        last_updated=int(last_updated or 0),
        behavior_flags=flags,
        encounter_count=int(encounters or 0),
        last_seen=last_seen or "",
        trust_score=float(trust_score if trust_score is not None else 0.5),
    )


class ReputationRepository:
    """Reads and writes the driver_reputation table."""

    def init(self, db: Database) -> None:
        """Create the table if it does not exist."""
        db.execute(_SCHEMA)

    def load_all(self, db: Database) -> dict[int, DriverReputation]:
        """Load every stored reputation keyed by customer id.

        The trust level is derived again from the behaviour flags when any are set.
        """
        reputations = {
            rep.customer_id: rep for rep in map(_row_to_reputation, db.query(_SELECT_ALL))
        }
        logger.info(f"Reputaciones cargadas desde SQLite: {len(reputations)}")
        return reputations

    def upsert(self, db: Database, rep: DriverReputation) -> None:
        """Insert a reputation or replace the stored one with the same customer id."""
        db.execute(
            _UPSERT,
            (
                rep.customer_id,
                rep.user_name,
                _to_int32(rep.behavior_flags),
                int(rep.trust_level),
                rep.notes,
                rep.encounter_count,
                rep.last_seen,
                int(rep.last_updated),
                float(rep.trust_score),
            ),
        )