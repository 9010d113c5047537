"""Database connection, DDL, and the shared store handle for bilingual-dictionary."""

from __future__ import annotations

import logging
import sqlite3
import threading
from pathlib import Path
from typing import Any, Sequence

from bilingual_dictionary.exceptions import DatabaseError

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0"

# ---------------------------------------------------------------------------
# DDL statements
# ---------------------------------------------------------------------------

_DDL = """
-- Meta table
CREATE TABLE IF NOT EXISTS meta (
    key TEXT NOT NULL,
    value TEXT,
    UNIQUE (key)
);

-- Word tables
CREATE TABLE IF NOT EXISTS words (
    id INTEGER PRIMARY KEY,
    text TEXT NOT NULL,
    language TEXT NOT NULL CHECK( language IN ('pl', 'en') ),
    UNIQUE (text, language)
);
CREATE INDEX IF NOT EXISTS word_text_index ON words (text);
CREATE INDEX IF NOT EXISTS word_language_index ON words (language);

-- Translation edges
CREATE TABLE IF NOT EXISTS translations (
    id INTEGER PRIMARY KEY,
    word_id_pl INTEGER NOT NULL REFERENCES words (id) ON DELETE CASCADE,
    word_id_en INTEGER NOT NULL REFERENCES words (id) ON DELETE CASCADE,
    UNIQUE (word_id_pl, word_id_en)
);
CREATE INDEX IF NOT EXISTS translation_pl_index ON translations (word_id_pl);
CREATE INDEX IF NOT EXISTS translation_en_index ON translations (word_id_en);

-- Example sentences
CREATE TABLE IF NOT EXISTS examples (
    id INTEGER PRIMARY KEY,
    word_id INTEGER NOT NULL REFERENCES words (id) ON DELETE CASCADE,
    text TEXT NOT NULL,
    UNIQUE (word_id, text)
);
CREATE INDEX IF NOT EXISTS example_word_index ON examples (word_id);
"""


def connect(db_path: str | Path = ":memory:") -> sqlite3.Connection:
    """Open a database connection usable from any thread."""
    db_path_str = str(db_path)
    conn = sqlite3.connect(db_path_str, check_same_thread=False)
    conn.execute("PRAGMA foreign_keys = ON")
    if db_path_str != ":memory:":
        conn.execute("PRAGMA journal_mode = WAL")
    conn.row_factory = sqlite3.Row
    return conn


def init_db(conn: sqlite3.Connection) -> None:
    """Initialize all tables if they don't exist. Set schema version."""
    conn.executescript(_DDL)
    conn.execute(
        "INSERT OR IGNORE INTO meta (key, value) VALUES ('schema_version', ?)",
        (SCHEMA_VERSION,),
    )
    conn.execute(
        "INSERT OR IGNORE INTO meta (key, value) "
        "VALUES ('created_at', strftime('%Y-%m-%dT%H:%M:%f', 'now'))",
    )
    conn.commit()


def check_schema_version(conn: sqlite3.Connection) -> None:
    """Verify the database schema version is compatible."""
    try:
        row = conn.execute(
            "SELECT value FROM meta WHERE key = 'schema_version'"
        ).fetchone()
    except sqlite3.OperationalError:
        # meta table doesn't exist - uninitialized DB
        return
    if row is None:
        return
    version = row[0]
    if version != SCHEMA_VERSION:
        raise DatabaseError(
            f"Incompatible schema version: {version} "
            f"(expected {SCHEMA_VERSION})"
        )


# ---------------------------------------------------------------------------
# Shared handle
# ---------------------------------------------------------------------------

class Database:
    """One connection shared by every caller and fan-out worker.

    All statements run under a single re-entrant lock, so each call is
    atomic with respect to the others. Write statements commit (or roll
    back) before the lock is released.
    """

    def __init__(self, db_path: str | Path = ":memory:") -> None:
        self.path = str(db_path)
        try:
            self._conn = connect(db_path)
        except sqlite3.DatabaseError as e:
            raise DatabaseError(f"Cannot open database {self.path!r}: {e}") from e
        try:
            check_schema_version(self._conn)
            init_db(self._conn)
        except sqlite3.DatabaseError as e:
            self._conn.close()
            raise DatabaseError(f"Cannot open database {self.path!r}: {e}") from e
        except DatabaseError:
            self._conn.close()
            raise
        self._lock = threading.RLock()
        self._closed = False
        logger.info(f"Opened dictionary database {self.path}")

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            if self._closed:
                return
            self._conn.close()
            self._closed = True
        logger.info(f"Closed dictionary database {self.path}")

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def _ensure_open(self) -> None:
        if self._closed:
            raise DatabaseError(f"Database is closed: {self.path!r}")

    def query(self, sql: str, params: Sequence[Any] = ()) -> list[sqlite3.Row]:
        """Run a read statement and return every row."""
        with self._lock:
            self._ensure_open()
            return self._conn.execute(sql, params).fetchall()

    def query_one(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Row | None:
        """Run a read statement and return the first row, or None."""
        with self._lock:
            self._ensure_open()
            return self._conn.execute(sql, params).fetchone()

    def execute(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Cursor:
        """Run one write statement in its own transaction."""
        with self._lock:
            self._ensure_open()
            with self._conn:
                return self._conn.execute(sql, params)
