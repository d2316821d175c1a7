"""Database manager for the SoundSocial catalog."""

import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Final, final

from soundsocial.config.paths import default_db_path
from soundsocial.platform.logging import logger
from soundsocial.shared.errors import StoreFailureError

_EXPECTED_TABLES: Final[frozenset[str]] = frozenset({"artists", "albums", "tracks", "ratings"})

_SCHEMA: Final[tuple[str, ...]] = (
    """
    CREATE TABLE IF NOT EXISTS artists (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        mbid TEXT NOT NULL UNIQUE,
        name TEXT NOT NULL,
        country TEXT,
        artist_type TEXT,
        formed_year INTEGER,
        genres TEXT NOT NULL DEFAULT '[]',
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
        updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS albums (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        mbid TEXT NOT NULL UNIQUE,
        artist_id INTEGER NOT NULL,
        title TEXT NOT NULL,
        release_date TEXT,
        album_type TEXT,
        cover_url TEXT,
        avg_rating REAL NOT NULL DEFAULT 0,
        rating_count INTEGER NOT NULL DEFAULT 0,
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
        updated_at DATETIME DEFAULT CURRENT_TIMESTAMP,
        FOREIGN KEY (artist_id) REFERENCES artists (id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS tracks (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        mbid TEXT NOT NULL UNIQUE,
        album_id INTEGER NOT NULL,
        artist_id INTEGER NOT NULL,
        title TEXT NOT NULL,
        position INTEGER NOT NULL,
        track_number INTEGER,
        duration_ms INTEGER,
        avg_rating REAL NOT NULL DEFAULT 0,
        rating_count INTEGER NOT NULL DEFAULT 0,
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
        updated_at DATETIME DEFAULT CURRENT_TIMESTAMP,
        FOREIGN KEY (album_id) REFERENCES albums (id),
        FOREIGN KEY (artist_id) REFERENCES artists (id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS ratings (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id TEXT NOT NULL,
        entity_type TEXT NOT NULL CHECK (entity_type IN ('album', 'track')),
        entity_id INTEGER NOT NULL,
        rating REAL NOT NULL CHECK (rating >= 0.5 AND rating <= 10),
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
        updated_at DATETIME DEFAULT CURRENT_TIMESTAMP,
        UNIQUE (user_id, entity_type, entity_id)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_albums_artist ON albums(artist_id)",
    "CREATE INDEX IF NOT EXISTS idx_tracks_album ON tracks(album_id, position)",
    "CREATE INDEX IF NOT EXISTS idx_ratings_entity ON ratings(entity_type, entity_id)",
)


@final
class DatabaseManager:
    """Own the SQLite connection and serialize access to it.

    A single connection is shared by every worker thread. All access goes
    through ``reading()`` or ``transaction()``, which hold one re-entrant lock,
    so statements from different threads never interleave on the connection.
    """

    db_path: str | Path
    conn: sqlite3.Connection | None

    def __init__(self, db_path: Path | str | None = None) -> None:
        """Initialize database manager.

        Args:
            db_path: Path to database file. If None, use the configured default.
                   If ":memory:", use in-memory database.
        """
        if db_path == ":memory:":
            self.db_path = ":memory:"
        elif db_path is None:
            self.db_path = default_db_path()
        else:
            self.db_path = Path(db_path) if isinstance(db_path, str) else db_path
        self.conn = None
        self._lock: Final[threading.RLock] = threading.RLock()

    def connect(self) -> None:
        """Connect to database and initialize schema."""
        try:
            if isinstance(self.db_path, Path):
                self.db_path.parent.mkdir(parents=True, exist_ok=True)

            self.conn = sqlite3.connect(
                self.db_path,
                timeout=30.0,
                isolation_level=None,  # transactions are opened explicitly
                check_same_thread=False,
            )

            self.conn.row_factory = sqlite3.Row
            _ = self.conn.execute("PRAGMA foreign_keys = ON")
            _ = self.conn.execute("PRAGMA synchronous = NORMAL")
            if self.db_path != ":memory:":
                _ = self.conn.execute("PRAGMA journal_mode = WAL")
            _ = self.conn.execute("PRAGMA busy_timeout = 30000")

            self._init_schema()

        except OSError as e:
            logger.error("Failed to prepare database directory: %s", e)
            raise StoreFailureError(f"Unable to create database directory for {self.db_path}") from e
        except sqlite3.Error as e:
            logger.error("Failed to connect to database: %s", e)
            raise StoreFailureError(f"Failed to connect to database at {self.db_path}") from e

    def _init_schema(self) -> None:
        """Initialize database schema."""
        if self.conn is None:
            return

        cursor = self.conn.cursor()
        _ = cursor.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        existing_tables = {row[0] for row in cursor.fetchall()}
        if existing_tables.issuperset(_EXPECTED_TABLES):
            logger.debug("Tables already exist, skipping schema initialization")
            return

        try:
            _ = cursor.execute("BEGIN")
            for statement in _SCHEMA:
                _ = cursor.execute(statement)
            _ = cursor.execute("COMMIT")
            logger.info("Successfully initialized database schema")
        except sqlite3.Error as e:
            logger.error("Failed to initialize schema: %s", e)
            if self.conn.in_transaction:
                _ = self.conn.execute("ROLLBACK")
            raise

    def require_connection(self) -> sqlite3.Connection:
        """Return the open connection, connecting lazily on first use."""

        with self._lock:
            if self.conn is None:
                self.connect()
        if self.conn is None:  # pragma: no cover
            raise StoreFailureError("Database connection could not be established")
        return self.conn

    @contextmanager
    def reading(self) -> Iterator[sqlite3.Connection]:
        """Hold the connection lock for a sequence of read statements."""

        conn = self.require_connection()
        with self._lock:
            yield conn

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Run the enclosed statements in one ``BEGIN IMMEDIATE`` transaction.

        Commits on normal exit and rolls back on any exception, which is then
        re-raised. Nested use joins the outer transaction.
        """

        conn = self.require_connection()
        with self._lock:
            if conn.in_transaction:
                yield conn
                return
            _ = conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                if conn.in_transaction:
                    _ = conn.execute("ROLLBACK")
                raise
            else:
                try:
                    _ = conn.execute("COMMIT")
                except sqlite3.Error:
                    if conn.in_transaction:
                        _ = conn.execute("ROLLBACK")
                    raise

    def close(self) -> None:
        """Close database connection."""
        with self._lock:
            if self.conn:
                try:
                    self.conn.close()
                    self.conn = None
                except sqlite3.Error as e:
                    logger.error("Failed to close database connection: %s", e)

    def __enter__(self) -> "DatabaseManager":
        """Enter context manager."""
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any | None,
    ) -> None:
        """Exit context manager."""
        self.close()
