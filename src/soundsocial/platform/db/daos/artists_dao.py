"""Data access object for the artists table."""

from __future__ import annotations

import json
import sqlite3
from dataclasses import dataclass
from typing import final

from soundsocial.platform.db.errors import store_failure


@dataclass(slots=True, frozen=True)
class ArtistRow:
    """Snapshot of one ``artists`` row."""

    id: int
    mbid: str
    name: str
    country: str | None
    artist_type: str | None
    formed_year: int | None
    genres: tuple[str, ...]


def _genres_from_json(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return ()
    try:
        decoded = json.loads(raw)
    except ValueError:
        return ()
    if not isinstance(decoded, list):
        return ()
    return tuple(str(item) for item in decoded)  # pyright: ignore[reportUnknownVariableType]


def _to_row(row: sqlite3.Row) -> ArtistRow:
    return ArtistRow(
        id=int(row["id"]),
        mbid=str(row["mbid"]),
        name=str(row["name"]),
        country=row["country"],
        artist_type=row["artist_type"],
        formed_year=row["formed_year"],
        genres=_genres_from_json(row["genres"]),
    )


@final
class ArtistsDAO:
    """Data access object for the artists table.

    Statements run on the caller's connection; transaction boundaries belong
    to ``DatabaseManager.transaction()``.
    """

    conn: sqlite3.Connection

    def __init__(self, conn: sqlite3.Connection) -> None:
        """Initialize DAO.

        Args:
            conn: Database connection.
        """
        self.conn = conn

    def get_by_mbid(self, mbid: str) -> ArtistRow | None:
        try:
            row = self.conn.execute(
                """
                SELECT id, mbid, name, country, artist_type, formed_year, genres
                FROM artists
                WHERE mbid = ?
                """,
                (mbid,),
            ).fetchone()
        except sqlite3.Error as e:
            raise store_failure(f"reading artist {mbid}", e) from e
        return _to_row(row) if row else None

    def insert_if_absent(self, mbid: str, name: str) -> int:
        """Insert a minimal artist row unless one exists; return the row id either way."""

        try:
            _ = self.conn.execute(
                """
                INSERT INTO artists (mbid, name)
                VALUES (?, ?)
                ON CONFLICT(mbid) DO NOTHING
                """,
                (mbid, name),
            )
            row = self.conn.execute("SELECT id FROM artists WHERE mbid = ?", (mbid,)).fetchone()
        except sqlite3.Error as e:
            raise store_failure(f"inserting artist {mbid}", e) from e
        return int(row["id"])

    def upsert(
        self,
        mbid: str,
        name: str,
        *,
        country: str | None,
        formed_year: int | None,
        genres: tuple[str, ...],
        artist_type: str | None = None,
    ) -> ArtistRow:
        """Insert or refresh an artist; absent optional fields keep stored values."""

        try:
            _ = self.conn.execute(
                """
                INSERT INTO artists (mbid, name, country, artist_type, formed_year, genres)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(mbid) DO UPDATE SET
                    name = excluded.name,
                    country = COALESCE(excluded.country, artists.country),
                    artist_type = COALESCE(excluded.artist_type, artists.artist_type),
                    formed_year = COALESCE(excluded.formed_year, artists.formed_year),
                    genres = excluded.genres,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (mbid, name, country, artist_type, formed_year, json.dumps(list(genres))),
            )
        except sqlite3.Error as e:
            raise store_failure(f"upserting artist {mbid}", e) from e
        stored = self.get_by_mbid(mbid)
        if stored is None:  # pragma: no cover
            raise store_failure(f"re-reading artist {mbid}", sqlite3.DatabaseError("row vanished"))
        return stored


__all__ = ["ArtistRow", "ArtistsDAO"]
