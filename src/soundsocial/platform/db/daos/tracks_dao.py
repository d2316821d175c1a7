"""Data access object for the tracks table."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from typing import final

from soundsocial.platform.db.errors import store_failure


@dataclass(slots=True, frozen=True)
class TrackRow:
    """Snapshot of one ``tracks`` row."""

    id: int
    mbid: str
    album_id: int
    artist_id: int
    title: str
    position: int
    track_number: int | None
    duration_ms: int | None
    avg_rating: float
    rating_count: int


@final
class TracksDAO:
    """Data access object for the tracks table."""

    conn: sqlite3.Connection

    def __init__(self, conn: sqlite3.Connection) -> None:
        """Initialize DAO.

        Args:
            conn: Database connection.
        """
        self.conn = conn

    def insert_ignore(
        self,
        *,
        mbid: str,
        album_id: int,
        artist_id: int,
        title: str,
        position: int,
        track_number: int | None,
        duration_ms: int | None,
    ) -> bool:
        """Insert a track unless its mbid is already stored.

        Returns:
            True when a row was inserted, False when the mbid already existed.
        """

        try:
            cursor = self.conn.execute(
                """
                INSERT INTO tracks (mbid, album_id, artist_id, title, position, track_number, duration_ms)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(mbid) DO NOTHING
                """,
                (mbid, album_id, artist_id, title, position, track_number, duration_ms),
            )
        except sqlite3.Error as e:
            raise store_failure(f"inserting track {mbid}", e) from e
        return cursor.rowcount == 1

    def list_by_album(self, album_id: int) -> list[TrackRow]:
        """Return the album's tracks in tracklist order."""

        try:
            fetched = self.conn.execute(
                """
                SELECT id, mbid, album_id, artist_id, title, position, track_number,
                       duration_ms, avg_rating, rating_count
                FROM tracks
                WHERE album_id = ?
                ORDER BY position, id
                """,
                (album_id,),
            ).fetchall()
        except sqlite3.Error as e:
            raise store_failure(f"reading tracks of album #{album_id}", e) from e
        return [
            TrackRow(
                id=int(row["id"]),
                mbid=str(row["mbid"]),
                album_id=int(row["album_id"]),
                artist_id=int(row["artist_id"]),
                title=str(row["title"]),
                position=int(row["position"]),
                track_number=row["track_number"],
                duration_ms=row["duration_ms"],
                avg_rating=float(row["avg_rating"]),
                rating_count=int(row["rating_count"]),
            )
            for row in fetched
        ]


__all__ = ["TrackRow", "TracksDAO"]
