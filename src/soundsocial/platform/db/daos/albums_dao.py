"""Data access object for the albums table."""

from __future__ import annotations

import sqlite3
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final, final

from soundsocial.platform.db.errors import DuplicateEntityError, is_unique_violation, store_failure

# Stay well below SQLite's default host-parameter limit.
_MAX_IN_PARAMS: Final[int] = 500

_SELECT_ALBUM: Final[str] = """
    SELECT albums.id, albums.mbid, albums.artist_id, albums.title, albums.release_date,
           albums.album_type, albums.cover_url, albums.avg_rating, albums.rating_count,
           artists.name AS artist_name, artists.mbid AS artist_mbid
    FROM albums
    JOIN artists ON artists.id = albums.artist_id
"""


@dataclass(slots=True, frozen=True)
class AlbumRow:
    """Snapshot of one ``albums`` row joined with its artist."""

    id: int
    mbid: str
    artist_id: int
    artist_name: str
    artist_mbid: str
    title: str
    release_date: str | None
    album_type: str | None
    cover_url: str | None
    avg_rating: float
    rating_count: int


def _to_row(row: sqlite3.Row) -> AlbumRow:
    return AlbumRow(
        id=int(row["id"]),
        mbid=str(row["mbid"]),
        artist_id=int(row["artist_id"]),
        artist_name=str(row["artist_name"]),
        artist_mbid=str(row["artist_mbid"]),
        title=str(row["title"]),
        release_date=row["release_date"],
        album_type=row["album_type"],
        cover_url=row["cover_url"],
        avg_rating=float(row["avg_rating"]),
        rating_count=int(row["rating_count"]),
    )


@final
class AlbumsDAO:
    """Data access object for the albums table."""

    conn: sqlite3.Connection

    def __init__(self, conn: sqlite3.Connection) -> None:
        """Initialize DAO.

        Args:
            conn: Database connection.
        """
        self.conn = conn

    def get_by_mbid(self, mbid: str) -> AlbumRow | None:
        try:
            row = self.conn.execute(f"{_SELECT_ALBUM} WHERE albums.mbid = ?", (mbid,)).fetchone()
        except sqlite3.Error as e:
            raise store_failure(f"reading album {mbid}", e) from e
        return _to_row(row) if row else None

    def get_by_id(self, album_id: int) -> AlbumRow | None:
        try:
            row = self.conn.execute(f"{_SELECT_ALBUM} WHERE albums.id = ?", (album_id,)).fetchone()
        except sqlite3.Error as e:
            raise store_failure(f"reading album #{album_id}", e) from e
        return _to_row(row) if row else None

    def list_by_mbids(self, mbids: Sequence[str]) -> list[AlbumRow]:
        """Fetch every stored album whose mbid is in ``mbids``."""

        unique = list(dict.fromkeys(mbids))
        rows: list[AlbumRow] = []
        for start in range(0, len(unique), _MAX_IN_PARAMS):
            chunk = unique[start : start + _MAX_IN_PARAMS]
            placeholders = ", ".join("?" for _ in chunk)
            try:
                fetched = self.conn.execute(
                    f"{_SELECT_ALBUM} WHERE albums.mbid IN ({placeholders})",
                    chunk,
                ).fetchall()
            except sqlite3.Error as e:
                raise store_failure("reading albums by mbid", e) from e
            rows.extend(_to_row(row) for row in fetched)
        return rows

    def list_by_artist(self, artist_id: int) -> list[AlbumRow]:
        try:
            fetched = self.conn.execute(
                f"{_SELECT_ALBUM} WHERE albums.artist_id = ? ORDER BY albums.release_date DESC",
                (artist_id,),
            ).fetchall()
        except sqlite3.Error as e:
            raise store_failure(f"reading albums of artist #{artist_id}", e) from e
        return [_to_row(row) for row in fetched]

    def insert(
        self,
        *,
        mbid: str,
        artist_id: int,
        title: str,
        release_date: str | None,
        album_type: str | None,
        cover_url: str | None,
    ) -> int:
        """Insert an album and return its id.

        Raises:
            DuplicateEntityError: Another writer already stored this mbid.
        """

        try:
            cursor = self.conn.execute(
                """
                INSERT INTO albums (mbid, artist_id, title, release_date, album_type, cover_url)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (mbid, artist_id, title, release_date, album_type, cover_url),
            )
        except sqlite3.IntegrityError as e:
            if is_unique_violation(e):
                raise DuplicateEntityError("albums", mbid) from e
            raise store_failure(f"inserting album {mbid}", e) from e
        except sqlite3.Error as e:
            raise store_failure(f"inserting album {mbid}", e) from e
        if cursor.lastrowid is None:  # pragma: no cover
            raise store_failure(f"inserting album {mbid}", sqlite3.DatabaseError("no row id"))
        return int(cursor.lastrowid)

    def count(self) -> int:
        try:
            row = self.conn.execute("SELECT COUNT(*) FROM albums").fetchone()
        except sqlite3.Error as e:
            raise store_failure("counting albums", e) from e
        return int(row[0])


__all__ = ["AlbumRow", "AlbumsDAO"]
