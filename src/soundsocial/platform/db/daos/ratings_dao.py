"""
Summary: Data access object for user ratings and the aggregates they feed.
Why: Keep the per-entity SQL in fixed statements selected by entity type.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from typing import Final, final

from soundsocial.platform.db.errors import store_failure

_ENTITY_EXISTS: Final[dict[str, str]] = {
    "album": "SELECT 1 FROM albums WHERE id = ?",
    "track": "SELECT 1 FROM tracks WHERE id = ?",
}

_RECOMPUTE: Final[dict[str, str]] = {
    "album": """
        UPDATE albums SET
            avg_rating = (
                SELECT COALESCE(ROUND(AVG(rating), 2), 0)
                FROM ratings WHERE entity_type = 'album' AND entity_id = ?
            ),
            rating_count = (
                SELECT COUNT(*) FROM ratings WHERE entity_type = 'album' AND entity_id = ?
            ),
            updated_at = CURRENT_TIMESTAMP
        WHERE id = ?
    """,
    "track": """
        UPDATE tracks SET
            avg_rating = (
                SELECT COALESCE(ROUND(AVG(rating), 2), 0)
                FROM ratings WHERE entity_type = 'track' AND entity_id = ?
            ),
            rating_count = (
                SELECT COUNT(*) FROM ratings WHERE entity_type = 'track' AND entity_id = ?
            ),
            updated_at = CURRENT_TIMESTAMP
        WHERE id = ?
    """,
}

_AGGREGATE: Final[dict[str, str]] = {
    "album": "SELECT avg_rating, rating_count FROM albums WHERE id = ?",
    "track": "SELECT avg_rating, rating_count FROM tracks WHERE id = ?",
}


@dataclass(slots=True, frozen=True)
class RatingRow:
    """Snapshot of one ``ratings`` row."""

    user_id: str
    entity_type: str
    entity_id: int
    rating: float
    updated_at: str


@dataclass(slots=True, frozen=True)
class AggregateRow:
    """Stored average and count for one rated entity."""

    avg_rating: float
    rating_count: int


def _statement(table: dict[str, str], entity_type: str) -> str:
    try:
        return table[entity_type]
    except KeyError:
        raise ValueError(f"Unsupported entity type: {entity_type!r}") from None


@final
class RatingsDAO:
    """Data access object for the ratings table."""

    conn: sqlite3.Connection

    def __init__(self, conn: sqlite3.Connection) -> None:
        """Initialize DAO.

        Args:
            conn: Database connection.
        """
        self.conn = conn

    def entity_exists(self, entity_type: str, entity_id: int) -> bool:
        sql = _statement(_ENTITY_EXISTS, entity_type)
        try:
            row = self.conn.execute(sql, (entity_id,)).fetchone()
        except sqlite3.Error as e:
            raise store_failure(f"checking {entity_type} #{entity_id}", e) from e
        return row is not None

    def upsert(self, user_id: str, entity_type: str, entity_id: int, rating: float) -> None:
        """Insert the user's rating or overwrite their previous one."""

        try:
            _ = self.conn.execute(
                """
                INSERT INTO ratings (user_id, entity_type, entity_id, rating)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(user_id, entity_type, entity_id) DO UPDATE SET
                    rating = excluded.rating,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (user_id, entity_type, entity_id, rating),
            )
        except sqlite3.Error as e:
            raise store_failure(f"saving rating on {entity_type} #{entity_id}", e) from e

    def get(self, user_id: str, entity_type: str, entity_id: int) -> RatingRow | None:
        try:
            row = self.conn.execute(
                """
                SELECT user_id, entity_type, entity_id, rating, updated_at
                FROM ratings
                WHERE user_id = ? AND entity_type = ? AND entity_id = ?
                """,
                (user_id, entity_type, entity_id),
            ).fetchone()
        except sqlite3.Error as e:
            raise store_failure(f"reading rating on {entity_type} #{entity_id}", e) from e
        if row is None:
            return None
        return RatingRow(
            user_id=str(row["user_id"]),
            entity_type=str(row["entity_type"]),
            entity_id=int(row["entity_id"]),
            rating=float(row["rating"]),
            updated_at=str(row["updated_at"]),
        )

    def delete(self, user_id: str, entity_type: str, entity_id: int) -> bool:
        """Remove the user's rating. Returns True when a row was deleted."""

        try:
            cursor = self.conn.execute(
                "DELETE FROM ratings WHERE user_id = ? AND entity_type = ? AND entity_id = ?",
                (user_id, entity_type, entity_id),
            )
        except sqlite3.Error as e:
            raise store_failure(f"deleting rating on {entity_type} #{entity_id}", e) from e
        return cursor.rowcount > 0

    def recompute(self, entity_type: str, entity_id: int) -> None:
        """Rewrite the entity's stored average and count from the ratings table."""

        sql = _statement(_RECOMPUTE, entity_type)
        try:
            _ = self.conn.execute(sql, (entity_id, entity_id, entity_id))
        except sqlite3.Error as e:
            raise store_failure(f"recomputing aggregate for {entity_type} #{entity_id}", e) from e

    def aggregate(self, entity_type: str, entity_id: int) -> AggregateRow | None:
        sql = _statement(_AGGREGATE, entity_type)
        try:
            row = self.conn.execute(sql, (entity_id,)).fetchone()
        except sqlite3.Error as e:
            raise store_failure(f"reading aggregate for {entity_type} #{entity_id}", e) from e
        if row is None:
            return None
        return AggregateRow(avg_rating=float(row["avg_rating"]), rating_count=int(row["rating_count"]))


__all__ = ["AggregateRow", "RatingRow", "RatingsDAO"]
