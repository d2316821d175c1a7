"""SQLite-backed adapter for the ratings feature."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from soundsocial.platform.db.daos.ratings_dao import RatingRow, RatingsDAO
from soundsocial.platform.db.db_manager import DatabaseManager
from soundsocial.platform.db.errors import store_failure
from soundsocial.platform.logging import logger
from soundsocial.shared.errors import AggregationConflictError, NotFoundError, StoreFailureError

from ...domain.models import EntityType, Rating, RatingAggregate, parse_timestamp
from ...usecases.ports import RatingStorePort


def _to_rating(row: RatingRow) -> Rating:
    return Rating(
        user_id=row.user_id,
        entity_type=EntityType(row.entity_type),
        entity_id=row.entity_id,
        value=row.rating,
        updated_at=parse_timestamp(row.updated_at),
    )


def _is_lock_error(exc: sqlite3.Error) -> bool:
    return isinstance(exc, sqlite3.OperationalError) and "locked" in str(exc).lower()


def _conflict(action: str, exc: sqlite3.Error) -> AggregationConflictError:
    logger.warning("Rating transaction could not acquire the database while %s: %s", action, exc)
    return AggregationConflictError(f"Concurrent update prevented {action}; retry")


@dataclass(slots=True)
class SqliteRatingRepository(RatingStorePort):
    """Run rating writes and aggregate recomputation in single SQLite transactions."""

    _db_manager: DatabaseManager
    _ratings: RatingsDAO

    def __init__(self, db_manager: DatabaseManager) -> None:
        self._db_manager = db_manager
        self._ratings = RatingsDAO(self._db_manager.require_connection())

    @contextmanager
    def _atomic(self, action: str) -> Iterator[None]:
        try:
            with self._db_manager.transaction():
                yield
        except sqlite3.Error as e:
            if _is_lock_error(e):
                raise _conflict(action, e) from e
            raise store_failure(action, e) from e
        except StoreFailureError as e:
            cause = e.__cause__
            if isinstance(cause, sqlite3.Error) and _is_lock_error(cause):
                raise _conflict(action, cause) from cause
            raise

    def save_and_recompute(
        self,
        user_id: str,
        entity_type: EntityType,
        entity_id: int,
        value: float,
    ) -> Rating:
        with self._atomic(f"saving rating on {entity_type.value} #{entity_id}"):
            if not self._ratings.entity_exists(entity_type.value, entity_id):
                raise NotFoundError(f"No {entity_type.value} with id {entity_id}")
            self._ratings.upsert(user_id, entity_type.value, entity_id, value)
            self._ratings.recompute(entity_type.value, entity_id)
            row = self._ratings.get(user_id, entity_type.value, entity_id)
        if row is None:  # pragma: no cover
            raise StoreFailureError(f"Rating on {entity_type.value} #{entity_id} missing after save")
        return _to_rating(row)

    def delete_and_recompute(self, user_id: str, entity_type: EntityType, entity_id: int) -> bool:
        with self._atomic(f"deleting rating on {entity_type.value} #{entity_id}"):
            removed = self._ratings.delete(user_id, entity_type.value, entity_id)
            self._ratings.recompute(entity_type.value, entity_id)
        return removed

    def get(self, user_id: str, entity_type: EntityType, entity_id: int) -> Rating | None:
        with self._db_manager.reading():
            row = self._ratings.get(user_id, entity_type.value, entity_id)
        return _to_rating(row) if row else None

    def aggregate(self, entity_type: EntityType, entity_id: int) -> RatingAggregate | None:
        with self._db_manager.reading():
            row = self._ratings.aggregate(entity_type.value, entity_id)
        if row is None:
            return None
        return RatingAggregate(
            entity_type=entity_type,
            entity_id=entity_id,
            avg_rating=row.avg_rating,
            rating_count=row.rating_count,
        )


__all__ = ["SqliteRatingRepository"]
