"""
Summary: Store-level error helpers shared by the DAOs.
Why: Keep ``sqlite3.Error`` from escaping the DB layer untyped.
"""

from __future__ import annotations

import sqlite3

from soundsocial.platform.logging import logger
from soundsocial.shared.errors import StoreFailureError


class DuplicateEntityError(StoreFailureError):
    """A UNIQUE(mbid) constraint rejected an insert because another writer got there first."""

    def __init__(self, table: str, mbid: str) -> None:
        super().__init__(f"{table} row for {mbid} already exists")
        self.table: str = table
        self.mbid: str = mbid


def is_unique_violation(exc: sqlite3.IntegrityError) -> bool:
    return "UNIQUE constraint failed" in str(exc)


def store_failure(action: str, exc: sqlite3.Error) -> StoreFailureError:
    """Log ``exc`` and wrap it for propagation."""

    logger.error("Database error while %s: %s", action, exc)
    return StoreFailureError(f"Database error while {action}: {exc}")


__all__ = ["DuplicateEntityError", "is_unique_violation", "store_failure"]
