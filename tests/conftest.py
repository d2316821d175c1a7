"""Shared pytest fixtures for the SoundSocial test suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from soundsocial.platform.db.db_manager import DatabaseManager


@pytest.fixture
def db_manager() -> Iterator[DatabaseManager]:
    """Create a database manager backed by an in-memory database.

    Yields:
        DatabaseManager: Connected manager, closed after the test.
    """
    manager = DatabaseManager(":memory:")
    manager.connect()
    yield manager
    manager.close()
