"""Application service wiring the catalog and rating use cases.

This layer centralizes construction of the cache, rate-limit gate, HTTP
client and SQLite adapters so the CLI (and any other front end) reuses one
set of shared collaborators per process.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, final

import requests

from soundsocial.config.settings import (
    CACHE_MAX_ENTRIES,
    CACHE_TTL_SECONDS,
    DB_PATH,
    MB_APP_NAME,
    MB_APP_VERSION,
    MB_CONTACT,
    REQUEST_INTERVAL_SECONDS,
    REQUEST_TIMEOUT_SECONDS,
)
from soundsocial.features.catalog import CatalogResolver, SqliteCatalogRepository
from soundsocial.features.catalog.usecases.ports import MetadataSourcePort
from soundsocial.features.ratings import RatingAggregator, SqliteRatingRepository
from soundsocial.platform.db.db_manager import DatabaseManager
from soundsocial.platform.logging import logger
from soundsocial.platform.musicbrainz import (
    MusicBrainzClient,
    MusicBrainzHTTPClient,
    RateLimiter,
    TTLCache,
    resolve_user_agent,
)


@final
@dataclass(slots=True)
class SyncServices:
    """Process-wide bundle of the synchronization use cases."""

    catalog: CatalogResolver
    ratings: RatingAggregator
    db_manager: DatabaseManager
    http_client: MusicBrainzHTTPClient | None = None

    def close(self) -> None:
        """Release the HTTP session and the database connection."""

        if self.http_client is not None:
            self.http_client.close()
        self.db_manager.close()

    def __enter__(self) -> "SyncServices":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


def build_sync_services(
    *,
    db_path: Path | str | None = None,
    source: MetadataSourcePort | None = None,
    session: requests.Session | None = None,
    cache_ttl_seconds: float = CACHE_TTL_SECONDS,
    cache_max_entries: int = CACHE_MAX_ENTRIES,
    request_interval_seconds: float = REQUEST_INTERVAL_SECONDS,
    request_timeout_seconds: float = REQUEST_TIMEOUT_SECONDS,
) -> SyncServices:
    """Construct the catalog resolver and rating aggregator over shared infrastructure.

    Args:
        db_path: SQLite database location; ``":memory:"`` for a throwaway store.
            Defaults to the configured path.
        source: Metadata source to use instead of a live MusicBrainz client.
        session: ``requests`` session for the live client.
        cache_ttl_seconds: Lifetime of cached remote lookups.
        cache_max_entries: Capacity of the remote lookup cache.
        request_interval_seconds: Minimum spacing between outbound requests.
        request_timeout_seconds: Timeout applied to every outbound request.

    Returns:
        SyncServices: Ready-to-use services; call ``close()`` when done.
    """

    db_manager = DatabaseManager(db_path if db_path is not None else DB_PATH)
    db_manager.connect()

    http_client: MusicBrainzHTTPClient | None = None
    if source is None:
        user_agent = resolve_user_agent(MB_APP_NAME, MB_APP_VERSION, MB_CONTACT)
        http_client = MusicBrainzHTTPClient(
            user_agent=user_agent,
            rate_limiter=RateLimiter(request_interval_seconds),
            timeout_seconds=request_timeout_seconds,
            session=session,
        )
        source = MusicBrainzClient(http_client, TTLCache(cache_ttl_seconds, cache_max_entries))
        logger.debug("MusicBrainz client ready (User-Agent: %s)", user_agent)

    catalog = CatalogResolver(source=source, store=SqliteCatalogRepository(db_manager), logger=logger)
    ratings = RatingAggregator(store=SqliteRatingRepository(db_manager), logger=logger)
    return SyncServices(catalog=catalog, ratings=ratings, db_manager=db_manager, http_client=http_client)


__all__ = ["SyncServices", "build_sync_services"]
