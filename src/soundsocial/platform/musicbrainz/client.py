"""Where: src/soundsocial/platform/musicbrainz/client.py
What: Cache-first, rate-limited facade over MusicBrainz WS2 and the Cover Art Archive.
Why: Give the catalog resolver typed reads without it knowing about HTTP or caching.

This module delegates specialised responsibilities to smaller helpers:
- ``http_client`` performs gated, time-bounded GET requests
- ``payloads`` maps and normalizes raw JSON into ``models`` DTOs
- ``cache`` memoizes mapped results, including negative cover-art lookups
- ``user_agent`` centralises etiquette for outbound requests

Every operation probes the cache under ``"<operation>:<query>"`` first; a hit
returns without touching the network or the rate-limit gate.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Final, TypeVar, cast

from soundsocial.config.settings import (
    COVER_ART_BASE_URL,
    MB_BASE_URL,
    MB_MAX_GENRES,
    MB_SEARCH_LIMIT,
)
from soundsocial.platform.logging import logger
from soundsocial.shared.errors import NotFoundError, RemoteUnavailableError

from .cache import TTLCache
from .http_client import HTTPClient
from .models import AlbumDetail, AlbumSummary, ArtistDetail, ArtistSummary, TrackDetail, TrackSummary
from .payloads import (
    map_album_search,
    map_artist_detail,
    map_artist_search,
    map_cover_art,
    map_release_group,
    map_release_tracks,
    map_track_search,
)

_JSON_FORMAT: Final[dict[str, str]] = {"fmt": "json"}

T = TypeVar("T")


class MusicBrainzClient:
    """Typed MusicBrainz reads memoized through an injected ``TTLCache``."""

    def __init__(
        self,
        http_client: HTTPClient,
        cache: TTLCache[Any],
        *,
        base_url: str = MB_BASE_URL,
        cover_art_base_url: str = COVER_ART_BASE_URL,
        search_limit: int = MB_SEARCH_LIMIT,
        max_genres: int = MB_MAX_GENRES,
    ) -> None:
        self._http: HTTPClient = http_client
        self._cache: TTLCache[Any] = cache
        self._base_url: str = base_url.rstrip("/")
        self._cover_art_base_url: str = cover_art_base_url.rstrip("/")
        self._search_limit: int = search_limit
        self._max_genres: int = max_genres

    # --- searches ---------------------------------------------------------

    def search_artists(self, text: str) -> list[ArtistSummary]:
        """Search artists by free text."""

        query = text.strip()
        return list(
            self._memoized(
                f"search_artists:{query.casefold()}",
                lambda: tuple(map_artist_search(self._search("artist", {"query": query}))),
            )
        )

    def search_albums(self, text: str) -> list[AlbumSummary]:
        """Search album release-groups by free text."""

        query = text.strip()
        return list(
            self._memoized(
                f"search_albums:{query.casefold()}",
                lambda: tuple(map_album_search(self._search("release-group", {"query": query, "type": "album"}))),
            )
        )

    def search_tracks(self, text: str) -> list[TrackSummary]:
        """Search recordings by free text."""

        query = text.strip()
        return list(
            self._memoized(
                f"search_tracks:{query.casefold()}",
                lambda: tuple(map_track_search(self._search("recording", {"query": query}))),
            )
        )

    # --- lookups ----------------------------------------------------------

    def fetch_full_album(self, mbid: str) -> AlbumDetail:
        """Resolve a release-group, its first release's tracklist, and its cover art.

        Raises:
            NotFoundError: MusicBrainz has no release-group with this id.
            RemoteUnavailableError: Any other remote failure.
        """

        return self._memoized(f"full_album:{mbid}", lambda: self._load_full_album(mbid))

    def fetch_artist(self, mbid: str) -> ArtistDetail:
        """Resolve an artist with its top tags and album release-groups.

        Raises:
            NotFoundError: MusicBrainz has no artist with this id.
            RemoteUnavailableError: Any other remote failure.
        """

        def load() -> ArtistDetail:
            data = self._lookup(
                f"{self._base_url}/artist/{mbid}",
                {"inc": "release-groups+tags+url-rels"},
                what=f"artist {mbid}",
            )
            return map_artist_detail(data, max_genres=self._max_genres)

        return self._memoized(f"artist:{mbid}", load)

    def fetch_cover_art(self, mbid: str) -> str | None:
        """Return a cover image URL for a release-group, or ``None``.

        Never raises. "No art" (404 or an empty image list) is cached as a
        negative entry; transient failures are logged and not cached.
        """

        key = f"cover_art:{mbid}"
        entry = self._cache.get(key)
        if entry is not None:
            self._log_cache_hit(key)
            return cast(str | None, entry.value)

        try:
            result = self._http.get_json(f"{self._cover_art_base_url}/release-group/{mbid}", {})
        except RemoteUnavailableError as exc:
            logger.warning(
                "Cover art lookup failed for %s; continuing without cover",
                mbid,
                extra={"catalog_event": "catalog.remote.error", "mbid": mbid, "error_message": str(exc)},
            )
            return None

        cover_url = map_cover_art(result.data) if result.data is not None else None
        if cover_url is None:
            logger.debug(
                "No cover art for %s",
                mbid,
                extra={"catalog_event": "catalog.cover.missing", "mbid": mbid},
            )
        self._cache.set(key, cover_url)
        return cover_url

    # --- internals --------------------------------------------------------

    def _load_full_album(self, mbid: str) -> AlbumDetail:
        data = self._lookup(
            f"{self._base_url}/release-group/{mbid}",
            {"inc": "artists+releases"},
            what=f"release-group {mbid}",
        )
        album, first_release_id = map_release_group(data)

        tracks: tuple[TrackDetail, ...] = ()
        if first_release_id is not None:
            release = self._http.get_json(
                f"{self._base_url}/release/{first_release_id}",
                {"inc": "recordings", **_JSON_FORMAT},
            )
            if release.data is None:
                logger.warning("Release %s of %s vanished; tracklist left empty", first_release_id, mbid)
            else:
                tracks = map_release_tracks(release.data)

        return replace(album, tracks=tracks, cover_url=self.fetch_cover_art(mbid))

    def _search(self, entity: str, params: dict[str, str]) -> dict[str, Any]:
        result = self._http.get_json(
            f"{self._base_url}/{entity}",
            {**params, "limit": str(self._search_limit), **_JSON_FORMAT},
        )
        if result.data is None:
            raise RemoteUnavailableError(f"MusicBrainz {entity} search returned HTTP {result.status}")
        return result.data

    def _lookup(self, url: str, params: dict[str, str], *, what: str) -> dict[str, Any]:
        result = self._http.get_json(url, {**params, **_JSON_FORMAT})
        if result.not_found or result.data is None:
            raise NotFoundError(f"MusicBrainz has no {what}")
        return result.data

    def _memoized(self, key: str, loader: Callable[[], T]) -> T:
        entry = self._cache.get(key)
        if entry is not None:
            self._log_cache_hit(key)
            return cast(T, entry.value)
        value = loader()
        self._cache.set(key, value)
        return value

    @staticmethod
    def _log_cache_hit(key: str) -> None:
        logger.debug("Remote lookup served from cache: %s", key, extra={"catalog_event": "catalog.cache.hit"})


__all__ = ["MusicBrainzClient"]
