"""Use cases resolving catalog entities against the local store and MusicBrainz."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from logging import Logger, getLogger
from typing import Final

from soundsocial.platform.musicbrainz.models import AlbumSummary

from ..domain.models import AlbumSearchHit, AlbumView, ArtistView, LocalAlbum, SearchResults, ViewSource
from .ports import CatalogStorePort, MetadataSourcePort
from .single_flight import SingleFlight

MIN_QUERY_LENGTH: Final[int] = 2
_SEARCH_WORKERS: Final[int] = 3


class CatalogResolver:
    """Resolve albums, artists and searches through injected ports.

    Local rows always win over remote data. Concurrent resolutions of the same
    mbid within one resolver share one execution.
    """

    _source: MetadataSourcePort
    _store: CatalogStorePort
    _logger: Logger
    _max_workers: int

    def __init__(
        self,
        *,
        source: MetadataSourcePort,
        store: CatalogStorePort,
        logger: Logger | None = None,
        max_workers: int = _SEARCH_WORKERS,
    ) -> None:
        self._source = source
        self._store = store
        self._logger = logger or getLogger(__name__)
        self._max_workers = max(1, max_workers)
        self._album_flights: SingleFlight[AlbumView] = SingleFlight()
        self._artist_flights: SingleFlight[ArtistView] = SingleFlight()

    # --- albums -----------------------------------------------------------

    def resolve_album(self, mbid: str) -> AlbumView:
        """Return the album for ``mbid``, fetching and storing it on first sight.

        Raises:
            NotFoundError: MusicBrainz has no such release-group.
            RemoteUnavailableError: MusicBrainz could not be reached.
            StoreFailureError: The local store failed.
        """

        return self._album_flights.run(mbid, lambda: self._resolve_album(mbid))

    def _resolve_album(self, mbid: str) -> AlbumView:
        local = self._store.find_album(mbid)
        if local is not None:
            self._logger.info(
                "Album %s served from local catalog",
                local.title,
                extra={"catalog_event": "catalog.album.local", "mbid": mbid, "album_id": local.id},
            )
            return local

        detail = self._source.fetch_full_album(mbid)
        saved = self._store.save_album(detail)
        if not saved.created:
            self._logger.info(
                "Album %s was stored concurrently; using the stored row",
                saved.view.title,
                extra={"catalog_event": "catalog.album.race", "mbid": mbid, "album_id": saved.view.id},
            )
            return saved.view

        self._logger.info(
            "Album %s fetched from MusicBrainz",
            saved.view.title,
            extra={
                "catalog_event": "catalog.album.remote",
                "mbid": mbid,
                "album_id": saved.view.id,
                "track_count": len(saved.view.tracks),
            },
        )
        return replace(saved.view, source=ViewSource.REMOTE)

    # --- artists ----------------------------------------------------------

    def resolve_artist(self, mbid: str) -> ArtistView:
        """Return the artist for ``mbid``.

        A stored artist is returned with its local albums only. Otherwise the
        artist is fetched, stored, and returned with its remote discography,
        each release tagged with the local album id when tracked.
        """

        return self._artist_flights.run(mbid, lambda: self._resolve_artist(mbid))

    def _resolve_artist(self, mbid: str) -> ArtistView:
        local = self._store.find_artist(mbid)
        if local is not None:
            self._logger.info(
                "Artist %s served from local catalog",
                local.name,
                extra={"catalog_event": "catalog.artist.local", "mbid": mbid, "artist_id": local.id},
            )
            return local

        detail = self._source.fetch_artist(mbid)
        view = self._store.save_artist(detail)
        self._logger.info(
            "Artist %s fetched from MusicBrainz",
            view.name,
            extra={"catalog_event": "catalog.artist.remote", "mbid": mbid, "artist_id": view.id},
        )
        return replace(view, source=ViewSource.REMOTE)

    # --- search -----------------------------------------------------------

    def search(self, text: str) -> SearchResults:
        """Search artists, albums and tracks concurrently.

        Queries shorter than two characters after stripping return empty
        results. Album hits carry local cover and rating data when the album
        is stored; other hits get a best-effort cover lookup. Nothing is
        written to the store.
        """

        query = text.strip()
        if len(query) < MIN_QUERY_LENGTH:
            return SearchResults()

        with ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="catalog-search") as pool:
            artists_future = pool.submit(self._source.search_artists, query)
            albums_future = pool.submit(self._source.search_albums, query)
            tracks_future = pool.submit(self._source.search_tracks, query)

            albums = albums_future.result()
            overlays = self._store.album_overlays([album.mbid for album in albums])
            missing = [album.mbid for album in albums if album.mbid not in overlays]
            covers = dict(zip(missing, pool.map(self._source.fetch_cover_art, missing), strict=True))

            results = SearchResults(
                artists=tuple(artists_future.result()),
                albums=tuple(_search_hit(album, overlays.get(album.mbid), covers.get(album.mbid)) for album in albums),
                tracks=tuple(tracks_future.result()),
            )

        self._logger.info(
            "Search %r returned %d artists, %d albums, %d tracks",
            query,
            len(results.artists),
            len(results.albums),
            len(results.tracks),
            extra={"catalog_event": "catalog.search"},
        )
        return results


def _search_hit(album: AlbumSummary, local: LocalAlbum | None, remote_cover: str | None) -> AlbumSearchHit:
    if local is None:
        return AlbumSearchHit(
            mbid=album.mbid,
            title=album.title,
            artist=album.artist,
            artist_mbid=album.artist_mbid,
            release_date=album.release_date,
            album_type=album.album_type,
            cover_url=remote_cover,
        )
    return AlbumSearchHit(
        mbid=album.mbid,
        title=album.title,
        artist=album.artist,
        artist_mbid=album.artist_mbid,
        release_date=album.release_date,
        album_type=album.album_type,
        cover_url=local.cover_url,
        avg_rating=local.avg_rating,
        rating_count=local.rating_count,
        local_album_id=local.id,
    )


__all__ = ["CatalogResolver", "MIN_QUERY_LENGTH"]
