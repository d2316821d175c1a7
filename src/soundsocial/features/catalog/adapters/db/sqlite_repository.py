"""SQLite-backed adapter for the catalog feature."""

from __future__ import annotations

import sqlite3
from collections.abc import Sequence
from dataclasses import dataclass

from soundsocial.platform.db.daos.albums_dao import AlbumRow, AlbumsDAO
from soundsocial.platform.db.daos.artists_dao import ArtistRow, ArtistsDAO
from soundsocial.platform.db.daos.tracks_dao import TracksDAO
from soundsocial.platform.db.db_manager import DatabaseManager
from soundsocial.platform.db.errors import DuplicateEntityError, store_failure
from soundsocial.platform.logging import logger
from soundsocial.platform.musicbrainz.models import AlbumDetail, ArtistDetail
from soundsocial.shared.errors import StoreFailureError

from ...domain.models import AlbumView, ArtistView, LocalAlbum, RemoteRelease, TrackView
from ...usecases.ports import CatalogStorePort, SavedAlbum


def _local_album(row: AlbumRow) -> LocalAlbum:
    return LocalAlbum(
        id=row.id,
        mbid=row.mbid,
        title=row.title,
        release_date=row.release_date,
        album_type=row.album_type,
        cover_url=row.cover_url,
        avg_rating=row.avg_rating,
        rating_count=row.rating_count,
    )


@dataclass(slots=True)
class SqliteCatalogRepository(CatalogStorePort):
    """Bridge catalog use cases to the SQLite persistence layer."""

    _db_manager: DatabaseManager
    _artists: ArtistsDAO
    _albums: AlbumsDAO
    _tracks: TracksDAO

    def __init__(self, db_manager: DatabaseManager) -> None:
        self._db_manager = db_manager
        conn = self._db_manager.require_connection()
        self._artists = ArtistsDAO(conn)
        self._albums = AlbumsDAO(conn)
        self._tracks = TracksDAO(conn)

    # --- albums -----------------------------------------------------------

    def find_album(self, mbid: str) -> AlbumView | None:
        with self._db_manager.reading():
            row = self._albums.get_by_mbid(mbid)
            return self._album_view(row) if row else None

    def save_album(self, album: AlbumDetail) -> SavedAlbum:
        try:
            with self._db_manager.transaction():
                artist_id = self._artists.insert_if_absent(album.artist_mbid, album.artist)
                album_id = self._albums.insert(
                    mbid=album.mbid,
                    artist_id=artist_id,
                    title=album.title,
                    release_date=album.release_date,
                    album_type=album.album_type,
                    cover_url=album.cover_url,
                )
                for track in album.tracks:
                    _ = self._tracks.insert_ignore(
                        mbid=track.mbid,
                        album_id=album_id,
                        artist_id=artist_id,
                        title=track.title,
                        position=track.position,
                        track_number=track.track_number,
                        duration_ms=track.duration_ms,
                    )
                row = self._albums.get_by_id(album_id)
                if row is None:  # pragma: no cover
                    raise StoreFailureError(f"Album {album.mbid} missing right after insert")
                return SavedAlbum(view=self._album_view(row), created=True)
        except DuplicateEntityError:
            logger.debug("Album %s already stored by another writer; re-reading", album.mbid)
        except sqlite3.Error as e:
            raise store_failure(f"saving album {album.mbid}", e) from e

        stored = self.find_album(album.mbid)
        if stored is None:
            raise StoreFailureError(f"Album {album.mbid} reported as duplicate but not found")
        return SavedAlbum(view=stored, created=False)

    def _album_view(self, row: AlbumRow) -> AlbumView:
        tracks = tuple(
            TrackView(
                id=track.id,
                mbid=track.mbid,
                title=track.title,
                position=track.position,
                track_number=track.track_number,
                duration_ms=track.duration_ms,
                avg_rating=track.avg_rating,
                rating_count=track.rating_count,
            )
            for track in self._tracks.list_by_album(row.id)
        )
        return AlbumView(
            id=row.id,
            mbid=row.mbid,
            title=row.title,
            artist_id=row.artist_id,
            artist_name=row.artist_name,
            artist_mbid=row.artist_mbid,
            release_date=row.release_date,
            album_type=row.album_type,
            cover_url=row.cover_url,
            avg_rating=row.avg_rating,
            rating_count=row.rating_count,
            tracks=tracks,
        )

    def album_overlays(self, mbids: Sequence[str]) -> dict[str, LocalAlbum]:
        if not mbids:
            return {}
        with self._db_manager.reading():
            rows = self._albums.list_by_mbids(mbids)
        return {row.mbid: _local_album(row) for row in rows}

    # --- artists ----------------------------------------------------------

    def find_artist(self, mbid: str) -> ArtistView | None:
        with self._db_manager.reading():
            row = self._artists.get_by_mbid(mbid)
            if row is None:
                return None
            return self._artist_view(row, releases=())

    def save_artist(self, artist: ArtistDetail) -> ArtistView:
        try:
            with self._db_manager.transaction():
                row = self._artists.upsert(
                    artist.mbid,
                    artist.name,
                    country=artist.country,
                    artist_type=artist.artist_type,
                    formed_year=artist.formed_year,
                    genres=artist.genres,
                )
                tracked = {album.mbid: album.id for album in self._albums.list_by_mbids([r.mbid for r in artist.releases])}
                releases = tuple(
                    RemoteRelease(
                        mbid=release.mbid,
                        title=release.title,
                        release_date=release.release_date,
                        album_type=release.album_type,
                        local_album_id=tracked.get(release.mbid),
                    )
                    for release in artist.releases
                )
                return self._artist_view(row, releases=releases)
        except sqlite3.Error as e:
            raise store_failure(f"saving artist {artist.mbid}", e) from e

    def _artist_view(self, row: ArtistRow, *, releases: tuple[RemoteRelease, ...]) -> ArtistView:
        albums = tuple(_local_album(album) for album in self._albums.list_by_artist(row.id))
        return ArtistView(
            id=row.id,
            mbid=row.mbid,
            name=row.name,
            country=row.country,
            artist_type=row.artist_type,
            formed_year=row.formed_year,
            genres=row.genres,
            albums=albums,
            releases=releases,
        )


__all__ = ["SqliteCatalogRepository"]
