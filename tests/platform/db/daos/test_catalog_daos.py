"""Tests for the artist, album and track DAOs."""

from __future__ import annotations

import pytest

from soundsocial.platform.db.daos.albums_dao import AlbumsDAO
from soundsocial.platform.db.daos.artists_dao import ArtistsDAO
from soundsocial.platform.db.daos.tracks_dao import TracksDAO
from soundsocial.platform.db.db_manager import DatabaseManager
from soundsocial.platform.db.errors import DuplicateEntityError
from soundsocial.shared.errors import StoreFailureError


def _insert_album(albums: AlbumsDAO, artist_id: int, mbid: str, release_date: str | None = None) -> int:
    return albums.insert(
        mbid=mbid,
        artist_id=artist_id,
        title=f"Album {mbid}",
        release_date=release_date,
        album_type="Album",
        cover_url=None,
    )


class TestArtistsDAO:
    def test_insert_if_absent_is_idempotent(self, db_manager: DatabaseManager) -> None:
        with db_manager.transaction() as conn:
            dao = ArtistsDAO(conn)
            first = dao.insert_if_absent("ar-1", "Nirvana")
            second = dao.insert_if_absent("ar-1", "Nirvana (renamed)")

        assert first == second
        row = ArtistsDAO(db_manager.require_connection()).get_by_mbid("ar-1")
        assert row is not None
        assert row.name == "Nirvana"
        assert row.genres == ()

    def test_upsert_refreshes_fields_and_keeps_known_values(self, db_manager: DatabaseManager) -> None:
        with db_manager.transaction() as conn:
            dao = ArtistsDAO(conn)
            _ = dao.upsert(
                "ar-1", "Nirvana", country="US", formed_year=1987, genres=("grunge", "rock"), artist_type="Group"
            )
            row = dao.upsert("ar-1", "Nirvana", country=None, formed_year=None, genres=("grunge",))

        assert row.country == "US"
        assert row.artist_type == "Group"
        assert row.formed_year == 1987
        assert row.genres == ("grunge",)

    def test_missing_artist_returns_none(self, db_manager: DatabaseManager) -> None:
        assert ArtistsDAO(db_manager.require_connection()).get_by_mbid("nobody") is None


class TestAlbumsDAO:
    def test_insert_and_read_back_with_artist(self, db_manager: DatabaseManager) -> None:
        with db_manager.transaction() as conn:
            artist_id = ArtistsDAO(conn).insert_if_absent("ar-1", "Nirvana")
            album_id = _insert_album(AlbumsDAO(conn), artist_id, "rg-1", "1991-09-24")

        row = AlbumsDAO(db_manager.require_connection()).get_by_mbid("rg-1")

        assert row is not None
        assert row.id == album_id
        assert row.artist_name == "Nirvana"
        assert row.artist_mbid == "ar-1"
        assert row.avg_rating == 0.0
        assert row.rating_count == 0

    def test_duplicate_insert_raises_duplicate_entity(self, db_manager: DatabaseManager) -> None:
        with db_manager.transaction() as conn:
            artist_id = ArtistsDAO(conn).insert_if_absent("ar-1", "Nirvana")
            _ = _insert_album(AlbumsDAO(conn), artist_id, "rg-1")

        with pytest.raises(DuplicateEntityError) as excinfo:
            with db_manager.transaction() as conn:
                _ = _insert_album(AlbumsDAO(conn), artist_id, "rg-1")

        assert excinfo.value.mbid == "rg-1"
        assert isinstance(excinfo.value, StoreFailureError)
        assert AlbumsDAO(db_manager.require_connection()).count() == 1

    def test_list_by_mbids_returns_only_stored(self, db_manager: DatabaseManager) -> None:
        with db_manager.transaction() as conn:
            artist_id = ArtistsDAO(conn).insert_if_absent("ar-1", "Nirvana")
            albums = AlbumsDAO(conn)
            _ = _insert_album(albums, artist_id, "rg-1")
            _ = _insert_album(albums, artist_id, "rg-2")

        rows = AlbumsDAO(db_manager.require_connection()).list_by_mbids(["rg-2", "rg-x", "rg-1", "rg-2"])

        assert sorted(row.mbid for row in rows) == ["rg-1", "rg-2"]

    def test_list_by_mbids_handles_large_batches(self, db_manager: DatabaseManager) -> None:
        with db_manager.transaction() as conn:
            artist_id = ArtistsDAO(conn).insert_if_absent("ar-1", "Nirvana")
            _ = _insert_album(AlbumsDAO(conn), artist_id, "rg-999")

        mbids = [f"rg-{i}" for i in range(1200)]
        rows = AlbumsDAO(db_manager.require_connection()).list_by_mbids(mbids)

        assert [row.mbid for row in rows] == ["rg-999"]

    def test_list_by_artist_newest_first(self, db_manager: DatabaseManager) -> None:
        with db_manager.transaction() as conn:
            artist_id = ArtistsDAO(conn).insert_if_absent("ar-1", "Nirvana")
            albums = AlbumsDAO(conn)
            _ = _insert_album(albums, artist_id, "rg-old", "1989-06-15")
            _ = _insert_album(albums, artist_id, "rg-new", "1993-09-21")

        rows = AlbumsDAO(db_manager.require_connection()).list_by_artist(artist_id)

        assert [row.mbid for row in rows] == ["rg-new", "rg-old"]


class TestTracksDAO:
    def test_insert_ignore_skips_duplicate_recording(self, db_manager: DatabaseManager) -> None:
        with db_manager.transaction() as conn:
            artist_id = ArtistsDAO(conn).insert_if_absent("ar-1", "Nirvana")
            album_id = _insert_album(AlbumsDAO(conn), artist_id, "rg-1")
            tracks = TracksDAO(conn)
            inserted = tracks.insert_ignore(
                mbid="rec-1",
                album_id=album_id,
                artist_id=artist_id,
                title="Breed",
                position=1,
                track_number=1,
                duration_ms=183000,
            )
            repeated = tracks.insert_ignore(
                mbid="rec-1",
                album_id=album_id,
                artist_id=artist_id,
                title="Breed",
                position=1,
                track_number=1,
                duration_ms=183000,
            )

        assert inserted is True
        assert repeated is False
        assert len(TracksDAO(db_manager.require_connection()).list_by_album(album_id)) == 1

    def test_list_by_album_orders_by_position(self, db_manager: DatabaseManager) -> None:
        with db_manager.transaction() as conn:
            artist_id = ArtistsDAO(conn).insert_if_absent("ar-1", "Nirvana")
            album_id = _insert_album(AlbumsDAO(conn), artist_id, "rg-1")
            tracks = TracksDAO(conn)
            for position in (3, 1, 2):
                _ = tracks.insert_ignore(
                    mbid=f"rec-{position}",
                    album_id=album_id,
                    artist_id=artist_id,
                    title=f"Track {position}",
                    position=position,
                    track_number=None,
                    duration_ms=None,
                )

        rows = TracksDAO(db_manager.require_connection()).list_by_album(album_id)

        assert [row.position for row in rows] == [1, 2, 3]
