"""Tests for the catalog resolver use cases."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace

import pytest

from soundsocial.features.catalog import CatalogResolver, SqliteCatalogRepository, ViewSource
from soundsocial.platform.db.db_manager import DatabaseManager
from soundsocial.platform.musicbrainz.models import (
    AlbumDetail,
    AlbumSummary,
    ArtistDetail,
    ArtistSummary,
    ReleaseGroupSummary,
    TrackDetail,
    TrackSummary,
)
from soundsocial.shared.errors import NotFoundError, RemoteUnavailableError

NEVERMIND = AlbumDetail(
    mbid="rg-1",
    title="Nevermind",
    artist="Nirvana",
    artist_mbid="ar-1",
    release_date="1991-09-24",
    album_type="Album",
    cover_url="https://caa.test/rg-1.jpg",
    tracks=(
        TrackDetail(mbid="rec-1", title="Smells Like Teen Spirit", position=1, track_number=1),
        TrackDetail(mbid="rec-2", title="In Bloom", position=2, track_number=2),
        TrackDetail(mbid="rec-3", title="Come as You Are", position=3, track_number=3),
    ),
)
NIRVANA = ArtistDetail(
    mbid="ar-1",
    name="Nirvana",
    country="US",
    formed_year=1987,
    genres=("grunge",),
    releases=(ReleaseGroupSummary(mbid="rg-1", title="Nevermind", album_type="Album"),),
)


class FakeMetadataSource:
    """In-memory metadata source that counts remote calls."""

    def __init__(self) -> None:
        self.albums: dict[str, AlbumDetail] = {NEVERMIND.mbid: NEVERMIND}
        self.artists: dict[str, ArtistDetail] = {NIRVANA.mbid: NIRVANA}
        self.covers: dict[str, str | None] = {}
        self.album_hits: list[AlbumSummary] = []
        self.album_calls: int = 0
        self.artist_calls: int = 0
        self.cover_calls: list[str] = []
        self.search_calls: int = 0
        self.before_album_return: threading.Barrier | None = None

    def search_artists(self, text: str) -> list[ArtistSummary]:
        self.search_calls += 1
        return [ArtistSummary(mbid="ar-1", name="Nirvana")]

    def search_albums(self, text: str) -> list[AlbumSummary]:
        self.search_calls += 1
        return list(self.album_hits)

    def search_tracks(self, text: str) -> list[TrackSummary]:
        self.search_calls += 1
        return [TrackSummary(mbid="rec-1", title="Smells Like Teen Spirit")]

    def fetch_full_album(self, mbid: str) -> AlbumDetail:
        self.album_calls += 1
        if self.before_album_return is not None:
            _ = self.before_album_return.wait(timeout=5)
        try:
            return self.albums[mbid]
        except KeyError:
            raise NotFoundError(f"MusicBrainz has no release-group {mbid}") from None

    def fetch_artist(self, mbid: str) -> ArtistDetail:
        self.artist_calls += 1
        try:
            return self.artists[mbid]
        except KeyError:
            raise NotFoundError(f"MusicBrainz has no artist {mbid}") from None

    def fetch_cover_art(self, mbid: str) -> str | None:
        self.cover_calls.append(mbid)
        return self.covers.get(mbid)


@pytest.fixture
def source() -> FakeMetadataSource:
    return FakeMetadataSource()


@pytest.fixture
def repository(db_manager: DatabaseManager) -> SqliteCatalogRepository:
    return SqliteCatalogRepository(db_manager)


@pytest.fixture
def resolver(source: FakeMetadataSource, repository: SqliteCatalogRepository) -> CatalogResolver:
    return CatalogResolver(source=source, store=repository, logger=logging.getLogger("tests.catalog"))


def _album_count(db_manager: DatabaseManager) -> int:
    with db_manager.reading() as conn:
        return int(conn.execute("SELECT COUNT(*) FROM albums").fetchone()[0])


class TestResolveAlbum:
    def test_first_resolution_fetches_and_stores(self, resolver: CatalogResolver, source: FakeMetadataSource) -> None:
        view = resolver.resolve_album("rg-1")

        assert view.source is ViewSource.REMOTE
        assert view.release_date == "1991-09-24"
        assert [t.position for t in view.tracks] == [1, 2, 3]
        assert source.album_calls == 1

    def test_second_resolution_is_local_and_identical(
        self, resolver: CatalogResolver, source: FakeMetadataSource, db_manager: DatabaseManager
    ) -> None:
        first = resolver.resolve_album("rg-1")
        second = resolver.resolve_album("rg-1")

        assert second.source is ViewSource.LOCAL
        assert replace(first, source=ViewSource.LOCAL) == second
        assert source.album_calls == 1
        assert _album_count(db_manager) == 1

    def test_concurrent_resolutions_create_one_row(
        self, resolver: CatalogResolver, source: FakeMetadataSource, db_manager: DatabaseManager
    ) -> None:
        with ThreadPoolExecutor(max_workers=8) as pool:
            views = list(pool.map(lambda _: resolver.resolve_album("rg-1"), range(8)))

        assert len({view.id for view in views}) == 1
        assert _album_count(db_manager) == 1
        with db_manager.reading() as conn:
            assert conn.execute("SELECT COUNT(*) FROM tracks").fetchone()[0] == 3

    def test_duplicate_insert_race_keeps_first_writer(
        self,
        source: FakeMetadataSource,
        repository: SqliteCatalogRepository,
        db_manager: DatabaseManager,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        source.before_album_return = threading.Barrier(2)
        log = logging.getLogger("tests.catalog.race")
        first = CatalogResolver(source=source, store=repository, logger=log)
        second = CatalogResolver(source=source, store=repository, logger=log)

        with caplog.at_level(logging.INFO, logger="tests.catalog.race"):
            with ThreadPoolExecutor(max_workers=2) as pool:
                futures = [pool.submit(r.resolve_album, "rg-1") for r in (first, second)]
                views = [future.result(timeout=10) for future in futures]

        assert source.album_calls == 2
        assert views[0].id == views[1].id
        assert _album_count(db_manager) == 1
        events = [getattr(record, "catalog_event", None) for record in caplog.records]
        assert events.count("catalog.album.remote") == 1
        assert events.count("catalog.album.race") == 1

    def test_unknown_album_raises_and_stores_nothing(
        self, resolver: CatalogResolver, db_manager: DatabaseManager
    ) -> None:
        with pytest.raises(NotFoundError):
            _ = resolver.resolve_album("rg-missing")

        assert _album_count(db_manager) == 0

    def test_remote_failure_propagates(self, resolver: CatalogResolver, source: FakeMetadataSource) -> None:
        def down(_mbid: str) -> AlbumDetail:
            raise RemoteUnavailableError("MusicBrainz unreachable")

        source.fetch_full_album = down  # type: ignore[method-assign]

        with pytest.raises(RemoteUnavailableError):
            _ = resolver.resolve_album("rg-1")


class TestResolveArtist:
    def test_remote_then_local(self, resolver: CatalogResolver, source: FakeMetadataSource) -> None:
        remote = resolver.resolve_artist("ar-1")
        local = resolver.resolve_artist("ar-1")

        assert remote.source is ViewSource.REMOTE
        assert remote.genres == ("grunge",)
        assert [r.mbid for r in remote.releases] == ["rg-1"]
        assert remote.releases[0].local_album_id is None
        assert local.source is ViewSource.LOCAL
        assert local.id == remote.id
        assert local.releases == ()
        assert source.artist_calls == 1

    def test_artist_created_by_album_resolution_is_local(
        self, resolver: CatalogResolver, source: FakeMetadataSource
    ) -> None:
        album = resolver.resolve_album("rg-1")

        artist = resolver.resolve_artist("ar-1")

        assert source.artist_calls == 0
        assert artist.id == album.artist_id
        assert [a.id for a in artist.albums] == [album.id]

    def test_unknown_artist_raises(self, resolver: CatalogResolver) -> None:
        with pytest.raises(NotFoundError):
            _ = resolver.resolve_artist("ar-missing")


class TestSearch:
    @pytest.mark.parametrize("text", ["", " ", "a", "  b  "])
    def test_short_queries_return_empty_without_remote_calls(
        self, resolver: CatalogResolver, source: FakeMetadataSource, text: str
    ) -> None:
        results = resolver.search(text)

        assert results.is_empty
        assert source.search_calls == 0

    def test_album_hits_overlay_local_data(
        self, resolver: CatalogResolver, source: FakeMetadataSource, db_manager: DatabaseManager
    ) -> None:
        stored = resolver.resolve_album("rg-1")
        with db_manager.transaction() as conn:
            _ = conn.execute("UPDATE albums SET avg_rating = 8.5, rating_count = 2 WHERE id = ?", (stored.id,))
        source.album_hits = [
            AlbumSummary(mbid="rg-1", title="Nevermind", artist="Nirvana", artist_mbid="ar-1"),
            AlbumSummary(mbid="rg-2", title="In Utero", artist="Nirvana", artist_mbid="ar-1"),
            AlbumSummary(mbid="rg-3", title="Bleach", artist="Nirvana", artist_mbid="ar-1"),
        ]
        source.covers = {"rg-2": "https://caa.test/rg-2.jpg"}

        results = resolver.search("nirvana")

        by_mbid = {hit.mbid: hit for hit in results.albums}
        assert by_mbid["rg-1"].local_album_id == stored.id
        assert by_mbid["rg-1"].avg_rating == 8.5
        assert by_mbid["rg-1"].rating_count == 2
        assert by_mbid["rg-1"].cover_url == stored.cover_url
        assert by_mbid["rg-2"].cover_url == "https://caa.test/rg-2.jpg"
        assert by_mbid["rg-2"].local_album_id is None
        assert by_mbid["rg-3"].cover_url is None
        assert sorted(source.cover_calls) == ["rg-2", "rg-3"]
        assert [a.mbid for a in results.artists] == ["ar-1"]
        assert [t.mbid for t in results.tracks] == ["rec-1"]

    def test_search_never_writes(
        self, resolver: CatalogResolver, source: FakeMetadataSource, db_manager: DatabaseManager
    ) -> None:
        source.album_hits = [AlbumSummary(mbid="rg-9", title="Unstored")]

        _ = resolver.search("unstored")

        assert _album_count(db_manager) == 0
        with db_manager.reading() as conn:
            assert conn.execute("SELECT COUNT(*) FROM artists").fetchone()[0] == 0

    def test_search_failure_propagates(self, resolver: CatalogResolver, source: FakeMetadataSource) -> None:
        def down(_text: str) -> list[TrackSummary]:
            raise RemoteUnavailableError("timeout")

        source.search_tracks = down  # type: ignore[method-assign]

        with pytest.raises(RemoteUnavailableError):
            _ = resolver.search("nirvana")
