"""Tests for wiring the synchronization services."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests
from pytest_mock import MockerFixture

from soundsocial.application.services.sync_service import build_sync_services
from soundsocial.features.catalog import ViewSource
from soundsocial.platform.musicbrainz import MusicBrainzHTTPClient
from soundsocial.platform.musicbrainz.models import (
    AlbumDetail,
    AlbumSummary,
    ArtistDetail,
    ArtistSummary,
    TrackDetail,
    TrackSummary,
)


class StaticSource:
    """Metadata source that serves a single album."""

    def search_artists(self, text: str) -> list[ArtistSummary]:
        return []

    def search_albums(self, text: str) -> list[AlbumSummary]:
        return []

    def search_tracks(self, text: str) -> list[TrackSummary]:
        return []

    def fetch_full_album(self, mbid: str) -> AlbumDetail:
        return AlbumDetail(
            mbid=mbid,
            title="Homogenic",
            artist="Björk",
            artist_mbid="ar-bjork",
            tracks=(TrackDetail(mbid="rec-hunter", title="Hunter", position=1),),
        )

    def fetch_artist(self, mbid: str) -> ArtistDetail:
        return ArtistDetail(mbid=mbid, name="Björk")

    def fetch_cover_art(self, mbid: str) -> str | None:
        return None


def test_services_share_one_store() -> None:
    with build_sync_services(db_path=":memory:", source=StaticSource()) as services:
        album = services.catalog.resolve_album("rg-homogenic")
        _ = services.ratings.submit_rating("u1", "album", album.id, 9.5)

        reloaded = services.catalog.resolve_album("rg-homogenic")

    assert services.http_client is None
    assert reloaded.source is ViewSource.LOCAL
    assert reloaded.avg_rating == 9.5
    assert reloaded.rating_count == 1


def test_live_client_is_built_when_no_source_given(mocker: MockerFixture, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MUSICBRAINZ_USER_AGENT", raising=False)
    session = MagicMock(spec=requests.Session)

    services = build_sync_services(db_path=":memory:", session=session, request_interval_seconds=0)

    assert isinstance(services.http_client, MusicBrainzHTTPClient)
    assert services.http_client.user_agent.startswith("SoundSocial/")
    close_db = mocker.spy(services.db_manager, "close")

    services.close()

    session.close.assert_called_once_with()
    close_db.assert_called_once_with()


def test_file_database_is_created(tmp_path: Path) -> None:
    db_file = tmp_path / "nested" / "catalog.db"

    with build_sync_services(db_path=db_file, source=StaticSource()) as services:
        _ = services.catalog.resolve_artist("ar-bjork")

    assert db_file.exists()
