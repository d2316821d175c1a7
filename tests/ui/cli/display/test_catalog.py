"""Tests for catalog display functionality."""

from io import StringIO

import pytest
from rich.console import Console

from soundsocial.features.catalog import (
    AlbumSearchHit,
    AlbumView,
    ArtistView,
    LocalAlbum,
    RemoteRelease,
    SearchResults,
    TrackView,
)
from soundsocial.platform.musicbrainz.models import ArtistSummary
from soundsocial.ui.cli.display.catalog import CatalogDisplay, format_duration, format_rating


def _display() -> tuple[CatalogDisplay, StringIO]:
    buffer = StringIO()
    return CatalogDisplay(console=Console(file=buffer, width=200)), buffer


@pytest.mark.parametrize(
    ("duration_ms", "expected"),
    [(None, "-"), (0, "0:00"), (61_500, "1:01"), (301_000, "5:01"), (3_600_000, "60:00")],
)
def test_format_duration(duration_ms: int | None, expected: str) -> None:
    assert format_duration(duration_ms) == expected


def test_format_rating() -> None:
    assert format_rating(0.0, 0) == "unrated"
    assert format_rating(8.0, 1) == "8.00 (1 rating)"
    assert format_rating(7.666, 3) == "7.67 (3 ratings)"


def test_show_album_lists_tracks() -> None:
    display, buffer = _display()
    album = AlbumView(
        id=1,
        mbid="rg-1",
        title="Nevermind",
        artist_id=1,
        artist_name="Nirvana",
        artist_mbid="ar-1",
        release_date="1991-09-24",
        album_type="Album",
        cover_url=None,
        avg_rating=9.0,
        rating_count=2,
        tracks=(
            TrackView(
                id=5,
                mbid="rec-1",
                title="Smells Like Teen Spirit",
                position=1,
                track_number=1,
                duration_ms=301_000,
                avg_rating=0.0,
                rating_count=0,
            ),
        ),
    )

    display.show_album(album)

    output = buffer.getvalue()
    assert "Nevermind" in output
    assert "9.00 (2 ratings)" in output
    assert "Smells Like Teen Spirit" in output
    assert "5:01" in output


def test_show_artist_marks_stored_releases() -> None:
    display, buffer = _display()
    artist = ArtistView(
        id=1,
        mbid="ar-1",
        name="Nirvana",
        country="US",
        artist_type="Group",
        formed_year=1987,
        genres=("grunge",),
        albums=(
            LocalAlbum(
                id=3,
                mbid="rg-1",
                title="Nevermind",
                release_date="1991-09-24",
                album_type="Album",
                cover_url=None,
                avg_rating=0.0,
                rating_count=0,
            ),
        ),
        releases=(
            RemoteRelease(mbid="rg-0", title="Bleach", release_date="1989-06-15", album_type="Album"),
            RemoteRelease(mbid="rg-1", title="Nevermind", release_date=None, album_type="Album", local_album_id=3),
        ),
    )

    display.show_artist(artist)

    output = buffer.getvalue()
    assert "Country: US" in output
    assert "Type: Group" in output
    assert "Genres: grunge" in output
    assert "Bleach" in output
    assert "#3" in output


def test_show_search_empty_and_quiet() -> None:
    display, buffer = _display()

    display.show_search(SearchResults(), quiet=True)
    assert buffer.getvalue() == ""

    display.show_search(SearchResults())
    assert "No results." in buffer.getvalue()


def test_show_search_renders_sections() -> None:
    display, buffer = _display()
    results = SearchResults(
        artists=(ArtistSummary(mbid="ar-1", name="Nirvana", country="US"),),
        albums=(
            AlbumSearchHit(
                mbid="rg-1",
                title="Nevermind",
                artist="Nirvana",
                artist_mbid="ar-1",
                release_date="1991-09-24",
                album_type="Album",
                cover_url="https://caa.test/rg-1.jpg",
                avg_rating=8.5,
                rating_count=2,
                local_album_id=1,
            ),
        ),
    )

    display.show_search(results)

    output = buffer.getvalue()
    assert "Artists" in output
    assert "Albums" in output
    assert "8.50 (2 ratings)" in output
    assert "Tracks" not in output
