"""Views returned by the catalog resolver."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from soundsocial.platform.musicbrainz.models import ArtistSummary, TrackSummary


class ViewSource(str, Enum):
    """Where a resolved view came from."""

    LOCAL = "local"
    REMOTE = "remote"


@dataclass(slots=True, frozen=True)
class TrackView:
    """One stored track of an album, in tracklist order."""

    id: int
    mbid: str
    title: str
    position: int
    track_number: int | None = None
    duration_ms: int | None = None
    avg_rating: float = 0.0
    rating_count: int = 0


@dataclass(slots=True, frozen=True)
class AlbumView:
    """Album joined with its artist and ordered tracks."""

    id: int
    mbid: str
    title: str
    artist_id: int
    artist_name: str
    artist_mbid: str
    release_date: str | None
    album_type: str | None
    cover_url: str | None
    avg_rating: float
    rating_count: int
    tracks: tuple[TrackView, ...]
    source: ViewSource = ViewSource.LOCAL


@dataclass(slots=True, frozen=True)
class LocalAlbum:
    """Album row as listed on an artist page or overlaid onto a search hit."""

    id: int
    mbid: str
    title: str
    release_date: str | None
    album_type: str | None
    cover_url: str | None
    avg_rating: float
    rating_count: int


@dataclass(slots=True, frozen=True)
class RemoteRelease:
    """Discography entry from MusicBrainz, tagged with its local album id when tracked."""

    mbid: str
    title: str
    release_date: str | None
    album_type: str | None
    local_album_id: int | None = None


@dataclass(slots=True, frozen=True)
class ArtistView:
    """Artist with its locally tracked albums and, after a remote fetch, its discography."""

    id: int
    mbid: str
    name: str
    country: str | None
    artist_type: str | None
    formed_year: int | None
    genres: tuple[str, ...]
    albums: tuple[LocalAlbum, ...]
    releases: tuple[RemoteRelease, ...] = ()
    source: ViewSource = ViewSource.LOCAL


@dataclass(slots=True, frozen=True)
class AlbumSearchHit:
    """Album search hit with locally owned fields folded in."""

    mbid: str
    title: str
    artist: str | None
    artist_mbid: str | None
    release_date: str | None
    album_type: str | None
    cover_url: str | None = None
    avg_rating: float = 0.0
    rating_count: int = 0
    local_album_id: int | None = None


@dataclass(slots=True, frozen=True)
class SearchResults:
    """Combined artist, album and track hits for one query."""

    artists: tuple[ArtistSummary, ...] = ()
    albums: tuple[AlbumSearchHit, ...] = ()
    tracks: tuple[TrackSummary, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.artists or self.albums or self.tracks)


__all__ = [
    "AlbumSearchHit",
    "AlbumView",
    "ArtistView",
    "LocalAlbum",
    "RemoteRelease",
    "SearchResults",
    "TrackView",
    "ViewSource",
]
