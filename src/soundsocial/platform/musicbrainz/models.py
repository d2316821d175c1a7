"""Where: src/soundsocial/platform/musicbrainz/models.py
What: Typed DTOs mapped from MusicBrainz and Cover Art Archive payloads.
Why: Consumers never touch raw JSON; optional fields are explicit optionals.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class ArtistSummary:
    """Artist search hit."""

    mbid: str
    name: str
    country: str | None = None
    genres: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class AlbumSummary:
    """Release-group search hit."""

    mbid: str
    title: str
    artist: str | None = None
    artist_mbid: str | None = None
    release_date: str | None = None
    album_type: str | None = None


@dataclass(slots=True, frozen=True)
class TrackSummary:
    """Recording search hit."""

    mbid: str
    title: str
    artist: str | None = None
    artist_mbid: str | None = None
    duration_ms: int | None = None
    album: str | None = None
    album_mbid: str | None = None


@dataclass(slots=True, frozen=True)
class TrackDetail:
    """One entry of a release tracklist.

    ``position`` is the 1-based order across all media of the release;
    ``track_number`` is the printed number when it parses as an integer.
    """

    mbid: str
    title: str
    position: int
    track_number: int | None = None
    duration_ms: int | None = None


@dataclass(slots=True, frozen=True)
class AlbumDetail:
    """Release-group metadata with the tracklist of its first release."""

    mbid: str
    title: str
    artist: str
    artist_mbid: str
    release_date: str | None = None
    album_type: str | None = None
    cover_url: str | None = None
    tracks: tuple[TrackDetail, ...] = field(default_factory=tuple)


@dataclass(slots=True, frozen=True)
class ReleaseGroupSummary:
    """Entry of an artist's discography."""

    mbid: str
    title: str
    release_date: str | None = None
    album_type: str | None = None


@dataclass(slots=True, frozen=True)
class ArtistDetail:
    """Artist lookup result including genres and album discography."""

    mbid: str
    name: str
    country: str | None = None
    artist_type: str | None = None
    formed_year: int | None = None
    genres: tuple[str, ...] = ()
    releases: tuple[ReleaseGroupSummary, ...] = ()


__all__ = [
    "AlbumDetail",
    "AlbumSummary",
    "ArtistDetail",
    "ArtistSummary",
    "ReleaseGroupSummary",
    "TrackDetail",
    "TrackSummary",
]
