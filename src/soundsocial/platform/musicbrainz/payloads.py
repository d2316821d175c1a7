"""Where: src/soundsocial/platform/musicbrainz/payloads.py
What: Map raw WS2 / Cover Art Archive JSON into DTOs and normalize fields once.
Why: Separate payload interpretation from HTTP and cache concerns.

Normalization rules applied here and nowhere else:
- release dates: ``"1990"`` -> ``"1990-01-01"``, ``"1990-11"`` -> ``"1990-11-01"``,
  anything else passes through unchanged, absent stays absent;
- integers (track numbers, durations, years): unparseable values become ``None``;
- entries lacking an ``id`` are skipped rather than failing the whole payload.
"""

from __future__ import annotations

from typing import Any, cast

from soundsocial.shared.errors import RemoteUnavailableError

from .models import (
    AlbumDetail,
    AlbumSummary,
    ArtistDetail,
    ArtistSummary,
    ReleaseGroupSummary,
    TrackDetail,
    TrackSummary,
)


def normalize_release_date(value: str | None) -> str | None:
    """Expand partial MusicBrainz dates to a full calendar date."""

    if not value:
        return None
    if len(value) == 4:
        return f"{value}-01-01"
    if len(value) == 7:
        return f"{value}-01"
    return value


def parse_int(value: Any) -> int | None:
    """Return ``value`` as an int, or ``None`` when it does not parse."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        stripped = value.strip()
        try:
            return int(stripped)
        except ValueError:
            return None
    return None


def _text(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _dict_list(value: Any) -> list[dict[str, Any]]:
    """Filter a raw JSON value down to the dictionaries it contains."""

    if not isinstance(value, list):
        return []
    return [cast(dict[str, Any], entry) for entry in cast(list[object], value) if isinstance(entry, dict)]


def _dict(value: Any) -> dict[str, Any]:
    return cast(dict[str, Any], value) if isinstance(value, dict) else {}


def _first_credited_artist(entry: dict[str, Any]) -> dict[str, Any]:
    credits = _dict_list(entry.get("artist-credit"))
    if not credits:
        return {}
    return _dict(credits[0].get("artist"))


def top_tag_names(tags: Any, limit: int) -> tuple[str, ...]:
    """Return up to ``limit`` tag names ordered by vote count, payload order on ties."""

    entries = [tag for tag in _dict_list(tags) if _text(tag.get("name"))]
    ranked = sorted(entries, key=lambda tag: -(parse_int(tag.get("count")) or 0))
    return tuple(str(tag["name"]) for tag in ranked[:limit])


def map_artist_search(payload: dict[str, Any]) -> list[ArtistSummary]:
    hits: list[ArtistSummary] = []
    for artist in _dict_list(payload.get("artists")):
        mbid = _text(artist.get("id"))
        name = _text(artist.get("name"))
        if mbid is None or name is None:
            continue
        genres = tuple(
            str(tag["name"]) for tag in _dict_list(artist.get("tags")) if _text(tag.get("name"))
        )
        hits.append(
            ArtistSummary(mbid=mbid, name=name, country=_text(artist.get("country")), genres=genres)
        )
    return hits


def map_album_search(payload: dict[str, Any]) -> list[AlbumSummary]:
    hits: list[AlbumSummary] = []
    for group in _dict_list(payload.get("release-groups")):
        mbid = _text(group.get("id"))
        title = _text(group.get("title"))
        if mbid is None or title is None:
            continue
        artist = _first_credited_artist(group)
        hits.append(
            AlbumSummary(
                mbid=mbid,
                title=title,
                artist=_text(artist.get("name")),
                artist_mbid=_text(artist.get("id")),
                release_date=normalize_release_date(_text(group.get("first-release-date"))),
                album_type=_text(group.get("primary-type")),
            )
        )
    return hits


def map_track_search(payload: dict[str, Any]) -> list[TrackSummary]:
    hits: list[TrackSummary] = []
    for recording in _dict_list(payload.get("recordings")):
        mbid = _text(recording.get("id"))
        title = _text(recording.get("title"))
        if mbid is None or title is None:
            continue
        artist = _first_credited_artist(recording)
        releases = _dict_list(recording.get("releases"))
        first_release = releases[0] if releases else {}
        hits.append(
            TrackSummary(
                mbid=mbid,
                title=title,
                artist=_text(artist.get("name")),
                artist_mbid=_text(artist.get("id")),
                duration_ms=parse_int(recording.get("length")),
                album=_text(first_release.get("title")),
                album_mbid=_text(first_release.get("id")),
            )
        )
    return hits


def map_release_group(payload: dict[str, Any]) -> tuple[AlbumDetail, str | None]:
    """Map a release-group lookup; returns the album and its first release id.

    Raises:
        RemoteUnavailableError: When identifying fields are missing.
    """

    mbid = _text(payload.get("id"))
    title = _text(payload.get("title"))
    artist = _first_credited_artist(payload)
    artist_mbid = _text(artist.get("id"))
    artist_name = _text(artist.get("name"))
    if mbid is None or title is None or artist_mbid is None or artist_name is None:
        raise RemoteUnavailableError("Release-group payload lacks id, title or artist credit")

    releases = _dict_list(payload.get("releases"))
    first_release_id = _text(releases[0].get("id")) if releases else None

    album = AlbumDetail(
        mbid=mbid,
        title=title,
        artist=artist_name,
        artist_mbid=artist_mbid,
        release_date=normalize_release_date(_text(payload.get("first-release-date"))),
        album_type=_text(payload.get("primary-type")),
    )
    return album, first_release_id


def map_release_tracks(payload: dict[str, Any]) -> tuple[TrackDetail, ...]:
    """Flatten every medium of a release lookup into one ordered tracklist."""

    tracks: list[TrackDetail] = []
    position = 0
    for medium in _dict_list(payload.get("media")):
        for track in _dict_list(medium.get("tracks")):
            recording = _dict(track.get("recording"))
            mbid = _text(recording.get("id"))
            title = _text(track.get("title")) or _text(recording.get("title"))
            if mbid is None or title is None:
                continue
            position += 1
            duration = parse_int(track.get("length"))
            if duration is None:
                duration = parse_int(recording.get("length"))
            tracks.append(
                TrackDetail(
                    mbid=mbid,
                    title=title,
                    position=position,
                    track_number=parse_int(track.get("number")),
                    duration_ms=duration,
                )
            )
    return tuple(tracks)


def map_artist_detail(payload: dict[str, Any], *, max_genres: int) -> ArtistDetail:
    """Map an artist lookup including tags and album release-groups.

    Raises:
        RemoteUnavailableError: When identifying fields are missing.
    """

    mbid = _text(payload.get("id"))
    name = _text(payload.get("name"))
    if mbid is None or name is None:
        raise RemoteUnavailableError("Artist payload lacks id or name")

    begin = _text(_dict(payload.get("life-span")).get("begin"))
    releases = tuple(
        ReleaseGroupSummary(
            mbid=str(group["id"]),
            title=str(group["title"]),
            release_date=normalize_release_date(_text(group.get("first-release-date"))),
            album_type=_text(group.get("primary-type")),
        )
        for group in _dict_list(payload.get("release-groups"))
        if group.get("primary-type") == "Album" and _text(group.get("id")) and _text(group.get("title"))
    )
    return ArtistDetail(
        mbid=mbid,
        name=name,
        country=_text(payload.get("country")),
        artist_type=_text(payload.get("type")),
        formed_year=parse_int(begin[:4]) if begin else None,
        genres=top_tag_names(payload.get("tags"), max_genres),
        releases=releases,
    )


def map_cover_art(payload: dict[str, Any]) -> str | None:
    """Pick the large thumbnail of the first image, else the full image URL."""

    images = _dict_list(payload.get("images"))
    if not images:
        return None
    first = images[0]
    thumbnails = _dict(first.get("thumbnails"))
    return _text(thumbnails.get("large")) or _text(first.get("image"))


__all__ = [
    "map_album_search",
    "map_artist_detail",
    "map_artist_search",
    "map_cover_art",
    "map_release_group",
    "map_release_tracks",
    "map_track_search",
    "normalize_release_date",
    "parse_int",
    "top_tag_names",
]
