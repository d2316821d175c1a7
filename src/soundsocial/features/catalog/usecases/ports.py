"""Summary: Ports defining catalog use case dependencies.
Why: Decouple the resolver from MusicBrainz and SQLite so tests can swap in doubles."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from soundsocial.platform.musicbrainz.models import (
    AlbumDetail,
    AlbumSummary,
    ArtistDetail,
    ArtistSummary,
    TrackSummary,
)

from ..domain.models import AlbumView, ArtistView, LocalAlbum


@dataclass(slots=True, frozen=True)
class SavedAlbum:
    """Outcome of persisting a remotely fetched album."""

    view: AlbumView
    created: bool


@runtime_checkable
class MetadataSourcePort(Protocol):
    """Port for the remote metadata service."""

    def search_artists(self, text: str) -> list[ArtistSummary]:
        """Search artists by free text."""
        ...

    def search_albums(self, text: str) -> list[AlbumSummary]:
        """Search albums by free text."""
        ...

    def search_tracks(self, text: str) -> list[TrackSummary]:
        """Search tracks by free text."""
        ...

    def fetch_full_album(self, mbid: str) -> AlbumDetail:
        """Fetch album metadata with its tracklist and cover."""
        ...

    def fetch_artist(self, mbid: str) -> ArtistDetail:
        """Fetch artist metadata with genres and album discography."""
        ...

    def fetch_cover_art(self, mbid: str) -> str | None:
        """Return a cover URL or None; never raises."""
        ...


@runtime_checkable
class CatalogStorePort(Protocol):
    """Port for the local catalog store."""

    def find_album(self, mbid: str) -> AlbumView | None:
        """Return the stored album with ordered tracks, if present."""
        ...

    def save_album(self, album: AlbumDetail) -> SavedAlbum:
        """Persist a fetched album with its artist and tracks in one transaction.

        When another writer stored the same album first, the stored row wins and
        is returned with ``created=False``.
        """
        ...

    def find_artist(self, mbid: str) -> ArtistView | None:
        """Return the stored artist with its local albums, if present."""
        ...

    def save_artist(self, artist: ArtistDetail) -> ArtistView:
        """Upsert a fetched artist and return it with local albums and discography."""
        ...

    def album_overlays(self, mbids: Sequence[str]) -> dict[str, LocalAlbum]:
        """Batch-read stored albums keyed by mbid."""
        ...


__all__ = ["CatalogStorePort", "MetadataSourcePort", "SavedAlbum"]
