"""Display utilities for catalog lookups and searches."""

from __future__ import annotations

from typing import final

from rich.console import Console
from rich.table import Table

from soundsocial.features.catalog.domain.models import AlbumView, ArtistView, SearchResults


def format_duration(duration_ms: int | None) -> str:
    """Render milliseconds as ``m:ss``; unknown durations render as ``-``."""

    if duration_ms is None or duration_ms < 0:
        return "-"
    total_seconds = duration_ms // 1000
    return f"{total_seconds // 60}:{total_seconds % 60:02d}"


def format_rating(avg_rating: float, rating_count: int) -> str:
    if rating_count == 0:
        return "unrated"
    noun = "rating" if rating_count == 1 else "ratings"
    return f"{avg_rating:.2f} ({rating_count} {noun})"


@final
class CatalogDisplay:
    """Render catalog views as rich tables."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_search(self, results: SearchResults, *, quiet: bool = False) -> None:
        if quiet:
            return
        if results.is_empty:
            self.console.print("[yellow]No results.[/yellow]")
            return

        if results.artists:
            artists = Table(title="Artists")
            artists.add_column("Name")
            artists.add_column("Country")
            artists.add_column("Genres")
            artists.add_column("MBID", style="dim")
            for artist in results.artists:
                artists.add_row(artist.name, artist.country or "-", ", ".join(artist.genres) or "-", artist.mbid)
            self.console.print(artists)

        if results.albums:
            albums = Table(title="Albums")
            albums.add_column("Title")
            albums.add_column("Artist")
            albums.add_column("Released")
            albums.add_column("Rating")
            albums.add_column("Cover")
            albums.add_column("MBID", style="dim")
            for album in results.albums:
                albums.add_row(
                    album.title,
                    album.artist or "-",
                    album.release_date or "-",
                    format_rating(album.avg_rating, album.rating_count),
                    "yes" if album.cover_url else "no",
                    album.mbid,
                )
            self.console.print(albums)

        if results.tracks:
            tracks = Table(title="Tracks")
            tracks.add_column("Title")
            tracks.add_column("Artist")
            tracks.add_column("Album")
            tracks.add_column("Length", justify="right")
            tracks.add_column("MBID", style="dim")
            for track in results.tracks:
                tracks.add_row(
                    track.title,
                    track.artist or "-",
                    track.album or "-",
                    format_duration(track.duration_ms),
                    track.mbid,
                )
            self.console.print(tracks)

    def show_album(self, album: AlbumView, *, quiet: bool = False) -> None:
        if quiet:
            return
        self.console.print(f"\n[bold]{album.title}[/bold] by {album.artist_name}  [dim](album #{album.id})[/dim]")
        self.console.print(f"Released: {album.release_date or '-'}   Type: {album.album_type or '-'}")
        self.console.print(f"Rating: {format_rating(album.avg_rating, album.rating_count)}")
        if album.cover_url:
            self.console.print(f"Cover: {album.cover_url}")

        table = Table(title="Tracklist")
        table.add_column("#", justify="right")
        table.add_column("Title")
        table.add_column("Length", justify="right")
        table.add_column("Rating")
        table.add_column("Track id", justify="right", style="dim")
        for track in album.tracks:
            number = track.track_number if track.track_number is not None else track.position
            table.add_row(
                str(number),
                track.title,
                format_duration(track.duration_ms),
                format_rating(track.avg_rating, track.rating_count),
                str(track.id),
            )
        self.console.print(table)

    def show_artist(self, artist: ArtistView, *, quiet: bool = False) -> None:
        if quiet:
            return
        self.console.print(f"\n[bold]{artist.name}[/bold]  [dim](artist #{artist.id})[/dim]")
        details = [
            f"Country: {artist.country or '-'}",
            f"Type: {artist.artist_type or '-'}",
            f"Formed: {artist.formed_year if artist.formed_year is not None else '-'}",
        ]
        self.console.print("   ".join(details))
        if artist.genres:
            self.console.print(f"Genres: {', '.join(artist.genres)}")

        if artist.albums:
            albums = Table(title="Stored albums")
            albums.add_column("Title")
            albums.add_column("Released")
            albums.add_column("Rating")
            albums.add_column("Album id", justify="right", style="dim")
            for album in artist.albums:
                albums.add_row(
                    album.title,
                    album.release_date or "-",
                    format_rating(album.avg_rating, album.rating_count),
                    str(album.id),
                )
            self.console.print(albums)

        if artist.releases:
            releases = Table(title="Discography")
            releases.add_column("Title")
            releases.add_column("Released")
            releases.add_column("Stored")
            releases.add_column("MBID", style="dim")
            for release in artist.releases:
                releases.add_row(
                    release.title,
                    release.release_date or "-",
                    f"#{release.local_album_id}" if release.local_album_id is not None else "-",
                    release.mbid,
                )
            self.console.print(releases)
