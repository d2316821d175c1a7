"""Catalog command implementations for the CLI."""

from __future__ import annotations

from typing import final

from soundsocial.application.services.sync_service import SyncServices
from soundsocial.ui.cli.args.options import LookupArgs, SearchArgs
from soundsocial.ui.cli.display.catalog import CatalogDisplay


@final
class SearchCommand:
    """Command that runs a combined catalog search."""

    def __init__(self, args: SearchArgs, services: SyncServices, display: CatalogDisplay | None = None) -> None:
        self.args = args
        self.services = services
        self.display = display or CatalogDisplay()

    def execute(self) -> None:
        results = self.services.catalog.search(self.args.text)
        self.display.show_search(results, quiet=self.args.quiet)


@final
class LookupCommand:
    """Command that resolves a single album or artist."""

    def __init__(self, args: LookupArgs, services: SyncServices, display: CatalogDisplay | None = None) -> None:
        self.args = args
        self.services = services
        self.display = display or CatalogDisplay()

    def execute(self) -> None:
        if self.args.command == "album":
            album = self.services.catalog.resolve_album(self.args.mbid)
            self.display.show_album(album, quiet=self.args.quiet)
            return

        artist = self.services.catalog.resolve_artist(self.args.mbid)
        self.display.show_artist(artist, quiet=self.args.quiet)
