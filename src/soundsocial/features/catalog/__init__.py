"""Public surface for the catalog feature."""

from .adapters.db.sqlite_repository import SqliteCatalogRepository
from .domain.models import (
    AlbumSearchHit,
    AlbumView,
    ArtistView,
    LocalAlbum,
    RemoteRelease,
    SearchResults,
    TrackView,
    ViewSource,
)
from .usecases.ports import CatalogStorePort, MetadataSourcePort, SavedAlbum
from .usecases.resolve_catalog import CatalogResolver

__all__ = [
    "AlbumSearchHit",
    "AlbumView",
    "ArtistView",
    "CatalogResolver",
    "CatalogStorePort",
    "LocalAlbum",
    "MetadataSourcePort",
    "RemoteRelease",
    "SavedAlbum",
    "SearchResults",
    "SqliteCatalogRepository",
    "TrackView",
    "ViewSource",
]
