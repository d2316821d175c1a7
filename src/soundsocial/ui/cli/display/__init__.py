"""Display management for CLI interface."""

from soundsocial.ui.cli.display.catalog import CatalogDisplay
from soundsocial.ui.cli.display.ratings import RatingDisplay

__all__ = ["CatalogDisplay", "RatingDisplay"]
