"""Command execution package for CLI."""

from soundsocial.ui.cli.commands.catalog import LookupCommand, SearchCommand
from soundsocial.ui.cli.commands.ratings import RatingCommand

__all__ = ["LookupCommand", "RatingCommand", "SearchCommand"]
