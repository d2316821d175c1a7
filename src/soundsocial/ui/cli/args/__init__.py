"""Command line argument handling package."""

from soundsocial.ui.cli.args.parser import ArgumentParser
from soundsocial.ui.cli.args.options import CLIArgs, LookupArgs, RatingArgs, SearchArgs

__all__ = ["ArgumentParser", "CLIArgs", "LookupArgs", "RatingArgs", "SearchArgs"]
