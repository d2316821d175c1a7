"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final

from soundsocial.features.ratings.domain.models import EntityType


@final
@dataclass(slots=True)
class SearchArgs:
    """Command line arguments for the ``search`` subcommand."""

    command: Literal["search"]
    text: str
    db_path: Path | None
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class LookupArgs:
    """Command line arguments for the ``album`` and ``artist`` subcommands."""

    command: Literal["album", "artist"]
    mbid: str
    db_path: Path | None
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class RatingArgs:
    """Command line arguments for the ``rate``, ``rating`` and ``unrate`` subcommands."""

    command: Literal["rate", "rating", "unrate"]
    user_id: str
    entity_type: EntityType
    entity_id: int
    value: float | None
    db_path: Path | None
    verbose: bool
    quiet: bool


CLIArgs = SearchArgs | LookupArgs | RatingArgs

__all__ = ["CLIArgs", "LookupArgs", "RatingArgs", "SearchArgs"]
