"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from soundsocial.config.config import Config
from soundsocial.features.ratings.domain.models import EntityType
from soundsocial.platform.logging import DEFAULT_LOG_FILE, logger, setup_logger
from soundsocial.shared.errors import InvalidInputError
from soundsocial.ui.cli.args.options import CLIArgs, LookupArgs, RatingArgs, SearchArgs

_ENTITY_CHOICES: tuple[str, ...] = tuple(entity.value for entity in EntityType)


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="soundsocial",
            description="SoundSocial catalog sync - resolve MusicBrainz metadata and manage ratings.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        search_parser = subparsers.add_parser("search", help="Search artists, albums and tracks")
        _ = search_parser.add_argument("text", type=str, help="Free-text query", metavar="TEXT")
        ArgumentParser._add_common_options(search_parser)

        album_parser = subparsers.add_parser(
            "album",
            help="Show an album, fetching and storing it on first lookup",
        )
        _ = album_parser.add_argument("mbid", type=str, help="MusicBrainz release-group id", metavar="MBID")
        ArgumentParser._add_common_options(album_parser)

        artist_parser = subparsers.add_parser(
            "artist",
            help="Show an artist with stored albums and discography",
        )
        _ = artist_parser.add_argument("mbid", type=str, help="MusicBrainz artist id", metavar="MBID")
        ArgumentParser._add_common_options(artist_parser)

        rate_parser = subparsers.add_parser("rate", help="Rate a stored album or track")
        ArgumentParser._add_rating_target(rate_parser)
        _ = rate_parser.add_argument(
            "value",
            type=float,
            help="Rating between 0.5 and 10 in steps of 0.5",
            metavar="VALUE",
        )
        ArgumentParser._add_common_options(rate_parser)

        rating_parser = subparsers.add_parser("rating", help="Show a user's rating and the aggregate")
        ArgumentParser._add_rating_target(rating_parser)
        ArgumentParser._add_common_options(rating_parser)

        unrate_parser = subparsers.add_parser("unrate", help="Remove a user's rating")
        ArgumentParser._add_rating_target(unrate_parser)
        ArgumentParser._add_common_options(unrate_parser)

        return parser

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            CLIArgs: Processed command line arguments.

        Raises:
            SystemExit: If validation fails.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        if parsed_args.quiet:
            log_level = logging.ERROR
        elif parsed_args.verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        configuration = Config.load()
        log_file_path = configuration.log_file or DEFAULT_LOG_FILE
        _ = setup_logger(log_file=log_file_path, console_level=log_level)

        db_path = Path(parsed_args.db) if parsed_args.db else None
        command: str = parsed_args.command

        if command == "search":
            return SearchArgs(
                command="search",
                text=parsed_args.text,
                db_path=db_path,
                verbose=parsed_args.verbose,
                quiet=parsed_args.quiet,
            )

        if command in {"album", "artist"}:
            return LookupArgs(
                command=parsed_args.command,
                mbid=parsed_args.mbid.strip(),
                db_path=db_path,
                verbose=parsed_args.verbose,
                quiet=parsed_args.quiet,
            )

        if command in {"rate", "rating", "unrate"}:
            return ArgumentParser._process_rating(parsed_args, db_path)

        logger.error("Unsupported command: %s", command)
        sys.exit(2)

    @staticmethod
    def _add_rating_target(parser: argparse.ArgumentParser) -> None:
        _ = parser.add_argument(
            "--user",
            type=str,
            required=True,
            help="Opaque id of the user the rating belongs to",
            metavar="USER_ID",
        )
        _ = parser.add_argument("entity_type", choices=_ENTITY_CHOICES, help="Kind of entity")
        _ = parser.add_argument("entity_id", type=int, help="Local id of the album or track", metavar="ID")

    @staticmethod
    def _add_common_options(parser: argparse.ArgumentParser) -> None:
        _ = parser.add_argument(
            "--db",
            type=str,
            help="SQLite database path (defaults to the configured location)",
            metavar="DB_PATH",
        )
        _ = parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed synchronization information",
        )
        _ = parser.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

    @staticmethod
    def _process_rating(parsed_args: argparse.Namespace, db_path: Path | None) -> RatingArgs:
        try:
            entity_type = EntityType.from_user_input(parsed_args.entity_type)
        except InvalidInputError as e:
            logger.error("%s", e)
            sys.exit(2)

        return RatingArgs(
            command=parsed_args.command,
            user_id=parsed_args.user,
            entity_type=entity_type,
            entity_id=parsed_args.entity_id,
            value=getattr(parsed_args, "value", None),
            db_path=db_path,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
        )
