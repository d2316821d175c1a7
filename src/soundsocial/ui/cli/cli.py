"""Command line interface for SoundSocial catalog sync."""

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Final, final

from soundsocial.application.services.sync_service import SyncServices, build_sync_services
from soundsocial.platform.logging import logger
from soundsocial.shared.errors import SoundSocialError
from soundsocial.ui.cli.args import ArgumentParser
from soundsocial.ui.cli.args.options import CLIArgs, LookupArgs, SearchArgs
from soundsocial.ui.cli.commands import LookupCommand, RatingCommand, SearchCommand

ServicesFactory = Callable[[Path | None], SyncServices]

# Exit codes keyed by the error's HTTP-style status.
EXIT_CODES: Final[dict[int, int]] = {
    400: 2,
    404: 3,
    409: 4,
    503: 5,
}


def exit_code_for(error: SoundSocialError) -> int:
    return EXIT_CODES.get(error.http_status, 1)


def _default_services(db_path: Path | None) -> SyncServices:
    return build_sync_services(db_path=db_path)


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(
        args_list: list[str] | None = None,
        services_factory: ServicesFactory | None = None,
    ) -> None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
            services_factory: Builds the services for a database path (for testing).
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)
            factory = services_factory or _default_services
            with factory(args.db_path) as services:
                CommandProcessor._dispatch(args, services)

        except SoundSocialError as e:
            logger.error("%s", e)
            sys.exit(exit_code_for(e))
        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)

    @staticmethod
    def _dispatch(args: CLIArgs, services: SyncServices) -> None:
        if isinstance(args, SearchArgs):
            SearchCommand(args, services).execute()
            return
        if isinstance(args, LookupArgs):
            LookupCommand(args, services).execute()
            return
        RatingCommand(args, services).execute()


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Failures exit through
        ``sys.exit(...)`` with a code derived from the error type.
    """
    CommandProcessor.process_command()
    return 0
