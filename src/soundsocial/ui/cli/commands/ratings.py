"""Rating command implementations for the CLI."""

from __future__ import annotations

from typing import final

from soundsocial.application.services.sync_service import SyncServices
from soundsocial.ui.cli.args.options import RatingArgs
from soundsocial.ui.cli.display.ratings import RatingDisplay


@final
class RatingCommand:
    """Command that submits, shows or removes one user's rating."""

    def __init__(self, args: RatingArgs, services: SyncServices, display: RatingDisplay | None = None) -> None:
        self.args = args
        self.services = services
        self.display = display or RatingDisplay()

    def execute(self) -> None:
        args = self.args
        ratings = self.services.ratings

        if args.command == "unrate":
            removed = ratings.delete_rating(args.user_id, args.entity_type, args.entity_id)
            self.display.show_deleted(args.entity_type, args.entity_id, removed, quiet=args.quiet)
            return

        if args.command == "rate":
            rating = ratings.submit_rating(args.user_id, args.entity_type, args.entity_id, args.value)
        else:
            rating = ratings.get_rating(args.user_id, args.entity_type, args.entity_id)

        aggregate = ratings.get_aggregate(args.entity_type, args.entity_id)
        self.display.show_rating(args.entity_type, args.entity_id, rating, aggregate, quiet=args.quiet)
