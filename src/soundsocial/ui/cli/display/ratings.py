"""Display utilities for rating commands."""

from __future__ import annotations

from typing import final

from rich.console import Console

from soundsocial.features.ratings.domain.models import EntityType, Rating, RatingAggregate
from soundsocial.ui.cli.display.catalog import format_rating


@final
class RatingDisplay:
    """Render rating outcomes in the CLI."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_rating(
        self,
        entity_type: EntityType,
        entity_id: int,
        rating: Rating | None,
        aggregate: RatingAggregate | None,
        *,
        quiet: bool = False,
    ) -> None:
        if quiet:
            return
        target = f"{entity_type.value} #{entity_id}"
        if rating is None:
            self.console.print(f"[yellow]No rating on {target}[/yellow]")
        else:
            stamp = rating.updated_at.strftime("%Y-%m-%d %H:%M:%S %Z")
            self.console.print(f"[magenta]{rating.user_id}[/magenta] rated {target}: [bold]{rating.value:g}[/bold] ({stamp})")
        if aggregate is not None:
            self.console.print(f"Average: {format_rating(aggregate.avg_rating, aggregate.rating_count)}")

    def show_deleted(self, entity_type: EntityType, entity_id: int, removed: bool, *, quiet: bool = False) -> None:
        if quiet:
            return
        target = f"{entity_type.value} #{entity_id}"
        if removed:
            self.console.print(f"[green]Removed rating on {target}[/green]")
        else:
            self.console.print(f"[yellow]Nothing to remove on {target}[/yellow]")
