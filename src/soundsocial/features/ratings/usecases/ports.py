"""Summary: Ports defining rating use case dependencies.
Why: Keep the aggregator independent of SQLite transaction handling."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..domain.models import EntityType, Rating, RatingAggregate


@runtime_checkable
class RatingStorePort(Protocol):
    """Port for rating persistence with atomic aggregate maintenance."""

    def save_and_recompute(
        self,
        user_id: str,
        entity_type: EntityType,
        entity_id: int,
        value: float,
    ) -> Rating:
        """Upsert the rating and recompute the entity aggregate in one transaction.

        Raises:
            NotFoundError: The entity does not exist locally.
        """
        ...

    def delete_and_recompute(self, user_id: str, entity_type: EntityType, entity_id: int) -> bool:
        """Delete the rating if present and recompute the aggregate in one transaction."""
        ...

    def get(self, user_id: str, entity_type: EntityType, entity_id: int) -> Rating | None:
        """Return the user's rating of the entity, if any."""
        ...

    def aggregate(self, entity_type: EntityType, entity_id: int) -> RatingAggregate | None:
        """Return the entity's stored aggregate, or None when the entity is unknown."""
        ...


__all__ = ["RatingStorePort"]
