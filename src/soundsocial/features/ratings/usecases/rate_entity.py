"""Use cases for submitting, reading and deleting user ratings."""

from __future__ import annotations

from logging import Logger, getLogger

from ..domain.models import (
    EntityType,
    Rating,
    RatingAggregate,
    validate_entity_id,
    validate_rating_value,
    validate_user_id,
)
from .ports import RatingStorePort


class RatingAggregator:
    """Validate rating requests and keep entity aggregates consistent."""

    _store: RatingStorePort
    _logger: Logger

    def __init__(self, *, store: RatingStorePort, logger: Logger | None = None) -> None:
        self._store = store
        self._logger = logger or getLogger(__name__)

    def submit_rating(
        self,
        user_id: str,
        entity_type: EntityType | str,
        entity_id: int,
        value: object,
    ) -> Rating:
        """Store ``user_id``'s rating and refresh the entity's average and count.

        Raises:
            InvalidRatingError: ``value`` is not a multiple of 0.5 in [0.5, 10].
            InvalidEntityTypeError: ``entity_type`` is not album or track.
            NotFoundError: No such entity is stored locally.
            AggregationConflictError: The store could not serialize the update.
        """

        rating_value = validate_rating_value(value)
        kind = EntityType.from_user_input(entity_type)
        user = validate_user_id(user_id)
        target = validate_entity_id(entity_id)

        rating = self._store.save_and_recompute(user, kind, target, rating_value)
        aggregate = self._store.aggregate(kind, target)
        self._logger.info(
            "%s rated %s #%d: %.1f",
            user,
            kind.value,
            target,
            rating_value,
            extra={
                "catalog_event": "rating.submit",
                "entity_type": kind.value,
                "entity_id": target,
                "avg_rating": aggregate.avg_rating if aggregate else None,
                "rating_count": aggregate.rating_count if aggregate else None,
            },
        )
        return rating

    def get_rating(self, user_id: str, entity_type: EntityType | str, entity_id: int) -> Rating | None:
        kind = EntityType.from_user_input(entity_type)
        return self._store.get(validate_user_id(user_id), kind, validate_entity_id(entity_id))

    def delete_rating(self, user_id: str, entity_type: EntityType | str, entity_id: int) -> bool:
        """Remove the user's rating if present and refresh the aggregate.

        Deleting a rating that does not exist is not an error.

        Returns:
            True when a rating was removed.
        """

        kind = EntityType.from_user_input(entity_type)
        user = validate_user_id(user_id)
        target = validate_entity_id(entity_id)

        removed = self._store.delete_and_recompute(user, kind, target)
        self._logger.info(
            "%s %s rating on %s #%d",
            user,
            "removed" if removed else "had no",
            kind.value,
            target,
            extra={"catalog_event": "rating.delete", "entity_type": kind.value, "entity_id": target},
        )
        return removed

    def get_aggregate(self, entity_type: EntityType | str, entity_id: int) -> RatingAggregate | None:
        kind = EntityType.from_user_input(entity_type)
        return self._store.aggregate(kind, validate_entity_id(entity_id))


__all__ = ["RatingAggregator"]
