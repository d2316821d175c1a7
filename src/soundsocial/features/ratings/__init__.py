"""Public surface for the ratings feature."""

from .adapters.db.sqlite_repository import SqliteRatingRepository
from .domain.models import EntityType, Rating, RatingAggregate, validate_rating_value
from .usecases.ports import RatingStorePort
from .usecases.rate_entity import RatingAggregator

__all__ = [
    "EntityType",
    "Rating",
    "RatingAggregate",
    "RatingAggregator",
    "RatingStorePort",
    "SqliteRatingRepository",
    "validate_rating_value",
]
