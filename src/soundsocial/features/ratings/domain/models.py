"""Data structures and validation rules for user ratings."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Final

from soundsocial.shared.errors import InvalidEntityTypeError, InvalidInputError, InvalidRatingError

MIN_RATING: Final[float] = 0.5
MAX_RATING: Final[float] = 10.0
RATING_STEP: Final[float] = 0.5


class EntityType(str, Enum):
    """Kinds of catalog entities that accept ratings."""

    ALBUM = "album"
    TRACK = "track"

    @staticmethod
    def from_user_input(value: object) -> "EntityType":
        """Translate raw caller input into the matching entity type."""

        if isinstance(value, EntityType):
            return value
        normalized = str(value).strip().lower()
        for entity_type in EntityType:
            if entity_type.value == normalized:
                return entity_type
        valid: Final[str] = ", ".join(e.value for e in EntityType)
        msg = f"Unsupported entity type '{value}'. Valid options: {valid}"
        raise InvalidEntityTypeError(msg)


def validate_rating_value(value: object) -> float:
    """Return ``value`` as a float if it is a valid rating.

    Valid ratings lie between 0.5 and 10 inclusive in steps of 0.5.

    Raises:
        InvalidRatingError: ``value`` is not a number, is a bool, or is out of range or step.
    """

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidRatingError(f"Rating must be a number, got {value!r}")
    rating = float(value)
    if not math.isfinite(rating) or rating < MIN_RATING or rating > MAX_RATING:
        raise InvalidRatingError(f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {value!r}")
    if not (rating / RATING_STEP).is_integer():
        raise InvalidRatingError(f"Rating must be a multiple of {RATING_STEP}, got {value!r}")
    return rating


def validate_user_id(user_id: object) -> str:
    if not isinstance(user_id, str) or not user_id.strip():
        raise InvalidInputError("A non-empty user id is required")
    return user_id


def validate_entity_id(entity_id: object) -> int:
    if isinstance(entity_id, bool) or not isinstance(entity_id, int) or entity_id <= 0:
        raise InvalidInputError(f"Entity id must be a positive integer, got {entity_id!r}")
    return entity_id


def parse_timestamp(raw: str) -> datetime:
    """Parse SQLite's ``CURRENT_TIMESTAMP`` text (UTC) into an aware datetime."""

    parsed = datetime.fromisoformat(raw)
    return parsed if parsed.tzinfo is not None else parsed.replace(tzinfo=UTC)


@dataclass(slots=True, frozen=True)
class Rating:
    """One user's rating of one entity."""

    user_id: str
    entity_type: EntityType
    entity_id: int
    value: float
    updated_at: datetime


@dataclass(slots=True, frozen=True)
class RatingAggregate:
    """Stored average and count for one entity."""

    entity_type: EntityType
    entity_id: int
    avg_rating: float
    rating_count: int


__all__ = [
    "EntityType",
    "MAX_RATING",
    "MIN_RATING",
    "RATING_STEP",
    "Rating",
    "RatingAggregate",
    "parse_timestamp",
    "validate_entity_id",
    "validate_rating_value",
    "validate_user_id",
]
