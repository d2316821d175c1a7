"""Cross-feature primitives shared by every layer."""

from .errors import (
    AggregationConflictError,
    InvalidEntityTypeError,
    InvalidInputError,
    InvalidRatingError,
    NotFoundError,
    RemoteUnavailableError,
    SoundSocialError,
    StoreFailureError,
)

__all__ = [
    "AggregationConflictError",
    "InvalidEntityTypeError",
    "InvalidInputError",
    "InvalidRatingError",
    "NotFoundError",
    "RemoteUnavailableError",
    "SoundSocialError",
    "StoreFailureError",
]
