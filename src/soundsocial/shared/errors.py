"""
Summary: Typed error taxonomy shared by the catalog and rating features.
Why: Let the boundary layer map failures to user-facing statuses without string matching.
"""

from __future__ import annotations

from typing import ClassVar


class SoundSocialError(Exception):
    """Base class for every error raised by the synchronization layer."""

    http_status: ClassVar[int] = 500


class InvalidInputError(SoundSocialError, ValueError):
    """User-correctable input problem."""

    http_status: ClassVar[int] = 400


class InvalidRatingError(InvalidInputError):
    """Rating value outside 0.5..10 or not a multiple of 0.5."""


class InvalidEntityTypeError(InvalidInputError):
    """Entity type other than ``album`` or ``track``."""


class NotFoundError(SoundSocialError, LookupError):
    """Entity absent both locally and remotely."""

    http_status: ClassVar[int] = 404


class RemoteUnavailableError(SoundSocialError):
    """Timeout, network failure, non-2xx status or unparseable payload from a remote service."""

    http_status: ClassVar[int] = 503


class StoreFailureError(SoundSocialError):
    """Local store failure other than the benign duplicate-insert race."""

    http_status: ClassVar[int] = 500


class AggregationConflictError(SoundSocialError):
    """The store could not provide the isolation needed to recompute aggregates."""

    http_status: ClassVar[int] = 409


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
