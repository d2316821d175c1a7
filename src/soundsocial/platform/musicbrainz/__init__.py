"""MusicBrainz infrastructure package.

This package provides the rate-limited, cache-first client used to read
artist, release-group and recording metadata from the MusicBrainz Web
Service (WS2) and cover images from the Cover Art Archive.
"""

from .cache import CacheEntry, TTLCache
from .client import MusicBrainzClient
from .http_client import HTTPClient, HTTPResult, MusicBrainzHTTPClient
from .rate_limit import RateLimiter
from .user_agent import format_user_agent, resolve_user_agent

__all__ = [
    "CacheEntry",
    "HTTPClient",
    "HTTPResult",
    "MusicBrainzClient",
    "MusicBrainzHTTPClient",
    "RateLimiter",
    "TTLCache",
    "format_user_agent",
    "resolve_user_agent",
]
