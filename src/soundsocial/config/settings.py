"""Where: src/soundsocial/config/settings.py
What: Derived runtime settings sourced from persisted configuration.
Why: Expose validated constants to feature layers without file I/O.
Trade-offs: - Validation is limited to simple boundary checks; out-of-range
  values silently fall back to the defaults.
"""

from __future__ import annotations

from pathlib import Path

from soundsocial.config.config import (
    CACHE_MAX_ENTRIES_DEFAULT,
    CACHE_TTL_SECONDS_DEFAULT,
    REQUEST_INTERVAL_SECONDS_DEFAULT,
    REQUEST_TIMEOUT_SECONDS_DEFAULT,
    config as app_config,
)
from soundsocial.config.paths import default_db_path


# MusicBrainz application identity ------------------------------------------

# MusicBrainz recommends a User-Agent of the form:
#   "AppName/AppVersion (contact-url-or-email)"
# See: https://musicbrainz.org/doc/MusicBrainz_API/Best_Practices#User-Agent

MB_APP_NAME: str = app_config.mb_app_name or "SoundSocial"
MB_APP_VERSION: str = app_config.mb_app_version or "0.1.0"
MB_CONTACT: str = app_config.mb_contact or ""


# Remote endpoints -----------------------------------------------------------

MB_BASE_URL: str = "https://musicbrainz.org/ws/2"
COVER_ART_BASE_URL: str = "https://coverartarchive.org"

# Number of hits requested from each search endpoint.
MB_SEARCH_LIMIT: int = 10

# Tags kept per artist when deriving genres.
MB_MAX_GENRES: int = 5


# Cache and request etiquette -----------------------------------------------

_ttl = getattr(app_config, "cache_ttl_seconds", CACHE_TTL_SECONDS_DEFAULT)
CACHE_TTL_SECONDS: float = (
    float(_ttl) if isinstance(_ttl, (int, float)) and _ttl > 0 else float(CACHE_TTL_SECONDS_DEFAULT)
)

_max_entries = getattr(app_config, "cache_max_entries", CACHE_MAX_ENTRIES_DEFAULT)
CACHE_MAX_ENTRIES: int = (
    _max_entries
    if isinstance(_max_entries, int) and _max_entries > 0
    else CACHE_MAX_ENTRIES_DEFAULT
)

_interval = getattr(app_config, "request_interval_seconds", REQUEST_INTERVAL_SECONDS_DEFAULT)
REQUEST_INTERVAL_SECONDS: float = (
    float(_interval)
    if isinstance(_interval, (int, float)) and _interval >= 0
    else REQUEST_INTERVAL_SECONDS_DEFAULT
)

_timeout = getattr(app_config, "request_timeout_seconds", REQUEST_TIMEOUT_SECONDS_DEFAULT)
REQUEST_TIMEOUT_SECONDS: float = (
    float(_timeout)
    if isinstance(_timeout, (int, float)) and _timeout > 0
    else REQUEST_TIMEOUT_SECONDS_DEFAULT
)


# Storage --------------------------------------------------------------------

DB_PATH: Path = app_config.db_path or default_db_path()


__all__ = [
    "MB_APP_NAME",
    "MB_APP_VERSION",
    "MB_CONTACT",
    "MB_BASE_URL",
    "COVER_ART_BASE_URL",
    "MB_SEARCH_LIMIT",
    "MB_MAX_GENRES",
    "CACHE_TTL_SECONDS",
    "CACHE_MAX_ENTRIES",
    "REQUEST_INTERVAL_SECONDS",
    "REQUEST_TIMEOUT_SECONDS",
    "DB_PATH",
]
