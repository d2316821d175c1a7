"""Where: platform/logging/config.py
What: Build the ``soundsocial`` logger: catalog-event console output plus a rotating sync log.
Why: Resolver, client and aggregator threads all log through one configured hierarchy.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import Final

from rich.console import Console

from soundsocial.config.paths import default_log_file

from .handlers import CatalogRichHandler


DEFAULT_LOG_FILE: Final[Path] = default_log_file()
_SYNC_LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(threadName)s - %(message)s"
_SYNC_LOG_MAX_BYTES: Final[int] = 10 * 1024 * 1024
_SYNC_LOG_BACKUPS: Final[int] = 5


def setup_logger(
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> logging.Logger:
    """(Re)configure the ``soundsocial`` logger and return it.

    Existing handlers are closed first, so the CLI can call this again once the
    user's config and verbosity are known.

    Args:
        log_file: Rotating sync log (10 MB x 5). ``None`` keeps output on stderr only.
        console_level: Threshold for the catalog-event console handler.
        file_level: Threshold for the sync log.
    """

    sync_logger = logging.getLogger("soundsocial")
    sync_logger.setLevel(logging.DEBUG)

    for stale in list(sync_logger.handlers):
        stale.close()
        sync_logger.removeHandler(stale)

    events = CatalogRichHandler(console=Console(stderr=True, soft_wrap=True))
    events.setLevel(console_level)
    sync_logger.addHandler(events)

    if log_file is None:
        return sync_logger

    sync_log = Path(log_file).expanduser().resolve()
    sync_log.parent.mkdir(parents=True, exist_ok=True)
    rotating = logging.handlers.RotatingFileHandler(
        sync_log,
        maxBytes=_SYNC_LOG_MAX_BYTES,
        backupCount=_SYNC_LOG_BACKUPS,
        encoding="utf-8",
    )
    rotating.setLevel(file_level)
    rotating.setFormatter(logging.Formatter(_SYNC_LOG_FORMAT))
    sync_logger.addHandler(rotating)
    return sync_logger


logger: Final[logging.Logger] = setup_logger(log_file=DEFAULT_LOG_FILE)


__all__ = ["DEFAULT_LOG_FILE", "setup_logger", "logger"]
