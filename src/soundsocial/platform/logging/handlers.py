"""Rich console handler for catalog and rating events.

Where: platform/logging/handlers.py
What: Render structured ``catalog_event`` log records with icons and colours.
Why: Keep console output scannable while the file handler keeps plain text.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class CatalogRichHandler(RichHandler):
    """Rich handler that styles catalog synchronization events."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "catalog.album.local": ("💾", "green"),
        "catalog.album.remote": ("🌐", "cyan"),
        "catalog.album.race": ("🤝", "yellow"),
        "catalog.artist.local": ("💾", "green"),
        "catalog.artist.remote": ("🌐", "cyan"),
        "catalog.search": ("🔎", "blue"),
        "catalog.cache.hit": ("♻️", "green"),
        "catalog.remote.error": ("⛔", "red"),
        "catalog.cover.missing": ("🖼️", "yellow"),
        "rating.submit": ("⭐", "magenta"),
        "rating.delete": ("🗑️", "magenta"),
    }
    _DETAIL_KEYS: ClassVar[tuple[str, ...]] = (
        "mbid",
        "album_id",
        "artist_id",
        "entity_type",
        "entity_id",
        "track_count",
        "rating_count",
        "avg_rating",
        "duration_ms",
        "error_message",
    )

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize the handler with compact console settings.

        Args:
            *args: Positional arguments to pass to RichHandler.
            **kwargs: Keyword arguments to pass to RichHandler.
        """
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        kwargs["omit_repeated_times"] = False
        super().__init__(*args, **kwargs)

    def _render_catalog_event(self, record: logging.LogRecord, message: str) -> Text | None:
        """Render a record carrying a ``catalog_event`` extra, if any."""

        event = getattr(record, "catalog_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))
        _ = text.append(message, style=Style(color=color))

        details: list[str] = []
        for key in self._DETAIL_KEYS:
            value = getattr(record, key, None)
            if value is None or value == "":
                continue
            if isinstance(value, float):
                details.append(f"{key}={value:.2f}")
            else:
                details.append(f"{key}={value}")
        if details:
            _ = text.append(" [" + ", ".join(details) + "]", style=Style(color="white"))
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render message with custom styling for catalog events."""

        catalog_text = self._render_catalog_event(record, message)
        if catalog_text is not None:
            return catalog_text
        return super().render_message(record, message)


__all__ = ["CatalogRichHandler"]
