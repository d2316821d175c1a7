"""Configuration management for SoundSocial."""

import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

from soundsocial.config.file_ops import write_text_file
from soundsocial.config.paths import default_config_path
from soundsocial.platform.logging import logger

CACHE_TTL_SECONDS_DEFAULT = 600
CACHE_MAX_ENTRIES_DEFAULT = 1024
REQUEST_INTERVAL_SECONDS_DEFAULT = 1.0
REQUEST_TIMEOUT_SECONDS_DEFAULT = 5.0


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion.

    Args:
        default: Default value for the field.

    Returns:
        Field with proper metadata for path handling.
    """
    return field(default=default, metadata={"path": True})


@dataclass
class Config:
    """Application configuration."""

    # Log file path
    log_file: Path | None = _path_field()

    # SQLite catalog database path
    db_path: Path | None = _path_field()

    # MusicBrainz application identity
    mb_app_name: str | None = None
    mb_app_version: str | None = None
    mb_contact: str | None = None

    # Remote lookup cache
    cache_ttl_seconds: int = CACHE_TTL_SECONDS_DEFAULT
    cache_max_entries: int = CACHE_MAX_ENTRIES_DEFAULT

    # Outbound request etiquette
    request_interval_seconds: float = REQUEST_INTERVAL_SECONDS_DEFAULT
    request_timeout_seconds: float = REQUEST_TIMEOUT_SECONDS_DEFAULT

    # Singleton instance
    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects using field metadata."""

        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value) if value else None)

    def save(self) -> None:
        """Save configuration to file."""
        config_dict = asdict(self)

        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        try:
            target = default_config_path()
            write_text_file(target, self._render_toml(config_dict))
            logger.info("Configuration saved to %s", target)
        except Exception as e:
            logger.error("Failed to save configuration: %s", e)
            raise

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []

        lines.append("# SoundSocial Configuration File")
        lines.append("")

        lines.append("# Log file path (optional)")
        lines.append('# Example: log_file = "/path/to/logs/soundsocial.log"')
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        lines.append("# SQLite catalog database (optional)")
        lines.append("# Defaults to <data dir>/soundsocial.db; SOUNDSOCIAL_DATA_DIR moves the data dir")
        if config["db_path"] is not None:
            lines.append(f"db_path = {self._format_toml_value(config['db_path'])}")
        lines.append("")

        lines.append("# MusicBrainz application identity (optional)")
        lines.append("# Sent as 'App/Version (contact)' in the User-Agent header")
        if config.get("mb_app_name"):
            lines.append(f"mb_app_name = {self._format_toml_value(config['mb_app_name'])}")
        if config.get("mb_app_version"):
            lines.append(f"mb_app_version = {self._format_toml_value(config['mb_app_version'])}")
        if config.get("mb_contact"):
            lines.append(f"mb_contact = {self._format_toml_value(config['mb_contact'])}")
        lines.append("")

        lines.append("# Remote lookup cache")
        lines.append(f"cache_ttl_seconds = {self._format_toml_value(config['cache_ttl_seconds'])}")
        lines.append(f"cache_max_entries = {self._format_toml_value(config['cache_max_entries'])}")
        lines.append("")

        lines.append("# Outbound request spacing and timeout, in seconds")
        lines.append(
            f"request_interval_seconds = {self._format_toml_value(config['request_interval_seconds'])}"
        )
        lines.append(
            f"request_timeout_seconds = {self._format_toml_value(config['request_timeout_seconds'])}"
        )
        lines.append("")

        return "\n".join(lines)

    def _format_toml_value(self, value: Any) -> str:
        """Format a value for TOML serialization.

        Args:
            value: Value to format

        Returns:
            str: Formatted value
        """
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, Path)):
            return f'"{str(value)}"'
        return str(value)

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from file, creating a default one when missing.

        Returns:
            Config: Loaded configuration object.
        """
        if cls._instance is not None:
            return cls._instance

        config_file = default_config_path()

        try:
            if config_file.exists():
                with open(config_file, "rb") as f:
                    config_dict = tomllib.load(f)

                known = {f.name for f in fields(cls)}
                unknown = sorted(set(config_dict) - known)
                if unknown:
                    logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
                config_dict = {key: value for key, value in config_dict.items() if key in known}

                for key in ("log_file", "db_path"):
                    value = config_dict.get(key)
                    if isinstance(value, str) and not value.strip():
                        config_dict[key] = None

                logger.info("Configuration loaded from %s", config_file)
                instance = cls(**config_dict)

                cls._instance = instance
                cls._loaded_from = config_file
                return instance

            config = cls()
            config.save()
            logger.info("Created default configuration at %s", config_file)
            cls._instance = config
            cls._loaded_from = config_file
            return config

        except Exception as e:
            logger.error("Failed to load configuration: %s", e)
            raise


# Global configuration instance
config = Config.load()
