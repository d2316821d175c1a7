"""Where SoundSocial keeps its config file, catalog database and logs.

A source checkout is self-contained: everything lives beside ``pyproject.toml``
as ``config/config.toml``, ``.data/soundsocial.db`` and ``logs/``. An installed
copy has no checkout to anchor to and uses ``~/.soundsocial`` instead.
``SOUNDSOCIAL_DATA_DIR`` moves only the database directory.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Callable, Final


_ENV_DATA_DIR: Final[str] = "SOUNDSOCIAL_DATA_DIR"
_DB_FILE_NAME: Final[str] = "soundsocial.db"
_USER_DIR_NAME: Final[str] = ".soundsocial"
_CHECKOUT_MARKERS: Final[tuple[str, ...]] = ("pyproject.toml", ".git")


def resolve_overridable_path(
    *,
    explicit_path: Path | str | None,
    env: Mapping[str, str] | None,
    env_var: str | None,
    default_factory: Callable[[], Path],
) -> Path:
    """Pick an explicit path, then a non-blank env var, then the default."""

    if explicit_path is not None:
        return Path(explicit_path).expanduser().resolve()

    mapping = env if env is not None else os.environ
    if env_var:
        candidate = (mapping.get(env_var) or "").strip()
        if candidate:
            return Path(candidate).expanduser().resolve()

    return default_factory().expanduser().resolve()


def _detect_repo_root(start: Path | None = None) -> Path:
    """Return the SoundSocial checkout containing ``start``.

    ``start`` defaults to this module. Outside a checkout (e.g. from
    site-packages) the per-user ``~/.soundsocial`` directory is returned.
    """
    here = (start or Path(__file__).resolve()).parent
    for candidate in [here, *here.parents]:
        if any((candidate / marker).exists() for marker in _CHECKOUT_MARKERS):
            return candidate
    return Path.home() / _USER_DIR_NAME


def default_config_path() -> Path:
    return (_detect_repo_root() / "config" / "config.toml").resolve()


def default_data_dir() -> Path:
    """Directory holding the catalog database, relocatable via ``SOUNDSOCIAL_DATA_DIR``."""

    return resolve_overridable_path(
        explicit_path=None,
        env=None,
        env_var=_ENV_DATA_DIR,
        default_factory=lambda: (_detect_repo_root() / ".data").resolve(),
    )


def default_db_path() -> Path:
    return (default_data_dir() / _DB_FILE_NAME).resolve()


def default_log_dir() -> Path:
    return (_detect_repo_root() / "logs").resolve()


def default_log_file() -> Path:
    """Rotating sync log shared by the CLI and the services."""

    return (default_log_dir() / "soundsocial.log").resolve()


__all__ = [
    "default_config_path",
    "default_data_dir",
    "default_db_path",
    "default_log_dir",
    "default_log_file",
    "resolve_overridable_path",
]
