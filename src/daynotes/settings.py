"""Settings — reads .env + settings.toml to produce a NotesConfig.

Resolution order for each key: environment variable > ``[notes]`` table in
``<config_dir>/settings.toml`` > built-in default. ``.env`` files are loaded
first (cwd, then config_dir), so they feed the environment layer without
overriding variables that are already set.

Key entities:
  - NotesConfig: frozen dataclass with all resolved engine settings.
  - load_settings(): parse .env + settings.toml → NotesConfig.
  - configure_logging(): apply NotesConfig.log_level to the daynotes logger.
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from .notes.collection import NoteCollection
from .notes.filtering import SortOrder
from .notes.segmenter import DEFAULT_DATE_SUFFIXES
from .notes.types import Note
from .utils import daynotes_dir

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Keys that can be overridden from the environment
_ENV_KEYS = {
    "sort_order": "DAYNOTES_SORT_ORDER",
    "timezone": "DAYNOTES_TIMEZONE",
    "log_level": "DAYNOTES_LOG_LEVEL",
}

# ---------------------------------------------------------------------------
# NotesConfig
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NotesConfig:
    """Resolved configuration for the note engine."""

    config_dir: Path = field(default_factory=lambda: daynotes_dir())

    # Segmenter: suffixes stripped from a filename before reading its date
    date_suffixes: tuple[str, ...] = DEFAULT_DATE_SUFFIXES

    # Default direction for NoteCollection.view()
    sort_order: SortOrder = SortOrder.NEWEST

    # IANA zone for timestamps of manually created notes ("" = local time)
    timezone: str = ""

    log_level: str = "WARNING"

    @property
    def settings_file(self) -> Path:
        return self.config_dir / "settings.toml"

    def collection(self, notes: Iterable[Note] | None = None) -> NoteCollection:
        """Return a NoteCollection wired to this configuration."""
        return NoteCollection(
            notes,
            timezone=self.timezone,
            date_suffixes=self.date_suffixes,
            sort_order=self.sort_order,
        )


# ---------------------------------------------------------------------------
# load_settings
# ---------------------------------------------------------------------------


def load_settings(config_dir: Path | None = None) -> NotesConfig:
    """Read .env + settings.toml and return a NotesConfig.

    Args:
        config_dir: Override for the base config directory.
                    Defaults to ``daynotes_dir()``.

    Raises:
        ValueError: if a setting has an unusable value.
    """
    if config_dir is None:
        config_dir = daynotes_dir()

    # Load .env files (local cwd first, then config_dir)
    local_env = Path(".env")
    global_env = config_dir / ".env"
    if local_env.is_file():
        load_dotenv(local_env)
    if global_env.is_file():
        load_dotenv(global_env)

    section: dict[str, Any] = {}
    toml_path = config_dir / "settings.toml"
    if toml_path.is_file():
        with open(toml_path, "rb") as f:
            try:
                raw = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid settings file {toml_path}: {e}") from e
        section = raw.get("notes", {})
        if not isinstance(section, dict):
            raise ValueError("settings.toml: [notes] must be a table.")
    else:
        logger.debug("No settings file at %s, using defaults", toml_path)

    def _get(key: str, default: Any) -> Any:
        """Env > settings.toml > default."""
        env_name = _ENV_KEYS.get(key)
        if env_name:
            env_value = os.getenv(env_name, "").strip()
            if env_value:
                return env_value
        return section.get(key, default)

    return NotesConfig(
        config_dir=config_dir,
        date_suffixes=_parse_suffixes(_get("date_suffixes", DEFAULT_DATE_SUFFIXES)),
        sort_order=_parse_sort_order(_get("sort_order", SortOrder.NEWEST.value)),
        timezone=_parse_timezone(_get("timezone", "")),
        log_level=_parse_log_level(_get("log_level", "WARNING")),
    )


def _parse_suffixes(value: Any) -> tuple[str, ...]:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise ValueError("date_suffixes must be a list of strings.")
    suffixes = tuple(str(s) for s in value)
    for s in suffixes:
        if not s.startswith("."):
            raise ValueError(f"date_suffixes: {s!r} must start with '.'")
    return suffixes


def _parse_sort_order(value: Any) -> SortOrder:
    try:
        return SortOrder(str(value).lower())
    except ValueError:
        choices = ", ".join(o.value for o in SortOrder)
        raise ValueError(f"sort_order: {value!r} is not one of {choices}") from None


def _parse_timezone(value: Any) -> str:
    tz = str(value).strip()
    if not tz:
        return ""
    try:
        ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"timezone: unknown time zone {tz!r}") from None
    return tz


def _parse_log_level(value: Any) -> str:
    level = str(value).upper()
    if level not in _LOG_LEVELS:
        raise ValueError(f"log_level: {value!r} is not one of {', '.join(_LOG_LEVELS)}")
    return level


def configure_logging(config: NotesConfig) -> None:
    """Set up root logging and the daynotes logger level."""
    logging.basicConfig(format=LOG_FORMAT, level=logging.WARNING)
    logging.getLogger("daynotes").setLevel(config.log_level)
