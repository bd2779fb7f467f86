"""Parse ``NAME=LEVEL`` logger-level options.

Values may be repeated on the command line or given as one comma/space
separated string (from ``PERSISTKIT_LOGGER_LEVELS``). SQLAlchemy and Alembic
default to WARNING so pool and migration chatter stays off the console.
"""

import logging
import re

import click

DEFAULT_LIB_LEVELS = {"sqlalchemy": logging.WARNING, "alembic": logging.WARNING}


def _normalize_items(value: str | list[str] | tuple[str, ...] | None) -> list[str]:
    """Flatten the option value into non-empty ``NAME=LEVEL`` fragments."""
    if value is None:
        return []
    chunks = [value] if isinstance(value, str) else list(value)
    return [s for chunk in chunks for s in re.split(r"[,\s]+", chunk) if s]


def parse_log_level(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | list[str] | tuple[str, ...] | None,
) -> dict[str, int]:
    """Click callback mapping logger names to numeric levels.

    Later items override earlier ones and the defaults.

    Raises:
        click.BadParameter: If an item is not ``NAME=LEVEL`` or LEVEL is unknown.
    """
    levels = dict(DEFAULT_LIB_LEVELS)
    for item in _normalize_items(value):
        name, sep, level_str = item.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"Expected NAME=LEVEL, got {item!r}")
        lvl = logging.getLevelName(level_str.strip().upper())
        if not isinstance(lvl, int):
            raise click.BadParameter(f"Invalid log level: {level_str}")
        levels[name.strip()] = lvl
    return levels
