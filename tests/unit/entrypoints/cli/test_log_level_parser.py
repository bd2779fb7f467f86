"""Unit tests for the CLI logger-level parser."""

import logging
import types

import click
import pytest

from persistkit.entrypoints.cli.helpers.log_level_parser import parse_log_level

CTX = types.SimpleNamespace()  # the callback ignores its context


def test_empty_uses_defaults():
    """No values: SQLAlchemy and Alembic stay at WARNING."""
    assert parse_log_level(CTX, None, ()) == {
        "sqlalchemy": logging.WARNING,
        "alembic": logging.WARNING,
    }


def test_none_uses_defaults():
    """An unset option behaves like an empty one."""
    assert parse_log_level(CTX, None, None)["sqlalchemy"] == logging.WARNING


def test_later_values_win():
    """Repeated flags override earlier ones for the same logger."""
    out = parse_log_level(CTX, None, ("sqlalchemy.pool=DEBUG", "sqlalchemy.pool=ERROR"))
    assert out["sqlalchemy.pool"] == logging.ERROR


def test_plain_string_with_commas_and_spaces():
    """A single env-var style string is split on commas and whitespace."""
    out = parse_log_level(CTX, None, "sqlalchemy=INFO,  persistkit=DEBUG alembic=ERROR")
    assert out == {
        "sqlalchemy": logging.INFO,
        "persistkit": logging.DEBUG,
        "alembic": logging.ERROR,
    }


def test_levels_are_case_insensitive():
    """Level names are accepted in any case."""
    assert parse_log_level(CTX, None, ("alembic=info",))["alembic"] == logging.INFO


@pytest.mark.parametrize("item", ["not-a-pair", "=INFO", "sqlalchemy=LOUD", "sqlalchemy="])
def test_malformed_items_raise(item):
    """Malformed pairs and unknown levels raise click.BadParameter."""
    with pytest.raises(click.BadParameter):
        parse_log_level(CTX, None, (item,))
