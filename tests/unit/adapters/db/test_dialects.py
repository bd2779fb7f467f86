"""Unit tests for database dialect handling."""

import pytest

from persistkit.adapters.db.dialects import DialectName, UnsupportedDialect

# pylint: disable=too-few-public-methods


@pytest.mark.parametrize(
    "input_str,expected",
    [
        ("postgresql", DialectName.POSTGRES),
        ("postgres", DialectName.POSTGRES),
        ("postgresql+psycopg", DialectName.POSTGRES),
        ("mysql+pymysql", DialectName.MYSQL),
        ("MariaDB", DialectName.MYSQL),
        ("sqlite", DialectName.SQLITE),
        (" sqlite+pysqlite ", DialectName.SQLITE),
    ],
)
def test_from_string_aliases(input_str, expected):
    """Aliases and driver-qualified names normalize to one member."""
    assert DialectName.from_string(input_str) is expected


@pytest.mark.parametrize("bad", [None, "", "  ", "org.hibernate.dialect.H2Dialect", "duckdb"])
def test_from_string_rejects_unsupported(bad):
    """Unsupported or empty dialect strings raise UnsupportedDialect."""
    with pytest.raises(UnsupportedDialect):
        DialectName.from_string(bad)


def test_from_sqlalchemy_reads_engine_dialect():
    """from_sqlalchemy uses the object's .dialect.name."""

    class FakeDialect:
        """A fake dialect with a name attribute."""

        name = "mysql"

    class FakeEngine:
        """A fake engine exposing a dialect attribute."""

        dialect = FakeDialect()

    assert DialectName.from_sqlalchemy(FakeEngine()) is DialectName.MYSQL  # type: ignore[arg-type]


def test_from_sqlalchemy_raises_when_missing_attribute():
    """Objects without .dialect.name are rejected."""

    class NotAnEngine:
        """No dialect here."""

    with pytest.raises(UnsupportedDialect):
        DialectName.from_sqlalchemy(NotAnEngine())  # type: ignore[arg-type]
