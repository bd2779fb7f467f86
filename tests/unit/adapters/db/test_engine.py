"""Unit tests for the database engine helpers."""

from sqlalchemy.engine import make_url
from sqlalchemy.pool import NullPool

from persistkit.adapters.db.engine import is_sqlite, make_engine


def test_is_sqlite_true_for_sqlite_url():
    """is_sqlite() should return True for SQLite URLs."""
    assert is_sqlite("sqlite:///:memory:")
    assert is_sqlite(make_url("sqlite+pysqlite:///file.db"))


def test_is_sqlite_false_for_postgres_url():
    """is_sqlite() should return False for non-SQLite URLs (e.g., Postgres)."""
    assert not is_sqlite("postgresql://u:p@localhost/db")
    assert not is_sqlite(make_url("postgresql+psycopg://u:p@localhost/db"))


def test_pool_options_are_forwarded():
    """Pool arguments reach create_engine untouched."""
    engine = make_engine("sqlite://", poolclass=NullPool)
    try:
        assert isinstance(engine.pool, NullPool)
    finally:
        engine.dispose()


def test_sqlite_pragmas_applied(sqlite_url):
    """SQLite engines created by make_engine() should apply expected PRAGMAs."""
    engine = make_engine(sqlite_url)
    try:
        with engine.connect() as cxn:
            fk = cxn.exec_driver_sql("PRAGMA foreign_keys;").scalar()
            jm = cxn.exec_driver_sql("PRAGMA journal_mode;").scalar()
            tmp = cxn.exec_driver_sql("PRAGMA temp_store;").scalar()
    finally:
        engine.dispose()
    assert fk == 1
    assert jm is not None
    assert jm.lower() == "wal"
    assert tmp == 2
