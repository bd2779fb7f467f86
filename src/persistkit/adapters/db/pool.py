"""Pooled connection source.

`PoolSettings` carries the four sizing bounds read from the ``dbcp.*`` keys and
translates them onto SQLAlchemy's pool classes:

- ``max_idle`` is the number of connections kept open in the pool
  (``QueuePool.pool_size``). Zero or less keeps none (``NullPool``).
- ``max_total`` caps the connections checked out at once
  (``max_overflow = max_total - pool_size``). Zero or less is unbounded.
- ``initial_size`` connections are opened when the pool is created and
  handed back to it.
- ``min_idle`` is recorded and reported; SQLAlchemy has no idle evictor to
  feed it to.

`ConnectionPool` is the handle registered with the container. It owns the
Engine and is disposed once at shutdown.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sqlalchemy.engine import URL, make_url
from sqlalchemy.pool import NullPool, QueuePool

from persistkit import config

from .engine import is_sqlite, make_engine

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_SIZE = 0
DEFAULT_MAX_IDLE = 5
DEFAULT_MAX_TOTAL = 0
DEFAULT_MIN_IDLE = 0


@dataclass(frozen=True, slots=True)
class PoolSettings:
    """Sizing bounds for the connection pool.

    Unlike DBCP, where ``maxTotal=0`` allows no connections at all, a
    ``max_total`` of zero or less means no upper bound here.
    """

    initial_size: int = DEFAULT_INITIAL_SIZE
    max_idle: int = DEFAULT_MAX_IDLE
    max_total: int = DEFAULT_MAX_TOTAL
    min_idle: int = DEFAULT_MIN_IDLE

    @classmethod
    def from_configuration(cls, source: config.ConfigurationSource) -> PoolSettings:
        """Parse the ``dbcp.*`` keys, using the documented fallbacks when absent.

        Raises:
            ConfigurationParseError: If a key is present but not an integer.
        """
        return cls(
            initial_size=source.get_int(config.POOL_INITIAL_SIZE, DEFAULT_INITIAL_SIZE),
            max_idle=source.get_int(config.POOL_MAX_IDLE, DEFAULT_MAX_IDLE),
            max_total=source.get_int(config.POOL_MAX_TOTAL, DEFAULT_MAX_TOTAL),
            min_idle=source.get_int(config.POOL_MIN_IDLE, DEFAULT_MIN_IDLE),
        )

    @property
    def bounded(self) -> bool:
        """True when ``max_total`` caps the number of open connections."""
        return self.max_total > 0

    @property
    def retained_size(self) -> int:
        """Connections the pool keeps open between checkouts."""
        retained = max(self.max_idle, 0)
        if self.bounded:
            retained = min(retained, self.max_total)
        return retained

    @property
    def warm_up_size(self) -> int:
        """Connections opened eagerly when the pool is created."""
        size = max(self.initial_size, 0)
        if self.bounded:
            size = min(size, self.max_total)
        return size

    def engine_options(self) -> dict[str, Any]:
        """Keyword arguments for `make_engine` implementing these bounds."""
        if self.retained_size == 0:
            return {"poolclass": NullPool}
        overflow = self.max_total - self.retained_size if self.bounded else -1
        return {
            "poolclass": QueuePool,
            "pool_size": self.retained_size,
            "max_overflow": overflow,
        }


def build_url(
    url: str | None,
    driver_class: str | None = None,
    username: str | None = None,
    password: str | None = None,
) -> URL:
    """Assemble the engine URL from the ``db.*`` values.

    The values are not validated here. ``driver_class`` replaces the DBAPI
    part of the URL's drivername; non-empty ``username``/``password`` replace
    the credentials embedded in the URL. SQLite has no authentication, so
    credentials are not applied to SQLite URLs.

    Raises:
        sqlalchemy.exc.ArgumentError: If *url* cannot be parsed.
    """
    parsed = make_url(url)
    if driver_class:
        parsed = parsed.set(drivername=f"{parsed.get_backend_name()}+{driver_class}")
    if is_sqlite(parsed):
        if username or password:
            logger.debug("Ignoring db.username/db.password for SQLite")
        return parsed
    if username:
        parsed = parsed.set(username=username)
    if password:
        parsed = parsed.set(password=password)
    return parsed


class ConnectionPool:
    """Handle around a pooled SQLAlchemy Engine."""

    def __init__(  # pylint: disable=too-many-arguments
        self,
        engine: Engine,
        settings: PoolSettings,
        *,
        driver_class: str | None = None,
        url: str | None = None,
        username: str | None = None,
        password: str | None = None,
    ):
        self.engine = engine
        self.settings = settings
        self.driver_class = driver_class
        self.url = url
        self.username = username
        self.password = password
        self._closed = False

    def __repr__(self) -> str:
        return (
            f"ConnectionPool(url={self.engine.url.render_as_string(hide_password=True)!r}, "
            f"settings={self.settings!r})"
        )

    @property
    def initial_size(self) -> int:
        return self.settings.initial_size

    @property
    def max_idle(self) -> int:
        return self.settings.max_idle

    @property
    def max_total(self) -> int:
        return self.settings.max_total

    @property
    def min_idle(self) -> int:
        return self.settings.min_idle

    @property
    def closed(self) -> bool:
        return self._closed

    def connect(self) -> Connection:
        """Check a connection out of the pool."""
        return self.engine.connect()

    def warm_up(self) -> None:
        """Open ``initial_size`` connections and return them to the pool.

        Driver and network errors propagate unchanged.
        """
        count = self.settings.warm_up_size
        if not count:
            return
        connections: list[Connection] = []
        try:
            for _ in range(count):
                connections.append(self.engine.connect())
        finally:
            for connection in connections:
                connection.close()
        logger.debug("Pool warmed up with %d connection(s): %s", count, self.status())

    def status(self) -> str:
        """Human-readable pool status from SQLAlchemy."""
        return self.engine.pool.status()

    def dispose(self) -> None:
        """Close every pooled connection. Safe to call more than once."""
        if self._closed:
            return
        self.engine.dispose()
        self._closed = True
        logger.debug("Connection pool disposed")


def create_connection_pool(  # pylint: disable=too-many-arguments
    url: str | None,
    settings: PoolSettings,
    *,
    driver_class: str | None = None,
    username: str | None = None,
    password: str | None = None,
    echo: bool = False,
) -> ConnectionPool:
    """Create, and warm up, a pooled connection source.

    Raises:
        sqlalchemy.exc.ArgumentError: If the URL is malformed.
        sqlalchemy.exc.NoSuchModuleError: If the dialect or driver is unknown.
        sqlalchemy.exc.DBAPIError: If warm-up connections cannot be opened.
    """
    engine_url = build_url(url, driver_class, username, password)
    engine = make_engine(engine_url, echo=echo, **settings.engine_options())
    pool = ConnectionPool(
        engine,
        settings,
        driver_class=driver_class,
        url=url,
        username=username,
        password=password,
    )
    try:
        pool.warm_up()
    except Exception:
        engine.dispose()
        raise
    logger.info(
        "Connection pool ready for %s (%s)",
        engine.url.render_as_string(hide_password=True),
        type(engine.pool).__name__,
    )
    return pool
