"""Build the pool, the persistence factory and the transaction manager."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from persistkit import config
from persistkit.adapters.db.pool import ConnectionPool, PoolSettings, create_connection_pool
from persistkit.adapters.persistence_factory import PersistenceFactory
from persistkit.adapters.transaction_manager import TransactionManager

if TYPE_CHECKING:
    from sqlalchemy.orm import Session, sessionmaker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PersistenceContainer:
    """The handles produced at startup, and their shutdown."""

    data_source: ConnectionPool
    persistence_factory: PersistenceFactory
    transaction_manager: TransactionManager

    @property
    def session_factory(self) -> sessionmaker[Session]:
        return self.persistence_factory.session_factory

    def close(self) -> None:
        """Close the persistence factory, then dispose the pool."""
        try:
            self.persistence_factory.close()
        finally:
            self.data_source.dispose()

    def __enter__(self) -> PersistenceContainer:
        return self

    def __exit__(self, *args) -> None:
        self.close()


def build_connection_pool(source: config.ConfigurationSource) -> ConnectionPool:
    """Build the pooled connection source from the ``db.*`` and ``dbcp.*`` keys.

    The sizing keys are parsed before any connection is attempted.

    Raises:
        ConfigurationParseError: If a sizing key is not an integer.
        sqlalchemy.exc.SQLAlchemyError: Driver, URL and connection errors,
            unchanged.
    """
    settings = PoolSettings.from_configuration(source)
    return create_connection_pool(
        source.get(config.DB_URL),
        settings,
        driver_class=source.get(config.DB_DRIVER_CLASS),
        username=source.get(config.DB_USERNAME),
        password=source.get(config.DB_PASSWORD),
    )


def _packages_to_scan(source: config.ConfigurationSource) -> list[str]:
    raw = source.get(config.PACKAGES_TO_SCAN) or ""
    return [name.strip() for name in raw.split(",") if name.strip()]


def build_persistence_factory(
    source: config.ConfigurationSource, pool: ConnectionPool | None = None
) -> PersistenceFactory:
    """Describe the persistence factory; `PersistenceFactory.initialize` opens it.

    The properties bag carries exactly the forwarded keys, copied verbatim
    (None when absent).

    Args:
        source: Configuration source.
        pool: Pool the factory takes ownership of. When omitted a new pool is
            built from *source*.
    """
    if pool is None:
        pool = build_connection_pool(source)
    properties = {key: source.get(key) for key in config.FORWARDED_PROPERTY_KEYS}
    return PersistenceFactory(
        pool,
        properties,
        packages_to_scan=_packages_to_scan(source),
    )


def build_transaction_manager(session_factory: sessionmaker[Session]) -> TransactionManager:
    """Bind a transaction manager to an initialized session factory."""
    return TransactionManager(session_factory)


def bootstrap(
    source: config.ConfigurationSource | None = None,
    *,
    config_path: str | Path | None = None,
) -> PersistenceContainer:
    """Build the persistence stack in dependency order.

    Args:
        source: Configuration to use. Loaded with `config.load_configuration`
            from *config_path* when omitted.
        config_path: Properties file used when *source* is omitted.

    Returns:
        The container holding the pool, the initialized factory and the
        transaction manager. Call ``close()`` at shutdown.
    """
    if source is None:
        source = config.load_configuration(config_path)
    logger.debug("Bootstrapping persistence from %s", source.origin)

    pool = build_connection_pool(source)
    try:
        factory = build_persistence_factory(source, pool)
        session_factory = factory.initialize()
        transaction_manager = build_transaction_manager(session_factory)
    except Exception:
        pool.dispose()
        raise

    logger.info("Persistence bootstrap complete")
    return PersistenceContainer(
        data_source=pool,
        persistence_factory=factory,
        transaction_manager=transaction_manager,
    )
