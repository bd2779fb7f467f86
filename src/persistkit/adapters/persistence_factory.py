"""Persistence factory: the session-factory descriptor and its initialization.

Building a `PersistenceFactory` only records what it needs: the pool, the
properties bag and the packages holding mapped classes. Nothing is validated
or opened until `initialize` runs; that step scans the packages, resolves the
vendor adapter, applies the schema-generation mode and produces the runtime
handle, a SQLAlchemy ``sessionmaker``.
"""

from __future__ import annotations

import importlib
import logging
import pkgutil
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

from sqlalchemy.orm import sessionmaker

from persistkit import config
from persistkit.adapters.db.metadata import metadata as default_metadata
from persistkit.adapters.db.schema import (
    SchemaGenerationMode,
    apply_schema_mode,
    drop_schema,
)
from persistkit.adapters.vendor import select_vendor_adapter, vendor_adapter_for_engine

if TYPE_CHECKING:
    from sqlalchemy import MetaData
    from sqlalchemy.orm import Session

    from persistkit.adapters.db.pool import ConnectionPool
    from persistkit.interfaces.vendor_adapter import VendorAdapter

logger = logging.getLogger(__name__)


class PersistenceFactoryNotInitialized(Exception):
    """Raised when the runtime handle is requested before `initialize()`."""


def scan_packages(packages: Iterable[str]) -> list[str]:
    """Import *packages* and all their submodules so mapped classes register.

    Returns:
        The names of every module imported.
    """
    imported: list[str] = []
    for name in packages:
        module = importlib.import_module(name)
        imported.append(module.__name__)
        if hasattr(module, "__path__"):
            for info in pkgutil.walk_packages(module.__path__, prefix=f"{name}."):
                importlib.import_module(info.name)
                imported.append(info.name)
    return imported


class PersistenceFactory:  # pylint: disable=too-many-instance-attributes
    """Descriptor for the session factory bound to one connection pool."""

    def __init__(  # pylint: disable=too-many-arguments
        self,
        pool: ConnectionPool,
        properties: Mapping[str, str | None],
        *,
        vendor_adapter: VendorAdapter | None = None,
        packages_to_scan: Iterable[str] = (),
        metadata: MetaData = default_metadata,
    ):
        self.pool = pool
        self.properties: dict[str, str | None] = dict(properties)
        self.vendor_adapter = vendor_adapter
        self.packages_to_scan = tuple(packages_to_scan)
        self.metadata = metadata
        self.schema_mode: SchemaGenerationMode | None = None
        self._session_factory: sessionmaker[Session] | None = None
        self._closed = False

    def __repr__(self) -> str:
        state = "initialized" if self.initialized else "pending"
        return f"PersistenceFactory({state}, pool={self.pool!r})"

    @property
    def initialized(self) -> bool:
        return self._session_factory is not None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def session_factory(self) -> sessionmaker[Session]:
        """The runtime handle produced by `initialize`.

        Raises:
            PersistenceFactoryNotInitialized: Before `initialize` has run.
        """
        if self._session_factory is None:
            raise PersistenceFactoryNotInitialized(
                "initialize() must be called before the session factory is used"
            )
        return self._session_factory

    def _resolve_vendor_adapter(self) -> VendorAdapter:
        engine = self.pool.engine
        adapter = self.vendor_adapter or select_vendor_adapter(
            self.properties.get(config.DIALECT)
        )
        if adapter is None:
            adapter = vendor_adapter_for_engine(engine)
            logger.debug("No dialect configured; using engine dialect %s", adapter.dialect)
        else:
            adapter.check_dialect(engine.dialect.name)
        return adapter

    def initialize(self) -> sessionmaker[Session]:
        """Open the persistence unit and return its runtime handle.

        Idempotent: later calls return the same handle.

        Raises:
            UnsupportedDialect: If the configured dialect is unsupported.
            DialectMismatchError: If it disagrees with the engine.
            UnsupportedSchemaMode: If the schema-generation mode is unknown.
            SchemaValidationError: If ``validate`` finds missing tables/columns.
        """
        if self._session_factory is not None:
            return self._session_factory

        if self.packages_to_scan:
            modules = scan_packages(self.packages_to_scan)
            logger.debug("Scanned %d module(s) for mapped classes", len(modules))

        self.vendor_adapter = self._resolve_vendor_adapter()
        mode = SchemaGenerationMode.from_string(
            self.properties.get(config.SCHEMA_GENERATION_MODE)
        )
        apply_schema_mode(self.pool.engine, self.metadata, mode)
        self.schema_mode = mode

        self._session_factory = sessionmaker(
            bind=self.pool.engine,
            **self.vendor_adapter.session_options(self.properties),
        )
        logger.info(
            "Persistence factory initialized (dialect=%s, schema=%s, tables=%d)",
            self.vendor_adapter.dialect,
            mode.value,
            len(self.metadata.tables),
        )
        return self._session_factory

    def close(self) -> None:
        """Shut the persistence unit down.

        Drops the schema in ``create-drop`` mode. The pool is left open; the
        container disposes it afterwards.
        """
        if self._closed:
            return
        if self.schema_mode is not None and self.schema_mode.drops_on_close:
            drop_schema(self.pool.engine, self.metadata)
        self._closed = True
        logger.debug("Persistence factory closed")
