"""Bootstrap (composition root) for PERSISTKIT.

Builds the persistence stack at startup in a fixed order: connection pool,
persistence factory (initialized), transaction manager. The result is a
`PersistenceContainer` that other layers receive explicitly.

Import rules:
- Entry points import *this* package.
- This package may import `persistkit.adapters`, `persistkit.interfaces` and
  `persistkit.config`; inner layers must not import it.
"""

from .composition import (
    PersistenceContainer,
    bootstrap,
    build_connection_pool,
    build_persistence_factory,
    build_transaction_manager,
)

__all__ = [
    "PersistenceContainer",
    "bootstrap",
    "build_connection_pool",
    "build_persistence_factory",
    "build_transaction_manager",
]
