"""SQLAlchemy vendor adapter.

There is one concrete `VendorAdapter`. `select_vendor_adapter` picks it for the
configured ``hibernate.dialect`` value; when the value is absent the choice is
deferred to the engine's own dialect at initialization.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from persistkit.adapters.db.dialects import DialectName
from persistkit.interfaces.vendor_adapter import DialectMismatchError, VendorAdapter

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

PROPERTIES_INFO_KEY = "persistence.properties"  # pragma: no mutate


class SqlAlchemyVendorAdapter(VendorAdapter):
    """Vendor adapter backed by SQLAlchemy's ORM sessions."""

    def __init__(self, dialect: DialectName):
        self._dialect = dialect

    def __repr__(self) -> str:
        return f"SqlAlchemyVendorAdapter(dialect={self._dialect.value!r})"

    @property
    def dialect(self) -> str:
        return self._dialect.value

    def check_dialect(self, engine_dialect: str) -> None:
        if DialectName.from_string(engine_dialect) is not self._dialect:
            raise DialectMismatchError(
                f"Configured dialect {self._dialect.value!r} does not match "
                f"the engine dialect {engine_dialect!r}"
            )

    def session_options(self, properties: Mapping[str, str | None]) -> dict[str, Any]:
        # Sessions see the forwarded properties through `Session.info`.
        return {"info": {PROPERTIES_INFO_KEY: dict(properties)}}


def select_vendor_adapter(dialect_value: str | None) -> SqlAlchemyVendorAdapter | None:
    """Select the vendor adapter for a configured dialect value.

    Returns:
        The adapter, or None when *dialect_value* is empty.

    Raises:
        UnsupportedDialect: If the value names an unsupported dialect.
    """
    if not (dialect_value or "").strip():
        return None
    return SqlAlchemyVendorAdapter(DialectName.from_string(dialect_value))


def vendor_adapter_for_engine(engine: Engine) -> SqlAlchemyVendorAdapter:
    """Build the vendor adapter matching an engine's dialect."""
    return SqlAlchemyVendorAdapter(DialectName.from_sqlalchemy(engine))
