"""Schema generation modes applied when the persistence factory starts.

The ``hibernate.hbm2ddl.auto`` value selects what happens to the tables on the
shared metadata:

- ``none``: nothing (also used when the key is absent or empty).
- ``validate``: compare metadata with the live database via Alembic's
  autogenerate comparison and fail if mapped tables or columns are missing.
- ``update``: create missing tables, leave existing ones alone.
- ``create``: drop mapped tables, then create them.
- ``create-drop``: as ``create``, and drop them again at shutdown.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from alembic.autogenerate import compare_metadata
from alembic.runtime.migration import MigrationContext

if TYPE_CHECKING:
    from sqlalchemy import MetaData
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


class UnsupportedSchemaMode(Exception):
    """Raised when the schema-generation mode is not recognized."""


class SchemaValidationError(Exception):
    """Raised by ``validate`` mode when mapped tables or columns are missing."""

    def __init__(self, problems: list[str]):
        self.problems = problems
        super().__init__("Schema validation failed: " + "; ".join(problems))


class SchemaGenerationMode(str, Enum):
    """Supported schema-generation modes."""

    NONE = "none"
    VALIDATE = "validate"
    UPDATE = "update"
    CREATE = "create"
    CREATE_DROP = "create-drop"

    @classmethod
    def from_string(cls, mode_str: str | None) -> SchemaGenerationMode:
        """Normalize a raw ``hibernate.hbm2ddl.auto`` value.

        Raises:
            UnsupportedSchemaMode: if the value is not a known mode.
        """
        raw = (mode_str or "").strip().lower()
        if not raw:
            return cls.NONE
        try:
            return cls(raw.replace("_", "-"))
        except ValueError as e:
            raise UnsupportedSchemaMode(f"Unsupported schema-generation mode: {mode_str!r}") from e

    @property
    def drops_on_close(self) -> bool:
        return self is SchemaGenerationMode.CREATE_DROP


def find_schema_problems(engine: Engine, metadata: MetaData) -> list[str]:
    """List mapped tables and columns that the database does not have.

    Extra tables or columns in the database are not problems.
    """
    with engine.connect() as conn:
        context = MigrationContext.configure(conn)
        diffs = compare_metadata(context, metadata)

    problems: list[str] = []
    for diff in diffs:
        # modify_* operations arrive grouped in lists; types are not validated.
        if isinstance(diff, list):
            continue
        if diff[0] == "add_table":
            problems.append(f"missing table {diff[1].name!r}")
        elif diff[0] == "add_column":
            problems.append(f"missing column {diff[2]}.{diff[3].name}")
    return problems


def apply_schema_mode(engine: Engine, metadata: MetaData, mode: SchemaGenerationMode) -> None:
    """Bring the database schema in line with *mode* at startup.

    Raises:
        SchemaValidationError: In ``validate`` mode, if anything is missing.
    """
    table_count = len(metadata.tables)
    if mode is SchemaGenerationMode.NONE:
        return
    if mode is SchemaGenerationMode.VALIDATE:
        if problems := find_schema_problems(engine, metadata):
            raise SchemaValidationError(problems)
        logger.info("Schema validated (%d mapped table(s))", table_count)
        return
    if mode in (SchemaGenerationMode.CREATE, SchemaGenerationMode.CREATE_DROP):
        metadata.drop_all(engine)
    metadata.create_all(engine, checkfirst=True)
    logger.info("Schema %s applied (%d mapped table(s))", mode.value, table_count)


def drop_schema(engine: Engine, metadata: MetaData) -> None:
    """Drop every table on *metadata*; used by ``create-drop`` at shutdown."""
    metadata.drop_all(engine)
    logger.info("Schema dropped (%d mapped table(s))", len(metadata.tables))
