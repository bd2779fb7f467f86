"""Shared SQLAlchemy `MetaData` and declarative base with a naming convention.

Mapped classes in scanned packages subclass `Base` so that their tables land on
`metadata`, which is what schema generation creates, validates and drops.

Naming convention:
    - Indexes:       ix_<table>_<col...>
    - Unique:        uq_<table>_<col...>
    - Check:         ck_<table>_<constraint_name>
    - Foreign keys:  fk_<table>_<col...>_<reftable>
    - Primary key:   pk_<table>
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

#: Global metadata with enforced naming convention.
metadata = MetaData(
    naming_convention={
        "ix": "ix_%(table_name)s_%(column_0_N_label)s",
        "uq": "uq_%(table_name)s_%(column_0_N_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_N_name)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)


class Base(DeclarativeBase):
    """Declarative base for mapped classes managed by the persistence factory."""

    metadata = metadata
