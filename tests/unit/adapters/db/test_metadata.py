"""Tests for the naming convention carried by the shared `metadata`.

Schema validation compares reflected constraint names against the mapped
metadata, so unnamed constraints must get deterministic names.

Each test copies the convention onto a private `MetaData` so the shared one
(which the persistence factory creates and drops) stays untouched.
"""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
    create_engine,
    inspect,
)

from persistkit.adapters.db.metadata import Base, metadata


def _private_metadata() -> MetaData:
    return MetaData(naming_convention=dict(metadata.naming_convention))


def test_base_uses_the_shared_metadata():
    assert Base.metadata is metadata


def test_index_naming_convention_for_single_and_multi_cols():
    """Unnamed indexes are named ix_<table>_<cols>."""
    md = _private_metadata()
    Table(
        "t_meta_ix",
        md,
        Column("id", Integer, primary_key=True),
        Column("a", String, nullable=False),
        Column("b", Integer),
        Index(None, "a"),
        Index(None, "a", "b"),
    )
    engine = create_engine("sqlite://")
    md.create_all(engine)

    names = {ix["name"] for ix in inspect(engine).get_indexes("t_meta_ix")}

    assert "ix_t_meta_ix_t_meta_ix_a" in names
    assert "ix_t_meta_ix_t_meta_ix_a_t_meta_ix_b" in names


def test_unique_constraint_uses_convention_name():
    """SQLite reflects UNIQUE as a unique index, so accept either form."""
    md = _private_metadata()
    Table(
        "t_meta_uq",
        md,
        Column("id", Integer, primary_key=True),
        Column("a", String, nullable=False),
        UniqueConstraint("a"),
    )
    engine = create_engine("sqlite://")
    md.create_all(engine)

    inspector = inspect(engine)
    idx = {ix["name"] for ix in inspector.get_indexes("t_meta_uq")}
    uq_names = {uc.get("name") for uc in inspector.get_unique_constraints("t_meta_uq")}

    assert "uq_t_meta_uq_a" in idx | uq_names


def test_check_constraint_is_prefixed_by_convention():
    md = _private_metadata()
    Table(
        "t_meta_ck",
        md,
        Column("id", Integer, primary_key=True),
        Column("a", Integer),
        CheckConstraint("a >= 0", name="nonneg"),
    )
    engine = create_engine("sqlite://")
    md.create_all(engine)

    checks = inspect(engine).get_check_constraints("t_meta_ck")

    assert "ck_t_meta_ck_nonneg" in {c.get("name") for c in checks}
