"""Mapped classes used by the integration tests.

They live on their own `MetaData` so tests never touch the shared one.
"""

from sqlalchemy import MetaData, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class TestBase(DeclarativeBase):
    """Declarative base for test-only tables."""

    __test__ = False
    metadata = MetaData()


class Widget(TestBase):
    """A row with a name."""

    __tablename__ = "widgets"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(50))
