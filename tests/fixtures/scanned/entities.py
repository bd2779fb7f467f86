"""Submodule that package scanning must import."""

from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column

from tests.fixtures.models import TestBase


class Gadget(TestBase):
    """Mapped class registered only when this module is imported."""

    __tablename__ = "gadgets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
