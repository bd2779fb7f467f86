"""Vendor adapter contract.

A vendor adapter tells the persistence factory how to talk to one family of
database backends: which dialect it expects and which options the session
factory should be built with.
"""

from __future__ import annotations

import abc
from collections.abc import Mapping
from typing import Any


class DialectMismatchError(Exception):
    """Raised when the configured dialect disagrees with the engine's dialect."""


class VendorAdapter(abc.ABC):
    """Contract for a persistence vendor adapter."""

    @property
    @abc.abstractmethod
    def dialect(self) -> str:
        """Normalized dialect name this adapter serves."""

    @abc.abstractmethod
    def check_dialect(self, engine_dialect: str) -> None:
        """Ensure the engine's dialect matches this adapter.

        Raises:
            DialectMismatchError: If they differ.
        """

    @abc.abstractmethod
    def session_options(self, properties: Mapping[str, str | None]) -> dict[str, Any]:
        """Return keyword arguments for the session factory."""
