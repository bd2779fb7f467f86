"""Unit of Work interface for PERSISTKIT.

A unit of work is one transaction handed out by the transaction manager.
Leaving the ``with`` block discards anything that was not committed and
releases the underlying resources.
"""

from __future__ import annotations

import abc


class AbstractUnitOfWork(abc.ABC):
    """Contract for a transactional unit of work."""

    def __enter__(self) -> AbstractUnitOfWork:
        return self

    def __exit__(self, *args):
        """Roll back uncommitted work, then release resources."""
        try:
            self.rollback()
        finally:
            self.close()

    @abc.abstractmethod
    def commit(self):
        """Persist changes and finalize the transaction."""

    @abc.abstractmethod
    def rollback(self):
        """Revert changes not yet committed."""

    @abc.abstractmethod
    def close(self):
        """Release the resources held by the unit of work."""
