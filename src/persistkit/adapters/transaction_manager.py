"""Transaction manager bound to the persistence factory's runtime handle.

Offers three ways to demarcate a transaction:

- `TransactionManager.begin`: a unit of work; commit explicitly, anything
  else is rolled back when the block ends.
- `TransactionManager.transaction`: yields a session, commits on a clean
  exit and rolls back when the block raises.
- `transactional`: decorator form of `transaction`.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, TypeVar

from persistkit.interfaces.unit_of_work import AbstractUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy.orm import Session, sessionmaker

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TransactionManagerNotReadyError(Exception):
    """Raised when the transaction manager is given no session factory."""


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """Unit of work owning one SQLAlchemy Session."""

    def __init__(self, session_factory: sessionmaker[Session]):
        self.session_factory = session_factory
        self.session: Session

    def __enter__(self):
        self.session = self.session_factory()
        return super().__enter__()

    def commit(self):
        self.session.commit()

    def rollback(self):
        self.session.rollback()

    def close(self):
        self.session.close()


class TransactionManager:
    """Hands out transactions against a session factory."""

    def __init__(self, session_factory: sessionmaker[Session] | None):
        if session_factory is None:
            raise TransactionManagerNotReadyError(
                "A transaction manager needs an initialized session factory"
            )
        self.session_factory = session_factory

    def begin(self) -> SqlAlchemyUnitOfWork:
        """Return a new unit of work; use it as a context manager."""
        return SqlAlchemyUnitOfWork(self.session_factory)

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """Run the block in one transaction.

        Commits when the block completes; rolls back and re-raises otherwise.
        """
        with self.begin() as uow:
            try:
                yield uow.session
            except Exception:
                logger.debug("Rolling back transaction", exc_info=True)
                raise
            uow.commit()


def transactional(manager: TransactionManager) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Run the decorated function inside ``manager.transaction()``.

    The active session is passed as the ``session`` keyword argument.

    Example:
        ```py
        @transactional(container.transaction_manager)
        def rename(user_id: int, name: str, *, session: Session) -> None:
            session.get(User, user_id).name = name
        ```
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            with manager.transaction() as session:
                return func(*args, session=session, **kwargs)

        return wrapper

    return decorator
