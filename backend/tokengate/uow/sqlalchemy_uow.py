"""
SQLAlchemy implementation of UnitOfWork for Flask.
"""

from __future__ import annotations

from sqlalchemy import event
from sqlalchemy.orm import Session, scoped_session

from tokengate.core.extensions import db
from tokengate.repositories import AccountRepository, RefreshSessionRepository
from tokengate.uow.base import UnitOfWork


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.accounts = AccountRepository(session=self.session)
        self.refresh_sessions = RefreshSessionRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-write UoW using the Flask-scoped session.

    Commits when the block exits cleanly, rolls back otherwise.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # No-op: the session is lazily started on the first statement.
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            try:
                self.commit()
            except Exception:
                self.rollback()
                raise
        else:
            self.rollback()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only UoW backed by the Flask-scoped session.

    A ``before_flush`` guard rejects any pending ORM write while the scope is
    open, and ``commit()`` is disallowed. The guard is bound to the concrete
    session of the current thread only, so writers running elsewhere are not
    affected. The scope always ends with a rollback, which releases the
    transaction it used and expires anything read into the identity map.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)
        self._guarded: Session | None = None
        self._before_flush = None

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        self._install_guard()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        finally:
            self._remove_guard()

    def commit(self) -> None:
        """
        Disallow commit in read-only Unit of Work.

        :raises RuntimeError: always, to prevent accidental writes.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()

    # ----------------------------- Guards -------------------------------------

    def _install_guard(self) -> None:
        """Block ORM flushes on this thread's session while the scope is open."""
        if self._guarded is not None:
            return

        # A scoped_session proxy would register on the Session class itself.
        target = self.session() if isinstance(self.session, scoped_session) else self.session

        def _before_flush(session, flush_context, instances):
            if session.new or session.dirty or session.deleted:
                raise RuntimeError(
                    "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
                )

        event.listen(target, "before_flush", _before_flush)
        self._guarded = target
        self._before_flush = _before_flush

    def _remove_guard(self) -> None:
        if self._guarded is None:
            return
        event.remove(self._guarded, "before_flush", self._before_flush)
        self._guarded = None
        self._before_flush = None
