# comments in English; reST docstrings
from __future__ import annotations

from tokengate.services._shared.dto import SessionRecord
from tokengate.services._shared.ports import SessionStore, token_digest
from tokengate.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


class SQLSessionStore(SessionStore):
    """
    Relational session store over the ``refresh_sessions`` table.

    Rows are keyed by account (unique) and hold only the SHA-256 digest of
    the refresh token. Each call runs in its own Unit of Work.

    .. note::
       Requires an active Flask app context (uses the Flask-scoped session).
    """

    def put(self, account_id: int, refresh_token: str) -> None:
        with SQLAlchemyUnitOfWork() as uow:
            uow.refresh_sessions.upsert(account_id=account_id, token_hash=token_digest(refresh_token))

    def get(self, refresh_token: str) -> int | None:
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            row = uow.refresh_sessions.get_by_token_hash(token_digest(refresh_token))
            return row.account_id if row is not None else None

    def remove(self, refresh_token: str) -> SessionRecord | None:
        with SQLAlchemyUnitOfWork() as uow:
            repo = uow.refresh_sessions
            row = repo.get_by_token_hash(token_digest(refresh_token))
            if row is None:
                return None
            account_id = row.account_id
            repo.delete(row)
        return SessionRecord(account_id=account_id, refresh_token=refresh_token)
