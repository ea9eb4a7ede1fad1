"""Refresh session repository backing the SQL session store."""

from __future__ import annotations

from sqlalchemy import select

from tokengate.models.refresh_session import RefreshSession
from tokengate.repositories.base import BaseRepository


class RefreshSessionRepository(BaseRepository[RefreshSession]):
    """Persistence-only repository for :class:`RefreshSession`."""

    model = RefreshSession

    def get_by_account_id(self, account_id: int) -> RefreshSession | None:
        return self._first(select(RefreshSession).where(RefreshSession.account_id == account_id))

    def get_by_token_hash(self, token_hash: str) -> RefreshSession | None:
        return self._first(select(RefreshSession).where(RefreshSession.token_hash == token_hash))

    def upsert(self, *, account_id: int, token_hash: str) -> RefreshSession:
        """Insert the account's session or overwrite its token hash in place.

        :param account_id: Owner account.
        :type account_id: int
        :param token_hash: Digest of the new refresh token.
        :type token_hash: str
        :returns: The persisted row.
        :rtype: RefreshSession
        """
        row = self.get_by_account_id(account_id)
        if row is None:
            return self.add(RefreshSession(account_id=account_id, token_hash=token_hash))
        row.token_hash = token_hash
        self.flush()
        return row
