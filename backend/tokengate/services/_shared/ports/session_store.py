from __future__ import annotations

import hashlib
import threading
from typing import Protocol

from tokengate.services._shared.dto import SessionRecord


def token_digest(token: str) -> str:
    """Return the SHA-256 hex digest under which a refresh token is indexed."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class SessionStore(Protocol):
    """
    Stateful store holding the single valid refresh token per account.

    A refresh token is usable only while it is the stored one for its account:
    ``put`` supersedes the previous token and ``remove`` revokes it, even when
    the JWT itself is still signature-valid.
    """

    def put(self, account_id: int, refresh_token: str) -> None:
        """Upsert the session of ``account_id``, replacing any previous token."""

    def get(self, refresh_token: str) -> int | None:
        """Return the owning account id when ``refresh_token`` is the stored one."""

    def remove(self, refresh_token: str) -> SessionRecord | None:
        """Delete the session holding ``refresh_token`` and return it (if any)."""


class InMemorySessionStore(SessionStore):
    """
    In-memory session store.

    .. note::
       Uses a threading lock so the two indexes never drift apart.
    """

    def __init__(self) -> None:
        self._by_account: dict[int, str] = {}
        self._by_digest: dict[str, int] = {}
        self._lock = threading.Lock()

    def put(self, account_id: int, refresh_token: str) -> None:
        digest = token_digest(refresh_token)
        with self._lock:
            owner = self._by_digest.get(digest)
            if owner is not None and owner != account_id:
                raise ValueError("Refresh token already bound to another account.")
            previous = self._by_account.get(account_id)
            if previous is not None:
                self._by_digest.pop(previous, None)
            self._by_account[account_id] = digest
            self._by_digest[digest] = account_id

    def get(self, refresh_token: str) -> int | None:
        with self._lock:
            return self._by_digest.get(token_digest(refresh_token))

    def remove(self, refresh_token: str) -> SessionRecord | None:
        digest = token_digest(refresh_token)
        with self._lock:
            account_id = self._by_digest.pop(digest, None)
            if account_id is None:
                return None
            self._by_account.pop(account_id, None)
        return SessionRecord(account_id=account_id, refresh_token=refresh_token)

    def __len__(self) -> int:
        return len(self._by_account)
