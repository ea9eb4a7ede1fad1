# comments in English; reST docstrings
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

import redis  # type: ignore[import-untyped]

from tokengate.services._shared.dto import SessionRecord
from tokengate.services._shared.ports import SessionStore, token_digest


@dataclass(slots=True)
class RedisSessionStore(SessionStore):
    """
    Redis-backed session store.

    Layout (both keys expire with the refresh token):

    - ``rs:a:<account_id>`` -> token digest (one live session per account)
    - ``rs:t:<digest>``     -> account id (reverse lookup)

    Writes use WATCH/MULTI/EXEC so the two keys never disagree.

    :param r: A Redis client (already connected).
    :param ttl: Lifetime of a session; should equal the refresh token TTL.
    """

    r: redis.Redis
    ttl: timedelta = timedelta(days=30)

    # -------------------- helpers --------------------

    @staticmethod
    def _ka(account_id: int) -> str:
        return f"rs:a:{account_id}"

    @staticmethod
    def _kt(digest: str) -> str:
        return f"rs:t:{digest}"

    @staticmethod
    def _s(value: bytes | str | None) -> str | None:
        if value is None:
            return None
        return value.decode() if isinstance(value, bytes) else value

    def _ttl_seconds(self) -> int:
        return max(1, int(self.ttl.total_seconds()))

    # -------------------- API ------------------------

    def put(self, account_id: int, refresh_token: str) -> None:
        """Replace the account's live session, dropping the previous reverse key."""
        k_account = self._ka(account_id)
        digest = token_digest(refresh_token)
        ttl = self._ttl_seconds()

        # Retry loop for optimistic locking in case of concurrent modifications
        while True:
            try:
                with self.r.pipeline() as p:
                    p.watch(k_account)
                    previous = self._s(p.get(k_account))

                    p.multi()
                    if previous is not None and previous != digest:
                        p.delete(self._kt(previous))
                    p.set(k_account, digest, ex=ttl)
                    p.set(self._kt(digest), str(account_id), ex=ttl)
                    p.execute()
                return
            except redis.WatchError:
                continue

    def get(self, refresh_token: str) -> int | None:
        owner = self._s(self.r.get(self._kt(token_digest(refresh_token))))
        return int(owner) if owner is not None else None

    def remove(self, refresh_token: str) -> SessionRecord | None:
        digest = token_digest(refresh_token)
        k_token = self._kt(digest)

        while True:
            try:
                with self.r.pipeline() as p:
                    p.watch(k_token)
                    owner = self._s(p.get(k_token))
                    if owner is None:
                        p.unwatch()
                        return None

                    k_account = self._ka(int(owner))
                    p.watch(k_account)
                    current = self._s(p.get(k_account))

                    p.multi()
                    p.delete(k_token)
                    # Only clear the account slot if it still points at this token.
                    if current == digest:
                        p.delete(k_account)
                    p.execute()
                return SessionRecord(account_id=int(owner), refresh_token=refresh_token)
            except redis.WatchError:
                continue
