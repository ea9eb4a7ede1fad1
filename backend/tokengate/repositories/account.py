"""Account repository: keyed lookups over the ``accounts`` table."""

from __future__ import annotations

from sqlalchemy import select

from tokengate.models.account import Account, normalize_email
from tokengate.repositories.base import BaseRepository


class AccountRepository(BaseRepository[Account]):
    """Persistence-only repository for :class:`Account`.

    It NEVER hashes secrets or issues tokens; it only stores and finds rows.
    Email uniqueness is enforced by the ``uq_accounts_email`` constraint.
    """

    model = Account

    def get_by_email(self, email: str) -> Account | None:
        """Fetch an account by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: Account instance or ``None`` when not found.
        :rtype: Account | None
        """
        return self._first(select(Account).where(Account.email == normalize_email(email)))

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when an account with the provided email exists."""
        stmt = select(Account.id).where(Account.email == normalize_email(email))
        return bool(self.session.execute(stmt).first())

    def get_by_activation_link(self, activation_link: str) -> Account | None:
        """Fetch the account an activation link was issued to."""
        return self._first(select(Account).where(Account.activation_link == activation_link))
