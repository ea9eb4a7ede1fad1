"""
AccountService
==============

Owns the account lifecycle: ``Unverified`` -> ``Activated`` (terminal).

- ``create`` registers an unverified account with a fresh activation link.
- ``activate`` flips the flag when the link matches an account.
- ``authenticate`` checks a login attempt against the stored hash.
"""

from __future__ import annotations

import logging
import uuid

from sqlalchemy.exc import IntegrityError

from tokengate.models.account import normalize_email
from tokengate.repositories.account import AccountRepository
from tokengate.services._shared.base import BaseService
from tokengate.services._shared.errors import (
    AccountNotActivated,
    BadCredentials,
    DuplicateAccount,
    InvalidActivationLink,
    UnknownAccount,
    violates,
)
from tokengate.services._shared.ports.credential_hasher import CredentialHasher
from tokengate.services.accounts.dto import AccountOut

log = logging.getLogger(__name__)


class AccountService(BaseService):
    """
    Account state machine backed by the relational store.

    :param hasher: Credential hasher used for secrets.
    :type hasher: CredentialHasher
    :param require_activation: Reject authentication of unverified accounts.
    :type require_activation: bool
    """

    def __init__(self, *, hasher: CredentialHasher, require_activation: bool = False) -> None:
        super().__init__()
        self.hasher = hasher
        self.require_activation = require_activation

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def create(self, email: str, secret: str) -> AccountOut:
        """
        Create an unverified account.

        :param email: Raw email; trimmed and lowercased before storage.
        :type email: str
        :param secret: Plaintext secret, hashed before it reaches storage.
        :type secret: str
        :returns: The created account.
        :rtype: AccountOut
        :raises DuplicateAccount: If the email is already registered.
        """
        norm_email = normalize_email(email)

        try:
            with self.rw_uow() as uow:
                repo: AccountRepository = uow.accounts
                if repo.exists_by_email(norm_email):
                    raise DuplicateAccount(email=norm_email)

                account = repo.model(
                    email=norm_email,
                    password_hash=self.hasher.hash(secret),
                    activation_link=str(uuid.uuid4()),
                    is_activated=False,
                )
                repo.add(account)
                out = AccountOut.from_model(account)
        except IntegrityError as exc:
            # Concurrent registration won the race on the unique index.
            if violates(exc, "uq_accounts_email"):
                raise DuplicateAccount(email=norm_email) from exc
            raise

        log.info("account.created", extra={"account_id": out.id})
        return out

    def activate(self, activation_link: str) -> AccountOut:
        """
        Mark the account owning ``activation_link`` as activated.

        Activating an already activated account is a no-op.

        :param activation_link: Link issued at creation.
        :type activation_link: str
        :returns: The (now) activated account.
        :rtype: AccountOut
        :raises InvalidActivationLink: If no account matches the link.
        """
        with self.rw_uow() as uow:
            repo: AccountRepository = uow.accounts
            account = repo.get_by_activation_link(activation_link)
            if account is None:
                raise InvalidActivationLink(link=activation_link)

            if account.is_activated:
                log.info("account.activate.noop", extra={"account_id": account.id})
            else:
                account.is_activated = True
                repo.flush()
                log.info("account.activated", extra={"account_id": account.id})
            return AccountOut.from_model(account)

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def authenticate(self, email: str, secret: str) -> AccountOut:
        """
        Check a login attempt.

        :param email: Raw email of the account.
        :type email: str
        :param secret: Plaintext secret to verify.
        :type secret: str
        :returns: The matching account.
        :rtype: AccountOut
        :raises UnknownAccount: If no account has this email.
        :raises BadCredentials: If the secret does not match.
        :raises AccountNotActivated: If activation is required and missing.
        """
        norm_email = normalize_email(email)
        with self.ro_uow() as uow:
            repo: AccountRepository = uow.accounts
            account = repo.get_by_email(norm_email)
            if account is None:
                raise UnknownAccount(email=norm_email)
            password_hash = account.password_hash
            out = AccountOut.from_model(account)

        # No transaction or flush guard is held while the hash is checked.
        if not self.hasher.verify(secret, password_hash):
            raise BadCredentials()
        if self.require_activation and not out.is_activated:
            raise AccountNotActivated(email=norm_email)
        return out

    def get(self, account_id: int) -> AccountOut | None:
        """Return the account with ``account_id`` or ``None`` when it is gone."""
        with self.ro_uow() as uow:
            account = uow.accounts.get(account_id)
            return AccountOut.from_model(account) if account is not None else None

    def list_accounts(self) -> list[AccountOut]:
        with self.ro_uow() as uow:
            return [AccountOut.from_model(a) for a in uow.accounts.list_all()]
