# tokengate/services/auth/service.py
from __future__ import annotations

import logging
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar, cast

from tokengate.services._shared.dto import IdentityClaim, SessionRecord
from tokengate.services._shared.errors import (
    AuthError,
    InternalFailure,
    NotificationError,
    Unauthorized,
)
from tokengate.services._shared.ports.notifier import ActivationNotifier
from tokengate.services._shared.ports.session_store import SessionStore
from tokengate.services._shared.ports.token_codec import TokenCodec
from tokengate.services.accounts.dto import AccountOut
from tokengate.services.accounts.service import AccountService
from tokengate.services.auth.dto import AuthResult

log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

ACTIVATION_MAIL_NOT_SENT = "activation_mail_not_sent"


def _guard_infra(fn: F) -> F:
    """
    Let taxonomy errors through and turn anything else into ``InternalFailure``.

    The original exception is logged with traceback and chained as the cause.
    """

    @wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return fn(*args, **kwargs)
        except AuthError:
            raise
        except Exception as exc:
            log.exception("auth.internal_failure", extra={"endpoint": fn.__name__})
            raise InternalFailure() from exc

    return cast(F, wrapper)


class AuthService:
    """
    Authentication lifecycle orchestrator.

    Consults the account state machine, mints token pairs through the codec
    and records the single live refresh token per account in the session
    store. Every workflow fails fast on the first violated precondition.
    """

    def __init__(
        self,
        *,
        accounts: AccountService,
        codec: TokenCodec,
        sessions: SessionStore,
        notifier: ActivationNotifier,
        activation_url_prefix: str,
    ) -> None:
        """
        Initialize the orchestrator with its collaborators.

        :param accounts: Account state machine.
        :param codec: Token minting/verification adapter.
        :param sessions: Refresh session store.
        :param notifier: Activation mail sender.
        :param activation_url_prefix: Absolute URL the activation link is appended to.
        """
        self.accounts = accounts
        self.codec = codec
        self.sessions = sessions
        self.notifier = notifier
        self.activation_url_prefix = activation_url_prefix

    # ------------------------------------------------------------------ #
    # Workflows
    # ------------------------------------------------------------------ #

    @_guard_infra
    def register(self, email: str, secret: str) -> AuthResult:
        """
        Create an account, send its activation link and sign it in.

        :raises DuplicateAccount: If the email is taken.
        """
        account = self.accounts.create(email, secret)

        warnings: tuple[str, ...] = ()
        try:
            self.notifier.send_activation(account.email, self.activation_url(account.activation_link))
        except NotificationError as exc:
            log.warning(
                "auth.register.mail_failed",
                extra={"account_id": account.id, "reason": str(exc)},
            )
            warnings = (ACTIVATION_MAIL_NOT_SENT,)

        result = self._issue(account)
        log.info("auth.register", extra={"account_id": account.id})
        return AuthResult(tokens=result.tokens, user=result.user, warnings=warnings)

    @_guard_infra
    def login(self, email: str, secret: str) -> AuthResult:
        """
        Authenticate credentials and issue a fresh token pair.

        :raises UnknownAccount: If no account has this email.
        :raises BadCredentials: If the secret is wrong.
        :raises AccountNotActivated: If activation is required and missing.
        """
        account = self.accounts.authenticate(email, secret)
        result = self._issue(account)
        log.info("auth.login", extra={"account_id": account.id})
        return result

    @_guard_infra
    def activate(self, activation_link: str) -> None:
        """:raises InvalidActivationLink: If no account matches the link."""
        self.accounts.activate(activation_link)

    @_guard_infra
    def logout(self, refresh_token: str) -> SessionRecord | None:
        """
        Drop the session holding ``refresh_token``.

        The token signature is not checked: an unknown value simply removes
        nothing and returns ``None``.
        """
        if not refresh_token:
            return None
        removed = self.sessions.remove(refresh_token)
        if removed is not None:
            log.info("auth.logout", extra={"account_id": removed.account_id})
        return removed

    @_guard_infra
    def refresh(self, refresh_token: str | None) -> AuthResult:
        """
        Rotate the refresh token and emit a new pair.

        :raises Unauthorized: If the token is missing, invalid, expired,
            superseded, or its account no longer exists.
        """
        if not refresh_token:
            raise self._reject("missing_refresh_token")

        claim = self.codec.verify_refresh(refresh_token)
        if claim is None:
            raise self._reject("invalid_refresh_token")

        stored_owner = self.sessions.get(refresh_token)
        if stored_owner is None or stored_owner != claim.id:
            raise self._reject("unknown_session")

        account = self.accounts.get(claim.id)
        if account is None:
            raise self._reject("account_gone")

        result = self._issue(account)
        log.info("auth.refresh", extra={"account_id": account.id})
        return result

    @_guard_infra
    def list_accounts(self) -> list[AccountOut]:
        return self.accounts.list_accounts()

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def activation_url(self, activation_link: str) -> str:
        return f"{self.activation_url_prefix}{activation_link}"

    def _issue(self, account: AccountOut) -> AuthResult:
        """Mint a pair for ``account`` and make its refresh token the live one."""
        claim = IdentityClaim.from_account(account)
        tokens = self.codec.mint(claim)
        self.sessions.put(account.id, tokens.refresh_token)
        return AuthResult(tokens=tokens, user=claim)

    @staticmethod
    def _reject(reason: str) -> Unauthorized:
        log.info("auth.refresh.rejected", extra={"reason": reason})
        return Unauthorized(reason=reason)
