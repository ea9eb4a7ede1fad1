# tokengate/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass

from tokengate.services._shared.dto import IdentityClaim, TokenPair


@dataclass(frozen=True, slots=True)
class AuthResult:
    """
    Outcome of a workflow that issues tokens.

    :param tokens: Freshly minted access/refresh pair.
    :type tokens: TokenPair
    :param user: Identity projection of the authenticated account.
    :type user: IdentityClaim
    :param warnings: Non-fatal problems met along the way
        (e.g. ``"activation_mail_not_sent"``).
    :type warnings: tuple[str, ...]
    """

    tokens: TokenPair
    user: IdentityClaim
    warnings: tuple[str, ...] = ()

    def as_dict(self) -> dict:
        return {
            "access_token": self.tokens.access_token,
            "refresh_token": self.tokens.refresh_token,
            "user": self.user.as_dict(),
        }
