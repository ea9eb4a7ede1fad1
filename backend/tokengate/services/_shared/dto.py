# comments in English; reST docstrings strict
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any


@dataclass(frozen=True, slots=True)
class IdentityClaim:
    """
    Minimal identity projection embedded in every signed token.

    Derived from an account on each mint; never persisted on its own.

    :param id: Account identifier.
    :type id: int
    :param email: Normalized account email.
    :type email: str
    :param is_activated: Activation flag at mint time.
    :type is_activated: bool
    """

    id: int
    email: str
    is_activated: bool

    @classmethod
    def from_account(cls, account: Any) -> IdentityClaim:
        """Project an account-like object (ORM row or DTO) into a claim."""
        return cls(id=int(account.id), email=account.email, is_activated=bool(account.is_activated))

    def as_dict(self) -> dict[str, Any]:
        return {"id": self.id, "email": self.email, "is_activated": self.is_activated}


@dataclass(frozen=True, slots=True)
class TokenPair:
    """
    Access/refresh token pair minted together from one identity claim.

    :param access_token: Short-lived access JWT.
    :type access_token: str
    :param refresh_token: Long-lived refresh JWT.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class TokenCodecConfig:
    """
    Token signing configuration.

    :param access_secret: HMAC key of the access-token domain.
    :type access_secret: str
    :param refresh_secret: HMAC key of the refresh-token domain.
    :type refresh_secret: str
    :param access_ttl: Access token lifetime.
    :type access_ttl: timedelta
    :param refresh_ttl: Refresh token lifetime.
    :type refresh_ttl: timedelta
    :param algorithm: JWS algorithm.
    :type algorithm: str
    :param issuer: Optional ``iss`` claim, validated on decode when set.
    :type issuer: str | None
    """

    access_secret: str
    refresh_secret: str
    access_ttl: timedelta = timedelta(minutes=30)
    refresh_ttl: timedelta = timedelta(days=30)
    algorithm: str = "HS256"
    issuer: str | None = None


@dataclass(frozen=True, slots=True)
class SessionRecord:
    """
    Stored association between an account and its current refresh token.

    :param account_id: Owner account.
    :type account_id: int
    :param refresh_token: The refresh token value the record was looked up by.
    :type refresh_token: str
    """

    account_id: int
    refresh_token: str
