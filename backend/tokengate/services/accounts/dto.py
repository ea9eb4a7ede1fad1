# tokengate/services/accounts/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class AccountOut:
    """
    Read projection of an account, detached from the ORM session.

    :param id: Account identifier.
    :type id: int
    :param email: Normalized email.
    :type email: str
    :param is_activated: Activation flag.
    :type is_activated: bool
    :param activation_link: Opaque activation link (UUID4 string).
    :type activation_link: str
    :param created_at: Creation timestamp (UTC).
    :type created_at: datetime | None
    """

    id: int
    email: str
    is_activated: bool
    activation_link: str
    created_at: datetime | None = None

    @classmethod
    def from_model(cls, account) -> AccountOut:
        return cls(
            id=account.id,
            email=account.email,
            is_activated=bool(account.is_activated),
            activation_link=account.activation_link,
            created_at=account.created_at,
        )
