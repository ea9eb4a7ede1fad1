from __future__ import annotations

from typing import Protocol

from tokengate.services._shared.dto import IdentityClaim, TokenPair


class TokenCodec(Protocol):
    """
    Port for minting and verifying the access/refresh token pair.

    Access and refresh tokens belong to independent signing domains: a token
    of one kind never verifies as the other.
    """

    def mint(self, claim: IdentityClaim) -> TokenPair:
        """Sign a fresh pair for ``claim``. Raises only on signing misconfiguration."""

    def verify_access(self, token: str) -> IdentityClaim | None:
        """Return the embedded claim, or ``None`` for tampered/expired/foreign tokens."""

    def verify_refresh(self, token: str) -> IdentityClaim | None:
        """Return the embedded claim, or ``None`` for tampered/expired/foreign tokens."""
