# tokengate/infra/jwt/pyjwt_token_codec.py
from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from tokengate.services._shared.dto import IdentityClaim, TokenCodecConfig, TokenPair
from tokengate.services._shared.ports import TokenCodec

log = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"

_REQUIRED_CLAIMS = ["exp", "iat", "sub", "type", "jti"]


class JWTTokenCodec(TokenCodec):
    """
    HS256 token codec built on PyJWT.

    Access and refresh tokens are signed with two distinct secrets and carry
    a ``type`` claim, so neither kind verifies as the other. Each token gets
    a random ``jti``.

    :param cfg: Secrets, lifetimes, algorithm and optional issuer.
    :type cfg: TokenCodecConfig
    :raises ValueError: On identical secrets, empty secrets or non-positive TTLs.
    """

    def __init__(self, cfg: TokenCodecConfig) -> None:
        if not cfg.access_secret or not cfg.refresh_secret:
            raise ValueError("Token secrets must be non-empty.")
        if cfg.access_secret == cfg.refresh_secret:
            raise ValueError("Access and refresh secrets must differ.")
        if cfg.access_ttl <= timedelta(0) or cfg.refresh_ttl <= timedelta(0):
            raise ValueError("Token lifetimes must be positive.")
        self.cfg = cfg

    # -------------------- minting --------------------

    def mint(self, claim: IdentityClaim) -> TokenPair:
        now = datetime.now(UTC)
        return TokenPair(
            access_token=self._encode(
                claim, ACCESS_TOKEN_TYPE, self.cfg.access_secret, now, self.cfg.access_ttl
            ),
            refresh_token=self._encode(
                claim, REFRESH_TOKEN_TYPE, self.cfg.refresh_secret, now, self.cfg.refresh_ttl
            ),
        )

    def _encode(
        self,
        claim: IdentityClaim,
        token_type: str,
        secret: str,
        now: datetime,
        ttl: timedelta,
    ) -> str:
        payload: dict[str, Any] = {
            "sub": str(claim.id),
            "email": claim.email,
            "is_activated": claim.is_activated,
            "type": token_type,
            "jti": uuid.uuid4().hex,
            "iat": now,
            "nbf": now,
            "exp": now + ttl,
        }
        if self.cfg.issuer:
            payload["iss"] = self.cfg.issuer
        return jwt.encode(payload, secret, algorithm=self.cfg.algorithm)

    # -------------------- verification --------------------

    def verify_access(self, token: str) -> IdentityClaim | None:
        return self._decode(token, ACCESS_TOKEN_TYPE, self.cfg.access_secret)

    def verify_refresh(self, token: str) -> IdentityClaim | None:
        return self._decode(token, REFRESH_TOKEN_TYPE, self.cfg.refresh_secret)

    def _decode(self, token: str, token_type: str, secret: str) -> IdentityClaim | None:
        """Return the embedded claim, or ``None`` whenever the token is unusable."""
        if not token or not isinstance(token, str):
            return None
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.cfg.algorithm],
                issuer=self.cfg.issuer,
                options={"require": _REQUIRED_CLAIMS},
            )
        except jwt.PyJWTError as exc:
            log.debug("jwt.rejected", extra={"reason": type(exc).__name__})
            return None

        if payload.get("type") != token_type:
            log.debug("jwt.rejected", extra={"reason": "wrong_type"})
            return None
        try:
            return IdentityClaim(
                id=int(payload["sub"]),
                email=str(payload["email"]),
                is_activated=bool(payload["is_activated"]),
            )
        except (KeyError, TypeError, ValueError):
            log.debug("jwt.rejected", extra={"reason": "malformed_claims"})
            return None
