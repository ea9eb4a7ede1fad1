# comments in English; reST docstrings
from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from tokengate.services._shared.ports import CredentialHasher


@dataclass(frozen=True, slots=True)
class WerkzeugCredentialHasher(CredentialHasher):
    """
    Salted one-way hashing through :mod:`werkzeug.security`.

    :param method: Werkzeug method string, e.g. ``"scrypt"`` or
        ``"pbkdf2:sha256:600000"``.
    :param salt_length: Salt size in characters.
    """

    method: str = "scrypt"
    salt_length: int = 16

    def hash(self, plaintext: str) -> str:
        return generate_password_hash(plaintext, method=self.method, salt_length=self.salt_length)

    def verify(self, plaintext: str, hashed: str) -> bool:
        if not hashed:
            return False
        return check_password_hash(hashed, plaintext)
