from __future__ import annotations

from typing import Protocol


class CredentialHasher(Protocol):
    """
    Port for a deliberately slow, salted one-way hash of account secrets.

    Implementations MUST never return the plaintext and MUST produce a
    different digest for the same input on every call (salt).
    """

    def hash(self, plaintext: str) -> str: ...

    def verify(self, plaintext: str, hashed: str) -> bool: ...
