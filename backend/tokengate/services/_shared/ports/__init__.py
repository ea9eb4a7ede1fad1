"""
tokengate.services._shared.ports
================================

Collection of *ports* (hexagonal interfaces) that define the contracts for
the collaborators of the authentication services.

Modules
-------
- :mod:`credential_hasher`:
    Defines :class:`~.CredentialHasher`: one-way hash + verify for secrets.

- :mod:`token_codec`:
    Defines :class:`~.TokenCodec`: minting and verification of token pairs.

- :mod:`session_store`:
    Defines :class:`~.SessionStore` and :class:`~.InMemorySessionStore`:
    single-active refresh session per account.

- :mod:`notifier`:
    Defines :class:`~.ActivationNotifier` and :class:`~.RecordingNotifier`:
    delivery of the activation link.

Concrete adapters (werkzeug, PyJWT, SQLAlchemy, Redis, SMTP) implement these
interfaces under ``tokengate.infra``.
"""

from __future__ import annotations

from .credential_hasher import CredentialHasher
from .notifier import ActivationNotifier, RecordingNotifier
from .session_store import InMemorySessionStore, SessionStore, token_digest
from .token_codec import TokenCodec

__all__ = [
    "ActivationNotifier",
    "CredentialHasher",
    "InMemorySessionStore",
    "RecordingNotifier",
    "SessionStore",
    "TokenCodec",
    "token_digest",
]
