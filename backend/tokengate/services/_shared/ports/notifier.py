from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


class ActivationNotifier(Protocol):
    """
    Port for delivering the activation link to the account's email address.

    Implementations raise :class:`~tokengate.services._shared.errors.NotificationError`
    when delivery fails; callers treat that as non-fatal.
    """

    def send_activation(self, email: str, activation_url: str) -> None: ...


@dataclass(slots=True)
class RecordingNotifier(ActivationNotifier):
    """In-memory notifier that records every activation message (unit tests)."""

    sent: list[tuple[str, str]] = field(default_factory=list)

    def send_activation(self, email: str, activation_url: str) -> None:
        self.sent.append((email, activation_url))
