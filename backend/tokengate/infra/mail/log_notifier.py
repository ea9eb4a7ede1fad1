from __future__ import annotations

import logging

from tokengate.services._shared.ports import ActivationNotifier

log = logging.getLogger(__name__)


class LoggingNotifier(ActivationNotifier):
    """Development notifier: writes the activation URL to the log instead of mailing it."""

    def send_activation(self, email: str, activation_url: str) -> None:
        log.info("mail.activation email=%s url=%s", email, activation_url)
