"""Tests for the SMTP and logging activation notifiers."""

from __future__ import annotations

import logging
import smtplib

import pytest

from tokengate.infra.mail import LoggingNotifier, SMTPNotifier
from tokengate.services._shared.errors import NotificationError


class FakeSMTP:
    """Minimal stand-in for :class:`smtplib.SMTP` recording the exchange."""

    instances: list[FakeSMTP] = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.started_tls = False
        self.logged_in = None
        self.messages = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.started_tls = True

    def login(self, user, password):
        self.logged_in = (user, password)

    def send_message(self, message):
        self.messages.append(message)


@pytest.fixture(autouse=True)
def _reset_fake():
    FakeSMTP.instances = []
    yield


def test_smtp_notifier_sends_link(monkeypatch):
    monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)
    notifier = SMTPNotifier(
        host="mail.local",
        port=2525,
        sender="no-reply@example.com",
        username="mailer",
        password="pw",
        use_tls=True,
    )

    notifier.send_activation("to@example.com", "http://x/activate/abc")

    (conn,) = FakeSMTP.instances
    assert (conn.host, conn.port) == ("mail.local", 2525)
    assert conn.started_tls is True
    assert conn.logged_in == ("mailer", "pw")
    (message,) = conn.messages
    assert message["To"] == "to@example.com"
    assert message["From"] == "no-reply@example.com"
    assert "http://x/activate/abc" in message.get_body(preferencelist=("plain",)).get_content()


def test_smtp_failure_becomes_notification_error(monkeypatch):
    class Refusing(FakeSMTP):
        def send_message(self, message):
            raise smtplib.SMTPRecipientsRefused({"to@example.com": (550, b"no")})

    monkeypatch.setattr(smtplib, "SMTP", Refusing)
    notifier = SMTPNotifier(host="mail.local", port=25, sender="s@example.com")

    with pytest.raises(NotificationError):
        notifier.send_activation("to@example.com", "http://x/activate/abc")


def test_unreachable_server_becomes_notification_error(monkeypatch):
    def _refuse(*args, **kwargs):
        raise ConnectionRefusedError("nope")

    monkeypatch.setattr(smtplib, "SMTP", _refuse)
    notifier = SMTPNotifier(host="mail.local", port=25, sender="s@example.com")

    with pytest.raises(NotificationError):
        notifier.send_activation("to@example.com", "http://x/activate/abc")


def test_logging_notifier_logs_url(caplog):
    with caplog.at_level(logging.INFO, logger="tokengate.infra.mail.log_notifier"):
        LoggingNotifier().send_activation("to@example.com", "http://x/activate/abc")
    assert "http://x/activate/abc" in caplog.text
