"""SMTP delivery of activation mails."""

from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage

from tokengate.services._shared.errors import NotificationError
from tokengate.services._shared.ports import ActivationNotifier

log = logging.getLogger(__name__)

SUBJECT_TEMPLATE = "Account activation on {host}"

TEXT_TEMPLATE = """\
Hello,

To activate your account, follow the link below:

{url}

If you did not sign up, you can ignore this message.
"""

HTML_TEMPLATE = """\
<div>
  <h1>To activate your account, follow the link</h1>
  <a href="{url}">{url}</a>
</div>
"""


@dataclass(slots=True)
class SMTPNotifier(ActivationNotifier):
    """
    Sends the activation link over SMTP, one connection per message.

    :param host: SMTP server host.
    :param port: SMTP server port.
    :param sender: ``From`` address.
    :param site: Public site name shown in the subject line.
    :param username: Optional login user.
    :param password: Optional login password.
    :param use_tls: Issue ``STARTTLS`` before logging in.
    :param timeout: Socket timeout in seconds.
    """

    host: str
    port: int
    sender: str
    site: str = "tokengate"
    username: str = ""
    password: str = ""
    use_tls: bool = False
    timeout: float = 10.0

    def build_message(self, email: str, activation_url: str) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = SUBJECT_TEMPLATE.format(host=self.site)
        message["From"] = self.sender
        message["To"] = email
        message.set_content(TEXT_TEMPLATE.format(url=activation_url))
        message.add_alternative(HTML_TEMPLATE.format(url=activation_url), subtype="html")
        return message

    def send_activation(self, email: str, activation_url: str) -> None:
        """
        Deliver the activation mail.

        :raises NotificationError: When the SMTP exchange fails.
        """
        message = self.build_message(email, activation_url)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as conn:
                if self.use_tls:
                    conn.starttls()
                if self.username:
                    conn.login(self.username, self.password)
                conn.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationError(f"Could not deliver activation mail: {exc}") from exc
        log.info("mail.activation.sent", extra={"endpoint": "smtp"})
