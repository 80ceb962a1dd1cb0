"""SMTP mail delivery."""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage

from services.errors import DeliveryError

from .abstract_mailer import AbstractMailer

logger = logging.getLogger(__name__)


class SMTPMailer(AbstractMailer):
    """Deliver plain-text mail through an SMTP relay."""

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def _build_message(self, to_address: str, subject: str, body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to_address
        message["Subject"] = subject
        message.set_content(body)
        return message

    def send(self, to_address: str, subject: str, body: str) -> None:
        """Send the message, wrapping header and transport failures in ``DeliveryError``."""

        try:
            message = self._build_message(to_address, subject, body)
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username:
                    smtp.login(self.username, self.password or "")
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError, ValueError) as exc:
            logger.warning("Email to %r not sent: %s", to_address, exc)
            raise DeliveryError() from exc
        logger.info("Email sent to %s", to_address)
