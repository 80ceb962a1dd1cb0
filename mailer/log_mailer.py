"""Mailer that writes messages to the application log."""

from __future__ import annotations

import logging

from .abstract_mailer import AbstractMailer

logger = logging.getLogger(__name__)


class LogMailer(AbstractMailer):
    """Log outgoing mail instead of delivering it. Used for local development."""

    def __init__(self, sender: str = "no-reply@localhost"):
        self.sender = sender

    def send(self, to_address: str, subject: str, body: str) -> None:
        logger.info(
            "Email from %s to %s with subject %r:\n%s",
            self.sender,
            to_address,
            subject,
            body,
        )
