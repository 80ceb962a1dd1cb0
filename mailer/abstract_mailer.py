"""Mailer abstraction layer."""

from __future__ import annotations

from abc import ABC, abstractmethod


class AbstractMailer(ABC):
    """Interface for outbound email backends."""

    @abstractmethod
    def send(self, to_address: str, subject: str, body: str) -> None:
        """Deliver a plain-text message or raise ``DeliveryError``."""
