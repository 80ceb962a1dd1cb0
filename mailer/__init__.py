"""Outbound email backends."""

from .abstract_mailer import AbstractMailer
from .log_mailer import LogMailer
from .smtp_mailer import SMTPMailer

__all__ = ["AbstractMailer", "LogMailer", "SMTPMailer", "build_mailer"]


def build_mailer(config) -> AbstractMailer:
    """Return the mailer selected by ``MAIL_BACKEND`` in ``config``."""

    backend = (config.get("MAIL_BACKEND") or "log").strip().lower()
    if backend == "smtp":
        return SMTPMailer(
            host=config.get("SMTP_HOST", "localhost"),
            port=int(config.get("SMTP_PORT", 587)),
            sender=config.get("MAIL_SENDER", "no-reply@localhost"),
            username=config.get("SMTP_USERNAME"),
            password=config.get("SMTP_PASSWORD"),
            use_tls=bool(config.get("SMTP_USE_TLS", True)),
            timeout=float(config.get("MAIL_TIMEOUT", 10)),
        )
    if backend == "log":
        return LogMailer(sender=config.get("MAIL_SENDER", "no-reply@localhost"))
    raise ValueError(f"Unknown MAIL_BACKEND: {backend!r}")
