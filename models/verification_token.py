"""Email verification token model."""

import secrets
from datetime import datetime

from . import db


TOKEN_BYTES = 32


def generate_token_value() -> str:
    """Return 256 random bits as 64 lowercase hex characters."""

    return secrets.token_hex(TOKEN_BYTES)


class VerificationToken(db.Model):
    """Single-use secret mailed to a user to prove control of their address.

    The unique index on ``user_id`` keeps at most one live token per user.
    Rows are created and deleted, never updated.
    """

    __tablename__ = "verification_tokens"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    token = db.Column(db.String(64), nullable=False, default=generate_token_value)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
