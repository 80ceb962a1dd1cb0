"""User model definition."""

from __future__ import annotations

from datetime import datetime

import bcrypt

from . import db


BCRYPT_ROUNDS = 10
# bcrypt only consumes the first 72 bytes of its input.
MAX_PASSWORD_BYTES = 72


class User(db.Model):
    """Represents a registered user and owns their pact."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    is_verified = db.Column(
        db.Boolean,
        nullable=False,
        default=False,
        server_default=db.false(),
    )
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    pact = db.relationship(
        "PactEntry",
        foreign_keys="PactEntry.owner_id",
        back_populates="owner",
        order_by="PactEntry.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def set_password(self, password: str) -> None:
        """Hash and store the password with a fresh salt."""

        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        self.password_hash = bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def check_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""

        candidate = password.encode("utf-8")
        if len(candidate) > MAX_PASSWORD_BYTES:
            return False
        return bcrypt.checkpw(candidate, self.password_hash.encode("utf-8"))

    def mark_verified(self) -> None:
        self.is_verified = True

    def to_profile(self) -> dict:
        """Public profile fields."""

        return {"id": self.id, "name": self.name, "email": self.email}

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.email}>"


_dummy_hash: bytes | None = None


def check_password_without_user(password: str) -> bool:
    """Spend the same bcrypt work as ``User.check_password`` and return False.

    Used when no account matches, so a failed login takes as long whether or
    not the email is registered.
    """

    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = bcrypt.hashpw(b"unused", bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    bcrypt.checkpw(password.encode("utf-8")[:MAX_PASSWORD_BYTES], _dummy_hash)
    return False
