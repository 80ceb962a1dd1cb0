"""
Authentication service: registration, login and email verification
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from flask_jwt_extended import create_access_token
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.user import MAX_PASSWORD_BYTES, User, check_password_without_user
from models.verification_token import VerificationToken, generate_token_value

from .errors import ConflictError, DeliveryError, NotFoundError, ValidationError

if TYPE_CHECKING:
    from mailer.abstract_mailer import AbstractMailer

logger = logging.getLogger(__name__)

VERIFY_EMAIL_SUBJECT = "Verify Email"


class LoginStatus(str, Enum):
    AUTHENTICATED = "authenticated"
    UNVERIFIED = "unverified"
    INVALID = "invalid"


class VerificationStatus(str, Enum):
    VERIFIED = "verified"
    ALREADY_VERIFIED = "already_verified"
    INVALID_LINK = "invalid_link"


@dataclass(frozen=True)
class RegistrationResult:
    user: User
    access_token: str
    verification_email_sent: bool


@dataclass(frozen=True)
class LoginResult:
    status: LoginStatus
    user: User | None = None
    access_token: str | None = None


def _clean(value: str | None) -> str:
    return (value or "").strip()


class AuthService:
    """Service for registration, login and email verification.

    The database session and the mailer are supplied by the caller; the
    service keeps no state between calls.
    """

    def __init__(self, db: Session, mailer: AbstractMailer, verify_base_url: str):
        self.db = db
        self.mailer = mailer
        self.verify_base_url = verify_base_url

    def register(self, name: str, email: str, password: str) -> RegistrationResult:
        """
        Register a new, unverified user and mail them a verification link

        Args:
            name: Display name
            email: Email address, unique across users
            password: Plain text password

        Returns:
            RegistrationResult with the user, a bearer token and whether the
            verification email went out

        Raises:
            ValidationError: If a field is empty or the password is too long
            ConflictError: If the email is already registered
        """
        name = _clean(name)
        email = _clean(email)
        password = password or ""
        if not name or not email or not password:
            raise ValidationError("Please enter all fields.")
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes long."
            )

        if self._find_by_email(email) is not None:
            raise ConflictError("User already exists.")

        user = User(name=name, email=email, is_verified=False)
        user.set_password(password)
        self.db.add(user)
        try:
            self.db.flush()
        except IntegrityError as exc:
            # Lost a race against another registration for the same email.
            self.db.rollback()
            raise ConflictError("User already exists.") from exc

        token = VerificationToken(user_id=user.id, token=generate_token_value())
        self.db.add(token)
        self.db.commit()
        logger.info("Registered new user %s", user.id)

        email_sent = True
        try:
            self._send_verification_email(user, token)
        except DeliveryError:
            # Drop the token so the next unverified login issues and mails a new one.
            logger.warning("Verification email for user %s not sent", user.id)
            self.db.delete(token)
            self.db.commit()
            email_sent = False

        return RegistrationResult(
            user=user,
            access_token=self.issue_access_token(user),
            verification_email_sent=email_sent,
        )

    def login(self, email: str, password: str) -> LoginResult:
        """
        Check credentials and report the outcome

        Unknown email and wrong password both yield ``INVALID``. Unverified
        users get ``UNVERIFIED`` without their password being checked, and a
        verification email is sent if they have no live token.

        Raises:
            DeliveryError: If a new verification email could not be sent
        """
        user = self._find_by_email(_clean(email))
        if user is None:
            check_password_without_user(password or "")
            logger.info("Login failed: unknown email")
            return LoginResult(LoginStatus.INVALID)

        if not user.is_verified:
            self._ensure_verification_token(user)
            return LoginResult(LoginStatus.UNVERIFIED, user=user)

        if not user.check_password(password or ""):
            logger.info("Login failed: invalid password for user %s", user.id)
            return LoginResult(LoginStatus.INVALID)

        return LoginResult(
            LoginStatus.AUTHENTICATED,
            user=user,
            access_token=self.issue_access_token(user),
        )

    def verify_email(self, user_id: int | str, token: str) -> VerificationStatus:
        """
        Redeem a verification link

        Checks run in a fixed order: the user exists, the user is not yet
        verified, the token matches. Only then is the user marked verified
        and the token deleted.
        """
        user = self._get_user(user_id)
        if user is None:
            return VerificationStatus.INVALID_LINK
        if user.is_verified:
            return VerificationStatus.ALREADY_VERIFIED

        record = self.db.query(VerificationToken).filter_by(
            user_id=user.id, token=token or ""
        ).first()
        if record is None:
            return VerificationStatus.INVALID_LINK

        user.mark_verified()
        self.db.delete(record)
        self.db.commit()
        logger.info("Email verified for user %s", user.id)
        return VerificationStatus.VERIFIED

    def get_profile(self, user_id: int | str) -> User:
        """Return the user behind a bearer token."""
        user = self._get_user(user_id)
        if user is None:
            raise NotFoundError("User not found.")
        return user

    def issue_access_token(self, user: User) -> str:
        """Sign a bearer token whose identity is the user id."""
        return create_access_token(identity=str(user.id))

    def verification_link(self, user: User, token: VerificationToken) -> str:
        return f"{self.verify_base_url.rstrip('/')}/users/{user.id}/verify/{token.token}"

    def _send_verification_email(self, user: User, token: VerificationToken) -> None:
        self.mailer.send(user.email, VERIFY_EMAIL_SUBJECT, self.verification_link(user, token))

    def _ensure_verification_token(self, user: User) -> None:
        """Create and mail a token unless the user already holds one."""
        if self._has_token(user.id):
            return

        token = VerificationToken(user_id=user.id, token=generate_token_value())
        self.db.add(token)
        try:
            self.db.flush()
        except IntegrityError:
            # A concurrent login already issued one.
            self.db.rollback()
            return

        try:
            self._send_verification_email(user, token)
        except DeliveryError:
            self.db.rollback()
            raise
        self.db.commit()
        logger.info("Issued new verification token for user %s", user.id)

    def _has_token(self, user_id: int) -> bool:
        return self.db.query(VerificationToken.id).filter_by(user_id=user_id).first() is not None

    def _find_by_email(self, email: str) -> User | None:
        if not email:
            return None
        return self.db.query(User).filter_by(email=email).first()

    def _get_user(self, user_id: int | str) -> User | None:
        try:
            user_id = int(user_id)
        except (TypeError, ValueError):
            return None
        return self.db.get(User, user_id)
