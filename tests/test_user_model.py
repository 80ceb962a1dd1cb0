"""Tests for the User, PactEntry and VerificationToken models."""

import re

import pytest
from sqlalchemy.exc import IntegrityError

from models import db
from models.pact_entry import PactEntry
from models.user import User
from models.verification_token import VerificationToken, generate_token_value


def _user(email: str, name: str = "Alice") -> User:
    user = User(name=name, email=email)
    user.set_password("pw123456")
    db.session.add(user)
    db.session.commit()
    return user


def test_password_helpers_use_salted_bcrypt(app_context):
    """Hashes carry the cost factor and differ per user for the same password."""

    first = _user("a@x.com")
    second = _user("b@x.com", name="Bob")

    assert first.password_hash.startswith("$2b$10$")
    assert first.password_hash != second.password_hash
    assert first.check_password("pw123456") is True
    assert first.check_password("wrong") is False
    assert first.is_verified is False


def test_overlong_password_never_matches(app_context):
    user = _user("long@x.com")

    assert user.check_password("x" * 100) is False


def test_email_is_unique(app_context):
    _user("dup@x.com")

    db.session.add(User(name="Other", email="dup@x.com", password_hash="hash"))
    with pytest.raises(IntegrityError):
        db.session.commit()
    db.session.rollback()


def test_email_uniqueness_is_case_sensitive(app_context):
    _user("case@x.com")
    other = _user("CASE@x.com", name="Upper")

    assert other.id is not None


def test_generated_token_is_64_hex_chars():
    token = generate_token_value()

    assert re.fullmatch(r"[0-9a-f]{64}", token)
    assert token != generate_token_value()


def test_single_token_per_user(app_context):
    user = _user("tok@x.com")
    db.session.add(VerificationToken(user_id=user.id))
    db.session.commit()

    db.session.add(VerificationToken(user_id=user.id))
    with pytest.raises(IntegrityError):
        db.session.commit()
    db.session.rollback()


def test_pact_entry_unique_by_email(app_context):
    owner = _user("owner@x.com")
    contact = _user("contact@x.com", name="Carol")
    db.session.add(
        PactEntry(owner_id=owner.id, contact_id=contact.id, name="Carol", email=contact.email)
    )
    db.session.commit()

    db.session.add(
        PactEntry(owner_id=owner.id, contact_id=contact.id, name="Carol", email=contact.email)
    )
    with pytest.raises(IntegrityError):
        db.session.commit()
    db.session.rollback()


def test_pact_entry_cannot_reference_owner(app_context):
    owner = _user("self@x.com")

    db.session.add(
        PactEntry(owner_id=owner.id, contact_id=owner.id, name="Alice", email=owner.email)
    )
    with pytest.raises(IntegrityError):
        db.session.commit()
    db.session.rollback()


def test_pact_entry_is_a_snapshot(app_context):
    owner = _user("snap-owner@x.com")
    contact = _user("snap@x.com", name="Dave")
    db.session.add(
        PactEntry(owner_id=owner.id, contact_id=contact.id, name=contact.name, email=contact.email)
    )
    db.session.commit()

    contact.name = "David"
    db.session.commit()
    db.session.refresh(owner)

    assert owner.pact[0].to_dict() == {
        "id": contact.id,
        "name": "Dave",
        "email": "snap@x.com",
    }
