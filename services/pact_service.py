"""
Pact service: the caller's list of contacts
"""
from __future__ import annotations

import logging

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.pact_entry import PactEntry
from models.user import User

from .errors import ConflictError, NotFoundError, SelfReferenceError, ValidationError

logger = logging.getLogger(__name__)


class PactService:
    """Reads and mutates the pact of an already authenticated caller."""

    def __init__(self, db: Session):
        self.db = db

    def get_pact(self, caller_id: int | str) -> list[PactEntry]:
        """
        Return the caller's pact in insertion order

        Raises:
            NotFoundError: If the caller no longer exists
        """
        caller = self._require_caller(caller_id)
        return self._entries(caller.id)

    def add_to_pact(self, caller_id: int | str, target_email: str) -> tuple[User, list[PactEntry]]:
        """
        Append a snapshot of the user registered under ``target_email``

        Returns:
            The added user and the updated pact

        Raises:
            ValidationError: If no email was given
            NotFoundError: If the caller or the target does not exist
            SelfReferenceError: If the target is the caller
            ConflictError: If the pact already holds that email
        """
        target_email = (target_email or "").strip()
        if not target_email:
            raise ValidationError("Please enter email.")

        caller = self._require_caller(caller_id)
        target = self.db.query(User).filter_by(email=target_email).first()
        if target is None:
            raise NotFoundError("User not found.")
        if target.id == caller.id:
            raise SelfReferenceError("Invalid email.")

        if self._contains_email(caller.id, target.email):
            raise ConflictError("User is already in pact.")

        self.db.add(
            PactEntry(
                owner_id=caller.id,
                contact_id=target.id,
                name=target.name,
                email=target.email,
            )
        )
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictError("User is already in pact.") from exc

        logger.info("User %s added user %s to their pact", caller.id, target.id)
        return target, self._entries(caller.id)

    def remove_from_pact(self, caller_id: int | str, target_email: str) -> None:
        """
        Remove the entry for the user registered under ``target_email``

        Raises:
            NotFoundError: If no user has that email or it is not in the pact
        """
        owner_id = self._coerce_id(caller_id)
        target = self.db.query(User).filter_by(email=(target_email or "").strip()).first()
        if target is None:
            raise NotFoundError("User not found.")

        result = self.db.execute(
            delete(PactEntry).where(
                PactEntry.owner_id == owner_id,
                PactEntry.contact_id == target.id,
            )
        )
        if result.rowcount == 0:
            self.db.rollback()
            raise NotFoundError("User not in pact.")

        self.db.commit()
        logger.info("User %s removed user %s from their pact", owner_id, target.id)

    def _contains_email(self, owner_id: int, email: str) -> bool:
        return (
            self.db.query(PactEntry.id).filter_by(owner_id=owner_id, email=email).first()
            is not None
        )

    def _entries(self, owner_id: int) -> list[PactEntry]:
        return (
            self.db.query(PactEntry)
            .filter_by(owner_id=owner_id)
            .order_by(PactEntry.id.asc())
            .all()
        )

    def _require_caller(self, caller_id: int | str) -> User:
        owner_id = self._coerce_id(caller_id)
        caller = self.db.get(User, owner_id) if owner_id is not None else None
        if caller is None:
            raise NotFoundError("User not found.")
        return caller

    @staticmethod
    def _coerce_id(caller_id: int | str) -> int | None:
        try:
            return int(caller_id)
        except (TypeError, ValueError):
            return None
