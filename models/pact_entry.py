"""Pact entry model."""

from datetime import datetime

from . import db


class PactEntry(db.Model):
    """Snapshot of another user taken when they were added to a pact.

    ``name`` and ``email`` are copied from the contact at insertion time and
    are not kept in sync afterwards.
    """

    __tablename__ = "pact_entries"
    __table_args__ = (
        db.UniqueConstraint("owner_id", "email", name="uq_pact_entries_owner_email"),
        db.UniqueConstraint(
            "owner_id", "contact_id", name="uq_pact_entries_owner_contact"
        ),
        db.CheckConstraint("owner_id <> contact_id", name="ck_pact_entries_not_self"),
    )

    id = db.Column(db.Integer, primary_key=True)
    owner_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    contact_id = db.Column(db.Integer, nullable=False)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    owner = db.relationship("User", foreign_keys=[owner_id], back_populates="pact")

    def to_dict(self) -> dict:
        """Serialize the contact snapshot."""

        return {"id": self.contact_id, "name": self.name, "email": self.email}
