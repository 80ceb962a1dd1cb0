"""Create users, verification tokens and pact entries."""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f9c1d7a2b64"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create the initial schema."""

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column(
            "is_verified",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    op.create_table(
        "verification_tokens",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("token", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("user_id", name="uq_verification_tokens_user_id"),
    )

    op.create_table(
        "pact_entries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "owner_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("contact_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("owner_id", "email", name="uq_pact_entries_owner_email"),
        sa.UniqueConstraint(
            "owner_id", "contact_id", name="uq_pact_entries_owner_contact"
        ),
        sa.CheckConstraint("owner_id <> contact_id", name="ck_pact_entries_not_self"),
    )
    op.create_index(
        "ix_pact_entries_owner_id", "pact_entries", ["owner_id"], unique=False
    )


def downgrade() -> None:
    """Drop the initial schema."""

    op.drop_index("ix_pact_entries_owner_id", table_name="pact_entries")
    op.drop_table("pact_entries")
    op.drop_table("verification_tokens")
    op.drop_table("users")
