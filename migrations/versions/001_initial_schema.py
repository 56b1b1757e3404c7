"""Initial database schema

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    # Create trainers table (tenants)
    op.create_table(
        "trainers",
        sa.Column("trainer_id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("business_name", sa.String(255), nullable=False),
        sa.Column("subdomain", sa.String(63), nullable=False),
        sa.Column("bio", sa.Text, nullable=True),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column(
            "timezone", sa.String(64), nullable=False, server_default="America/New_York"
        ),
        sa.Column("profile_photo", sa.String(2048), nullable=True),
        sa.Column("subscription_tier", sa.String(20), nullable=False, server_default="FREE"),
        sa.Column("sms_credits", sa.Integer, nullable=False, server_default="0"),
        sa.Column("email_credits", sa.Integer, nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        *_timestamps(),
        # Final arbiter of subdomain uniqueness; allocation only pre-checks
        sa.UniqueConstraint("subdomain", name="uq_trainers_subdomain"),
    )

    # Create users table
    op.create_table(
        "users",
        sa.Column("user_id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(32), nullable=False, server_default="PRIMARY_TRAINER"),
        sa.Column("trainer_id", postgresql.UUID(as_uuid=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["trainer_id"], ["trainers.trainer_id"], ondelete="CASCADE"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_trainer_id", "users", ["trainer_id"])

    # Create clients table
    op.create_table(
        "clients",
        sa.Column("client_id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("trainer_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("phone", sa.String(32), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["trainer_id"], ["trainers.trainer_id"], ondelete="CASCADE"),
    )
    op.create_index("ix_clients_trainer_id", "clients", ["trainer_id"])

    # Create bookings table
    op.create_table(
        "bookings",
        sa.Column("booking_id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("trainer_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("client_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("duration", sa.Integer, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        *_timestamps(),
        sa.ForeignKeyConstraint(["trainer_id"], ["trainers.trainer_id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["client_id"], ["clients.client_id"], ondelete="CASCADE"),
    )
    op.create_index("ix_bookings_client_id", "bookings", ["client_id"])
    op.create_index("idx_booking_trainer_start", "bookings", ["trainer_id", "start_time"])
    op.create_index("idx_booking_trainer_status", "bookings", ["trainer_id", "status"])


def downgrade() -> None:
    op.drop_table("bookings")
    op.drop_table("clients")
    op.drop_table("users")
    op.drop_table("trainers")
