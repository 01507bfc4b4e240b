"""Create the sign-in tables.

Revision ID: 0001
Revises:
Create Date: 2026-10-17
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

from benefits_sso.adapters.sqlalchemy.mappings import UTCDateTime

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "sessions",
        sa.Column("token", sa.String(64), nullable=False),
        sa.Column("principal_id", sa.String(), nullable=False),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.PrimaryKeyConstraint("token", name="pk_sessions"),
    )
    op.create_index("ix_sessions_principal_id", "sessions", ["principal_id"])

    op.create_table(
        "users",
        sa.Column("principal_id", sa.String(), nullable=False),
        sa.Column("last_signed_in", UTCDateTime(), nullable=True),
        sa.Column("mhv_last_signed_in", UTCDateTime(), nullable=True),
        sa.PrimaryKeyConstraint("principal_id", name="pk_users"),
    )

    op.create_table(
        "user_identities",
        sa.Column("principal_id", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("authn_context", sa.String(), nullable=False),
        sa.Column("loa_current", sa.Integer(), nullable=False),
        sa.Column("loa_highest", sa.Integer(), nullable=False),
        sa.Column("multifactor", sa.Boolean(), nullable=False),
        sa.Column("account_type", sa.String(16), nullable=True),
        sa.Column("mhv_correlation_id", sa.String(), nullable=True),
        sa.Column("mhv_icn", sa.String(), nullable=True),
        sa.Column("dslogon_edipi", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("principal_id", name="pk_user_identities"),
    )


def downgrade() -> None:
    op.drop_table("user_identities")
    op.drop_table("users")
    op.drop_index("ix_sessions_principal_id", table_name="sessions")
    op.drop_table("sessions")
