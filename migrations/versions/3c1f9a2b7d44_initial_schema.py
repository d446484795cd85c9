"""initial_schema

Create the account schema for WildLanka:
- Accounts (one per identity provider subject)
- Staff tables, one per role, provisioned by administrators

Revision ID: 3c1f9a2b7d44
Revises:
Create Date: 2026-10-18 10:12:04.518233

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a2b7d44"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Staff table -> name of its email column
STAFF_TABLES = [
    ("admins", "email"),
    ("emergency_officers", "Email"),
    ("call_operators", "email"),
    ("safari_drivers", "email"),
    ("tour_guides", "email"),
    ("vets", "Email"),
    ("wildlife_officers", "Email"),
    ("tourists", "Email"),
]


def upgrade() -> None:
    """Upgrade schema."""
    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE account_role AS ENUM (
                'admin', 'callOperator', 'EmergencyOfficer', 'safariDriver',
                'tourGuide', 'tourist', 'vet', 'WildlifeOfficer'
            );
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE account_status AS ENUM (
                'active', 'inactive', 'suspended', 'pending'
            );
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # ACCOUNTS table
    # ========================================================================
    op.create_table(
        "accounts",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("subject_id", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("picture", sa.Text(), nullable=True),
        sa.Column("nickname", sa.String(255), nullable=True),
        sa.Column("given_name", sa.String(255), nullable=True),
        sa.Column("family_name", sa.String(255), nullable=True),
        sa.Column("locale", sa.String(32), nullable=True),
        sa.Column(
            "email_verified", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column(
            "role",
            postgresql.ENUM(name="account_role", create_type=False),
            nullable=False,
            server_default="tourist",
        ),
        sa.Column("last_login", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("login_count", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("last_ip", sa.String(64), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column(
            "auth_provider", sa.String(32), nullable=False, server_default="auth0"
        ),
        sa.Column("phone", sa.String(64), nullable=True),
        sa.Column(
            "address",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column(
            "preferences",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column(
            "status",
            postgresql.ENUM(name="account_status", create_type=False),
            nullable=False,
            server_default="active",
        ),
        sa.Column(
            "terms_accepted", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column("terms_accepted_date", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "privacy_accepted", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column(
            "privacy_accepted_date", sa.TIMESTAMP(timezone=True), nullable=True
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("subject_id", name="uq_accounts_subject_id"),
        sa.UniqueConstraint("email", name="uq_accounts_email"),
        sa.CheckConstraint("login_count >= 0", name="check_login_count_non_negative"),
    )
    op.create_index("idx_accounts_role", "accounts", ["role"])

    # ========================================================================
    # STAFF tables (email column name differs per table)
    # ========================================================================
    for table_name, email_column in STAFF_TABLES:
        op.create_table(
            table_name,
            sa.Column("id", sa.UUID(), nullable=False),
            sa.Column(email_column, sa.String(255), nullable=False),
            sa.Column("name", sa.String(255), nullable=True),
            sa.Column("phone", sa.String(64), nullable=True),
            sa.Column(
                "details",
                postgresql.JSONB(),
                nullable=False,
                server_default=sa.text("'{}'::jsonb"),
            ),
            sa.Column(
                "created_at",
                sa.TIMESTAMP(timezone=True),
                nullable=False,
                server_default=sa.text("NOW()"),
            ),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint(email_column, name=f"uq_{table_name}_email"),
        )


def downgrade() -> None:
    """Downgrade schema."""
    for table_name, _ in reversed(STAFF_TABLES):
        op.drop_table(table_name)

    op.drop_index("idx_accounts_role", table_name="accounts")
    op.drop_table("accounts")

    op.execute("DROP TYPE IF EXISTS account_status")
    op.execute("DROP TYPE IF EXISTS account_role")
