"""SQLAlchemy table definitions for WildLanka accounts.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Enum,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

from wildlanka.domain.service.role_resolver import STAFF_COLLECTIONS
from wildlanka.domain.value import AccountStatus, Role

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# ACCOUNTS TABLE
# ============================================================================
accounts_table = Table(
    "accounts",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("subject_id", String(255), nullable=False, unique=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("name", String(255), nullable=False),
    Column("picture", Text, nullable=True),
    Column("nickname", String(255), nullable=True),
    Column("given_name", String(255), nullable=True),
    Column("family_name", String(255), nullable=True),
    Column("locale", String(32), nullable=True),
    Column("email_verified", Boolean, nullable=False, server_default="false"),
    Column(
        "role",
        Enum(
            *[role.value for role in Role],
            name="account_role",
            create_type=False,
        ),
        nullable=False,
        server_default=Role.TOURIST.value,
    ),
    # Login bookkeeping, flattened
    Column("last_login", TIMESTAMP(timezone=True), nullable=False),
    Column("login_count", Integer, nullable=False, server_default="1"),
    Column("last_ip", String(64), nullable=True),
    Column("user_agent", Text, nullable=True),
    Column("auth_provider", String(32), nullable=False, server_default="auth0"),
    # Self-service profile
    Column("phone", String(64), nullable=True),
    Column("address", JSONB, nullable=False, server_default="{}"),
    Column("preferences", JSONB, nullable=False, server_default="{}"),
    Column(
        "status",
        Enum(
            *[status.value for status in AccountStatus],
            name="account_status",
            create_type=False,
        ),
        nullable=False,
        server_default=AccountStatus.ACTIVE.value,
    ),
    Column("terms_accepted", Boolean, nullable=False, server_default="false"),
    Column("terms_accepted_date", TIMESTAMP(timezone=True), nullable=True),
    Column("privacy_accepted", Boolean, nullable=False, server_default="false"),
    Column("privacy_accepted_date", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_accounts_role", accounts_table.c.role)


# ============================================================================
# STAFF TABLES (one per role, provisioned by administrators)
# ============================================================================
def _staff_table(name: str, email_column: str) -> Table:
    """Staff collection table; the email column keeps its historical name."""
    return Table(
        name,
        metadata,
        Column("id", UUID(as_uuid=True), primary_key=True),
        Column(email_column, String(255), nullable=False, unique=True),
        Column("name", String(255), nullable=True),
        Column("phone", String(64), nullable=True),
        Column("details", JSONB, nullable=False, server_default="{}"),
        Column(
            "created_at",
            TIMESTAMP(timezone=True),
            nullable=False,
            server_default="NOW()",
        ),
    )


staff_tables: dict[str, Table] = {
    staff.collection: _staff_table(staff.collection, staff.email_field)
    for staff in STAFF_COLLECTIONS
}
