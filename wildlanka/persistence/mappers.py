"""Mappers for converting between database rows and domain models.

Domain models are immutable Pydantic models, so rows are mapped by hand.
"""

from typing import Any, Dict
from uuid import UUID

from wildlanka.domain.model import (
    Account,
    Address,
    AuthMetadata,
    Preferences,
    StaffRecord,
)
from wildlanka.domain.value import AccountId, AccountStatus, Role


def row_to_account(row: Dict[str, Any]) -> Account:
    """Convert database row to Account domain model.

    Args:
        row: Database row as dict

    Returns:
        Account domain model
    """
    return Account(
        id=AccountId(UUID(row["id"]) if isinstance(row["id"], str) else row["id"]),
        subject_id=row["subject_id"],
        email=row["email"],
        name=row["name"],
        picture=row.get("picture"),
        nickname=row.get("nickname"),
        given_name=row.get("given_name"),
        family_name=row.get("family_name"),
        locale=row.get("locale"),
        email_verified=row["email_verified"],
        role=Role(row["role"]),
        auth_metadata=AuthMetadata(
            last_login=row["last_login"],
            login_count=row["login_count"],
            last_ip=row.get("last_ip"),
            user_agent=row.get("user_agent"),
            auth_provider=row["auth_provider"],
        ),
        phone=row.get("phone"),
        address=Address.model_validate(row.get("address") or {}),
        preferences=Preferences.model_validate(row.get("preferences") or {}),
        status=AccountStatus(row["status"]),
        terms_accepted=row["terms_accepted"],
        terms_accepted_date=row.get("terms_accepted_date"),
        privacy_accepted=row["privacy_accepted"],
        privacy_accepted_date=row.get("privacy_accepted_date"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def account_to_dict(account: Account) -> Dict[str, Any]:
    """Convert Account domain model to database dict.

    Args:
        account: Account domain model

    Returns:
        Dict suitable for database insertion/update
    """
    metadata = account.auth_metadata
    return {
        **account.model_dump(
            exclude={"auth_metadata", "address", "preferences", "role", "status"}
        ),
        "role": account.role.value,
        "status": account.status.value,
        "address": account.address.model_dump(mode="json"),
        "preferences": account.preferences.model_dump(mode="json"),
        "last_login": metadata.last_login,
        "login_count": metadata.login_count,
        "last_ip": metadata.last_ip,
        "user_agent": metadata.user_agent,
        "auth_provider": metadata.auth_provider,
    }


def row_to_staff_record(
    collection: str, email_field: str, row: Dict[str, Any]
) -> StaffRecord:
    """Convert a staff table row to a StaffRecord.

    Args:
        collection: Staff collection the row came from
        email_field: Name of the email column in that collection
        row: Database row as dict

    Returns:
        StaffRecord domain model
    """
    data = {key: value for key, value in row.items() if key != email_field}
    return StaffRecord(collection=collection, email=row[email_field], data=data)
