"""Account view returned by the auth use cases.

Keys are camelCase on the wire, matching what the web client has always
consumed.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from wildlanka.domain.model import Account
from wildlanka.domain.value import AccountStatus, Role


class CamelModel(BaseModel):
    """Response model serialised with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AuthMetadataView(CamelModel):
    last_login: datetime
    login_count: int
    last_ip: str | None
    user_agent: str | None
    auth_provider: str


class AddressView(CamelModel):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    postal_code: str | None = None


class NotificationPreferencesView(CamelModel):
    email: bool = True
    sms: bool = False
    push: bool = True


class PreferencesView(CamelModel):
    language: str = "en"
    timezone: str | None = None
    notifications: NotificationPreferencesView = NotificationPreferencesView()


class AccountView(CamelModel):
    """Persisted account fields plus derived profile information."""

    id: str
    subject_id: str
    email: str
    name: str
    picture: str | None
    nickname: str | None
    given_name: str | None
    family_name: str | None
    locale: str | None
    email_verified: bool
    role: Role
    auth_metadata: AuthMetadataView
    phone: str | None
    address: AddressView
    preferences: PreferencesView
    status: AccountStatus
    terms_accepted: bool
    terms_accepted_date: datetime | None
    privacy_accepted: bool
    privacy_accepted_date: datetime | None
    profile_complete: bool
    created_at: datetime
    updated_at: datetime

    # Derived, never stored
    full_name: str
    profile_completion_percentage: int
    is_new_user: bool

    @classmethod
    def from_account(cls, account: Account) -> "AccountView":
        """Build the view of an account."""
        return cls(
            id=str(account.id),
            subject_id=account.subject_id,
            email=account.email,
            name=account.name,
            picture=account.picture,
            nickname=account.nickname,
            given_name=account.given_name,
            family_name=account.family_name,
            locale=account.locale,
            email_verified=account.email_verified,
            role=account.role,
            auth_metadata=AuthMetadataView(**account.auth_metadata.model_dump()),
            phone=account.phone,
            address=AddressView(**account.address.model_dump()),
            preferences=PreferencesView(**account.preferences.model_dump()),
            status=account.status,
            terms_accepted=account.terms_accepted,
            terms_accepted_date=account.terms_accepted_date,
            privacy_accepted=account.privacy_accepted,
            privacy_accepted_date=account.privacy_accepted_date,
            profile_complete=account.profile_complete,
            created_at=account.created_at,
            updated_at=account.updated_at,
            full_name=account.full_name,
            profile_completion_percentage=account.profile_completion_percentage,
            is_new_user=account.is_new,
        )
