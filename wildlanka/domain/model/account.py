"""Account aggregate root.

One account exists per identity provider subject. The account is created on
the first successful login and refreshed from the provider on every later
login; its role is decided once, at creation.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from wildlanka.domain.model.common import DomainModel
from wildlanka.domain.value import AccountId, AccountStatus, Role

PROFILE_COMPLETE_THRESHOLD = 80


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Address(DomainModel):
    """Postal address."""

    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None


class NotificationPreferences(DomainModel):
    """Notification channels the account holder opted into."""

    email: bool = True
    sms: bool = False
    push: bool = True


class Preferences(DomainModel):
    """Account holder preferences."""

    language: str = "en"
    timezone: Optional[str] = None
    notifications: NotificationPreferences = NotificationPreferences()


class AuthMetadata(DomainModel):
    """Login bookkeeping, written only by the login flow."""

    last_login: datetime = Field(default_factory=utc_now)
    login_count: int = Field(default=1, ge=0)
    last_ip: Optional[str] = None
    user_agent: Optional[str] = None
    auth_provider: str = "auth0"


class Account(DomainModel):
    """Account aggregate root."""

    id: AccountId
    subject_id: str  # Identity provider subject, immutable once set
    email: str
    name: str

    # Profile data mirrored from the identity provider
    picture: Optional[str] = None
    nickname: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    locale: Optional[str] = None
    email_verified: bool = False

    role: Role = Role.TOURIST
    auth_metadata: AuthMetadata = Field(default_factory=AuthMetadata)

    # Profile data maintained by the account holder
    phone: Optional[str] = None
    address: Address = Address()
    preferences: Preferences = Preferences()

    status: AccountStatus = AccountStatus.ACTIVE
    terms_accepted: bool = False
    terms_accepted_date: Optional[datetime] = None
    privacy_accepted: bool = False
    privacy_accepted_date: Optional[datetime] = None

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def full_name(self) -> str:
        """Given and family name when both are known, otherwise the display name."""
        if self.given_name and self.family_name:
            return f"{self.given_name} {self.family_name}"
        return self.name

    @property
    def profile_completion_percentage(self) -> int:
        """Share of the ten tracked profile fields that are filled in."""
        tracked = [
            self.name,
            self.email,
            self.picture,
            self.phone,
            self.address.city,
            self.address.country,
            self.preferences.timezone,
            self.email_verified,
            self.terms_accepted,
            self.privacy_accepted,
        ]
        completed = sum(1 for value in tracked if value)
        return round(completed / len(tracked) * 100)

    @property
    def profile_complete(self) -> bool:
        return self.profile_completion_percentage >= PROFILE_COMPLETE_THRESHOLD

    @property
    def is_new(self) -> bool:
        """True until the account holder logs in a second time."""
        return self.auth_metadata.login_count == 1

    def apply_login(self, login: "LoginUpdate") -> "Account":
        """Return a copy with provider profile and login metadata refreshed.

        Profile fields are only overwritten when the login carries a value.
        """
        profile = {
            field: value
            for field, value in login.profile_fields().items()
            if value is not None
        }
        metadata = self.auth_metadata.model_copy(
            update={
                "last_login": login.last_login,
                "login_count": self.auth_metadata.login_count + 1,
                "last_ip": login.last_ip,
                "user_agent": login.user_agent,
            }
        )
        return self.model_copy(
            update={
                **profile,
                "auth_metadata": metadata,
                "updated_at": login.last_login,
            }
        )


class LoginUpdate(DomainModel):
    """Changes a repeat login applies to an existing account.

    Carries no role: a login never changes it.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    picture: Optional[str] = None
    nickname: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    locale: Optional[str] = None
    email_verified: Optional[bool] = None

    last_login: datetime
    last_ip: Optional[str] = None
    user_agent: Optional[str] = None

    def profile_fields(self) -> dict[str, object]:
        """Provider profile fields, including the ones left unset."""
        return self.model_dump(exclude={"last_login", "last_ip", "user_agent"})


class ProfileUpdate(DomainModel):
    """Self-service changes the account holder may make.

    Identity, login metadata, role and status are not part of it.
    """

    name: Optional[str] = None
    nickname: Optional[str] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    picture: Optional[str] = None
    locale: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[Address] = None
    preferences: Optional[Preferences] = None
    terms_accepted: Optional[bool] = None
    privacy_accepted: Optional[bool] = None

    def apply_to(self, account: Account, now: datetime) -> Account:
        """Return a copy of the account with the provided fields changed."""
        changes = self.model_dump(exclude_none=True, exclude={"address", "preferences"})
        if self.address is not None:
            changes["address"] = self.address
        if self.preferences is not None:
            changes["preferences"] = self.preferences

        # Stamp consent the first time it is given
        if self.terms_accepted and not account.terms_accepted:
            changes["terms_accepted_date"] = now
        if self.privacy_accepted and not account.privacy_accepted:
            changes["privacy_accepted_date"] = now

        return account.model_copy(update={**changes, "updated_at": now})
