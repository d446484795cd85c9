"""Role resolution for first-time logins.

The role of a new account is decided by an ordered cascade. The first step
that yields a role wins and later steps are never consulted:

1. a pre-provisioned staff record with the asserted email
2. the non-tourist role of an account already known by email or subject
3. the role hint sent by the identity provider, if it names a real role
4. email domain rules
5. email keyword rules
6. tourist

Staff provisioning must always beat the email heuristics, which only exist
for organisations that issue role-signalling addresses.
"""

import re
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

import logfire

from wildlanka.domain.model.account import Account
from wildlanka.domain.repository import AccountRepository, StaffRecordStore
from wildlanka.domain.value import IdentityAssertion, Role

from .base import Service


@dataclass(frozen=True)
class StaffCollection:
    """Where staff records for one role live."""

    role: Role
    collection: str
    email_field: str


# Lookup order matters: the first collection holding the email decides.
STAFF_COLLECTIONS: tuple[StaffCollection, ...] = (
    StaffCollection(Role.ADMIN, "admins", "email"),
    StaffCollection(Role.EMERGENCY_OFFICER, "emergency_officers", "Email"),
    StaffCollection(Role.CALL_OPERATOR, "call_operators", "email"),
    StaffCollection(Role.SAFARI_DRIVER, "safari_drivers", "email"),
    StaffCollection(Role.TOUR_GUIDE, "tour_guides", "email"),
    StaffCollection(Role.VET, "vets", "Email"),
    StaffCollection(Role.WILDLIFE_OFFICER, "wildlife_officers", "Email"),
    StaffCollection(Role.TOURIST, "tourists", "Email"),
)


@dataclass(frozen=True)
class SpecializedRoleSource:
    """A staff store bound to the role its records grant."""

    role: Role
    store: StaffRecordStore
    email_field: str


# Matched against "." + lower-cased domain, first match wins.
EMAIL_DOMAIN_RULES: tuple[tuple[re.Pattern[str], Role], ...] = (
    (re.compile(r"\.admin(\.|$)"), Role.ADMIN),
    (re.compile(r"\.vet(\.|$)"), Role.VET),
    (re.compile(r"\.guide(\.|$)"), Role.TOUR_GUIDE),
    (re.compile(r"\.driver(\.|$)"), Role.SAFARI_DRIVER),
    (re.compile(r"\.wildlife(\.|$)"), Role.WILDLIFE_OFFICER),
    (re.compile(r"\.emergency(\.|$)"), Role.EMERGENCY_OFFICER),
    (re.compile(r"\.call(\.|$)"), Role.CALL_OPERATOR),
    # Labels such as "admin-office" or "administration" under a .gov domain
    (re.compile(r"\.admin[\w-]*\.gov(\.|$)"), Role.ADMIN),
    (re.compile(r"\.gov(\.|$)"), Role.WILDLIFE_OFFICER),
)

# Matched against the whole lower-cased address, first match wins.
# "officer" maps to WildlifeOfficer and is checked before "emergency".
EMAIL_KEYWORD_RULES: tuple[tuple[str, Role], ...] = (
    ("admin", Role.ADMIN),
    ("vet", Role.VET),
    ("veterinar", Role.VET),
    ("guide", Role.TOUR_GUIDE),
    ("driver", Role.SAFARI_DRIVER),
    ("wildlife", Role.WILDLIFE_OFFICER),
    ("officer", Role.WILDLIFE_OFFICER),
    ("emergency", Role.EMERGENCY_OFFICER),
    ("call", Role.CALL_OPERATOR),
    ("operator", Role.CALL_OPERATOR),
)


def role_from_hint(hint: str | None) -> Role | None:
    """Role named by the provider hint, if it is a known role."""
    if not hint:
        return None
    role = Role.parse(hint)
    if role is None:
        logfire.warn("Ignoring invalid provider role hint", role_hint=hint)
    return role


def role_from_email_domain(email: str | None) -> Role | None:
    """Role signalled by the email domain, if any rule matches."""
    if not email or "@" not in email:
        return None
    domain = "." + email.lower().rpartition("@")[2]
    for pattern, role in EMAIL_DOMAIN_RULES:
        if pattern.search(domain):
            return role
    return None


def role_from_email_keywords(email: str | None) -> Role | None:
    """Role signalled by a keyword anywhere in the email, if any."""
    if not email:
        return None
    lowered = email.lower()
    for keyword, role in EMAIL_KEYWORD_RULES:
        if keyword in lowered:
            return role
    return None


RoleStep = Callable[[IdentityAssertion, Account | None], Awaitable[Role | None]]


class RoleResolver(Service):
    """Decides the role of a brand-new account.

    Never raises: lookup failures are logged and count as "no match", and
    the cascade always ends in a valid role.
    """

    def __init__(
        self,
        sources: Sequence[SpecializedRoleSource],
        account_repository: AccountRepository,
    ) -> None:
        """Initialize role resolver.

        Args:
            sources: Staff stores in priority order
            account_repository: Account repository for the existing-account check
        """
        self.sources = tuple(sources)
        self.account_repository = account_repository
        self.steps: tuple[tuple[str, RoleStep], ...] = (
            ("staff_record", self._staff_record_role),
            ("existing_account", self._existing_account_role),
            ("provider_hint", self._provider_hint_role),
            ("email_domain", self._email_domain_role),
            ("email_keyword", self._email_keyword_role),
        )

    async def resolve_role(
        self,
        assertion: IdentityAssertion,
        existing_account: Account | None = None,
    ) -> Role:
        """Resolve the role for an identity.

        Args:
            assertion: Verified identity claims
            existing_account: Account already known for this identity, if any

        Returns:
            The resolved role, tourist when nothing matches
        """
        with logfire.span(
            "role_resolver.resolve_role",
            subject_id=assertion.subject_id,
            email=assertion.email,
        ):
            for step_name, step in self.steps:
                role = await step(assertion, existing_account)
                if role is not None:
                    logfire.info(
                        "Role resolved",
                        step=step_name,
                        role=role.value,
                        subject_id=assertion.subject_id,
                        email=assertion.email,
                    )
                    return role

            logfire.info(
                "Role resolved",
                step="default",
                role=Role.TOURIST.value,
                subject_id=assertion.subject_id,
                email=assertion.email,
            )
            return Role.TOURIST

    async def _staff_record_role(
        self, assertion: IdentityAssertion, existing_account: Account | None
    ) -> Role | None:
        if not assertion.email:
            return None

        for source in self.sources:
            try:
                record = await source.store.find_by_email(
                    source.email_field, assertion.email
                )
            except Exception as e:
                logfire.warn(
                    "Staff record lookup failed, treating as no match",
                    collection=source.store.collection,
                    role=source.role.value,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                continue

            if record is not None:
                logfire.info(
                    "Staff record found",
                    collection=source.store.collection,
                    role=source.role.value,
                    email=assertion.email,
                )
                return source.role

        return None

    async def _existing_account_role(
        self, assertion: IdentityAssertion, existing_account: Account | None
    ) -> Role | None:
        account = existing_account
        if account is None:
            try:
                account = await self.account_repository.find_by_email_or_subject_id(
                    assertion.email, assertion.subject_id
                )
            except Exception as e:
                logfire.warn(
                    "Existing account lookup failed, treating as no match",
                    subject_id=assertion.subject_id,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return None

        if account is None or account.role == Role.TOURIST:
            return None
        return account.role

    async def _provider_hint_role(
        self, assertion: IdentityAssertion, existing_account: Account | None
    ) -> Role | None:
        return role_from_hint(assertion.role_hint)

    async def _email_domain_role(
        self, assertion: IdentityAssertion, existing_account: Account | None
    ) -> Role | None:
        return role_from_email_domain(assertion.email)

    async def _email_keyword_role(
        self, assertion: IdentityAssertion, existing_account: Account | None
    ) -> Role | None:
        return role_from_email_keywords(assertion.email)
