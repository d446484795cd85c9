"""Unit tests for RoleResolver."""

import pytest

from wildlanka.domain.error import PersistenceError
from wildlanka.domain.service import (
    STAFF_COLLECTIONS,
    RoleResolver,
    SpecializedRoleSource,
)
from wildlanka.domain.service.role_resolver import (
    role_from_email_domain,
    role_from_email_keywords,
    role_from_hint,
)
from wildlanka.domain.value import Role
from wildlanka.persistence.repository.inmemory import (
    InMemoryAccountRepository,
    InMemoryStaffRecordStore,
)
from tests.factories import make_account, make_assertion


class FailingAccountRepository(InMemoryAccountRepository):
    """Account repository whose broad lookup always fails."""

    async def find_by_email_or_subject_id(self, email, subject_id):
        raise PersistenceError("connection reset")


def build_resolver(account_repository=None):
    """Resolver over empty in-memory staff stores.

    Returns:
        Tuple of (resolver, stores keyed by collection, account repository)
    """
    stores = {
        staff.collection: InMemoryStaffRecordStore(staff.collection)
        for staff in STAFF_COLLECTIONS
    }
    account_repository = account_repository or InMemoryAccountRepository()
    sources = [
        SpecializedRoleSource(
            role=staff.role,
            store=stores[staff.collection],
            email_field=staff.email_field,
        )
        for staff in STAFF_COLLECTIONS
    ]
    return RoleResolver(sources, account_repository), stores, account_repository


class TestStaffRecordLookup:
    """Tests for the staff record step."""

    @pytest.mark.asyncio
    async def test_vet_record_wins_for_generic_email(self):
        """A vet record decides the role even when no email rule matches."""
        resolver, stores, _ = build_resolver()
        stores["vets"].add({"Email": "x@generic.com", "name": "Dr. Silva"})

        role = await resolver.resolve_role(make_assertion(email="x@generic.com"))

        assert role == Role.VET

    @pytest.mark.asyncio
    async def test_staff_record_beats_email_rules(self):
        """A staff record wins over domain and keyword rules for the same email."""
        resolver, stores, _ = build_resolver()
        email = "driver@ops.admin.lk"
        stores["tour_guides"].add({"email": email})

        role = await resolver.resolve_role(make_assertion(email=email))

        assert role_from_email_domain(email) == Role.ADMIN
        assert role == Role.TOUR_GUIDE

    @pytest.mark.asyncio
    async def test_staff_record_beats_provider_hint(self):
        """A staff record wins over the provider role hint."""
        resolver, stores, _ = build_resolver()
        stores["call_operators"].add({"email": "ops@example.com"})

        role = await resolver.resolve_role(
            make_assertion(email="ops@example.com", role_hint="admin")
        )

        assert role == Role.CALL_OPERATOR

    @pytest.mark.asyncio
    async def test_first_collection_in_priority_order_wins(self):
        """When several collections hold the email, the earliest one wins."""
        resolver, stores, _ = build_resolver()
        email = "both@example.com"
        stores["vets"].add({"Email": email})
        stores["emergency_officers"].add({"Email": email})

        role = await resolver.resolve_role(make_assertion(email=email))

        assert role == Role.EMERGENCY_OFFICER
        # Collections after the match are never queried
        assert stores["vets"].lookups == 0

    @pytest.mark.asyncio
    async def test_lookup_uses_collection_email_field(self):
        """A record stored under the wrong email field is not a match."""
        resolver, stores, _ = build_resolver()
        stores["wildlife_officers"].add({"email": "ranger@example.com"})

        role = await resolver.resolve_role(make_assertion(email="ranger@example.com"))

        # Falls through to the keyword rule ("ranger" matches nothing) -> tourist
        assert role == Role.TOURIST

    @pytest.mark.asyncio
    async def test_tourist_record_resolves_to_tourist(self):
        """A tourist record stops the cascade before the email rules."""
        resolver, stores, _ = build_resolver()
        stores["tourists"].add({"Email": "guide.fan@example.com"})

        role = await resolver.resolve_role(make_assertion(email="guide.fan@example.com"))

        assert role == Role.TOURIST

    @pytest.mark.asyncio
    async def test_failing_collection_is_skipped(self):
        """A failing collection counts as no match and the cascade continues."""
        resolver, stores, _ = build_resolver()
        stores["admins"].fail_with(RuntimeError("timeout"))
        stores["vets"].add({"Email": "x@generic.com"})

        role = await resolver.resolve_role(make_assertion(email="x@generic.com"))

        assert role == Role.VET

    @pytest.mark.asyncio
    async def test_all_collections_failing_falls_through(self):
        """With every collection failing, lower priorities still apply."""
        resolver, stores, _ = build_resolver()
        for store in stores.values():
            store.fail_with(RuntimeError("down"))

        role = await resolver.resolve_role(make_assertion(email="a@wildlanka.vet"))

        assert role == Role.VET

    @pytest.mark.asyncio
    async def test_no_email_skips_staff_lookup(self):
        """Without an email no collection is queried."""
        resolver, stores, _ = build_resolver()

        role = await resolver.resolve_role(make_assertion(email=None))

        assert role == Role.TOURIST
        assert all(store.lookups == 0 for store in stores.values())


class TestExistingAccount:
    """Tests for the existing-account step."""

    @pytest.mark.asyncio
    async def test_passed_account_role_is_kept(self):
        resolver, _, _ = build_resolver()
        existing = make_account(role=Role.SAFARI_DRIVER)

        role = await resolver.resolve_role(
            make_assertion(email="someone@example.com", role_hint="vet"), existing
        )

        assert role == Role.SAFARI_DRIVER

    @pytest.mark.asyncio
    async def test_account_found_by_email(self):
        """An account with the same email but another subject is consulted."""
        resolver, _, accounts = build_resolver()
        await accounts.create(
            make_account(subject_id="google|9", email="jane@example.com", role=Role.VET)
        )

        role = await resolver.resolve_role(
            make_assertion(subject_id="auth0|123", email="jane@example.com")
        )

        assert role == Role.VET

    @pytest.mark.asyncio
    async def test_tourist_account_does_not_decide(self):
        """An existing tourist account falls through to later steps."""
        resolver, _, accounts = build_resolver()
        await accounts.create(make_account(email="jane@wildlanka.guide"))

        role = await resolver.resolve_role(make_assertion(email="jane@wildlanka.guide"))

        assert role == Role.TOUR_GUIDE

    @pytest.mark.asyncio
    async def test_failing_lookup_falls_through(self):
        """A failing account lookup is treated as no match."""
        resolver, _, _ = build_resolver(FailingAccountRepository())

        role = await resolver.resolve_role(
            make_assertion(email="jane@example.com", role_hint="tourGuide")
        )

        assert role == Role.TOUR_GUIDE


class TestProviderHint:
    """Tests for the provider role hint step."""

    @pytest.mark.asyncio
    async def test_valid_hint_is_used(self):
        resolver, _, _ = build_resolver()

        role = await resolver.resolve_role(
            make_assertion(email="jane@example.com", role_hint="WildlifeOfficer")
        )

        assert role == Role.WILDLIFE_OFFICER

    @pytest.mark.asyncio
    async def test_hint_beats_email_rules(self):
        resolver, _, _ = build_resolver()

        role = await resolver.resolve_role(
            make_assertion(email="jane@wildlanka.vet", role_hint="callOperator")
        )

        assert role == Role.CALL_OPERATOR

    @pytest.mark.asyncio
    async def test_invalid_hint_is_ignored(self):
        """An out-of-enum hint falls through to the email domain rule."""
        resolver, _, _ = build_resolver()

        role = await resolver.resolve_role(
            make_assertion(email="a@wildlanka.vet", role_hint="superuser")
        )

        assert role == Role.VET

    @pytest.mark.asyncio
    async def test_miscased_hint_is_ignored(self):
        """A hint differing from a role only in case falls through to the domain rule."""
        resolver, _, _ = build_resolver()

        role = await resolver.resolve_role(
            make_assertion(subject_id="p|9", email="d@parks.driver", role_hint="VET")
        )

        assert role == Role.SAFARI_DRIVER

    @pytest.mark.parametrize(
        "hint", ["wildlifeofficer", "ADMIN", "emergencyofficer", "", None]
    )
    def test_hint_must_match_a_role_exactly(self, hint):
        assert role_from_hint(hint) is None

    def test_exact_hint(self):
        assert role_from_hint("EmergencyOfficer") == Role.EMERGENCY_OFFICER


class TestEmailDomainRules:
    """Tests for the email domain step."""

    @pytest.mark.parametrize(
        "email,expected",
        [
            ("a@wildlanka.admin", Role.ADMIN),
            ("a@ops.admin.lk", Role.ADMIN),
            ("a@wildlanka.vet", Role.VET),
            ("a@parks.guide", Role.TOUR_GUIDE),
            ("a@fleet.driver.lk", Role.SAFARI_DRIVER),
            ("a@dept.wildlife.lk", Role.WILDLIFE_OFFICER),
            ("a@unit.emergency", Role.EMERGENCY_OFFICER),
            ("a@centre.call", Role.CALL_OPERATOR),
            ("a@admin.gov.lk", Role.ADMIN),
            ("a@parks.gov.lk", Role.WILDLIFE_OFFICER),
            ("A@WILDLANKA.VET", Role.VET),
        ],
    )
    def test_domain_rules(self, email, expected):
        assert role_from_email_domain(email) == expected

    @pytest.mark.parametrize(
        "email",
        ["a@example.com", "a@veterans.org", "a@guidebook.com", "not-an-email", None],
    )
    def test_domain_rules_without_match(self, email):
        assert role_from_email_domain(email) is None

    def test_hyphenated_admin_label_under_gov(self):
        """Hyphenated admin labels miss the plain admin rule but outrank .gov."""
        assert role_from_email_domain("a@parks.admin-office.gov") == Role.ADMIN
        assert role_from_email_domain("a@parks.administration.gov.lk") == Role.ADMIN

    def test_first_matching_rule_wins(self):
        """A domain matching several rules gets the earliest one."""
        assert role_from_email_domain("a@vet.wildlife.lk") == Role.VET


class TestEmailKeywordRules:
    """Tests for the email keyword step."""

    @pytest.mark.parametrize(
        "email,expected",
        [
            ("sysadmin@example.com", Role.ADMIN),
            ("dr.vet@example.com", Role.VET),
            ("veterinarian@example.com", Role.VET),
            ("guide.kamal@example.com", Role.TOUR_GUIDE),
            ("jeep-driver@example.com", Role.SAFARI_DRIVER),
            ("wildlife.team@example.com", Role.WILDLIFE_OFFICER),
            ("emergency.officer@example.com", Role.WILDLIFE_OFFICER),
            ("emergency@example.com", Role.EMERGENCY_OFFICER),
            ("callcentre@example.com", Role.CALL_OPERATOR),
            ("operator1@example.com", Role.CALL_OPERATOR),
        ],
    )
    def test_keyword_rules(self, email, expected):
        assert role_from_email_keywords(email) == expected

    def test_keyword_rules_without_match(self):
        assert role_from_email_keywords("jane@example.com") is None

    @pytest.mark.asyncio
    async def test_keyword_rule_applies_after_domain_rules(self):
        resolver, _, _ = build_resolver()

        role = await resolver.resolve_role(make_assertion(email="guide@wildlanka.vet"))

        assert role == Role.VET


class TestDefault:
    """Tests for the tourist default."""

    @pytest.mark.asyncio
    async def test_defaults_to_tourist(self):
        resolver, _, _ = build_resolver()

        role = await resolver.resolve_role(make_assertion(email="jane@example.com"))

        assert role == Role.TOURIST

    @pytest.mark.asyncio
    async def test_always_returns_a_role(self):
        """Even with every lookup failing the resolver returns a role."""
        resolver, stores, _ = build_resolver(FailingAccountRepository())
        for store in stores.values():
            store.fail_with(RuntimeError("down"))

        role = await resolver.resolve_role(
            make_assertion(email="jane@example.com", role_hint="nonsense")
        )

        assert role == Role.TOURIST
