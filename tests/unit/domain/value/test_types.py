"""Unit tests for domain value objects."""

import pytest

from wildlanka.domain.value import ClientContext, IdentityAssertion, Role


class TestRoleParse:
    """Tests for Role.parse()."""

    @pytest.mark.parametrize("role", list(Role))
    def test_stored_values_parse_to_themselves(self, role):
        assert Role.parse(role.value) is role

    def test_officer_roles_keep_capitalised_values(self):
        assert Role.EMERGENCY_OFFICER.value == "EmergencyOfficer"
        assert Role.WILDLIFE_OFFICER.value == "WildlifeOfficer"

    @pytest.mark.parametrize(
        "value",
        ["", None, "superuser", "tour guide", "wildlifeOfficer", "CALLOPERATOR", "VET"],
    )
    def test_unknown_values(self, value):
        assert Role.parse(value) is None


class TestIdentityAssertion:
    """Tests for IdentityAssertion."""

    def test_missing_subject_is_empty(self):
        assertion = IdentityAssertion(subject_id=None, email="jane@example.com")

        assert assertion.subject_id == ""
        assert not assertion.has_subject

    def test_blank_subject_is_empty(self):
        assert not IdentityAssertion(subject_id="   ").has_subject

    def test_subject_is_kept(self):
        assertion = IdentityAssertion(subject_id="auth0|123")

        assert assertion.has_subject
        assert assertion.subject_id == "auth0|123"

    def test_is_immutable(self):
        assertion = IdentityAssertion(subject_id="auth0|123")

        with pytest.raises(Exception):
            assertion.email = "other@example.com"


class TestClientContext:
    def test_user_agent_defaults_to_unknown(self):
        assert ClientContext().user_agent == "Unknown"
