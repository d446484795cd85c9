"""Unit tests for GetProfileUseCase and UpdateProfileUseCase."""

from dishka import AsyncContainer
import pytest

from wildlanka.application.usecase.auth import (
    GetProfileUseCase,
    LoginUseCase,
    UpdateProfileUseCase,
)
from wildlanka.application.usecase.auth.get_profile import GetProfileRequest
from wildlanka.application.usecase.auth.login import LoginRequest
from wildlanka.application.usecase.auth.update_profile import UpdateProfileRequest
from wildlanka.domain.error import AuthenticationRequiredError, NotFoundError
from wildlanka.domain.model import Address, Preferences, ProfileUpdate
from wildlanka.domain.repository import AccountRepository
from wildlanka.domain.value import Role
from tests.factories import make_assertion
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetProfile:
    """Tests for GetProfileUseCase."""

    @pytest.mark.asyncio
    async def test_unknown_subject_is_not_found(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(GetProfileUseCase)
        accounts = await unit_env.get(AccountRepository)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetProfileRequest(subject_id="auth0|nobody"))

        # Reading a profile never creates one
        assert await accounts.find_by_subject_id("auth0|nobody") is None

    @pytest.mark.asyncio
    async def test_empty_subject_requires_authentication(
        self, unit_env: AsyncContainer
    ):
        use_case = await unit_env.get(GetProfileUseCase)

        with pytest.raises(AuthenticationRequiredError):
            await use_case.execute(GetProfileRequest(subject_id=""))

    @pytest.mark.asyncio
    async def test_returns_account_view(self, unit_env: AsyncContainer):
        login = await unit_env.get(LoginUseCase)
        await login.execute(
            LoginRequest(
                assertion=make_assertion(given_name="Jane", family_name="Perera")
            )
        )
        use_case = await unit_env.get(GetProfileUseCase)

        view = await use_case.execute(GetProfileRequest(subject_id="auth0|123"))

        assert view.subject_id == "auth0|123"
        assert view.full_name == "Jane Perera"
        assert view.profile_completion_percentage == 20
        assert view.auth_metadata.login_count == 1


class TestUpdateProfile:
    """Tests for UpdateProfileUseCase."""

    @pytest.mark.asyncio
    async def test_updates_editable_fields(self, unit_env: AsyncContainer):
        login = await unit_env.get(LoginUseCase)
        await login.execute(LoginRequest(assertion=make_assertion(role_hint="vet")))
        use_case = await unit_env.get(UpdateProfileUseCase)

        view = await use_case.execute(
            UpdateProfileRequest(
                subject_id="auth0|123",
                changes=ProfileUpdate(
                    phone="+94 77 123 4567",
                    address=Address(city="Kandy", country="Sri Lanka"),
                    preferences=Preferences(timezone="Asia/Colombo"),
                    terms_accepted=True,
                ),
            )
        )

        assert view.phone == "+94 77 123 4567"
        assert view.address.city == "Kandy"
        assert view.preferences.timezone == "Asia/Colombo"
        assert view.terms_accepted is True
        assert view.terms_accepted_date is not None
        assert view.profile_completion_percentage == 70

        # Persisted, and nothing restricted changed
        accounts = await unit_env.get(AccountRepository)
        stored = await accounts.find_by_subject_id("auth0|123")
        assert stored.phone == "+94 77 123 4567"
        assert stored.role == Role.VET
        assert stored.email == "jane@example.com"
        assert stored.auth_metadata.login_count == 1

    @pytest.mark.asyncio
    async def test_unknown_subject_is_not_found(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(UpdateProfileUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                UpdateProfileRequest(
                    subject_id="auth0|nobody", changes=ProfileUpdate(phone="1")
                )
            )
