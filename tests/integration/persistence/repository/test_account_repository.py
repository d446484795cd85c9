"""Integration tests for PostgresAccountRepository.

Run against the database at ``DATABASE__URL`` with migrations applied.
"""

import os
from datetime import datetime, timezone
from uuid import uuid4

import pytest

from wildlanka.domain.error import DuplicateAccountError
from wildlanka.domain.model import Address, LoginUpdate
from wildlanka.domain.repository import AccountRepository
from tests.factories import make_account
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    "DATABASE__URL" not in os.environ, reason="DATABASE__URL not set"
)

integration_env = create_env_fixture(unmock={"persistence"})


def unique_identity() -> tuple[str, str]:
    """Subject and email no other test run has used."""
    suffix = uuid4().hex[:12]
    return f"auth0|{suffix}", f"{suffix}@example.com"


class TestAccountRepositoryIntegration:
    """Integration tests for account storage."""

    @pytest.mark.asyncio
    async def test_create_and_find(self, integration_env):
        repo = await integration_env.get(AccountRepository)
        subject_id, email = unique_identity()
        account = make_account(
            subject_id=subject_id,
            email=email,
            address=Address(city="Galle", country="Sri Lanka"),
        )

        await repo.create(account)
        found = await repo.find_by_subject_id(subject_id)

        assert found is not None
        assert found.id == account.id
        assert found.email == email
        assert found.address.city == "Galle"
        assert found.preferences.notifications.push is True

    @pytest.mark.asyncio
    async def test_find_by_email_or_subject(self, integration_env):
        repo = await integration_env.get(AccountRepository)
        subject_id, email = unique_identity()
        await repo.create(make_account(subject_id=subject_id, email=email))

        by_email = await repo.find_by_email_or_subject_id(email, "auth0|unknown")
        by_subject = await repo.find_by_email_or_subject_id(None, subject_id)

        assert by_email is not None and by_email.subject_id == subject_id
        assert by_subject is not None and by_subject.email == email

    @pytest.mark.asyncio
    async def test_duplicate_subject_keeps_session_usable(self, integration_env):
        repo = await integration_env.get(AccountRepository)
        subject_id, email = unique_identity()
        await repo.create(make_account(subject_id=subject_id, email=email))

        with pytest.raises(DuplicateAccountError):
            await repo.create(
                make_account(subject_id=subject_id, email=f"other-{email}")
            )

        assert await repo.find_by_subject_id(subject_id) is not None

    @pytest.mark.asyncio
    async def test_update_by_subject_id_increments_login_count(self, integration_env):
        repo = await integration_env.get(AccountRepository)
        subject_id, email = unique_identity()
        await repo.create(
            make_account(subject_id=subject_id, email=email, picture="old.png")
        )
        now = datetime.now(timezone.utc)

        updated = await repo.update_by_subject_id(
            subject_id,
            LoginUpdate(name="Jane", last_login=now, last_ip="198.51.100.4"),
        )

        assert updated is not None
        assert updated.name == "Jane"
        assert updated.picture == "old.png"
        assert updated.auth_metadata.login_count == 2
        assert updated.auth_metadata.last_ip == "198.51.100.4"

    @pytest.mark.asyncio
    async def test_update_unknown_subject(self, integration_env):
        repo = await integration_env.get(AccountRepository)

        result = await repo.update_by_subject_id(
            "auth0|missing", LoginUpdate(last_login=datetime.now(timezone.utc))
        )

        assert result is None

    @pytest.mark.asyncio
    async def test_save_overwrites_profile(self, integration_env):
        repo = await integration_env.get(AccountRepository)
        subject_id, email = unique_identity()
        account = await repo.create(make_account(subject_id=subject_id, email=email))

        await repo.save(account.model_copy(update={"phone": "+94 11 234 5678"}))
        found = await repo.find_by_subject_id(subject_id)

        assert found is not None
        assert found.phone == "+94 11 234 5678"
