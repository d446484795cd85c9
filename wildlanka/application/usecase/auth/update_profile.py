"""Update profile use case."""

from datetime import datetime, timezone

import logfire
from pydantic import BaseModel

from wildlanka.application.usecase.auth.account_view import AccountView
from wildlanka.domain.error import AuthenticationRequiredError
from wildlanka.domain.model import ProfileUpdate
from wildlanka.domain.service import AccountService


class UpdateProfileRequest(BaseModel):
    """Update profile request."""

    subject_id: str
    changes: ProfileUpdate


class UpdateProfileUseCase:
    """Use case for self-service profile changes.

    Only the fields of ``ProfileUpdate`` can change; role, email, identity
    and login metadata stay as they are.
    """

    def __init__(self, account_service: AccountService) -> None:
        """Initialize update profile use case.

        Args:
            account_service: Account domain service
        """
        self.account_service = account_service

    async def execute(self, request: UpdateProfileRequest) -> AccountView:
        """Apply profile changes to the caller's account.

        Args:
            request: Request with subject and changes

        Returns:
            Updated account view

        Raises:
            AuthenticationRequiredError: If the subject is empty
            NotFoundError: If no account exists for the subject
            PersistenceError: If the account store fails
        """
        if not request.subject_id:
            raise AuthenticationRequiredError()

        account = await self.account_service.get_by_subject_id(request.subject_id)
        updated = request.changes.apply_to(account, datetime.now(timezone.utc))
        saved = await self.account_service.save(updated)

        logfire.info(
            "Profile updated",
            account_id=str(saved.id),
            updated_fields=sorted(request.changes.model_dump(exclude_none=True)),
        )
        return AccountView.from_account(saved)
