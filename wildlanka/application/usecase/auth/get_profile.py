"""Get profile use case."""

from pydantic import BaseModel

from wildlanka.application.usecase.auth.account_view import AccountView
from wildlanka.domain.error import AuthenticationRequiredError
from wildlanka.domain.service import AccountService


class GetProfileRequest(BaseModel):
    """Get profile request."""

    subject_id: str


class GetProfileUseCase:
    """Use case for reading the caller's account without creating it."""

    def __init__(self, account_service: AccountService) -> None:
        """Initialize get profile use case.

        Args:
            account_service: Account domain service
        """
        self.account_service = account_service

    async def execute(self, request: GetProfileRequest) -> AccountView:
        """Load the account for a subject.

        Args:
            request: Request with the caller's subject

        Returns:
            Account view

        Raises:
            AuthenticationRequiredError: If the subject is empty
            NotFoundError: If no account exists for the subject
        """
        if not request.subject_id:
            raise AuthenticationRequiredError()

        account = await self.account_service.get_by_subject_id(request.subject_id)
        return AccountView.from_account(account)
