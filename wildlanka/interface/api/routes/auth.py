"""Authentication and profile routes."""

import logging
from typing import Optional

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Request
from pydantic import ConfigDict

from wildlanka.application.usecase.auth import (
    GetProfileUseCase,
    LoginUseCase,
    UpdateProfileUseCase,
)
from wildlanka.application.usecase.auth.account_view import (
    AccountView,
    AddressView,
    CamelModel,
    PreferencesView,
)
from wildlanka.application.usecase.auth.get_profile import GetProfileRequest
from wildlanka.application.usecase.auth.login import LoginRequest
from wildlanka.application.usecase.auth.update_profile import UpdateProfileRequest
from wildlanka.domain.error import PersistenceError
from wildlanka.domain.model import Address, Preferences, ProfileUpdate
from wildlanka.domain.service import AuthService
from wildlanka.domain.value import ClientContext
from wildlanka.interface.error import APIError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


class UpdateProfileAPIRequest(CamelModel):
    """Self-service profile changes.

    Fields outside this model (role, email, login metadata, ...) are
    silently dropped.
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    nickname: str | None = None
    given_name: str | None = None
    family_name: str | None = None
    picture: str | None = None
    locale: str | None = None
    phone: str | None = None
    address: AddressView | None = None
    preferences: PreferencesView | None = None
    terms_accepted: bool | None = None
    privacy_accepted: bool | None = None

    def to_profile_update(self) -> ProfileUpdate:
        """Convert to the domain change set."""
        return ProfileUpdate(
            **self.model_dump(exclude={"address", "preferences"}),
            address=Address(**self.address.model_dump()) if self.address else None,
            preferences=(
                Preferences(**self.preferences.model_dump())
                if self.preferences
                else None
            ),
        )


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def _client_context(request: Request, user_agent: Optional[str]) -> ClientContext:
    """Caller address and user agent for login bookkeeping."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        ip = forwarded_for.split(",")[0].strip()
    else:
        ip = request.client.host if request.client else None
    return ClientContext(ip=ip, user_agent=user_agent or "Unknown")


@router.post("/login", response_model=AccountView)
async def login(
    request: Request,
    auth_service: FromDishka[AuthService],
    login_use_case: FromDishka[LoginUseCase],
    authorization: Optional[str] = Header(default=None),
    user_agent: Optional[str] = Header(default=None),
) -> AccountView:
    """Create the caller's account on first login, refresh it afterwards.

    Args:
        request: Incoming request (client address)
        auth_service: Authentication domain service from DI
        login_use_case: Login use case from DI
        authorization: Bearer token header
        user_agent: User-Agent header

    Returns:
        The caller's account

    Example:
        POST /auth/login
        Authorization: Bearer <token>

        Response:
        {
            "id": "123e4567-e89b-12d3-a456-426614174000",
            "subjectId": "auth0|123",
            "email": "ranger@wildlife.gov.lk",
            "role": "WildlifeOfficer",
            "authMetadata": {"loginCount": 1, ...},
            "isNewUser": true,
            ...
        }
    """
    assertion = await auth_service.authenticate(_bearer_token(authorization))
    account = await login_use_case.execute(
        LoginRequest(
            assertion=assertion,
            client=_client_context(request, user_agent),
        )
    )
    logger.info(
        f"Login for {account.subject_id}: role={account.role.value}, new={account.is_new_user}"
    )
    return account


@router.get("/profile", response_model=AccountView)
async def get_profile(
    auth_service: FromDishka[AuthService],
    get_profile_use_case: FromDishka[GetProfileUseCase],
    authorization: Optional[str] = Header(default=None),
) -> AccountView:
    """Return the caller's account without creating it."""
    assertion = await auth_service.authenticate(_bearer_token(authorization))
    return await get_profile_use_case.execute(
        GetProfileRequest(subject_id=assertion.subject_id)
    )


@router.put("/profile", response_model=AccountView)
async def update_profile(
    body: UpdateProfileAPIRequest,
    auth_service: FromDishka[AuthService],
    update_profile_use_case: FromDishka[UpdateProfileUseCase],
    authorization: Optional[str] = Header(default=None),
) -> AccountView:
    """Apply self-service changes to the caller's account.

    Raises:
        APIError: If the account store fails
    """
    assertion = await auth_service.authenticate(_bearer_token(authorization))
    try:
        return await update_profile_use_case.execute(
            UpdateProfileRequest(
                subject_id=assertion.subject_id,
                changes=body.to_profile_update(),
            )
        )
    except PersistenceError as e:
        raise APIError("Failed to update profile", cause=e)
