import logging
from typing import Optional

from fastapi import APIRouter, Depends

from selfsight.api.dependencies import get_account_service, get_bearer_token, get_current_user
from selfsight.api.models import LoginRequest, ProfileResponse, ResetPasswordRequest, SignupRequest
from selfsight.features.profiles.models import AuthSession, User, UserProfile
from selfsight.features.profiles.service import AccountService

router = APIRouter(tags=["Accounts"])
logger = logging.getLogger("SelfSight.API.Accounts")


@router.post("/auth/signup", response_model=AuthSession, status_code=201)
async def signup(request: SignupRequest, accounts: AccountService = Depends(get_account_service)) -> AuthSession:
    return accounts.signup(request.name, request.email, request.password)


@router.post("/auth/login", response_model=AuthSession)
async def login(request: LoginRequest, accounts: AccountService = Depends(get_account_service)) -> AuthSession:
    return accounts.login(request.email, request.password)


@router.post("/auth/logout")
async def logout(
    token: Optional[str] = Depends(get_bearer_token),
    accounts: AccountService = Depends(get_account_service),
):
    if token:
        accounts.logout(token)
    return {"status": "success", "notice": "Logged out successfully!"}


@router.post("/auth/reset-password")
async def reset_password(
    request: ResetPasswordRequest,
    accounts: AccountService = Depends(get_account_service),
):
    accounts.reset_password(request.email)
    return {"status": "success", "notice": "Password reset email sent"}


@router.get("/me", response_model=User)
async def me(user: User = Depends(get_current_user)) -> User:
    return user


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    user: User = Depends(get_current_user),
    accounts: AccountService = Depends(get_account_service),
) -> ProfileResponse:
    return ProfileResponse(status="success", profile=accounts.get_profile(user), is_new_user=user.is_new_user)


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    profile: UserProfile,
    user: User = Depends(get_current_user),
    accounts: AccountService = Depends(get_account_service),
) -> ProfileResponse:
    """Save the onboarding/profile answers; completes onboarding."""
    updated = accounts.update_profile(user, profile)
    return ProfileResponse(status="success", profile=profile, is_new_user=updated.is_new_user)
