from fastapi import APIRouter, Depends, Request
from hoteltrek.config import settings
from hoteltrek.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse, CurrentUserResponse
)
from hoteltrek.modules.auth.service import AuthService
from hoteltrek.core.dependencies import get_auth_service, get_current_token, get_current_user, is_admin
from hoteltrek.core.rate_limit import limiter
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])


# slowapi needs the raw Request on rate limited endpoints
@router.post("/register", response_model=RegisterResponse, status_code=201)
@limiter.limit(settings.auth_rate_limit)
async def register(
    request: Request,
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Create a guest account"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.auth_rate_limit)
async def login(
    request: Request,
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    return service.login(login_data)


@router.post("/logout")
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=CurrentUserResponse)
async def get_me(current_user: Dict = Depends(get_current_user)):
    """Signed-in user with the admin flag the frontend uses to show the dashboard"""
    metadata = current_user.get("user_metadata") or {}
    return CurrentUserResponse(
        id=current_user["id"],
        email=current_user.get("email"),
        full_name=metadata.get("full_name"),
        avatar_url=metadata.get("avatar_url"),
        user_metadata=metadata,
        is_admin=is_admin(current_user),
    )
