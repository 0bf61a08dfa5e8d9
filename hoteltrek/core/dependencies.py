"""
Core dependencies for route protection
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from hoteltrek.database.supabase_client import get_supabase
from hoteltrek.modules.auth.service import AuthService
from supabase import Client
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()

ADMIN_ROLE = "admin"


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Resolve the bearer token to the auth provider's user"""
    return auth_service.get_current_user(token)


def is_admin(user_data: dict) -> bool:
    """Check the admin role in app_metadata"""
    app_metadata = user_data.get("app_metadata") or {}
    return app_metadata.get("role") == ADMIN_ROLE


def require_admin(user_data: dict = Depends(get_current_user)) -> dict:
    """Dependency that only lets admins through"""
    if not is_admin(user_data):
        logger.warning("Non-admin user %s tried to access an admin route", user_data.get("id"))
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return user_data


def check_owner_or_admin(owner_id: str, user_data: dict, resource: str = "resource") -> dict:
    """Allow the owner of a record or an admin"""
    if owner_id == user_data["id"] or is_admin(user_data):
        return user_data
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail=f"You do not have access to this {resource}"
    )
