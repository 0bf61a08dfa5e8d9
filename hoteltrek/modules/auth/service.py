import hashlib
import time
from supabase import Client
from hoteltrek.modules.auth.schemas import LoginRequest, RegisterRequest, TokenResponse, RegisterResponse
from fastapi import HTTPException
from typing import Dict, Any, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


class TokenCache:
    """Resolved users keyed by a hash of the bearer token. Entries live ttl_seconds."""

    def __init__(self, ttl_seconds: float = 60, max_size: int = 500):
        self.ttl_seconds = ttl_seconds
        self.max_size = max_size
        self._entries: Dict[str, Tuple[Dict[str, Any], float]] = {}

    @staticmethod
    def _key(token: str) -> str:
        return hashlib.sha256(token.encode()).hexdigest()

    def get(self, token: str) -> Optional[Dict[str, Any]]:
        key = self._key(token)
        entry = self._entries.get(key)
        if entry is None:
            return None
        user_data, expires_at = entry
        if time.monotonic() >= expires_at:
            del self._entries[key]
            return None
        return user_data

    def put(self, token: str, user_data: Dict[str, Any]) -> None:
        now = time.monotonic()
        if len(self._entries) >= self.max_size:
            self._entries = {k: v for k, v in self._entries.items() if v[1] > now}
            if len(self._entries) >= self.max_size:
                return
        self._entries[self._key(token)] = (user_data, now + self.ttl_seconds)

    def discard(self, token: str) -> None:
        self._entries.pop(self._key(token), None)

    def clear(self) -> None:
        self._entries.clear()


_token_cache = TokenCache()


def clear_auth_cache() -> None:
    _token_cache.clear()


def user_to_dict(user: Any) -> Dict[str, Any]:
    """Flatten a Supabase auth user into the dict route dependencies pass around."""
    return {
        "id": user.id,
        "email": user.email,
        "user_metadata": user.user_metadata or {},
        "app_metadata": user.app_metadata or {},
        "created_at": user.created_at,
        "updated_at": user.updated_at
    }


def _mentions(error: Exception, *fragments: str) -> bool:
    message = str(error).lower()
    return any(fragment in message for fragment in fragments)


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        """Create a guest account; the display name goes to user_metadata.full_name"""
        metadata = {"full_name": register_data.full_name} if register_data.full_name else {}
        try:
            auth_response = self.supabase.auth.sign_up({
                "email": register_data.email,
                "password": register_data.password,
                "options": {"data": metadata}
            })
        except Exception as e:
            if _mentions(e, "already registered", "already exists"):
                raise HTTPException(status_code=400, detail="User already exists")
            logger.error(f"Sign-up failed for {register_data.email}: {str(e)}")
            raise HTTPException(status_code=500, detail=f"Registration failed: {str(e)}")

        if not auth_response.user:
            raise HTTPException(status_code=400, detail="Failed to register user")

        logger.info("Registered guest %s", auth_response.user.id)
        return RegisterResponse(
            user_id=auth_response.user.id,
            email=auth_response.user.email or register_data.email,
            message="User registered successfully"
        )

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Exchange email and password for a bearer token"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })
        except Exception as e:
            if _mentions(e, "invalid", "credentials"):
                logger.info("Rejected login for %s", login_data.email)
                raise HTTPException(status_code=401, detail="Invalid email or password")
            raise HTTPException(status_code=500, detail=f"Login failed: {str(e)}")

        if not auth_response.user or not auth_response.session:
            raise HTTPException(status_code=401, detail="Invalid credentials")

        user = auth_response.user
        return TokenResponse(
            access_token=auth_response.session.access_token,
            user_id=user.id,
            email=user.email or login_data.email,
            full_name=(user.user_metadata or {}).get("full_name"),
        )

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Resolve a bearer token to its user, served from the token cache when fresh"""
        cached = _token_cache.get(token)
        if cached is not None:
            return cached

        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            if "JWT" in str(e) or _mentions(e, "expired", "invalid"):
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

        if not user_response or not user_response.user:
            raise HTTPException(status_code=401, detail="Invalid or expired token")
        user_data = user_to_dict(user_response.user)
        _token_cache.put(token, user_data)
        return user_data

    def logout(self, token: str) -> bool:
        """Forget the cached user and end the provider session"""
        _token_cache.discard(token)
        try:
            # Issued JWTs stay valid until they expire
            self.supabase.auth.sign_out()
            return True
        except Exception as e:
            logger.warning("Supabase sign_out failed: %s", e)
            return False
