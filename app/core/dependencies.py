"""
Common dependencies for FastAPI routes.
"""

from datetime import datetime, timezone
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.exceptions import UnauthorizedException

# auto_error=False so a missing header maps to our own 401 body
security = HTTPBearer(auto_error=False)


def _decode_token(token: str) -> Optional[dict]:
    """Decode JWT token. Import here to avoid circular imports."""
    from app.auth.service import AuthService
    return AuthService.decode_token(token)


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[dict]:
    """
    Session resolver - returns the user if the bearer token is valid, None otherwise.
    """
    if not credentials:
        return None
    
    payload = _decode_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        return None
    
    return {
        "id": payload["sub"],
        "email": payload.get("email"),
    }


async def get_current_user(
    user: Optional[dict] = Depends(get_current_user_optional)
) -> dict:
    """
    Dependency to get the current authenticated user from JWT token.
    Returns user dict with 'id' and 'email'.
    """
    if user is None:
        raise UnauthorizedException()
    return user


def get_now() -> datetime:
    """Current UTC time; overridden in tests to pin the clock."""
    return datetime.now(timezone.utc)
