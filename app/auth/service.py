"""Authentication service - session token issuing and verification."""

from datetime import datetime, timedelta, timezone
from typing import Optional
import jwt

from app.core.config import get_settings

settings = get_settings()


class AuthService:
    """
    Session tokens for the reminders API.

    Accounts and logins live in the main web app; this service only needs to
    resolve a bearer token to a user id.
    """
    
    @staticmethod
    def create_access_token(user_id: str, email: Optional[str] = None) -> str:
        """Create a JWT access token."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "email": email,
            "exp": now + timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES),
            "iat": now,
        }
        return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    
    @staticmethod
    def decode_token(token: str) -> Optional[dict]:
        """Decode and validate a JWT token."""
        try:
            payload = jwt.decode(
                token, 
                settings.JWT_SECRET_KEY, 
                algorithms=[settings.JWT_ALGORITHM]
            )
            return payload
        except jwt.ExpiredSignatureError:
            return None
        except jwt.InvalidTokenError:
            return None
