"""Core module - config, database, dependencies, exceptions."""

from app.core.config import get_settings, Settings
from app.core.database import Database
from app.core.dependencies import get_current_user, get_current_user_optional, get_now
from app.core.exceptions import (
    AppException,
    NotFoundException,
    UnauthorizedException,
    TransientFetchException,
)

__all__ = [
    "get_settings",
    "Settings",
    "Database",
    "get_current_user",
    "get_current_user_optional",
    "get_now",
    "AppException",
    "NotFoundException",
    "UnauthorizedException",
    "TransientFetchException",
]
