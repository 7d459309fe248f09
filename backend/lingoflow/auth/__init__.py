"""Authentication module: resolves the user every card operation is scoped to."""

from .config import get_auth_settings, AuthSettings
from .dependencies import get_current_user, CurrentUser
from .token_validator import validate_token, TokenValidationError

__all__ = [
    "get_auth_settings",
    "AuthSettings",
    "get_current_user",
    "CurrentUser",
    "validate_token",
    "TokenValidationError",
]
