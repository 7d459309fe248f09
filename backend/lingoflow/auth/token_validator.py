"""JWT validation for session tokens issued by the account service."""

from typing import Any
import jwt

from .config import get_auth_settings


class TokenValidationError(Exception):
    """Raised when token validation fails."""

    def __init__(self, message: str, status_code: int = 401):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


def validate_token(token: str) -> dict[str, Any]:
    """
    Validate a session token and return its claims.

    Tokens are signed with the shared JWT_SECRET and must carry an ``id``
    claim (the user identifier); ``email`` is optional.

    Raises:
        TokenValidationError: If the token is invalid or auth is not configured.
    """
    settings = get_auth_settings()

    if not settings.is_configured():
        raise TokenValidationError(
            "Authentication not configured. Set JWT_SECRET.",
            status_code=500,
        )

    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError:
        raise TokenValidationError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise TokenValidationError(f"Invalid token: {str(e)}")

    if not claims.get("id"):
        raise TokenValidationError("Token is missing the id claim")

    return claims
