"""Authentication utilities for Workly backend.

Access tokens are issued by Supabase Auth; this module only verifies them.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from .config import Settings, get_settings
from .logging_config import get_logger

logger = get_logger("workly.auth")

# Cookie set by the web client's Supabase session
AUTH_COOKIE_NAME = "sb-access-token"

# Make bearer optional to allow cookie fallback
security = HTTPBearer(auto_error=False)

JWT_ALGORITHM = "HS256"


def _unauthorized(detail: str = "Not authenticated") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_token(token: str, settings: Settings) -> dict:
    """Decode and validate a Supabase access token with the project secret."""
    try:
        return jwt.decode(
            token,
            settings.supabase_jwt_secret,
            algorithms=[JWT_ALGORITHM],
            audience=settings.supabase_jwt_audience,
        )
    except JWTError:
        raise _unauthorized()


async def verify_with_supabase(token: str, settings: Settings) -> dict:
    """Ask Supabase Auth who owns the token."""
    # Import here to avoid circular imports
    from .database import get_supabase_client

    db = get_supabase_client(settings)
    try:
        response = db.auth.get_user(token)
    except Exception as e:
        logger.warning(f"Token verification failed: {e}")
        raise _unauthorized()

    user = getattr(response, "user", None)
    if not user:
        raise _unauthorized()
    return {"sub": user.id, "email": getattr(user, "email", None)}


class AuthContext:
    """Authenticated caller, as identified by their access token."""

    def __init__(self, user_id: str, email: str | None = None, role: str | None = None):
        self.user_id = user_id
        self.email = email
        self.role = role


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_settings)],
    request: Request,
) -> AuthContext:
    """Get the current user from the bearer token or session cookie."""
    # Try Authorization header first (native shell), then fall back to cookie (web)
    token = credentials.credentials if credentials else request.cookies.get(AUTH_COOKIE_NAME)
    if not token:
        raise _unauthorized()

    if settings.supabase_jwt_secret:
        payload = decode_token(token, settings)
    else:
        payload = await verify_with_supabase(token, settings)

    user_id = payload.get("sub")
    if not user_id:
        raise _unauthorized("Invalid token payload")

    return AuthContext(user_id=user_id, email=payload.get("email"), role=payload.get("role"))


# Type alias for dependency injection
CurrentUser = Annotated[AuthContext, Depends(get_current_user)]
