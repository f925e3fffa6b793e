"""
Client-side session operations.

Thin wrappers over Supabase Auth that return the app's `AuthUser` shape,
loaded from the `profiles` table.
"""

import logging
from typing import Optional

from workly.types import AuthUser

logger = logging.getLogger(__name__)

PROFILES_TABLE = "profiles"


class AuthError(Exception):
    """Raised when a sign-in, sign-out or profile load fails."""


def _fetch_profile(client, user_id: str) -> Optional[AuthUser]:
    result = client.table(PROFILES_TABLE).select("*").eq("id", user_id).limit(1).execute()
    if not result.data:
        return None
    return AuthUser.from_profile_row(result.data[0])


def login(client, email: str, password: str) -> AuthUser:
    try:
        response = client.auth.sign_in_with_password({"email": email, "password": password})
    except Exception as e:
        raise AuthError(getattr(e, "message", None) or str(e)) from e

    if not response or not response.user:
        raise AuthError("Login failed")

    try:
        user = _fetch_profile(client, response.user.id)
    except (KeyError, TypeError, ValueError) as e:
        raise AuthError("Failed to load user profile") from e
    if user is None:
        raise AuthError("Failed to load user profile")

    logger.info(f"Signed in as {user.id} ({user.role.value})")
    return user


def logout(client) -> None:
    try:
        client.auth.sign_out()
    except Exception as e:
        raise AuthError(getattr(e, "message", None) or str(e)) from e


def get_current_user(client) -> Optional[AuthUser]:
    """The signed-in user's profile, or None when there is no valid session."""
    try:
        response = client.auth.get_user()
    except Exception as e:
        logger.debug(f"No current user: {e}")
        return None

    if not response or not response.user:
        return None

    try:
        return _fetch_profile(client, response.user.id)
    except (KeyError, TypeError, ValueError) as e:
        logger.warning(f"Profile for {response.user.id} is malformed: {e}")
        return None
