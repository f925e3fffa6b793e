"""
Best-effort local mirror of the signed-in user's profile.

The cache is never the source of truth. Every helper here swallows every
failure, whatever the store raises, so a broken cache can only cost a refetch.
"""

import json
import logging
from typing import Optional

from workly.storage import KeyValueStore
from workly.types import AuthUser

logger = logging.getLogger(__name__)

PREFIX = "workly:profile:"


def profile_key(user_id: str) -> str:
    return f"{PREFIX}{user_id}"


def load_cached_profile(store: KeyValueStore, user_id: str) -> Optional[AuthUser]:
    try:
        raw = store.get_item(profile_key(user_id))
        if not raw:
            return None
        return AuthUser.from_dict(json.loads(raw))
    except Exception as e:
        logger.debug(f"Ignoring unreadable cached profile for {user_id}: {e}")
        return None


def save_cached_profile(store: KeyValueStore, user: AuthUser) -> None:
    try:
        store.set_item(profile_key(user.id), json.dumps(user.to_dict()))
    except Exception as e:
        logger.debug(f"Failed to cache profile for {user.id}: {e}")


def clear_cached_profile(store: KeyValueStore, user_id: str) -> None:
    try:
        store.remove_item(profile_key(user_id))
    except Exception as e:
        logger.debug(f"Failed to clear cached profile for {user_id}: {e}")
