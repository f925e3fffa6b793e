"""Logout screen flow: sign out, show a status line, then redirect home."""

import asyncio
import logging
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)

LOGGING_OUT = "Logging out..."
LOGGED_OUT = "Logged out! Redirecting..."
LOGOUT_FAILED = "Error logging out. Redirecting anyway..."

SUCCESS_DELAY_SECONDS = 1.0
FAILURE_DELAY_SECONDS = 1.5
HOME_PATH = "/"


async def run_logout_flow(
    logout: Callable[[], None],
    on_status: Callable[[str], None],
    navigate: Callable[[str], None],
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> bool:
    """Run the logout flow once and always end on the home page.

    `logout` is a blocking call and runs in a worker thread. Returns True
    when it succeeded.
    """
    on_status(LOGGING_OUT)

    try:
        await asyncio.to_thread(logout)
    except Exception as e:
        logger.warning(f"Logout failed: {e}")
        on_status(LOGOUT_FAILED)
        await sleep(FAILURE_DELAY_SECONDS)
        ok = False
    else:
        on_status(LOGGED_OUT)
        await sleep(SUCCESS_DELAY_SECONDS)
        ok = True

    navigate(HOME_PATH)
    return ok
