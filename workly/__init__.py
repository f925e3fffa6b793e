"""
Workly client utilities.

Local profile cache, avatar uploads, native shell configuration and the
logout flow used by the Workly app, plus a small `workly` command line.
"""

from workly.types import AuthUser, UserRole

__version__ = "0.1.0"
__all__ = ["AuthUser", "UserRole"]
