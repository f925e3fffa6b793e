"""Which remote image hosts the app is allowed to render."""

from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import List, Optional
from urllib.parse import urlparse

from workly.types import AuthUser

STORAGE_PATHNAME = "/storage/v1/object/**"
PRODUCTION_STORAGE_HOST = "jcclzdqjpttktshqrcvr.supabase.co"


@dataclass(frozen=True)
class RemotePattern:
    protocol: str
    hostname: str
    pathname: str

    def matches(self, url: str) -> bool:
        parsed = urlparse(url)
        if parsed.scheme != self.protocol or parsed.hostname != self.hostname:
            return False
        # "**" spans segments; fnmatch's "*" already does
        return fnmatchcase(parsed.path, self.pathname.replace("**", "*"))


def _hostname(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    try:
        return urlparse(url).hostname
    except ValueError:
        return None


def image_remote_patterns(supabase_url: Optional[str]) -> List[RemotePattern]:
    patterns = []
    host = _hostname(supabase_url)
    if host:
        patterns.append(RemotePattern("https", host, STORAGE_PATHNAME))
    patterns.append(RemotePattern("https", PRODUCTION_STORAGE_HOST, STORAGE_PATHNAME))
    return patterns


def is_allowed_image_url(url: str, patterns: List[RemotePattern]) -> bool:
    return any(pattern.matches(url) for pattern in patterns)


def avatar_src(user: AuthUser, patterns: List[RemotePattern]) -> Optional[str]:
    if user.avatar_url and is_allowed_image_url(user.avatar_url, patterns):
        return user.avatar_url
    return None
