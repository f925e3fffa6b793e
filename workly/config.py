"""Client-side configuration read from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_SERVER_URL = "https://worklyprod.vercel.app"
NATIVE_PLATFORMS = ("ios", "android")


def get_workly_home() -> Path:
    """Directory for local client state (`$WORKLY_HOME`, default `~/.workly`)."""
    home = os.environ.get("WORKLY_HOME")
    if home:
        return Path(home).expanduser()
    return Path.home() / ".workly"


@dataclass
class ClientConfig:
    supabase_url: str
    supabase_key: str
    platform: str = "web"
    server_url: str = DEFAULT_SERVER_URL

    @property
    def is_native(self) -> bool:
        return self.platform in NATIVE_PLATFORMS


def load_client_config(platform: Optional[str] = None) -> ClientConfig:
    """Read the Supabase project and platform from the environment.

    Raises ValueError if the Supabase URL or public key is missing.
    """
    url = os.environ.get("SUPABASE_URL")
    key = os.environ.get("SUPABASE_PUBLISHABLE_KEY") or os.environ.get("SUPABASE_ANON_KEY")
    if not url:
        raise ValueError("SUPABASE_URL must be set")
    if not key:
        raise ValueError("Either SUPABASE_PUBLISHABLE_KEY or SUPABASE_ANON_KEY must be set")

    return ClientConfig(
        supabase_url=url,
        supabase_key=key,
        platform=(platform or os.environ.get("WORKLY_PLATFORM") or "web").lower(),
        server_url=os.environ.get("WORKLY_SERVER_URL") or DEFAULT_SERVER_URL,
    )
