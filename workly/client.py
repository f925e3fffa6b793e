"""Supabase client factory for the app side."""

import logging
from typing import Optional

from supabase import Client, ClientOptions, create_client

from workly.config import ClientConfig, load_client_config
from workly.storage import KeyValueStore, SQLiteKeyValueStore

logger = logging.getLogger(__name__)


def create_workly_client(
    config: Optional[ClientConfig] = None,
    store: Optional[KeyValueStore] = None,
) -> Client:
    """Create a Supabase client whose auth session lives in `store`."""
    config = config or load_client_config()
    store = store or SQLiteKeyValueStore()
    logger.debug(f"Creating Supabase client for {config.supabase_url} ({config.platform})")
    return create_client(
        config.supabase_url,
        config.supabase_key,
        options=ClientOptions(storage=store, persist_session=True),
    )
