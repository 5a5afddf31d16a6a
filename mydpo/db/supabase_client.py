from __future__ import annotations

from functools import lru_cache

from dotenv import load_dotenv
from supabase import Client, create_client

from mydpo.core.config import settings

# make sure .env is loaded for scripts that bypass Settings
load_dotenv()


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    """
    Singleton-style client, created on first use.
    """
    if not settings.supabase_enabled:
        raise RuntimeError("SUPABASE_URL or SUPABASE_SERVICE_KEY not set")

    return create_client(
        settings.supabase_url,
        settings.supabase_service_key,
    )
