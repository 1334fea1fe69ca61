import logging
from typing import Any

import httpx
from supabase import create_client
from supabase.lib.client_options import SyncClientOptions

from config import SUPABASE_URL, SUPABASE_KEY

logger = logging.getLogger(__name__)


class _MissingSupabase:
    def __getattr__(self, name: str) -> Any:
        raise RuntimeError(
            "Supabase client not configured: SUPABASE_URL and SUPABASE_KEY must be set in the environment or .env"
        )


def make_client(url: str, key: str):
    # Long timeout: audit and booking tables can be slow over the REST API
    http_client = httpx.Client(timeout=30.0)
    options = SyncClientOptions(httpx_client=http_client)
    return create_client(url, key, options=options)


if not SUPABASE_URL or not SUPABASE_KEY:
    # Avoid raising at import time; provide a clear runtime error when used.
    logger.warning("SUPABASE_URL/SUPABASE_KEY not set; database access disabled")
    supabase = _MissingSupabase()
else:
    supabase = make_client(SUPABASE_URL, SUPABASE_KEY)
