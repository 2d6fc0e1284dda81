"""
Supabase client setup with lazy initialization.
"""

from supabase import Client, create_client

from core.config import SUPABASE_KEY, SUPABASE_URL

_supabase_client: Client | None = None


def get_supabase_client() -> Client:
    """Get or create the Supabase client (lazy initialization)."""
    global _supabase_client
    if _supabase_client is None:
        if not SUPABASE_URL or not SUPABASE_KEY:
            raise RuntimeError("SUPABASE_URL and SUPABASE_KEY must be set")
        _supabase_client = create_client(SUPABASE_URL, SUPABASE_KEY)
    return _supabase_client


def is_configured() -> bool:
    """Check whether backend credentials are present."""
    return bool(SUPABASE_URL and SUPABASE_KEY)
