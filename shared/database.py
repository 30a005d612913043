"""
Supabase client factory.

The service never touches Supabase tables; the client is only used for
session validation against Supabase Auth. The anon key is sufficient for
that, the service role key is preferred when configured.
"""

from typing import Optional
from supabase import create_client, Client

from .config import get_settings

# Module-level client cache
_auth_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get the cached Supabase client used to validate user sessions.

    Returns:
        Supabase client configured with the service role key, or the
        anon key when no service role key is set

    Raises:
        RuntimeError: If the Supabase URL or every key is missing
    """
    global _auth_client

    if _auth_client is None:
        settings = get_settings()
        key = settings.supabase_service_role_key or settings.supabase_anon_key
        if not settings.supabase_url or not key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_ANON_KEY (or SUPABASE_SERVICE_ROLE_KEY) "
                "environment variables."
            )
        _auth_client = create_client(settings.supabase_url, key)

    return _auth_client


def reset_client_cache() -> None:
    """
    Reset the cached client.

    Useful for testing or when configuration changes.
    """
    global _auth_client
    _auth_client = None
