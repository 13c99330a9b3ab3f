import logging
from supabase import create_client, Client
from paymirror.config.settings import settings

logger = logging.getLogger(__name__)


class SupabaseClient:
    """Process-wide Supabase clients, created on first use and shared by every request"""
    _client: Client = None
    _service_client: Client = None

    @staticmethod
    def _connect(key: str, key_name: str) -> Client:
        if not settings.supabase_url or not key:
            raise RuntimeError(f"Supabase is not configured: set SUPABASE_URL and {key_name}")
        logger.info(f"Connecting to Supabase at {settings.supabase_url} using {key_name}")
        return create_client(settings.supabase_url, key)

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = cls._connect(settings.supabase_key, "SUPABASE_KEY")
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; bypasses RLS. Falls back to the anon client when no key is set."""
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = cls._connect(
                settings.supabase_service_role_key, "SUPABASE_SERVICE_ROLE_KEY"
            )
        return cls._service_client or cls.get_client()


def get_supabase() -> Client:
    """FastAPI dependency for the shared client"""
    return SupabaseClient.get_client()
