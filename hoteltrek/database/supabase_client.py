"""
Supabase clients for the hotel, booking, review and profile tables.

The anon client runs queries on behalf of the API. The service-role client is
only used for auth admin calls (reading and updating a guest's user_metadata)
and for the seed script; without a service-role key it falls back to the anon
client.
"""
import logging
from typing import Optional

from supabase import create_client, Client

from hoteltrek.config import settings

logger = logging.getLogger(__name__)


class SupabaseNotConfigured(RuntimeError):
    pass


class SupabaseClient:
    _client: Optional[Client] = None
    _service_client: Optional[Client] = None

    @staticmethod
    def _create(key: Optional[str]) -> Client:
        if not settings.supabase_url or not key:
            raise SupabaseNotConfigured("Supabase is not configured (SUPABASE_URL / SUPABASE_KEY)")
        return create_client(settings.supabase_url, key)

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = cls._create(settings.supabase_key)
            logger.info("Supabase client created for %s", settings.supabase_url)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = cls._create(settings.supabase_service_role_key)
        return cls._service_client or cls.get_client()

    @classmethod
    def reset_client(cls):
        cls._client = None
        cls._service_client = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_service_supabase() -> Client:
    return SupabaseClient.get_service_client()
