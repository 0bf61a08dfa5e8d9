from hoteltrek.database.supabase_client import get_supabase, get_service_supabase

__all__ = ["get_supabase", "get_service_supabase"]
