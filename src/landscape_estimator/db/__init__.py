"""Database clients and utilities."""

from .supabase import ACTIVE_PROPERTIES_TABLE, clear_supabase_client_cache, get_supabase_client

__all__ = ["ACTIVE_PROPERTIES_TABLE", "clear_supabase_client_cache", "get_supabase_client"]
