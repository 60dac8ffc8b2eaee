"""Accès à la base Supabase"""
from .supabase_client import SupabaseClient, get_supabase_client, get_supabase

__all__ = ["SupabaseClient", "get_supabase_client", "get_supabase"]
