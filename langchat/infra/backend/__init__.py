"""Supabase backend clients (httpx)."""

from langchat.infra.backend.probe import SupabaseReachabilityProbe
from langchat.infra.backend.session import SupabaseSessionService

__all__ = ["SupabaseReachabilityProbe", "SupabaseSessionService"]
