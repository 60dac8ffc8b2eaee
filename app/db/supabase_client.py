"""
Client Supabase partagé par tout le processus (tables, auth).

Le client est synchrone : les canaux temps réel n'y sont pas disponibles,
les paramètres de la plateforme sont donc aussi rechargés périodiquement.
"""
from supabase import create_client, Client
from functools import lru_cache
import logging

from app.core.config import settings

logger = logging.getLogger(__name__)


class SupabaseClient:
    """Connexion unique vers le projet Supabase configuré"""

    _instance: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._instance is None:
            try:
                logger.info(f"Connexion à Supabase ({settings.SUPABASE_URL})")
                cls._instance = create_client(
                    supabase_url=settings.SUPABASE_URL,
                    supabase_key=settings.SUPABASE_KEY
                )
                logger.info("✓ Client Supabase prêt")
            except Exception as e:
                logger.error(f"✗ Configuration Supabase invalide: {e}")
                raise

        return cls._instance


@lru_cache()
def get_supabase_client() -> Client:
    return SupabaseClient.get_client()


def get_supabase() -> Client:
    """Dépendance FastAPI : client injecté dans les endpoints et services"""
    return get_supabase_client()


__all__ = ["SupabaseClient", "get_supabase_client", "get_supabase"]
