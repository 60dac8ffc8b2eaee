"""Configuration de l'application Holibayt"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Paramètres de configuration"""

    # Application
    APP_NAME: str = "Holibayt"
    VERSION: str = "1.0.0"
    DEBUG: bool = True

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # CORS - URLs autorisées
    CORS_ORIGINS: str = "http://localhost:8080,http://localhost:3000,http://127.0.0.1:3000"

    # Supabase
    SUPABASE_URL: str = "http://localhost:54321"
    SUPABASE_KEY: str = ""

    # Langue d'affichage par défaut et cookie où le client la mémorise
    DEFAULT_LANGUAGE: str = "EN"
    LANGUAGE_COOKIE: str = "lang"

    # Chemins jamais bloqués par le mode maintenance (en plus de /login)
    MAINTENANCE_EXEMPT_PATHS: str = "/health"

    # Intervalle de rechargement des paramètres (secondes, 0 pour désactiver)
    SETTINGS_POLL_SECONDS: float = 15.0

    @property
    def cors_origins_list(self) -> List[str]:
        """Transforme CORS_ORIGINS en liste"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def maintenance_exempt_paths_list(self) -> List[str]:
        return [p.strip() for p in self.MAINTENANCE_EXEMPT_PATHS.split(",") if p.strip()]

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


# Instance globale
settings = Settings()
