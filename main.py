"""Holibayt - Application principale"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.api.v1.api import api_router
from app.crud import get_settings_crud
from app.db import get_supabase
from app.services.platform_settings import PlatformSettingsService
import logging

logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="API Holibayt - Annonces, réservations, modération et versements",
    version=settings.VERSION,
    debug=settings.DEBUG
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    try:
        db = get_supabase()
        logger.info("✓ Supabase connecté")
    except Exception as e:
        logger.error(f"✗ Erreur Supabase: {e}")
        raise

    # Paramètres chargés une fois puis rechargés périodiquement (et à chaque notification si le client la gère)
    platform_settings = PlatformSettingsService(get_settings_crud(db), poll_interval=settings.SETTINGS_POLL_SECONDS)
    platform_settings.start()
    app.state.platform_settings = platform_settings


@app.on_event("shutdown")
async def shutdown_event():
    platform_settings = getattr(app.state, "platform_settings", None)
    if platform_settings is not None:
        platform_settings.stop()


@app.get("/")
async def root():
    return {
        "app": settings.APP_NAME,
        "version": settings.VERSION,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}

# Routes API
app.include_router(api_router, prefix="/api/v1")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
