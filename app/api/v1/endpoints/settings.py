"""Routes API pour les paramètres de la plateforme"""
from fastapi import APIRouter, Body, Depends
from typing import Any, Dict

from app.api.deps import get_language, get_platform_settings, require_admin, unwrap
from app.domain.currency import DisplayLanguage
from app.models import CurrentUser, PlatformSettings
from app.services.platform_settings import PlatformSettingsService

router = APIRouter()


@router.get("/public")
def get_public_settings(platform: PlatformSettingsService = Depends(get_platform_settings)):
    """Paramètres lisibles par tous"""
    return platform.snapshot.public_view()


@router.get("/", response_model=PlatformSettings)
def get_all_settings(
    admin: CurrentUser = Depends(require_admin),
    platform: PlatformSettingsService = Depends(get_platform_settings)
):
    return platform.snapshot


@router.put("/{key}")
def update_setting(
    key: str,
    value: Dict[str, Any] = Body(...),
    admin: CurrentUser = Depends(require_admin),
    lang: DisplayLanguage = Depends(get_language),
    platform: PlatformSettingsService = Depends(get_platform_settings)
):
    """Valide puis enregistre la valeur d'une clé"""
    validated = unwrap(platform.update(admin, key, value), lang)
    return {"key": key, "value": validated.model_dump()}
