"""
Dépendances FastAPI partagées : identité, langue, paramètres, maintenance
"""
from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from supabase import Client
import logging

from app.core.config import settings
from app.crud import get_user_crud
from app.db import get_supabase
from app.domain.currency import DisplayLanguage, PriceFormatter, resolve_language
from app.domain.maintenance import GateDecision, evaluate_gate
from app.domain.results import (
    ErrorKind, Result, http_status_for, maintenance_notice, notice_for, warning_notice
)
from app.models import CurrentUser
from app.services.platform_settings import PlatformSettingsService

logger = logging.getLogger(__name__)


# ==================== Identité ====================

def _bearer_token(request: Request) -> Optional[str]:
    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer "):
        return header[len("Bearer "):].strip() or None
    return None


def get_optional_user(request: Request, db: Client = Depends(get_supabase)) -> Optional[CurrentUser]:
    """Utilisateur du jeton Bearer, ou None pour un visiteur anonyme"""
    token = _bearer_token(request)
    if token is None:
        return None

    try:
        response = db.auth.get_user(token)
    except Exception as e:
        logger.warning(f"⚠ Jeton refusé: {e}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Session invalide")

    user = getattr(response, "user", None)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Session invalide")

    try:
        role = get_user_crud(db).get_role(user.id)
    except Exception:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Rôle utilisateur illisible")

    return CurrentUser(id=user.id, email=getattr(user, "email", None), role=role)


def get_current_user(user: Optional[CurrentUser] = Depends(get_optional_user)) -> CurrentUser:
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Connexion requise")
    return user


def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Accès réservé aux administrateurs")
    return user


# ==================== Langue et devise ====================

def get_language(request: Request) -> DisplayLanguage:
    """Cookie du client, puis paramètre ?lang=, puis langue par défaut"""
    return resolve_language(
        stored=request.cookies.get(settings.LANGUAGE_COOKIE),
        query=request.query_params.get("lang"),
        default=settings.DEFAULT_LANGUAGE,
    )


def get_platform_settings(request: Request) -> PlatformSettingsService:
    return request.app.state.platform_settings


def get_formatter(
    lang: DisplayLanguage = Depends(get_language),
    platform: PlatformSettingsService = Depends(get_platform_settings),
) -> PriceFormatter:
    """Formateur construit à chaque requête pour la langue courante"""
    rates = platform.snapshot.currency_exchange_rates.as_table()
    return PriceFormatter.for_language(lang, rates)


# ==================== Maintenance ====================

def maintenance_gate(
    request: Request,
    lang: DisplayLanguage = Depends(get_language),
    user: Optional[CurrentUser] = Depends(get_optional_user),
    platform: PlatformSettingsService = Depends(get_platform_settings),
) -> None:
    path = request.url.path
    if path in settings.maintenance_exempt_paths_list:
        return

    decision = evaluate_gate(
        platform.state,
        platform.snapshot.maintenance_mode,
        user.role if user else None,
        path,
    )
    if decision == GateDecision.loading:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"status": "loading"},
            headers={"Retry-After": "1"},
        )
    if decision == GateDecision.block:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"status": "maintenance", "message": maintenance_notice(lang)},
        )


# ==================== Résultats ====================

def unwrap(result: Result, lang: DisplayLanguage):
    """Retourne la valeur d'un Result ou lève l'HTTPException correspondante"""
    if result.ok:
        return result.value
    if result.message:
        logger.info(f"Opération refusée ({result.error.value}): {result.message}")
    detail = {"error": result.error.value, "message": notice_for(result.error, lang)}
    if result.error == ErrorKind.validation and result.message:
        detail["reason"] = result.message
    raise HTTPException(status_code=http_status_for(result.error), detail=detail)


def notice_of(result: Result, lang: DisplayLanguage) -> Optional[str]:
    """Avertissement non bloquant (ex. notification non envoyée)"""
    return warning_notice(lang) if result.ok and result.warning else None
