"""Vérification d'accès en mode maintenance (toujours joignable)"""
from fastapi import APIRouter, Depends, Query
from typing import Optional

from app.api.deps import get_optional_user, get_platform_settings
from app.domain.maintenance import GateDecision, evaluate_gate
from app.models import CurrentUser
from app.services.platform_settings import PlatformSettingsService

router = APIRouter()


@router.get("/access")
def check_maintenance_access(
    path: str = Query("/"),
    user: Optional[CurrentUser] = Depends(get_optional_user),
    platform: PlatformSettingsService = Depends(get_platform_settings)
):
    """
    Indique si la page demandée peut s'afficher.

    Le client affiche un indicateur neutre tant que status vaut "loading".
    """
    decision = evaluate_gate(
        platform.state,
        platform.snapshot.maintenance_mode,
        user.role if user else None,
        path,
    )
    return {
        "allowed": decision == GateDecision.allow,
        "status": decision.value,
    }
