"""
Routes API pour les annonces : publication par les hôtes et modération admin
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import List, Optional
from supabase import Client
import logging

from app.api.deps import (
    get_current_user, get_formatter, get_language, get_optional_user,
    notice_of, require_admin, unwrap
)
from app.db import get_supabase
from app.domain.currency import DisplayLanguage, PriceFormatter
from app.models import (
    ActionResponse, CurrentUser, Property, PropertyCategory, PropertyCreate,
    PropertyReject, PropertyStatus, PropertyUpdate, PropertyView
)
from app.services import get_property_service

router = APIRouter()
logger = logging.getLogger(__name__)


def to_view(prop: Property, formatter: PriceFormatter) -> PropertyView:
    return PropertyView(
        **prop.model_dump(),
        formatted_price=formatter.format_price(prop.price, prop.price_type),
    )


@router.post("/", response_model=PropertyView, status_code=201)
def create_property(
    property_data: PropertyCreate,
    user: CurrentUser = Depends(get_current_user),
    lang: DisplayLanguage = Depends(get_language),
    formatter: PriceFormatter = Depends(get_formatter),
    db: Client = Depends(get_supabase)
):
    """Créer une annonce (brouillon, ou soumise si publish=true)"""
    prop = unwrap(get_property_service(db).create(user, property_data), lang)
    return to_view(prop, formatter)


@router.get("/", response_model=List[PropertyView])
def list_properties(
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    category: Optional[PropertyCategory] = None,
    city: Optional[str] = None,
    status_filter: Optional[PropertyStatus] = Query(None, alias="status"),
    mine: bool = False,
    user: Optional[CurrentUser] = Depends(get_optional_user),
    lang: DisplayLanguage = Depends(get_language),
    formatter: PriceFormatter = Depends(get_formatter),
    db: Client = Depends(get_supabase)
):
    """Liste des annonces ; le filtre de statut n'est pris en compte que pour les admins"""
    result = get_property_service(db).list(
        viewer=user,
        status=status_filter,
        mine=mine,
        skip=skip,
        limit=limit,
        category=category.value if category else None,
        city=city,
    )
    return [to_view(p, formatter) for p in unwrap(result, lang)]


@router.get("/{property_id}", response_model=PropertyView)
def get_property(
    property_id: str,
    user: Optional[CurrentUser] = Depends(get_optional_user),
    lang: DisplayLanguage = Depends(get_language),
    formatter: PriceFormatter = Depends(get_formatter),
    db: Client = Depends(get_supabase)
):
    """Récupérer une annonce par son ID"""
    prop = unwrap(get_property_service(db).get(property_id, viewer=user), lang)
    return to_view(prop, formatter)


@router.put("/{property_id}", response_model=PropertyView)
def update_property(
    property_id: str,
    property_data: PropertyUpdate,
    user: CurrentUser = Depends(get_current_user),
    lang: DisplayLanguage = Depends(get_language),
    formatter: PriceFormatter = Depends(get_formatter),
    db: Client = Depends(get_supabase)
):
    """Mettre à jour une annonce existante"""
    if not property_data.model_dump(exclude_unset=True):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Aucune donnée à mettre à jour"
        )
    prop = unwrap(get_property_service(db).update(user, property_id, property_data), lang)
    return to_view(prop, formatter)


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_property(
    property_id: str,
    user: CurrentUser = Depends(get_current_user),
    lang: DisplayLanguage = Depends(get_language),
    db: Client = Depends(get_supabase)
):
    """Supprimer une annonce (propriétaire ou admin)"""
    unwrap(get_property_service(db).delete(user, property_id), lang)
    logger.info(f"Annonce {property_id} supprimée par {user.id}")
    return None


# ==================== Modération ====================

@router.post("/{property_id}/approve", response_model=ActionResponse)
def approve_property(
    property_id: str,
    admin: CurrentUser = Depends(require_admin),
    lang: DisplayLanguage = Depends(get_language),
    formatter: PriceFormatter = Depends(get_formatter),
    db: Client = Depends(get_supabase)
):
    result = get_property_service(db).approve(admin, property_id)
    prop = unwrap(result, lang)
    return ActionResponse(data=to_view(prop, formatter), warning=notice_of(result, lang))


@router.post("/{property_id}/reject", response_model=ActionResponse)
def reject_property(
    property_id: str,
    body: PropertyReject,
    admin: CurrentUser = Depends(require_admin),
    lang: DisplayLanguage = Depends(get_language),
    formatter: PriceFormatter = Depends(get_formatter),
    db: Client = Depends(get_supabase)
):
    result = get_property_service(db).reject(admin, property_id, body.reason)
    prop = unwrap(result, lang)
    return ActionResponse(data=to_view(prop, formatter), warning=notice_of(result, lang))
