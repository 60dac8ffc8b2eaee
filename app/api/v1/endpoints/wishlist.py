"""Routes API pour la liste de souhaits"""
from fastapi import APIRouter, Depends
from typing import List, Optional
from pydantic import BaseModel
from supabase import Client

from app.api.deps import get_language, get_optional_user, unwrap
from app.db import get_supabase
from app.domain.currency import DisplayLanguage
from app.models import CurrentUser
from app.services import get_wishlist_service

router = APIRouter()


class WishlistToggleResponse(BaseModel):
    property_id: str
    in_wishlist: bool


@router.get("/", response_model=List[str])
def list_wishlist(
    user: Optional[CurrentUser] = Depends(get_optional_user),
    lang: DisplayLanguage = Depends(get_language),
    db: Client = Depends(get_supabase)
):
    return unwrap(get_wishlist_service(db).list(user), lang)


@router.post("/{property_id}/toggle", response_model=WishlistToggleResponse)
def toggle_wishlist(
    property_id: str,
    user: Optional[CurrentUser] = Depends(get_optional_user),
    lang: DisplayLanguage = Depends(get_language),
    db: Client = Depends(get_supabase)
):
    in_wishlist = unwrap(get_wishlist_service(db).toggle(user, property_id), lang)
    return WishlistToggleResponse(property_id=property_id, in_wishlist=in_wishlist)
