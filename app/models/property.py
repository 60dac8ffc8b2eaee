# app/models/property.py

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime
from enum import Enum

from app.domain.currency import PriceType


class PropertyStatus(str, Enum):
    """Statut de modération d'une annonce"""
    draft = "draft"          # Brouillon non soumis
    pending = "pending"      # En attente de validation admin
    active = "active"        # Publiée
    suspended = "suspended"  # Refusée ou suspendue


class PropertyCategory(str, Enum):
    sale = "sale"
    rent = "rent"
    short_stay = "short-stay"


class PropertyBase(BaseModel):
    title: str = Field(..., min_length=5, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    category: PropertyCategory
    price: float = Field(..., gt=0)  # Toujours en DZD
    price_type: PriceType = PriceType.total
    city: str = Field(..., min_length=2, max_length=100)
    district: Optional[str] = Field(None, max_length=100)
    address: Optional[str] = Field(None, max_length=255)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    area: Optional[float] = Field(None, gt=0)
    images: list[str] = Field(default_factory=list)


class PropertyCreate(PropertyBase):
    """Publication par un hôte : brouillon, ou soumission directe à la modération"""
    publish: bool = False


class PropertyUpdate(BaseModel):
    """Tous les champs sont optionnels pour la mise à jour"""
    title: Optional[str] = Field(None, min_length=5, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    category: Optional[PropertyCategory] = None
    price: Optional[float] = Field(None, gt=0)
    price_type: Optional[PriceType] = None
    city: Optional[str] = Field(None, min_length=2, max_length=100)
    district: Optional[str] = Field(None, max_length=100)
    address: Optional[str] = Field(None, max_length=255)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    area: Optional[float] = Field(None, gt=0)
    images: Optional[list[str]] = None
    submit: bool = False  # Passe un brouillon en attente de validation


class PropertyReject(BaseModel):
    reason: str = Field(..., max_length=1000)

    @field_validator("reason")
    @classmethod
    def reason_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le motif de refus est obligatoire")
        return v.strip()


class Property(PropertyBase):
    """Modèle complet avec métadonnées de modération"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str
    status: PropertyStatus = PropertyStatus.draft
    rejection_reason: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PropertyView(Property):
    """Annonce avec prix formaté dans la devise du visiteur"""
    formatted_price: str
