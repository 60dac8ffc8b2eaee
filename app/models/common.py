# app/models/common.py
from pydantic import BaseModel
from typing import Any, Optional


class ActionResponse(BaseModel):
    """Réponse d'une action réussie, avec avertissement éventuel à afficher"""
    data: Any = None
    warning: Optional[str] = None
