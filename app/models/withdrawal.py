# app/models/withdrawal.py
"""
Modèles Pydantic pour les versements aux hôtes :
comptes de paiement, demandes de retrait et solde.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Union
from datetime import datetime
from enum import Enum


class WithdrawalStatus(str, Enum):
    pending = "pending"        # Demande envoyée par l'hôte
    approved = "approved"      # Validée par un admin, virement à faire
    completed = "completed"    # Virement effectué
    rejected = "rejected"      # Refusée (motif optionnel)


class PaymentAccountCreate(BaseModel):
    bank_name: str = Field(..., min_length=2, max_length=200)
    account_holder_name: str = Field(..., min_length=2, max_length=200)
    account_number: str = Field(..., min_length=4, max_length=64)
    iban: Optional[str] = Field(None, max_length=64)
    swift_code: Optional[str] = Field(None, max_length=32)
    bank_address: Optional[str] = Field(None, max_length=255)
    account_type: str = "checking"
    country: str = "DZ"
    currency: str = "DZD"


class PaymentAccount(PaymentAccountCreate):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    is_verified: bool = False
    created_at: Optional[datetime] = None


class WithdrawalCreate(BaseModel):
    """
    Demande de retrait saisie par l'hôte.

    Le montant est gardé tel que saisi : la validation (nombre > 0, pas plus
    que le solde disponible) est faite par le service avant toute écriture.
    """
    amount: Union[float, str]
    payment_account_id: Optional[str] = None


class WithdrawalReject(BaseModel):
    reason: Optional[str] = Field(None, max_length=1000)


class WithdrawalRequest(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    host_user_id: str
    payment_account_id: str
    amount: float
    status: WithdrawalStatus = WithdrawalStatus.pending
    rejection_reason: Optional[str] = None
    processed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class HostBalance(BaseModel):
    """Solde d'un hôte, recalculé à chaque demande"""
    completed_earnings: float = 0
    pending_earnings: float = 0
    completed_withdrawals: float = 0
    reserved_withdrawals: float = 0  # pending + approved

    @property
    def available(self) -> float:
        return self.completed_earnings - (self.completed_withdrawals + self.reserved_withdrawals)
