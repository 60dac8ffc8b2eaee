"""
Routes API pour les versements aux hôtes : solde, comptes, retraits
"""
from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
from pydantic import BaseModel
from supabase import Client

from app.api.deps import (
    get_current_user, get_formatter, get_language, notice_of, require_admin, unwrap
)
from app.db import get_supabase
from app.domain.currency import DisplayLanguage, PriceFormatter
from app.models import (
    ActionResponse, CurrentUser, PaymentAccount, PaymentAccountCreate,
    WithdrawalCreate, WithdrawalReject, WithdrawalRequest, WithdrawalStatus
)
from app.services import get_payout_service

router = APIRouter()


class BalanceResponse(BaseModel):
    completed_earnings: float
    pending_earnings: float
    completed_withdrawals: float
    reserved_withdrawals: float
    available: float
    formatted_available: str


@router.get("/balance", response_model=BalanceResponse)
def get_balance(
    user: CurrentUser = Depends(get_current_user),
    lang: DisplayLanguage = Depends(get_language),
    formatter: PriceFormatter = Depends(get_formatter),
    db: Client = Depends(get_supabase)
):
    """Solde recalculé à partir des transactions à chaque appel"""
    balance = unwrap(get_payout_service(db).get_balance(user), lang)
    return BalanceResponse(
        **balance.model_dump(),
        available=balance.available,
        formatted_available=formatter.format_price(balance.available),
    )


# ==================== Comptes de paiement ====================

@router.get("/accounts", response_model=List[PaymentAccount])
def list_accounts(
    user: CurrentUser = Depends(get_current_user),
    lang: DisplayLanguage = Depends(get_language),
    db: Client = Depends(get_supabase)
):
    return unwrap(get_payout_service(db).list_accounts(user), lang)


@router.post("/accounts", response_model=PaymentAccount, status_code=status.HTTP_201_CREATED)
def add_account(
    account: PaymentAccountCreate,
    user: CurrentUser = Depends(get_current_user),
    lang: DisplayLanguage = Depends(get_language),
    db: Client = Depends(get_supabase)
):
    return unwrap(get_payout_service(db).add_account(user, account), lang)


@router.delete("/accounts/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_account(
    account_id: str,
    user: CurrentUser = Depends(get_current_user),
    lang: DisplayLanguage = Depends(get_language),
    db: Client = Depends(get_supabase)
):
    unwrap(get_payout_service(db).delete_account(user, account_id), lang)
    return None


# ==================== Retraits (hôte) ====================

@router.get("/withdrawals", response_model=List[WithdrawalRequest])
def list_my_withdrawals(
    user: CurrentUser = Depends(get_current_user),
    lang: DisplayLanguage = Depends(get_language),
    db: Client = Depends(get_supabase)
):
    return unwrap(get_payout_service(db).list_for_host(user), lang)


@router.post("/withdrawals", response_model=WithdrawalRequest, status_code=status.HTTP_201_CREATED)
def request_withdrawal(
    body: WithdrawalCreate,
    user: CurrentUser = Depends(get_current_user),
    lang: DisplayLanguage = Depends(get_language),
    db: Client = Depends(get_supabase)
):
    return unwrap(get_payout_service(db).request_withdrawal(user, body), lang)


# ==================== Retraits (admin) ====================

@router.get("/admin/withdrawals", response_model=List[WithdrawalRequest])
def list_all_withdrawals(
    status_filter: Optional[WithdrawalStatus] = Query(None, alias="status"),
    admin: CurrentUser = Depends(require_admin),
    lang: DisplayLanguage = Depends(get_language),
    db: Client = Depends(get_supabase)
):
    return unwrap(get_payout_service(db).list_all(admin, status_filter), lang)


@router.post("/admin/withdrawals/{withdrawal_id}/approve", response_model=ActionResponse)
def approve_withdrawal(
    withdrawal_id: str,
    admin: CurrentUser = Depends(require_admin),
    lang: DisplayLanguage = Depends(get_language),
    db: Client = Depends(get_supabase)
):
    result = get_payout_service(db).approve(admin, withdrawal_id)
    return ActionResponse(data=unwrap(result, lang), warning=notice_of(result, lang))


@router.post("/admin/withdrawals/{withdrawal_id}/complete", response_model=ActionResponse)
def complete_withdrawal(
    withdrawal_id: str,
    admin: CurrentUser = Depends(require_admin),
    lang: DisplayLanguage = Depends(get_language),
    db: Client = Depends(get_supabase)
):
    result = get_payout_service(db).complete(admin, withdrawal_id)
    return ActionResponse(data=unwrap(result, lang), warning=notice_of(result, lang))


@router.post("/admin/withdrawals/{withdrawal_id}/reject", response_model=ActionResponse)
def reject_withdrawal(
    withdrawal_id: str,
    body: Optional[WithdrawalReject] = None,
    admin: CurrentUser = Depends(require_admin),
    lang: DisplayLanguage = Depends(get_language),
    db: Client = Depends(get_supabase)
):
    reason = body.reason if body else None
    result = get_payout_service(db).reject(admin, withdrawal_id, reason)
    return ActionResponse(data=unwrap(result, lang), warning=notice_of(result, lang))
