"""
Versements aux hôtes : solde, demandes de retrait, traitement admin.

Le solde disponible est recalculé à chaque appel à partir des transactions
et des retraits. La création d'une demande pour un même hôte est
sérialisée dans le processus (recalcul + insertion sous verrou) ; entre
plusieurs processus, c'est une contrainte en base qui fait foi.
"""
from threading import Lock
from typing import Optional
from supabase import Client
import logging

from app.crud import get_notification_crud, get_withdrawal_crud
from app.domain.currency import DisplayLanguage, format_price, parse_amount
from app.domain.lifecycle import WITHDRAWAL_MACHINE, InvalidTransition
from app.domain.results import ErrorKind, Result
from app.models import (
    CurrentUser, HostBalance, NotificationCreate, NotificationType,
    PaymentAccountCreate, WithdrawalCreate, WithdrawalRequest, WithdrawalStatus
)

logger = logging.getLogger(__name__)

# Pool fixe : un même hôte retombe toujours sur le même verrou
LOCK_POOL_SIZE = 64
_host_locks = [Lock() for _ in range(LOCK_POOL_SIZE)]


def _lock_for(host_id: str) -> Lock:
    return _host_locks[hash(host_id) % LOCK_POOL_SIZE]


def compute_balance(transactions: list, withdrawals: list) -> HostBalance:
    """
    Solde d'un hôte.

    disponible = gains terminés − (retraits terminés + retraits pending/approved)
    """
    balance = HostBalance()
    for tx in transactions:
        amount = float(tx.get("host_amount") or 0)
        if tx.get("status") == "completed":
            balance.completed_earnings += amount
        elif tx.get("status") == "pending":
            balance.pending_earnings += amount

    for w in withdrawals:
        if w.status == WithdrawalStatus.completed:
            balance.completed_withdrawals += w.amount
        elif w.status in (WithdrawalStatus.pending, WithdrawalStatus.approved):
            balance.reserved_withdrawals += w.amount
    return balance


NOTIFICATIONS = {
    "approve": (NotificationType.withdrawal_approved, "Withdrawal Approved",
                "Your withdrawal request for {amount} has been approved."),
    "complete": (NotificationType.withdrawal_completed, "Withdrawal Completed",
                 "Your withdrawal request for {amount} has been processed."),
    "reject": (NotificationType.withdrawal_rejected, "Withdrawal Rejected",
               "Your withdrawal request for {amount} has been rejected."),
}


class PayoutService:
    def __init__(self, db: Client):
        self.withdrawals = get_withdrawal_crud(db)
        self.notifications = get_notification_crud(db)

    # ==================== Solde ====================

    def _balance(self, host_id: str) -> HostBalance:
        return compute_balance(
            self.withdrawals.get_host_transactions(host_id),
            self.withdrawals.get_all(host_user_id=host_id),
        )

    def get_balance(self, host: CurrentUser) -> Result:
        try:
            return Result.success(self._balance(host.id))
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))

    # ==================== Demandes ====================

    def request_withdrawal(self, host: CurrentUser, data: WithdrawalCreate) -> Result:
        """
        Crée une demande de retrait après validation.

        Aucun appel d'écriture n'est fait si le montant est invalide, si aucun
        compte n'est choisi ou si le montant dépasse le solde disponible.
        """
        amount = parse_amount(data.amount)
        if amount is None or amount <= 0:
            return Result.failure(ErrorKind.validation, "Veuillez saisir un montant valide")
        if not data.payment_account_id:
            return Result.failure(ErrorKind.validation, "Veuillez choisir un compte de paiement")

        with _lock_for(host.id):
            try:
                account = self.withdrawals.get_account(data.payment_account_id)
                if account is None or account.user_id != host.id:
                    return Result.failure(ErrorKind.validation, "Compte de paiement inconnu")

                balance = self._balance(host.id)
                if float(amount) > balance.available:
                    return Result.failure(
                        ErrorKind.validation,
                        f"Le montant dépasse le solde disponible ({balance.available:.2f} DZD)"
                    )

                request = self.withdrawals.create(host.id, account.id, float(amount))
            except Exception as e:
                return Result.failure(ErrorKind.store, str(e))

        return Result.success(request)

    def list_for_host(self, host: CurrentUser) -> Result:
        try:
            return Result.success(self.withdrawals.get_all(host_user_id=host.id))
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))

    def list_all(self, admin: CurrentUser, status: Optional[WithdrawalStatus] = None) -> Result:
        if not admin.is_admin:
            return Result.failure(ErrorKind.forbidden, "Action réservée aux administrateurs")
        try:
            return Result.success(self.withdrawals.get_all(status=status))
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))

    # ==================== Admin ====================

    def approve(self, admin: CurrentUser, withdrawal_id: str) -> Result:
        return self._transition(admin, withdrawal_id, "approve")

    def complete(self, admin: CurrentUser, withdrawal_id: str) -> Result:
        return self._transition(admin, withdrawal_id, "complete")

    def reject(self, admin: CurrentUser, withdrawal_id: str, reason: Optional[str] = None) -> Result:
        reason = reason.strip() if reason else None
        return self._transition(admin, withdrawal_id, "reject", reason or None)

    def _transition(self, admin: CurrentUser, withdrawal_id: str, action: str,
                    reason: Optional[str] = None) -> Result:
        if not admin.is_admin:
            return Result.failure(ErrorKind.forbidden, "Action réservée aux administrateurs")

        try:
            request: Optional[WithdrawalRequest] = self.withdrawals.get_by_id(withdrawal_id)
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))
        if request is None:
            return Result.failure(ErrorKind.not_found, f"Retrait {withdrawal_id} non trouvé")

        try:
            target = WITHDRAWAL_MACHINE.next_state(request.status, action)
        except InvalidTransition as e:
            return Result.failure(ErrorKind.invalid_transition, str(e))

        try:
            updated = self.withdrawals.update_status(withdrawal_id, target, request.status, reason)
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))
        if updated is None:
            return Result.failure(ErrorKind.conflict, "Statut modifié entre-temps")

        kind, title, message = NOTIFICATIONS[action]
        message = message.format(amount=format_price(request.amount, lang=DisplayLanguage.AR))
        if reason:
            message += f" Reason: {reason}"
        warning = self.notifications.notify_best_effort(NotificationCreate(
            user_id=request.host_user_id,
            title=title,
            message=message,
            type=kind,
            related_id=request.id,
        ))
        return Result.success(updated, warning=warning)

    # ==================== Comptes de paiement ====================

    def list_accounts(self, host: CurrentUser) -> Result:
        try:
            return Result.success(self.withdrawals.get_accounts(host.id))
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))

    def add_account(self, host: CurrentUser, data: PaymentAccountCreate) -> Result:
        if not host.is_host:
            return Result.failure(ErrorKind.forbidden, "Seuls les hôtes reçoivent des versements")
        try:
            return Result.success(self.withdrawals.add_account(host.id, data))
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))

    def delete_account(self, host: CurrentUser, account_id: str) -> Result:
        try:
            deleted = self.withdrawals.delete_account(host.id, account_id)
        except Exception as e:
            return Result.failure(ErrorKind.store, str(e))
        if not deleted:
            return Result.failure(ErrorKind.not_found, f"Compte {account_id} non trouvé")
        return Result.success(True)


def get_payout_service(db: Client) -> PayoutService:
    return PayoutService(db)
