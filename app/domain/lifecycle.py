# app/domain/lifecycle.py
"""
Machines à états des entités : annonce, réservation, retrait, conversation.

Chaque machine est une table {action: {état_source: état_cible}}. Les
services lisent l'état persisté, demandent la transition ici, puis écrivent
le nouvel état sous condition de l'ancien.
"""

from datetime import date
from enum import Enum
from typing import Dict, List, Optional

from app.models.booking import BookingBucket, BookingStatus
from app.models.conversation import ConversationStatus
from app.models.property import PropertyStatus
from app.models.withdrawal import WithdrawalStatus


class InvalidTransition(Exception):
    """Action non autorisée depuis l'état courant"""

    def __init__(self, machine: str, state, action: str):
        self.machine = machine
        self.state = state
        self.action = action
        state_value = state.value if isinstance(state, Enum) else state
        super().__init__(f"{machine}: action '{action}' impossible depuis '{state_value}'")


class StateMachine:
    def __init__(self, name: str, states: type, transitions: Dict[str, Dict[Enum, Enum]]):
        self.name = name
        self.states = states
        self.transitions = transitions

    def _coerce(self, state) -> Optional[Enum]:
        if isinstance(state, self.states):
            return state
        try:
            return self.states(state)
        except ValueError:
            return None

    def can(self, state, action: str) -> bool:
        current = self._coerce(state)
        return current is not None and current in self.transitions.get(action, {})

    def next_state(self, state, action: str):
        """Retourne l'état cible ou lève InvalidTransition."""
        current = self._coerce(state)
        if current is None or current not in self.transitions.get(action, {}):
            raise InvalidTransition(self.name, state, action)
        return self.transitions[action][current]

    def allowed_actions(self, state) -> List[str]:
        return [action for action in self.transitions if self.can(state, action)]


PROPERTY_MACHINE = StateMachine(
    "property",
    PropertyStatus,
    {
        "submit": {PropertyStatus.draft: PropertyStatus.pending},
        "approve": {
            PropertyStatus.pending: PropertyStatus.active,
            PropertyStatus.suspended: PropertyStatus.active,
        },
        "reject": {
            PropertyStatus.pending: PropertyStatus.suspended,
            PropertyStatus.active: PropertyStatus.suspended,
        },
    },
)

BOOKING_MACHINE = StateMachine(
    "booking",
    BookingStatus,
    {
        "confirm": {BookingStatus.pending: BookingStatus.confirmed},
        "complete": {BookingStatus.confirmed: BookingStatus.completed},
        "cancel": {
            BookingStatus.pending: BookingStatus.cancelled,
            BookingStatus.confirmed: BookingStatus.cancelled,
        },
    },
)

WITHDRAWAL_MACHINE = StateMachine(
    "withdrawal",
    WithdrawalStatus,
    {
        "approve": {WithdrawalStatus.pending: WithdrawalStatus.approved},
        "complete": {WithdrawalStatus.approved: WithdrawalStatus.completed},
        "reject": {WithdrawalStatus.pending: WithdrawalStatus.rejected},
    },
)

CONVERSATION_MACHINE = StateMachine(
    "conversation",
    ConversationStatus,
    {
        "close": {ConversationStatus.active: ConversationStatus.closed},
        "reopen": {ConversationStatus.closed: ConversationStatus.active},
    },
)


# ==========================================
# Vues calculées des réservations
# ==========================================

def _today(today: Optional[date]) -> date:
    # Relu à chaque appel, jamais mis en cache
    return today if today is not None else date.today()


def is_upcoming(status, check_in: date, today: Optional[date] = None) -> bool:
    return BookingStatus(status) != BookingStatus.cancelled and check_in >= _today(today)


def is_past(status, check_out: date, today: Optional[date] = None) -> bool:
    return check_out < _today(today) or BookingStatus(status) == BookingStatus.completed


def booking_bucket(status, check_in: date, check_out: date, today: Optional[date] = None) -> BookingBucket:
    """
    Onglet d'affichage d'une réservation.

    Priorité : annulée, passée, à venir ; sinon le séjour est en cours.
    """
    today = _today(today)
    if BookingStatus(status) == BookingStatus.cancelled:
        return BookingBucket.cancelled
    if is_past(status, check_out, today):
        return BookingBucket.past
    if is_upcoming(status, check_in, today):
        return BookingBucket.upcoming
    return BookingBucket.ongoing
