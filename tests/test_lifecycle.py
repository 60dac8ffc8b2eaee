# tests/test_lifecycle.py
"""Tests des machines à états et des onglets de réservation"""
from datetime import date, timedelta

import pytest

from app.domain.lifecycle import (
    BOOKING_MACHINE, CONVERSATION_MACHINE, PROPERTY_MACHINE, WITHDRAWAL_MACHINE,
    InvalidTransition, booking_bucket, is_past, is_upcoming
)
from app.models import (
    BookingBucket, BookingStatus, ConversationStatus, PropertyStatus, WithdrawalStatus
)

TODAY = date(2025, 6, 15)


def test_property_pending_only_approve_or_reject():
    assert sorted(PROPERTY_MACHINE.allowed_actions(PropertyStatus.pending)) == ["approve", "reject"]


def test_property_transitions():
    assert PROPERTY_MACHINE.next_state("draft", "submit") == PropertyStatus.pending
    assert PROPERTY_MACHINE.next_state("pending", "approve") == PropertyStatus.active
    assert PROPERTY_MACHINE.next_state("suspended", "approve") == PropertyStatus.active
    assert PROPERTY_MACHINE.next_state("pending", "reject") == PropertyStatus.suspended
    assert PROPERTY_MACHINE.next_state("active", "reject") == PropertyStatus.suspended


def test_property_approve_draft_is_refused():
    with pytest.raises(InvalidTransition):
        PROPERTY_MACHINE.next_state(PropertyStatus.draft, "approve")
    assert not PROPERTY_MACHINE.can("draft", "approve")


def test_unknown_state_is_refused():
    assert not PROPERTY_MACHINE.can("archived", "approve")


def test_booking_transitions():
    assert BOOKING_MACHINE.next_state("pending", "confirm") == BookingStatus.confirmed
    assert BOOKING_MACHINE.next_state("confirmed", "complete") == BookingStatus.completed
    assert BOOKING_MACHINE.next_state("pending", "cancel") == BookingStatus.cancelled
    assert BOOKING_MACHINE.next_state("confirmed", "cancel") == BookingStatus.cancelled
    for action in ("confirm", "complete", "cancel"):
        assert not BOOKING_MACHINE.can("cancelled", action)
        assert not BOOKING_MACHINE.can("completed", action)


def test_withdrawal_transitions():
    assert WITHDRAWAL_MACHINE.next_state("pending", "approve") == WithdrawalStatus.approved
    assert WITHDRAWAL_MACHINE.next_state("approved", "complete") == WithdrawalStatus.completed
    assert WITHDRAWAL_MACHINE.next_state("pending", "reject") == WithdrawalStatus.rejected
    assert not WITHDRAWAL_MACHINE.can("approved", "reject")
    assert not WITHDRAWAL_MACHINE.can("pending", "complete")


def test_conversation_is_reversible():
    assert CONVERSATION_MACHINE.next_state("active", "close") == ConversationStatus.closed
    assert CONVERSATION_MACHINE.next_state("closed", "reopen") == ConversationStatus.active


def test_confirmed_booking_ended_yesterday_is_past():
    yesterday = TODAY - timedelta(days=1)
    bucket = booking_bucket("confirmed", TODAY - timedelta(days=4), yesterday, today=TODAY)
    assert bucket == BookingBucket.past


def test_upcoming_and_ongoing():
    assert booking_bucket("pending", TODAY, TODAY + timedelta(days=2), today=TODAY) == BookingBucket.upcoming
    assert booking_bucket("confirmed", TODAY - timedelta(days=1), TODAY + timedelta(days=2), today=TODAY) == BookingBucket.ongoing


def test_cancelled_wins():
    assert booking_bucket("cancelled", TODAY + timedelta(days=5), TODAY + timedelta(days=7), today=TODAY) == BookingBucket.cancelled
    assert not is_upcoming("cancelled", TODAY + timedelta(days=5), today=TODAY)


def test_completed_is_past_even_in_future():
    assert is_past(BookingStatus.completed, TODAY + timedelta(days=3), today=TODAY)
    assert booking_bucket("completed", TODAY + timedelta(days=1), TODAY + timedelta(days=3), today=TODAY) == BookingBucket.past


def test_today_defaults_to_wall_clock():
    real_today = date.today()
    assert booking_bucket("pending", real_today + timedelta(days=1), real_today + timedelta(days=2)) == BookingBucket.upcoming
