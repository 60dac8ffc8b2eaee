# tests/test_models.py
"""
Tests des modèles Pydantic
Exécuter: pytest tests/test_models.py -v
"""
import pytest
from datetime import date
from pydantic import ValidationError

from app.domain.results import ErrorKind, Result
from app.models import (
    BookingCreate, HostBalance, MessageAdd,
    PropertyCategory, PropertyCreate, PropertyReject, PropertyStatus, PropertyUpdate,
    WithdrawalCreate
)


def test_property_create_valid():
    """Test création annonce valide"""
    property_obj = PropertyCreate(
        title="Bel appartement à Alger Centre",
        description="Appartement F4 rénové, proche du métro",
        category="rent",
        price=65000.0,
        price_type="monthlyPrice",
        city="Alger",
        bedrooms=3,
    )
    assert property_obj.category == PropertyCategory.rent
    assert property_obj.price == 65000.0
    assert property_obj.publish is False


def test_property_create_invalid_price():
    """Test prix négatif (doit échouer)"""
    with pytest.raises(ValidationError):
        PropertyCreate(title="Studio Oran", category="rent", price=-1000.0, city="Oran")


def test_property_unknown_category():
    with pytest.raises(ValidationError):
        PropertyCreate(title="Studio Oran", category="auction", price=1000.0, city="Oran")


def test_property_update_is_partial():
    update = PropertyUpdate(price=9000)
    assert update.model_dump(exclude_unset=True) == {"price": 9000}
    assert PropertyUpdate().submit is False


def test_reject_reason_is_trimmed():
    assert PropertyReject(reason="  Photos floues ").reason == "Photos floues"
    with pytest.raises(ValidationError):
        PropertyReject(reason="   ")


def test_booking_dates_must_be_ordered():
    BookingCreate(property_id="p1", check_in_date=date(2025, 7, 1), check_out_date=date(2025, 7, 2))
    with pytest.raises(ValidationError):
        BookingCreate(property_id="p1", check_in_date=date(2025, 7, 2), check_out_date=date(2025, 7, 2))


def test_withdrawal_amount_kept_as_typed():
    assert WithdrawalCreate(amount="1500").amount == "1500"
    assert WithdrawalCreate(amount=1500.5).amount == 1500.5
    assert WithdrawalCreate(amount=10).payment_account_id is None


def test_host_balance_available():
    balance = HostBalance(completed_earnings=10000, completed_withdrawals=3000, reserved_withdrawals=2000)
    assert balance.available == 5000


def test_message_not_empty():
    with pytest.raises(ValidationError):
        MessageAdd(content="")


def test_result_helpers():
    ok = Result.success(PropertyStatus.active, warning="notification")
    assert ok.ok and ok.value == PropertyStatus.active and ok.warning == "notification"

    failed = Result.failure(ErrorKind.conflict, "Statut modifié")
    assert not failed.ok
    assert failed.error == ErrorKind.conflict
    assert failed.value is None
