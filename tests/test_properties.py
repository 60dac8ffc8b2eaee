# tests/test_properties.py
"""Tests de la publication et de la modération des annonces"""
from conftest import add_property

from app.domain.results import ErrorKind
from app.models import CurrentUser, PropertyCreate, PropertyStatus, PropertyUpdate, UserRole
from app.services import PropertyService


def _create_data(**overrides):
    data = {
        "title": "Villa avec piscine à Tipaza",
        "category": "short-stay",
        "price": 25000,
        "price_type": "dailyPrice",
        "city": "Tipaza",
    }
    data.update(overrides)
    return PropertyCreate(**data)


def test_host_creates_draft_or_pending(db, host):
    service = PropertyService(db)
    draft = service.create(host, _create_data())
    submitted = service.create(host, _create_data(publish=True))

    assert draft.ok and draft.value.status == PropertyStatus.draft
    assert submitted.ok and submitted.value.status == PropertyStatus.pending
    assert all("publish" not in row for row in db.rows("properties"))


def test_plain_user_cannot_publish(db, guest):
    result = PropertyService(db).create(guest, _create_data())
    assert result.error == ErrorKind.forbidden


def test_submit_draft(db, host):
    row = add_property(db, status="draft")
    result = PropertyService(db).update(host, row["id"], PropertyUpdate(submit=True))
    assert result.ok
    assert result.value.status == PropertyStatus.pending


def test_edit_does_not_change_status(db, host):
    row = add_property(db, status="active")
    result = PropertyService(db).update(host, row["id"], PropertyUpdate(price=9000))
    assert result.ok
    assert result.value.price == 9000
    assert result.value.status == PropertyStatus.active


def test_other_host_cannot_edit(db):
    row = add_property(db, owner_id="host-1")
    intruder = CurrentUser(id="host-2", role=UserRole.HOST)
    result = PropertyService(db).update(intruder, row["id"], PropertyUpdate(price=1))
    assert result.error == ErrorKind.forbidden


def test_approve_pending_notifies_owner(db, admin):
    row = add_property(db, status="pending")
    result = PropertyService(db).approve(admin, row["id"])

    assert result.ok and result.warning is None
    assert result.value.status == PropertyStatus.active
    assert result.value.reviewed_by == admin.id

    notifications = db.rows("notifications")
    assert len(notifications) == 1
    assert notifications[0]["user_id"] == "host-1"
    assert notifications[0]["type"] == "property_approved"
    assert "Hydra" in notifications[0]["message"]


def test_approve_suspended_reactivates(db, admin):
    row = add_property(db, status="suspended", rejection_reason="Photos floues")
    result = PropertyService(db).approve(admin, row["id"])
    assert result.value.status == PropertyStatus.active
    assert result.value.rejection_reason is None


def test_approve_draft_is_refused_without_write(db, admin):
    row = add_property(db, status="draft")
    result = PropertyService(db).approve(admin, row["id"])

    assert not result.ok
    assert result.error == ErrorKind.invalid_transition
    assert db.rows("properties")[0]["status"] == "draft"
    assert db.rows("notifications") == []


def test_reject_requires_reason(db, admin):
    row = add_property(db, status="pending")
    result = PropertyService(db).reject(admin, row["id"], "   ")
    assert result.error == ErrorKind.validation
    assert db.rows("properties")[0]["status"] == "pending"


def test_reject_active_listing(db, admin):
    row = add_property(db, status="active")
    result = PropertyService(db).reject(admin, row["id"], "Annonce en double")

    assert result.ok
    assert result.value.status == PropertyStatus.suspended
    assert result.value.rejection_reason == "Annonce en double"
    assert "Annonce en double" in db.rows("notifications")[0]["message"]


def test_notification_failure_keeps_approval(db, admin):
    row = add_property(db, status="pending")
    db.failures.add(("notifications", "insert"))

    result = PropertyService(db).approve(admin, row["id"])

    assert result.ok
    assert result.warning
    assert db.rows("properties")[0]["status"] == "active"


def test_stale_status_is_a_conflict(db, admin):
    row = add_property(db, status="pending")
    service = PropertyService(db)
    stale = service.properties.get_by_id(row["id"])

    # Un autre admin a déjà refusé l'annonce
    db.rows("properties")[0]["status"] = "suspended"
    service.properties.get_by_id = lambda _id: stale

    result = service.approve(admin, row["id"])
    assert result.error == ErrorKind.conflict
    assert db.rows("properties")[0]["status"] == "suspended"


def test_non_admin_cannot_moderate(db, host):
    row = add_property(db, status="pending")
    assert PropertyService(db).approve(host, row["id"]).error == ErrorKind.forbidden


def test_delete_by_owner_or_admin(db, host, admin, guest):
    first = add_property(db, status="active")
    second = add_property(db, status="draft")
    service = PropertyService(db)

    assert service.delete(guest, first["id"]).error == ErrorKind.forbidden
    assert service.delete(host, first["id"]).ok
    assert service.delete(admin, second["id"]).ok
    assert db.rows("properties") == []
    assert service.delete(admin, second["id"]).error == ErrorKind.not_found


def test_visitors_only_see_active(db, guest):
    add_property(db, status="active")
    hidden = add_property(db, status="pending")
    service = PropertyService(db)

    listed = service.list(viewer=None).value
    assert [p.status for p in listed] == [PropertyStatus.active]
    assert service.get(hidden["id"], viewer=guest).error == ErrorKind.not_found


def test_store_error_is_reported(db, admin):
    row = add_property(db, status="pending")
    db.failures.add(("properties", "update"))
    result = PropertyService(db).approve(admin, row["id"])
    assert result.error == ErrorKind.store


def test_submit_with_edits_is_all_or_nothing(db, host):
    row = add_property(db, status="draft", price=8000.0)
    service = PropertyService(db)
    stale = service.properties.get_by_id(row["id"])

    # Soumis entre-temps depuis un autre onglet
    db.rows("properties")[0]["status"] = "pending"
    service.properties.get_by_id = lambda _id: stale

    result = service.update(host, row["id"], PropertyUpdate(price=9500, submit=True))

    assert result.error == ErrorKind.conflict
    assert db.rows("properties")[0]["price"] == 8000.0
    assert db.rows("properties")[0]["status"] == "pending"


def test_submit_with_edits_writes_both(db, host):
    row = add_property(db, status="draft")
    result = PropertyService(db).update(host, row["id"], PropertyUpdate(price=9500, submit=True))

    assert result.ok
    assert result.value.status == PropertyStatus.pending
    assert db.rows("properties")[0]["price"] == 9500
