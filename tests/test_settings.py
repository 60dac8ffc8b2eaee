# tests/test_settings.py
"""Tests des paramètres de la plateforme et de leur rechargement"""
import time

from app.crud.settings import SettingsCRUD
from app.domain.maintenance import SettingsState
from app.domain.results import ErrorKind
from app.models import PlatformSettings, SettingKey
from app.models.settings import build_snapshot, parse_setting
from app.services.platform_settings import PlatformSettingsService


def _put(db, key, value):
    db.rows("platform_settings").append({"setting_key": key, "setting_value": value})


def test_defaults_when_table_empty(platform):
    assert platform.state == SettingsState.ready
    snapshot = platform.snapshot
    assert snapshot.maintenance_mode is False
    assert snapshot.commission_rates.default == 15
    assert snapshot.commenting_enabled.properties is True


def test_maintenance_requires_real_boolean():
    assert parse_setting(SettingKey.general_settings, {"maintenance_mode": True}).maintenance_mode is True
    assert parse_setting(SettingKey.general_settings, {"maintenance_mode": "true"}).maintenance_mode is False
    assert parse_setting(SettingKey.general_settings, {"maintenance_mode": 1}).maintenance_mode is False


def test_malformed_fields_fall_back_to_defaults():
    rates = parse_setting(SettingKey.commission_rates, {"default": "abc", "sale": 7})
    assert rates.default == 15
    assert rates.sale == 7

    assert parse_setting(SettingKey.email_settings, "not an object").sender_name == "Holibayt"
    assert parse_setting(SettingKey.email_settings, None).booking_confirmation is True


def test_unknown_keys_are_ignored():
    snapshot = build_snapshot([
        {"setting_key": "legacy_flag", "setting_value": {"x": 1}},
        {"setting_key": "general_settings", "setting_value": {"platform_name": "Holibayt DZ"}},
    ])
    assert snapshot.general_settings.platform_name == "Holibayt DZ"


def test_refresh_failure_keeps_last_snapshot(db, platform):
    _put(db, "general_settings", {"maintenance_mode": True})
    assert platform.refresh()

    db.failures.add("platform_settings")
    assert platform.refresh() is False
    assert platform.state == SettingsState.ready
    assert platform.snapshot.maintenance_mode is True


def test_first_load_failure_is_error_state(db):
    db.failures.add("platform_settings")
    service = PlatformSettingsService(SettingsCRUD(db))
    service.start()
    assert service.state == SettingsState.error
    assert service.snapshot == PlatformSettings()


def test_realtime_change_triggers_reload(db):
    db.realtime = True
    service = PlatformSettingsService(SettingsCRUD(db))
    service.start()
    assert service.snapshot.maintenance_mode is False

    _put(db, "general_settings", {"maintenance_mode": True})
    channel = db.channels[0]
    assert channel.name == "platform_settings_changes"
    channel.emit({"eventType": "UPDATE"})

    assert service.snapshot.maintenance_mode is True

    service.stop()
    assert db.channels == []


def test_listeners_and_unsubscribe(platform):
    seen = []
    unsubscribe = platform.subscribe(lambda s: seen.append(s.maintenance_mode))

    platform.refresh()
    unsubscribe()
    platform.refresh()

    assert seen == [False]


def test_failing_listener_does_not_break_others(platform):
    seen = []

    def broken(_snapshot):
        raise RuntimeError("boom")

    platform.subscribe(broken)
    platform.subscribe(lambda s: seen.append(True))
    assert platform.refresh()
    assert seen == [True]


def test_admin_update(db, platform, admin):
    result = platform.update(admin, "general_settings", {"maintenance_mode": True})

    assert result.ok
    assert platform.snapshot.maintenance_mode is True
    row = db.rows("platform_settings")[0]
    assert row["updated_by"] == admin.id
    assert row["setting_value"]["maintenance_mode"] is True

    platform.update(admin, "general_settings", {"maintenance_mode": False})
    assert len(db.rows("platform_settings")) == 1
    assert platform.snapshot.maintenance_mode is False


def test_update_validation(platform, admin, guest):
    assert platform.update(guest, "general_settings", {}).error == ErrorKind.forbidden
    assert platform.update(admin, "unknown_key", {}).error == ErrorKind.not_found
    assert platform.update(admin, "general_settings", {"maintenance_mode": "yes"}).error == ErrorKind.validation
    assert platform.update(admin, "commission_rates", {"default": 150}).error == ErrorKind.validation


def test_exchange_rates_keep_dinar_base(platform, admin):
    platform.update(admin, "currency_exchange_rates", {"DZD": 2, "USD": 0.008})
    table = platform.snapshot.currency_exchange_rates.as_table()
    assert table["DZD"] == 1.0
    assert table["USD"] == 0.008


def _wait_for(condition, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.01)
    return condition()


def test_sync_client_reloads_by_polling(db):
    """Sans temps réel (client synchrone), le rechargement périodique prend le relais"""
    service = PlatformSettingsService(SettingsCRUD(db), poll_interval=0.01)
    service.start()
    try:
        assert db.channels == []
        assert service.snapshot.maintenance_mode is False

        _put(db, "general_settings", {"maintenance_mode": True})
        assert _wait_for(lambda: service.snapshot.maintenance_mode is True)
    finally:
        service.stop()


def test_polling_recovers_from_error_state(db):
    db.failures.add("platform_settings")
    service = PlatformSettingsService(SettingsCRUD(db), poll_interval=0.01)
    service.start()
    try:
        assert service.state == SettingsState.error

        _put(db, "general_settings", {"maintenance_mode": True})
        db.failures.clear()
        assert _wait_for(lambda: service.state == SettingsState.ready)
        assert service.snapshot.maintenance_mode is True
    finally:
        service.stop()


def test_stop_ends_polling(db):
    service = PlatformSettingsService(SettingsCRUD(db), poll_interval=0.01)
    service.start()
    service.stop()

    _put(db, "general_settings", {"maintenance_mode": True})
    time.sleep(0.05)
    assert service.snapshot.maintenance_mode is False
