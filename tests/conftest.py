# tests/conftest.py
"""
Fixtures communes.

FakeSupabase reproduit la petite partie du client supabase-py utilisée par
la couche CRUD : table().select/insert/update/delete/upsert, filtres eq/in_,
order, range, limit, execute ; plus les canaux temps réel et auth.get_user.
"""
import itertools
import uuid
from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from app.crud.settings import SettingsCRUD
from app.models import CurrentUser, UserRole
from app.services.platform_settings import PlatformSettingsService


class StoreError(Exception):
    pass


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    def __init__(self, db, table, op, payload=None, on_conflict=None):
        self.db = db
        self.table = table
        self.op = op
        self.payload = payload
        self.on_conflict = on_conflict
        self.columns = None
        self.filters = []
        self.ordering = []
        self.bounds = None
        self.max_rows = None

    def select(self, columns="*"):
        if columns != "*":
            self.columns = [c.strip() for c in columns.split(",")]
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column, desc=False):
        self.ordering.append((column, desc))
        return self

    def range(self, start, end):
        self.bounds = (start, end)
        return self

    def limit(self, count):
        self.max_rows = count
        return self

    def _matches(self, row):
        return all(f(row) for f in self.filters)

    def execute(self):
        if (self.table, self.op) in self.db.failures or self.table in self.db.failures:
            raise StoreError(f"{self.table}.{self.op} indisponible")

        rows = self.db.tables.setdefault(self.table, [])

        if self.op == "select":
            result = [dict(r) for r in rows if self._matches(r)]
            for column, desc in reversed(self.ordering):
                result.sort(key=lambda r: (r.get(column) is None, str(r.get(column))), reverse=desc)
            if self.bounds:
                result = result[self.bounds[0]:self.bounds[1] + 1]
            if self.max_rows is not None:
                result = result[:self.max_rows]
            if self.columns:
                result = [{c: r.get(c) for c in self.columns} for r in result]
            return FakeResponse(result)

        if self.op == "insert":
            row = self.db.new_row(self.payload)
            rows.append(row)
            return FakeResponse([dict(row)])

        if self.op == "upsert":
            key = self.on_conflict
            for existing in rows:
                if existing.get(key) == self.payload.get(key):
                    existing.update(self.payload)
                    return FakeResponse([dict(existing)])
            row = self.db.new_row(self.payload)
            rows.append(row)
            return FakeResponse([dict(row)])

        if self.op == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(self.payload)
                    updated.append(dict(row))
            return FakeResponse(updated)

        if self.op == "delete":
            deleted = [r for r in rows if self._matches(r)]
            self.db.tables[self.table] = [r for r in rows if not self._matches(r)]
            return FakeResponse([dict(r) for r in deleted])

        raise ValueError(self.op)


class FakeTable:
    def __init__(self, db, name):
        self.db = db
        self.name = name

    def select(self, columns="*"):
        return FakeQuery(self.db, self.name, "select").select(columns)

    def insert(self, data):
        return FakeQuery(self.db, self.name, "insert", data)

    def upsert(self, data, on_conflict="id"):
        return FakeQuery(self.db, self.name, "upsert", data, on_conflict)

    def update(self, data):
        return FakeQuery(self.db, self.name, "update", data)

    def delete(self):
        return FakeQuery(self.db, self.name, "delete")


class FakeChannel:
    def __init__(self, name):
        self.name = name
        self.callbacks = []
        self.subscribed = False

    def on_postgres_changes(self, event, schema=None, table=None, callback=None):
        self.callbacks.append(callback)
        return self

    def subscribe(self):
        self.subscribed = True
        return self

    def emit(self, payload=None):
        for callback in self.callbacks:
            callback(payload or {})


class FakeAuth:
    def __init__(self):
        self.tokens = {}

    def get_user(self, token):
        if token not in self.tokens:
            raise StoreError("invalid JWT")
        user_id, email = self.tokens[token]
        return SimpleNamespace(user=SimpleNamespace(id=user_id, email=email))


class FakeSupabase:
    """
    Par défaut se comporte comme le client synchrone de supabase-py :
    channel() lève NotImplementedError. realtime=True simule un client
    qui gère les canaux.
    """

    def __init__(self, realtime=False):
        self.realtime = realtime
        self.tables = {}
        self.failures = set()
        self.channels = []
        self.auth = FakeAuth()
        self._clock = itertools.count()

    def table(self, name):
        return FakeTable(self, name)

    def new_row(self, payload):
        row = dict(payload)
        row.setdefault("id", str(uuid.uuid4()))
        # Horodatage croissant pour des tris déterministes
        stamp = (datetime(2025, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=next(self._clock))).isoformat()
        row.setdefault("created_at", stamp)
        row.setdefault("updated_at", stamp)
        return row

    def rows(self, name):
        return self.tables.setdefault(name, [])

    def channel(self, name):
        if not self.realtime:
            raise NotImplementedError(
                "This feature isn't available in the sync client. "
                "You can use the realtime feature in the async client only."
            )
        channel = FakeChannel(name)
        self.channels.append(channel)
        return channel

    def remove_channel(self, channel):
        self.channels.remove(channel)


# ==================== Fixtures ====================

@pytest.fixture
def db():
    return FakeSupabase()


@pytest.fixture
def admin():
    return CurrentUser(id="admin-1", email="admin@holibayt.com", role=UserRole.ADMIN)


@pytest.fixture
def host():
    return CurrentUser(id="host-1", email="host@holibayt.com", role=UserRole.HOST)


@pytest.fixture
def guest():
    return CurrentUser(id="guest-1", email="guest@holibayt.com", role=UserRole.USER)


@pytest.fixture
def platform(db):
    service = PlatformSettingsService(SettingsCRUD(db))
    service.refresh()
    return service


def add_property(db, owner_id="host-1", status="pending", **fields):
    row = {
        "title": "Appartement F3 à Hydra",
        "description": "Bel appartement lumineux",
        "category": "short-stay",
        "price": 8000.0,
        "price_type": "dailyPrice",
        "city": "Alger",
        "images": [],
        "owner_id": owner_id,
        "status": status,
    }
    row.update(fields)
    row = db.new_row(row)
    db.rows("properties").append(row)
    return row


def add_booking(db, property_id, user_id="guest-1", status="pending",
                check_in=None, check_out=None, total_amount=24000.0):
    check_in = check_in or date.today() + timedelta(days=10)
    check_out = check_out or check_in + timedelta(days=3)
    row = db.new_row({
        "property_id": property_id,
        "user_id": user_id,
        "check_in_date": check_in.isoformat(),
        "check_out_date": check_out.isoformat(),
        "guests_count": 2,
        "total_amount": total_amount,
        "status": status,
    })
    db.rows("bookings").append(row)
    return row
