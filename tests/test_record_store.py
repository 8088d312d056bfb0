"""Record store contract."""
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from uuid import uuid4

import pytest

from app.models import PaymentRecord
from app.utils.errors import ConflictError


def _record(**overrides) -> PaymentRecord:
    values = dict(
        id=str(uuid4()),
        local_id=str(uuid4()),
        amount=Decimal("5.00"),
        currency="MXN",
        payee="https://wallet.example/merchant",
        status="pending",
        resource_url=None,
        remote_response={"status": 202, "headers": {}, "json": {}},
    )
    values.update(overrides)
    return PaymentRecord(**values)


def test_insert_persists_record(store):
    record = store.insert(_record())

    fetched = store.get(record.id)
    assert fetched is not None
    assert fetched.local_id == record.local_id
    assert fetched.amount == Decimal("5.00")
    assert fetched.created_at is not None
    assert store.count() == 1


def test_insert_rejects_duplicate_id(store):
    first = store.insert(_record())

    with pytest.raises(ConflictError):
        store.insert(_record(id=first.id))
    assert store.count() == 1


def test_insert_rejects_duplicate_local_id(store):
    first = store.insert(_record())

    with pytest.raises(ConflictError):
        store.insert(_record(local_id=first.local_id))
    assert store.count() == 1


def test_update_by_unknown_local_id_is_a_noop(store, make_record):
    existing = make_record(status="created")

    result = store.update_by_local_id("no-such-local-id", "completed", {"status": 200})

    assert result is None
    assert store.count() == 1
    assert store.get(existing.id).status == "created"


def test_update_refreshes_status_and_response(store, make_record):
    record = make_record(status="created", resource_url="https://wallet.example/ip/1")

    updated = store.update_by_local_id(record.local_id, "completed", {"status": 200, "json": {"x": 1}})

    assert updated is not None
    assert updated.status == "completed"
    assert updated.remote_response == {"status": 200, "json": {"x": 1}}
    assert updated.resource_url == "https://wallet.example/ip/1"


def test_update_never_clears_resource_url(store, make_record):
    record = make_record(resource_url="https://wallet.example/ip/1")

    store.update_by_local_id(record.local_id, "webhook_updated", {}, resource_url=None)
    assert store.get(record.id).resource_url == "https://wallet.example/ip/1"

    store.update_by_local_id(record.local_id, "completed", {}, resource_url="https://wallet.example/ip/2")
    assert store.get(record.id).resource_url == "https://wallet.example/ip/2"


def test_list_recent_is_newest_first_and_capped(store, make_record):
    base = datetime(2026, 10, 1, 12, 0, tzinfo=UTC)
    oldest = make_record(created_at=base)
    middle = make_record(created_at=base + timedelta(minutes=1))
    newest = make_record(created_at=base + timedelta(minutes=2))

    rows = store.list_recent(100)
    assert [row.id for row in rows] == [newest.id, middle.id, oldest.id]

    assert [row.id for row in store.list_recent(2)] == [newest.id, middle.id]


def test_list_recent_breaks_timestamp_ties_by_id(store, make_record):
    same_instant = datetime(2026, 10, 1, 12, 0, tzinfo=UTC)
    records = [make_record(created_at=same_instant) for _ in range(4)]

    expected = sorted((record.id for record in records), reverse=True)
    assert [row.id for row in store.list_recent(100)] == expected
