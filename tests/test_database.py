from datetime import datetime, timedelta, timezone

from conftest import add_record
from schemas import NewRecord


def test_insert_assigns_increasing_ids(store):
    first = store.insert(NewRecord(type="masuk", amount=50000, note="gaji"))
    second = store.insert(NewRecord(type="keluar", amount=20000, note="makan"))

    assert first == 1
    assert second == 2


def test_insert_stamps_utc_date(store):
    before = datetime.now(timezone.utc) - timedelta(seconds=1)
    store.insert(NewRecord(type="masuk", amount=1000, note="x", chat_id="99"))

    [record] = store.list_all()
    assert record.date.tzinfo is not None
    assert record.date >= before
    assert record.chat_id == "99"
    assert record.amount == 1000


def test_list_all_newest_first(store):
    base = datetime(2025, 3, 1, 8, 0)
    add_record(store, "masuk", 100, base)
    add_record(store, "keluar", 50, base + timedelta(hours=2))
    add_record(store, "masuk", 10, base + timedelta(hours=1))

    amounts = [r.amount for r in store.list_all()]

    assert amounts == [50, 10, 100]


def test_list_all_ties_broken_by_id(store):
    same = datetime(2025, 3, 1, 8, 0)
    ids = [add_record(store, "masuk", 100 + i, same) for i in range(3)]

    assert [r.id for r in store.list_all()] == list(reversed(ids))


def test_list_all_empty(store):
    assert store.list_all() == []


def test_list_in_range_is_inclusive(store):
    start = datetime(2025, 3, 1, 0, 0)
    end = datetime(2025, 3, 1, 23, 59, 59, 999000)
    add_record(store, "masuk", 1, start - timedelta(milliseconds=1))
    add_record(store, "masuk", 2, start)
    add_record(store, "masuk", 3, datetime(2025, 3, 1, 12, 0))
    add_record(store, "masuk", 4, end)
    add_record(store, "masuk", 5, end + timedelta(milliseconds=1))

    found = store.list_in_range(start.replace(tzinfo=timezone.utc), end.replace(tzinfo=timezone.utc))

    assert sorted(r.amount for r in found) == [2, 3, 4]
