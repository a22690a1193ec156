from datetime import datetime

import mongomock
import pytest

from database import RECORDS, RecordStore


@pytest.fixture
def store():
    s = RecordStore(mongomock.MongoClient()["finance_test"])
    s.ensure_indexes()
    return s


def add_record(store, type, amount, date, note="-", chat_id=None):
    """Write a record with a fixed date, bypassing the clock used by insert()."""
    record_id = store.next_id()
    store.database[RECORDS].insert_one({
        "id": record_id,
        "type": type,
        "amount": amount,
        "note": note,
        "chat_id": chat_id,
        "date": date.replace(tzinfo=None) if isinstance(date, datetime) else date,
    })
    return record_id
