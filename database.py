"""
MongoDB access for the finance tracker

The connection is configured with DATABASE_URL and DATABASE_NAME. When either
is missing, `db` stays None and the API reports the database as unavailable.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from pymongo import ASCENDING, DESCENDING, MongoClient, ReturnDocument

from schemas import FinancialRecord, NewRecord
from settings import settings

logger = logging.getLogger(__name__)

RECORDS = "transaction"
COUNTERS = "counters"


class DatabaseUnavailable(Exception):
    def __init__(self):
        super().__init__("Database not available. Check DATABASE_URL and DATABASE_NAME.")


# newest first, ties by id
RECORD_ORDER = [("date", DESCENDING), ("id", DESCENDING)]

db = None
if settings.DATABASE_URL and settings.DATABASE_NAME:
    _client = MongoClient(settings.DATABASE_URL)
    db = _client[settings.DATABASE_NAME]


def _utcnow() -> datetime:
    # Mongo keeps millisecond precision and returns naive UTC datetimes
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class RecordStore:
    """Insert and scan financial records. There is no update or delete."""

    def __init__(self, database):
        self.database = database
        self.records = database[RECORDS]
        self.counters = database[COUNTERS]

    def ensure_indexes(self) -> None:
        self.records.create_index([("id", ASCENDING)], unique=True)
        self.records.create_index(RECORD_ORDER)

    def ping(self) -> None:
        self.database.command("ping")

    def next_id(self) -> int:
        counter = self.counters.find_one_and_update(
            {"_id": RECORDS},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return int(counter["seq"])

    def insert(self, record: NewRecord) -> int:
        doc = record.model_dump()
        doc["id"] = self.next_id()
        doc["date"] = _utcnow()
        self.records.insert_one(doc)
        logger.debug("Stored %s record %s amount=%s", doc["type"], doc["id"], doc["amount"])
        return doc["id"]

    def list_all(self) -> List[FinancialRecord]:
        return self._find({})

    def list_in_range(self, start: datetime, end: datetime) -> List[FinancialRecord]:
        """Records whose date falls in [start, end], both bounds inclusive."""
        return self._find({"date": {"$gte": _naive_utc(start), "$lte": _naive_utc(end)}})

    def _find(self, filter_dict: Dict[str, Any]) -> List[FinancialRecord]:
        cursor = self.records.find(filter_dict, {"_id": 0}).sort(RECORD_ORDER)
        return [to_record(doc) for doc in cursor]


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def to_record(doc: Dict[str, Any]) -> FinancialRecord:
    d = dict(doc)
    d.pop("_id", None)
    date = d.get("date")
    if isinstance(date, datetime) and date.tzinfo is None:
        d["date"] = date.replace(tzinfo=timezone.utc)
    d["amount"] = float(d["amount"])
    return FinancialRecord(**d)


def get_store() -> RecordStore:
    if db is None:
        raise DatabaseUnavailable()
    return RecordStore(db)
