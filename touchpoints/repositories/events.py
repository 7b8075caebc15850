"""
Event Store Adapter

One repository per touchpoint collection. All collections are append-only
apart from the accumulating website upsert; every row carries a generated id
and created_at/updated_at stamped from the store clock.
"""
import logging
import re
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterator, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from touchpoints.core.errors import ConflictError, StorageError
from touchpoints.repositories import indexes

logger = logging.getLogger(__name__)

EVENT_KINDS = ("website", "store", "signup")


def utcnow() -> datetime:
    # Mongo stores naive UTC; keep reads and writes comparable
    return datetime.now(timezone.utc).replace(tzinfo=None)


def date_filter(start_date: Optional[str] = None, end_date: Optional[str] = None) -> Dict[str, Any]:
    """Inclusive range on the ISO `date` field; a missing bound is unbounded"""
    bounds: Dict[str, Any] = {}
    if start_date:
        bounds["$gte"] = start_date
    if end_date:
        bounds["$lte"] = end_date
    return {"date": bounds} if bounds else {}


def to_record(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Normalize a stored document for callers: `_id` becomes string `id`"""
    out = {"id": str(doc["_id"])} if "_id" in doc else {}
    for k, v in doc.items():
        if k == "_id":
            continue
        out[k] = str(v) if isinstance(v, ObjectId) else v
    return out


def _object_id(record_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(record_id)
    except (InvalidId, TypeError):
        return None


class EventRepository:
    """Reads and writes for a single touchpoint collection"""

    def __init__(self, kind: str, collection: Collection, clock: Callable[[], datetime] = utcnow):
        self.kind = kind
        self.collection = collection
        self.clock = clock

    def _fail(self, op: str, exc: Exception) -> StorageError:
        logger.error(f"{self.kind} {op} failed: {exc}")
        return StorageError(
            f"Storage failure during {self.kind} {op}",
            details={"collection": self.collection.name, "operation": op}
        )

    def count(self, start_date: Optional[str] = None, end_date: Optional[str] = None) -> int:
        """Count rows whose date is inside the inclusive range"""
        try:
            return self.collection.count_documents(date_filter(start_date, end_date))
        except PyMongoError as e:
            raise self._fail("count", e)

    def find(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        location: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """List rows newest first, optionally filtered by date range and location substring"""
        query = date_filter(start_date, end_date)
        if location:
            query["location"] = {"$regex": re.escape(location), "$options": "i"}
        try:
            cursor = self.collection.find(query).sort([("created_at", DESCENDING), ("_id", DESCENDING)])
            return [to_record(d) for d in cursor]
        except PyMongoError as e:
            raise self._fail("find", e)

    def find_by_owner(self, contact: str) -> List[Dict[str, Any]]:
        """All rows for one contact, oldest first"""
        try:
            cursor = self.collection.find({"owner_contact": contact}).sort(
                [("created_at", ASCENDING), ("_id", ASCENDING)]
            )
            return [to_record(d) for d in cursor]
        except PyMongoError as e:
            raise self._fail("find_by_owner", e)

    def iter_all(self, fields: Optional[List[str]] = None) -> Iterator[Dict[str, Any]]:
        """Scan the collection in natural order"""
        projection = {f: 1 for f in fields} if fields else None
        try:
            for doc in self.collection.find({}, projection):
                yield to_record(doc)
        except PyMongoError as e:
            raise self._fail("scan", e)

    def get(self, record_id: str) -> Optional[Dict[str, Any]]:
        oid = _object_id(record_id)
        if oid is None:
            return None
        try:
            doc = self.collection.find_one({"_id": oid})
        except PyMongoError as e:
            raise self._fail("get", e)
        return to_record(doc) if doc else None

    def insert(self, data: Dict[str, Any]) -> Dict[str, Any]:
        now = self.clock()
        doc = {**data, "created_at": now, "updated_at": now}
        try:
            result = self.collection.insert_one(doc)
        except PyMongoError as e:
            raise self._fail("insert", e)
        doc["_id"] = result.inserted_id
        return to_record(doc)

    def update(self, record_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Overwrite the given fields; None when the id does not exist"""
        oid = _object_id(record_id)
        if oid is None:
            return None
        try:
            result = self.collection.update_one(
                {"_id": oid},
                {"$set": {**data, "updated_at": self.clock()}}
            )
            if not result.matched_count:
                return None
            doc = self.collection.find_one({"_id": oid})
        except DuplicateKeyError:
            raise ConflictError(f"Another {self.kind} record already uses these key fields")
        except PyMongoError as e:
            raise self._fail("update", e)
        return to_record(doc) if doc else None

    def delete(self, record_id: str) -> bool:
        oid = _object_id(record_id)
        if oid is None:
            return False
        try:
            return self.collection.delete_one({"_id": oid}).deleted_count > 0
        except PyMongoError as e:
            raise self._fail("delete", e)

    def upsert_accumulate(
        self,
        key: Dict[str, Any],
        inc: Dict[str, int],
        set_fields: Dict[str, Any],
        insert_fields: Dict[str, Any],
    ) -> tuple:
        """
        Atomically add `inc` to the row matching `key`, or create it

        The increment, the last-write-wins fields and the insert-only fields go
        out in a single find_one_and_update(upsert=True), and the returned
        document is the row as this write left it. A unique index on the key
        turns a racing double insert into DuplicateKeyError, which is retried
        once and then lands as an update.

        Stored counters are always positive, so the row was created by this
        call exactly when every counter equals its increment.

        Returns:
            (created, record)
        """
        now = self.clock()
        update = {
            "$inc": inc,
            "$set": {**set_fields, "updated_at": now},
            "$setOnInsert": {**insert_fields, "created_at": now},
        }
        for attempt in range(2):
            try:
                doc = self.collection.find_one_and_update(
                    key, update, upsert=True, return_document=ReturnDocument.AFTER
                )
            except DuplicateKeyError:
                if attempt:
                    raise self._fail("upsert", DuplicateKeyError("duplicate key after retry"))
                logger.info(f"Concurrent insert for {self.kind} key {key}, retrying as update")
                continue
            except PyMongoError as e:
                raise self._fail("upsert", e)
            created = all(doc.get(field) == amount for field, amount in inc.items())
            return created, to_record(doc)


class EventStore:
    """The three touchpoint collections behind one handle"""

    def __init__(
        self,
        db: Database,
        collections: Optional[Dict[str, str]] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        names = {"website": "website_visits", "store": "store_visits", "signup": "login_signup"}
        names.update(collections or {})
        self.db = db
        self.website = EventRepository("website", db[names["website"]], clock)
        self.store = EventRepository("store", db[names["store"]], clock)
        self.signup = EventRepository("signup", db[names["signup"]], clock)
        self.indexes_ready = False

    def ensure_indexes(self) -> None:
        """
        Create the collection indexes once per store

        Until this succeeds the website (ip, date) key is not unique on the
        server, so callers about to accumulate must call it first. Raises
        StorageError while the server cannot be reached.
        """
        if self.indexes_ready:
            return
        try:
            indexes.ensure_indexes(self)
        except PyMongoError as e:
            logger.error(f"Index creation failed: {e}")
            raise StorageError(
                "Could not create collection indexes",
                details={"operation": "ensure_indexes"}
            )
        self.indexes_ready = True

    def repository(self, kind: str) -> EventRepository:
        if kind not in EVENT_KINDS:
            raise ValueError(f"Unknown event kind: {kind}")
        return getattr(self, kind)
