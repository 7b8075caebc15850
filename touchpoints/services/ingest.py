"""
Event ingestion service
"""
import logging

from touchpoints.models.events import SignupIn, StoreVisitIn, WebsiteVisitIn
from touchpoints.models.views import IngestResult
from touchpoints.repositories.events import EventStore

logger = logging.getLogger(__name__)


def record_website_visit(store: EventStore, visit: WebsiteVisitIn) -> IngestResult:
    """
    Ingest a website visit, accumulating into the existing (ip, date) row

    An existing row gets number_of_visits added to its count while
    page_visits, website_duration and time are replaced by the incoming
    values. A merged row's time is therefore only the latest sub-visit.
    The unique (ip, date) index is created first if startup could not
    create it. Storage errors propagate; nothing is written on failure.
    """
    doc = visit.to_document()
    store.ensure_indexes()
    created, record = store.website.upsert_accumulate(
        key={"ip": doc["ip"], "date": doc["date"]},
        inc={"number_of_visits": doc["number_of_visits"]},
        set_fields={
            "page_visits": doc["page_visits"],
            "website_duration": doc["website_duration"],
            "time": doc["time"],
        },
        insert_fields={
            "owner_contact": doc["owner_contact"],
            "location": doc["location"],
        },
    )
    if created:
        logger.info(f"Website visit created for {doc['ip']} on {doc['date']}")
    else:
        logger.info(
            f"Website visit for {doc['ip']} on {doc['date']} accumulated "
            f"to {record.get('number_of_visits')}"
        )
    return IngestResult(created=created, updated=not created, record=record)


def record_store_visit(store: EventStore, visit: StoreVisitIn) -> IngestResult:
    """Store visits never merge; every call is a new row"""
    record = store.store.insert(visit.to_document())
    return IngestResult(created=True, updated=False, record=record)


def record_signup(store: EventStore, signup: SignupIn) -> IngestResult:
    record = store.signup.insert(signup.to_document())
    return IngestResult(created=True, updated=False, record=record)


INGESTORS = {
    "website": record_website_visit,
    "store": record_store_visit,
    "signup": record_signup,
}


def ingest(store: EventStore, kind: str, record) -> IngestResult:
    return INGESTORS[kind](store, record)
