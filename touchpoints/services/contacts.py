"""
Contact Directory Builder

One pass over website events, then one over store events, keeping a running
summary per contact. Output order is first-seen order; callers that need a
sorted list sort it themselves.
"""
from typing import Dict, Iterable, List

from touchpoints.models.views import ContactSummary
from touchpoints.repositories.events import EventStore
from touchpoints.services.fanout import gather

SCAN_FIELDS = ["owner_contact", "number_of_visits", "created_at"]


def _accumulate(summaries: Dict[str, ContactSummary], events: Iterable[dict], channel: str) -> None:
    for event in events:
        contact = event.get("owner_contact")
        if contact is None:
            continue
        ts = event.get("created_at")
        summary = summaries.get(contact)
        if summary is None:
            summary = summaries[contact] = ContactSummary(
                contact=contact, first_touchpoint=ts, last_touchpoint=ts
            )
        visits = event.get("number_of_visits") or 1
        setattr(summary, channel, getattr(summary, channel) + visits)
        if ts is not None:
            if summary.first_touchpoint is None or ts < summary.first_touchpoint:
                summary.first_touchpoint = ts
            if summary.last_touchpoint is None or ts > summary.last_touchpoint:
                summary.last_touchpoint = ts


def summarize_contacts(website_events: Iterable[dict], store_events: Iterable[dict]) -> List[ContactSummary]:
    summaries: Dict[str, ContactSummary] = {}
    _accumulate(summaries, website_events, "website_visits")
    _accumulate(summaries, store_events, "store_visits")
    return list(summaries.values())


def list_contacts(store: EventStore) -> List[ContactSummary]:
    """Per-contact totals across both visit channels; a failed scan contributes nothing"""
    scans = gather({
        "website": (lambda: list(store.website.iter_all(SCAN_FIELDS)), []),
        "store": (lambda: list(store.store.iter_all(SCAN_FIELDS)), []),
    })
    return summarize_contacts(scans["website"], scans["store"])
