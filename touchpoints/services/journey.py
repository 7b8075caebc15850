"""
Journey Aggregator
"""
from touchpoints.models.views import JourneyView
from touchpoints.repositories.events import EventStore
from touchpoints.services.fanout import gather


def merge_timeline(website_visits, store_visits):
    """
    Tag and merge both channels into one list ordered by created_at

    sorted() is stable, so events with identical timestamps keep the
    concatenation order: website before store.
    """
    tagged = [{"type": "website", **v} for v in website_visits]
    tagged += [{"type": "store", **v} for v in store_visits]
    return sorted(tagged, key=lambda e: e["created_at"])


def build_journey(store: EventStore, contact: str) -> JourneyView:
    """All website and store touchpoints for one contact, merged by arrival time"""
    lists = gather({
        "website": (lambda: store.website.find_by_owner(contact), []),
        "store": (lambda: store.store.find_by_owner(contact), []),
    })
    website_visits = lists["website"]
    store_visits = lists["store"]
    timeline = merge_timeline(website_visits, store_visits)

    # first_touchpoint only looks at website events, even when a store visit
    # came earlier. Kept for compatibility with existing consumers.
    first = website_visits[0]["created_at"] if website_visits else None
    last = max((e["created_at"] for e in timeline), default=None)

    return JourneyView(
        contact=contact,
        website_visits=website_visits,
        store_visits=store_visits,
        timeline=timeline,
        total_website_visits=len(website_visits),
        total_store_visits=len(store_visits),
        first_touchpoint=first,
        last_touchpoint=last,
    )
