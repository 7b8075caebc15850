"""
Tests for the contact directory builder
"""
from datetime import datetime

from touchpoints.models.events import StoreVisitIn, WebsiteVisitIn
from touchpoints.services.contacts import list_contacts, summarize_contacts
from touchpoints.services.ingest import record_store_visit, record_website_visit


def test_directory_sums_visit_counts(store, clock, website_visit, store_visit):
    clock.set(datetime(2024, 1, 1, 10, 0))
    record_website_visit(store, WebsiteVisitIn(**dict(website_visit, ip="1.1.1.1", number_of_visits=2)))
    clock.set(datetime(2024, 1, 1, 11, 0))
    record_website_visit(store, WebsiteVisitIn(**dict(website_visit, ip="1.1.1.2", number_of_visits=4)))
    clock.set(datetime(2024, 1, 1, 9, 0))
    record_store_visit(store, StoreVisitIn(**dict(store_visit, number_of_visits=3)))
    clock.set(datetime(2024, 1, 2, 9, 0))
    record_store_visit(store, StoreVisitIn(**dict(store_visit, owner_contact="bob@example.com")))

    contacts = {c.contact: c for c in list_contacts(store)}

    alice = contacts["alice@example.com"]
    assert alice.website_visits == 6
    assert alice.store_visits == 3
    assert alice.first_touchpoint == datetime(2024, 1, 1, 9, 0)
    assert alice.last_touchpoint == datetime(2024, 1, 1, 11, 0)

    bob = contacts["bob@example.com"]
    assert (bob.website_visits, bob.store_visits) == (0, 1)
    assert bob.first_touchpoint == bob.last_touchpoint == datetime(2024, 1, 2, 9, 0)


def test_accumulated_row_counts_its_full_total(store, website_visit):
    record_website_visit(store, WebsiteVisitIn(**dict(website_visit, number_of_visits=3)))
    record_website_visit(store, WebsiteVisitIn(**dict(website_visit, number_of_visits=5)))
    [summary] = list_contacts(store)
    assert summary.website_visits == 8


def test_missing_visit_count_defaults_to_one():
    t = datetime(2024, 1, 1)
    summaries = summarize_contacts(
        [{"owner_contact": "a", "created_at": t}, {"owner_contact": "a", "number_of_visits": None, "created_at": t}],
        [],
    )
    assert summaries[0].website_visits == 2


def test_order_is_first_seen_not_sorted():
    t = datetime(2024, 1, 1)
    summaries = summarize_contacts(
        [{"owner_contact": "zed", "number_of_visits": 1, "created_at": t}],
        [
            {"owner_contact": "amy", "number_of_visits": 1, "created_at": t},
            {"owner_contact": "zed", "number_of_visits": 1, "created_at": t},
        ],
    )
    assert [s.contact for s in summaries] == ["zed", "amy"]


def test_bounds_are_ordered():
    early, late = datetime(2024, 1, 1), datetime(2024, 3, 1)
    summaries = summarize_contacts(
        [{"owner_contact": "a", "number_of_visits": 1, "created_at": late}],
        [{"owner_contact": "a", "number_of_visits": 1, "created_at": early}],
    )
    assert summaries[0].first_touchpoint == early
    assert summaries[0].last_touchpoint == late


def test_empty_store_has_no_contacts(store):
    assert list_contacts(store) == []
