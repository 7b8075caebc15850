from pymongo import ASCENDING, DESCENDING


def ensure_indexes(store):
    # Website visits: one row per (ip, date), accumulated by the ingestion upsert
    store.website.collection.create_index(
        [("ip", ASCENDING), ("date", ASCENDING)], unique=True, name="ip_date_unique"
    )
    for repo in (store.website, store.store, store.signup):
        repo.collection.create_index([("date", ASCENDING)], name="date")
        repo.collection.create_index([("created_at", DESCENDING)], name="created_at")
    store.website.collection.create_index(
        [("owner_contact", ASCENDING), ("created_at", ASCENDING)], name="owner_created"
    )
    store.store.collection.create_index(
        [("owner_contact", ASCENDING), ("created_at", ASCENDING)], name="owner_created"
    )
