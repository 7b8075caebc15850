"""
Touchpoint record endpoints

The same CRUD surface is mounted once per kind. Website ingestion goes through
the accumulating upsert; the other kinds always insert.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from touchpoints.core.errors import NotFoundError
from touchpoints.core.security import AuthContext
from touchpoints.repositories.events import EventStore
from touchpoints.services.ingest import ingest
from touchpoints.services.intake import require_valid
from ..common import DateRange, envelope
from ..deps import get_admin_user, get_current_user, get_store

logger = logging.getLogger(__name__)

LABELS = {
    "website": "Website visit",
    "store": "Store visit",
    "signup": "Login/signup record",
}


def create_records_router(kind: str) -> APIRouter:
    """Build list/create/get/update/delete routes for one touchpoint kind"""
    label = LABELS[kind]
    router = APIRouter()

    @router.get("/")
    def list_records(
        dates: DateRange = Depends(),
        location: Optional[str] = Query(None, description="Case-insensitive substring match"),
        store: EventStore = Depends(get_store),
        user: AuthContext = Depends(get_current_user),
    ):
        rows = store.repository(kind).find(dates.start_date, dates.end_date, location)
        return envelope(rows)

    @router.post("/")
    def create_record(
        payload: Dict[str, Any] = Body(...),
        store: EventStore = Depends(get_store),
        user: AuthContext = Depends(get_current_user),
    ):
        record = require_valid(kind, payload)
        result = ingest(store, kind, record)
        if result.created:
            return envelope(result.record, f"{label} created successfully", status.HTTP_201_CREATED)
        return envelope(result.record, f"{label} updated")

    @router.get("/{record_id}")
    def get_record(
        record_id: str,
        store: EventStore = Depends(get_store),
        user: AuthContext = Depends(get_current_user),
    ):
        row = store.repository(kind).get(record_id)
        if row is None:
            raise NotFoundError(label)
        return envelope(row)

    @router.put("/{record_id}")
    def update_record(
        record_id: str,
        payload: Dict[str, Any] = Body(...),
        store: EventStore = Depends(get_store),
        user: AuthContext = Depends(get_current_user),
    ):
        record = require_valid(kind, payload)
        row = store.repository(kind).update(record_id, record.to_document())
        if row is None:
            raise NotFoundError(label)
        return envelope(row, f"{label} updated successfully")

    @router.delete("/{record_id}")
    def delete_record(
        record_id: str,
        store: EventStore = Depends(get_store),
        admin: AuthContext = Depends(get_admin_user),
    ):
        if not store.repository(kind).delete(record_id):
            raise NotFoundError(label)
        logger.info(f"{label} {record_id} deleted by {admin.user_id}")
        return envelope(message=f"{label} deleted successfully")

    return router
