"""
Analytics API: funnel, contact directory and journeys
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from touchpoints.core.security import AuthContext
from touchpoints.repositories.events import EventStore
from touchpoints.services.contacts import list_contacts
from touchpoints.services.funnel import compute_funnel
from touchpoints.services.journey import build_journey
from ..common import DateRange, envelope
from ..deps import get_current_user, get_store

router = APIRouter()


@router.get("/funnel")
def get_funnel(
    dates: DateRange = Depends(),
    store: EventStore = Depends(get_store),
    user: AuthContext = Depends(get_current_user),
):
    """
    Conversion funnel metrics

    Stage counts are filtered by the optional inclusive date range. A
    collection that cannot be queried reports 0.
    """
    return envelope(compute_funnel(store, dates.start_date, dates.end_date))


@router.get("/contacts")
def get_contacts(
    contact: Optional[str] = Query(None, description="Return this contact's journey instead of the directory"),
    store: EventStore = Depends(get_store),
    user: AuthContext = Depends(get_current_user),
):
    """Contact directory, or a single journey when contact is given"""
    if contact:
        return envelope(build_journey(store, contact))
    return envelope(list_contacts(store))


@router.get("/contacts/{contact}/journey")
def get_journey(
    contact: str,
    store: EventStore = Depends(get_store),
    user: AuthContext = Depends(get_current_user),
):
    return envelope(build_journey(store, contact))
