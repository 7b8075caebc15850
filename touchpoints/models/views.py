"""
Derived view models returned by the aggregators
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class FunnelStage(BaseModel):
    """One step of the funnel"""
    name: str
    count: int = Field(..., ge=0)
    percentage: float
    conversion_from_previous: Optional[float] = None


class FunnelOverall(BaseModel):
    total_website_visits: int
    total_store_visits: int
    total_signups: int
    overall_conversion_rate: float


class FunnelResult(BaseModel):
    stages: List[FunnelStage]
    overall: FunnelOverall
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class ContactSummary(BaseModel):
    """Per-contact totals and touch bounds"""
    contact: str
    website_visits: int = 0
    store_visits: int = 0
    first_touchpoint: Optional[datetime] = None
    last_touchpoint: Optional[datetime] = None


class JourneyView(BaseModel):
    """Time-ordered touchpoints for one contact"""
    contact: str
    website_visits: List[Dict[str, Any]] = Field(default_factory=list)
    store_visits: List[Dict[str, Any]] = Field(default_factory=list)
    timeline: List[Dict[str, Any]] = Field(default_factory=list)
    total_website_visits: int = 0
    total_store_visits: int = 0
    first_touchpoint: Optional[datetime] = None
    last_touchpoint: Optional[datetime] = None


class IngestResult(BaseModel):
    """Outcome of one ingestion call"""
    created: bool
    updated: bool
    record: Dict[str, Any]
