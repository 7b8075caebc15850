"""
Intake models for the three touchpoint kinds

These are the typed boundary: a payload either parses into one of these or is
rejected with a list of messages before any aggregation code sees it.
"""
import datetime
import ipaddress
import re
from typing import Any, Dict

from pydantic import BaseModel, EmailStr, Field, field_validator

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d):([0-5]\d)$")


def _non_empty(value: str, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{label} is required")
    return value.strip()


class TouchpointBase(BaseModel):
    """Fields shared by every touchpoint"""

    model_config = {"extra": "ignore"}

    location: str
    time: str
    date: datetime.date

    @field_validator("location")
    @classmethod
    def validate_location(cls, v):
        return _non_empty(v, "Location")

    @field_validator("time")
    @classmethod
    def validate_time(cls, v):
        if not isinstance(v, str) or not TIME_PATTERN.match(v):
            raise ValueError("Invalid time format (use HH:MM:SS)")
        return v

    @field_validator("date")
    @classmethod
    def validate_date(cls, v):
        if v > datetime.date.today():
            raise ValueError("Future date not allowed")
        return v

    def to_document(self) -> Dict[str, Any]:
        """Storage shape: dates as ISO strings so range filters compare lexically"""
        doc = self.model_dump()
        doc["date"] = self.date.isoformat()
        return doc


class WebsiteVisitIn(TouchpointBase):
    ip: str
    owner_contact: str
    number_of_visits: int = Field(..., ge=1)
    page_visits: int = Field(0, ge=0)
    website_duration: int = Field(..., ge=1)

    @field_validator("ip")
    @classmethod
    def validate_ip(cls, v):
        try:
            return str(ipaddress.ip_address(str(v).strip()))
        except ValueError:
            raise ValueError("Invalid IP address format")

    @field_validator("owner_contact")
    @classmethod
    def validate_owner(cls, v):
        return _non_empty(v, "Owner contact")


class StoreVisitIn(TouchpointBase):
    owner_contact: str
    number_of_visits: int = Field(..., ge=1)

    @field_validator("owner_contact")
    @classmethod
    def validate_owner(cls, v):
        return _non_empty(v, "Owner contact")


class SignupIn(TouchpointBase):
    username: str
    email: EmailStr

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        return _non_empty(v, "Username")


INTAKE_MODELS = {
    "website": WebsiteVisitIn,
    "store": StoreVisitIn,
    "signup": SignupIn,
}
