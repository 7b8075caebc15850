"""
Common API functionality and utilities
"""
import datetime
from typing import Any, Optional

from fastapi import Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def envelope(data: Any = None, message: Optional[str] = None, status_code: int = 200) -> JSONResponse:
    """Standard success response"""
    content = {"success": True}
    if data is not None:
        content["data"] = jsonable_encoder(data)
    if message:
        content["message"] = message
    return JSONResponse(status_code=status_code, content=content)


class DateRange:
    """Inclusive ISO date range from start_date/end_date query parameters"""

    def __init__(
        self,
        start_date: Optional[datetime.date] = Query(None, description="Inclusive lower bound (YYYY-MM-DD)"),
        end_date: Optional[datetime.date] = Query(None, description="Inclusive upper bound (YYYY-MM-DD)"),
    ):
        self.start_date = start_date.isoformat() if start_date else None
        self.end_date = end_date.isoformat() if end_date else None
