"""
API Router Factory
Provides centralized router creation and configuration
"""
from typing import List, Optional

from fastapi import APIRouter

from .endpoints import analytics, export, records


def create_router(
    prefix: str = "/api/v1",
    tags: Optional[List[str]] = None,
) -> APIRouter:
    """
    Create configured API router with all endpoints

    Args:
        prefix: API route prefix
        tags: OpenAPI tags

    Returns:
        Configured APIRouter instance
    """
    if tags is None:
        tags = ["api"]

    router = APIRouter(prefix=prefix, tags=tags)

    # Touchpoint records
    router.include_router(
        records.create_records_router("website"),
        prefix="/website-visits",
        tags=["website-visits"]
    )
    router.include_router(
        records.create_records_router("store"),
        prefix="/store-visits",
        tags=["store-visits"]
    )
    router.include_router(
        records.create_records_router("signup"),
        prefix="/login-signup",
        tags=["login-signup"]
    )

    # Analytics endpoints
    router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
    router.include_router(export.router, prefix="/export", tags=["export"])

    return router
