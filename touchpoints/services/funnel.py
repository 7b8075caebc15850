"""
Funnel Aggregator

Website visits -> store visits -> signups. Counts are taken per collection
within an optional inclusive date range; rates are percentages rounded to one
decimal and are 0 whenever their denominator is 0. Rates are not clamped and
may exceed 100.
"""
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from touchpoints.models.views import FunnelOverall, FunnelResult, FunnelStage
from touchpoints.repositories.events import EventStore
from touchpoints.services.fanout import gather

STAGE_NAMES = ("Website Visits", "Store Visits", "Signups")


def conversion_rate(numerator: int, denominator: int) -> float:
    """
    numerator/denominator as a percentage, 0.0 when denominator is 0

    Ties round away from zero on the exact binary value, so 1/16 gives 6.3.
    """
    if not denominator:
        return 0.0
    rate = Decimal(numerator / denominator * 100)
    return float(rate.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def build_funnel(
    website_count: int,
    store_count: int,
    signup_count: int,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> FunnelResult:
    """Derive the three stages and the overall rate from raw counts"""
    website_to_store = conversion_rate(store_count, website_count)
    # Stage 2 has two denominators: percentage is end-to-end against website,
    # conversion_from_previous is stage-local against store.
    website_to_signup = conversion_rate(signup_count, website_count)
    store_to_signup = conversion_rate(signup_count, store_count)

    stages = [
        FunnelStage(name=STAGE_NAMES[0], count=website_count, percentage=100.0),
        FunnelStage(
            name=STAGE_NAMES[1],
            count=store_count,
            percentage=website_to_store,
            conversion_from_previous=website_to_store,
        ),
        FunnelStage(
            name=STAGE_NAMES[2],
            count=signup_count,
            percentage=website_to_signup,
            conversion_from_previous=store_to_signup,
        ),
    ]
    overall = FunnelOverall(
        total_website_visits=website_count,
        total_store_visits=store_count,
        total_signups=signup_count,
        overall_conversion_rate=website_to_signup,
    )
    return FunnelResult(stages=stages, overall=overall, start_date=start_date, end_date=end_date)


def compute_funnel(
    store: EventStore,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> FunnelResult:
    """Count the three collections concurrently; a failed count reads as 0"""
    counts = gather({
        "website": (lambda: store.website.count(start_date, end_date), 0),
        "store": (lambda: store.store.count(start_date, end_date), 0),
        "signup": (lambda: store.signup.count(start_date, end_date), 0),
    })
    return build_funnel(
        counts["website"], counts["store"], counts["signup"],
        start_date=start_date, end_date=end_date,
    )
