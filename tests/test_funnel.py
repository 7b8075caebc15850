"""
Tests for the funnel aggregator
"""
import math

from touchpoints.core.errors import StorageError
from touchpoints.models.events import SignupIn, StoreVisitIn, WebsiteVisitIn
from touchpoints.services.funnel import build_funnel, compute_funnel, conversion_rate
from touchpoints.services.ingest import record_signup, record_store_visit, record_website_visit


def test_conversion_rate_zero_guard():
    assert conversion_rate(5, 0) == 0.0
    assert conversion_rate(0, 0) == 0.0
    assert conversion_rate(1, 3) == 33.3
    assert conversion_rate(3, 2) == 150.0


def test_conversion_rate_rounds_ties_up():
    # 6.25 and 31.25 are exact in binary; round() would give 6.2 and 31.2
    assert conversion_rate(1, 16) == 6.3
    assert conversion_rate(5, 16) == 31.3
    assert conversion_rate(3, 16) == 18.8
    assert build_funnel(website_count=16, store_count=1, signup_count=1).stages[1].percentage == 6.3


def test_empty_funnel_is_all_zero(store):
    result = compute_funnel(store)
    assert [s.count for s in result.stages] == [0, 0, 0]
    assert result.stages[0].percentage == 100
    assert result.stages[0].conversion_from_previous is None
    for stage in result.stages[1:]:
        assert stage.percentage == 0
        assert stage.conversion_from_previous == 0
    assert result.overall.overall_conversion_rate == 0


def test_single_website_row(store, website_visit):
    # stages count rows, so one accumulated row of 2 visits is 1
    record_website_visit(store, WebsiteVisitIn(**dict(website_visit, number_of_visits=2)))
    result = compute_funnel(store)
    website, store_stage, signup = result.stages
    assert (website.count, website.percentage) == (1, 100)
    assert (store_stage.count, store_stage.percentage, store_stage.conversion_from_previous) == (0, 0, 0)
    assert (signup.count, signup.percentage, signup.conversion_from_previous) == (0, 0, 0)
    assert result.overall.overall_conversion_rate == 0


def test_signup_stage_uses_two_denominators():
    result = build_funnel(website_count=10, store_count=4, signup_count=2)
    website, store_stage, signup = result.stages
    assert store_stage.percentage == 40.0
    assert store_stage.conversion_from_previous == 40.0
    assert signup.percentage == 20.0
    assert signup.conversion_from_previous == 50.0
    assert result.overall.overall_conversion_rate == 20.0


def test_rates_are_not_clamped():
    result = build_funnel(website_count=2, store_count=5, signup_count=0)
    assert result.stages[1].conversion_from_previous == 250.0


def test_rates_are_finite_when_upper_stages_are_empty():
    result = build_funnel(website_count=0, store_count=3, signup_count=7)
    for stage in result.stages:
        assert stage.count >= 0
        assert math.isfinite(stage.percentage)
        if stage.conversion_from_previous is not None:
            assert math.isfinite(stage.conversion_from_previous)
            assert stage.conversion_from_previous >= 0
    assert result.stages[2].conversion_from_previous == 233.3


def test_date_range_filters_each_stage(store, website_visit, store_visit, signup):
    for day in ("2024-01-01", "2024-01-05", "2024-01-10"):
        record_website_visit(store, WebsiteVisitIn(**dict(website_visit, date=day)))
    record_store_visit(store, StoreVisitIn(**dict(store_visit, date="2024-01-05")))
    record_store_visit(store, StoreVisitIn(**dict(store_visit, date="2024-01-11")))
    record_signup(store, SignupIn(**dict(signup, date="2024-01-10")))

    both = compute_funnel(store, "2024-01-05", "2024-01-10")
    assert [s.count for s in both.stages] == [2, 1, 1]
    assert both.start_date == "2024-01-05"

    lower_only = compute_funnel(store, start_date="2024-01-06")
    assert [s.count for s in lower_only.stages] == [1, 1, 1]

    upper_only = compute_funnel(store, end_date="2024-01-01")
    assert [s.count for s in upper_only.stages] == [1, 0, 0]


def test_failed_stage_degrades_to_zero(store, website_visit, signup, monkeypatch):
    record_website_visit(store, WebsiteVisitIn(**website_visit))
    record_signup(store, SignupIn(**signup))

    def unavailable(*args, **kwargs):
        raise StorageError("Storage failure during store count")

    monkeypatch.setattr(store.store, "count", unavailable)
    result = compute_funnel(store)
    assert [s.count for s in result.stages] == [1, 0, 1]
    assert result.stages[2].conversion_from_previous == 0
    assert result.overall.overall_conversion_rate == 100.0
