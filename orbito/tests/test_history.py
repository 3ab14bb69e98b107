from __future__ import annotations

import pytest

from orbito.recommendations.history import build_user_history, default_history
from orbito.recommendations.models import UserHistory
from orbito.tests.fakes import make_tour


def test_no_bookings_gives_default_history():
    history = build_user_history([])
    assert history == default_history()
    assert history.avg_spend == 50
    assert history.preferred_categories == []
    assert history.preferred_duration is None
    assert history.total_bookings == 0


def test_history_summarises_booked_tours():
    booked = [
        make_tour("a", category="Food", destination="Rome", price_adult=80, duration="3 hours"),
        make_tour("b", category="History", destination="Rome", price_adult=40, duration="2 hours"),
        make_tour("c", category="Food", destination="Paris", price_adult=60, duration="3 hours"),
    ]
    history = build_user_history(booked)

    assert history.preferred_categories == ["Food", "History"]
    assert history.visited_destinations == ["Rome", "Paris"]
    assert history.avg_spend == pytest.approx(60.0)
    assert history.preferred_duration == "3 hours"
    assert history.total_bookings == 3


def test_duration_tie_prefers_most_recent_booking():
    booked = [
        make_tour("new", duration="Full day"),
        make_tour("old", duration="2 hours"),
    ]
    assert build_user_history(booked).preferred_duration == "Full day"


def test_unpriced_tours_fall_back_to_default_spend():
    booked = [make_tour("a", price_adult=0, duration=None, category=None)]
    history = build_user_history(booked)
    assert history.avg_spend == 50
    assert history.preferred_duration is None
    assert history.preferred_categories == []


def test_history_accepts_camel_case_payload():
    history = UserHistory.model_validate({
        "preferredCategories": ["Food"],
        "avgSpend": 75,
        "preferredDuration": "3 hours",
        "visitedDestinations": ["Rome"],
        "totalBookings": 4,
    })
    assert history.preferred_categories == ["Food"]
    assert history.avg_spend == 75
    assert history.preferred_duration == "3 hours"
    assert history.visited_destinations == ["Rome"]
    assert history.total_bookings == 4
