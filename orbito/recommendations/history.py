from __future__ import annotations

from collections import Counter
from typing import Sequence

from .config import DEFAULT_SCORING_CONFIG
from .models import Tour, UserHistory


def default_history() -> UserHistory:
    """Neutral history for users without bookings."""
    return UserHistory(
        preferred_categories=[],
        avg_spend=DEFAULT_SCORING_CONFIG.default_avg_spend,
        preferred_duration=None,
        visited_destinations=[],
        total_bookings=0,
    )


def _distinct(values: list[str | None]) -> list[str]:
    seen: dict[str, None] = {}
    for v in values:
        if v:
            seen.setdefault(v, None)
    return list(seen)


def _preferred_duration(tours: Sequence[Tour]) -> str | None:
    durations = [t.duration for t in tours if t.duration]
    if not durations:
        return None
    # most_common keeps first-seen order among equal counts
    return Counter(durations).most_common(1)[0][0]


def build_user_history(booked_tours: Sequence[Tour]) -> UserHistory:
    """Summarise the tours a user booked, most recent first.

    The preferred duration is the most common ``duration`` text among the
    booked tours rather than a short/medium/long bucket of their hours, so
    it can match the free-text substring check the scorer applies.
    """
    if not booked_tours:
        return default_history()

    prices = [t.price_adult for t in booked_tours if t.price_adult]
    avg_spend = sum(prices) / len(prices) if prices else DEFAULT_SCORING_CONFIG.default_avg_spend

    return UserHistory(
        preferred_categories=_distinct([t.category for t in booked_tours]),
        avg_spend=avg_spend,
        preferred_duration=_preferred_duration(booked_tours),
        visited_destinations=_distinct([t.destination for t in booked_tours]),
        total_bookings=len(booked_tours),
    )
