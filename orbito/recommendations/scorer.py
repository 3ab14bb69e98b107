"""
Deterministic tour scoring.

Three rankings over a caller-supplied catalog:
- personalized: rating, popularity and the user's history signals.
- similar: content similarity to a target tour.
- trending: booking volume over a trailing window plus rating.

All functions are pure. Ties keep their input order.
"""
from __future__ import annotations

import math
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Iterable, Sequence

from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .models import Booking, ScoredTour, Tour, TrendingTour, UserHistory


def personalized_score(
    tour: Tour,
    history: UserHistory | None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> float:
    """Score a single tour against a user's history."""
    history = history or UserHistory()
    score = tour.rating * config.rating_weight

    if history.preferred_categories and tour.category in history.preferred_categories:
        score += config.category_bonus

    avg = history.avg_spend if history.avg_spend is not None else config.default_avg_spend
    if avg * config.price_band_low <= tour.price_adult <= avg * config.price_band_high:
        score += config.price_bonus

    if (
        history.preferred_duration
        and tour.duration
        and history.preferred_duration in tour.duration
    ):
        score += config.duration_bonus

    score += config.popularity_weight * math.log(tour.review_count + 1)

    if history.visited_destinations and tour.destination in history.visited_destinations:
        score += config.destination_bonus

    return score


def score_personalized(
    tours: Sequence[Tour],
    history: UserHistory | None,
    limit: int | None = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> list[ScoredTour]:
    cap = config.personalized_limit if limit is None else limit
    scored = [
        ScoredTour(tour=tour, score=personalized_score(tour, history, config))
        for tour in tours
    ]
    scored.sort(key=lambda s: s.score, reverse=True)
    return scored[:cap]


def personalized_recommendations(
    tours: Sequence[Tour],
    history: UserHistory | None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> list[Tour]:
    """Return up to 10 tours ranked for the user, best first."""
    return [s.tour for s in score_personalized(tours, history, config=config)]


def similarity(
    a: Tour,
    b: Tour,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> float:
    score = 0.0
    if a.category == b.category:
        score += config.same_category_bonus
    if a.destination == b.destination:
        score += config.same_destination_bonus

    price_diff = abs(a.price_adult - b.price_adult)
    score += max(0.0, config.price_closeness_max - price_diff / config.price_closeness_step)

    rating_diff = abs(a.rating - b.rating)
    score += max(0.0, config.rating_closeness_max - rating_diff * config.rating_closeness_step)

    return score


def similar_tours(
    target: Tour,
    all_tours: Sequence[Tour],
    limit: int | None = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> list[Tour]:
    """Return up to ``limit`` tours most similar to ``target``, excluding it."""
    cap = config.similar_limit if limit is None else limit
    scored = [
        ScoredTour(tour=tour, score=similarity(target, tour, config))
        for tour in all_tours
        if tour.id != target.id
    ]
    scored.sort(key=lambda s: s.score, reverse=True)
    return [s.tour for s in scored[:cap]]


def count_recent_bookings(
    bookings: Iterable[Booking],
    now: datetime | None = None,
    window_days: int = DEFAULT_SCORING_CONFIG.trending_window_days,
) -> Counter:
    """Count bookings per tour id created strictly after ``now - window_days``.

    A naive ``now`` is read as UTC, like booking timestamps.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    cutoff = now - timedelta(days=window_days)
    return Counter(b.tour_id for b in bookings if b.created_at > cutoff)


def score_trending(
    tours: Sequence[Tour],
    recent_bookings: Iterable[Booking],
    now: datetime | None = None,
    limit: int | None = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> list[TrendingTour]:
    cap = config.trending_limit if limit is None else limit
    counts = count_recent_bookings(recent_bookings, now, config.trending_window_days)

    scored: list[TrendingTour] = []
    for tour in tours:
        n = counts.get(tour.id, 0)
        scored.append(TrendingTour(
            tour=tour,
            bookings=n,
            score=n * config.booking_weight + tour.rating * config.trending_rating_weight,
        ))
    scored.sort(key=lambda s: s.score, reverse=True)
    return scored[:cap]


def trending_tours(
    tours: Sequence[Tour],
    recent_bookings: Iterable[Booking],
    now: datetime | None = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> list[Tour]:
    """Return up to 10 tours ranked by recent bookings and rating."""
    return [t.tour for t in score_trending(tours, recent_bookings, now, config=config)]


def popular_tours(tours: Sequence[Tour], limit: int = 10) -> list[Tour]:
    """Fallback ranking by ``rating * review_count``."""
    return sorted(tours, key=lambda t: t.rating * t.review_count, reverse=True)[:limit]
