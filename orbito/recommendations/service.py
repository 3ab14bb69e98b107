from __future__ import annotations

import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Any

from ..analytics.store import record_event
from ..tours.data_store import TourStore
from ..tours.errors import StoreError, TourNotFoundError
from .cache import cache_get, cache_set
from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .history import build_user_history, default_history
from .models import (
    PersonalizedRequest,
    PersonalizedResponse,
    SimilarResponse,
    Tour,
    TrendingResponse,
)
from .scorer import personalized_recommendations, popular_tours, score_trending, similar_tours

logger = logging.getLogger(__name__)


def _elapsed_ms(start_time: float) -> float:
    return round((time.time() - start_time) * 1000, 1)


def _record(event_type: str, start_time: float, tours: list[Tour], **extra: Any) -> None:
    record_event(event_type, {
        "results_returned": len(tours),
        "categories": [t.category for t in tours if t.category],
        "destinations": [t.destination for t in tours if t.destination],
        "response_time_ms": _elapsed_ms(start_time),
        **extra,
    })


def recommend_for_user(
    store: TourStore,
    request: PersonalizedRequest,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> PersonalizedResponse:
    start_time = time.time()

    request_dict = request.model_dump()
    cached = cache_get("personalized", request_dict)
    if cached is not None:
        _record("personalized", start_time, cached.tours, cache_hit=True, strategy=cached.strategy)
        return cached

    tours = store.list_tours()

    if request.history is not None:
        history, strategy = request.history, "history"
    elif request.user_id:
        try:
            booked = store.get_user_booked_tours(request.user_id)
        except StoreError:
            logger.warning(
                "Could not load bookings for user %s, falling back to popular tours",
                request.user_id,
                exc_info=True,
            )
            response = PersonalizedResponse(
                tours=popular_tours(tours, config.personalized_limit), strategy="popular",
            )
            _record("personalized", start_time, response.tours, cache_hit=False, strategy="popular")
            return response
        history = build_user_history(booked)
        strategy = "user_history" if booked else "default"
    else:
        history, strategy = default_history(), "default"

    response = PersonalizedResponse(
        tours=personalized_recommendations(tours, history, config),
        strategy=strategy,
    )
    cache_set("personalized", request_dict, response)
    _record("personalized", start_time, response.tours, cache_hit=False, strategy=strategy)
    return response


def similar_to(
    store: TourStore,
    tour_id: int | str,
    limit: int = DEFAULT_SCORING_CONFIG.similar_limit,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> SimilarResponse:
    start_time = time.time()

    request_dict = {"tour_id": str(tour_id), "limit": limit}
    cached = cache_get("similar", request_dict)
    if cached is not None:
        _record("similar", start_time, cached.tours, cache_hit=True)
        return cached

    target = store.get_tour(tour_id)
    if target is None:
        raise TourNotFoundError(tour_id)

    response = SimilarResponse(
        target_id=target.id,
        tours=similar_tours(target, store.list_tours(), limit, config),
    )
    cache_set("similar", request_dict, response)
    _record("similar", start_time, response.tours, cache_hit=False)
    return response


def trending(
    store: TourStore,
    now: datetime | None = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> TrendingResponse:
    """Rank tours by recent bookings. Never cached: the window moves with ``now``."""
    start_time = time.time()
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    since = now - timedelta(days=config.trending_window_days)

    items = score_trending(store.list_tours(), store.get_recent_bookings(since), now, config=config)

    _record("trending", start_time, [i.tour for i in items], cache_hit=False)
    return TrendingResponse(tours=items, window_days=config.trending_window_days)
