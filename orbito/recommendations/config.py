from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringConfig:
    # personalized
    rating_weight: float = 10.0
    category_bonus: float = 30.0
    price_bonus: float = 20.0
    duration_bonus: float = 15.0
    popularity_weight: float = 2.0
    destination_bonus: float = 10.0
    default_avg_spend: float = 50.0
    price_band_low: float = 0.5
    price_band_high: float = 1.3
    personalized_limit: int = 10

    # similarity
    same_category_bonus: float = 40.0
    same_destination_bonus: float = 30.0
    price_closeness_max: float = 20.0
    price_closeness_step: float = 5.0
    rating_closeness_max: float = 10.0
    rating_closeness_step: float = 2.0
    similar_limit: int = 5

    # trending
    booking_weight: float = 10.0
    trending_rating_weight: float = 5.0
    trending_window_days: int = 7
    trending_limit: int = 10


DEFAULT_SCORING_CONFIG = ScoringConfig()
