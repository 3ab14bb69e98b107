from __future__ import annotations

from datetime import datetime, timezone

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class Tour(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int | str
    title: str | None = None
    rating: float = 0.0
    review_count: int = 0
    price_adult: float = 0.0
    category: str | None = None
    destination: str | None = None
    duration: str | None = None
    duration_hours: float | None = None

    @field_validator("rating", "review_count", "price_adult", mode="before")
    @classmethod
    def _null_as_zero(cls, value: object) -> object:
        # Database rows carry NULL for unrated or unpriced tours
        return 0 if value is None else value


class UserHistory(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    preferred_categories: list[str] | None = Field(
        default=None,
        validation_alias=AliasChoices("preferred_categories", "preferredCategories"),
    )
    avg_spend: float | None = Field(
        default=None, validation_alias=AliasChoices("avg_spend", "avgSpend")
    )
    preferred_duration: str | None = Field(
        default=None,
        validation_alias=AliasChoices("preferred_duration", "preferredDuration"),
    )
    visited_destinations: list[str] | None = Field(
        default=None,
        validation_alias=AliasChoices("visited_destinations", "visitedDestinations"),
    )
    total_bookings: int = Field(
        default=0, validation_alias=AliasChoices("total_bookings", "totalBookings")
    )


class Booking(BaseModel):
    model_config = ConfigDict(extra="ignore")

    tour_id: int | str
    created_at: datetime
    user_id: str | None = None

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class ScoredTour(BaseModel):
    tour: Tour
    score: float


class TrendingTour(BaseModel):
    tour: Tour
    bookings: int
    score: float


# ── Request / response bodies ────────────────────────────────────────────


class PersonalizedRequest(BaseModel):
    user_id: str | None = Field(default=None, min_length=1)
    history: UserHistory | None = None


class PersonalizedResponse(BaseModel):
    tours: list[Tour]
    strategy: str


class SimilarResponse(BaseModel):
    target_id: int | str
    tours: list[Tour]


class TrendingResponse(BaseModel):
    tours: list[TrendingTour]
    window_days: int
