from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

Label = Literal["POSITIVE", "NEGATIVE", "NEUTRAL"]
OverallLabel = Literal["HIGHLY_POSITIVE", "POSITIVE", "NEGATIVE", "MIXED"]


class ReviewText(BaseModel):
    text: str


class ReviewRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=5000)


class ReviewsRequest(BaseModel):
    reviews: list[str | ReviewText] = Field(default_factory=list, max_length=500)


class ReviewSentiment(BaseModel):
    sentiment: Label
    score: float
    confidence: float
    text: str


class SentimentSummary(BaseModel):
    positive: int
    negative: int
    neutral: int
    total: int
    positive_percentage: int
    negative_percentage: int
    average_score: float


class BulkSentiment(BaseModel):
    results: list[ReviewSentiment]
    summary: SentimentSummary


class TourSentiment(SentimentSummary):
    overall_sentiment: OverallLabel
    recommendation: str
