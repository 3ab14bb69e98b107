from __future__ import annotations

import math
from functools import lru_cache
from typing import Callable, Sequence

from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

from .config import DEFAULT_SENTIMENT_CONFIG, SentimentConfig
from .models import BulkSentiment, ReviewSentiment, ReviewText, SentimentSummary, TourSentiment

PolarityScorer = Callable[[str], float]


def vader_scorer() -> PolarityScorer:
    """Build a scorer returning VADER's compound polarity in [-1, 1]."""
    vader = SentimentIntensityAnalyzer()

    def score(text: str) -> float:
        return vader.polarity_scores(text)["compound"]

    return score


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class SentimentAnalyzer:
    """Labels reviews using an injected polarity scorer."""

    def __init__(
        self,
        scorer: PolarityScorer | None = None,
        config: SentimentConfig = DEFAULT_SENTIMENT_CONFIG,
    ) -> None:
        self._score = scorer or vader_scorer()
        self._config = config

    def analyze_review(self, text: str) -> ReviewSentiment:
        score = float(self._score(text))
        cfg = self._config

        if score > cfg.positive_threshold:
            label, confidence = "POSITIVE", min(abs(score), 1.0)
        elif score < cfg.negative_threshold:
            label, confidence = "NEGATIVE", min(abs(score), 1.0)
        else:
            label, confidence = "NEUTRAL", cfg.neutral_confidence

        return ReviewSentiment(
            sentiment=label,
            score=score,
            confidence=round(confidence, 2),
            text=text,
        )

    def analyze_bulk(self, reviews: Sequence[str | ReviewText]) -> BulkSentiment:
        results = [
            self.analyze_review(r.text if isinstance(r, ReviewText) else r)
            for r in reviews
        ]
        total = len(results)
        positive = sum(1 for r in results if r.sentiment == "POSITIVE")
        negative = sum(1 for r in results if r.sentiment == "NEGATIVE")

        summary = SentimentSummary(
            positive=positive,
            negative=negative,
            neutral=total - positive - negative,
            total=total,
            positive_percentage=_round_half_up(positive / total * 100) if total else 0,
            negative_percentage=_round_half_up(negative / total * 100) if total else 0,
            average_score=sum(r.score for r in results) / total if total else 0.0,
        )
        return BulkSentiment(results=results, summary=summary)

    def tour_sentiment(self, reviews: Sequence[str | ReviewText]) -> TourSentiment:
        summary = self.analyze_bulk(reviews).summary
        cfg = self._config

        if summary.positive_percentage >= cfg.highly_positive_pct:
            overall = "HIGHLY_POSITIVE"
        elif summary.positive_percentage >= cfg.positive_pct:
            overall = "POSITIVE"
        elif summary.negative_percentage >= cfg.negative_pct:
            overall = "NEGATIVE"
        else:
            overall = "MIXED"

        if "POSITIVE" in overall:
            recommendation = "Highly recommended by travelers"
        else:
            recommendation = "Mixed reviews - read carefully"

        return TourSentiment(
            **summary.model_dump(),
            overall_sentiment=overall,
            recommendation=recommendation,
        )


@lru_cache(maxsize=1)
def get_sentiment_analyzer() -> SentimentAnalyzer:
    """FastAPI dependency: one VADER-backed analyzer per process."""
    return SentimentAnalyzer()
