from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SentimentConfig:
    positive_threshold: float = 0.1
    negative_threshold: float = -0.1
    neutral_confidence: float = 0.5
    highly_positive_pct: int = 60
    positive_pct: int = 40
    negative_pct: int = 40


DEFAULT_SENTIMENT_CONFIG = SentimentConfig()
