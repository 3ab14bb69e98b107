from __future__ import annotations

import logging
import os

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events, record_event
from .recommendations.cache import get_cache_stats
from .recommendations.models import (
    PersonalizedRequest,
    PersonalizedResponse,
    SimilarResponse,
    Tour,
    TrendingResponse,
)
from .recommendations.service import recommend_for_user, similar_to, trending
from .sentiment.analyzer import SentimentAnalyzer, get_sentiment_analyzer
from .sentiment.models import (
    BulkSentiment,
    ReviewRequest,
    ReviewSentiment,
    ReviewsRequest,
    TourSentiment,
)
from .tours.data_store import TourStore, get_tour_store
from .tours.errors import StoreError, TourNotFoundError

logging.basicConfig(
    level=getattr(logging, os.getenv("ORBITO_LOG_LEVEL", "INFO").upper(), logging.INFO),
    format="[%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Orbito Recommendation API", version="1.0.0")

raw_origins = os.getenv("ORBITO_ALLOWED_ORIGINS") or "*"
allowed_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _unavailable(exc: StoreError) -> HTTPException:
    logger.error("Tour store unavailable: %s", exc)
    return HTTPException(status_code=503, detail="Tour catalog unavailable")


# ── Health ───────────────────────────────────────────────────────────────


@app.get("/health")
def health(store: TourStore = Depends(get_tour_store)) -> dict[str, str]:
    return {"status": "ok", "store": store.name}


@app.get("/ready")
def ready() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/live")
def live() -> dict[str, str]:
    return {"status": "ok"}


# ── Catalog ──────────────────────────────────────────────────────────────


@app.get("/tours", response_model=list[Tour])
def list_tours(
    category: str | None = Query(None, max_length=50),
    destination: str | None = Query(None, max_length=100),
    store: TourStore = Depends(get_tour_store),
) -> list[Tour]:
    try:
        return store.list_tours(category=category, destination=destination)
    except StoreError as exc:
        raise _unavailable(exc) from exc


@app.get("/tours/{tour_id}", response_model=Tour)
def get_tour(tour_id: str, store: TourStore = Depends(get_tour_store)) -> Tour:
    try:
        tour = store.get_tour(tour_id)
    except StoreError as exc:
        raise _unavailable(exc) from exc
    if tour is None:
        raise HTTPException(status_code=404, detail="Tour not found")
    return tour


# ── Recommendations ──────────────────────────────────────────────────────


@app.post("/recommendations/personalized", response_model=PersonalizedResponse)
def personalized(
    body: PersonalizedRequest,
    store: TourStore = Depends(get_tour_store),
) -> PersonalizedResponse:
    try:
        return recommend_for_user(store, body)
    except StoreError as exc:
        raise _unavailable(exc) from exc


@app.get("/recommendations/similar/{tour_id}", response_model=SimilarResponse)
def similar(
    tour_id: str,
    limit: int = Query(5, ge=1, le=50),
    store: TourStore = Depends(get_tour_store),
) -> SimilarResponse:
    try:
        return similar_to(store, tour_id, limit)
    except TourNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except StoreError as exc:
        raise _unavailable(exc) from exc


@app.get("/recommendations/trending", response_model=TrendingResponse)
def trending_tours(store: TourStore = Depends(get_tour_store)) -> TrendingResponse:
    try:
        return trending(store)
    except StoreError as exc:
        raise _unavailable(exc) from exc


# ── Sentiment ────────────────────────────────────────────────────────────


@app.post("/sentiment/review", response_model=ReviewSentiment)
def sentiment_review(
    body: ReviewRequest,
    analyzer: SentimentAnalyzer = Depends(get_sentiment_analyzer),
) -> ReviewSentiment:
    record_event("sentiment", {"reviews": 1})
    return analyzer.analyze_review(body.text)


@app.post("/sentiment/bulk", response_model=BulkSentiment)
def sentiment_bulk(
    body: ReviewsRequest,
    analyzer: SentimentAnalyzer = Depends(get_sentiment_analyzer),
) -> BulkSentiment:
    record_event("sentiment", {"reviews": len(body.reviews)})
    return analyzer.analyze_bulk(body.reviews)


@app.post("/sentiment/tour", response_model=TourSentiment)
def sentiment_tour(
    body: ReviewsRequest,
    analyzer: SentimentAnalyzer = Depends(get_sentiment_analyzer),
) -> TourSentiment:
    record_event("sentiment", {"reviews": len(body.reviews)})
    return analyzer.tour_sentiment(body.reviews)


# ── Operations ───────────────────────────────────────────────────────────


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_cache_stats()
