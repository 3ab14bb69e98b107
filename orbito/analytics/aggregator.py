from __future__ import annotations

from collections import Counter
from typing import Any

RECOMMENDATION_EVENTS = ("personalized", "similar", "trending")


def _top(counter: Counter[str], n: int = 10) -> list[dict[str, Any]]:
    return [{"name": name, "count": count} for name, count in counter.most_common(n)]


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    recs = [e for e in events if e["type"] in RECOMMENDATION_EVENTS]
    total = len(recs)

    by_type = Counter(e["type"] for e in events)

    times = [e["response_time_ms"] for e in recs if "response_time_ms" in e]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # What the engine surfaces most
    category_counter: Counter[str] = Counter()
    destination_counter: Counter[str] = Counter()
    for e in recs:
        category_counter.update(e.get("categories") or [])
        destination_counter.update(e.get("destinations") or [])

    strategy_counter: Counter[str] = Counter(
        e["strategy"] for e in recs if e["type"] == "personalized" and e.get("strategy")
    )

    empty_results = sum(1 for e in recs if e.get("results_returned", 0) == 0)

    cacheable = [e for e in recs if e["type"] != "trending"]
    cache_hits = sum(1 for e in cacheable if e.get("cache_hit"))

    sentiment = [e for e in events if e["type"] == "sentiment"]
    reviews_analyzed = sum(e.get("reviews", 0) for e in sentiment)

    return {
        "total_requests": total,
        "requests_by_type": {t: by_type.get(t, 0) for t in RECOMMENDATION_EVENTS},
        "avg_response_time_ms": avg_time,
        "top_categories": _top(category_counter),
        "top_destinations": _top(destination_counter),
        "personalization_strategies": dict(strategy_counter),
        "empty_result_rate": round(empty_results / total * 100, 1) if total else 0.0,
        "cache_stats": {
            "hits": cache_hits,
            "misses": len(cacheable) - cache_hits,
            "hit_rate": round(cache_hits / len(cacheable) * 100, 1) if cacheable else 0.0,
        },
        "sentiment_summary": {
            "requests": len(sentiment),
            "reviews_analyzed": reviews_analyzed,
        },
    }
