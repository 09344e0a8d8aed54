from __future__ import annotations

from collections import Counter
from typing import Any


def _rate(count: int, total: int) -> float:
    return round(count / total * 100, 1) if total else 0.0


def _top(counter: Counter[str], n: int = 10) -> list[dict[str, Any]]:
    return [{"name": name, "count": c} for name, c in counter.most_common(n)]


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    changes = [e for e in events if e["type"] == "filter_change"]
    registrations = [e for e in events if e["type"] == "registration"]
    runs = [e for e in events if e["type"] == "recommendations"]
    total = len(changes)

    # Selected topics / industries across filter changes
    topic_counter: Counter[str] = Counter()
    industry_counter: Counter[str] = Counter()
    price_counter: Counter[str] = Counter()
    for e in changes:
        for t in e.get("topics", []) or []:
            topic_counter[t] += 1
        if e.get("industry", "all") != "all":
            industry_counter[e["industry"]] += 1
        price_counter[e.get("price", "all")] += 1

    # Filter usage rates
    filter_counts = {"topics": 0, "industry": 0, "price": 0, "skill_levels": 0}
    for e in changes:
        if e.get("topics"):
            filter_counts["topics"] += 1
        if e.get("industry", "all") != "all":
            filter_counts["industry"] += 1
        if e.get("price", "all") != "all":
            filter_counts["price"] += 1
        if e.get("skill_levels"):
            filter_counts["skill_levels"] += 1
    filter_usage = {k: _rate(v, total) for k, v in filter_counts.items()}

    # Registrations (first-time only)
    new_registrations = [r for r in registrations if not r.get("already_registered")]
    webinar_counter: Counter[str] = Counter(r["webinar_id"] for r in new_registrations)

    # Recommendation runs
    times = [r["response_time_ms"] for r in runs if "response_time_ms" in r]
    failures = sum(1 for r in runs if r.get("failed"))

    return {
        "total_filter_changes": total,
        "top_topics": _top(topic_counter),
        "top_industries": _top(industry_counter),
        "price_mode_usage": dict(price_counter),
        "filter_usage": filter_usage,
        "registrations": {
            "total": len(new_registrations),
            "repeat_attempts": len(registrations) - len(new_registrations),
            "top_webinars": _top(webinar_counter),
        },
        "recommendation_runs": {
            "total": len(runs),
            "failed": failures,
            "avg_response_time_ms": round(sum(times) / len(times), 1) if times else 0.0,
        },
    }
