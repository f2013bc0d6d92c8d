from __future__ import annotations

from collections import Counter
from typing import Any


def _top(counter: Counter[str], n: int = 10) -> list[dict[str, Any]]:
    return [{"name": name, "count": count} for name, count in counter.most_common(n)]


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "search"]
    total = len(searches)

    # Average response time
    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Searches that produced nothing to show
    zero_results = sum(1 for s in searches if s.get("results_returned", 0) == 0)

    mode_usage = Counter(s.get("mode", "single") for s in searches)

    preference_counter: Counter[str] = Counter()
    feature_counter: Counter[str] = Counter()
    for s in searches:
        preference_counter.update(s.get("selected_preferences", []) or [])
        feature_counter.update(s.get("selected_features", []) or [])

    return {
        "total_searches": total,
        "avg_response_time_ms": avg_time,
        "zero_result_rate": round(zero_results / total * 100, 1) if total else 0.0,
        "mode_usage": {
            "single": mode_usage["single"],
            "multiple": mode_usage["multiple"],
        },
        "top_preferences": _top(preference_counter),
        "top_features": _top(feature_counter),
    }
