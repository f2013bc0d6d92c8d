from __future__ import annotations

import time
from collections import deque
from typing import Any

from ..config import DEFAULT_APP_CONFIG

# Oldest events are dropped once the log is full.
_events: deque[dict[str, Any]] = deque(maxlen=DEFAULT_APP_CONFIG.analytics_max_events)


def record_search(
    selected_preferences: list[str],
    selected_features: list[str],
    single_mode: bool,
    results_returned: int,
    response_time_ms: float,
) -> None:
    """Append one recommendation search to the in-memory event log."""
    _events.append({
        "type": "search",
        "timestamp": time.time(),
        "selected_preferences": list(selected_preferences),
        "selected_features": list(selected_features),
        "mode": "single" if single_mode else "multiple",
        "results_returned": results_returned,
        "response_time_ms": response_time_ms,
    })


def get_events() -> list[dict[str, Any]]:
    return list(_events)


def clear_events() -> None:
    _events.clear()
