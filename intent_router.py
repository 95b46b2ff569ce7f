"""
Keyword intent router.

Routing is substring matching over an ordered table of (intent, predicate) pairs.
The first predicate that matches wins; FALLBACK matches everything, so routing is total.
"""

from enum import Enum
from typing import Callable

from mode_definitions import (
    COST_KEYWORDS,
    FORECAST_KEYWORDS,
    GOAL_KEYWORDS,
    IMPROVEMENT_KEYWORDS,
    STORE_COMPARISON_KEYWORDS,
    STORE_KEYWORDS,
    SUMMARY_KEYWORDS,
)


class Intent(str, Enum):
    SUMMARY = "summary"
    STORE_COMPARISON = "store_comparison"
    FORECAST = "forecast"
    IMPROVEMENT = "improvement"
    GOAL_TRACKING = "goal_tracking"
    COST_BREAKDOWN = "cost_breakdown"
    FALLBACK = "fallback"


def normalize_query(query: str) -> str:
    return (query or "").strip().casefold()


def _contains_any(q: str, keywords: tuple[str, ...]) -> bool:
    return any(k in q for k in keywords)


def _is_store_comparison(q: str) -> bool:
    # A store term alone is not enough; it must co-occur with a comparison term.
    return _contains_any(q, STORE_KEYWORDS) and _contains_any(q, STORE_COMPARISON_KEYWORDS)


INTENT_TABLE: tuple[tuple[Intent, Callable[[str], bool]], ...] = (
    (Intent.SUMMARY, lambda q: _contains_any(q, SUMMARY_KEYWORDS)),
    (Intent.STORE_COMPARISON, _is_store_comparison),
    (Intent.FORECAST, lambda q: _contains_any(q, FORECAST_KEYWORDS)),
    (Intent.IMPROVEMENT, lambda q: _contains_any(q, IMPROVEMENT_KEYWORDS)),
    (Intent.GOAL_TRACKING, lambda q: _contains_any(q, GOAL_KEYWORDS)),
    (Intent.COST_BREAKDOWN, lambda q: _contains_any(q, COST_KEYWORDS)),
    (Intent.FALLBACK, lambda q: True),
)


def route(query: str) -> Intent:
    q = normalize_query(query)
    for intent, predicate in INTENT_TABLE:
        if predicate(q):
            return intent
    return Intent.FALLBACK
