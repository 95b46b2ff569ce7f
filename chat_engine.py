"""
Chat engine: query text -> intent -> analysis mode -> response.

analyze() is a pure function of (query, records, store filter, evaluation instant).
The evaluation instant is captured once by the caller and threaded through every
date-relative computation of one response.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, Sequence

from analysis_modes import (
    AnalysisContext,
    AnalysisResponse,
    break_down_costs,
    compare_stores,
    fallback,
    forecast,
    recommend_improvements,
    summarize,
    track_goal,
)
from daily_records import ALL_STORES, DailyRecord
from formatting import Formatter, format_currency, format_percent
from intent_router import Intent, route
from mode_definitions import NO_DATA_MESSAGE, SUGGESTIONS, WELCOME_MESSAGE
from visual_payload import VisualPayload, validate_payload

logger = logging.getLogger(__name__)

ModeHandler = Callable[[list[DailyRecord], str | None, date | datetime, AnalysisContext], AnalysisResponse]

MODE_HANDLERS: dict[Intent, ModeHandler] = {
    Intent.SUMMARY: summarize,
    Intent.STORE_COMPARISON: compare_stores,
    Intent.FORECAST: forecast,
    Intent.IMPROVEMENT: recommend_improvements,
    Intent.GOAL_TRACKING: track_goal,
    Intent.COST_BREAKDOWN: break_down_costs,
    Intent.FALLBACK: fallback,
}

NO_DATA_INTENT = "no_data"


def no_data_response() -> AnalysisResponse:
    return AnalysisResponse(NO_DATA_MESSAGE, None, list(SUGGESTIONS["no_data"]), intent=NO_DATA_INTENT)


def analyze(
    query: str,
    records: Sequence[DailyRecord],
    store_filter: str | None = ALL_STORES,
    now: date | datetime | None = None,
    fmt_currency: Formatter = format_currency,
    fmt_percent: Formatter = format_percent,
    stores: dict[str, str] | None = None,
    store_name_prefix: str = "",
) -> AnalysisResponse:
    """
    Answer one chat query.
    An empty record set always yields the no-data response, whatever the query says.
    """
    if now is None:
        now = datetime.now()
    records = list(records)
    if not records:
        logger.info("No records available; returning no-data response")
        return no_data_response()

    intent = route(query)
    logger.info("Routed query %r to %s", query, intent.value)

    ctx = AnalysisContext(
        fmt_currency=fmt_currency,
        fmt_percent=fmt_percent,
        stores=dict(stores or {}),
        store_name_prefix=store_name_prefix,
    )
    response = MODE_HANDLERS[intent](records, store_filter, now, ctx)
    if response.visual_payload is not None:
        validate_payload(response.visual_payload)
    response.intent = intent.value
    return response


# -----------------------------------------------------------------------------
# Transcript
# -----------------------------------------------------------------------------

@dataclass
class ChatMessage:
    role: str  # "user" | "assistant"
    text: str
    visual_payload: VisualPayload | None = None
    suggestions: list[str] = field(default_factory=list)
    timestamp: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)


@dataclass
class ChatSession:
    """In-memory transcript; starts with the welcome message."""
    messages: list[ChatMessage] = field(default_factory=list)

    def __post_init__(self):
        if not self.messages:
            self.messages.append(
                ChatMessage(
                    role="assistant",
                    text=WELCOME_MESSAGE,
                    suggestions=list(SUGGESTIONS["welcome"]),
                )
            )

    def ask(
        self,
        query: str,
        records: Sequence[DailyRecord],
        store_filter: str | None = ALL_STORES,
        now: date | datetime | None = None,
        **options,
    ) -> ChatMessage:
        now = now or datetime.now()
        self.messages.append(ChatMessage(role="user", text=query, timestamp=now))
        response = analyze(query, records, store_filter, now, **options)
        reply = ChatMessage(
            role="assistant",
            text=response.narrative,
            visual_payload=response.visual_payload,
            suggestions=list(response.suggestions),
            timestamp=now,
        )
        self.messages.append(reply)
        return reply
