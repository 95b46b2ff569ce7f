"""
Analysis modes: deterministic computations behind every chat answer.

Each mode takes the full record set, the active store filter and the evaluation
instant, and returns an AnalysisResponse (narrative, visual payload, suggestions).
Missing data never raises: zero denominators produce 0 and empty inputs produce
empty series.

Store filter scope:
- summary, improvement, goal tracking, forecast: restricted to the active store
- summary daily trend, store comparison, cost breakdown: always all stores
"""

from dataclasses import dataclass, field
from datetime import date, datetime

import numpy as np

from daily_records import (
    COST_FIELDS,
    DailyRecord,
    aggregate,
    as_of,
    bucket_by_day,
    bucket_by_week,
    current_month_records,
    filter_by_store,
    is_all_stores,
    records_to_frame,
    sum_cost_categories,
    trailing_records,
)
from formatting import Formatter, format_currency, format_percent
from mode_definitions import (
    ACHIEVED_COLOR,
    COST_CATEGORIES,
    FALLBACK_MESSAGE,
    FORECAST_LOOKBACK_DAYS,
    FORECAST_WEEK_COUNT,
    GOAL_ALL_STORES,
    GOAL_MONTH_DAYS,
    GOAL_SINGLE_STORE,
    IMPROVEMENT_CATEGORIES,
    MARGIN_GAP_THRESHOLD_PP,
    MARGIN_POSITIVE_TONE_PCT,
    NARRATIVE_CONFIDENCE,
    POINT_CONFIDENCE,
    REMAINING_COLOR,
    SUGGESTIONS,
    SUMMARY_TREND_DAYS,
    WEEKS_PER_MONTH,
    margin_tier,
)
from narratives import (
    cost_breakdown_narrative,
    forecast_narrative,
    goal_narrative,
    improvement_narrative,
    store_comparison_narrative,
    summary_narrative,
)
from visual_payload import (
    ChartPayload,
    ComparisonPayload,
    CostSlice,
    DailyPoint,
    Improvement,
    MetricsPayload,
    MetricTile,
    Prediction,
    PredictionPayload,
    ProgressSlice,
    RecommendationsPayload,
    StorePoint,
    VisualPayload,
    WeekPoint,
)


@dataclass
class AnalysisContext:
    """Collaborators a mode needs besides the data: formatters and the store directory."""
    fmt_currency: Formatter = format_currency
    fmt_percent: Formatter = format_percent
    stores: dict[str, str] = field(default_factory=dict)  # store id -> display name
    store_name_prefix: str = ""

    def scope_label(self, store_filter: str | None) -> str:
        if is_all_stores(store_filter):
            return "All stores"
        return self.stores.get(store_filter, store_filter)

    def display_name(self, store_name: str) -> str:
        if self.store_name_prefix:
            stripped = store_name.replace(self.store_name_prefix, "").strip()
            return stripped or store_name
        return store_name


@dataclass
class AnalysisResponse:
    narrative: str
    visual_payload: VisualPayload | None
    suggestions: list[str]
    intent: str = ""


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else 0.0


# -----------------------------------------------------------------------------
# MODE 1: Summary
# -----------------------------------------------------------------------------

def summarize(
    records: list[DailyRecord],
    store_filter: str | None,
    now: date | datetime,
    ctx: AnalysisContext,
) -> AnalysisResponse:
    month = aggregate(current_month_records(filter_by_store(records, store_filter), now))
    tier = margin_tier(month.margin)

    # Trend covers every store, whatever the filter.
    daily = [
        DailyPoint(
            date=b.date,
            label=b.label,
            sales=b.totals.sales,
            profit=b.totals.profit,
            stores=b.stores,
        )
        for b in bucket_by_day(records, SUMMARY_TREND_DAYS)
    ]

    metrics = [
        MetricTile("Sales this month", ctx.fmt_currency(month.sales), "neutral"),
        MetricTile(
            "Profit this month",
            ctx.fmt_currency(month.profit),
            "positive" if month.profit >= 0 else "negative",
        ),
        MetricTile(
            "Profit margin",
            ctx.fmt_percent(month.margin),
            "positive" if month.margin >= MARGIN_POSITIVE_TONE_PCT else "negative",
        ),
        MetricTile("Reports", str(month.count), "neutral"),
    ]

    payload = ChartPayload(
        chart_type="area",
        series=daily,
        title="Sales and profit, last 2 weeks",
        metrics=metrics,
    )
    narrative = summary_narrative(
        ctx.scope_label(store_filter), month, tier, ctx.fmt_currency, ctx.fmt_percent
    )
    return AnalysisResponse(narrative, payload, list(SUGGESTIONS["summary"]))


# -----------------------------------------------------------------------------
# MODE 2: Store comparison
# -----------------------------------------------------------------------------

def compare_stores(
    records: list[DailyRecord],
    store_filter: str | None,
    now: date | datetime,
    ctx: AnalysisContext,
) -> AnalysisResponse:
    # Comparison is cross-store by nature: the filter is ignored.
    df = records_to_frame(records)
    points: list[StorePoint] = []
    if not df.empty:
        df["expenses"] = df[list(COST_FIELDS)].sum(axis=1)
        grouped = df.groupby("storeName").agg(
            sales=("sales", "sum"),
            expenses=("expenses", "sum"),
            count=("sales", "size"),
        )
        grouped["profit"] = grouped["sales"] - grouped["expenses"]
        grouped = grouped.sort_values("sales", ascending=False, kind="mergesort")
        for name, row in grouped.iterrows():
            sales = float(row["sales"])
            profit = float(row["profit"])
            points.append(
                StorePoint(
                    name=ctx.display_name(str(name)),
                    sales=sales,
                    profit=profit,
                    profit_margin=_ratio(profit, sales) * 100,
                    efficiency=_ratio(sales, int(row["count"])),
                )
            )

    recommendations: list[str] = []
    top = points[0] if points else None
    if len(points) > 1:
        worst = points[-1]
        if top.profit_margin - worst.profit_margin > MARGIN_GAP_THRESHOLD_PP:
            recommendations.append(f"Improving the profit margin at {worst.name} is urgent")

    payload = ComparisonPayload(
        series=points,
        title="Sales and profit by store",
        recommendations=recommendations,
    )
    narrative = store_comparison_narrative(
        top.name if top else None,
        top.sales if top else 0.0,
        top.profit_margin if top else 0.0,
        ctx.fmt_currency,
        ctx.fmt_percent,
    )
    return AnalysisResponse(narrative, payload, list(SUGGESTIONS["store_comparison"]))


# -----------------------------------------------------------------------------
# MODE 3: Forecast
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ForecastResult:
    weekly_sales: list[float]
    avg_weekly_sales: float
    trend_slope: float
    next_week: float
    next_month: float
    narrative_confidence: float
    point_confidence: float


def _confidence(slope: float, avg: float, params: dict[str, float]) -> float:
    return max(params["floor"], params["base"] - _ratio(abs(slope), avg) * params["weight"])


def project_sales(weekly_sales: list[float]) -> ForecastResult:
    """
    Two-point linear extrapolation over weekly sales ordered oldest first.
    slope = (newest - oldest) / (n - 1); next week = mean + slope.
    """
    avg = float(np.mean(weekly_sales)) if weekly_sales else 0.0
    if len(weekly_sales) > 1:
        slope = (weekly_sales[-1] - weekly_sales[0]) / (len(weekly_sales) - 1)
    else:
        slope = 0.0
    next_week = avg + slope
    return ForecastResult(
        weekly_sales=list(weekly_sales),
        avg_weekly_sales=avg,
        trend_slope=slope,
        next_week=next_week,
        next_month=next_week * WEEKS_PER_MONTH,
        narrative_confidence=_confidence(slope, avg, NARRATIVE_CONFIDENCE),
        point_confidence=_confidence(slope, avg, POINT_CONFIDENCE),
    )


def trend_direction(slope: float) -> str:
    if slope > 0:
        return "rising"
    if slope < 0:
        return "falling"
    return "stable"


def forecast(
    records: list[DailyRecord],
    store_filter: str | None,
    now: date | datetime,
    ctx: AnalysisContext,
) -> AnalysisResponse:
    recent = trailing_records(filter_by_store(records, store_filter), now, FORECAST_LOOKBACK_DAYS)
    weeks = bucket_by_week(recent, now, FORECAST_WEEK_COUNT)
    result = project_sales([w.totals.sales for w in weeks])

    series = [WeekPoint(week=w.label, sales=w.totals.sales, trend=w.delta) for w in weeks]
    series.append(
        WeekPoint(
            week="Next week (forecast)",
            sales=result.next_week,
            trend=result.trend_slope,
            is_prediction=True,
            confidence=result.point_confidence,
        )
    )

    payload = PredictionPayload(
        series=series,
        title="Sales trend forecast (4 weeks + next week)",
        predictions=[
            Prediction(period="next_week", value=result.next_week),
            Prediction(period="next_month", value=result.next_month),
        ],
    )
    narrative = forecast_narrative(
        result.next_month,
        result.next_week,
        result.narrative_confidence,
        trend_direction(result.trend_slope),
        ctx.fmt_currency,
    )
    return AnalysisResponse(narrative, payload, list(SUGGESTIONS["forecast"]))


# -----------------------------------------------------------------------------
# MODE 4: Improvement recommendations
# -----------------------------------------------------------------------------

def recommend_improvements(
    records: list[DailyRecord],
    store_filter: str | None,
    now: date | datetime,
    ctx: AnalysisContext,
) -> AnalysisResponse:
    month = aggregate(current_month_records(filter_by_store(records, store_filter), now))
    bases = {"sales": month.sales, "expenses": month.expenses}

    improvements = [
        Improvement(
            category=item["category"],
            impact=item["impact"],
            timeframe=item["timeframe"],
            actions=list(item["actions"]),
            expected_savings=bases[item["basis"]] * item["rate"],
        )
        for item in IMPROVEMENT_CATEGORIES
    ]
    total_impact = sum(i.expected_savings for i in improvements)
    projected_profit = month.profit + total_impact
    projected_margin = _ratio(projected_profit, month.sales) * 100

    payload = RecommendationsPayload(
        improvements=improvements,
        current_profit=month.profit,
        projected_profit=projected_profit,
        current_margin=month.margin,
        projected_margin=projected_margin,
    )
    narrative = improvement_narrative(
        month.margin, projected_margin, total_impact, ctx.fmt_currency, ctx.fmt_percent
    )
    return AnalysisResponse(narrative, payload, list(SUGGESTIONS["improvement"]))


# -----------------------------------------------------------------------------
# MODE 5: Goal tracking
# -----------------------------------------------------------------------------

def goal_for(store_filter: str | None) -> int:
    return GOAL_ALL_STORES if is_all_stores(store_filter) else GOAL_SINGLE_STORE


def days_remaining(now: date | datetime) -> int:
    # Flat 30-day month, not the calendar length of the current month.
    return GOAL_MONTH_DAYS - as_of(now).day


def track_goal(
    records: list[DailyRecord],
    store_filter: str | None,
    now: date | datetime,
    ctx: AnalysisContext,
) -> AnalysisResponse:
    target = goal_for(store_filter)
    month = aggregate(current_month_records(filter_by_store(records, store_filter), now))
    achievement = _ratio(month.sales, target) * 100
    remaining = max(0.0, target - month.sales)
    days_left = days_remaining(now)
    daily_target = remaining / days_left if days_left > 0 else 0.0

    payload = MetricsPayload(
        progress_slices=[
            ProgressSlice("Achieved", max(0.0, min(month.sales, target)), ACHIEVED_COLOR),
            ProgressSlice("Remaining", remaining, REMAINING_COLOR),
        ],
        achievement=achievement,
        target=target,
        current=month.sales,
        daily_target=daily_target,
    )
    narrative = goal_narrative(
        achievement, month.sales, target, remaining, daily_target, ctx.fmt_currency, ctx.fmt_percent
    )
    return AnalysisResponse(narrative, payload, list(SUGGESTIONS["goal_tracking"]))


# -----------------------------------------------------------------------------
# MODE 6: Cost breakdown
# -----------------------------------------------------------------------------

def break_down_costs(
    records: list[DailyRecord],
    store_filter: str | None,
    now: date | datetime,
    ctx: AnalysisContext,
) -> AnalysisResponse:
    # All records, filter ignored.
    totals = sum_cost_categories(records)
    total = float(sum(totals.values()))

    slices = [
        CostSlice(
            name=c["label"],
            value=totals[c["field"]],
            color=c["color"],
            share_pct=_ratio(totals[c["field"]], total) * 100,
        )
        for c in COST_CATEGORIES
        if totals[c["field"]] > 0
    ]
    slices.sort(key=lambda s: s.value, reverse=True)

    payload = ChartPayload(
        chart_type="pie",
        series=slices,
        title="Expense composition",
        total=total,
    )
    largest = slices[0] if slices else None
    narrative = cost_breakdown_narrative(
        total,
        largest.name if largest else None,
        largest.share_pct if largest else 0.0,
        ctx.fmt_currency,
        ctx.fmt_percent,
    )
    return AnalysisResponse(narrative, payload, list(SUGGESTIONS["cost_breakdown"]))


# -----------------------------------------------------------------------------
# Fallback
# -----------------------------------------------------------------------------

def fallback(
    records: list[DailyRecord],
    store_filter: str | None,
    now: date | datetime,
    ctx: AnalysisContext,
) -> AnalysisResponse:
    return AnalysisResponse(FALLBACK_MESSAGE, None, list(SUGGESTIONS["fallback"]))

