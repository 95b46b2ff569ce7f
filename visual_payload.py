"""
Visual payloads: the structured output the rendering layer draws from.

One dataclass per variant. The rendering layer selects a widget from `kind`
and only reads the fields that variant declares.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, ClassVar


class PayloadValidationError(ValueError):
    """A payload violates its variant's invariants."""


@dataclass(frozen=True)
class MetricTile:
    label: str
    value: str
    tone: str  # "positive" | "negative" | "neutral"


@dataclass(frozen=True)
class DailyPoint:
    date: str
    label: str
    sales: float
    profit: float
    stores: int


@dataclass(frozen=True)
class CostSlice:
    name: str
    value: float
    color: str
    share_pct: float


@dataclass(frozen=True)
class StorePoint:
    name: str
    sales: float
    profit: float
    profit_margin: float
    efficiency: float


@dataclass(frozen=True)
class WeekPoint:
    week: str
    sales: float
    trend: float
    is_prediction: bool = False
    confidence: float | None = None


@dataclass(frozen=True)
class Prediction:
    period: str  # "next_week" | "next_month"
    value: float
    type: str = "sales"


@dataclass(frozen=True)
class Improvement:
    category: str
    impact: str
    timeframe: str
    actions: list[str]
    expected_savings: float


@dataclass(frozen=True)
class ProgressSlice:
    label: str
    value: float
    color: str


@dataclass(frozen=True)
class ChartPayload:
    kind: ClassVar[str] = "chart"
    chart_type: str  # "area" | "pie"
    series: list[DailyPoint] | list[CostSlice]
    title: str
    metrics: list[MetricTile] | None = None
    total: float | None = None


@dataclass(frozen=True)
class ComparisonPayload:
    kind: ClassVar[str] = "comparison"
    series: list[StorePoint]
    title: str
    recommendations: list[str] = field(default_factory=list)
    chart_type: str = field(default="bar", init=False)


@dataclass(frozen=True)
class PredictionPayload:
    kind: ClassVar[str] = "prediction"
    series: list[WeekPoint]
    title: str
    predictions: list[Prediction] = field(default_factory=list)
    chart_type: str = field(default="line", init=False)


@dataclass(frozen=True)
class RecommendationsPayload:
    kind: ClassVar[str] = "recommendations"
    improvements: list[Improvement]
    current_profit: float
    projected_profit: float
    current_margin: float
    projected_margin: float


@dataclass(frozen=True)
class MetricsPayload:
    kind: ClassVar[str] = "metrics"
    progress_slices: list[ProgressSlice]
    achievement: float
    target: float
    current: float
    daily_target: float
    chart_type: str = field(default="progress", init=False)


VisualPayload = ChartPayload | ComparisonPayload | PredictionPayload | RecommendationsPayload | MetricsPayload

TOLERANCE = 1e-6


def _fail(payload: Any, reason: str) -> None:
    raise PayloadValidationError(f"Invalid {type(payload).__name__}: {reason}")


def validate_payload(payload: VisualPayload) -> VisualPayload:
    """Check the invariants of the payload's variant. Returns the payload unchanged."""
    if isinstance(payload, ChartPayload):
        if payload.chart_type == "area":
            if not all(isinstance(p, DailyPoint) for p in payload.series):
                _fail(payload, "area chart series must be daily points")
        elif payload.chart_type == "pie":
            if not all(isinstance(p, CostSlice) for p in payload.series):
                _fail(payload, "pie chart series must be cost slices")
            if any(s.value <= 0 for s in payload.series):
                _fail(payload, "pie slices must be positive")
            values = [s.value for s in payload.series]
            if values != sorted(values, reverse=True):
                _fail(payload, "pie slices must be sorted by value descending")
        else:
            _fail(payload, f"unsupported chart type '{payload.chart_type}'")
    elif isinstance(payload, ComparisonPayload):
        sales = [p.sales for p in payload.series]
        if sales != sorted(sales, reverse=True):
            _fail(payload, "stores must be sorted by sales descending")
    elif isinstance(payload, PredictionPayload):
        flags = [p.is_prediction for p in payload.series]
        if flags and (not flags[-1] or any(flags[:-1])):
            _fail(payload, "only the last point may be a prediction")
    elif isinstance(payload, RecommendationsPayload):
        total = sum(i.expected_savings for i in payload.improvements)
        if abs(payload.projected_profit - (payload.current_profit + total)) > TOLERANCE:
            _fail(payload, "projected profit must equal current profit plus expected savings")
    elif isinstance(payload, MetricsPayload):
        if any(s.value < 0 for s in payload.progress_slices):
            _fail(payload, "progress slices must be non-negative")
        if 0 <= payload.current <= payload.target:
            covered = sum(s.value for s in payload.progress_slices)
            if abs(covered - payload.target) > TOLERANCE:
                _fail(payload, "progress slices must add up to the target")
    else:
        _fail(payload, "unknown payload variant")
    return payload


def payload_to_structured(payload: VisualPayload | None) -> dict[str, Any] | None:
    """JSON-serializable view of a payload, tagged with its `kind`."""
    if payload is None:
        return None
    out = {"kind": payload.kind}
    out.update(asdict(payload))
    return out
