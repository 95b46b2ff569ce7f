import pytest

from visual_payload import (
    ChartPayload,
    ComparisonPayload,
    CostSlice,
    DailyPoint,
    Improvement,
    MetricsPayload,
    PayloadValidationError,
    PredictionPayload,
    ProgressSlice,
    RecommendationsPayload,
    StorePoint,
    WeekPoint,
    payload_to_structured,
    validate_payload,
)


def _slice(name, value):
    return CostSlice(name=name, value=value, color="#000000", share_pct=0.0)


def test_kind_tags():
    assert ChartPayload.kind == "chart"
    assert ComparisonPayload.kind == "comparison"
    assert PredictionPayload.kind == "prediction"
    assert RecommendationsPayload.kind == "recommendations"
    assert MetricsPayload.kind == "metrics"


def test_fixed_chart_types():
    assert ComparisonPayload(series=[], title="t").chart_type == "bar"
    assert PredictionPayload(series=[], title="t").chart_type == "line"
    m = MetricsPayload(progress_slices=[], achievement=0, target=0, current=0, daily_target=0)
    assert m.chart_type == "progress"


def test_pie_rejects_unsorted_or_zero_slices():
    with pytest.raises(PayloadValidationError):
        validate_payload(ChartPayload("pie", [_slice("a", 1), _slice("b", 2)], "t"))
    with pytest.raises(PayloadValidationError):
        validate_payload(ChartPayload("pie", [_slice("a", 0)], "t"))


def test_area_requires_daily_points():
    with pytest.raises(PayloadValidationError):
        validate_payload(ChartPayload("area", [_slice("a", 1)], "t"))
    point = DailyPoint(date="2026-10-01", label="Oct 1", sales=1, profit=1, stores=1)
    assert validate_payload(ChartPayload("area", [point], "t")).series == [point]


def test_unknown_chart_type():
    with pytest.raises(PayloadValidationError, match="unsupported chart type"):
        validate_payload(ChartPayload("radar", [], "t"))


def test_comparison_must_be_sorted():
    series = [StorePoint("A", 1, 0, 0, 1), StorePoint("B", 2, 0, 0, 2)]
    with pytest.raises(PayloadValidationError):
        validate_payload(ComparisonPayload(series=series, title="t"))


def test_prediction_point_must_be_last():
    series = [WeekPoint("Week 1", 1, 0, is_prediction=True), WeekPoint("Week 2", 1, 0)]
    with pytest.raises(PayloadValidationError):
        validate_payload(PredictionPayload(series=series, title="t"))


def test_recommendations_projection_consistency():
    imp = Improvement("c", "i", "t", ["a"], expected_savings=10)
    ok = RecommendationsPayload([imp], current_profit=5, projected_profit=15, current_margin=0, projected_margin=0)
    assert validate_payload(ok) is ok
    bad = RecommendationsPayload([imp], current_profit=5, projected_profit=20, current_margin=0, projected_margin=0)
    with pytest.raises(PayloadValidationError):
        validate_payload(bad)


def test_progress_slices_cover_target():
    slices = [ProgressSlice("Achieved", 4, "#1"), ProgressSlice("Remaining", 5, "#2")]
    with pytest.raises(PayloadValidationError):
        validate_payload(MetricsPayload(slices, achievement=40, target=10, current=4, daily_target=0))


def test_progress_below_zero_skips_coverage_check():
    slices = [ProgressSlice("Achieved", 0.0, "#1"), ProgressSlice("Remaining", 15, "#2")]
    payload = MetricsPayload(slices, achievement=-50, target=10, current=-5, daily_target=1.25)
    assert validate_payload(payload) is payload


def test_progress_rejects_negative_slice():
    slices = [ProgressSlice("Achieved", -5, "#1"), ProgressSlice("Remaining", 15, "#2")]
    with pytest.raises(PayloadValidationError):
        validate_payload(MetricsPayload(slices, achievement=-50, target=10, current=-5, daily_target=0))


def test_validation_error_is_value_error():
    assert issubclass(PayloadValidationError, ValueError)


def test_payload_to_structured():
    payload = PredictionPayload(series=[WeekPoint("Week 1", 5, 0)], title="t")
    out = payload_to_structured(payload)
    assert out["kind"] == "prediction"
    assert out["chart_type"] == "line"
    assert out["series"][0] == {"week": "Week 1", "sales": 5, "trend": 0, "is_prediction": False, "confidence": None}
    assert payload_to_structured(None) is None
