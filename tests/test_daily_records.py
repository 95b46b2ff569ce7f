import itertools
from datetime import date

import pandas as pd

from daily_records import (
    AggregatedPeriod,
    aggregate,
    bucket_by_day,
    bucket_by_week,
    current_month_records,
    filter_by_store,
    frame_to_records,
    records_to_frame,
    sum_cost_categories,
    trailing_records,
)
from tests.conftest import make_record


def test_aggregate_empty_is_all_zero():
    assert aggregate([]) == AggregatedPeriod(0.0, 0.0, 0.0, 0)


def test_record_expenses_sum_all_eight_cost_fields():
    r = make_record(
        "2026-10-01", sales=100, purchase=1, laborCost=2, utilities=3, promotion=4,
        cleaning=5, misc=6, communication=7, others=8,
    )
    assert r.total_expenses == 36
    assert r.profit == 64


def test_aggregate_is_order_independent(month_records):
    expected = aggregate(month_records)
    for perm in itertools.permutations(month_records):
        assert aggregate(perm) == expected


def test_aggregate_profit_equals_sales_minus_expenses(month_records):
    totals = aggregate(month_records)
    assert totals.sales == 9000
    assert totals.expenses == 4400
    assert totals.profit == totals.sales - totals.expenses
    assert totals.count == 4


def test_margin_guards_zero_sales():
    assert aggregate([make_record("2026-10-01", purchase=10)]).margin == 0.0


def test_filter_by_store_all_sentinel(month_records):
    assert len(filter_by_store(month_records, "all")) == 4
    assert len(filter_by_store(month_records, None)) == 4
    assert {r.storeId for r in filter_by_store(month_records, "s2")} == {"s2"}


def test_current_month_records(month_records, now):
    dates = {r.date for r in current_month_records(month_records, now)}
    assert "2026-09-30" not in dates
    assert dates == {"2026-10-01", "2026-10-02"}


def test_trailing_records_window(now):
    records = [make_record("2026-09-17"), make_record("2026-09-18"), make_record("2026-10-19")]
    assert [r.date for r in trailing_records(records, now, 30)] == ["2026-09-18"]


def test_bucket_by_day_keeps_most_recent_dates():
    records = [make_record(f"2026-10-{d:02d}", sales=d) for d in range(1, 21)]
    buckets = bucket_by_day(records, 14)
    assert len(buckets) == 14
    assert buckets[0].date == "2026-10-07"
    assert buckets[-1].date == "2026-10-20"
    assert buckets[-1].label == "Oct 20"


def test_bucket_by_day_short_history():
    records = [make_record("2026-10-02", "s1", 10), make_record("2026-10-02", "s2", 5), make_record("2026-10-01")]
    buckets = bucket_by_day(records, 14)
    assert [b.date for b in buckets] == ["2026-10-01", "2026-10-02"]
    assert buckets[1].totals.sales == 15
    assert buckets[1].stores == 2


def test_bucket_by_week_boundaries_and_deltas(now):
    records = [
        make_record("2026-09-21", sales=100),  # oldest window starts here
        make_record("2026-09-27", sales=5),
        make_record("2026-09-28", sales=110),
        make_record("2026-10-11", sales=120),
        make_record("2026-10-18", sales=130),
        make_record("2026-09-20", sales=999),  # outside every window
    ]
    weeks = bucket_by_week(records, now)
    assert [w.label for w in weeks] == ["Week 1", "Week 2", "Week 3", "Week 4"]
    assert weeks[0].start == date(2026, 9, 21)
    assert weeks[-1].end == date(2026, 10, 18)
    assert [w.totals.sales for w in weeks] == [105, 110, 120, 130]
    assert [w.delta for w in weeks] == [0.0, 5, 10, 10]


def test_bucket_by_week_is_stable_for_same_day(now):
    records = [make_record("2026-10-12", sales=50)]
    assert bucket_by_week(records, now) == bucket_by_week(records, now.date())


def test_sum_cost_categories(month_records):
    totals = sum_cost_categories(month_records)
    assert totals["purchase"] == 3200
    assert totals["laborCost"] == 1100
    assert totals["utilities"] == 100
    assert totals["others"] == 0


def test_frame_to_records_normalizes_columns():
    df = pd.DataFrame(
        {
            "Date": ["2026-10-01", "not a date"],
            "store_id": ["s1", "s2"],
            "Sales": ["1000", 200],
            "labor_cost": [300, 10],
        }
    )
    records = frame_to_records(df)
    assert len(records) == 1
    r = records[0]
    assert (r.date, r.storeId, r.storeName) == ("2026-10-01", "s1", "s1")
    assert r.sales == 1000.0
    assert r.laborCost == 300.0
    assert r.purchase == 0.0


def test_records_to_frame_columns(month_records):
    df = records_to_frame(month_records)
    assert list(df.columns[:4]) == ["date", "storeId", "storeName", "sales"]
    assert len(df) == 4
