import pandas as pd
from dataclasses import dataclass, fields
from datetime import date, datetime, timedelta
from typing import Any, Iterable, Sequence


ALL_STORES = "all"

COST_FIELDS = (
    "purchase",
    "laborCost",
    "utilities",
    "promotion",
    "cleaning",
    "misc",
    "communication",
    "others",
)

RECORD_COLUMNS = ("date", "storeId", "storeName", "sales") + COST_FIELDS


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = df.columns.str.strip()
    col_map = {
        "Date": "date",
        "date": "date",
        "store_id": "storeId",
        "Store ID": "storeId",
        "storeId": "storeId",
        "store_name": "storeName",
        "Store Name": "storeName",
        "storeName": "storeName",
        "Sales": "sales",
        "Purchase": "purchase",
        "labor_cost": "laborCost",
        "Labor Cost": "laborCost",
        "laborCost": "laborCost",
        "Utilities": "utilities",
        "Promotion": "promotion",
        "Cleaning": "cleaning",
        "Misc": "misc",
        "Communication": "communication",
        "Others": "others",
    }
    for old, new in col_map.items():
        if old in df.columns and new not in df.columns:
            df = df.rename(columns={old: new})
    return df


@dataclass(frozen=True)
class DailyRecord:
    """One store's operational report for one calendar day."""
    date: str
    storeId: str
    storeName: str
    sales: float = 0.0
    purchase: float = 0.0
    laborCost: float = 0.0
    utilities: float = 0.0
    promotion: float = 0.0
    cleaning: float = 0.0
    misc: float = 0.0
    communication: float = 0.0
    others: float = 0.0

    @property
    def total_expenses(self) -> float:
        return sum(getattr(self, name) for name in COST_FIELDS)

    @property
    def profit(self) -> float:
        return self.sales - self.total_expenses

    @property
    def day(self) -> date:
        return parse_date(self.date)


@dataclass(frozen=True)
class AggregatedPeriod:
    sales: float = 0.0
    expenses: float = 0.0
    profit: float = 0.0
    count: int = 0

    @property
    def margin(self) -> float:
        return (self.profit / self.sales * 100) if self.sales else 0.0


@dataclass(frozen=True)
class DayBucket:
    date: str
    label: str
    totals: AggregatedPeriod

    @property
    def stores(self) -> int:
        return self.totals.count


@dataclass(frozen=True)
class WeekBucket:
    label: str
    start: date
    end: date
    totals: AggregatedPeriod
    delta: float


def parse_date(value: str | date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


def as_of(now: date | datetime) -> date:
    """Evaluation instant reduced to the calendar day all date windows are measured from."""
    return parse_date(now)


def aggregate(records: Iterable[DailyRecord]) -> AggregatedPeriod:
    sales = 0.0
    expenses = 0.0
    count = 0
    for r in records:
        sales += r.sales
        expenses += r.total_expenses
        count += 1
    return AggregatedPeriod(sales=sales, expenses=expenses, profit=sales - expenses, count=count)


def filter_by_store(records: Sequence[DailyRecord], store_filter: str | None) -> list[DailyRecord]:
    if store_filter in (None, "", ALL_STORES):
        return list(records)
    return [r for r in records if r.storeId == store_filter]


def is_all_stores(store_filter: str | None) -> bool:
    return store_filter in (None, "", ALL_STORES)


def current_month_records(records: Sequence[DailyRecord], now: date | datetime) -> list[DailyRecord]:
    today = as_of(now)
    return [r for r in records if r.day.year == today.year and r.day.month == today.month]


def trailing_records(records: Sequence[DailyRecord], now: date | datetime, days: int) -> list[DailyRecord]:
    today = as_of(now)
    start = today - timedelta(days=days)
    return [r for r in records if start <= r.day <= today]


def _day_label(d: date) -> str:
    return f"{d.strftime('%b')} {d.day}"


def bucket_by_day(records: Sequence[DailyRecord], window_size_days: int) -> list[DayBucket]:
    """Most recent `window_size_days` distinct dates present in `records`, oldest first."""
    by_date: dict[date, list[DailyRecord]] = {}
    for r in records:
        by_date.setdefault(r.day, []).append(r)
    dates = sorted(by_date)
    if window_size_days <= 0:
        return []
    return [
        DayBucket(date=d.isoformat(), label=_day_label(d), totals=aggregate(by_date[d]))
        for d in dates[-window_size_days:]
    ]


def bucket_by_week(
    records: Sequence[DailyRecord],
    now: date | datetime,
    window_count_weeks: int = 4,
) -> list[WeekBucket]:
    """
    Trailing 7-day windows ending `now`, `now - 7d`, ... returned oldest first.
    Window i (0 = most recent) covers [now - (7i + 6) days, now - 7i days] inclusive.
    """
    today = as_of(now)
    windows: list[tuple[date, date, AggregatedPeriod]] = []
    for i in range(window_count_weeks):
        start = today - timedelta(days=i * 7 + 6)
        end = today - timedelta(days=i * 7)
        totals = aggregate(r for r in records if start <= r.day <= end)
        windows.append((start, end, totals))
    windows.reverse()

    buckets: list[WeekBucket] = []
    prev_sales: float | None = None
    for idx, (start, end, totals) in enumerate(windows):
        delta = 0.0 if prev_sales is None else totals.sales - prev_sales
        buckets.append(
            WeekBucket(label=f"Week {idx + 1}", start=start, end=end, totals=totals, delta=delta)
        )
        prev_sales = totals.sales
    return buckets


def sum_cost_categories(records: Iterable[DailyRecord]) -> dict[str, float]:
    totals = {name: 0.0 for name in COST_FIELDS}
    for r in records:
        for name in COST_FIELDS:
            totals[name] += getattr(r, name)
    return totals


def records_to_frame(records: Sequence[DailyRecord]) -> pd.DataFrame:
    rows = [{f.name: getattr(r, f.name) for f in fields(DailyRecord)} for r in records]
    return pd.DataFrame(rows, columns=list(RECORD_COLUMNS))


def _get_col(df: pd.DataFrame, *candidates: str) -> str:
    for c in candidates:
        if c in df.columns:
            return c
    raise ValueError(f"Required column not found. Tried: {candidates}")


def frame_to_records(df: pd.DataFrame) -> list[DailyRecord]:
    df = _normalize_columns(df)
    for col in ("date", "storeId", "sales"):
        _get_col(df, col)
    if "storeName" not in df.columns:
        df["storeName"] = df["storeId"]
    df["storeName"] = df["storeName"].fillna(df["storeId"])
    for col in ("sales",) + COST_FIELDS:
        if col not in df.columns:
            df[col] = 0.0
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0.0)

    df["date"] = pd.to_datetime(df["date"], errors="coerce")
    df = df.dropna(subset=["date"])

    records: list[DailyRecord] = []
    for row in df.to_dict(orient="records"):
        values: dict[str, Any] = {name: float(row[name]) for name in ("sales",) + COST_FIELDS}
        records.append(
            DailyRecord(
                date=row["date"].strftime("%Y-%m-%d"),
                storeId=str(row["storeId"]),
                storeName=str(row["storeName"]),
                **values,
            )
        )
    return records
