from datetime import datetime

import pytest

from daily_records import DailyRecord

NOW = datetime(2026, 10, 18, 14, 30)


def make_record(date: str, store_id: str = "s1", sales: float = 0.0, store_name: str | None = None, **costs) -> DailyRecord:
    return DailyRecord(
        date=date,
        storeId=store_id,
        storeName=store_name or store_id.upper(),
        sales=sales,
        **costs,
    )


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def month_records() -> list[DailyRecord]:
    return [
        make_record("2026-10-01", "s1", 1000, purchase=500, laborCost=250),
        make_record("2026-10-02", "s1", 1000, purchase=500, laborCost=250),
        make_record("2026-10-01", "s2", 2000, purchase=1200, laborCost=600, utilities=100),
        make_record("2026-09-30", "s2", 5000, purchase=1000),
    ]
