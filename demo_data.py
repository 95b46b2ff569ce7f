"""
Deterministic demo records for trying the chat without real data.
"""

from datetime import date, datetime, timedelta

from daily_records import DailyRecord, as_of

# Flat per-store scale factors keep the demo easy to reason about; no RNG.
DEFAULT_DEMO_STORES = (
    {"id": "store-1", "name": "Ekimae", "factor": 1.18},
    {"id": "store-2", "name": "Honten", "factor": 1.00},
    {"id": "store-3", "name": "Minato", "factor": 0.82},
)

BASE_DAILY_SALES = 280_000
# Monday .. Sunday
WEEKDAY_FACTORS = (0.82, 0.86, 0.92, 0.98, 1.24, 1.32, 1.06)

COST_RATES = {
    "purchase": 0.31,
    "laborCost": 0.27,
    "utilities": 0.05,
    "promotion": 0.02,
    "cleaning": 0.01,
    "misc": 0.015,
    "communication": 0.005,
    "others": 0.01,
}


def generate_demo_records(
    end: date | datetime,
    days: int = 60,
    stores: tuple[dict, ...] = DEFAULT_DEMO_STORES,
) -> list[DailyRecord]:
    end_day = as_of(end)
    rows: list[DailyRecord] = []
    for offset in range(days - 1, -1, -1):
        day = end_day - timedelta(days=offset)
        weekday_factor = WEEKDAY_FACTORS[day.weekday()]
        for store_idx, store in enumerate(stores):
            # Slow drift so forecasts have a visible trend.
            drift = 1 + ((days - offset) * 0.002) * (1 if store_idx % 2 == 0 else -1)
            mix_adjust = 1 + ((day.toordinal() + store_idx) % 5 - 2) * 0.015
            sales = round(BASE_DAILY_SALES * store["factor"] * weekday_factor * drift * mix_adjust)

            # The weakest store carries heavier labor cost, so comparisons flag it.
            labor_rate = COST_RATES["laborCost"] + (0.06 if store_idx == len(stores) - 1 else 0.0)
            costs = {name: float(round(sales * rate)) for name, rate in COST_RATES.items()}
            costs["laborCost"] = float(round(sales * labor_rate))

            rows.append(
                DailyRecord(
                    date=day.isoformat(),
                    storeId=store["id"],
                    storeName=store["name"],
                    sales=float(sales),
                    **costs,
                )
            )
    return rows
