"""
Narrative text for each analysis mode.
"""

from daily_records import AggregatedPeriod
from formatting import Formatter


def summary_narrative(
    scope_label: str,
    month: AggregatedPeriod,
    tier: str,
    fmt_currency: Formatter,
    fmt_percent: Formatter,
) -> str:
    sections = []
    sections.append(f"**{scope_label} performance summary**")
    sections.append("")
    sections.append("This month:")
    sections.append(f"- Sales: {fmt_currency(month.sales)}")
    sections.append(f"- Profit: {fmt_currency(month.profit)}")
    sections.append(f"- Profit margin: {fmt_percent(month.margin)}")
    sections.append(f"- Reports: {month.count}")
    sections.append("")
    if tier == "excellent":
        sections.append("Performance is excellent.")
    elif tier == "good":
        sections.append("Performance is good.")
    else:
        sections.append("Performance needs improvement.")
    return "\n".join(sections)


def store_comparison_narrative(
    top_name: str | None,
    top_sales: float,
    top_margin: float,
    fmt_currency: Formatter,
    fmt_percent: Formatter,
) -> str:
    sections = []
    sections.append("**Store performance analysis**")
    sections.append("")
    if top_name is None:
        sections.append("No store data available.")
        return "\n".join(sections)
    sections.append(f"Top performer: {top_name}")
    sections.append(f"- Sales: {fmt_currency(top_sales)}")
    sections.append(f"- Profit margin: {fmt_percent(top_margin)}")
    sections.append("")
    sections.append("Showing the comparison chart for all stores.")
    return "\n".join(sections)


def forecast_narrative(
    next_month: float,
    next_week: float,
    confidence: float,
    direction: str,
    fmt_currency: Formatter,
) -> str:
    sections = []
    sections.append("**Sales forecast**")
    sections.append("")
    sections.append(f"Next month forecast: {fmt_currency(next_month)}")
    sections.append(f"Next week forecast: {fmt_currency(next_week)}")
    sections.append("")
    sections.append(f"Forecast confidence: {confidence:.0f}%")
    sections.append("")
    sections.append(f"Trend: {direction}")
    return "\n".join(sections)


def improvement_narrative(
    current_margin: float,
    projected_margin: float,
    total_impact: float,
    fmt_currency: Formatter,
    fmt_percent: Formatter,
) -> str:
    sections = []
    sections.append("**Improvement proposals**")
    sections.append("")
    sections.append(f"Current profit margin: {fmt_percent(current_margin)}")
    sections.append(f"Projected margin after improvements: {fmt_percent(projected_margin)}")
    sections.append("")
    sections.append(f"Expected effect: {fmt_currency(total_impact)} more profit per month")
    return "\n".join(sections)


def goal_narrative(
    achievement: float,
    current: float,
    target: float,
    remaining: float,
    daily_target: float,
    fmt_currency: Formatter,
    fmt_percent: Formatter,
) -> str:
    sections = []
    sections.append("**Goal tracking**")
    sections.append("")
    sections.append(f"Progress: {fmt_percent(achievement)}")
    sections.append(f"Actual: {fmt_currency(current)}")
    sections.append(f"Target: {fmt_currency(target)}")
    sections.append("")
    sections.append(f"Sales still needed: {fmt_currency(remaining)}")
    sections.append(f"Required daily sales: {fmt_currency(daily_target)}")
    return "\n".join(sections)


def cost_breakdown_narrative(
    total: float,
    largest_label: str | None,
    largest_share: float,
    fmt_currency: Formatter,
    fmt_percent: Formatter,
) -> str:
    sections = []
    sections.append("**Cost structure**")
    sections.append("")
    sections.append(f"Total expenses: {fmt_currency(total)}")
    if largest_label is None:
        sections.append("No expenses recorded.")
    else:
        sections.append(f"Largest category: {largest_label} ({fmt_percent(largest_share)})")
        sections.append("")
        sections.append("See the pie chart for the full breakdown.")
    return "\n".join(sections)
