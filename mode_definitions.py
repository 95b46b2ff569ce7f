"""
Mode Definitions: keywords, thresholds, constants and fixed texts for each analysis mode.

Everything an analysis mode treats as fixed lives here:
- keywords: substrings that select the mode (matched case-insensitively)
- thresholds / constants: margin tiers, goal targets, forecast factors
- metadata: improvement categories and cost-category display colors
- suggestions: follow-up queries offered after each response

Suggestions are re-submitted verbatim as new queries, so each one is written to
route to a predictable mode.
"""

# -----------------------------------------------------------------------------
# INTENT KEYWORDS: English terms plus the Japanese terms of the first deployment
# -----------------------------------------------------------------------------

SUMMARY_KEYWORDS = ("summary", "overview", "業績", "サマリー", "概要")

STORE_KEYWORDS = ("store", "branch", "店舗")
STORE_COMPARISON_KEYWORDS = (
    "compar", "analysis", "analyze", "analyse", "ranking", "比較", "分析", "ランキング",
)

FORECAST_KEYWORDS = (
    "forecast", "predict", "future", "next month", "outlook", "予測", "将来", "来月", "見込み",
)

IMPROVEMENT_KEYWORDS = (
    "improve", "improvement", "suggest", "proposal", "optimiz", "optimis", "改善", "提案", "最適化",
)

GOAL_KEYWORDS = ("goal", "target", "achiev", "目標", "達成")

COST_KEYWORDS = ("cost", "expense", "spending", "経費", "コスト")


# -----------------------------------------------------------------------------
# SUMMARY
# -----------------------------------------------------------------------------

SUMMARY_TREND_DAYS = 14

MARGIN_TIERS = (
    # (minimum margin %, tier label)
    (20.0, "excellent"),
    (15.0, "good"),
)
MARGIN_TIER_DEFAULT = "needs improvement"

# Margin at or above this is shown with a positive tone
MARGIN_POSITIVE_TONE_PCT = 15.0


def margin_tier(margin_pct: float) -> str:
    for threshold, label in MARGIN_TIERS:
        if margin_pct >= threshold:
            return label
    return MARGIN_TIER_DEFAULT


# -----------------------------------------------------------------------------
# STORE COMPARISON
# -----------------------------------------------------------------------------

# Margin gap (percentage points) between top and bottom store that triggers a recommendation
MARGIN_GAP_THRESHOLD_PP = 5.0


# -----------------------------------------------------------------------------
# FORECAST
# -----------------------------------------------------------------------------

FORECAST_LOOKBACK_DAYS = 30
FORECAST_WEEK_COUNT = 4
WEEKS_PER_MONTH = 4.33

# Narrative confidence: max(floor, base - |slope| / avg * weight)
NARRATIVE_CONFIDENCE = {"floor": 65.0, "base": 85.0, "weight": 50.0}
# Confidence attached to the appended prediction point
POINT_CONFIDENCE = {"floor": 60.0, "base": 90.0, "weight": 100.0}


# -----------------------------------------------------------------------------
# IMPROVEMENT RECOMMENDATIONS
# -----------------------------------------------------------------------------
# expected_savings = rate * (month expenses | month sales), selected by "basis"

IMPROVEMENT_CATEGORIES = (
    {
        "category": "Procurement optimization",
        "impact": "Cut costs 5-8%",
        "timeframe": "2-3 months",
        "actions": ["Review suppliers", "Negotiate volume discounts", "Introduce seasonal menus"],
        "basis": "expenses",
        "rate": 0.07,
    },
    {
        "category": "Digitalization",
        "impact": "Improve efficiency 15%",
        "timeframe": "1-2 months",
        "actions": ["Adopt a POS system", "Mobile ordering", "Cashless payments"],
        "basis": "sales",
        "rate": 0.03,
    },
    {
        "category": "Menu strategy",
        "impact": "Raise average spend 10%",
        "timeframe": "1 month",
        "actions": ["Promote high-margin dishes", "Develop set menus", "Upselling training"],
        "basis": "sales",
        "rate": 0.10,
    },
)


# -----------------------------------------------------------------------------
# GOAL TRACKING
# -----------------------------------------------------------------------------

GOAL_ALL_STORES = 25_000_000
GOAL_SINGLE_STORE = 8_000_000

# Days remaining = GOAL_MONTH_DAYS - day of month (flat 30-day month)
GOAL_MONTH_DAYS = 30

ACHIEVED_COLOR = "#10b981"
REMAINING_COLOR = "#e5e7eb"


# -----------------------------------------------------------------------------
# COST BREAKDOWN
# -----------------------------------------------------------------------------
# Display order is also the tie-break order when two categories are equal.

COST_CATEGORIES = (
    {"field": "purchase", "label": "Purchasing", "color": "#ef4444"},
    {"field": "laborCost", "label": "Labor", "color": "#f97316"},
    {"field": "utilities", "label": "Utilities", "color": "#3b82f6"},
    {"field": "promotion", "label": "Promotion", "color": "#10b981"},
    {"field": "cleaning", "label": "Cleaning", "color": "#8b5cf6"},
    {"field": "communication", "label": "Communication", "color": "#06b6d4"},
    {"field": "misc", "label": "Miscellaneous", "color": "#f59e0b"},
    {"field": "others", "label": "Other", "color": "#6b7280"},
)


# -----------------------------------------------------------------------------
# SUGGESTIONS
# -----------------------------------------------------------------------------

SUGGESTIONS = {
    "summary": ["Detailed store analysis", "Next month sales forecast", "Improvement proposals"],
    "store_comparison": [
        "Top store success factors",
        "Improvement plan for lagging stores",
        "Issues shared by every store",
    ],
    "forecast": ["Factors behind the forecast", "Sales growth strategy", "Risk factor analysis"],
    "improvement": ["Implementation roadmap", "Priority-based action plan", "ROI analysis"],
    "goal_tracking": ["Goal achievement strategy", "Daily action plan", "Emergency measures"],
    "cost_breakdown": ["Cost reduction strategy", "Optimal expense ratios", "Cost control best practices"],
    "fallback": [
        "Show this month's performance summary",
        "Store performance analysis",
        "Next month sales forecast",
        "Cost optimization proposals",
    ],
    "no_data": ["Generate demo data", "Show a sample analysis"],
    "welcome": [
        "Show this month's performance summary",
        "Store performance analysis",
        "Next month sales forecast",
        "Cost optimization proposals",
        "Goal achievement roadmap",
    ],
}

WELCOME_MESSAGE = (
    "Hello! I'm your AI business analyst.\n\n"
    "I analyze your daily reports and answer with charts, metrics and forecasts. "
    "What would you like to know?"
)

NO_DATA_MESSAGE = (
    "There is no data to analyze yet.\n\n"
    "Create a daily report first, then ask again."
)

FALLBACK_MESSAGE = (
    "Ready to analyze.\n\n"
    "Available analyses:\n"
    "- Performance summary\n"
    "- Store comparison\n"
    "- Sales forecast\n"
    "- Improvement proposals\n"
    "- Goal tracking\n"
    "- Cost breakdown\n\n"
    "Ask me a specific question."
)
