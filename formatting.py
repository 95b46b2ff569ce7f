"""Default currency and percentage formatters. Callers may inject their own."""

from typing import Callable

Formatter = Callable[[float], str]


def make_currency_formatter(symbol: str = "¥", decimals: int = 0) -> Formatter:
    def format_currency(value: float) -> str:
        sign = "-" if value < 0 else ""
        return f"{sign}{symbol}{abs(value):,.{decimals}f}"
    return format_currency


format_currency = make_currency_formatter()


def format_percent(value: float) -> str:
    return f"{value:.1f}%"
